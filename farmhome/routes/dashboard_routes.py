from flask import Blueprint, jsonify
from farmhome.models.animal import Animal
from farmhome.models.breeding import Breeding
from farmhome.models.incident import Incident
from farmhome.models.user import User
from farmhome.routes.auth_routes import token_required
from farmhome.utils.dashboard_stats import build_dashboard
from farmhome.utils.dates import one_month_before, utcnow
import logging

logger = logging.getLogger(__name__)

dashboard_bp = Blueprint('dashboard', __name__)

@dashboard_bp.route('/dashboard', methods=['GET'])
@token_required
def dashboard():
    """Herd statistics, distributions and culling/breeding suggestions"""
    try:
        now = utcnow()
        health_incidents = Incident.collection().count_documents({
            'incidentDate': {'$gte': one_month_before(now)}
        })
        payload = build_dashboard(
            animals=Animal.find_all(),
            breedings=Breeding.find_all(),
            health_incidents=health_incidents,
            active_users=User.count_active(),
            now=now
        )
        return jsonify(payload)
    except Exception as e:
        logger.error(f"Error building dashboard: {str(e)}")
        return jsonify({'error': 'Server error'}), 500
