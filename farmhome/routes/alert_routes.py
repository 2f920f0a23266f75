from flask import Blueprint, request, jsonify, g
from bson.errors import InvalidId
from farmhome import socketio
from farmhome.models.alert import Alert
from farmhome.models.base import ValidationError
from farmhome.models.farmhouse import Farmhouse
from farmhome.models.user import User
from farmhome.routes.auth_routes import token_required, super_admin_required
from farmhome.utils.serializers import to_primitive
import logging

logger = logging.getLogger(__name__)

alerts_bp = Blueprint('alerts', __name__, url_prefix='/alerts')

@alerts_bp.route('/all-public', methods=['GET'])
def all_public_alerts():
    """Every alert (public)"""
    try:
        return jsonify(Alert.find_all())
    except Exception as e:
        logger.error(f"Error listing alerts: {str(e)}")
        return jsonify({'error': str(e)}), 500

def _alerts_for_role(role, user_id):
    """Alerts matching the locations of the user's farmhouses in this role"""
    try:
        farmhouses = Farmhouse.find_by_role(role, user_id)
        if not farmhouses:
            return jsonify({'error': f'No farmhouses found for this {role}'}), 404
        return jsonify(Alert.find_by_locations(Farmhouse.locations(farmhouses)))
    except Exception as e:
        logger.error(f"Error listing alerts for {role} {user_id}: {str(e)}")
        return jsonify({'error': str(e)}), 500

@alerts_bp.route('/by-admin/<user_id>', methods=['GET'])
def alerts_by_admin(user_id):
    """Alerts for every farmhouse an admin owns"""
    return _alerts_for_role('admin', user_id)

@alerts_bp.route('/by-manager/<user_id>', methods=['GET'])
def alerts_by_manager(user_id):
    """Alerts for every farmhouse a manager runs"""
    return _alerts_for_role('manager', user_id)

@alerts_bp.route('/by-assistant/<user_id>', methods=['GET'])
def alerts_by_assistant(user_id):
    """Alerts for every farmhouse an assistant works at"""
    return _alerts_for_role('assistant', user_id)

@alerts_bp.route('', methods=['POST'])
@token_required
@super_admin_required
def create_alert():
    """Create an alert and broadcast it as a new_alert event"""
    try:
        alert = Alert.create_alert(request.get_json(silent=True))
    except ValidationError as e:
        return jsonify({'error': str(e)}), 400
    except Exception as e:
        logger.error(f"Error creating alert: {str(e)}")
        return jsonify({'error': str(e)}), 400

    socketio.emit('new_alert', to_primitive(alert))
    return jsonify(alert), 201

@alerts_bp.route('/<alert_id>', methods=['PUT', 'PATCH'])
@token_required
@super_admin_required
def update_alert(alert_id):
    """Update an alert"""
    try:
        alert = Alert.update_alert(alert_id, request.get_json(silent=True))
        if not alert:
            return jsonify({'error': 'Alert not found'}), 404
        return jsonify(alert)
    except InvalidId:
        return jsonify({'error': 'Invalid id'}), 400
    except ValidationError as e:
        return jsonify({'error': str(e)}), 400
    except Exception as e:
        logger.error(f"Error updating alert {alert_id}: {str(e)}")
        return jsonify({'error': str(e)}), 400

@alerts_bp.route('/<alert_id>', methods=['DELETE'])
@token_required
@super_admin_required
def delete_alert(alert_id):
    """Delete an alert"""
    try:
        if not Alert.delete_alert(alert_id):
            return jsonify({'error': 'Alert not found'}), 404
        return jsonify({'message': 'Alert deleted'})
    except InvalidId:
        return jsonify({'error': 'Invalid id'}), 400
    except Exception as e:
        logger.error(f"Error deleting alert {alert_id}: {str(e)}")
        return jsonify({'error': str(e)}), 500

@alerts_bp.route('', methods=['GET'])
@token_required
def my_alerts():
    """Alerts for the caller's own farmhouse location"""
    try:
        user = User.find_by_id(g.current_user['id'])
        location = (user or {}).get('farmhouse') or (user or {}).get('location')
        if not location:
            return jsonify({'error': 'User farmhouse location not set'}), 400
        return jsonify(Alert.find_by_location(location))
    except InvalidId:
        return jsonify({'error': 'Invalid id'}), 400
    except Exception as e:
        logger.error(f"Error listing alerts for user {g.current_user['id']}: {str(e)}")
        return jsonify({'error': str(e)}), 500

@alerts_bp.route('/all', methods=['GET'])
@token_required
@super_admin_required
def all_alerts():
    """Every alert (super admin only)"""
    try:
        return jsonify(Alert.find_all())
    except Exception as e:
        logger.error(f"Error listing alerts: {str(e)}")
        return jsonify({'error': str(e)}), 500
