from flask import Blueprint, request, jsonify
from bson.errors import InvalidId
from farmhome.models.farmhouse_users import FarmhouseUsers
from farmhome.routes.auth_routes import token_required, admin_required, super_admin_required
import logging

logger = logging.getLogger(__name__)

farmhouse_users_bp = Blueprint('farmhouse_users', __name__, url_prefix='/farmhouse-users')

MEMBER_LABELS = {
    'assistant': ('assistantId', 'AssistantId'),
    'manager': ('managerId', 'ManagerId'),
}

@farmhouse_users_bp.route('', methods=['GET'])
@token_required
@super_admin_required
def list_farmhouse_users():
    """Every admin roster, populated (super admin only)"""
    try:
        return jsonify([FarmhouseUsers.populate(doc) for doc in FarmhouseUsers.find_all()])
    except Exception as e:
        logger.error(f"Error listing farmhouse users: {str(e)}")
        return jsonify({'error': str(e)}), 500

@farmhouse_users_bp.route('/<admin_id>', methods=['GET'])
@token_required
@admin_required
def get_farmhouse_users(admin_id):
    """One admin's roster, populated"""
    try:
        doc = FarmhouseUsers.find_by_admin(admin_id)
        if not doc:
            return jsonify({'error': 'Not found'}), 404
        return jsonify(FarmhouseUsers.populate(doc))
    except InvalidId:
        return jsonify({'error': 'Invalid id'}), 400
    except Exception as e:
        logger.error(f"Error fetching farmhouse users for {admin_id}: {str(e)}")
        return jsonify({'error': str(e)}), 500

def _add_member(admin_id, kind):
    body_key, label = MEMBER_LABELS[kind]
    data = request.get_json(silent=True) or {}
    member_id = data.get(body_key)
    if not member_id:
        return jsonify({'error': f'{body_key} required'}), 400

    try:
        doc, outcome = FarmhouseUsers.add_member(admin_id, kind, member_id)
    except InvalidId:
        return jsonify({'error': 'Invalid id'}), 400
    except Exception as e:
        logger.error(f"Error adding {kind} to farmhouse users of {admin_id}: {str(e)}")
        return jsonify({'error': str(e)}), 500

    if outcome == 'created':
        message = f'FarmhouseUsers created for adminId {admin_id} and {body_key} {member_id} added.'
    elif outcome == 'added':
        message = f'{label} {member_id} added to FarmhouseUsers of adminId {admin_id}.'
    else:
        message = f'{label} {member_id} already exists in FarmhouseUsers of adminId {admin_id}.'
    return jsonify({'message': message, 'farmhouseUser': FarmhouseUsers.populate(doc)})

def _remove_member(admin_id, kind, member_id):
    _, label = MEMBER_LABELS[kind]
    try:
        doc = FarmhouseUsers.find_by_admin(admin_id)
        if not doc:
            return jsonify({'message': f'FarmhouseUsers not found for adminId {admin_id}.'}), 404

        updated = FarmhouseUsers.remove_member(doc, kind, member_id)
        if updated is None:
            return jsonify({
                'message': f'{label} {member_id} not found in FarmhouseUsers of adminId {admin_id}.',
                'farmhouseUser': FarmhouseUsers.populate(doc)
            }), 404
        return jsonify({
            'message': f'{label} {member_id} removed from FarmhouseUsers of adminId {admin_id}.',
            'farmhouseUser': FarmhouseUsers.populate(updated)
        })
    except InvalidId:
        return jsonify({'error': 'Invalid id'}), 400
    except Exception as e:
        logger.error(f"Error removing {kind} from farmhouse users of {admin_id}: {str(e)}")
        return jsonify({'error': str(e)}), 500

@farmhouse_users_bp.route('/<admin_id>/assistant', methods=['POST'])
@token_required
@admin_required
def add_assistant(admin_id):
    """Add an assistant to an admin's roster"""
    return _add_member(admin_id, 'assistant')

@farmhouse_users_bp.route('/<admin_id>/manager', methods=['POST'])
@token_required
@admin_required
def add_manager(admin_id):
    """Add a manager to an admin's roster"""
    return _add_member(admin_id, 'manager')

@farmhouse_users_bp.route('/<admin_id>/assistant/<assistant_id>', methods=['DELETE'])
@token_required
@admin_required
def remove_assistant(admin_id, assistant_id):
    """Remove an assistant from an admin's roster"""
    return _remove_member(admin_id, 'assistant', assistant_id)

@farmhouse_users_bp.route('/<admin_id>/manager/<manager_id>', methods=['DELETE'])
@token_required
@admin_required
def remove_manager(admin_id, manager_id):
    """Remove a manager from an admin's roster"""
    return _remove_member(admin_id, 'manager', manager_id)
