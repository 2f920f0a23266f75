from flask import Blueprint, request, jsonify, g
from bson.errors import InvalidId
from farmhome.models.farmhouse import Farmhouse
from farmhome.routes.auth_routes import token_required, admin_required
import logging

logger = logging.getLogger(__name__)

farmhouse_bp = Blueprint('farmhouse', __name__, url_prefix='/farmhouse')

def _farmhouse_fields(data):
    """Map the request body (Name/manager_id/assistants/location) onto stored fields"""
    return {
        'name': data.get('Name') or data.get('name'),
        'manager': data.get('manager_id'),
        'assistants': data.get('assistants') or [],
        'location': data.get('location'),
    }

def _validate_assistants(assistants):
    return isinstance(assistants, list) and all(isinstance(a, str) for a in assistants)

# Request body key -> stored farmhouse field
UPDATE_KEYS = {
    'Name': 'name',
    'name': 'name',
    'manager_id': 'manager',
    'assistants': 'assistants',
    'location': 'location',
}

def _farmhouse_update_fields(data):
    """Map only the keys present in an update body onto stored fields

    Returns:
        tuple: (fields, error message or None)
    """
    fields = {UPDATE_KEYS[key]: value for key, value in data.items() if key in UPDATE_KEYS}
    if 'Name' in data:
        fields['name'] = data['Name']
    if not fields:
        return None, 'No updatable fields provided'
    if 'name' in fields and not (isinstance(fields['name'], str) and fields['name'].strip()):
        return None, 'Name is required'
    if 'assistants' in fields and not _validate_assistants(fields['assistants']):
        return None, 'assistants must be an array of user ids'
    return fields, None

@farmhouse_bp.route('', methods=['POST'])
@token_required
@admin_required
def create_farmhouse():
    """Create a farmhouse owned by the calling admin"""
    data = request.get_json(silent=True) or {}
    fields = _farmhouse_fields(data)
    if not fields['name']:
        return jsonify({'error': 'Name is required'}), 400
    if not _validate_assistants(fields['assistants']):
        return jsonify({'error': 'assistants must be an array of user ids'}), 400

    try:
        farmhouse = Farmhouse.create_farmhouse(admin=g.current_user['id'], **fields)
        logger.info(f"Farmhouse {farmhouse['f_id']} created by admin {g.current_user['id']}")
        return jsonify(farmhouse), 201
    except Exception as e:
        logger.error(f"Error creating farmhouse: {str(e)}")
        return jsonify({'error': str(e)}), 400

@farmhouse_bp.route('', methods=['GET'])
def list_farmhouses():
    """List every farmhouse (public)"""
    try:
        return jsonify(Farmhouse.find_all())
    except Exception as e:
        logger.error(f"Error listing farmhouses: {str(e)}")
        return jsonify({'error': str(e)}), 500

def _farmhouses_for_role(role, label):
    if g.current_user.get('role') != role:
        return jsonify({'error': f'Access denied. {label} only.'}), 403
    try:
        return jsonify(Farmhouse.find_by_role(role, g.current_user['id']))
    except Exception as e:
        logger.error(f"Error listing farmhouses for {role}: {str(e)}")
        return jsonify({'error': str(e)}), 500

@farmhouse_bp.route('/admin', methods=['GET'])
@token_required
def admin_farmhouses():
    """Farmhouses administered by the caller"""
    return _farmhouses_for_role('admin', 'Admins')

@farmhouse_bp.route('/manager', methods=['GET'])
@token_required
def manager_farmhouses():
    """Farmhouses managed by the caller"""
    return _farmhouses_for_role('manager', 'Managers')

@farmhouse_bp.route('/assistant', methods=['GET'])
@token_required
def assistant_farmhouses():
    """Farmhouses where the caller is an assistant"""
    return _farmhouses_for_role('assistant', 'Assistants')

@farmhouse_bp.route('/<farmhouse_id>', methods=['GET'])
@token_required
@admin_required
def get_farmhouse(farmhouse_id):
    """Fetch one of the caller's farmhouses"""
    try:
        farmhouse = Farmhouse.find_owned(farmhouse_id, g.current_user['id'])
        if not farmhouse:
            return jsonify({'error': 'Farmhouse not found'}), 404
        return jsonify(farmhouse)
    except InvalidId:
        return jsonify({'error': 'Invalid id'}), 400
    except Exception as e:
        logger.error(f"Error fetching farmhouse {farmhouse_id}: {str(e)}")
        return jsonify({'error': str(e)}), 500

def _load_owned_or_error(farmhouse_id):
    """Return (farmhouse, None) or (None, error response) for the calling admin"""
    farmhouse = Farmhouse.find_by_id(farmhouse_id)
    if not farmhouse:
        return None, (jsonify({'error': 'Farmhouse not found'}), 404)
    if str(farmhouse.get('admin')) != g.current_user['id']:
        return None, (jsonify({'error': 'Access denied. You are not the admin of this farmhouse.'}), 403)
    return farmhouse, None

@farmhouse_bp.route('/<farmhouse_id>', methods=['PUT', 'PATCH'])
@token_required
@admin_required
def update_farmhouse(farmhouse_id):
    """Update one of the caller's farmhouses"""
    data = request.get_json(silent=True) or {}
    try:
        _, error = _load_owned_or_error(farmhouse_id)
        if error:
            return error

        fields, message = _farmhouse_update_fields(data)
        if message:
            return jsonify({'error': message}), 400

        farmhouse = Farmhouse.update_farmhouse(farmhouse_id, fields)
        return jsonify(farmhouse)
    except InvalidId:
        return jsonify({'error': 'Invalid id'}), 400
    except Exception as e:
        logger.error(f"Error updating farmhouse {farmhouse_id}: {str(e)}")
        return jsonify({'error': str(e)}), 400

@farmhouse_bp.route('/<farmhouse_id>', methods=['DELETE'])
@token_required
@admin_required
def delete_farmhouse(farmhouse_id):
    """Delete one of the caller's farmhouses"""
    try:
        _, error = _load_owned_or_error(farmhouse_id)
        if error:
            return error
        Farmhouse.delete_farmhouse(farmhouse_id)
        return jsonify({'message': 'Farmhouse deleted'})
    except InvalidId:
        return jsonify({'error': 'Invalid id'}), 400
    except Exception as e:
        logger.error(f"Error deleting farmhouse {farmhouse_id}: {str(e)}")
        return jsonify({'error': str(e)}), 500
