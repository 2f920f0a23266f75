from flask import Blueprint, request, jsonify, g
from functools import wraps
from bson.errors import InvalidId
from pymongo.errors import DuplicateKeyError
from farmhome.models.user import User, REGISTERABLE_ROLES
from farmhome.security import TokenManager
import logging

logger = logging.getLogger(__name__)

auth_bp = Blueprint('auth', __name__, url_prefix='/auth')

ROLE_LABELS = {
    'super_admin': 'Super admin',
    'admin': 'Admin',
    'manager': 'Manager',
    'assistant': 'Assistant',
}

def _extract_token():
    auth_header = request.headers.get('Authorization', '')
    if auth_header.startswith('Bearer '):
        return auth_header[7:].strip()
    return request.headers.get('x-auth-token')

def token_required(f):
    """Decorator to require a valid bearer token

    Attaches the decoded identity to g.current_user as {'id', 'role'}.
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        token = _extract_token()
        if not token:
            return jsonify({'error': 'No token, authorization denied'}), 401

        payload = TokenManager.verify_token(token)
        if not payload or not payload.get('id'):
            return jsonify({'error': 'Token is not valid'}), 401

        g.current_user = {'id': payload['id'], 'role': payload.get('role')}
        return f(*args, **kwargs)
    return decorated_function

def role_required(*roles):
    """Decorator to require one of the given roles (use below token_required)"""
    label = ' or '.join(ROLE_LABELS.get(role, role) for role in roles)
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            user = g.get('current_user')
            if not user or user.get('role') not in roles:
                return jsonify({'error': f'Access denied. {label} privileges required.'}), 403
            return f(*args, **kwargs)
        return decorated_function
    return decorator

admin_required = role_required('admin')
manager_required = role_required('manager')
assistant_required = role_required('assistant')
super_admin_required = role_required('super_admin')

def _auth_response(user, status=200):
    token = TokenManager.generate_token(user)
    return jsonify({'token': token, 'user': User.public(user)}), status

@auth_bp.route('/register', methods=['POST'])
def register():
    """Register a new admin, manager or assistant account"""
    data = request.get_json(silent=True) or {}
    name = (data.get('name') or '').strip()
    email = (data.get('email') or '').strip()
    password = data.get('password') or ''
    role = data.get('role') or 'assistant'

    if not name or not email or not password:
        return jsonify({'error': 'name, email, and password are required'}), 400
    if role not in REGISTERABLE_ROLES:
        return jsonify({'error': 'Invalid role'}), 400
    if User.find_by_email(email):
        return jsonify({'error': 'User already exists'}), 400

    try:
        user = User.create_user(
            name=name,
            email=email,
            password=password,
            role=role,
            phone=data.get('phone'),
            location=data.get('location')
        )
        return _auth_response(user, 201)
    except DuplicateKeyError:
        return jsonify({'error': 'User already exists'}), 400
    except Exception as e:
        logger.error(f"Error registering user: {str(e)}")
        return jsonify({'error': str(e)}), 500

@auth_bp.route('/login', methods=['POST'])
def login():
    """Exchange email and password for a bearer token"""
    data = request.get_json(silent=True) or {}
    email = data.get('email')
    password = data.get('password')
    if not email or not password:
        return jsonify({'error': 'email and password are required'}), 400

    try:
        user = User.find_by_email(email)
        if not user or not User.verify_password(user['password'], password):
            return jsonify({'error': 'Invalid credentials'}), 400
        if user.get('blocked'):
            return jsonify({'error': 'Account is blocked'}), 403
        return _auth_response(user)
    except Exception as e:
        logger.error(f"Error logging in: {str(e)}")
        return jsonify({'error': str(e)}), 500

@auth_bp.route('/me', methods=['GET'])
@token_required
def me():
    """Current user profile"""
    try:
        user = User.find_by_id(g.current_user['id'])
    except InvalidId:
        return jsonify({'error': 'Invalid id'}), 400
    if not user:
        return jsonify({'error': 'User not found'}), 404
    return jsonify(User.public(user))

@auth_bp.route('/users', methods=['GET'])
@token_required
@super_admin_required
def list_users():
    """List every user (super admin only)"""
    try:
        return jsonify([User.public(user) for user in User.find_all()])
    except Exception as e:
        logger.error(f"Error listing users: {str(e)}")
        return jsonify({'error': str(e)}), 500

@auth_bp.route('/users/<user_id>/block', methods=['PATCH'])
@token_required
@super_admin_required
def block_user(user_id):
    """Block or unblock a user (super admin only)"""
    data = request.get_json(silent=True) or {}
    if not isinstance(data.get('blocked'), bool):
        return jsonify({'error': 'blocked must be a boolean'}), 400
    try:
        if not User.set_blocked(user_id, data['blocked']):
            return jsonify({'error': 'User not found'}), 404
        return jsonify({'message': 'User updated', 'user': User.public(User.find_by_id(user_id))})
    except InvalidId:
        return jsonify({'error': 'Invalid id'}), 400
    except Exception as e:
        logger.error(f"Error updating user {user_id}: {str(e)}")
        return jsonify({'error': str(e)}), 500

@auth_bp.route('/users/<user_id>', methods=['DELETE'])
@token_required
@super_admin_required
def delete_user(user_id):
    """Delete a user (super admin only)"""
    try:
        if not User.delete_user(user_id):
            return jsonify({'error': 'User not found'}), 404
        return jsonify({'message': 'User deleted'})
    except InvalidId:
        return jsonify({'error': 'Invalid id'}), 400
    except Exception as e:
        logger.error(f"Error deleting user {user_id}: {str(e)}")
        return jsonify({'error': str(e)}), 500
