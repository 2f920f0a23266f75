from bson import ObjectId
from farmhome import db
from farmhome.utils.dates import utcnow
import bcrypt

ROLES = ['super_admin', 'admin', 'manager', 'assistant']
REGISTERABLE_ROLES = ['admin', 'manager', 'assistant']
DEFAULT_AVATAR = 'https://cdn.pixabay.com/photo/2015/10/05/22/37/blank-profile-picture-973460_960_720.png'

class User:
    @staticmethod
    def create_user(name, email, password, role='assistant', phone=None, location=None):
        """Create a new user

        Args:
            name: Display name
            email: Login email (unique)
            password: Plain text password (will be hashed)
            role: 'super_admin', 'admin', 'manager', or 'assistant'
            phone: Optional phone number
            location: Optional farmhouse location used by the alert feed

        Returns:
            The inserted user document
        """
        hashed_password = bcrypt.hashpw(password.encode('utf-8'), bcrypt.gensalt())

        user_data = {
            'name': name,
            'email': email.strip().lower(),
            'password': hashed_password.decode('utf-8'),
            'role': role,
            'blocked': False,
            'avatar': DEFAULT_AVATAR,
            'createdAt': utcnow()
        }
        if phone:
            user_data['phone'] = phone
        if location:
            user_data['location'] = location

        result = db.users.insert_one(user_data)
        user_data['_id'] = result.inserted_id
        return user_data

    @staticmethod
    def find_by_email(email):
        """Find user by email"""
        if not email:
            return None
        return db.users.find_one({'email': email.strip().lower()})

    @staticmethod
    def find_by_id(user_id):
        """Find user by ID"""
        return db.users.find_one({'_id': ObjectId(user_id)})

    @staticmethod
    def find_by_ids(user_ids):
        """Find users for a list of ObjectIds, keyed by id"""
        users = db.users.find({'_id': {'$in': list(user_ids)}})
        return {user['_id']: user for user in users}

    @staticmethod
    def find_all():
        return list(db.users.find().sort('createdAt', -1))

    @staticmethod
    def verify_password(stored_password, provided_password):
        """Verify user password"""
        if isinstance(stored_password, str):
            stored_password = stored_password.encode('utf-8')
        if isinstance(provided_password, str):
            provided_password = provided_password.encode('utf-8')
        return bcrypt.checkpw(provided_password, stored_password)

    @staticmethod
    def set_blocked(user_id, blocked):
        """Block or unblock a user; returns True if the user exists"""
        result = db.users.update_one(
            {'_id': ObjectId(user_id)},
            {'$set': {'blocked': bool(blocked)}}
        )
        return result.matched_count > 0

    @staticmethod
    def delete_user(user_id):
        result = db.users.delete_one({'_id': ObjectId(user_id)})
        return result.deleted_count > 0

    @staticmethod
    def count_active():
        """Users that are not blocked"""
        return db.users.count_documents({'blocked': False})

    @staticmethod
    def public(user):
        """User document without the password hash"""
        if user is None:
            return None
        return {key: value for key, value in user.items() if key != 'password'}
