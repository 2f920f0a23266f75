"""JWT token handling for API access"""
from datetime import datetime, timedelta, timezone

import jwt
from flask import current_app


class TokenManager:
    """Manage JWT tokens for authenticated API access"""

    @staticmethod
    def generate_token(user, expires_in_hours=None):
        """Generate a JWT token carrying the user's id and role"""
        if expires_in_hours is None:
            expires_in_hours = current_app.config.get('JWT_EXPIRATION_HOURS', 24)
        now = datetime.now(timezone.utc)
        payload = {
            'id': str(user['_id']),
            'role': user.get('role'),
            'iat': now,
            'exp': now + timedelta(hours=expires_in_hours)
        }
        return jwt.encode(
            payload,
            current_app.config['JWT_SECRET'],
            algorithm=current_app.config.get('JWT_ALGORITHM', 'HS256')
        )

    @staticmethod
    def verify_token(token):
        """Verify and decode JWT token; None if expired or invalid"""
        try:
            return jwt.decode(
                token,
                current_app.config['JWT_SECRET'],
                algorithms=[current_app.config.get('JWT_ALGORITHM', 'HS256')]
            )
        except jwt.ExpiredSignatureError:
            return None
        except jwt.InvalidTokenError:
            return None
