from datetime import date, datetime

from bson import ObjectId
from flask.json.provider import DefaultJSONProvider


def json_default(value):
    """json.dumps default hook for MongoDB documents"""
    if isinstance(value, ObjectId):
        return str(value)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    raise TypeError(f'Object of type {type(value).__name__} is not JSON serializable')


def to_primitive(value):
    """Recursively convert ObjectIds and datetimes so a document can be emitted as plain JSON data"""
    if isinstance(value, dict):
        return {key: to_primitive(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_primitive(item) for item in value]
    if isinstance(value, (ObjectId, datetime, date)):
        return json_default(value)
    return value


class MongoJSONProvider(DefaultJSONProvider):
    """Flask JSON provider that renders ObjectId as str and datetimes as ISO 8601"""

    sort_keys = False

    @staticmethod
    def default(o):
        try:
            return json_default(o)
        except TypeError:
            return DefaultJSONProvider.default(o)
