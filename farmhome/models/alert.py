from bson import ObjectId
from pymongo import ReturnDocument

from farmhome import db
from farmhome.models.base import ValidationError
from farmhome.models.farmhouse import Farmhouse
from farmhome.utils.dates import utcnow

ALERT_FIELDS = ('title', 'category', 'location', 'description')
REQUIRED_ALERT_FIELDS = ('title', 'category', 'location')

# Change stream operations that trigger a feed refresh
WATCHED_OPERATIONS = ('insert', 'update', 'replace', 'delete')


class Alert:
    @staticmethod
    def create_alert(payload):
        """Validate and insert an alert

        Raises:
            ValidationError: if title, category or location is missing
        """
        if not isinstance(payload, dict):
            raise ValidationError('Request body must be JSON')
        missing = [field for field in REQUIRED_ALERT_FIELDS if not payload.get(field)]
        if missing:
            raise ValidationError(f"Missing required fields: {', '.join(missing)}")

        now = utcnow()
        alert_data = {field: payload.get(field) for field in ALERT_FIELDS}
        alert_data['createdAt'] = now
        alert_data['updatedAt'] = now
        result = db.alerts.insert_one(alert_data)
        alert_data['_id'] = result.inserted_id
        return alert_data

    @staticmethod
    def find_all():
        return list(db.alerts.find())

    @staticmethod
    def find_by_location(location):
        return list(db.alerts.find({'location': location}))

    @staticmethod
    def find_by_locations(locations):
        """Alerts whose location exactly equals one of the given strings"""
        if not locations:
            return []
        return list(db.alerts.find({'location': {'$in': list(locations)}}))

    @staticmethod
    def update_alert(alert_id, payload):
        """Update the known alert fields; returns the updated document or None"""
        if not isinstance(payload, dict):
            raise ValidationError('Request body must be JSON')
        update_data = {field: payload[field] for field in ALERT_FIELDS if field in payload}
        for field in REQUIRED_ALERT_FIELDS:
            if field in update_data and not update_data[field]:
                raise ValidationError(f'{field} cannot be empty')
        update_data['updatedAt'] = utcnow()
        return db.alerts.find_one_and_update(
            {'_id': ObjectId(alert_id)},
            {'$set': update_data},
            return_document=ReturnDocument.AFTER
        )

    @staticmethod
    def delete_alert(alert_id):
        """Delete an alert; returns True if it existed"""
        result = db.alerts.delete_one({'_id': ObjectId(alert_id)})
        return result.deleted_count > 0

    @staticmethod
    def visible_to(role, user_id):
        """Alerts visible to a user in a role

        Joins the user's farmhouses to alerts by exact location string.
        A user without farmhouses sees nothing.
        """
        farmhouses = Farmhouse.find_by_role(role, user_id)
        return Alert.find_by_locations(Farmhouse.locations(farmhouses))

    @staticmethod
    def watch(max_await_time_ms=None):
        """Open a change stream on the alerts collection"""
        return db.alerts.watch(max_await_time_ms=max_await_time_ms)
