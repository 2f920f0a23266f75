import secrets
import string

from bson import ObjectId
from pymongo import ReturnDocument

from farmhome import db
from farmhome.utils.dates import utcnow

# Role -> farmhouse field holding that role's user id
OWNERSHIP_FIELDS = {
    'admin': 'admin',
    'manager': 'manager',
    'assistant': 'assistants',
}

_F_ID_ALPHABET = string.ascii_uppercase + string.digits


class Farmhouse:
    @staticmethod
    def generate_f_id():
        """Generate a public farmhouse code like FARM-K3J9QW2ZD"""
        return 'FARM-' + ''.join(secrets.choice(_F_ID_ALPHABET) for _ in range(9))

    @staticmethod
    def create_farmhouse(name, admin, manager=None, assistants=None, location=None):
        """Create a new farmhouse

        Args:
            name: Farmhouse name (required)
            admin: User id of the owning admin
            manager: User id of the manager
            assistants: List of assistant user ids
            location: Free-text location matched against Alert.location
        """
        now = utcnow()
        farmhouse_data = {
            'f_id': Farmhouse.generate_f_id(),
            'name': name,
            'admin': admin,
            'manager': manager,
            'assistants': list(assistants or []),
            'location': location,
            'createdAt': now,
            'updatedAt': now
        }
        result = db.farmhouses.insert_one(farmhouse_data)
        farmhouse_data['_id'] = result.inserted_id
        return farmhouse_data

    @staticmethod
    def find_all():
        return list(db.farmhouses.find())

    @staticmethod
    def find_by_id(farmhouse_id):
        return db.farmhouses.find_one({'_id': ObjectId(farmhouse_id)})

    @staticmethod
    def find_owned(farmhouse_id, admin_id):
        """Find a farmhouse only if admin_id is its admin"""
        return db.farmhouses.find_one({'_id': ObjectId(farmhouse_id), 'admin': admin_id})

    @staticmethod
    def find_by_role(role, user_id):
        """Find farmhouses where user_id holds the given role

        For assistants this is membership in the assistants list.
        """
        field = OWNERSHIP_FIELDS[role]
        return list(db.farmhouses.find({field: user_id}))

    @staticmethod
    def update_farmhouse(farmhouse_id, update_data):
        """Update farmhouse fields; returns the updated document"""
        update_data['updatedAt'] = utcnow()
        return db.farmhouses.find_one_and_update(
            {'_id': ObjectId(farmhouse_id)},
            {'$set': update_data},
            return_document=ReturnDocument.AFTER
        )

    @staticmethod
    def delete_farmhouse(farmhouse_id):
        db.farmhouses.delete_one({'_id': ObjectId(farmhouse_id)})

    @staticmethod
    def locations(farmhouses):
        """Non-empty location strings of the given farmhouses"""
        return [farmhouse['location'] for farmhouse in farmhouses if farmhouse.get('location')]
