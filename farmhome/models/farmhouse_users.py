from bson import ObjectId

from farmhome import db
from farmhome.models.user import User
from farmhome.utils.dates import utcnow

# Member kind -> list field on the farmhouse_users document
MEMBER_FIELDS = {
    'assistant': 'assistants',
    'manager': 'managers',
}


class FarmhouseUsers:
    """Per-admin roster of managers and assistants (one document per adminId)"""

    @staticmethod
    def find_all():
        return list(db.farmhouse_users.find())

    @staticmethod
    def find_by_admin(admin_id):
        return db.farmhouse_users.find_one({'adminId': ObjectId(admin_id)})

    @staticmethod
    def add_member(admin_id, kind, member_id):
        """Add a manager or assistant to an admin's roster

        Creates the roster if the admin has none yet.

        Returns:
            tuple: (document, outcome) where outcome is 'created', 'added' or 'exists'
        """
        admin_obj_id = ObjectId(admin_id)
        member_obj_id = ObjectId(member_id)
        field = MEMBER_FIELDS[kind]

        doc = db.farmhouse_users.find_one({'adminId': admin_obj_id})
        now = utcnow()
        if not doc:
            doc = {
                'adminId': admin_obj_id,
                'managers': [],
                'assistants': [],
                'createdAt': now,
                'updatedAt': now
            }
            doc[field].append(member_obj_id)
            result = db.farmhouse_users.insert_one(doc)
            doc['_id'] = result.inserted_id
            return doc, 'created'

        if member_obj_id in doc.get(field, []):
            return doc, 'exists'

        db.farmhouse_users.update_one(
            {'_id': doc['_id']},
            {'$push': {field: member_obj_id}, '$set': {'updatedAt': now}}
        )
        return db.farmhouse_users.find_one({'_id': doc['_id']}), 'added'

    @staticmethod
    def remove_member(doc, kind, member_id):
        """Remove a member from a roster document

        Returns:
            The updated document, or None if the member was not in the roster
        """
        member_obj_id = ObjectId(member_id)
        field = MEMBER_FIELDS[kind]
        if member_obj_id not in doc.get(field, []):
            return None

        db.farmhouse_users.update_one(
            {'_id': doc['_id']},
            {'$pull': {field: member_obj_id}, '$set': {'updatedAt': utcnow()}}
        )
        return db.farmhouse_users.find_one({'_id': doc['_id']})

    @staticmethod
    def populate(doc):
        """Replace adminId/managers/assistants ids with user documents

        Ids with no matching user populate to None (adminId) or are
        dropped (member lists).
        """
        if doc is None:
            return None
        member_ids = [doc['adminId']] + doc.get('managers', []) + doc.get('assistants', [])
        users = User.find_by_ids(member_ids)

        populated = dict(doc)
        populated['adminId'] = User.public(users.get(doc['adminId']))
        for field in MEMBER_FIELDS.values():
            populated[field] = [
                User.public(users[member_id]) for member_id in doc.get(field, [])
                if member_id in users
            ]
        return populated
