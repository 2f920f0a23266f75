import math

from bson import ObjectId
from pymongo import ReturnDocument

from farmhome import db
from farmhome.utils.csv_helper import LIST_SEPARATOR
from farmhome.utils.dates import parse_date, utcnow


class ValidationError(ValueError):
    """Raised when a request body or CSV row does not satisfy a model"""


class Resource:
    """Base for the tabular resources (animals, health records, ...)

    Subclasses declare their collection, field lists and type coercions.
    Every record gets createdAt/updatedAt timestamps.
    """

    collection_name = None
    url_prefix = None
    label = None
    list_key = None
    item_key = None
    csv_filename = None

    # Column order for CSV import/export
    fields = ()
    # Fields that must be non-blank on create
    create_required = ()
    # Fields the schema itself requires (checked on CSV import)
    schema_required = ()
    # Fields accepted by PATCH
    patch_fields = ()
    # When True, PATCH must carry every patch field
    patch_requires_all = True

    date_fields = ()
    number_fields = ()
    integer_fields = ()
    list_fields = ()
    defaults = {}

    missing_message = 'All fields are required'

    @classmethod
    def collection(cls):
        return db[cls.collection_name]

    @classmethod
    def patch_message(cls):
        if not cls.patch_requires_all:
            return 'No updatable fields provided'
        names = list(cls.patch_fields)
        return f"{', '.join(names[:-1])}, and {names[-1]} are required"

    @staticmethod
    def is_blank(value):
        return value is None or (isinstance(value, str) and not value.strip())

    @classmethod
    def coerce(cls, data):
        """Convert incoming values to their stored types

        Raises:
            ValidationError: naming the first field that fails to convert
        """
        result = {}
        for field, value in data.items():
            if field in cls.list_fields:
                if value is None:
                    value = []
                if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
                    raise ValidationError(f'{field.capitalize()} must be an array of strings')
            elif value is None or (isinstance(value, str) and not value.strip()):
                value = None
            elif field in cls.date_fields:
                try:
                    value = parse_date(value)
                except (TypeError, ValueError):
                    raise ValidationError(f'Invalid {field}')
            elif field in cls.number_fields or field in cls.integer_fields:
                if isinstance(value, bool):
                    raise ValidationError(f'Invalid {field}')
                try:
                    number = float(value)
                except (TypeError, ValueError):
                    raise ValidationError(f'Invalid {field}')
                if math.isnan(number) or math.isinf(number):
                    raise ValidationError(f'Invalid {field}')
                if field in cls.integer_fields:
                    if not number.is_integer():
                        raise ValidationError(f'Invalid {field}')
                    number = int(number)
                value = number
            result[field] = value
        return result

    @classmethod
    def check(cls, data):
        """Resource-specific value checks; raise ValidationError on failure"""

    @classmethod
    def _non_negative(cls, data, *fields):
        for field in fields:
            value = data.get(field)
            if value is not None and value < 0:
                raise ValidationError(f'Invalid {field}')

    @classmethod
    def build(cls, payload):
        """Validate a create payload and return the document to insert"""
        if not isinstance(payload, dict):
            raise ValidationError('Request body must be JSON')
        if any(cls.is_blank(payload.get(field)) for field in cls.create_required):
            raise ValidationError(cls.missing_message)

        data = {field: payload[field] for field in cls.fields if field in payload}
        data = cls.coerce(data)
        cls.check(data)

        document = dict(cls.defaults)
        document.update({key: value for key, value in data.items() if value is not None})
        return document

    @classmethod
    def build_patch(cls, payload):
        """Validate a PATCH payload and return the $set document"""
        if not isinstance(payload, dict):
            raise ValidationError('Request body must be JSON')
        if cls.patch_requires_all:
            if any(field not in payload for field in cls.patch_fields):
                raise ValidationError(cls.patch_message())
        data = {field: payload[field] for field in cls.patch_fields if field in payload}
        if not data:
            raise ValidationError(cls.patch_message())

        data = cls.coerce(data)
        cls.check(data)
        for field in cls.create_required:
            if field in data and data[field] is None:
                raise ValidationError(f'{field} cannot be empty')
        return data

    @classmethod
    def create(cls, payload):
        """Validate and insert a record

        Returns:
            The inserted document, including _id
        """
        document = cls.build(payload)
        now = utcnow()
        document['createdAt'] = now
        document['updatedAt'] = now
        result = cls.collection().insert_one(document)
        document['_id'] = result.inserted_id
        return document

    @classmethod
    def paginate(cls, page, limit):
        """Return (documents, total) for one page, newest first"""
        cursor = (
            cls.collection()
            .find()
            .sort([('createdAt', -1), ('_id', -1)])
            .skip((page - 1) * limit)
            .limit(limit)
        )
        total = cls.collection().count_documents({})
        return list(cursor), total

    @classmethod
    def find_all(cls):
        return list(cls.collection().find())

    @classmethod
    def find_by_id(cls, record_id):
        """Find a record by id; raises bson InvalidId for malformed ids"""
        return cls.collection().find_one({'_id': ObjectId(record_id)})

    @classmethod
    def update(cls, record_id, payload):
        """Apply a validated PATCH; returns the updated document or None"""
        object_id = ObjectId(record_id)
        update_data = cls.build_patch(payload)
        update_data['updatedAt'] = utcnow()
        return cls.collection().find_one_and_update(
            {'_id': object_id},
            {'$set': update_data},
            return_document=ReturnDocument.AFTER
        )

    @classmethod
    def delete(cls, record_id):
        """Delete a record; returns the deleted document or None"""
        return cls.collection().find_one_and_delete({'_id': ObjectId(record_id)})

    @classmethod
    def import_rows(cls, rows, row_numbers=None):
        """Convert parsed CSV rows into documents

        Args:
            rows: Row dicts keyed by column name
            row_numbers: File row number of each row; defaults to 1..n

        Returns:
            tuple: (documents, invalid) where invalid rows carry the
            validation error message
        """
        documents = []
        invalid = []
        now = utcnow()
        if row_numbers is None:
            row_numbers = range(1, len(rows) + 1)
        for row_number, row in zip(row_numbers, rows):
            data = {}
            for field in cls.fields:
                value = row.get(field)
                if field in cls.list_fields:
                    value = [item for item in (value or '').split(LIST_SEPARATOR) if item.strip()]
                elif cls.is_blank(value):
                    continue
                data[field] = value

            missing = [field for field in cls.schema_required if cls.is_blank(data.get(field))]
            if missing:
                invalid.append({
                    'row': row_number,
                    'error': f"Missing required values: {', '.join(missing)}",
                    'data': row
                })
                continue
            try:
                data = cls.coerce(data)
                cls.check(data)
            except ValidationError as e:
                invalid.append({'row': row_number, 'error': str(e), 'data': row})
                continue

            document = dict(cls.defaults)
            document.update({key: value for key, value in data.items() if value is not None})
            document['createdAt'] = now
            document['updatedAt'] = now
            documents.append(document)
        return documents, invalid

    @classmethod
    def insert_many(cls, documents):
        result = cls.collection().insert_many(documents)
        return result.inserted_ids

    @classmethod
    def export_rows(cls):
        return list(cls.collection().find())
