from farmhome.models.base import Resource, ValidationError

GENDERS = ('Male', 'Female')


class Animal(Resource):
    collection_name = 'animals'
    url_prefix = '/animals'
    label = 'Animal'
    list_key = 'animals'
    item_key = 'animal'
    csv_filename = 'animals.csv'

    fields = (
        'tagId', 'breed', 'gender', 'dob', 'weight', 'condition', 'status', 'farmhouse',
        'sireId', 'damId', 'acquisitionType', 'acquisitionDate', 'origin', 'images', 'notes'
    )
    create_required = (
        'tagId', 'breed', 'gender', 'dob', 'weight', 'condition', 'status', 'farmhouse',
        'acquisitionType', 'acquisitionDate'
    )
    schema_required = create_required
    patch_fields = (
        'breed', 'gender', 'dob', 'weight', 'condition', 'status', 'farmhouse',
        'acquisitionType', 'acquisitionDate', 'origin', 'images', 'notes'
    )
    date_fields = ('dob', 'acquisitionDate')
    number_fields = ('weight',)
    list_fields = ('images',)

    missing_message = 'Missing required fields'

    @classmethod
    def patch_message(cls):
        return 'All fields are required'

    @classmethod
    def check(cls, data):
        if 'gender' in data and data['gender'] not in GENDERS:
            raise ValidationError('Invalid gender')
        if 'weight' in data and (data['weight'] is None or data['weight'] <= 0):
            raise ValidationError('Invalid weight')
