from farmhome.models.base import Resource


class Breeding(Resource):
    collection_name = 'breedings'
    url_prefix = '/breeding'
    label = 'Breeding record'
    list_key = 'breeding'
    item_key = 'breeding'
    csv_filename = 'breeding.csv'

    fields = (
        'sireTagId', 'damTagId', 'breedingDate', 'breedingMethod', 'expectedDelivery',
        'actualDelivery', 'numberOfOffspring', 'status', 'cost', 'performedBy', 'notes'
    )
    create_required = fields
    schema_required = ('sireTagId', 'damTagId', 'breedingDate')
    patch_fields = ('status', 'cost', 'actualDelivery', 'numberOfOffspring', 'notes')
    date_fields = ('breedingDate', 'expectedDelivery', 'actualDelivery')
    number_fields = ('cost',)
    integer_fields = ('numberOfOffspring',)

    @classmethod
    def check(cls, data):
        cls._non_negative(data, 'numberOfOffspring', 'cost')
