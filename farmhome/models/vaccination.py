from farmhome.models.base import Resource


class Vaccination(Resource):
    collection_name = 'vaccinations'
    url_prefix = '/vaccinations'
    label = 'Vaccination record'
    list_key = 'vaccinations'
    item_key = 'vaccination'
    csv_filename = 'vaccinations.csv'

    fields = (
        'animalTagId', 'vaccineName', 'manufacturer', 'batchNumber', 'vaccinationType', 'dosage',
        'administrationRoute', 'administeredBy', 'treatmentDate', 'expiryDate', 'nextDueDate',
        'cost', 'status', 'sideEffects', 'notes'
    )
    create_required = fields
    schema_required = ('animalTagId', 'vaccineName', 'treatmentDate')
    patch_fields = ('status', 'cost', 'nextDueDate', 'sideEffects', 'notes')
    date_fields = ('treatmentDate', 'expiryDate', 'nextDueDate')
    number_fields = ('cost',)

    @classmethod
    def check(cls, data):
        cls._non_negative(data, 'cost')
