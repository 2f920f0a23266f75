from farmhome.models.base import Resource


class HealthRecord(Resource):
    collection_name = 'health_records'
    url_prefix = '/health-records'
    label = 'Health record'
    list_key = 'healthRecords'
    item_key = 'healthRecord'
    csv_filename = 'health_records.csv'

    fields = (
        'animalTagId', 'healthIssue', 'symptoms', 'diagnosis', 'treatment', 'veterinarian',
        'treatmentDate', 'followUpDate', 'severity', 'cost', 'status', 'notes'
    )
    create_required = fields
    schema_required = ('animalTagId', 'healthIssue', 'treatmentDate')
    patch_fields = ('status', 'severity', 'cost', 'followUpDate', 'notes')
    date_fields = ('treatmentDate', 'followUpDate')
    number_fields = ('cost',)

    @classmethod
    def check(cls, data):
        cls._non_negative(data, 'cost')
