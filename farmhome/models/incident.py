from farmhome.models.base import Resource


class Incident(Resource):
    """Health/safety incidents; the dashboard counts the last month of these"""

    collection_name = 'incidents'
    url_prefix = '/incidents'
    label = 'Incident'
    list_key = 'incidents'
    item_key = 'incident'
    csv_filename = 'incidents.csv'

    fields = (
        'incidentType', 'incidentDate', 'animalTagId', 'farmhouse', 'description',
        'severity', 'status', 'reportedBy', 'cost', 'notes'
    )
    create_required = ('incidentType', 'incidentDate', 'description')
    schema_required = create_required
    patch_fields = fields
    patch_requires_all = False
    date_fields = ('incidentDate',)
    number_fields = ('cost',)
    defaults = {'status': 'open'}

    @classmethod
    def check(cls, data):
        cls._non_negative(data, 'cost')
