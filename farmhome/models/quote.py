from farmhome.models.base import Resource


class Quote(Resource):
    """Quote requests submitted from the public site"""

    collection_name = 'quotes'
    url_prefix = '/quotes'
    label = 'Quote'
    list_key = 'quotes'
    item_key = 'quote'
    csv_filename = 'quotes.csv'

    fields = ('name', 'email', 'phone', 'company', 'message', 'status')
    create_required = ('name', 'email', 'message')
    schema_required = create_required
    patch_fields = fields
    patch_requires_all = False
    defaults = {'status': 'new'}
