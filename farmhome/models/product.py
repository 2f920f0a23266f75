from farmhome.models.base import Resource


class Product(Resource):
    collection_name = 'products'
    url_prefix = '/products'
    label = 'Product'
    list_key = 'products'
    item_key = 'product'
    csv_filename = 'products.csv'

    fields = ('name', 'category', 'description', 'price', 'stock', 'unit', 'imageUrl')
    create_required = ('name', 'price')
    schema_required = create_required
    patch_fields = fields
    patch_requires_all = False
    number_fields = ('price',)
    integer_fields = ('stock',)

    @classmethod
    def check(cls, data):
        cls._non_negative(data, 'price', 'stock')
