from farmhome.models.base import Resource, ValidationError


class Order(Resource):
    collection_name = 'orders'
    url_prefix = '/orders'
    label = 'Order'
    list_key = 'orders'
    item_key = 'order'
    csv_filename = 'orders.csv'

    fields = (
        'productId', 'quantity', 'totalPrice', 'customerName', 'customerEmail',
        'shippingAddress', 'status'
    )
    create_required = ('productId', 'quantity')
    schema_required = create_required
    patch_fields = fields
    patch_requires_all = False
    number_fields = ('totalPrice',)
    integer_fields = ('quantity',)
    defaults = {'status': 'pending'}

    @classmethod
    def check(cls, data):
        if 'quantity' in data and (data['quantity'] is None or data['quantity'] <= 0):
            raise ValidationError('Invalid quantity')
        cls._non_negative(data, 'totalPrice')
