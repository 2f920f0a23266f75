import logging

from pymongo import ASCENDING

from farmhome import db
from .user import User
from .animal import Animal
from .health_record import HealthRecord
from .vaccination import Vaccination
from .breeding import Breeding
from .incident import Incident
from .product import Product
from .order import Order
from .quote import Quote

logger = logging.getLogger(__name__)

# Tabular resources served by the generic CRUD/CSV router
RESOURCES = [Animal, HealthRecord, Vaccination, Breeding, Incident, Product, Order, Quote]

def init_db():
    """Create indexes for every collection"""
    db.animals.create_index('tagId', unique=True)
    db.farmhouses.create_index('f_id', unique=True)
    db.farmhouses.create_index('location')
    db.farmhouse_users.create_index('adminId', unique=True)
    db.users.create_index([('email', ASCENDING)], unique=True, sparse=True)
    db.alerts.create_index('location')
    for resource in RESOURCES:
        db[resource.collection_name].create_index([('createdAt', ASCENDING)])
    logger.info("Database indexes initialized")

def create_default_admin(config):
    """Seed the super admin account from configuration if it does not exist"""
    email = config.get('SUPER_ADMIN_EMAIL')
    password = config.get('SUPER_ADMIN_PASSWORD')
    if not email or not password:
        return None

    existing_user = User.find_by_email(email)
    if existing_user:
        return existing_user

    user = User.create_user(
        name=config.get('SUPER_ADMIN_NAME') or 'Super Admin',
        email=email,
        password=password,
        role='super_admin'
    )
    logger.info(f"Default super admin '{email}' created")
    return user

def reset_collections(database, keep_users=True):
    """Drop resource collections; users are kept unless keep_users is False

    Returns:
        list of dropped collection names
    """
    names = [resource.collection_name for resource in RESOURCES]
    names += ['farmhouses', 'farmhouse_users', 'alerts']
    if not keep_users:
        names.append('users')

    existing = set(database.list_collection_names())
    dropped = []
    for name in names:
        if name in existing:
            database.drop_collection(name)
            dropped.append(name)
    return dropped
