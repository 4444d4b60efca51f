from app.models.user import User
from app.models.address import Address
from app.models.product import Product
from app.models.kv_entry import KVEntry
from app.models.order import Order
from app.models.order_item import OrderItem
from app.models.order_counter import OrderCounter

# add ALL models here
