from models.menu_management import MenuItem, SeasonalMenu
from models.stock import StockRecord
from models.order_management import Order, OrderItem

# Register all models
__all__ = ['MenuItem', 'SeasonalMenu', 'StockRecord', 'Order', 'OrderItem']
