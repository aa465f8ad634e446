from .setup import setup_observability, configure_logging
from .metrics import (
    bakery_checkout_total,
    bakery_checkout_duration_seconds,
    bakery_stock_units_sold_total,
    bakery_order_status_changes_total,
)
