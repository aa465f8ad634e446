from prometheus_client import Counter, Histogram

# Business Metrics
bakery_checkout_total = Counter(
    "bakery_checkout_total",
    "Total checkouts processed",
    ["status"]  # Labels: 'success', 'rejected', 'failed'
)

bakery_checkout_duration_seconds = Histogram(
    "bakery_checkout_duration_seconds",
    "Checkout duration in seconds"
)

bakery_stock_units_sold_total = Counter(
    "bakery_stock_units_sold_total",
    "Product units removed from stock by orders"
)

bakery_order_status_changes_total = Counter(
    "bakery_order_status_changes_total",
    "Order status transitions applied by admins",
    ["status"]
)
