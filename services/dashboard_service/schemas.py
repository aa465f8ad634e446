from shared.schemas import CamelModel


class DashboardStats(CamelModel):
    total_products: int
    total_orders: int
    total_revenue: int  # minor currency units
    pending_orders: int
