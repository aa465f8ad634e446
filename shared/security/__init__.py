from .jwt_handler import create_access_token, verify_access_token
from .access import AccessTier, authorize, is_admin
from .dependencies import get_optional_user, get_current_user, get_admin_user, requires
from .rate_limiter import limiter, user_id_or_ip

__all__ = [
    "create_access_token",
    "verify_access_token",
    "AccessTier",
    "authorize",
    "is_admin",
    "get_optional_user",
    "get_current_user",
    "get_admin_user",
    "requires",
    "limiter",
    "user_id_or_ip",
]
