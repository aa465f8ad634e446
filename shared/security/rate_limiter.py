from slowapi import Limiter
from slowapi.util import get_remote_address
from fastapi import Request

from shared.config.settings import RATE_LIMIT_ENABLED, SESSION_COOKIE_NAME
from .jwt_handler import verify_access_token


def user_id_or_ip(request: Request) -> str:
    """
    Key function for SlowAPI.
    Extracts the user ID from the bearer token or session cookie if available.
    Falls back to the client's IP address if unauthenticated.
    """
    token = None
    auth_header = request.headers.get("Authorization")
    if auth_header and auth_header.startswith("Bearer "):
        token = auth_header.split(" ", 1)[1]
    else:
        token = request.cookies.get(SESSION_COOKIE_NAME)

    if token:
        payload = verify_access_token(token)
        if payload and "sub" in payload:
            return f"user:{payload['sub']}"

    return f"ip:{get_remote_address(request)}"


limiter = Limiter(key_func=user_id_or_ip, enabled=RATE_LIMIT_ENABLED)
