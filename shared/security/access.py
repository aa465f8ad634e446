"""
Role tiers and the authorization predicate.

The predicate knows nothing about HTTP: it takes the caller (or None) and the
tier a procedure requires, and raises ProcedureError when the caller falls
short. dependencies.requires() plugs it into FastAPI.
"""
from enum import Enum
from typing import Optional, Protocol

from shared.errors import FORBIDDEN, UNAUTHENTICATED, ProcedureError


class AccessTier(str, Enum):
    PUBLIC = "public"
    AUTHENTICATED = "authenticated"
    ADMIN = "admin"


class Caller(Protocol):
    id: int
    role: str


ADMIN_ROLE = "admin"
CUSTOMER_ROLE = "customer"


def is_admin(caller: Optional[Caller]) -> bool:
    return caller is not None and caller.role == ADMIN_ROLE


def authorize(caller: Optional[Caller], tier: AccessTier) -> None:
    if tier == AccessTier.PUBLIC:
        return
    if caller is None:
        raise ProcedureError(UNAUTHENTICATED, "Authentication required")
    if tier == AccessTier.ADMIN and not is_admin(caller):
        raise ProcedureError(FORBIDDEN, "Access denied. Administrators only.")
