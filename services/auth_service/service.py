import structlog
from passlib.context import CryptContext
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from shared.config.settings import BCRYPT_ROUNDS, OWNER_EMAIL
from shared.errors import CONFLICT, UNAUTHENTICATED, FORBIDDEN, ProcedureError
from shared.security.access import ADMIN_ROLE, CUSTOMER_ROLE
from shared.security.jwt_handler import create_access_token

from .models import User
from .repository import UserRepository
from .schemas import TokenResponse, UserCreate, UserLogin

logger = structlog.get_logger(__name__)

_pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=BCRYPT_ROUNDS)


class AuthService:

    @staticmethod
    def _hash_password(password: str) -> str:
        return _pwd_context.hash(password)

    @staticmethod
    def _verify_password(plain: str, hashed: str) -> bool:
        return _pwd_context.verify(plain, hashed)

    @staticmethod
    def _role_for(email: str) -> str:
        return ADMIN_ROLE if OWNER_EMAIL and email.lower() == OWNER_EMAIL else CUSTOMER_ROLE

    @staticmethod
    async def register(db: AsyncSession, data: UserCreate) -> User:
        email = data.email.lower()
        existing = await UserRepository.get_by_email(db, email)
        if existing:
            raise ProcedureError(CONFLICT, "Email already registered")
        user = User(
            email=email,
            name=data.name,
            hashed_password=AuthService._hash_password(data.password),
            role=AuthService._role_for(email),
        )
        try:
            user = await UserRepository.create(db, user)
        except IntegrityError:
            await db.rollback()
            raise ProcedureError(CONFLICT, "Email already registered")
        logger.info("user_registered", user_id=user.id, role=user.role)
        return user

    @staticmethod
    async def login(db: AsyncSession, data: UserLogin) -> TokenResponse:
        user = await UserRepository.get_by_email(db, data.email.lower())
        if not user or not AuthService._verify_password(data.password, user.hashed_password):
            raise ProcedureError(UNAUTHENTICATED, "Incorrect email or password")
        if not user.is_active:
            raise ProcedureError(FORBIDDEN, "Account is disabled")
        await UserRepository.touch_last_signed_in(db, user)
        token = create_access_token(data={"sub": str(user.id), "role": user.role})
        logger.info("user_logged_in", user_id=user.id)
        return TokenResponse(access_token=token)
