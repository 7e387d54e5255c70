"""Authentication service implementation."""

import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from ...config import get_settings
from ...security import create_access_token, hash_password, verify_password
from ..exceptions import AuthenticationError, ValidationError
from ..models.user import User
from ..repositories.user_repository import EMAIL_TAKEN_MESSAGE, UserRepository
from ..schemas.auth import LoginRequest, LoginResponse, SignupRequest, UserProfileResponse
from .interfaces import IAuthService

logger = logging.getLogger(__name__)


class AuthService(IAuthService):
    """Authentication service implementation."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.user_repo = UserRepository(session)
        self.settings = get_settings()

    async def signup(self, request: SignupRequest) -> User:
        """Register new user."""
        if await self.user_repo.is_email_taken(request.email):
            raise ValidationError.for_field("email", EMAIL_TAKEN_MESSAGE, request.email)

        user = await self.user_repo.create_user(
            {
                "email": request.email,
                "name": request.name,
                "password_hash": hash_password(request.password),
            }
        )
        logger.info(f"User created - {user.id}")
        return user

    async def login(self, request: LoginRequest) -> LoginResponse:
        """Check credentials and issue an access token."""
        user = await self.user_repo.get_by_email(request.email)
        if not user:
            raise AuthenticationError("A user with this email could not be found.")

        if not verify_password(request.password, user.password_hash):
            raise AuthenticationError("Wrong password!")

        token = create_access_token(data={"sub": str(user.id), "email": user.email})
        logger.info(f"User logged in - {user.id}")

        return LoginResponse(
            token=token,
            user_id=user.id,
            expires_in=self.settings.access_token_expire_minutes * 60,
        )

    async def get_profile(self, user_id: UUID) -> UserProfileResponse:
        """Get user by ID."""
        user = await self.user_repo.find_user(user_id)
        return UserProfileResponse.from_model(user)
