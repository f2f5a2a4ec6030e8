"""
Registration service.

Creates users and links them to the owner of the referral code they signed
up with.
"""

from dataclasses import dataclass
from decimal import Decimal

from loguru import logger
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from refnet.models.user import User
from refnet.repositories.user_repository import UserRepository
from refnet.services.ledger import LedgerStore
from refnet.services.referral.links import (
    build_referral_link,
    generate_referral_code,
)
from refnet.utils.db_decorators import raises_storage_error
from refnet.utils.exceptions import StorageError, ValidationError
from refnet.validators.common import validate_username


MAX_CODE_ATTEMPTS = 10


@dataclass
class RegistrationResult:
    """Result of a registration."""

    user: User
    referral_link: str
    referrer: User | None = None


class RegistrationService:
    """User registration with referral linking."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize registration service."""
        self.session = session
        self.user_repo = UserRepository(session)
        self.ledger = LedgerStore(session)

    async def register(
        self, username: str, referral_code: str | None = None
    ) -> RegistrationResult:
        """
        Register a new user.

        An unknown referral code is not an error: the user is registered
        without a referrer.

        Args:
            username: Unique username
            referral_code: Code of the inviting user (optional)

        Returns:
            RegistrationResult with the new user and its referral link

        Raises:
            ValidationError: Empty or already taken username
            StorageError: Ledger store failure
        """
        is_valid, username, error = validate_username(username)
        if not is_valid:
            raise ValidationError(error)

        try:
            result = await self._create_user(username, referral_code)
        except Exception:
            await self.session.rollback()
            raise

        logger.info(
            "User registered",
            extra={
                "user_id": result.user.id,
                "referrer_id": result.user.referrer_id,
            },
        )
        return result

    @raises_storage_error
    async def _create_user(
        self, username: str, referral_code: str | None
    ) -> RegistrationResult:
        if await self.user_repo.get_by_username(username) is not None:
            raise ValidationError(f"Username {username!r} is already taken")

        referrer = None
        if referral_code and referral_code.strip():
            referrer = await self.ledger.get_user_by_referral_code(
                referral_code.strip()
            )
            if referrer is None:
                logger.debug(
                    "Unknown referral code ignored",
                    extra={"referral_code": referral_code},
                )

        code = await self._unique_referral_code()
        try:
            user = await self.user_repo.create(
                username=username,
                referral_code=code,
                referrer_id=referrer.id if referrer else None,
                balance=Decimal("0"),
                vip_level=0,
            )
            await self.session.commit()
        except IntegrityError as e:
            # Concurrent registration took the name after the check above
            if "username" not in str(e.orig):
                raise
            raise ValidationError(
                f"Username {username!r} is already taken"
            ) from e

        return RegistrationResult(
            user=user,
            referral_link=build_referral_link(code),
            referrer=referrer,
        )

    async def _unique_referral_code(self) -> str:
        for _ in range(MAX_CODE_ATTEMPTS):
            code = generate_referral_code()
            if not await self.user_repo.exists(referral_code=code):
                return code
        raise StorageError(
            f"Could not generate a unique referral code "
            f"in {MAX_CODE_ATTEMPTS} attempts"
        )
