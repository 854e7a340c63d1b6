"""Verification token store factory.

The store is built on the request's session so its writes share one
transaction with the handler's repositories.
"""

from typing import TYPE_CHECKING

from sqlalchemy.ext.asyncio import AsyncSession

from latchkey.core.container.infrastructure import (
    get_logger,
    get_verification_token_service,
)

if TYPE_CHECKING:
    from latchkey.application.services import VerificationTokenStore


def build_token_store(session: AsyncSession) -> "VerificationTokenStore":
    """Build a verification token store on ``session``."""
    from latchkey.application.services import VerificationTokenStore
    from latchkey.infrastructure.persistence.repositories import (
        VerificationTokenRepository,
    )

    return VerificationTokenStore(
        token_repo=VerificationTokenRepository(session=session),
        token_service=get_verification_token_service(),
        logger=get_logger(),
    )
