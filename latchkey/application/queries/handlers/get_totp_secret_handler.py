"""Get TOTP secret handler.

Generates a fresh base32 secret plus a QR image of its provisioning URI
(label = the user's email, issuer = the application name). Nothing is
persisted here; the secret is stored only when enrollment is confirmed.
"""

from latchkey.application.dtos import TotpProvisioning
from latchkey.application.errors import ApplicationError, ApplicationErrorCode
from latchkey.application.queries.user_queries import GetTotpSecret
from latchkey.core.result import Failure, Result, Success
from latchkey.domain.protocols import LoggerProtocol, TotpProtocol, UserRepository


class GetTotpSecretHandler:
    """Handler for the GetTotpSecret query."""

    def __init__(
        self,
        user_repo: UserRepository,
        totp_service: TotpProtocol,
        logger: LoggerProtocol,
        issuer_name: str,
    ) -> None:
        self._user_repo = user_repo
        self._totp_service = totp_service
        self._logger = logger
        self._issuer_name = issuer_name

    async def handle(
        self, query: GetTotpSecret
    ) -> Result[TotpProvisioning, ApplicationError]:
        user = await self._user_repo.find_by_id(query.user_id)
        if user is None:
            return Failure(
                error=ApplicationError(
                    code=ApplicationErrorCode.NOT_FOUND,
                    message="User not found",
                )
            )

        secret = self._totp_service.generate_secret()
        uri = self._totp_service.build_provisioning_uri(
            secret, account_label=user.email, issuer_name=self._issuer_name
        )

        self._logger.info("TOTP secret generated", user_id=user.id)
        return Success(
            value=TotpProvisioning(
                totp_secret=secret,
                qr_code_image=self._totp_service.build_qr_code_image(uri),
            )
        )
