"""Domain value objects."""

from latchkey.domain.value_objects.secret_bundle import SecretBundle
from latchkey.domain.value_objects.token_claims import TokenClaims

__all__ = ["SecretBundle", "TokenClaims"]
