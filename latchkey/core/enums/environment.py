"""Application environment types.

Environments:
- DEVELOPMENT: Local development, console log output, lax cookies
- TESTING: Automated test execution
- CI: Continuous integration
- PRODUCTION: Secure cookies, SameSite=None, SMTP delivery
"""

from enum import Enum


class Environment(str, Enum):
    """Application environment types."""

    DEVELOPMENT = "development"
    TESTING = "testing"
    CI = "ci"
    PRODUCTION = "production"
