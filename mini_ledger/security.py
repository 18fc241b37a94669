"""
Password hashing and caller identity.

Passwords are stored as bcrypt hashes; bcrypt generates a random
salt per hash and embeds it in the result, so two accounts with
the same password never share a stored value.

The caller identity provider turns the Authorization header into
the account id a request may act as. The core services only ever
see that resolved id.
"""

from typing import Protocol

import bcrypt

from mini_ledger.exceptions import InvalidInputError, UnauthorizedError
from mini_ledger.models import ACCOUNT_ID_LENGTH


# bcrypt only looks at the first 72 bytes of a password.
MAX_PASSWORD_BYTES = 72


def hash_password(password: str, rounds: int = 10) -> str:
    secret = password.encode("utf-8")
    if len(secret) > MAX_PASSWORD_BYTES:
        raise InvalidInputError(
            f"password must be at most {MAX_PASSWORD_BYTES} bytes"
        )
    return bcrypt.hashpw(secret, bcrypt.gensalt(rounds=rounds)).decode("ascii")


def verify_password(password: str, password_hash: str) -> bool:
    """Constant-time check of a password against its stored hash."""
    secret = password.encode("utf-8")
    if len(secret) > MAX_PASSWORD_BYTES:
        return False
    return bcrypt.checkpw(secret, password_hash.encode("ascii"))


class IdentityProvider(Protocol):
    def resolve(self, authorization: str | None) -> str:
        """Return the caller's account id or raise UnauthorizedError."""
        ...


class BearerAccountIdProvider:
    """
    Stand-in provider: the bearer token is the account id itself.

    It checks only the shape of the token. Whether the account
    exists is left to the service that uses it. Replace it with a
    provider that verifies signed tokens in any real deployment.
    """

    scheme = "Bearer"

    def resolve(self, authorization: str | None) -> str:
        scheme, _, token = (authorization or "").partition(" ")
        token = token.strip()
        if scheme != self.scheme or len(token) != ACCOUNT_ID_LENGTH:
            raise UnauthorizedError("Unauthorized, use valid accountId as token")
        return token
