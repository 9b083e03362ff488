"""Signed, time-limited admin session tokens.

Tokens are stateless: the claims travel inside the signed value and nothing
is recorded server side, so a token stays valid until it expires.
"""

import time

from django.conf import settings
from django.core import signing

from apps.core.exceptions import InvalidToken

TOKEN_SALT = "apps.accounts.admin-session"


def issue_token(*, subject: str, role: str = "admin", now: float | None = None) -> str:
    """Sign a token for ``subject`` that expires ADMIN_TOKEN_MAX_AGE seconds from now."""
    issued_at = int(now if now is not None else time.time())
    claims = {
        "sub": subject,
        "role": role,
        "iat": issued_at,
        "exp": issued_at + settings.ADMIN_TOKEN_MAX_AGE,
    }
    return signing.dumps(claims, key=settings.ADMIN_TOKEN_SECRET, salt=TOKEN_SALT, compress=True)


def verify_token(token: str, *, now: float | None = None) -> dict:
    """Return the token's claims, or raise ``InvalidToken`` if forged or expired."""
    try:
        claims = signing.loads(token, key=settings.ADMIN_TOKEN_SECRET, salt=TOKEN_SALT)
    except signing.BadSignature as exc:
        raise InvalidToken from exc

    if not isinstance(claims, dict) or not isinstance(claims.get("exp"), int):
        raise InvalidToken

    current = now if now is not None else time.time()
    if current >= claims["exp"]:
        raise InvalidToken
    return claims
