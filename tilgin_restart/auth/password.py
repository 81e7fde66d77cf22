"""Credential hashing for the Tilgin login form."""

import hashlib
import hmac

from ..errors import ExtractionError, ExtractionKind


def credential_hash(secret: bytes, username: str, password: str) -> str:
    """
    Replicate the login page's  hmac(__pass.value, secret)  call:

      HMAC-SHA1(key=secret, msg=username + password)  → lowercase hex

    The username and password are concatenated without a separator.  An
    empty *secret* is refused: it means the login page was never scraped.
    """
    if not secret:
        raise ExtractionError(
            ExtractionKind.SECRET_NOT_FOUND,
            "cannot hash credentials without an hmac secret",
        )
    mac = hmac.new(secret, (username + password).encode("utf-8"), hashlib.sha1)
    return mac.hexdigest()
