"""Authentication submodule – secret/token extraction, credential hash, login."""

from tilgin_restart.auth.login import submit_login, is_success
from tilgin_restart.auth.password import credential_hash
from tilgin_restart.auth.token import (
    extract_hmac_secret,
    extract_form_token,
    HMAC_SECRET_RE,
    FORM_TOKEN_RE,
)

__all__ = [
    "submit_login",
    "is_success",
    "credential_hash",
    "extract_hmac_secret",
    "extract_form_token",
    "HMAC_SECRET_RE",
    "FORM_TOKEN_RE",
]
