"""Login form submission for the Tilgin web UI."""

import requests

from ..config import REQUEST_TIMEOUT
from ..errors import AuthError
from ..logging_setup import fields, log
from ..protocol import FORM_CONTENT_TYPE, Protocol
from ..session import endpoint
from .password import credential_hash
from .token import extract_form_token


def is_success(resp: requests.Response) -> bool:
    return 200 <= resp.status_code <= 299


def submit_login(
    session: requests.Session,
    host: str,
    username: str,
    password: str,
    secret: bytes,
    protocol: Protocol,
) -> str:
    """
    POST the login form and return the anti-forgery token for the next form.

    Form fields:  __formtok=""  __auth=login  __user=<username>
                  __hash=hex(HMAC-SHA1(secret, username + password))

    For protocols without a form token an empty string is returned.  Any
    non-2xx response raises AuthError after logging the response body.
    """
    payload = protocol.login_form(username, credential_hash(secret, username, password))
    url = endpoint(host, protocol.login_path)

    try:
        resp = session.post(
            url,
            data=payload,
            headers={"Content-Type": FORM_CONTENT_TYPE},
            timeout=REQUEST_TIMEOUT,
        )
    except requests.RequestException as exc:
        raise AuthError(f"login request failed: {exc}") from exc

    if not is_success(resp):
        log.error("Auth failed: %s", resp.text, extra=fields(status=resp.status_code, url=url))
        raise AuthError(f"login rejected with HTTP {resp.status_code}")

    log.debug("Cookies after login: %s", list(session.cookies.keys()))

    if not protocol.requires_form_token:
        return ""

    form_token = extract_form_token(resp.text)
    log.debug("CSRF form token: %s", form_token)
    return form_token
