"""
Extraction of the per-session values the Tilgin web UI embeds in its pages.

The router has no API; the login page hands the HMAC key to its own
JavaScript and the post-login page carries the anti-forgery token in a
hidden input.  Both are scraped with narrow, non-greedy patterns so that a
change to the page markup fails here instead of in a later step.
"""

import re

from ..errors import ExtractionError, ExtractionKind

# hmac(__pass.value, "<secret>") in the login page script
HMAC_SECRET_RE = re.compile(r'__pass\.value,\s+"(\w+?)"')

# The exact tag shape the router emits; other attribute orders or quoting
# are deliberately not matched.
FORM_TOKEN_RE = re.compile(r'<input type=hidden name="__formtok" value="(\w+?)">')


def extract_hmac_secret(page_body: str) -> bytes:
    """
    Return the HMAC signing secret embedded in the login page.

    Raises ExtractionError(SECRET_NOT_FOUND) when the page does not contain
    the ``__pass.value, "<token>"`` assignment.
    """
    m = HMAC_SECRET_RE.search(page_body)
    if not m or not m.group(1):
        raise ExtractionError(
            ExtractionKind.SECRET_NOT_FOUND,
            "failed to extract hmac secret from login page",
        )
    return m.group(1).encode("utf-8")


def extract_form_token(page_body: str) -> str:
    """Return the ``__formtok`` hidden-input value from a post-login page."""
    m = FORM_TOKEN_RE.search(page_body)
    if not m:
        raise ExtractionError(
            ExtractionKind.TOKEN_NOT_FOUND,
            "failed to extract CSRF form token",
        )
    return m.group(1)
