"""
Description of the Tilgin web-UI form protocol.

Two firmware generations are supported.  Both share the same login form;
they differ only in whether the restart form must carry the anti-forgery
token (``__formtok``) handed out in the login response, and in where the
restart form is posted.
"""

from dataclasses import dataclass

from .errors import ConfigError

# Form field names used by the router's web UI
FIELD_FORM_TOKEN = "__formtok"
FIELD_AUTH       = "__auth"
FIELD_USER       = "__user"
FIELD_HASH       = "__hash"
FIELD_FORM       = "__form"

ACTION_LOGIN   = "login"
ACTION_RESTART = "restart"

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


@dataclass(frozen=True)
class Protocol:
    name: str
    requires_form_token: bool
    restart_path: str
    login_path: str = "/"

    def login_form(self, username: str, credential_hash: str) -> dict[str, str]:
        # The router does not check __formtok before authentication, so the
        # login form always carries it empty.
        return {
            FIELD_FORM_TOKEN: "",
            FIELD_AUTH: ACTION_LOGIN,
            FIELD_USER: username,
            FIELD_HASH: credential_hash,
        }

    def restart_form(self, form_token: str = "") -> dict[str, str]:
        return {
            FIELD_FORM_TOKEN: form_token if self.requires_form_token else "",
            FIELD_FORM: ACTION_RESTART,
        }


SIMPLE = Protocol("simple", requires_form_token=False, restart_path="/")
RICH   = Protocol("rich", requires_form_token=True, restart_path="/tools/restart")

PROTOCOLS: dict[str, Protocol] = {p.name: p for p in (SIMPLE, RICH)}


def get_protocol(name: str) -> Protocol:
    try:
        return PROTOCOLS[name]
    except KeyError:
        raise ConfigError(f"unknown protocol variant {name!r}") from None
