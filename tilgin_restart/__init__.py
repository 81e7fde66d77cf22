"""
tilgin_restart
==============
Restart a Tilgin home router (as supplied by Hyperoptic) through its web
management interface, then wait until it is reachable again.

Package structure
-----------------
tilgin_restart/
├── __init__.py       – package init and public API
├── config.py         – configuration constants and RouterConfig
├── errors.py         – exception hierarchy
├── logging_setup.py  – colorlog logger with key/value fields
├── protocol.py       – form fields and the simple / rich protocol variants
├── session.py        – requests.Session factory with a scoped cookie jar
├── liveness.py       – down → up liveness poll
├── restarter.py      – Restarter: the ordered restart sequence
├── cli.py            – argparse CLI (``python -m tilgin_restart``)
└── auth/             – sub-package: secret/token scraping, hashing, login
    ├── __init__.py
    ├── token.py      – extract_hmac_secret / extract_form_token
    ├── password.py   – HMAC-SHA1 credential hash
    └── login.py      – login form submission

Quick start
-----------
    import os
    from tilgin_restart import Restarter, RouterConfig

    config = RouterConfig(
        username="admin",
        password=os.environ["ROUTER_PASSWORD"],
        host="http://192.168.1.1",
    ).validate()
    downtime = Restarter(config).run()
"""

from .config import RouterConfig
from .errors import (
    AuthError,
    ConfigError,
    ExtractionError,
    ExtractionKind,
    FetchError,
    LivenessTimeoutError,
    RestartError,
    RestarterError,
    SessionInitError,
    StepError,
)
from .auth import credential_hash, extract_form_token, extract_hmac_secret
from .liveness import wait_for_restart
from .protocol import RICH, SIMPLE, Protocol
from .restarter import Restarter, State

__all__ = [
    "Restarter",
    "State",
    "RouterConfig",
    "Protocol",
    "RICH",
    "SIMPLE",
    "credential_hash",
    "extract_hmac_secret",
    "extract_form_token",
    "wait_for_restart",
    "RestarterError",
    "ConfigError",
    "SessionInitError",
    "FetchError",
    "ExtractionError",
    "ExtractionKind",
    "AuthError",
    "RestartError",
    "LivenessTimeoutError",
    "StepError",
]
