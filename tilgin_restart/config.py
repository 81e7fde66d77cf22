"""Configuration constants and run configuration for the Tilgin restart tool."""

from dataclasses import dataclass, field

from .errors import ConfigError
from .protocol import PROTOCOLS

DEFAULT_HOST = "http://192.168.1.1"
DEFAULT_VARIANT = "rich"

# Credentials come from the environment; the password has no CLI flag so it
# never shows up in shell history or the process list.
USERNAME_ENV = "ROUTER_USER"
PASSWORD_ENV = "ROUTER_PASSWORD"

REQUEST_TIMEOUT = 15       # seconds per HTTP request during login/restart

POLL_INTERVAL    = 1.0     # seconds between liveness probes
PROBE_TIMEOUT    = 5.0     # seconds per liveness probe
LIVENESS_TIMEOUT = 300.0   # overall wait for the router to come back


@dataclass(frozen=True)
class RouterConfig:
    """Validated settings for a single restart run."""

    username: str
    password: str = field(repr=False)
    host: str = DEFAULT_HOST
    variant: str = DEFAULT_VARIANT
    verify_ssl: bool = True
    liveness_timeout: float = LIVENESS_TIMEOUT

    def validate(self) -> "RouterConfig":
        if not self.username:
            raise ConfigError("username is not set")
        if not self.password:
            raise ConfigError(f"password is not set (export {PASSWORD_ENV})")
        if not self.host:
            raise ConfigError("router host is not set")
        if self.variant not in PROTOCOLS:
            raise ConfigError(
                f"unknown protocol variant {self.variant!r} "
                f"(expected one of: {', '.join(sorted(PROTOCOLS))})"
            )
        if self.liveness_timeout <= 0:
            raise ConfigError("liveness timeout must be positive")
        return self
