"""
Restart sequencer for the Tilgin router.

Drives one authenticate-then-restart run over a single requests.Session:

    INIT → SECRET_FETCHED → AUTHENTICATED → RESTART_SUBMITTED → VERIFIED
                                                              ↘ TIMED_OUT

Any step may instead end the run in FAILED.  Steps are never retried; the
liveness poll is a bounded wait, not a retry.
"""

import enum
from typing import Callable

import requests

from .auth.login import is_success, submit_login
from .auth.token import extract_hmac_secret
from .config import POLL_INTERVAL, REQUEST_TIMEOUT, RouterConfig
from .errors import (
    AuthError,
    FetchError,
    LivenessTimeoutError,
    RestartError,
    RestarterError,
    StepError,
)
from .liveness import probe_host, wait_for_restart
from .logging_setup import fields, log
from .protocol import FORM_CONTENT_TYPE, Protocol, get_protocol
from .session import base_url, build_session, endpoint


class State(enum.Enum):
    INIT = "init"
    SECRET_FETCHED = "secret_fetched"
    AUTHENTICATED = "authenticated"
    RESTART_SUBMITTED = "restart_submitted"
    VERIFIED = "verified"
    TIMED_OUT = "timed_out"
    FAILED = "failed"


class Restarter:
    """
    Restart a Tilgin router through its web UI.

    *session_factory* and *probe* exist so tests can substitute a fake
    transport; by default a fresh requests.Session and ``probe_host`` are
    used.
    """

    def __init__(
        self,
        config: RouterConfig,
        protocol: Protocol | None = None,
        session_factory: Callable[..., requests.Session] = build_session,
        probe: Callable[[], bool] | None = None,
        liveness_timeout: float | None = None,
        poll_interval: float = POLL_INTERVAL,
    ) -> None:
        self.config = config
        self.protocol = protocol or get_protocol(config.variant)
        self.host = base_url(config.host)
        self.session_factory = session_factory
        self.probe = probe or (lambda: probe_host(self.host, verify_ssl=config.verify_ssl))
        self.liveness_timeout = (
            config.liveness_timeout if liveness_timeout is None else liveness_timeout
        )
        self.poll_interval = poll_interval

        self.state = State.INIT
        self.session: requests.Session | None = None
        self.hmac_secret: bytes = b""
        self.form_token: str = ""

    # ------------------------------------------------------------------
    # Steps
    # ------------------------------------------------------------------

    def initialize_session(self) -> None:
        self.session = self.session_factory(verify_ssl=self.config.verify_ssl)

    def fetch_secret(self) -> bytes:
        log.info("Fetching HMAC secret", extra=fields(host=self.host))
        try:
            resp = self._session().get(self.host, timeout=REQUEST_TIMEOUT)
            body = resp.text
        except requests.RequestException as exc:
            raise FetchError(f"failed to get index page: {exc}") from exc

        self.hmac_secret = extract_hmac_secret(body)
        log.debug("HMAC secret: %s", self.hmac_secret.decode("utf-8"))
        self.state = State.SECRET_FETCHED
        return self.hmac_secret

    def authenticate(self) -> None:
        if self.state is not State.SECRET_FETCHED or not self.hmac_secret:
            raise AuthError("hmac secret has not been fetched")

        log.info("Authenticating", extra=fields(user=self.config.username))
        self.form_token = submit_login(
            self._session(),
            self.host,
            self.config.username,
            self.config.password,
            self.hmac_secret,
            self.protocol,
        )
        self.state = State.AUTHENTICATED

    def submit_restart(self) -> None:
        if self.state is not State.AUTHENTICATED:
            raise RestartError("not authenticated")

        url = endpoint(self.host, self.protocol.restart_path)
        log.info("Restarting", extra=fields(url=url))
        try:
            resp = self._session().post(
                url,
                data=self.protocol.restart_form(self.form_token),
                headers={"Content-Type": FORM_CONTENT_TYPE},
                timeout=REQUEST_TIMEOUT,
            )
        except requests.RequestException as exc:
            raise RestartError(f"restart request failed: {exc}") from exc

        if not is_success(resp):
            log.error("Restart failed: %s", resp.text, extra=fields(status=resp.status_code, url=url))
            raise RestartError(f"restart rejected with HTTP {resp.status_code}")
        self.state = State.RESTART_SUBMITTED

    def await_liveness(
        self,
        timeout: float | None = None,
        poll_interval: float | None = None,
        **wait_kwargs,
    ) -> float:
        if self.state is not State.RESTART_SUBMITTED:
            raise RestartError("restart has not been submitted")

        try:
            downtime = wait_for_restart(
                self.probe,
                timeout=self.liveness_timeout if timeout is None else timeout,
                poll_interval=self.poll_interval if poll_interval is None else poll_interval,
                **wait_kwargs,
            )
        except LivenessTimeoutError:
            self.state = State.TIMED_OUT
            raise
        self.state = State.VERIFIED
        return downtime

    # ------------------------------------------------------------------
    # Sequence
    # ------------------------------------------------------------------

    def run(self) -> float:
        """
        Run every step in order and return the router downtime in seconds.

        Raises StepError naming the step that failed; the original error is
        available as ``.cause`` (and ``__cause__``).
        """
        log.info("Starting restart, fetching secrets")
        steps = (
            ("initialise session", self.initialize_session),
            ("fetch hmac secret", self.fetch_secret),
            ("login", self.authenticate),
            ("restart", self.submit_restart),
            ("check if router came back up", self.await_liveness),
        )
        result = None
        try:
            for name, step in steps:
                try:
                    result = step()
                except RestarterError as exc:
                    if self.state is not State.TIMED_OUT:
                        self.state = State.FAILED
                    log.error("Failed to %s", name, extra=fields(error=exc))
                    raise StepError(name, exc) from exc
        finally:
            self.close()
        return result

    def close(self) -> None:
        if self.session is not None:
            self.session.close()
            self.session = None

    def _session(self) -> requests.Session:
        if self.session is None:
            self.initialize_session()
        return self.session
