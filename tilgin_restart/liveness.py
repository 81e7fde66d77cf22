"""
Liveness polling after a restart has been submitted.

A restart is only confirmed once the router has been seen *down* and then
*up* again.  A router that keeps answering is assumed not to have started
its reboot yet, so polling carries on until the overall deadline.
"""

import threading
import time
from typing import Callable

import requests

from .config import LIVENESS_TIMEOUT, POLL_INTERVAL, PROBE_TIMEOUT
from .errors import LivenessTimeoutError
from .logging_setup import fields, log


def probe_host(url: str, timeout: float = PROBE_TIMEOUT, verify_ssl: bool = True) -> bool:
    """
    Return True if *url* answers with any HTTP response.

    Uses a one-off request outside the authenticated session and a short
    timeout so an unreachable router cannot stall the poll loop.
    """
    try:
        resp = requests.get(url, timeout=timeout, verify=verify_ssl)
    except requests.RequestException as exc:
        log.info("Failed to reach router host", extra=fields(error=exc))
        return False
    resp.close()
    return True


def wait_for_restart(
    probe: Callable[[], bool],
    timeout: float = LIVENESS_TIMEOUT,
    poll_interval: float = POLL_INTERVAL,
    clock: Callable[[], float] = time.monotonic,
    wait: Callable[[float], object] | None = None,
) -> float:
    """
    Probe once per *poll_interval* until a down → up transition is observed.

    Between probes the loop blocks on ``wait(seconds)`` until the next tick
    or the deadline, whichever comes first; the default is
    ``threading.Event().wait``.  Tests inject a fake *clock* and *wait*.

    Returns the observed downtime in seconds (first failed probe to first
    successful probe after it).  Raises LivenessTimeoutError if the deadline
    passes without a complete transition.
    """
    if wait is None:
        wait = threading.Event().wait

    start = clock()
    deadline = start + timeout
    next_tick = start + poll_interval
    first_down: float | None = None
    attempt = 0

    log.info(
        "Waiting for router to restart",
        extra=fields(timeout=f"{timeout:g}s", interval=f"{poll_interval:g}s"),
    )

    while True:
        now = clock()
        if now >= deadline:
            break
        wait(max(0.0, min(next_tick, deadline) - now))
        now = clock()
        if now >= deadline:
            break

        attempt += 1
        reachable = probe()
        next_tick = max(next_tick + poll_interval, clock())

        if not reachable:
            if first_down is None:
                first_down = clock()
                log.info("Router went down", extra=fields(attempt=attempt))
            continue

        if first_down is not None:
            downtime = clock() - first_down
            log.info(
                "Router has come back up after %.1fs", downtime,
                extra=fields(attempt=attempt),
            )
            return downtime

        log.info("Router is reachable", extra=fields(attempt=attempt))

    raise LivenessTimeoutError(timeout, drop_seen=first_down is not None)
