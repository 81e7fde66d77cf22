"""HTTP session management for the Tilgin restart tool."""

import http.cookiejar

import requests
import tldextract
from requests.cookies import RequestsCookieJar

from .errors import SessionInitError
from .logging_setup import log

# Bundled Public Suffix List snapshot (ICANN and private sections); never
# fetched over the network and never cached to disk.
_SUFFIX_LIST = tldextract.TLDExtract(
    suffix_list_urls=(),
    cache_dir=None,
    include_psl_private_domains=True,
)


def is_public_suffix(domain: str) -> bool:
    """True if *domain* (e.g. ``co.uk``, ``github.io``) is itself a public suffix."""
    domain = domain.strip(".").lower()
    if not domain:
        return False
    parts = _SUFFIX_LIST(domain)
    return not parts.domain and parts.suffix == domain


class PublicSuffixCookiePolicy(http.cookiejar.DefaultCookiePolicy):
    """
    Refuse cookies whose Domain attribute names a public suffix.

    A host may still set a host-only cookie on a domain that happens to be a
    suffix itself (``Domain=localhost`` from ``localhost``), but never one
    shared with every other site under that suffix.
    """

    def set_ok_domain(self, cookie, request):
        if not super().set_ok_domain(cookie, request):
            return False
        if cookie.domain_specified:
            domain = cookie.domain.lstrip(".").lower()
            req_host = http.cookiejar.request_host(request).lower()
            if domain != req_host and is_public_suffix(domain):
                log.debug("Rejected cookie %s for public suffix %s", cookie.name, domain)
                return False
        return True


def build_cookie_policy() -> http.cookiejar.DefaultCookiePolicy:
    """
    Cookie policy keeping the router's cookies scoped to the router.

    Rejects Domain attributes that do not domain-match the request host,
    Domain attributes naming a public suffix, and dotted-domain cookies
    that would leak to sibling hosts.
    """
    return PublicSuffixCookiePolicy(
        strict_domain=True,
        strict_ns_domain=http.cookiejar.DefaultCookiePolicy.DomainStrictNoDots,
        strict_ns_set_initial_dollar=True,
    )


def build_session(verify_ssl: bool = True) -> requests.Session:
    """
    Return a requests.Session with a scoped cookie jar and keep-alive.

    No retry adapter is mounted: every step of the restart sequence is
    attempted exactly once.
    """
    try:
        jar = RequestsCookieJar(policy=build_cookie_policy())
    except (TypeError, ValueError) as exc:
        raise SessionInitError(f"failed to initialise cookie jar: {exc}") from exc

    session = requests.Session()
    session.cookies = jar
    session.verify = verify_ssl
    # Mimic a real browser so the router does not reject requests based on
    # User-Agent.
    session.headers.update({
        "User-Agent": (
            "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
            "AppleWebKit/537.36 (KHTML, like Gecko) "
            "Chrome/120.0.0.0 Safari/537.36"
        ),
        "Connection": "keep-alive",
    })
    return session


def base_url(host: str) -> str:
    """
    Normalise *host* to ``scheme://netloc[/path]`` without a trailing slash.

    A bare IP address or hostname is assumed to be plain HTTP, which is what
    the router serves on the LAN.
    """
    host = host.strip()
    if "://" not in host:
        host = f"http://{host}"
    return host.rstrip("/")


def endpoint(host: str, path: str) -> str:
    """Join the router base URL and a protocol path such as ``/tools/restart``."""
    if path in ("", "/"):
        return base_url(host)
    return base_url(host) + "/" + path.lstrip("/")
