"""
Tests for cookie scoping and the session cookie round-trip through a router.
"""

import http.client
import http.cookiejar
import io
import threading
import unittest
import urllib.parse
import urllib.request
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from unittest.mock import MagicMock

from tilgin_restart.config import RouterConfig
from tilgin_restart.restarter import Restarter, State
from tilgin_restart.session import build_cookie_policy, build_session, is_public_suffix


class _FakeResponse:
    """Minimal urllib response carrying Set-Cookie headers."""

    def __init__(self, *set_cookies):
        raw = "".join(f"Set-Cookie: {c}\r\n" for c in set_cookies) + "\r\n"
        self._headers = http.client.parse_headers(io.BytesIO(raw.encode("latin-1")))

    def info(self):
        return self._headers


def _stored(url, *set_cookies):
    jar = http.cookiejar.CookieJar(policy=build_cookie_policy())
    jar.extract_cookies(_FakeResponse(*set_cookies), urllib.request.Request(url))
    return sorted((c.name, c.domain) for c in jar)


class TestIsPublicSuffix(unittest.TestCase):
    def test_icann_suffixes(self):
        self.assertTrue(is_public_suffix("com"))
        self.assertTrue(is_public_suffix("co.uk"))

    def test_private_suffix(self):
        self.assertTrue(is_public_suffix("github.io"))

    def test_leading_dot_ignored(self):
        self.assertTrue(is_public_suffix(".github.io"))

    def test_registrable_domains(self):
        self.assertFalse(is_public_suffix("example.com"))
        self.assertFalse(is_public_suffix("a.github.io"))

    def test_ip_address(self):
        self.assertFalse(is_public_suffix("192.168.1.1"))


class TestCookiePolicy(unittest.TestCase):
    def test_public_suffix_domain_rejected(self):
        self.assertEqual(_stored("http://a.github.io/", "x=1; Domain=.github.io"), [])

    def test_icann_suffix_domain_rejected(self):
        self.assertEqual(_stored("http://router.example.co.uk/", "x=1; Domain=.co.uk"), [])

    def test_registrable_domain_accepted(self):
        self.assertEqual(
            _stored("http://router.example.com/", "x=1; Domain=.example.com"),
            [("x", ".example.com")],
        )

    def test_host_only_cookie_under_suffix_accepted(self):
        self.assertEqual(
            _stored("http://a.github.io/", "sid=abc; Path=/"),
            [("sid", "a.github.io")],
        )

    def test_router_ip_cookie_accepted(self):
        self.assertEqual(
            _stored("http://192.168.1.1/", "sid=abc; Path=/"),
            [("sid", "192.168.1.1")],
        )

    def test_cookie_path_not_restricted_to_request_path(self):
        self.assertEqual(
            _stored("http://192.168.1.1/tools/restart", "sid=abc; Path=/status"),
            [("sid", "192.168.1.1")],
        )


LOGIN_PAGE = '<script>f.__hash.value = hmac(f.__pass.value, "abc123");</script>'
POST_LOGIN_PAGE = '<input type=hidden name="__formtok" value="tok99">'


class _RouterHandler(BaseHTTPRequestHandler):
    """Sets ``lang`` on the login page and ``sid`` on a successful login."""

    def log_message(self, format, *args):
        pass

    def _reply(self, body, cookie=None):
        data = body.encode("utf-8")
        self.send_response(200)
        self.send_header("Content-Type", "text/html")
        self.send_header("Content-Length", str(len(data)))
        if cookie:
            self.send_header("Set-Cookie", cookie)
        self.end_headers()
        self.wfile.write(data)

    def do_GET(self):
        self.server.requests.append(("GET", self.path, self.headers.get("Cookie")))
        self._reply(LOGIN_PAGE, cookie="lang=en; Path=/")

    def do_POST(self):
        length = int(self.headers.get("Content-Length", 0))
        form = urllib.parse.parse_qs(self.rfile.read(length).decode("utf-8"))
        self.server.requests.append(("POST", self.path, self.headers.get("Cookie")))
        if form.get("__auth") == ["login"]:
            self._reply(POST_LOGIN_PAGE, cookie="sid=xyz; Path=/")
        else:
            self._reply("Restarting...")


class TestSessionCookieRoundTrip(unittest.TestCase):
    def setUp(self):
        self.server = ThreadingHTTPServer(("127.0.0.1", 0), _RouterHandler)
        self.server.requests = []
        self.thread = threading.Thread(target=self.server.serve_forever, daemon=True)
        self.thread.start()
        self.host = f"http://127.0.0.1:{self.server.server_address[1]}"

    def tearDown(self):
        self.server.shutdown()
        self.server.server_close()
        self.thread.join(timeout=5)

    def _session_factory(self, **kwargs):
        session = build_session(**kwargs)
        session.trust_env = False
        return session

    def test_router_cookies_sent_with_restart(self):
        config = RouterConfig(username="alice", password="s3cret", host=self.host)
        restarter = Restarter(
            config,
            session_factory=self._session_factory,
            probe=MagicMock(side_effect=[False, True]),
            poll_interval=0.0,
        )
        restarter.run()

        self.assertIs(restarter.state, State.VERIFIED)
        requests_seen = self.server.requests
        self.assertEqual(
            [(method, path) for method, path, _ in requests_seen],
            [("GET", "/"), ("POST", "/"), ("POST", "/tools/restart")],
        )
        self.assertIsNone(requests_seen[0][2])
        self.assertEqual(requests_seen[1][2], "lang=en")
        restart_cookies = sorted(requests_seen[2][2].split("; "))
        self.assertEqual(restart_cookies, ["lang=en", "sid=xyz"])


if __name__ == "__main__":
    unittest.main()
