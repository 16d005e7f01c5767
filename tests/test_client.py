"""
Tests for the HTTPClient pipeline.
Logic testing: cookie merge, listener ordering, cancellation, retry, redirect.
"""
import pytest

from conftest import FakeTransport, raw

from http_kit.body import text_body
from http_kit.config import ClientConfig
from http_kit.cookies import CookieManager, no_cookie_manager
from http_kit.core.client import HTTPClient, redirect_request, resolve_location
from http_kit.errors import (
    HTTPConnectionException,
    HTTPRequestCancelledException,
    HTTPTimeoutException,
    HTTPUnknownException,
    MalformedHTTPURLException,
    TooManyRedirectsException,
    TooManyRetriesException,
)
from http_kit.listeners import Cancelled, RequestListener, ResponseListener
from http_kit.request import HTTPRequest
from http_kit.response import HTTPResponse
from http_kit.types import Method


def always(message):
    return True


class TestConstruction:
    """Tests for client construction."""

    def test_defaults(self, fake_transport):
        client = HTTPClient(transport=fake_transport)
        assert client.user_agent == "HttpKit HTTP Client"
        assert client.listeners == []

    def test_invalid_config(self):
        with pytest.raises(ValueError, match="user_agent is required"):
            HTTPClient(ClientConfig(user_agent=" "))

    def test_listener_list_is_shared(self, fake_transport):
        listeners = []
        client = HTTPClient(ClientConfig(listeners=listeners), transport=fake_transport)
        listener = RequestListener(condition=always)
        listeners.append(listener)
        assert client.listeners[0] is listener

    def test_closed_client_rejects_requests(self, make_client, fake_transport):
        client = make_client()
        client.close()
        assert fake_transport.closed is True
        with pytest.raises(RuntimeError, match="Client has been closed"):
            client.send(HTTPRequest("http://example.com/"))

    def test_context_manager_closes(self, make_client, fake_transport):
        with make_client():
            pass
        assert fake_transport.closed is True


class TestSendBasics:
    """Tests for a plain round trip."""

    def test_returns_response(self, make_client, fake_transport):
        fake_transport.queue(raw(status=200, url="http://example.com/", content=b"hi"))
        response = make_client().send(HTTPRequest("http://example.com/"))

        assert response.status == 200
        assert response.body.text == "hi"
        assert len(fake_transport.sent) == 1

    def test_user_agent_sent(self, make_client, fake_transport):
        make_client(user_agent="crawler/2").send(HTTPRequest("http://example.com/"))
        assert fake_transport.header_values(0, "user-agent") == ["crawler/2"]

    def test_user_agent_attribute_is_mutable(self, make_client, fake_transport):
        client = make_client()
        client.user_agent = "changed/1"
        client.send(HTTPRequest("http://example.com/"))
        assert fake_transport.header_values(0, "user-agent") == ["changed/1"]

    def test_convenience_methods(self, make_client, fake_transport):
        client = make_client()
        client.post("http://example.com/items", query={"a": "1"})
        client.head("http://example.com/items")

        assert fake_transport.sent[0].method == "POST"
        assert fake_transport.sent[0].url == "http://example.com/items?a=1"
        assert fake_transport.sent[1].method == "HEAD"

    def test_string_method_accepted(self, make_client, fake_transport):
        make_client().request("delete", "http://example.com/x")
        assert fake_transport.sent[0].method == "DELETE"

    def test_hostless_url_fails_before_transport(self, make_client, fake_transport):
        with pytest.raises(MalformedHTTPURLException):
            make_client().send(HTTPRequest("/relative"))
        assert fake_transport.sent == []


class LiveBucketCookieManager(CookieManager):
    """Cookie manager whose get returns its internal dict."""

    def __init__(self):
        self._store = {}

    def set(self, site, cookies):
        self._store.setdefault(site, {}).update(cookies)

    def get(self, site):
        return self._store.setdefault(site, {})

    def remove(self, site, names):
        for name in names:
            self._store.get(site, {}).pop(name, None)


class TestCookies:
    """Tests for cookie merge and persistence."""

    def test_store_cookies_merged_into_request(self, make_client, cookie_manager, fake_transport):
        cookie_manager.set("example.com", {"a": "store", "b": "store"})
        request = HTTPRequest("http://example.com/", cookies={"b": "request"})

        make_client().send(request)

        assert request.cookies == {"a": "store", "b": "request"}
        assert fake_transport.header_values(0, "cookie") == ["a=store; b=request"]

    def test_other_site_cookies_not_sent(self, make_client, cookie_manager, fake_transport):
        cookie_manager.set("other.com", {"a": "1"})
        make_client().send(HTTPRequest("http://example.com/"))
        assert fake_transport.header_values(0, "cookie") == []

    def test_response_cookies_persisted(self, make_client, cookie_manager, fake_transport):
        cookie_manager.set("example.com", {"b": "old"})
        fake_transport.queue(raw(
            url="http://example.com/login",
            headers=[("Set-Cookie", "a=1; Path=/"), ("Set-Cookie", "b=; Path=/")],
        ))

        make_client().send(HTTPRequest("http://example.com/login"))

        assert cookie_manager.get("example.com") == {"a": "1"}

    def test_persisted_cookies_sent_next_time(self, make_client, fake_transport):
        client = make_client()
        fake_transport.queue(raw(url="http://example.com/", headers=[("Set-Cookie", "sid=42")]))

        client.send(HTTPRequest("http://example.com/"))
        client.send(HTTPRequest("http://example.com/other"))

        assert fake_transport.header_values(1, "cookie") == ["sid=42"]

    def test_cookies_persisted_before_response_listeners(self, make_client, cookie_manager, fake_transport):
        seen = []
        client = make_client(listeners=[
            ResponseListener(condition=always, action=lambda r: seen.append(cookie_manager.get("example.com"))),
        ])
        fake_transport.queue(raw(url="http://example.com/", headers=[("Set-Cookie", "sid=1")]))

        client.send(HTTPRequest("http://example.com/"))
        assert seen == [{"sid": "1"}]

    def test_cookies_persisted_even_when_response_cancelled(self, make_client, cookie_manager, fake_transport):
        client = make_client(listeners=[ResponseListener(condition=always, cancel=True)])
        fake_transport.queue(raw(url="http://example.com/", headers=[("Set-Cookie", "sid=1")]))

        with pytest.raises(HTTPRequestCancelledException):
            client.send(HTTPRequest("http://example.com/"))
        assert cookie_manager.get("example.com") == {"sid": "1"}

    def test_no_cookie_manager(self, make_client, fake_transport):
        client = make_client(cookie_manager=no_cookie_manager)
        fake_transport.queue(raw(url="http://example.com/", headers=[("Set-Cookie", "sid=1")]))

        client.send(HTTPRequest("http://example.com/"))
        client.send(HTTPRequest("http://example.com/"))

        assert fake_transport.header_values(1, "cookie") == []

    def test_manager_bucket_not_modified_by_request_cookies(self, fake_transport):
        manager = LiveBucketCookieManager()
        manager.set("example.com", {"sid": "1"})
        client = HTTPClient(ClientConfig(cookie_manager=manager), transport=fake_transport)

        client.send(HTTPRequest("http://example.com/", cookies={"x": "1"}))

        assert manager.get("example.com") == {"sid": "1"}
        assert fake_transport.header_values(0, "cookie") == ["sid=1; x=1"]

    def test_default_manager_shared_between_clients(self, fake_transport):
        first = HTTPClient(transport=fake_transport)
        second = HTTPClient(transport=fake_transport)
        fake_transport.queue(raw(url="http://example.com/", headers=[("Set-Cookie", "sid=1")]))

        first.send(HTTPRequest("http://example.com/"))
        second.send(HTTPRequest("http://example.com/"))

        assert fake_transport.header_values(1, "cookie") == ["sid=1"]


class TestRequestListeners:
    """Tests for request interception."""

    def test_non_qualifying_listeners_have_no_effect(self, make_client, fake_transport):
        calls = []
        client = make_client(listeners=[
            RequestListener(condition=lambda r: False, cancel=True),
            ResponseListener(condition=lambda r: False, retry_after_action=True),
            RequestListener(condition=lambda r: "other" in r.url, action=calls.append),
        ])
        fake_transport.queue(raw(status=204))

        response = client.send(HTTPRequest("http://example.com/"))

        assert response.status == 204
        assert calls == []
        assert len(fake_transport.sent) == 1

    def test_action_can_mutate_request_before_send(self, make_client, fake_transport):
        client = make_client(listeners=[
            RequestListener(condition=always, action=lambda r: r.add_header("X-Token", "t")),
        ])
        client.send(HTTPRequest("http://example.com/"))
        assert fake_transport.header_values(0, "x-token") == ["t"]

    def test_action_sees_merged_cookies(self, make_client, cookie_manager):
        cookie_manager.set("example.com", {"sid": "1"})
        seen = []
        client = make_client(listeners=[
            RequestListener(condition=always, action=lambda r: seen.append(dict(r.cookies))),
        ])
        client.send(HTTPRequest("http://example.com/"))
        assert seen == [{"sid": "1"}]

    def test_cancel_prevents_transport_call(self, make_client, fake_transport):
        after = []
        client = make_client(listeners=[
            RequestListener(condition=always, cancel=True, tag="blocker"),
            RequestListener(condition=always, action=after.append),
        ])

        with pytest.raises(HTTPRequestCancelledException) as exc_info:
            client.send(HTTPRequest("http://example.com/"))

        assert fake_transport.sent == []
        assert after == []
        assert exc_info.value.outcome.tag == "blocker"
        assert "Request-Listener" in str(exc_info.value)

    def test_execute_returns_cancelled_outcome(self, make_client, fake_transport):
        client = make_client(listeners=[RequestListener(condition=always, cancel=True, id="L1")])
        outcome = client.execute(HTTPRequest("http://example.com/"))

        assert isinstance(outcome, Cancelled)
        assert outcome.listener_id == "L1"
        assert fake_transport.sent == []

    def test_action_exception_propagates(self, make_client, fake_transport):
        def boom(request):
            raise KeyError("missing")

        client = make_client(listeners=[RequestListener(condition=always, action=boom)])
        with pytest.raises(KeyError):
            client.send(HTTPRequest("http://example.com/"))
        assert fake_transport.sent == []


class TestResponseListeners:
    """Tests for response interception and retry."""

    def test_action_receives_response(self, make_client, fake_transport):
        seen = []
        client = make_client(listeners=[ResponseListener(condition=lambda r: r.status == 404, action=seen.append)])
        fake_transport.queue(raw(status=404))

        response = client.send(HTTPRequest("http://example.com/"))
        assert seen == [response]

    def test_cancel_on_response(self, make_client, fake_transport):
        client = make_client(listeners=[ResponseListener(condition=lambda r: r.status >= 500, cancel=True)])
        fake_transport.queue(raw(status=503))

        outcome = client.execute(HTTPRequest("http://example.com/"))
        assert isinstance(outcome, Cancelled)
        assert outcome.details["status"] == 503

    def test_retry_adds_exactly_one_pass(self, make_client, fake_transport):
        client = make_client(listeners=[
            ResponseListener(condition=lambda r: r.status == 401, retry_after_action=True),
        ])
        fake_transport.queue(raw(status=401), raw(status=200))

        response = client.send(HTTPRequest("http://example.com/"))

        assert response.status == 200
        assert len(fake_transport.sent) == 2

    def test_retry_reruns_request_listeners(self, make_client, fake_transport):
        request_calls = []
        client = make_client(listeners=[
            RequestListener(condition=always, action=request_calls.append),
            ResponseListener(condition=lambda r: r.status == 401, retry_after_action=True),
        ])
        fake_transport.queue(raw(status=401), raw(status=200))

        client.send(HTTPRequest("http://example.com/"))
        assert len(request_calls) == 2

    def test_retry_picks_up_refreshed_cookies(self, make_client, fake_transport):
        client = make_client(listeners=[
            ResponseListener(condition=lambda r: r.status == 401, retry_after_action=True),
        ])
        fake_transport.queue(
            raw(status=401, url="http://example.com/", headers=[("Set-Cookie", "auth=fresh")]),
            raw(status=200),
        )

        client.send(HTTPRequest("http://example.com/"))
        assert fake_transport.header_values(1, "cookie") == ["auth=fresh"]

    def test_retry_has_no_builtin_cap(self, make_client, fake_transport):
        passes = []

        def stop_after_fifty(response):
            # the test bounds the loop, not the library
            passes.append(1)
            return len(passes) <= 50

        client = make_client(listeners=[
            ResponseListener(condition=stop_after_fifty, retry_after_action=True),
        ])

        response = client.send(HTTPRequest("http://example.com/"))

        assert response.status == 200
        assert len(fake_transport.sent) == 51

    def test_retry_cap_when_configured(self, make_client, fake_transport):
        client = make_client(
            max_retries=3,
            listeners=[ResponseListener(condition=always, retry_after_action=True)],
        )
        with pytest.raises(TooManyRetriesException):
            client.send(HTTPRequest("http://example.com/"))
        assert len(fake_transport.sent) == 4


class TestTransportErrors:
    """Tests for transport failure mapping in the pipeline."""

    def test_timeout_mapped(self, make_client, fake_transport):
        fake_transport.queue(TimeoutError("timed out"))
        with pytest.raises(HTTPTimeoutException) as exc_info:
            make_client().send(HTTPRequest("http://example.com/"))
        assert isinstance(exc_info.value.cause, TimeoutError)

    def test_connection_refused_mapped(self, make_client, fake_transport):
        fake_transport.queue(ConnectionRefusedError("refused"))
        with pytest.raises(HTTPConnectionException):
            make_client().send(HTTPRequest("http://example.com/"))

    def test_unknown_failure_wrapped(self, make_client, fake_transport):
        fake_transport.queue(ValueError("weird"))
        with pytest.raises(HTTPUnknownException) as exc_info:
            make_client().send(HTTPRequest("http://example.com/"))
        assert isinstance(exc_info.value.__cause__, ValueError)

    def test_transport_errors_not_retried(self, make_client, fake_transport):
        client = make_client(listeners=[ResponseListener(condition=always, retry_after_action=True)])
        fake_transport.queue(ConnectionError("down"))
        with pytest.raises(HTTPConnectionException):
            client.send(HTTPRequest("http://example.com/"))
        assert len(fake_transport.sent) == 1


class TestRedirects:
    """Tests for redirect handling."""

    def test_relative_location_uses_path_prefix(self, make_client, fake_transport):
        fake_transport.queue(
            raw(status=301, url="http://example.com/old/path", headers=[("Location", "/new/path")]),
            raw(status=200, url="http://example.com/old/new/path"),
        )

        response = make_client().send(HTTPRequest("http://example.com/old/path"))

        assert response.status == 200
        assert fake_transport.sent[1].url == "http://example.com/old/new/path"

    def test_absolute_location_used_as_is(self, make_client, fake_transport):
        fake_transport.queue(
            raw(status=302, headers=[("Location", "https://other.org/landing")]),
            raw(status=200, url="https://other.org/landing"),
        )
        make_client().send(HTTPRequest("http://example.com/start"))
        assert fake_transport.sent[1].url == "https://other.org/landing"

    def test_redirect_is_get_without_body(self, make_client, fake_transport):
        fake_transport.queue(
            raw(status=303, headers=[("Location", "http://example.com/done")]),
            raw(status=200),
        )
        make_client().post("http://example.com/form", body=text_body("x"))

        assert fake_transport.sent[0].method == "POST"
        assert fake_transport.sent[1].method == "GET"
        assert fake_transport.sent[1].content is None

    def test_redirect_copies_sent_cookies(self, make_client, fake_transport):
        fake_transport.queue(
            raw(status=302, url="http://example.com/a", headers=[("Location", "http://other.org/b")]),
            raw(status=200, url="http://other.org/b"),
        )
        make_client().send(HTTPRequest("http://example.com/a", cookies={"sid": "1"}))
        assert fake_transport.header_values(1, "cookie") == ["sid=1"]

    def test_redirects_disabled(self, make_client, fake_transport):
        fake_transport.queue(raw(status=301, headers=[("Location", "http://example.com/b")]))
        response = make_client().send(HTTPRequest("http://example.com/a", redirects=False))

        assert response.status == 301
        assert len(fake_transport.sent) == 1

    @pytest.mark.parametrize("headers", [[], [("Location", "   ")]])
    def test_missing_or_blank_location_is_terminal(self, make_client, fake_transport, headers):
        fake_transport.queue(raw(status=302, headers=headers))
        response = make_client().send(HTTPRequest("http://example.com/a"))

        assert response.status == 302
        assert len(fake_transport.sent) == 1

    def test_non_redirect_status_is_terminal(self, make_client, fake_transport):
        fake_transport.queue(raw(status=200, headers=[("Location", "http://example.com/b")]))
        make_client().send(HTTPRequest("http://example.com/a"))
        assert len(fake_transport.sent) == 1

    def test_redirect_chain_has_no_builtin_cap(self, make_client, fake_transport):
        hops = []

        def redirect_fifty_times(wire):
            hops.append(wire.url)
            if len(hops) <= 50:
                return raw(status=302, url=wire.url, headers=[("Location", f"http://example.com/{len(hops)}")])
            return raw(status=200, url=wire.url)

        fake_transport.fallback = redirect_fifty_times
        response = make_client().send(HTTPRequest("http://example.com/0"))

        assert response.status == 200
        assert len(hops) == 51

    def test_redirect_cap_when_configured(self, make_client, fake_transport):
        fake_transport.fallback = lambda wire: raw(status=302, headers=[("Location", "http://example.com/loop")])
        with pytest.raises(TooManyRedirectsException):
            make_client(max_redirects=5).send(HTTPRequest("http://example.com/loop"))
        assert len(fake_transport.sent) == 6

    def test_listeners_apply_to_redirected_request(self, make_client, fake_transport):
        client = make_client(listeners=[
            RequestListener(condition=lambda r: r.url.endswith("/blocked"), cancel=True),
        ])
        fake_transport.queue(raw(status=302, headers=[("Location", "http://example.com/blocked")]))

        with pytest.raises(HTTPRequestCancelledException):
            client.send(HTTPRequest("http://example.com/start"))
        assert len(fake_transport.sent) == 1


class TestResolveLocation:
    """Tests for resolve_location and redirect_request."""

    @pytest.mark.parametrize("sent, location, expected", [
        ("http://example.com/old/path", "/new/path", "http://example.com/old/new/path"),
        ("http://example.com/page", "/login", "http://example.com/login"),
        ("http://example.com", "/login", "http://example.com/login"),
        ("https://example.com:8443/a/b/c", "/d", "https://example.com:8443/a/b/d"),
        ("http://example.com/a", "http://other.org/x", "http://other.org/x"),
    ])
    def test_resolution(self, sent, location, expected):
        assert resolve_location(sent, location) == expected

    def test_redirect_request_fields(self):
        sent = HTTPRequest("http://example.com/a", cookies={"c": "1"}, method=Method.PUT, timeout=10)
        response = HTTPResponse(status=307, url="http://example.com/a", headers={"location": ["/b"]})

        follow = redirect_request(sent, response)

        assert follow.url == "http://example.com/b"
        assert follow.method == Method.GET
        assert follow.redirects is True
        assert follow.cookies == {"c": "1"}
        assert follow.cookies is not sent.cookies

    def test_first_location_value_used(self):
        sent = HTTPRequest("http://example.com/a")
        response = HTTPResponse(status=301, url="x", headers={"location": ["http://one/", "http://two/"]})
        assert redirect_request(sent, response).url == "http://one/"
