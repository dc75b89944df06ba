"""Tests for minihttp.models module."""

import threading

import pytest
from minihttp.connection import RawResponse
from minihttp.models import Response


class TestResponseAttributes:
    """Tests for basic Response attributes."""

    def test_code_from_string(self):
        resp = Response("404", "")
        assert resp.code == 404
        assert isinstance(resp.code, int)

    def test_body_kept_verbatim(self):
        resp = Response(200, '{"test": true}')
        assert resp.body == '{"test": true}'

    def test_headers_map_to_lists(self):
        resp = Response(200, "", {"content-type": ["application/json"]})
        assert resp.headers == {"content-type": ["application/json"]}

    def test_headers_default_empty(self):
        assert Response(200, "").headers == {}

    def test_text_for_absent_body(self):
        assert Response(204, None).text == ""

    def test_repr(self):
        assert repr(Response(201, "")) == "<Response [201]>"


class TestStatusPredicates:
    """Tests for success/client_error/server_error."""

    @pytest.mark.parametrize("code", range(200, 300))
    def test_all_2xx_are_success(self, code):
        resp = Response(str(code), "")
        assert resp.success is True
        assert resp.client_error is False
        assert resp.server_error is False

    @pytest.mark.parametrize("code", [400, 401, 403, 404, 422, 429, 499])
    def test_4xx_are_client_errors(self, code):
        resp = Response(str(code), "")
        assert resp.client_error is True
        assert resp.success is False
        assert resp.server_error is False

    @pytest.mark.parametrize("code", [500, 501, 502, 503, 504, 599])
    def test_5xx_are_server_errors(self, code):
        resp = Response(str(code), "")
        assert resp.server_error is True
        assert resp.success is False
        assert resp.client_error is False

    @pytest.mark.parametrize("code", [100, 101, 301, 302, 304, 399])
    def test_informational_and_redirects_match_nothing(self, code):
        resp = Response(code, "")
        assert not (resp.success or resp.client_error or resp.server_error)


class TestResponseJson:
    """Tests for the cached json property."""

    def test_parses_object(self):
        assert Response(200, '{"success": true}').json == {"success": True}

    def test_parses_array(self):
        resp = Response(200, '[{"id": 1}, {"id": 2}]')
        assert resp.json == [{"id": 1}, {"id": 2}]

    def test_parses_scalar(self):
        assert Response(200, "42").json == 42

    def test_invalid_json_returns_none(self):
        assert Response(200, "invalid json").json is None

    @pytest.mark.parametrize("body", ["", None])
    def test_empty_body_skips_parser(self, mocker, body):
        loads = mocker.patch("minihttp.models.json.loads")
        assert Response(200, body).json is None
        loads.assert_not_called()

    def test_deeply_nested_json_returns_none(self):
        """Nesting past the interpreter's recursion limit counts as a parse failure."""
        resp = Response(200, "[" * 100000)
        assert resp.json is None
        assert resp.json is None

    def test_recursion_error_is_cached(self, mocker):
        loads = mocker.patch("minihttp.models.json.loads", side_effect=RecursionError)
        resp = Response(200, "[[[")
        assert resp.json is None
        assert resp.json is None
        loads.assert_called_once_with("[[[")

    def test_invalid_json_invokes_parser_once(self, mocker):
        loads = mocker.patch("minihttp.models.json.loads", side_effect=ValueError("bad"))
        resp = Response(200, "invalid json")
        assert resp.json is None
        assert resp.json is None
        loads.assert_called_once_with("invalid json")

    def test_json_is_cached(self, mocker):
        loads = mocker.patch("minihttp.models.json.loads", return_value={"cached": True})
        resp = Response(200, '{"test": true}')
        first = resp.json
        second = resp.json
        assert first is second
        assert first == {"cached": True}
        loads.assert_called_once()

    def test_concurrent_first_access_parses_once(self, mocker):
        barrier = threading.Barrier(8)
        calls = []

        def slow_loads(text):
            calls.append(text)
            return {"ok": True}

        mocker.patch("minihttp.models.json.loads", side_effect=slow_loads)
        resp = Response(200, '{"ok": true}')
        results = []

        def read():
            barrier.wait()
            results.append(resp.json)

        threads = [threading.Thread(target=read) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(calls) == 1
        assert results == [{"ok": True}] * 8


class TestResponseWrap:
    """Tests for Response.wrap."""

    def test_wrap_raw_response(self, raw_json_response):
        resp = Response.wrap(raw_json_response)
        assert resp.code == 200
        assert resp.reason == "OK"
        assert resp.body == '{"test": true}'
        assert resp.headers == {"content-type": ["application/json"]}
        assert resp.json == {"test": True}

    def test_wrap_groups_repeated_headers(self):
        raw = RawResponse(200, "OK", "1.1", [("Set-Cookie", "a=1"), ("Set-Cookie", "b=2")], b"")
        assert Response.wrap(raw).headers == {"set-cookie": ["a=1", "b=2"]}

    def test_wrap_respects_charset(self):
        raw = RawResponse(
            200, "OK", "1.1",
            [("Content-Type", "text/plain; charset=latin-1")],
            "Hëllo".encode("latin-1"),
        )
        assert Response.wrap(raw).body == "Hëllo"

    def test_wrap_unknown_charset_falls_back_to_utf8(self):
        raw = RawResponse(
            200, "OK", "1.1", [("Content-Type", "text/plain; charset=bogus")], b"Hello"
        )
        assert Response.wrap(raw).body == "Hello"

    def test_wrap_lower_cases_mapping_headers(self, mocker):
        raw = mocker.Mock(spec=["status", "body", "headers"])
        raw.status = 200
        raw.body = "Hëllo".encode("latin-1")
        raw.headers = {
            "Content-Type": ["text/plain; charset=latin-1"],
            "X-Trace": "abc",
            "x-trace": ["def"],
        }
        resp = Response.wrap(raw)
        assert resp.headers == {
            "content-type": ["text/plain; charset=latin-1"],
            "x-trace": ["abc", "def"],
        }
        assert resp.body == "Hëllo"

    def test_wrap_duck_typed_response(self, mocker):
        raw = mocker.Mock(spec=["status", "body", "headers"])
        raw.status = "500"
        raw.body = "oops"
        raw.headers = {"content-type": ["text/plain"]}
        resp = Response.wrap(raw)
        assert resp.server_error is True
        assert resp.body == "oops"
        assert resp.reason == ""
