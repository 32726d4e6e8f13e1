import json
from collections.abc import Callable

import httpx
import pytest

from raptor.exceptions import APIError, MalformedResponseError, NetworkError
from raptor.transport.http_transport import HttpTransport

BASE_URL = "https://api.raptordata.dev"


def _make_transport(handler: Callable[[httpx.Request], httpx.Response]) -> HttpTransport:
    client = httpx.Client(base_url=BASE_URL, transport=httpx.MockTransport(handler))
    return HttpTransport(api_key="rk_test", base_url=BASE_URL, timeout_seconds=5, client=client)


class TestSuccess:
    def test_returns_decoded_json(self) -> None:
        transport = _make_transport(lambda request: httpx.Response(200, json={"ok": True}))

        assert transport.send("GET", "/api/documents", context="List documents") == {"ok": True}

    def test_sends_bearer_token(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={})

        _make_transport(handler).send("GET", "/api/documents", context="List documents")

        assert seen[0].headers["Authorization"] == "Bearer rk_test"

    def test_sends_query_parameters(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=[])

        _make_transport(handler).send(
            "GET", "/api/documents", context="List documents", query={"limit": "5", "offset": "0"}
        )

        assert seen[0].url.params["limit"] == "5"
        assert seen[0].url.params["offset"] == "0"

    def test_sends_json_body(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={})

        _make_transport(handler).send(
            "PUT", "/api/x", context="Update", json_body={"version_number": 2}
        )

        assert json.loads(seen[0].content) == {"version_number": 2}

    def test_sends_multipart_upload(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            request.read()
            seen.append(request)
            return httpx.Response(200, json={})

        _make_transport(handler).send(
            "POST",
            "/api/documents",
            context="Upload",
            data={"chunk_size": "256"},
            files={"file": ("a.pdf", b"%PDF", "application/pdf")},
        )

        assert seen[0].headers["Content-Type"].startswith("multipart/form-data")
        assert b'name="chunk_size"' in seen[0].content
        assert b'filename="a.pdf"' in seen[0].content

    def test_no_body_expected_returns_none(self) -> None:
        transport = _make_transport(lambda request: httpx.Response(204))

        assert (
            transport.send("DELETE", "/api/x/cancel", context="Cancel", expect_body=False) is None
        )


class TestErrorClassification:
    def test_non_success_with_detail(self) -> None:
        transport = _make_transport(
            lambda request: httpx.Response(404, json={"detail": "Variant not found"})
        )

        with pytest.raises(APIError) as exc_info:
            transport.send("GET", "/api/x", context="Status check")

        assert exc_info.value.status_code == 404
        assert exc_info.value.body == {"detail": "Variant not found"}
        assert str(exc_info.value) == "Status check failed: Variant not found"

    def test_non_success_without_json_uses_reason(self) -> None:
        transport = _make_transport(lambda request: httpx.Response(503, text="<html>down</html>"))

        with pytest.raises(APIError) as exc_info:
            transport.send("GET", "/api/x", context="Upload")

        assert exc_info.value.status_code == 503
        assert exc_info.value.body == {}
        assert str(exc_info.value) == "Upload failed: Service Unavailable"

    def test_malformed_json_on_success(self) -> None:
        transport = _make_transport(lambda request: httpx.Response(200, text="{not json"))

        with pytest.raises(MalformedResponseError, match="Failed to parse Status check response"):
            transport.send("GET", "/api/x", context="Status check")

    def test_connection_error_becomes_network_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(NetworkError, match="Network error during Upload"):
            _make_transport(handler).send("POST", "/api/documents", context="Upload")

    def test_timeout_becomes_network_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        with pytest.raises(NetworkError):
            _make_transport(handler).send("GET", "/api/x", context="Status check")

    def test_undecodable_body_becomes_network_error(self) -> None:
        transport = _make_transport(
            lambda request: httpx.Response(
                200, headers={"Content-Encoding": "gzip"}, content=b"not gzip"
            )
        )

        with pytest.raises(NetworkError, match="Network error during Status check"):
            transport.send("GET", "/api/x", context="Status check")


class TestClose:
    def test_close_closes_client(self) -> None:
        client = httpx.Client(base_url=BASE_URL, transport=httpx.MockTransport(lambda r: httpx.Response(200)))
        transport = HttpTransport(api_key="k", base_url=BASE_URL, timeout_seconds=5, client=client)

        transport.close()

        assert client.is_closed
