import json
import logging

import httpx
import pytest

from core.transport import REQUEST_TIMEOUT, Transport, TransportError


def test_default_timeout_is_thirty_seconds(config):
    transport = Transport(config)
    try:
        assert transport.timeout == REQUEST_TIMEOUT == 30.0
    finally:
        transport.close()


def test_requests_carry_bearer_and_json_headers(make_transport, config):
    transport, handler = make_transport(lambda r: httpx.Response(200, json={"ok": True}))
    with transport:
        assert transport.get("/platform/1.0.0/users/current-user") == {"ok": True}

    request = handler.last
    assert str(request.url) == f"{config.base_url}/platform/1.0.0/users/current-user"
    assert request.headers["Authorization"] == f"Bearer {config.token}"
    assert request.headers["Content-Type"] == "application/json"


def test_post_sends_query_and_json_body(make_transport):
    transport, handler = make_transport(lambda r: httpx.Response(200, json=[]))
    with transport:
        transport.post("/things", params={"page": 0, "size": 8}, json={"creators": []})

    request = handler.last
    assert request.method == "POST"
    assert request.url.params["page"] == "0"
    assert request.url.params["size"] == "8"
    assert json.loads(request.content) == {"creators": []}


def test_empty_body_decodes_to_none(make_transport):
    transport, _ = make_transport(lambda r: httpx.Response(200))
    with transport:
        assert transport.get("/empty") is None


def test_http_error_carries_diagnostics(make_transport, caplog):
    transport, _ = make_transport(
        lambda r: httpx.Response(401, json={"error": "invalid_token"}),
    )
    with transport, caplog.at_level(logging.ERROR, logger="core.transport"):
        with pytest.raises(TransportError) as excinfo:
            transport.get("/platform/1.0.0/users/current-user")

    error = excinfo.value
    assert error.status_code == 401
    assert error.status_text == "Unauthorized"
    assert "invalid_token" in error.body
    assert error.url.endswith("/platform/1.0.0/users/current-user")
    assert "401" in error.message
    assert "XAPIHub API error" in caplog.text
    assert "status=401" in caplog.text


def test_server_error_is_transport_error(make_transport):
    transport, _ = make_transport(lambda r: httpx.Response(503, text="down"))
    with transport, pytest.raises(TransportError) as excinfo:
        transport.get("/anything")
    assert excinfo.value.status_code == 503
    assert excinfo.value.body == "down"


def test_timeout_is_reported_as_timeout(make_transport):
    def respond(request):
        raise httpx.ReadTimeout("read timed out", request=request)

    transport, _ = make_transport(respond)
    with transport, pytest.raises(TransportError) as excinfo:
        transport.get("/slow")

    assert excinfo.value.status_code is None
    assert "timeout" in excinfo.value.message
    assert excinfo.value.url.endswith("/slow")


def test_network_failure_is_transport_error(make_transport):
    def respond(request):
        raise httpx.ConnectError("connection refused", request=request)

    transport, _ = make_transport(respond)
    with transport, pytest.raises(TransportError) as excinfo:
        transport.get("/down")

    assert excinfo.value.status_code is None
    assert "connection refused" in excinfo.value.message


def test_malformed_json_is_transport_error(make_transport, caplog):
    transport, _ = make_transport(lambda r: httpx.Response(200, text="<html>oops</html>"))
    with transport, caplog.at_level(logging.ERROR, logger="core.transport"):
        with pytest.raises(TransportError) as excinfo:
            transport.get("/html")

    assert excinfo.value.status_code is None
    assert excinfo.value.message.startswith("Malformed JSON")
    assert excinfo.value.body == "<html>oops</html>"
    assert "Malformed JSON" in caplog.text
