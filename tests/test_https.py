from unittest import mock

import pytest

from hashtab.https import (
    HttpRequest,
    HttpRequestError,
    HttpResponse,
    check_reply,
    do_https,
)


def test_check_reply_returns_body_on_success():
    assert check_reply(HttpResponse(200, "[1, 2]")) == "[1, 2]"


def test_check_reply_raises_with_status_and_body():
    with pytest.raises(HttpRequestError) as info:
        check_reply(HttpResponse(404, "not here"))
    assert "HTTP Status 404 received" in str(info.value)
    assert "not here" in str(info.value)


def test_do_https_sends_request_and_reads_reply():
    request = HttpRequest(
        server_name="api.example.com",
        uri="/items",
        method="POST",
        user_agent="tester",
        headers={"Content-Type": "application/json"},
        body=b"{}",
    )
    with mock.patch("http.client.HTTPSConnection") as connection_class:
        connection = connection_class.return_value
        connection.getresponse.return_value.status = 201
        connection.getresponse.return_value.read.return_value = b"created"
        response = do_https(request)

    assert response == HttpResponse(201, "created")
    assert connection_class.call_args.args[:2] == ("api.example.com", 443)
    args, kwargs = connection.request.call_args
    assert args == ("POST", "/items")
    assert kwargs["body"] == b"{}"
    assert kwargs["headers"]["User-Agent"] == "tester"
    assert kwargs["headers"]["Content-Type"] == "application/json"
    assert connection.close.called


def test_do_https_without_body_sends_none():
    with mock.patch("http.client.HTTPSConnection") as connection_class:
        connection = connection_class.return_value
        connection.getresponse.return_value.status = 200
        connection.getresponse.return_value.read.return_value = b""
        response = do_https(HttpRequest(server_name="api.example.com", uri="/"))
    assert response.body == ""
    assert connection.request.call_args.kwargs["body"] is None


def test_do_https_wraps_connection_errors():
    with mock.patch("http.client.HTTPSConnection") as connection_class:
        connection = connection_class.return_value
        connection.request.side_effect = OSError("unreachable")
        with pytest.raises(HttpRequestError, match="unreachable"):
            do_https(HttpRequest(server_name="api.example.com", uri="/"))
        assert connection.close.called