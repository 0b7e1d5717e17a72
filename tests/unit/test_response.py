"""StoredResponse 단일 소비/복제 테스트"""

import httpx
import pytest

from eco_fridge.core.exceptions import BodyAlreadyConsumedException
from eco_fridge.offline import StoredResponse


def test_body_can_be_read_once():
    response = StoredResponse(200, body=b"hello", url="http://fridge.test/")
    assert response.read() == b"hello"
    assert response.body_used
    with pytest.raises(BodyAlreadyConsumedException):
        response.read()


def test_clone_before_read_gives_independent_copy():
    response = StoredResponse(200, {"content-type": "text/html"}, b"<html/>", "http://fridge.test/")
    copy = response.clone()

    assert copy.read() == b"<html/>"
    assert not response.body_used
    assert response.read() == b"<html/>"
    assert copy.headers == response.headers
    assert copy.headers is not response.headers


def test_clone_after_read_fails():
    response = StoredResponse(200, body=b"x")
    response.read()
    with pytest.raises(BodyAlreadyConsumedException) as exc:
        response.clone()
    assert exc.value.error_code == "BODY_CONSUMED"


@pytest.mark.parametrize("status, ok", [(200, True), (204, True), (299, True), (304, False), (404, False), (500, False)])
def test_ok_range(status, ok):
    assert StoredResponse(status).ok is ok


def test_from_httpx_drops_encoding_headers():
    request = httpx.Request("GET", "http://fridge.test/manifest.json")
    raw = httpx.Response(
        200,
        headers={"content-type": "application/json", "content-encoding": "identity"},
        content=b"{}",
        request=request,
    )
    stored = StoredResponse.from_httpx(raw)

    assert stored.status == 200
    assert stored.url == "http://fridge.test/manifest.json"
    assert stored.headers["content-type"] == "application/json"
    assert "content-encoding" not in stored.headers
    assert "content-length" not in stored.headers
    assert stored.read() == b"{}"


def test_from_httpx_without_request():
    stored = StoredResponse.from_httpx(httpx.Response(404, content=b"missing"))
    assert stored.url == ""
    assert not stored.ok


def test_to_httpx_consumes_body():
    request = httpx.Request("GET", "http://fridge.test/")
    stored = StoredResponse(200, {"content-type": "text/plain"}, b"body")
    response = stored.to_httpx(request)

    assert response.status_code == 200
    assert response.content == b"body"
    assert response.request is request
    assert stored.body_used
