"""
Tests for menu page retrieval.
"""

import httpx
import pytest

from src.koedo.errors import InvalidSourceFormat, InvalidURL
from src.koedo.fetch import ensure_url, fetch_menu_source, load_menu_source


def client_for(handler):
    return httpx.Client(transport=httpx.MockTransport(handler))


class TestFetchMenuSource:
    def test_returns_decoded_page(self):
        requested = []

        def handler(request):
            requested.append(str(request.url))
            return httpx.Response(200, content="<div title='Crème brûlée'>".encode("utf-8"))

        with client_for(handler) as client:
            text = fetch_menu_source("https://koedo.test/", client=client)

        assert text == "<div title='Crème brûlée'>"
        assert requested == ["https://koedo.test/"]

    def test_non_utf8_body(self):
        def handler(request):
            return httpx.Response(200, content="Crème".encode("latin-1"))

        with client_for(handler) as client:
            with pytest.raises(InvalidSourceFormat):
                fetch_menu_source("https://koedo.test/", client=client)

    def test_http_error_status(self):
        def handler(request):
            return httpx.Response(503, text="maintenance")

        with client_for(handler) as client:
            with pytest.raises(InvalidSourceFormat):
                fetch_menu_source("https://koedo.test/", client=client)

    def test_transport_error(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        with client_for(handler) as client:
            with pytest.raises(InvalidSourceFormat) as exc_info:
                fetch_menu_source("https://koedo.test/", client=client)

        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)

    @pytest.mark.parametrize("url", ["", "koedo.fr", "ftp://koedo.fr/menu", "http://"])
    def test_invalid_url(self, url):
        with pytest.raises(InvalidURL):
            fetch_menu_source(url)


class TestEnsureUrl:
    def test_accepts_absolute_http_url(self):
        assert ensure_url("https://koedo.fr/") == "https://koedo.fr/"

    def test_rejects_relative_url(self):
        with pytest.raises(InvalidURL):
            ensure_url("/commander")


class TestLoadMenuSource:
    def test_reads_utf8_file(self, tmp_path):
        path = tmp_path / "menu.html"
        path.write_text("<div title='Gyoza'>", encoding="utf-8")

        assert load_menu_source(path) == "<div title='Gyoza'>"

    def test_rejects_non_utf8_file(self, tmp_path):
        path = tmp_path / "menu.html"
        path.write_bytes(b"\xff\xfe\x00")

        with pytest.raises(InvalidSourceFormat):
            load_menu_source(path)
