"""
Tests for the command-line entry point.
"""

import io
import logging

import httpx

from src.koedo.cli import main
from src.koedo.config import get_config
from src.koedo.dispatch import Dispatcher
from src.koedo.errors import InvalidSourceFormat
from src.koedo.fetch import fetch_menu_source


def dispatcher_for(page):
    return Dispatcher(get_config(), fetch_source=lambda url: page, open_url=lambda url: True)


class TestMain:
    def test_meal_search(self, week_page, capsys):
        exit_code = main(["-m", "curry"], dispatcher=dispatcher_for(week_page))

        captured = capsys.readouterr()
        assert exit_code == 0
        assert captured.out.splitlines() == ["mardi: Curry poulet"]

    def test_empty_query_prints_usage(self, capsys):
        exit_code = main([])

        captured = capsys.readouterr()
        assert exit_code == 1
        assert "Error: No argument given" in captured.err
        assert "Usage:" in captured.err
        assert captured.out == ""

    def test_invalid_query_prints_usage(self, capsys):
        exit_code = main(["-h", "-w"])

        captured = capsys.readouterr()
        assert exit_code == 1
        assert "Usage:" in captured.err

    def test_unknown_argument(self, capsys):
        exit_code = main(["--pizza"])

        captured = capsys.readouterr()
        assert exit_code == 1
        assert "--pizza" in captured.err

    def test_fetch_failure_does_not_print_usage(self, capsys):
        def failing_fetch(url):
            raise InvalidSourceFormat(f"Unable to fetch {url}")

        dispatcher = Dispatcher(get_config(), fetch_source=failing_fetch, out=io.StringIO())
        exit_code = main(["-w"], dispatcher=dispatcher)

        captured = capsys.readouterr()
        assert exit_code == 1
        assert "Error: Unable to fetch https://koedo.test/" in captured.err
        assert "Usage:" not in captured.err

    def test_help(self, capsys):
        exit_code = main(["--help"], dispatcher=dispatcher_for(""))

        captured = capsys.readouterr()
        assert exit_code == 0
        assert captured.out.startswith("Usage: koedo")

    def test_fetch_failure_is_reported_once(self, capsys, caplog):
        def refuse(request):
            raise httpx.ConnectError("connection refused", request=request)

        def fetch(url):
            with httpx.Client(transport=httpx.MockTransport(refuse)) as client:
                return fetch_menu_source(url, client=client)

        dispatcher = Dispatcher(get_config(), fetch_source=fetch, out=io.StringIO())
        with caplog.at_level(logging.WARNING):
            exit_code = main(["-w"], dispatcher=dispatcher)

        captured = capsys.readouterr()
        assert exit_code == 1
        assert captured.err.splitlines() == [
            "Error: Unable to fetch https://koedo.test/: connection refused"
        ]
        assert [r for r in caplog.records if r.levelno >= logging.WARNING] == []
