"""Tests for CLI entrypoint."""

from __future__ import annotations

import os
from collections.abc import Iterator
from contextlib import contextmanager
from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest
import structlog
from typer.testing import CliRunner

from tests.mocks.mock_factories import FakeUpstream, make_define_payload, make_definition
from tests.mocks.mock_settings import make_settings
from urban_dict_cli.main import app
from urban_dict_core.exceptions import CacheError, UpstreamError
from urban_dict_core.models import AutocompleteSuggestion, DefinitionRecord

runner = CliRunner()


def _records(*words: str) -> list[DefinitionRecord]:
    """Build DefinitionRecords for the given words."""
    return [DefinitionRecord.model_validate(make_definition(word=w)) for w in words]


@contextmanager
def _mocked_client(**methods: object) -> Iterator[MagicMock]:
    """Patch settings, logging and DefinitionClient; yield the client mock."""
    client = MagicMock()
    for name, value in methods.items():
        setattr(client, name, value)

    with (
        patch("urban_dict_cli.main.Settings") as mock_settings_cls,
        patch("urban_dict_cli.main.configure_logging"),
        patch("urban_dict_cli.main.DefinitionClient") as mock_client_cls,
    ):
        mock_settings_cls.return_value = make_settings()
        mock_client_cls.from_settings.return_value = client
        yield client


@pytest.mark.unit
class TestDefineCommand:
    """Test the 'define' CLI command."""

    def test_define_prints_definitions(self) -> None:
        """Definitions for the term are printed."""
        with _mocked_client(define=AsyncMock(return_value=_records("cat"))) as client:
            result = runner.invoke(app, ["define", "cat"])

        assert result.exit_code == 0
        assert "cat" in result.output
        assert "whiskers" in result.output
        assert "[domesticated]" in result.output
        client.define.assert_awaited_once_with("cat")

    def test_define_without_term(self) -> None:
        """Omitting the term passes None through."""
        with _mocked_client(define=AsyncMock(return_value=_records("yeet"))) as client:
            result = runner.invoke(app, ["define"])

        assert result.exit_code == 0
        client.define.assert_awaited_once_with(None)

    def test_define_limit(self) -> None:
        """--limit caps the number of printed definitions."""
        records = _records("alpha", "bravo", "charlie")
        with _mocked_client(define=AsyncMock(return_value=records)):
            result = runner.invoke(app, ["define", "x", "--limit", "1"])

        assert result.exit_code == 0
        assert "alpha" in result.output
        assert "bravo" not in result.output

    def test_define_json(self) -> None:
        """--json prints raw records."""
        with _mocked_client(define=AsyncMock(return_value=_records("cat"))):
            result = runner.invoke(app, ["define", "cat", "--json"])

        assert result.exit_code == 0
        assert '"defid": 1234' in result.output

    def test_define_no_results(self) -> None:
        """An empty result prints a notice."""
        with _mocked_client(define=AsyncMock(return_value=[])):
            result = runner.invoke(app, ["define", "zzzz"])

        assert result.exit_code == 0
        assert "No definitions found" in result.output

    def test_define_upstream_error_exits_1(self) -> None:
        """Library errors exit with code 1 and a message."""
        error = UpstreamError("Upstream returned HTTP 503", url="http://x", status_code=503)
        with _mocked_client(define=AsyncMock(side_effect=error)):
            result = runner.invoke(app, ["define", "cat"])

        assert result.exit_code == 1
        assert "HTTP 503" in result.output

    def test_define_verbose_sets_debug(self) -> None:
        """-v switches the log level to DEBUG."""
        settings = make_settings()
        with (
            patch("urban_dict_cli.main.Settings", return_value=settings),
            patch("urban_dict_cli.main.configure_logging") as mock_configure,
            patch("urban_dict_cli.main.DefinitionClient") as mock_client_cls,
        ):
            mock_client_cls.from_settings.return_value.define = AsyncMock(return_value=[])
            result = runner.invoke(app, ["define", "cat", "-v"])

        assert result.exit_code == 0
        assert settings.log_level == "DEBUG"
        mock_configure.assert_called_once_with(settings)


@pytest.mark.unit
class TestRandomCommand:
    """Test the 'random' CLI command."""

    def test_random_prints_definitions(self) -> None:
        """Random definitions are printed."""
        with _mocked_client(random=AsyncMock(return_value=_records("rizz"))) as client:
            result = runner.invoke(app, ["random"])

        assert result.exit_code == 0
        assert "rizz" in result.output
        client.random.assert_awaited_once()

    def test_random_cache_error_exits_1(self) -> None:
        """Cache failures exit with code 1."""
        error = CacheError("Redis GET failed: refused", key="k")
        with _mocked_client(random=AsyncMock(side_effect=error)):
            result = runner.invoke(app, ["random"])

        assert result.exit_code == 1
        assert "refused" in result.output


@pytest.mark.unit
class TestAutocompleteCommand:
    """Test the 'autocomplete' CLI command."""

    def test_autocomplete_prints_table(self) -> None:
        """Suggestions are printed in a table."""
        suggestions = [AutocompleteSuggestion(term="foobar", preview="a thing")]
        with _mocked_client(autocomplete=AsyncMock(return_value=suggestions)) as client:
            result = runner.invoke(app, ["autocomplete", "foo"])

        assert result.exit_code == 0
        assert "foobar" in result.output
        client.autocomplete.assert_awaited_once_with("foo")

    def test_autocomplete_requires_term(self) -> None:
        """The term argument is mandatory."""
        result = runner.invoke(app, ["autocomplete"])
        assert result.exit_code != 0

    def test_autocomplete_no_results(self) -> None:
        """An empty result prints a notice."""
        with _mocked_client(autocomplete=AsyncMock(return_value=[])):
            result = runner.invoke(app, ["autocomplete", "qqq"])

        assert "No suggestions found" in result.output


@pytest.mark.unit
class TestCommandLogContext:
    """The command is bound to log entries only while it runs."""

    def test_context_bound_during_call_and_cleared_after(self) -> None:
        """The command name and term are visible to the client call, then cleared."""
        seen: dict[str, object] = {}

        async def _define(term: str | None) -> list[DefinitionRecord]:
            seen.update(structlog.contextvars.get_contextvars())
            return []

        with _mocked_client(define=AsyncMock(side_effect=_define)):
            result = runner.invoke(app, ["define", "cat"])

        assert result.exit_code == 0
        assert seen == {"command": "define", "term": "cat"}
        assert structlog.contextvars.get_contextvars() == {}

    def test_context_cleared_after_error_exit(self) -> None:
        """A failed command leaves no context behind."""
        error = UpstreamError("Upstream request failed: timeout", url="http://x")
        with _mocked_client(autocomplete=AsyncMock(side_effect=error)):
            result = runner.invoke(app, ["autocomplete", "foo"])

        assert result.exit_code == 1
        assert structlog.contextvars.get_contextvars() == {}


@pytest.mark.unit
class TestSettingsErrors:
    """Invalid environment configuration."""

    def test_invalid_ttl_exits_1(self) -> None:
        """A non-positive TTL in the environment exits with code 1."""
        with patch.dict(os.environ, {"UD_CACHE_TTL_MS": "0"}, clear=False):
            result = runner.invoke(app, ["random"])

        assert result.exit_code == 1
        assert "Invalid configuration" in result.output


@pytest.mark.unit
class TestEndToEnd:
    """CLI against a memory cache and fake upstream."""

    def test_define_through_memory_cache(self) -> None:
        """The real client path runs from command to printed output."""
        upstream = FakeUpstream()
        upstream.respond("define", make_define_payload(make_definition(word="sus")))
        real_async_client = httpx.AsyncClient

        def _fake_async_client(**kwargs: object) -> httpx.AsyncClient:
            return real_async_client(transport=httpx.MockTransport(upstream.handler))

        with (
            patch("urban_dict_cli.main.Settings", return_value=make_settings()),
            patch("urban_dict_cli.main.configure_logging"),
            patch("urban_dict_cli.main.httpx.AsyncClient", side_effect=_fake_async_client),
        ):
            result = runner.invoke(app, ["define", "sus"])

        assert result.exit_code == 0
        assert "sus" in result.output
        assert upstream.calls_to("define") == 1
        assert upstream.requests[0].url.params["term"] == "sus"


@pytest.mark.unit
class TestVersionCommand:
    """Test the 'version' CLI command."""

    def test_version(self) -> None:
        """Version string is printed."""
        result = runner.invoke(app, ["version"])
        assert result.exit_code == 0
        assert "urban-dict-cache v0.1.0" in result.output
