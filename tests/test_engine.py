"""Tests for engine.py: model cache, subscriptions and host error boundary."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Any

import pytest
import structlog
from conftest import make_node

from symboltip.config.models import LoggingConfig, LogOutputConfig, QuickInfoFlags
from symboltip.config.source import MutableConfigSource
from symboltip.core.errors import ErrorCode, InternalError, SymbolTipError
from symboltip.core.logging import configure_logging
from symboltip.engine import QuickInfoEngine
from symboltip.formatting import StyleRole
from symboltip.fragments import InfoFragment, NumericTriple
from symboltip.host import TextSnapshot
from symboltip.model.symbols import NumericValue, PrimitiveType
from symboltip.model.syntax import SourcePosition, SyntaxKind
from symboltip.semantic import InMemoryBuffer, InMemoryModelProvider, InMemorySemanticModel

SOURCE = "x = 42;\n"


def _literal_model(_snapshot: TextSnapshot | None = None) -> InMemorySemanticModel:
    literal = make_node(SyntaxKind.NUMERIC_LITERAL, 4, 6, value=NumericValue(42, PrimitiveType.INT))
    return InMemorySemanticModel(make_node(SyntaxKind.OTHER, 0, 8, literal))


class RecordingSink:
    def __init__(self, *existing: InfoFragment) -> None:
        self.fragments: list[InfoFragment] = list(existing)
        self.clears = 0

    def append(self, fragment: InfoFragment) -> None:
        self.fragments.append(fragment)

    def clear(self) -> None:
        self.clears += 1
        self.fragments.clear()


class FailingProvider:
    def get_semantic_model(self, snapshot: TextSnapshot) -> InMemorySemanticModel | None:
        raise RuntimeError("workspace unloaded")


@pytest.fixture
def buffer() -> InMemoryBuffer:
    return InMemoryBuffer(SOURCE)


@pytest.fixture
def provider() -> InMemoryModelProvider:
    return InMemoryModelProvider(_literal_model)


@pytest.fixture
def config() -> MutableConfigSource:
    return MutableConfigSource()


@pytest.fixture
def engine(buffer: InMemoryBuffer, provider: InMemoryModelProvider, config: MutableConfigSource) -> QuickInfoEngine:
    return QuickInfoEngine(buffer, provider, config)


class TestQuery:
    """Queries against the current snapshot."""

    def test_given_literal_when_queried_then_numeric_fragment(self, engine: QuickInfoEngine) -> None:
        fragments = engine.query(5)

        assert len(fragments) == 1
        assert isinstance(fragments[0], NumericTriple)

    def test_given_current_source_position_when_queried_then_fragments(self, engine: QuickInfoEngine) -> None:
        assert engine.query(SourcePosition(offset=5, version=0))

    def test_given_position_from_older_snapshot_when_queried_then_nothing(
        self, engine: QuickInfoEngine, buffer: InMemoryBuffer
    ) -> None:
        # Given
        stale = SourcePosition(offset=5, version=buffer.current_snapshot.version)
        buffer.edit(SOURCE)

        # When / Then
        assert engine.query(stale) == []

    def test_given_no_model_for_buffer_when_queried_then_nothing(
        self, buffer: InMemoryBuffer, config: MutableConfigSource
    ) -> None:
        engine = QuickInfoEngine(buffer, InMemoryModelProvider.of(None), config)
        assert engine.query(5) == []

    def test_given_flags_updated_when_queried_then_next_request_uses_them(
        self, engine: QuickInfoEngine, config: MutableConfigSource
    ) -> None:
        config.update(QuickInfoFlags(show_numeric_values=False))
        assert engine.query(5) == []


class TestModelCache:
    """One semantic model per snapshot version."""

    def test_given_repeated_queries_when_same_version_then_model_built_once(
        self, engine: QuickInfoEngine, provider: InMemoryModelProvider
    ) -> None:
        engine.query(5)
        engine.query(4)
        engine.query(0)

        assert provider.builds == 1
        assert engine.cached_version == 0

    def test_given_buffer_edit_when_changing_then_cache_dropped(
        self, engine: QuickInfoEngine, provider: InMemoryModelProvider, buffer: InMemoryBuffer
    ) -> None:
        # Given
        engine.query(5)

        # When
        buffer.edit("y = 42;\n")

        # Then
        assert engine.cached_version is None
        engine.query(5)
        assert provider.builds == 2
        assert engine.cached_version == 1

    def test_given_missing_model_when_queried_then_not_cached(
        self, buffer: InMemoryBuffer, config: MutableConfigSource
    ) -> None:
        provider = InMemoryModelProvider.of(None)
        engine = QuickInfoEngine(buffer, provider, config)

        engine.query(5)
        engine.query(5)

        assert provider.builds == 2
        assert engine.cached_version is None


class TestHostErrors:
    """Collaborator failures never reach the caller."""

    def test_given_failing_provider_when_queried_then_callback_and_empty(
        self, buffer: InMemoryBuffer, config: MutableConfigSource
    ) -> None:
        # Given
        errors: list[SymbolTipError] = []
        engine = QuickInfoEngine(buffer, FailingProvider(), config, on_host_error=errors.append)

        # When
        fragments = engine.query(5)

        # Then
        assert fragments == []
        assert len(errors) == 1
        assert errors[0].code == ErrorCode.HOST_INTERACTION_FAILED
        assert errors[0].details["exception"] == "RuntimeError"

    def test_given_model_breaking_contract_when_queried_then_internal_error(
        self, buffer: InMemoryBuffer, config: MutableConfigSource
    ) -> None:
        # Given - the failure is raised from symboltip's own frames
        errors: list[SymbolTipError] = []
        provider = InMemoryModelProvider(lambda _snapshot: object())  # type: ignore[arg-type,return-value]
        engine = QuickInfoEngine(buffer, provider, config, on_host_error=errors.append)

        # When
        fragments = engine.query(5)

        # Then
        assert fragments == []
        assert len(errors) == 1
        assert isinstance(errors[0], InternalError)
        assert errors[0].code == ErrorCode.INTERNAL_ERROR
        assert errors[0].details["exception"] == "AttributeError"

    def test_given_log_file_when_provider_fails_then_error_points_at_it(
        self, buffer: InMemoryBuffer, config: MutableConfigSource, tmp_path: Path
    ) -> None:
        # Given
        log_file = tmp_path / "symboltip.log"
        configure_logging(config=LoggingConfig(outputs=[LogOutputConfig(format="json", destination=str(log_file))]))
        errors: list[SymbolTipError] = []
        engine = QuickInfoEngine(buffer, FailingProvider(), config, on_host_error=errors.append)

        try:
            # When
            engine.query(5)
        finally:
            configure_logging()
            logging.getLogger().handlers.clear()
            structlog.reset_defaults()

        # Then
        assert errors[0].details["log_file"] == str(log_file)
        assert "quick_info_failed" in log_file.read_text()

    def test_given_no_callback_when_provider_fails_then_still_empty(
        self, buffer: InMemoryBuffer, config: MutableConfigSource
    ) -> None:
        engine = QuickInfoEngine(buffer, FailingProvider(), config)
        assert engine.query(5) == []

    @pytest.mark.parametrize(
        ("break_flag", "tracing", "expected_breaks"), [(True, True, 1), (True, False, 0), (False, True, 0)]
    )
    def test_given_break_flag_when_provider_fails_then_breaks_only_under_debugger(
        self,
        monkeypatch: pytest.MonkeyPatch,
        buffer: InMemoryBuffer,
        config: MutableConfigSource,
        break_flag: bool,
        tracing: bool,
        expected_breaks: int,
    ) -> None:
        # Given
        breaks: list[Any] = []
        monkeypatch.setattr(sys, "gettrace", lambda: (lambda *_: None) if tracing else None)
        monkeypatch.setattr(sys, "breakpointhook", lambda *args, **kwargs: breaks.append(args))
        engine = QuickInfoEngine(buffer, FailingProvider(), config, break_on_host_error=break_flag)

        # When
        engine.query(5)

        # Then
        assert len(breaks) == expected_breaks


class TestAugment:
    def test_given_sink_when_augmented_then_fragments_appended(self, engine: QuickInfoEngine) -> None:
        existing = NumericTriple("1", "01", "00000001")
        sink = RecordingSink(existing)

        added = engine.augment(5, sink)

        assert sink.fragments == [existing, *added]
        assert sink.clears == 0

    def test_given_hide_original_when_augmented_then_sink_cleared_first(
        self, engine: QuickInfoEngine, config: MutableConfigSource
    ) -> None:
        # Given
        config.update(QuickInfoFlags(hide_original_quick_info=True))
        sink = RecordingSink(NumericTriple("1", "01", "00000001"))

        # When
        added = engine.augment(5, sink)

        # Then
        assert sink.clears == 1
        assert sink.fragments == added


class TestStyles:
    def test_given_theme_when_created_then_styles_overridden(
        self, buffer: InMemoryBuffer, provider: InMemoryModelProvider, config: MutableConfigSource
    ) -> None:
        engine = QuickInfoEngine(buffer, provider, config, theme={"keyword": "bold red", "nonsense": "x"})

        assert engine.styles.get(StyleRole.KEYWORD) == "bold red"

    def test_given_new_theme_when_set_then_styles_rebuilt(self, engine: QuickInfoEngine) -> None:
        # Given
        before = engine.styles

        # When
        engine.set_theme({"string": "green"})

        # Then
        assert engine.styles is not before
        assert engine.styles.get(StyleRole.STRING) == "green"
        assert before.get(StyleRole.STRING) != "green"

    def test_given_config_update_when_notified_then_flags_swapped_and_styles_kept(
        self, engine: QuickInfoEngine, config: MutableConfigSource
    ) -> None:
        # Given
        before = engine.styles
        flags = QuickInfoFlags(show_overloads=False)

        # When
        config.update(flags)

        # Then
        assert engine.flags is flags
        assert engine.styles is before


class TestLifecycle:
    """Subscriptions are released once."""

    def test_given_engine_when_disposed_twice_then_unsubscribed_once(
        self, engine: QuickInfoEngine, buffer: InMemoryBuffer, config: MutableConfigSource
    ) -> None:
        # Given
        assert buffer.listener_count == 1
        assert config.listener_count == 1

        # When
        engine.dispose()
        engine.dispose()

        # Then
        assert engine.disposed
        assert buffer.listener_count == 0
        assert config.listener_count == 0

    def test_given_disposed_engine_when_queried_then_nothing(self, engine: QuickInfoEngine) -> None:
        engine.dispose()
        assert engine.query(5) == []

    def test_given_context_manager_when_exited_then_disposed(
        self, buffer: InMemoryBuffer, provider: InMemoryModelProvider, config: MutableConfigSource
    ) -> None:
        with QuickInfoEngine(buffer, provider, config) as engine:
            assert engine.query(5)

        assert engine.disposed
        assert buffer.listener_count == 0
