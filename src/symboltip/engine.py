"""Quick info engine bound to one text buffer.

Owns the semantic model cache and the buffer/config subscriptions, and is
the boundary where collaborator failures are caught. Each request runs
under a fresh request id:

    with QuickInfoEngine(buffer, provider, config_source) as engine:
        fragments = engine.query(offset)
"""

from __future__ import annotations

import sys
import traceback
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

import structlog

from symboltip.composer import CompositionRequest, FragmentComposer
from symboltip.config.models import QuickInfoFlags
from symboltip.core.errors import HostInteractionError, InternalError, SymbolTipError
from symboltip.core.logging import clear_request_id, get_log_file_path, set_request_id
from symboltip.fragments import InfoFragment
from symboltip.formatting import StyleTable
from symboltip.host import (
    ConfigSource,
    DocumentationStore,
    FragmentSink,
    GlyphService,
    SecondaryBinder,
    SemanticModel,
    SemanticModelProvider,
    TextBuffer,
    TextSnapshot,
)
from symboltip.model.syntax import SourcePosition

log = structlog.get_logger()

HostErrorCallback = Callable[[SymbolTipError], None]

# In-memory collaborators ship with the package but stand in for host code.
_HOST_MODULES = frozenset({"symboltip.semantic"})


def _raised_in_package(exc: BaseException) -> bool:
    """Whether the innermost frame of `exc` belongs to symboltip itself."""
    frames = list(traceback.walk_tb(exc.__traceback__))
    if not frames:
        return False
    module = frames[-1][0].f_globals.get("__name__", "")
    return module.startswith("symboltip.") and module not in _HOST_MODULES


@dataclass(frozen=True, slots=True)
class ModelCacheEntry:
    """Semantic model computed for one buffer version."""

    version: int
    model: SemanticModel


class QuickInfoEngine:
    """Composes quick info for positions in a buffer.

    The semantic model is cached per snapshot version and dropped as soon
    as the buffer signals it is about to change. Configuration changes
    swap the flags used by the next request. `dispose()` releases both
    subscriptions once.
    """

    def __init__(
        self,
        buffer: TextBuffer,
        provider: SemanticModelProvider,
        config: ConfigSource,
        *,
        docs: DocumentationStore | None = None,
        glyphs: GlyphService | None = None,
        secondary_binder: SecondaryBinder | None = None,
        theme: Mapping[str, str] | None = None,
        on_host_error: HostErrorCallback | None = None,
        break_on_host_error: bool = False,
    ) -> None:
        self._buffer = buffer
        self._provider = provider
        self._flags = config.snapshot()
        self._composer = FragmentComposer(secondary_binder=secondary_binder, docs=docs, glyphs=glyphs)
        self._styles = StyleTable.from_mapping(theme or {})
        self._on_host_error = on_host_error
        self._break_on_host_error = break_on_host_error
        self._cache: ModelCacheEntry | None = None
        self._disposed = False
        self._unsubscribe_buffer = buffer.subscribe_changing(self._on_buffer_changing)
        self._unsubscribe_config = config.subscribe(self._on_config_updated)

    # ------------------------------------------------------------------
    # Requests
    # ------------------------------------------------------------------

    def query(self, position: int | SourcePosition) -> list[InfoFragment]:
        """Fragments for `position` in the current snapshot.

        A SourcePosition taken from an older snapshot yields nothing.
        Never raises for collaborator failures; those are reported through
        `on_host_error` and yield an empty list.
        """
        rid = set_request_id()
        try:
            return self._query(position)
        except SymbolTipError as exc:
            self._report(exc)
        except Exception as exc:
            self._report(self._wrap(exc))
        finally:
            clear_request_id()
            log.debug("request_finished", request_id=rid)
        return []

    def augment(self, position: int | SourcePosition, sink: FragmentSink) -> list[InfoFragment]:
        """Query and append the fragments to `sink`.

        With hide_original_quick_info the sink is cleared first.
        """
        if self._flags.hide_original_quick_info:
            sink.clear()
        fragments = self.query(position)
        for fragment in fragments:
            sink.append(fragment)
        return fragments

    def _query(self, position: int | SourcePosition) -> list[InfoFragment]:
        if self._disposed:
            log.debug("query_after_dispose")
            return []
        snapshot = self._buffer.current_snapshot
        if isinstance(position, SourcePosition):
            if position.version != snapshot.version:
                log.debug("stale_snapshot", requested=position.version, current=snapshot.version)
                return []
            offset = position.offset
        else:
            offset = position

        model = self._semantic_model(snapshot)
        if model is None:
            log.debug("no_semantic_model", version=snapshot.version)
            return []

        request = CompositionRequest(model, snapshot, offset, self._flags, self._styles)
        fragments = self._composer.compose(request)
        log.debug("quick_info_composed", offset=offset, fragments=len(fragments))
        return fragments

    def _semantic_model(self, snapshot: TextSnapshot) -> SemanticModel | None:
        entry = self._cache
        if entry is not None and entry.version == snapshot.version:
            return entry.model
        model = self._provider.get_semantic_model(snapshot)
        if model is not None:
            self._cache = ModelCacheEntry(snapshot.version, model)
        return model

    @property
    def cached_version(self) -> int | None:
        return self._cache.version if self._cache is not None else None

    @property
    def flags(self) -> QuickInfoFlags:
        return self._flags

    @property
    def styles(self) -> StyleTable:
        return self._styles

    def set_theme(self, theme: Mapping[str, str]) -> None:
        """Replace the role -> style mapping used for new requests."""
        self._styles = StyleTable.from_mapping(theme)

    # ------------------------------------------------------------------
    # Notifications
    # ------------------------------------------------------------------

    def _on_buffer_changing(self) -> None:
        self._cache = None

    def _on_config_updated(self, flags: QuickInfoFlags) -> None:
        self._flags = flags
        log.debug("flags_swapped", hide_original=flags.hide_original_quick_info)

    def _wrap(self, exc: Exception) -> SymbolTipError:
        """Bugs raised in our own frames are internal; anything else came from the host."""
        details: dict[str, Any] = {}
        if (log_file := get_log_file_path()) is not None:
            details["log_file"] = str(log_file)
        if _raised_in_package(exc):
            return InternalError.unexpected(f"quick_info failed: {exc}", exception=type(exc).__name__, **details)
        return HostInteractionError.from_exception("quick_info", exc, **details)

    def _report(self, error: SymbolTipError) -> None:
        log.warning("quick_info_failed", **error.to_dict())
        if self._on_host_error is not None:
            self._on_host_error(error)
        if self._break_on_host_error and sys.gettrace() is not None:
            breakpoint()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    @property
    def disposed(self) -> bool:
        return self._disposed

    def dispose(self) -> None:
        """Unsubscribe from buffer and config notifications. Idempotent."""
        if self._disposed:
            return
        self._disposed = True
        self._unsubscribe_buffer()
        self._unsubscribe_config()
        self._cache = None
        log.debug("engine_disposed")

    def __enter__(self) -> QuickInfoEngine:
        return self

    def __exit__(self, *exc: object) -> None:
        self.dispose()
