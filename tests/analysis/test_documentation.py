"""Tests for analysis/documentation.py."""

from __future__ import annotations

from conftest import make_node

from symboltip.analysis.documentation import base_members, documentation_fragment, reference_runs
from symboltip.config.models import QuickInfoFlags
from symboltip.formatting import FormattingContext, StyleRole, StyleTable
from symboltip.model.documentation import DocNode, DocToken
from symboltip.model.symbols import MethodSymbol, NamedTypeSymbol, SymbolKind, TypeKind
from symboltip.model.syntax import SyntaxKind
from symboltip.semantic import InMemoryDocumentationStore, InMemorySemanticModel

STYLES = StyleTable()


def _doc(summary: str, returns: str | None = None) -> DocNode:
    sections = {("summary", None): DocNode(tokens=(DocToken(summary),))}
    if returns is not None:
        sections[("returns", None)] = DocNode(tokens=(DocToken(returns),))
    return DocNode(sections=sections)


def _hierarchy() -> tuple[MethodSymbol, MethodSymbol]:
    base = NamedTypeSymbol(name="Base")
    base_run = base.add_member(MethodSymbol(name="Run", is_virtual=True))
    derived = NamedTypeSymbol(name="Derived", base_type=base)
    run = derived.add_member(
        MethodSymbol(name="Run", is_override=True, overridden_method=base_run)  # type: ignore[arg-type]
    )
    assert isinstance(base_run, MethodSymbol) and isinstance(run, MethodSymbol)
    return base_run, run


class TestReferenceRuns:
    """Styling of documentation cross references."""

    def test_given_parameter_reference_when_styled_then_parameter_role(self, ctx: FormattingContext) -> None:
        runs = reference_runs(ctx, "count", SymbolKind.PARAMETER)
        assert [(r.text, r.style) for r in runs] == [("count", STYLES.get(StyleRole.PARAMETER))]

    def test_given_known_documentation_id_when_styled_then_symbol_name(self) -> None:
        # Given
        model = InMemorySemanticModel(make_node(SyntaxKind.OTHER, 0, 10))
        stream = NamedTypeSymbol(name="Stream", namespace="System.IO")
        model.register_documentation_id("T:System.IO.Stream", stream)

        # When
        runs = reference_runs(FormattingContext(model, 0), "T:System.IO.Stream", None)

        # Then
        assert [(r.text, r.style) for r in runs] == [("Stream", STYLES.get(StyleRole.CLASS))]

    def test_given_unknown_type_id_when_styled_then_italic_without_prefix(self, ctx: FormattingContext) -> None:
        (run,) = reference_runs(ctx, "T:Missing.Type", None)
        assert run.text == "Missing.Type"
        assert run.italic
        assert run.style == STYLES.get(StyleRole.CLASS)

    def test_given_unknown_method_id_when_styled_then_method_role(self, ctx: FormattingContext) -> None:
        (run,) = reference_runs(ctx, "M:Missing.Run", None)
        assert run.text == "Missing.Run"
        assert run.style == STYLES.get(StyleRole.METHOD)

    def test_given_error_id_when_styled_then_bold_italic(self, ctx: FormattingContext) -> None:
        (run,) = reference_runs(ctx, "!:Broken", None)
        assert run.text == "Broken"
        assert run.bold and run.italic

    def test_given_plain_reference_when_styled_then_plain(self, ctx: FormattingContext) -> None:
        (run,) = reference_runs(ctx, "something", None)
        assert run.text == "something"
        assert run.style is None


class TestBaseMembers:
    def test_given_override_chain_when_collected_then_nearest_first(self) -> None:
        root = NamedTypeSymbol(name="Root")
        root_run = root.add_member(MethodSymbol(name="Run", is_virtual=True))
        middle = NamedTypeSymbol(name="Middle", base_type=root)
        middle_run = middle.add_member(
            MethodSymbol(name="Run", is_override=True, overridden_method=root_run)  # type: ignore[arg-type]
        )
        leaf = NamedTypeSymbol(name="Leaf", base_type=middle)
        leaf_run = leaf.add_member(
            MethodSymbol(name="Run", is_override=True, overridden_method=middle_run)  # type: ignore[arg-type]
        )

        assert base_members(leaf_run) == [middle_run, root_run]

    def test_given_interface_member_when_collected_then_included(self) -> None:
        intf = NamedTypeSymbol(name="IRunner", type_kind=TypeKind.INTERFACE)
        contract = intf.add_member(MethodSymbol(name="Run"))
        impl = NamedTypeSymbol(name="Runner", interfaces=[intf])
        run = impl.add_member(MethodSymbol(name="Run"))

        assert base_members(run) == [contract]


class TestDocumentationFragment:
    """Own and inherited documentation."""

    def test_given_own_docs_without_override_when_rendered_then_none(self, ctx: FormattingContext) -> None:
        _, run = _hierarchy()
        docs = InMemoryDocumentationStore({run: _doc("Runs it.")})

        flags = QuickInfoFlags(documentation_from_base_type=True)

        assert documentation_fragment(ctx, run, docs, flags) is None

    def test_given_override_documentation_when_rendered_then_summary(self, ctx: FormattingContext) -> None:
        _, run = _hierarchy()
        docs = InMemoryDocumentationStore({run: _doc("Runs it.", returns="nothing")})

        fragment = documentation_fragment(ctx, run, docs, QuickInfoFlags(override_documentation=True))

        assert fragment is not None
        assert fragment.text == "Runs it."

    def test_given_returns_doc_when_rendered_then_appended(self, ctx: FormattingContext) -> None:
        _, run = _hierarchy()
        docs = InMemoryDocumentationStore({run: _doc("Runs it.", returns="the result")})
        flags = QuickInfoFlags(override_documentation=True, show_returns_doc=True)

        fragment = documentation_fragment(ctx, run, docs, flags)

        assert fragment is not None
        assert fragment.text == "Runs it.\nReturns: the result"
        assert fragment.runs[1].bold

    def test_given_undocumented_override_when_rendered_then_base_documentation(self, ctx: FormattingContext) -> None:
        # Given
        base_run, run = _hierarchy()
        docs = InMemoryDocumentationStore({base_run: _doc("Base behavior.")})
        flags = QuickInfoFlags(documentation_from_base_type=True)

        # When
        fragment = documentation_fragment(ctx, run, docs, flags)

        # Then
        assert fragment is not None
        assert fragment.text == "Documentation from Base.Run: Base behavior."

    def test_given_inheritance_off_when_rendered_then_none(self, ctx: FormattingContext) -> None:
        base_run, run = _hierarchy()
        docs = InMemoryDocumentationStore({base_run: _doc("Base behavior.")})

        assert documentation_fragment(ctx, run, docs, QuickInfoFlags()) is None

    def test_given_empty_own_docs_when_rendered_then_falls_back(self, ctx: FormattingContext) -> None:
        base_run, run = _hierarchy()
        docs = InMemoryDocumentationStore({run: DocNode(), base_run: _doc("Base behavior.")})
        flags = QuickInfoFlags(override_documentation=True, documentation_from_base_type=True)

        fragment = documentation_fragment(ctx, run, docs, flags)

        assert fragment is not None
        assert fragment.text.startswith("Documentation from ")

    def test_given_cross_reference_when_rendered_then_styled(self, ctx: FormattingContext) -> None:
        _, run = _hierarchy()
        summary = DocNode(tokens=(DocToken("Uses "), DocToken("count", reference=True, symbol_kind=SymbolKind.PARAMETER)))
        docs = InMemoryDocumentationStore({run: DocNode(sections={("summary", None): summary})})

        fragment = documentation_fragment(ctx, run, docs, QuickInfoFlags(override_documentation=True))

        assert fragment is not None
        assert fragment.text == "Uses count"
        assert fragment.runs[1].style == STYLES.get(StyleRole.PARAMETER)
