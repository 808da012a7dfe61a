"""Tests for parsing bindgen output."""

from __future__ import annotations

import pytest

from bpfgen.errors import ParseError
from bpfgen.parser import BindingsTree, parse_bindings


class TestParseBindings:
    def test_returns_tree(self, lookup_source: str) -> None:
        tree = parse_bindings(lookup_source)
        assert isinstance(tree, BindingsTree)
        assert tree.source == lookup_source.encode("utf-8")

    def test_items_in_source_order(self, lookup_tree: BindingsTree) -> None:
        assert [item.type for item in lookup_tree.items] == ["const_item", "foreign_mod_item"]

    def test_text_is_verbatim(self, lookup_tree: BindingsTree) -> None:
        const = lookup_tree.items[0]
        assert lookup_tree.text(const) == "pub const BPF_SOME_CONST: u32 = 1;"

    def test_accepts_bytes(self, lookup_source: str) -> None:
        tree = parse_bindings(lookup_source.encode("utf-8"))
        assert len(tree.items) == 2

    def test_empty_input(self) -> None:
        tree = parse_bindings("")
        assert tree.items == []

    def test_non_ascii_text(self) -> None:
        """Byte offsets and text slicing agree for multi-byte characters."""
        tree = parse_bindings('/// é\npub const BPF_X: u32 = 1;\n')
        const = [item for item in tree.items if item.type == "const_item"][0]
        assert tree.text(const) == "pub const BPF_X: u32 = 1;"


class TestParseErrors:
    def test_unterminated_block(self) -> None:
        """Truncated bindgen output is fatal."""
        source = 'extern "C" {\n    pub static bpf_broken: ::core::option::Option<\n'
        with pytest.raises(ParseError) as exc_info:
            parse_bindings(source)
        assert exc_info.value.stage == "parse"
        assert exc_info.value.line is not None
        assert exc_info.value.column is not None

    def test_garbage(self) -> None:
        with pytest.raises(ParseError, match="does not parse"):
            parse_bindings("pub struct {{{ ;;")
