"""Parse bindgen output with tree-sitter.

bindgen emits Rust source. This module turns that text into a
:class:`BindingsTree`: the tree-sitter syntax tree plus the bytes it was
parsed from, so that callers can slice verbatim text out of any node.

Example
-------
::

    from bpfgen.parser import parse_bindings

    tree = parse_bindings('extern "C" { pub static bpf_x: u32; }')
    for item in tree.items:
        print(item.type)
"""

from __future__ import annotations

from dataclasses import dataclass

import tree_sitter_rust as tsrust
from tree_sitter import Language, Node, Parser, Tree

from bpfgen.errors import ParseError

RUST_LANGUAGE = Language(tsrust.language())

# Comments are extras: they can show up as named children anywhere.
COMMENT_TYPES = frozenset({"line_comment", "block_comment"})


@dataclass
class BindingsTree:
    """A parsed bindgen file.

    :param source: The exact bytes that were parsed.
    :param tree: The tree-sitter tree for ``source``.
    """

    source: bytes
    tree: Tree

    @property
    def root(self) -> Node:
        return self.tree.root_node

    @property
    def items(self) -> list[Node]:
        """Top-level items, in source order."""
        return list(self.root.named_children)

    def text(self, node: Node) -> str:
        """Return the verbatim source text covered by ``node``."""
        return self.source[node.start_byte : node.end_byte].decode("utf-8")


def _first_error(node: Node) -> Node | None:
    """Find the first ERROR or missing node in document order."""
    if node.type == "ERROR" or node.is_missing:
        return node
    for child in node.children:
        if child.has_error:
            found = _first_error(child)
            if found is not None:
                return found
    return None


def parse_bindings(text: str | bytes) -> BindingsTree:
    """Parse bindgen output into a :class:`BindingsTree`.

    :param text: Rust source produced by bindgen.
    :returns: The parsed tree.
    :raises ParseError: If the source does not parse cleanly. tree-sitter
        recovers from errors, but a partially understood bindings file would
        produce wrong helpers, so any error node is fatal.
    """
    source = text.encode("utf-8") if isinstance(text, str) else text
    tree = Parser(RUST_LANGUAGE).parse(source)

    if tree.root_node.has_error:
        bad = _first_error(tree.root_node) or tree.root_node
        row, column = bad.start_point
        kind = f"missing {bad.type!r}" if bad.is_missing else "syntax error"
        raise ParseError(
            f"bindgen output does not parse: {kind} at line {row + 1}, column {column + 1}",
            line=row + 1,
            column=column + 1,
        )

    return BindingsTree(source, tree)
