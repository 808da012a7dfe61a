"""Rewrite bindgen's helper declarations into direct-call wrappers.

BPF programs cannot link against the kernel. Helpers are instead called
through a fixed integer that the kernel patches in at load time, so bindgen's
view of them::

    extern "C" {
        pub static bpf_map_lookup_elem: ::core::option::Option<
            unsafe extern "C" fn(map: *mut c_void, key: *const c_void) -> *mut c_void,
        >;
    }

is unusable as is. :func:`extract_helpers` walks the parsed bindings once,
turns every such declaration into an inline wrapper that calls helper ``N``,
and marks every ``extern`` block for deletion. Helpers are numbered from 1 in
the order they are found.

Example
-------
::

    from bpfgen.extract import extract_helpers
    from bpfgen.parser import parse_bindings

    result = extract_helpers(parse_bindings(raw))
    for helper, wrapper in result:
        print(helper.call_index, helper.name)
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from tree_sitter import Node

from bpfgen.errors import HelperShapeError
from bpfgen.ir import ExtractionResult, HelperDescriptor, Parameter, Signature, Span
from bpfgen.parser import COMMENT_TYPES, BindingsTree

logger = logging.getLogger(__name__)

HELPER_PREFIX = "bpf_"

# bpf_trace_printk is variadic; the fixed-arity wrapper cannot call it.
SUPPRESSED_FRAGMENTS: tuple[str, ...] = ("printk",)

INLINE_HINT = "#[inline(always)]"

_PUNCTUATION = frozenset({"(", ")", ","})


# =============================================================================
# Wrapper synthesis
# =============================================================================


def invoke_by_fixed_index(signature: Signature, call_index: int) -> str:
    """Render a call to helper ``call_index`` through ``signature``.

    The integer is reinterpreted bit for bit as a function pointer and called
    with the signature's parameters. This is the only place where bpfgen emits
    such a reinterpretation; the kernel resolves the integer to the real
    helper when the program is loaded.
    """
    args = ", ".join(signature.argument_names)
    return f"let fun: {signature.text} = ::core::mem::transmute({call_index}usize);\nfun({args})"


def _indent(text: str, prefix: str = "    ") -> str:
    return "\n".join(prefix + line if line else line for line in text.split("\n"))


def synthesize_wrapper(name: str, call_index: int, signature: Signature) -> str:
    """Render the inline wrapper function for one helper."""
    body = invoke_by_fixed_index(signature, call_index)
    if not signature.is_unsafe:
        body = f"unsafe {{\n{_indent(body)}\n}}"
    return f"{INLINE_HINT}\npub {signature.declaration(name)} {{\n{_indent(body)}\n}}\n"


def comment_out(text: str) -> str:
    return f"/* {text.rstrip()} */\n"


def is_suppressed(wrapper: str, signature: Signature, fragments: Iterable[str] = SUPPRESSED_FRAGMENTS) -> bool:
    """Decide whether a wrapper must be kept out of compiled code.

    :param wrapper: The synthesized wrapper text.
    :param signature: The helper's signature.
    :param fragments: Substrings marking helpers known not to work as wrappers.
    :returns: True if the wrapper should be emitted commented out.
    """
    return signature.is_variadic or any(fragment in wrapper for fragment in fragments)


# =============================================================================
# Type inspection
# =============================================================================


def _last_segment(tree: BindingsTree, type_node: Node) -> str | None:
    """Return the final identifier of a (possibly generic) type path."""
    if type_node.type == "generic_type":
        type_node = type_node.child_by_field_name("type")
    if type_node is None:
        return None
    if type_node.type == "scoped_type_identifier":
        name = type_node.child_by_field_name("name")
        return tree.text(name) if name is not None else None
    if type_node.type == "type_identifier":
        return tree.text(type_node)
    return None


def _is_option(tree: BindingsTree, type_node: Node | None) -> bool:
    return type_node is not None and _last_segment(tree, type_node) == "Option"


def _named(nodes: Sequence[Node]) -> list[Node]:
    return [n for n in nodes if n.type not in COMMENT_TYPES]


def _option_argument(tree: BindingsTree, name: str, type_node: Node) -> Node:
    """Return the function type wrapped by ``Option<...>``."""
    args = type_node.child_by_field_name("type_arguments") if type_node.type == "generic_type" else None
    if args is None:
        raise HelperShapeError(name, f"expected Option<fn(..)>, got {tree.text(type_node)!r}")

    inner = _named(args.named_children)
    if len(inner) != 1:
        raise HelperShapeError(name, f"expected one type argument to Option, got {len(inner)}")

    fn_type = inner[0]
    if fn_type.type != "function_type":
        raise HelperShapeError(name, f"Option argument is not a function type: {tree.text(fn_type)!r}")
    return fn_type


def read_signature(tree: BindingsTree, name: str, fn_type: Node) -> Signature:
    """Build a :class:`Signature` from a ``function_type`` node.

    :raises HelperShapeError: If a parameter has no plain identifier name,
        since the wrapper forwards parameters by name.
    """
    params = fn_type.child_by_field_name("parameters")
    if params is None:
        raise HelperShapeError(name, f"function type has no parameter list: {tree.text(fn_type)!r}")

    source = tree.source
    head = source[fn_type.start_byte : params.start_byte].decode("utf-8")
    tail = source[params.start_byte : fn_type.end_byte].decode("utf-8")

    parameters: list[Parameter] = []
    is_variadic = False
    for child in params.children:
        if child.type in _PUNCTUATION or child.type in COMMENT_TYPES or child.type == "attribute_item":
            continue
        if child.type == "variadic_parameter":
            is_variadic = True
            continue
        if child.type != "parameter":
            raise HelperShapeError(name, f"parameter {tree.text(child)!r} has no name to forward")
        pattern = child.child_by_field_name("pattern")
        ptype = child.child_by_field_name("type")
        if pattern is None or pattern.type != "identifier" or ptype is None:
            raise HelperShapeError(name, f"parameter {tree.text(child)!r} has no name to forward")
        parameters.append(Parameter(tree.text(pattern), tree.text(ptype)))

    ret = fn_type.child_by_field_name("return_type")
    return Signature(
        head=head,
        tail=tail,
        parameters=tuple(parameters),
        return_type=tree.text(ret) if ret is not None else None,
        is_variadic=is_variadic,
    )


# =============================================================================
# Traversal
# =============================================================================


def _visit_foreign_static(
    tree: BindingsTree,
    node: Node,
    result: ExtractionResult,
    prefix: str,
    fragments: tuple[str, ...],
) -> None:
    name_node = node.child_by_field_name("name")
    type_node = node.child_by_field_name("type")
    if name_node is None:
        return
    name = tree.text(name_node)
    if not name.startswith(prefix) or not _is_option(tree, type_node):
        return
    assert type_node is not None

    signature = read_signature(tree, name, _option_argument(tree, name, type_node))
    call_index = len(result.helpers) + 1
    wrapper = synthesize_wrapper(name, call_index, signature)
    suppressed = is_suppressed(wrapper, signature, fragments)
    if suppressed:
        logger.warning("helper %s (call index %d) cannot be wrapped, emitting it commented out", name, call_index)
        wrapper = comment_out(wrapper)
    else:
        logger.debug("helper %s -> call index %d", name, call_index)

    result.helpers.append(HelperDescriptor(name, call_index, signature, suppressed))
    result.wrappers.append(wrapper)


def _visit_foreign_block(
    tree: BindingsTree,
    node: Node,
    result: ExtractionResult,
    prefix: str,
    fragments: tuple[str, ...],
) -> None:
    body = node.child_by_field_name("body")
    if body is None:
        return
    for child in body.named_children:
        if child.type == "static_item":
            _visit_foreign_static(tree, child, result, prefix, fragments)


def _is_outer_doc(tree: BindingsTree, node: Node) -> bool:
    text = tree.text(node)
    return text.startswith("///") or text.startswith("/**")


def _visit_items(
    tree: BindingsTree,
    items: Iterable[Node],
    result: ExtractionResult,
    prefix: str,
    fragments: tuple[str, ...],
) -> ExtractionResult:
    """Visit a sequence of items, recording extern blocks for deletion.

    Outer attributes and doc comments are separate siblings in tree-sitter,
    so the ones directly above an extern block are deleted with it. Plain
    comments are left where they are.
    """
    attributes: list[Node] = []
    for node in items:
        if node.type in COMMENT_TYPES and not _is_outer_doc(tree, node):
            continue
        if node.type == "attribute_item" or node.type in COMMENT_TYPES:
            attributes.append(node)
            continue

        if node.type == "foreign_mod_item":
            _visit_foreign_block(tree, node, result, prefix, fragments)
            start = attributes[0].start_byte if attributes else node.start_byte
            result.removed.append(Span(start, node.end_byte))
        elif node.type == "mod_item":
            body = node.child_by_field_name("body")
            if body is not None:
                _visit_items(tree, body.named_children, result, prefix, fragments)
        attributes = []
    return result


def extract_helpers(
    tree: BindingsTree,
    prefix: str = HELPER_PREFIX,
    suppressed_fragments: Iterable[str] = SUPPRESSED_FRAGMENTS,
) -> ExtractionResult:
    """Extract kernel helpers and mark every extern block for deletion.

    Every ``extern`` block is deleted, whatever it contains. Inside a block,
    a ``static`` whose name starts with ``prefix`` and whose type is
    ``Option<...>`` is a helper and gets a wrapper; other declarations in the
    block are dropped with it. Items outside extern blocks are left alone.

    :param tree: Parsed bindgen output.
    :param prefix: Name prefix of helper declarations.
    :param suppressed_fragments: Wrappers containing any of these substrings
        are emitted commented out.
    :returns: Deleted spans, helper descriptors, and wrapper texts, in
        call-index order.
    :raises HelperShapeError: If a helper-shaped declaration does not wrap
        exactly one named-parameter function type.
    """
    result = ExtractionResult(source=tree.source)
    _visit_items(tree, tree.items, result, prefix, tuple(suppressed_fragments))
    logger.info(
        "extracted %d helpers (%d suppressed), removing %d extern blocks",
        len(result.helpers),
        sum(1 for h in result.helpers if h.suppressed),
        len(result.removed),
    )
    return result
