"""Data model shared by the extractor and the writers.

The extractor reads a parsed bindgen tree and produces an
:class:`ExtractionResult`: the byte spans to delete from the raw bindings,
one :class:`HelperDescriptor` per kernel helper, and the synthesized wrapper
text for each helper. Writers only ever read these objects.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field


@dataclass(frozen=True)
class Parameter:
    """A parameter of a helper's function type.

    :param name: Parameter name, or None when bindgen emitted a bare type.
    :param type: Verbatim Rust type text.
    """

    name: str | None
    type: str

    def __str__(self) -> str:
        if self.name is None:
            return self.type
        return f"{self.name}: {self.type}"


@dataclass(frozen=True)
class Signature:
    """Function type extracted from ``Option<...>``, kept verbatim.

    The source text is split where the parameter list starts so that a name
    can be inserted after ``fn`` without reformatting anything.

    :param head: Modifiers and the ``fn`` keyword, e.g. ``unsafe extern "C" fn``.
    :param tail: Parameter list and return type, e.g. ``(x: u32) -> i64``.
    :param parameters: Parsed parameters in declared order.
    :param return_type: Return type text, or None for ``()``.
    :param is_variadic: True if the parameter list ends in ``...``.
    """

    head: str
    tail: str
    parameters: tuple[Parameter, ...] = ()
    return_type: str | None = None
    is_variadic: bool = False

    @property
    def text(self) -> str:
        """The function type exactly as bindgen wrote it."""
        return f"{self.head}{self.tail}"

    @property
    def is_unsafe(self) -> bool:
        return "unsafe" in self.head.split()

    @property
    def argument_names(self) -> list[str]:
        """Names forwarded positionally by a wrapper.

        Variadic arguments are not part of the parameter tuple, so they are
        never forwarded.
        """
        return [p.name for p in self.parameters if p.name is not None]

    def declaration(self, name: str) -> str:
        """Render this signature as a named function, e.g. ``fn foo(x: u32)``."""
        return f"{self.head.rstrip()} {name}{self.tail}"

    def __str__(self) -> str:
        return self.text


@dataclass(frozen=True)
class HelperDescriptor:
    """One kernel helper, created once when its declaration is visited.

    :param name: Helper name (``bpf_map_lookup_elem``).
    :param call_index: 1-based discovery ordinal, used as the call address.
    :param signature: The helper's function type.
    :param suppressed: True if the wrapper was emitted commented out.
    """

    name: str
    call_index: int
    signature: Signature
    suppressed: bool = False


@dataclass(frozen=True)
class Span:
    """Half-open byte range ``[start, end)`` in the raw bindings."""

    start: int
    end: int


@dataclass
class ExtractionResult:
    """Everything a single extraction pass produced.

    ``helpers`` and ``wrappers`` are index-aligned and ordered by call index.
    ``removed`` lists the spans of every foreign block (and the outer
    attributes and doc comments above it) that must not survive into the
    bindings artifact.
    """

    source: bytes
    removed: list[Span] = field(default_factory=list)
    helpers: list[HelperDescriptor] = field(default_factory=list)
    wrappers: list[str] = field(default_factory=list)

    def __iter__(self) -> Iterator[tuple[HelperDescriptor, str]]:
        return iter(zip(self.helpers, self.wrappers))

    def __len__(self) -> int:
        return len(self.helpers)
