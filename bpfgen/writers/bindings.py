"""Write the raw bindings with every ``extern`` block removed.

The output is the bindgen source, byte for byte, minus the spans recorded by
:func:`~bpfgen.extract.extract_helpers`. Each deleted span also takes the
spaces and the single newline that follow it, so removed blocks do not leave
empty lines behind.
"""

from __future__ import annotations

from bpfgen.ir import ExtractionResult, Span


def _extend_over_newline(source: bytes, end: int) -> int:
    while end < len(source) and source[end : end + 1] in (b" ", b"\t", b"\r"):
        end += 1
    if source[end : end + 1] == b"\n":
        end += 1
    return end


def strip_spans(source: bytes, spans: list[Span]) -> bytes:
    """Return ``source`` without the bytes covered by ``spans``."""
    kept: list[bytes] = []
    pos = 0
    for span in sorted(spans, key=lambda s: s.start):
        if span.start < pos:
            # Overlapping spans cannot come out of the extractor.
            raise ValueError(f"overlapping span {span} (already at byte {pos})")
        kept.append(source[pos : span.start])
        pos = _extend_over_newline(source, span.end)
    kept.append(source[pos:])
    return b"".join(kept)


def result_to_bindings(result: ExtractionResult) -> str:
    """Render the bindings artifact for ``result``."""
    return strip_spans(result.source, result.removed).decode("utf-8")


class BindingsWriter:
    """Writer that emits bindgen's output without its extern blocks.

    Example
    -------
    ::

        from bpfgen.writers import get_writer

        text = get_writer("bindings").write(result)
    """

    def write(self, result: ExtractionResult) -> str:
        """Render the bindings artifact."""
        return result_to_bindings(result)

    @property
    def name(self) -> str:
        """Human-readable name of this writer."""
        return "bindings"
