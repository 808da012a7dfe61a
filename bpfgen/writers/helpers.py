"""Write the synthesized helper wrappers.

The helpers module starts with a glob import of the bindings module, since
helper signatures refer to the types bindgen generated there, followed by
every wrapper in call-index order. Suppressed wrappers are already commented
out by the extractor and are written like any other.
"""

from __future__ import annotations

from bpfgen.ir import ExtractionResult

BINDINGS_IMPORT = "use crate::bpf::generated::bindings::*;"


def result_to_helpers(result: ExtractionResult, import_line: str = BINDINGS_IMPORT) -> str:
    """Render the helpers artifact for ``result``.

    :param result: Output of :func:`~bpfgen.extract.extract_helpers`.
    :param import_line: Line that brings the bindings into scope.
    :returns: Rust source for the helpers module.
    """
    parts = [import_line + "\n"]
    parts.extend(wrapper if wrapper.endswith("\n") else wrapper + "\n" for wrapper in result.wrappers)
    return "\n".join(parts)


class HelpersWriter:
    """Writer that emits one inline wrapper function per helper.

    Options
    -------
    import_line : str
        Line that imports the bindings module. Defaults to
        ``use crate::bpf::generated::bindings::*;``.
    """

    def __init__(self, import_line: str = BINDINGS_IMPORT) -> None:
        self._import_line = import_line

    def write(self, result: ExtractionResult) -> str:
        """Render the helpers artifact."""
        return result_to_helpers(result, self._import_line)

    @property
    def name(self) -> str:
        """Human-readable name of this writer."""
        return "helpers"
