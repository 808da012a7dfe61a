"""Serialize extracted helpers to JSON.

The manifest lists every helper with its call index and signature. It is
meant for inspection and for tools that need the helper numbering without
parsing Rust.
"""

from __future__ import annotations

import json
from typing import Any

from bpfgen.ir import ExtractionResult, HelperDescriptor, Parameter


def _param_to_dict(p: Parameter) -> dict[str, Any]:
    d: dict[str, Any] = {"type": p.type}
    if p.name is not None:
        d["name"] = p.name
    return d


def _helper_to_dict(helper: HelperDescriptor) -> dict[str, Any]:
    """Convert a HelperDescriptor to a JSON-serializable dict."""
    sig = helper.signature
    d: dict[str, Any] = {
        "name": helper.name,
        "call_index": helper.call_index,
        "parameters": [_param_to_dict(p) for p in sig.parameters],
        "is_variadic": sig.is_variadic,
        "signature": sig.text,
    }
    if sig.return_type is not None:
        d["return_type"] = sig.return_type
    if helper.suppressed:
        d["suppressed"] = True
    return d


def result_to_json_dict(result: ExtractionResult) -> dict[str, Any]:
    """Convert an ExtractionResult to a JSON-serializable dict.

    :param result: Output of :func:`~bpfgen.extract.extract_helpers`.
    :returns: Dict suitable for ``json.dumps()``.
    """
    return {
        "helpers": [_helper_to_dict(h) for h in result.helpers],
        "removed_blocks": len(result.removed),
    }


def result_to_json(result: ExtractionResult, indent: int | None = 2) -> str:
    """Convert an ExtractionResult to a JSON string.

    :param result: Output of :func:`~bpfgen.extract.extract_helpers`.
    :param indent: JSON indentation level. None for compact output.
    """
    return json.dumps(result_to_json_dict(result), indent=indent)


class JsonWriter:
    """Writer that serializes the helper manifest to JSON.

    Options
    -------
    indent : int | None
        JSON indentation level. Defaults to 2. None for compact output.
    """

    def __init__(self, indent: int | None = 2) -> None:
        self._indent = indent

    def write(self, result: ExtractionResult) -> str:
        """Convert the extraction result to a JSON string."""
        return result_to_json(result, indent=self._indent)

    @property
    def name(self) -> str:
        """Human-readable name of this writer."""
        return "json"
