"""Writers that turn an extraction result into output files.

Each writer converts one :class:`~bpfgen.ir.ExtractionResult` into the text
of one artifact. The pipeline looks writers up by the name of the artifact
they produce.

Available Writers
-----------------
bindings
    The raw bindings with every ``extern`` block removed.
helpers
    The synthesized helper wrappers, importing the bindings module.
json
    A manifest of the extracted helpers, written on request.

Example
-------
::

    from bpfgen.writers import get_writer

    writer = get_writer("helpers", import_line="use super::bindings::*;")
    text = writer.write(result)
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from bpfgen.ir import ExtractionResult
from bpfgen.writers.bindings import BindingsWriter
from bpfgen.writers.helpers import HelpersWriter
from bpfgen.writers.json import JsonWriter

__all__ = ["WRITERS", "WriterBackend", "get_writer"]


@runtime_checkable
class WriterBackend(Protocol):
    """Interface shared by all writers.

    Writer options (the import line of the helpers writer, the JSON indent)
    are constructor parameters, not arguments to :meth:`write`.
    """

    def write(self, result: ExtractionResult) -> str:
        """Render the artifact for ``result``."""
        ...

    @property
    def name(self) -> str:
        """Name the writer is looked up by."""
        ...


WRITERS: dict[str, type[WriterBackend]] = {
    "bindings": BindingsWriter,
    "helpers": HelpersWriter,
    "json": JsonWriter,
}


def get_writer(name: str, **kwargs: object) -> WriterBackend:
    """Instantiate the writer registered as ``name``.

    :param name: One of the keys of :data:`WRITERS`.
    :param kwargs: Forwarded to the writer constructor.
    :raises ValueError: If no writer has that name.
    """
    try:
        writer_class = WRITERS[name]
    except KeyError:
        raise ValueError(f"Unknown writer: {name!r}. Available: {', '.join(WRITERS)}") from None
    return writer_class(**kwargs)
