"""bpfgen - aya-bpf kernel binding and helper generator."""

from bpfgen.pipeline import CodegenOptions, GeneratedFiles, codegen
from bpfgen.errors import (
    CodegenError,
    FormatterError,
    GeneratorError,
    HelperShapeError,
    ParseError,
)
from bpfgen.extract import extract_helpers, invoke_by_fixed_index, synthesize_wrapper
from bpfgen.ir import (
    ExtractionResult,
    HelperDescriptor,
    Parameter,
    Signature,
    Span,
)
from bpfgen.parser import BindingsTree, parse_bindings
from bpfgen.writers import WRITERS, WriterBackend, get_writer

__all__ = [
    # Data model
    "Parameter",
    "Signature",
    "HelperDescriptor",
    "Span",
    "ExtractionResult",
    # Errors
    "CodegenError",
    "GeneratorError",
    "ParseError",
    "HelperShapeError",
    "FormatterError",
    # Parsing and extraction
    "BindingsTree",
    "parse_bindings",
    "extract_helpers",
    "invoke_by_fixed_index",
    "synthesize_wrapper",
    # Pipeline
    "CodegenOptions",
    "GeneratedFiles",
    "codegen",
    # Writer Protocol
    "WriterBackend",
    # Writer API
    "WRITERS",
    "get_writer",
]
