"""Exceptions raised by the bpfgen pipeline.

Every failure is fatal: the pipeline stops at the first error and leaves any
artifacts already written on disk. Each exception carries the ``stage`` that
failed so the command line can report it in a single line.
"""

from __future__ import annotations

from pathlib import Path


class CodegenError(RuntimeError):
    """Base class for all pipeline failures."""

    stage = "codegen"


class GeneratorError(CodegenError):
    """bindgen could not be run, or exited with a non-zero status."""

    stage = "bindgen"

    def __init__(self, message: str, returncode: int | None = None) -> None:
        super().__init__(message)
        self.returncode = returncode


class ParseError(CodegenError):
    """bindgen output is not valid Rust.

    This points at a bindgen version mismatch rather than anything that can be
    fixed locally.
    """

    stage = "parse"

    def __init__(self, message: str, line: int | None = None, column: int | None = None) -> None:
        super().__init__(message)
        self.line = line
        self.column = column


class HelperShapeError(CodegenError):
    """A declaration looks like a helper but its type is not ``Option<fn(..)>``."""

    stage = "extract"

    def __init__(self, name: str, message: str) -> None:
        super().__init__(f"{name}: {message}")
        self.name = name


class FormatterError(CodegenError):
    """rustfmt could not be run, or exited with a non-zero status."""

    stage = "rustfmt"

    def __init__(self, path: Path, message: str, returncode: int | None = None) -> None:
        super().__init__(message)
        self.path = path
        self.returncode = returncode
