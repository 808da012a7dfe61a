"""Command line entry point.

Usage::

    python -m bpfgen --libbpf-dir PATH [--manifest FILE]
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from bpfgen.pipeline import CodegenOptions, codegen
from bpfgen.errors import CodegenError


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="python -m bpfgen",
        description="Generate aya-bpf bindings and kernel helper wrappers.",
    )
    parser.add_argument(
        "--libbpf-dir",
        required=True,
        type=Path,
        help="Path to a libbpf source checkout (its src/ directory is used as an include path)",
    )
    parser.add_argument(
        "--manifest",
        type=Path,
        default=None,
        help="Also write a JSON manifest of the helpers and their call indices to this file",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    try:
        files = codegen(CodegenOptions(libbpf_dir=args.libbpf_dir, manifest=args.manifest))
    except CodegenError as e:
        print(f"error: {e.stage}: {e}", file=sys.stderr)
        return 1

    print(f"generated {files.bindings} and {files.helpers}")
    if files.manifest is not None:
        print(f"wrote helper manifest to {files.manifest}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
