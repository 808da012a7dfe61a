"""Format generated Rust files in place with rustfmt."""

from __future__ import annotations

import logging
import subprocess
import sys
from pathlib import Path

from bpfgen.errors import FormatterError

logger = logging.getLogger(__name__)


def run_rustfmt(path: Path, rustfmt: str = "rustfmt") -> None:
    """Format ``path`` in place.

    :param path: Rust source file to format.
    :param rustfmt: rustfmt executable.
    :raises FormatterError: If rustfmt cannot be started or exits with a
        non-zero status. The file is left as written.
    """
    cmd = [rustfmt, str(path)]
    logger.info("+ %s", " ".join(cmd))
    try:
        result = subprocess.run(cmd, capture_output=True, encoding="utf-8", check=False)
    except OSError as e:
        raise FormatterError(path, f"could not run {rustfmt}: {e}") from e

    if result.returncode != 0:
        sys.stderr.write(result.stderr)
        raise FormatterError(
            path,
            f"rustfmt failed on {path}: exit status {result.returncode}",
            returncode=result.returncode,
        )
