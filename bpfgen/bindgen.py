"""Run bindgen over the aya-bpf bindings header.

The bindgen invocation is fixed: only the libbpf source directory, which
supplies the include path, varies between runs.
"""

from __future__ import annotations

import logging
import subprocess
import sys
from pathlib import Path

from bpfgen.errors import GeneratorError

logger = logging.getLogger(__name__)

CTYPES_PREFIX = "::aya_bpf_cty"
TYPE_ALLOWLIST = ("bpf_map_.*", "sk_action")
VAR_ALLOWLIST = ("BPF_.*", "bpf_.*")


def bindgen_command(header: Path, libbpf_dir: Path, bindgen: str = "bindgen") -> list[str]:
    """Build the bindgen command line.

    :param header: Header to generate bindings for.
    :param libbpf_dir: libbpf checkout; its ``src`` directory is added to the
        include path.
    :param bindgen: bindgen executable.
    :returns: Argument list for :func:`subprocess.run`.
    """
    cmd = [
        bindgen,
        "--no-layout-tests",
        "--use-core",
        "--ctypes-prefix",
        CTYPES_PREFIX,
        "--default-enum-style",
        "consts",
        "--no-prepend-enum-name",
        str(header),
    ]
    for pattern in TYPE_ALLOWLIST:
        cmd += ["--allowlist-type", pattern]
    for pattern in VAR_ALLOWLIST:
        cmd += ["--allowlist-var", pattern]
    cmd += ["--", "-I", str(libbpf_dir / "src")]
    return cmd


def run_bindgen(cmd: list[str]) -> str:
    """Run bindgen and return the generated Rust source.

    Blocks until bindgen exits. On failure bindgen's stderr is copied to our
    stderr before raising.

    :param cmd: Command from :func:`bindgen_command`.
    :returns: bindgen's standard output.
    :raises GeneratorError: If bindgen cannot be started, its output cannot
        be decoded, or it exits with a non-zero status.
    """
    logger.info("+ %s", " ".join(cmd))
    try:
        result = subprocess.run(cmd, capture_output=True, encoding="utf-8", check=False)
    except (OSError, UnicodeDecodeError) as e:
        raise GeneratorError(f"could not run {cmd[0]}: {e}") from e

    if result.returncode != 0:
        sys.stderr.write(result.stderr)
        raise GeneratorError(f"bindgen failed: exit status {result.returncode}", returncode=result.returncode)

    return result.stdout
