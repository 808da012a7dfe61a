"""Generate the aya-bpf bindings and helpers modules.

The pipeline is strictly linear and stops at the first failure::

    bindgen -> parse -> extract -> write both files -> rustfmt both files

Files already written when a later step fails are left on disk. When
:attr:`CodegenOptions.manifest` is set, a JSON manifest of the helpers is
written there as well. rustfmt does not touch it.

Example
-------
::

    from pathlib import Path

    from bpfgen.pipeline import CodegenOptions, codegen

    files = codegen(CodegenOptions(libbpf_dir=Path("../libbpf")))
    print(files.helpers)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from bpfgen.bindgen import bindgen_command, run_bindgen
from bpfgen.extract import extract_helpers
from bpfgen.parser import parse_bindings
from bpfgen.rustfmt import run_rustfmt
from bpfgen.writers import get_writer

logger = logging.getLogger(__name__)

CRATE_DIR = Path("bpf/aya-bpf")
HEADER = Path("include/aya_bpf_bindings.h")
GENERATED_DIR = Path("src/bpf/generated")
BINDINGS_FILE = "bindings.rs"
HELPERS_FILE = "helpers.rs"


@dataclass
class CodegenOptions:
    """Options for :func:`codegen`.

    :param libbpf_dir: libbpf source checkout, used for the include path.
    :param root: Repository root that contains the aya-bpf crate.
    :param bindgen: bindgen executable.
    :param rustfmt: rustfmt executable.
    :param manifest: If set, also write a JSON helper manifest to this path.
    """

    libbpf_dir: Path
    root: Path = field(default_factory=Path)
    bindgen: str = "bindgen"
    rustfmt: str = "rustfmt"
    manifest: Path | None = None

    @property
    def crate_dir(self) -> Path:
        return self.root / CRATE_DIR

    @property
    def generated_dir(self) -> Path:
        return self.crate_dir / GENERATED_DIR


@dataclass(frozen=True)
class GeneratedFiles:
    """Paths of the generated artifacts."""

    bindings: Path
    helpers: Path
    manifest: Path | None = None


def _write_artifact(path: Path, text: str) -> None:
    logger.info("writing %s", path)
    path.write_text(text, encoding="utf-8")


def codegen(opts: CodegenOptions) -> GeneratedFiles:
    """Regenerate ``bindings.rs`` and ``helpers.rs``, and the manifest if asked.

    :param opts: Pipeline options.
    :returns: Paths of the written files.
    :raises CodegenError: From whichever stage failed first.
    """
    cmd = bindgen_command(opts.crate_dir / HEADER, opts.libbpf_dir, bindgen=opts.bindgen)
    raw = run_bindgen(cmd)

    tree = parse_bindings(raw)
    result = extract_helpers(tree)

    opts.generated_dir.mkdir(parents=True, exist_ok=True)
    files = GeneratedFiles(
        bindings=opts.generated_dir / BINDINGS_FILE,
        helpers=opts.generated_dir / HELPERS_FILE,
        manifest=opts.manifest,
    )
    _write_artifact(files.bindings, get_writer("bindings").write(result))
    _write_artifact(files.helpers, get_writer("helpers").write(result))
    if files.manifest is not None:
        files.manifest.parent.mkdir(parents=True, exist_ok=True)
        _write_artifact(files.manifest, get_writer("json").write(result) + "\n")

    run_rustfmt(files.bindings, rustfmt=opts.rustfmt)
    run_rustfmt(files.helpers, rustfmt=opts.rustfmt)
    return files
