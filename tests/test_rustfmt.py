"""Tests for running rustfmt."""

from __future__ import annotations

import subprocess
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from bpfgen.errors import FormatterError
from bpfgen.rustfmt import run_rustfmt


def _completed(returncode: int = 0, stderr: str = "") -> subprocess.CompletedProcess[str]:
    return subprocess.CompletedProcess(args=[], returncode=returncode, stdout="", stderr=stderr)


class TestRunRustfmt:
    @patch("bpfgen.rustfmt.subprocess.run", return_value=_completed(0))
    def test_success(self, mock_run: MagicMock) -> None:
        run_rustfmt(Path("out/helpers.rs"))
        mock_run.assert_called_once_with(
            ["rustfmt", str(Path("out/helpers.rs"))], capture_output=True, encoding="utf-8", check=False
        )

    @patch("bpfgen.rustfmt.subprocess.run", return_value=_completed(0))
    def test_custom_executable(self, mock_run: MagicMock) -> None:
        run_rustfmt(Path("a.rs"), rustfmt="/usr/local/bin/rustfmt")
        assert mock_run.call_args.args[0][0] == "/usr/local/bin/rustfmt"

    @patch("bpfgen.rustfmt.subprocess.run", return_value=_completed(1, stderr="error: expected item\n"))
    def test_failure_propagates(self, mock_run: MagicMock, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(FormatterError, match="exit status 1") as exc_info:
            run_rustfmt(Path("helpers.rs"))

        assert exc_info.value.path == Path("helpers.rs")
        assert exc_info.value.returncode == 1
        assert exc_info.value.stage == "rustfmt"
        assert "expected item" in capsys.readouterr().err

    @patch("bpfgen.rustfmt.subprocess.run", side_effect=FileNotFoundError(2, "No such file or directory"))
    def test_missing_executable(self, mock_run: MagicMock) -> None:
        with pytest.raises(FormatterError, match="could not run rustfmt") as exc_info:
            run_rustfmt(Path("helpers.rs"))
        assert isinstance(exc_info.value.__cause__, FileNotFoundError)
