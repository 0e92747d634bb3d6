"""Shared pytest fixtures for the expressgen test suite.

Provides reusable fixtures for:
- Template renderers and option sets
- Running the command line in a temporary working directory
- Parsing ``create :`` lines out of captured output
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path

import pytest

from expressgen.cli import main
from expressgen.config import GenerateOptions
from expressgen.scaffolder.templates import TemplateRenderer

_ANSI_ESCAPE = re.compile(r"\x1b\[[0-9;]*m")
_CREATE_LINE = re.compile(r"create\s*:\s*(.+)$")


def parse_created_files(output: str) -> list[str]:
    """Return the paths named by ``create :`` lines, normalised to ``/``.

    Trailing separators on directory lines are dropped.
    """
    files: list[str] = []
    for line in _ANSI_ESCAPE.sub("", output).splitlines():
        match = _CREATE_LINE.search(line)
        if match:
            files.append(match.group(1).strip().replace("\\", "/").rstrip("/"))
    return files


@dataclass
class CliResult:
    code: int
    stdout: str
    stderr: str
    files: list[str] = field(default_factory=list)


# ---------------------------------------------------------------------------
# Options & templates
# ---------------------------------------------------------------------------

@pytest.fixture
def renderer() -> TemplateRenderer:
    """Renderer over the built-in fragment catalogue."""
    return TemplateRenderer()


@pytest.fixture
def view_options() -> GenerateOptions:
    """Default options: ejs views, generate into the current directory."""
    return GenerateOptions()


@pytest.fixture
def no_view_options() -> GenerateOptions:
    return GenerateOptions(view=False)


# ---------------------------------------------------------------------------
# Paths & Directories
# ---------------------------------------------------------------------------

@pytest.fixture
def app_dir(tmp_path: Path) -> Path:
    """Empty working directory with a predictable name."""
    directory = tmp_path / "my-app"
    directory.mkdir()
    return directory


# ---------------------------------------------------------------------------
# Command-line runner
# ---------------------------------------------------------------------------

@pytest.fixture
def run_cli(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]):
    """Run ``expressgen.cli.main`` inside *cwd* and capture its streams.

    ``answer`` is what the operator types at the confirmation prompt.  When it
    is omitted, reaching the prompt fails the test.
    """

    def _run(cwd: Path, *args: str, answer: str | None = None) -> CliResult:
        monkeypatch.chdir(cwd)

        def _input(*_prompt: object) -> str:
            if answer is None:
                pytest.fail("unexpected confirmation prompt")
            return answer

        monkeypatch.setattr("builtins.input", _input)
        code = main(list(args))
        out, err = capsys.readouterr()
        return CliResult(code, out, err, parse_created_files(out))

    return _run
