from __future__ import annotations

from pathlib import Path
from typing import Callable, Sequence
import sys

import pytest
from pypdf import PdfWriter

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from deskscripts.exceptions import CommandError  # noqa: E402
from deskscripts.process import CommandResult  # noqa: E402


class FakeRunner:
    """Records commands and answers them from canned stdout."""

    def __init__(self, outputs: dict[tuple[str, ...], str] | None = None) -> None:
        self.outputs = dict(outputs or {})
        self.failures: dict[tuple[str, ...], int] = {}
        self.calls: list[list[str]] = []
        self.hidden_output: list[list[str]] = []

    def fail(self, *command: str, returncode: int = 1) -> None:
        self.failures[tuple(command)] = returncode

    def run(
        self, command: Sequence[str], *, check: bool = True, log_output: bool = True
    ) -> CommandResult:
        argv = [str(part) for part in command]
        self.calls.append(argv)
        if not log_output:
            self.hidden_output.append(argv)
        key = tuple(argv)
        returncode = self.failures.get(key, 0)
        result = CommandResult(
            command=key,
            returncode=returncode,
            stdout=self.outputs.get(key, ""),
            stderr="boom" if returncode else "",
        )
        if check and returncode:
            raise CommandError(
                f"'{' '.join(argv)}' failed with exit code {returncode}: boom",
                command=argv,
                returncode=returncode,
                stderr="boom",
            )
        return result


@pytest.fixture()
def fake_runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture()
def pdf_factory(tmp_path: Path) -> Callable[..., Path]:
    def _create(filename: str, pages: int = 1) -> Path:
        path = tmp_path / filename
        writer = PdfWriter()
        for _ in range(pages):
            writer.add_blank_page(width=72, height=72)
        with path.open("wb") as handle:
            writer.write(handle)
        return path

    return _create


@pytest.fixture()
def empty_pdf(tmp_path: Path) -> Path:
    pdf_path = tmp_path / "empty.pdf"
    writer = PdfWriter()
    with pdf_path.open("wb") as stream:
        writer.write(stream)
    return pdf_path


@pytest.fixture()
def config_factory(tmp_path: Path) -> Callable[[str], Path]:
    def _create(body: str) -> Path:
        path = tmp_path / "scripts.toml"
        path.write_text(body, encoding="utf-8")
        return path

    return _create


VALID_CONFIG = """\
[smtp]
host = "smtp.purelymail.com"
user = "billing@purelymail.com"
port = 465
pass_command = "pass purelymail.com"

[mail]
from = "Jane Doe <billing@purelymail.com>"
"""


@pytest.fixture()
def valid_config(config_factory: Callable[[str], Path]) -> Path:
    return config_factory(VALID_CONFIG)


@pytest.fixture()
def config_text() -> str:
    return VALID_CONFIG
