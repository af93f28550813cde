"""PDF concatenation through ``pdftk``."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Sequence

from pypdf import PdfReader

from .exceptions import HandleAssignmentError, PdfValidationError
from .handles import HandlePlan, assign_handles
from .process import CommandRunner, Runner, run_success
from .utils import PathLike, ensure_parent_dir, ensure_path

LOGGER = logging.getLogger("deskscripts.pdf")

PDFTK = "pdftk"


def split_handle_token(token: str) -> tuple[str, str]:
    """Split a ``HANDLE=file`` token on its first ``=``."""

    handle, _, filename = token.partition("=")
    return handle, filename


def input_files(plan: HandlePlan) -> list[Path]:
    """Return every file *plan* hands to ``pdftk``, in argument order."""

    files = [Path(split_handle_token(token)[1]) for token in plan.explicit]
    files.extend(Path(filename) for filename, _ in plan.labels)
    return files


def validate_pdf(path: PathLike) -> bool:
    """Return ``True`` if *path* points to a readable PDF with pages.

    ``PdfValidationError`` is raised otherwise.
    """

    pdf_path = ensure_path(path)
    LOGGER.debug("Validating PDF at %s", pdf_path)
    if not pdf_path.is_file():
        LOGGER.error("PDF %s does not exist", pdf_path)
        raise PdfValidationError(f"PDF file not found: {path}")

    try:
        reader = PdfReader(str(pdf_path))
        if reader.is_encrypted:
            reader.decrypt("")
        page_count = len(reader.pages)
    except Exception as exc:
        LOGGER.error("Failed to read PDF %s: %s", pdf_path, exc)
        raise PdfValidationError(f"Unable to read PDF: {path}") from exc

    if page_count == 0:
        LOGGER.error("PDF %s contains no pages", pdf_path)
        raise PdfValidationError(f"PDF contains no pages: {path}")

    return True


def build_cat_command(plan: HandlePlan, output: PathLike, executable: str = PDFTK) -> list[str]:
    """Return the ``pdftk`` invocation that concatenates *plan* into *output*."""

    return [
        executable,
        *plan.handle_arguments(),
        "cat",
        *plan.sequence,
        "output",
        str(output),
    ]


def concatenate(
    tokens: Sequence[str],
    output: PathLike,
    *,
    runner: Runner | None = None,
    validate: bool = True,
) -> Path:
    """Concatenate the pages named by *tokens* into *output*.

    Args:
        tokens: ``HANDLE=file`` tokens, bare handles and plain filenames.
        output: Destination PDF path.
        runner: Command runner used to invoke ``pdftk``.
        validate: Check every input with :mod:`pypdf` before running ``pdftk``.

    Raises:
        HandleAssignmentError: If *tokens* is empty or cannot be labelled.
        PdfValidationError: If an input file is not a readable PDF.
        CommandError: If ``pdftk`` fails.
    """

    if not tokens:
        raise HandleAssignmentError("No input files provided")

    plan = assign_handles(tokens)
    if validate:
        for pdf_path in input_files(plan):
            validate_pdf(pdf_path)

    output_path = Path(output)
    ensure_parent_dir(ensure_path(output_path))

    command = build_cat_command(plan, output_path)
    LOGGER.debug("Running pdftk command: %s", command)
    run_success(command, runner=runner or CommandRunner())

    LOGGER.info("Concatenated %d input(s) into %s", len(plan.sequence), output_path)
    return output_path


__all__ = ["build_cat_command", "concatenate", "input_files", "split_handle_token", "validate_pdf"]
