"""Handle assignment for ``pdftk`` style input lists.

``pdftk`` refers to input files through handles (``A=intro.pdf``). Users may
pass explicit ``HANDLE=file`` tokens, bare handles that refer to those, or
plain filenames. Plain filenames get synthetic ``AH<letter>`` handles in the
order they first appear.
"""

from __future__ import annotations

import logging
import re
import string
from dataclasses import dataclass
from typing import Iterable, Iterator, Mapping, Sequence

from .exceptions import HandleAssignmentError, HandleInvariantError

_LOGGER = logging.getLogger("deskscripts.handles")

BARE_HANDLE_PATTERN = re.compile(r"^[A-Z]+[0-9]*$")
LABEL_PREFIX = "AH"


def has_explicit_handle(token: str) -> bool:
    return "=" in token


def is_bare_handle(token: str) -> bool:
    return BARE_HANDLE_PATTERN.match(token) is not None


def label_sequence(reserved: Iterable[str] = ()) -> Iterator[str]:
    """Yield ``AHA`` to ``AHZ``, skipping labels in *reserved*."""

    taken = set(reserved)
    for letter in string.ascii_uppercase:
        label = f"{LABEL_PREFIX}{letter}"
        if label not in taken:
            yield label


@dataclass(frozen=True)
class HandlePlan:
    """Handles and page sequence for one concatenation."""

    explicit: tuple[str, ...]
    labels: tuple[tuple[str, str], ...]
    sequence: tuple[str, ...]

    def handle_arguments(self) -> list[str]:
        """Explicit tokens as given, then ``label=file`` for each synthesized handle."""

        return [*self.explicit, *(f"{label}={filename}" for filename, label in self.labels)]


def resolve_sequence(tokens: Sequence[str], labels: Mapping[str, str]) -> list[str]:
    """Map every bare token to the handle ``pdftk`` should see.

    Raises:
        HandleInvariantError: If a token is neither a bare handle nor labelled.
    """

    resolved: list[str] = []
    for token in tokens:
        label = labels.get(token)
        if label is not None:
            resolved.append(label)
        elif is_bare_handle(token):
            resolved.append(token)
        else:
            raise HandleInvariantError(f"Found file without automatic handle: {token}")
    return resolved


def assign_handles(tokens: Sequence[str]) -> HandlePlan:
    """Partition *tokens* and give every plain filename a synthetic handle.

    Raises:
        HandleAssignmentError: If there are more distinct filenames than
            available labels.
    """

    explicit = [token for token in tokens if has_explicit_handle(token)]
    bare = [token for token in tokens if not has_explicit_handle(token)]

    reserved = {token.split("=", 1)[0] for token in explicit}
    available = label_sequence(reserved)

    labels: dict[str, str] = {}
    for token in bare:
        if is_bare_handle(token) or token in labels:
            continue
        try:
            labels[token] = next(available)
        except StopIteration:
            raise HandleAssignmentError(
                f"Ran out of automatic handles at {token!r}; "
                "label some inputs explicitly with HANDLE=file"
            ) from None
        _LOGGER.debug("Assigned handle %s to %s", labels[token], token)

    sequence = resolve_sequence(bare, labels)
    return HandlePlan(
        explicit=tuple(explicit),
        labels=tuple(labels.items()),
        sequence=tuple(sequence),
    )


__all__ = [
    "BARE_HANDLE_PATTERN",
    "HandlePlan",
    "assign_handles",
    "has_explicit_handle",
    "is_bare_handle",
    "label_sequence",
    "resolve_sequence",
]
