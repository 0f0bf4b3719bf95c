"""Expand command line arguments into an ordered stream of files to process."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from ..config.constants import OVERRIDE_FLAGS
from .base import SkipReason

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

LOG = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProcessingUnit:
    """One file to process, with the container override active when it was reached."""

    path: Path
    override: str | None = None
    skip_reason: SkipReason | None = None


def _discover_files(directory: Path) -> list[Path]:
    """Regular files below a directory, in traversal order, listed before any is processed."""
    return [f for f in directory.glob("**/*") if f.is_file() and not f.is_symlink()]


def walk_arguments(arguments: Iterable[str]) -> Iterator[ProcessingUnit]:
    """
    Yield processing units strictly in argument order.

    Override flags change the container override for every later argument.
    Missing or irregular paths yield a unit carrying a skip reason so the
    caller can report them.
    """
    override: str | None = None
    for argument in arguments:
        if argument in OVERRIDE_FLAGS:
            override = OVERRIDE_FLAGS[argument]
            LOG.debug("Container override set to %s", override)
            continue

        path = Path(argument)
        if not path.exists():
            LOG.warning("File not found (%s). Skipping...", argument)
            yield ProcessingUnit(path, override, SkipReason.NOT_FOUND)
        elif path.is_dir():
            LOG.debug("Scanning directory: %s", path)
            for file_path in _discover_files(path):
                yield ProcessingUnit(file_path, override)
        elif path.is_file():
            yield ProcessingUnit(path, override)
        else:
            LOG.warning("Invalid file (%s). Skipping...", argument)
            yield ProcessingUnit(path, override, SkipReason.INVALID)
