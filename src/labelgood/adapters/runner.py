"""Abstractions for invoking external programs."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
import logging
import shutil
import subprocess
from typing import Protocol, runtime_checkable

from labelgood.core.exceptions import ProgramNotFoundError


logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CommandResult:
    """Exit status and captured streams of a finished command."""

    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    @property
    def detail(self) -> str:
        """Return stderr, or stdout when stderr is empty."""
        return (self.stderr or "").strip() or (self.stdout or "").strip()


@runtime_checkable
class CommandRunner(Protocol):
    """Capability running ``program`` with ``args`` until it exits.

    Implementations raise :class:`ProgramNotFoundError` when the program is
    not installed; any other outcome is reported through the result.
    """

    def run(self, program: str, args: Sequence[str]) -> CommandResult: ...


class SubprocessRunner:
    """Runner backed by :func:`subprocess.run` with captured text output."""

    def __init__(self, *, search_path: str | None = None) -> None:
        self._search_path = search_path
        self._cache: dict[str, str | None] = {}

    def reset(self) -> None:
        """Clear cached executable lookup results."""
        self._cache.clear()

    def resolve(self, program: str) -> str | None:
        """Return the absolute executable path, or None when not installed."""
        if program not in self._cache:
            try:
                self._cache[program] = shutil.which(program, path=self._search_path)
            except (OSError, ValueError):
                self._cache[program] = None
        return self._cache[program]

    def run(self, program: str, args: Sequence[str]) -> CommandResult:
        executable = self.resolve(program)
        if executable is None:
            raise ProgramNotFoundError(program)

        command = [executable, *args]
        logger.debug("Running %s", command)
        try:
            completed = subprocess.run(
                command,
                check=False,
                capture_output=True,
                text=True,
                errors="replace",
            )
        except FileNotFoundError as exc:
            self._cache.pop(program, None)
            raise ProgramNotFoundError(program, str(exc)) from exc
        except OSError as exc:
            # 126 mirrors the shell's "found but cannot execute" status.
            return CommandResult(returncode=126, stderr=f"Failed to execute {program}: {exc}")

        return CommandResult(
            returncode=completed.returncode,
            stdout=completed.stdout or "",
            stderr=completed.stderr or "",
        )


_default_runner = SubprocessRunner()


def default_runner() -> SubprocessRunner:
    """Return the shared subprocess runner."""
    return _default_runner


__all__ = [
    "CommandResult",
    "CommandRunner",
    "SubprocessRunner",
    "default_runner",
]
