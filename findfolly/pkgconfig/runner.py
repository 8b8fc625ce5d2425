# SPDX-License-Identifier: MIT
"""Run pkg-config and capture its output.

Discovery talks to pkg-config through the QueryRunner protocol so tests
can substitute canned output for the real tool. PkgConfigRunner is the
implementation that actually spawns the process.
"""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

from findfolly.config import pkg_config_command

if TYPE_CHECKING:
    from collections.abc import Sequence

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class QueryOutput:
    """Captured result of one pkg-config invocation.

    Attributes:
        stdout: Raw standard output.
        stderr: Raw standard error.
        returncode: Exit status of the process.
    """

    stdout: bytes
    stderr: bytes = b""
    returncode: int = 0

    @property
    def ok(self) -> bool:
        """True if the process exited successfully."""
        return self.returncode == 0

    def text(self, what: str = "pkg-config") -> str:
        """Decode stdout as UTF-8.

        pkg-config always writes text, so undecodable output means the
        host is broken rather than the package missing. That is not a
        reportable discovery error.

        Args:
            what: Description of the query, used in the failure message.

        Raises:
            AssertionError: If stdout is not valid UTF-8.
        """
        try:
            return self.stdout.decode("utf-8")
        except UnicodeDecodeError as e:
            raise AssertionError(f"`{what}` output wasn't UTF-8!") from e

    def error_text(self) -> str:
        """Decode stderr, replacing anything undecodable."""
        return self.stderr.decode("utf-8", errors="replace")


class QueryRunner(Protocol):
    """Anything that can answer a pkg-config query."""

    def run(self, args: Sequence[str]) -> QueryOutput:
        """Run pkg-config with ``args``.

        Raises:
            OSError: If the query mechanism couldn't be launched.
        """
        ...


class PkgConfigRunner:
    """Run the real pkg-config executable.

    Attributes:
        command: The executable to run. Defaults to the PKG_CONFIG
            variable, or "pkg-config".
    """

    def __init__(self, command: str | None = None) -> None:
        self.command = command or pkg_config_command()

    def run(self, args: Sequence[str]) -> QueryOutput:
        cmd = [self.command, *args]
        logger.debug("Running: %s", " ".join(cmd))
        # No timeout: a hung pkg-config hangs discovery.
        result = subprocess.run(cmd, capture_output=True)
        logger.debug("%s exited with status %d", self.command, result.returncode)
        return QueryOutput(
            stdout=result.stdout,
            stderr=result.stderr,
            returncode=result.returncode,
        )

    def __repr__(self) -> str:
        return f"PkgConfigRunner(command={self.command!r})"
