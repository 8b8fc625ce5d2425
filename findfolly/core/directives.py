# SPDX-License-Identifier: MIT
"""Build directives emitted to the build orchestrator.

Discovery reports two kinds of instructions while it parses pkg-config
output: "add this library search directory" and "link this library".
They are written to a DirectiveSink as they are found, so emission order
is the order the linker will see them in.

Example:
    sink = RecordingDirectiveSink()
    probe_folly(sink=sink)
    env.link.libs += sink.libraries
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Protocol, TextIO

logger = logging.getLogger(__name__)


class DirectiveKind(Enum):
    """Kinds of directive understood by the orchestrator."""

    LINK_SEARCH = "link-search"
    LINK_LIB = "link-lib"


@dataclass(frozen=True)
class Directive:
    """A single build directive.

    Attributes:
        kind: What the orchestrator should do.
        value: The directory (LINK_SEARCH) or library name (LINK_LIB).
    """

    kind: DirectiveKind
    value: str

    def __str__(self) -> str:
        return f"{self.kind.value}={self.value}"


class DirectiveSink(Protocol):
    """Receiver for build directives."""

    def link_search(self, path: Path | str) -> None:
        """Add a library search directory."""
        ...

    def link_lib(self, name: str) -> None:
        """Link against a library by name."""
        ...


class StreamDirectiveSink:
    """Write directives to a text stream, one per line.

    Each line is ``<prefix><kind>=<value>`` and the stream is flushed after
    every line so an orchestrator reading our output sees directives as
    soon as they're produced.

    Attributes:
        stream: Output stream (default: sys.stdout at write time).
        prefix: Text prepended to every line.
    """

    def __init__(self, stream: TextIO | None = None, prefix: str = "") -> None:
        self.stream = stream
        self.prefix = prefix

    def _write(self, directive: Directive) -> None:
        stream = self.stream if self.stream is not None else sys.stdout
        logger.debug("Directive: %s", directive)
        stream.write(f"{self.prefix}{directive}\n")
        stream.flush()

    def link_search(self, path: Path | str) -> None:
        self._write(Directive(DirectiveKind.LINK_SEARCH, str(path)))

    def link_lib(self, name: str) -> None:
        self._write(Directive(DirectiveKind.LINK_LIB, name))

    def __repr__(self) -> str:
        return f"StreamDirectiveSink(prefix={self.prefix!r})"


@dataclass
class RecordingDirectiveSink:
    """Collect directives in memory, preserving emission order.

    Useful for tests and for build scripts that fold the directives into
    their own link configuration instead of printing them.
    """

    directives: list[Directive] = field(default_factory=list)

    def link_search(self, path: Path | str) -> None:
        logger.debug("Recorded link-search=%s", path)
        self.directives.append(Directive(DirectiveKind.LINK_SEARCH, str(path)))

    def link_lib(self, name: str) -> None:
        logger.debug("Recorded link-lib=%s", name)
        self.directives.append(Directive(DirectiveKind.LINK_LIB, name))

    @property
    def search_paths(self) -> list[str]:
        """Library search directories in emission order."""
        return [
            d.value for d in self.directives if d.kind is DirectiveKind.LINK_SEARCH
        ]

    @property
    def libraries(self) -> list[str]:
        """Library names in emission order."""
        return [d.value for d in self.directives if d.kind is DirectiveKind.LINK_LIB]

    @property
    def lines(self) -> list[str]:
        """Directives rendered as they would be written to a stream."""
        return [str(d) for d in self.directives]
