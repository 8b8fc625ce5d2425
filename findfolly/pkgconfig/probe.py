# SPDX-License-Identifier: MIT
"""Probe a well-behaved pkg-config package.

This is the standard way of finding a dependency: ask pkg-config for its
compile and link flags, emit search and link directives for them, and
return what was found. It is only used for packages whose .pc files are
trustworthy; Folly itself needs the workarounds in findfolly.discovery.

Example:
    fmt = probe("fmt", sink=sink)
    env.cxx.includes += fmt.include_paths
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from findfolly.config import directive_prefix
from findfolly.core.directives import StreamDirectiveSink
from findfolly.core.errors import PkgConfigError
from findfolly.core.flags import (
    DEFINE_FLAG,
    INCLUDE_FLAG,
    LIB_DIR_FLAG,
    LINK_LIB_FLAG,
    split_shell_flags,
    strip_flag,
)
from findfolly.pkgconfig.runner import PkgConfigRunner

if TYPE_CHECKING:
    from findfolly.core.directives import DirectiveSink
    from findfolly.pkgconfig.runner import QueryRunner

logger = logging.getLogger(__name__)


@dataclass
class Library:
    """A package found through pkg-config.

    Attributes:
        name: The pkg-config package name.
        version: Version reported by ``--modversion`` (may be empty).
        libs: Library names from ``-l`` flags.
        link_paths: Directories from ``-L`` flags.
        include_paths: Directories from ``-I`` flags.
        defines: Preprocessor definitions from ``-D`` flags (NAME or NAME=VALUE).
        other_flags: Any remaining flags, in order.
    """

    name: str
    version: str = ""
    libs: list[str] = field(default_factory=list)
    link_paths: list[Path] = field(default_factory=list)
    include_paths: list[Path] = field(default_factory=list)
    defines: list[str] = field(default_factory=list)
    other_flags: list[str] = field(default_factory=list)

    def add_flags(self, tokens: list[str]) -> None:
        """Sort pkg-config tokens into this library's fields."""
        for token in tokens:
            if (value := strip_flag(token, LIB_DIR_FLAG)) is not None:
                self.link_paths.append(Path(value))
            elif (value := strip_flag(token, LINK_LIB_FLAG)) is not None:
                self.libs.append(value)
            elif (value := strip_flag(token, INCLUDE_FLAG)) is not None:
                self.include_paths.append(Path(value))
            elif (value := strip_flag(token, DEFINE_FLAG)) is not None:
                self.defines.append(value)
            else:
                self.other_flags.append(token)


def _run(runner: QueryRunner, name: str, args: list[str]) -> str:
    """Run one query, turning every failure into PkgConfigError."""
    cmd = " ".join(args)
    try:
        output = runner.run(args)
    except OSError as e:
        raise PkgConfigError(name, f"could not run pkg-config: {e}") from e

    if not output.ok:
        stderr = output.error_text().strip()
        message = f"`pkg-config {cmd}` exited with status {output.returncode}"
        if stderr:
            message += f"\n{stderr}"
        raise PkgConfigError(name, message)

    return output.text(f"pkg-config {cmd}")


def probe(
    name: str,
    *,
    runner: QueryRunner | None = None,
    sink: DirectiveSink | None = None,
    static_link: bool = True,
) -> Library:
    """Find a package with pkg-config and emit its link directives.

    Search directories are emitted before library names so each library
    can be resolved from the directories announced ahead of it.

    Args:
        name: pkg-config package name (e.g., "fmt").
        runner: Query runner (default: PkgConfigRunner()).
        sink: Where to emit directives (default: stdout).
        static_link: Request flags for static linking.

    Returns:
        The Library that was found.

    Raises:
        PkgConfigError: If pkg-config can't be run or doesn't know the package.
    """
    if runner is None:
        runner = PkgConfigRunner()
    if sink is None:
        sink = StreamDirectiveSink(prefix=directive_prefix())

    args = ["--libs", "--cflags", name]
    if static_link:
        args.insert(0, "--static")

    library = Library(name=name)
    library.add_flags(split_shell_flags(_run(runner, name, args)))
    library.version = _run(runner, name, ["--modversion", name]).strip()

    for path in library.link_paths:
        sink.link_search(path)
    for lib in library.libs:
        sink.link_lib(lib)

    logger.info("Found %s %s", name, library.version or "(unknown version)")
    return library
