# SPDX-License-Identifier: MIT
"""Locate Folly and everything it needs to link.

In theory pkg-config is all you need to find Folly, since it ships a .pc
file. In practice the .pc file doesn't describe all of Folly's
dependencies and it has bugs. probe_folly() knows about these
idiosyncrasies and works around them:

- ``fmt`` and ``gflags`` are missing from the .pc file entirely, so they
  are probed separately.
- Some dependencies are listed as raw archive paths instead of ``-l``
  flags, so the linker output is parsed by hand.
- ``boost_context`` is missing too, and its file name varies between
  systems (``libboost_context.a`` vs ``libboost_context-mt.a``), so it is
  looked up on disk next to Folly.
- On macOS the compiler flags may name the SDK's ``usr/include`` with
  ``-I``, which breaks compilation; it is rewritten to ``-isysroot``.

Example:
    folly = probe_folly()
    env.cxx.includes += folly.include_paths
    env.cxx.flags += folly.other_cflags
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import TYPE_CHECKING

from findfolly.config import directive_prefix, folly_package, strict_mode
from findfolly.core.directives import StreamDirectiveSink
from findfolly.core.errors import (
    AuxiliaryDependencyNotFoundError,
    PackageQueryFailedError,
    PkgConfigError,
    QueryMechanismUnavailableError,
    VariantDependencyNotFoundError,
)
from findfolly.core.flags import (
    INCLUDE_FLAG,
    LIB_DIR_FLAG,
    LIB_NAME_PREFIX,
    LINK_LIB_FLAG,
    SYSROOT_FLAG,
    is_flag,
    split_shell_flags,
    split_whitespace_flags,
    strip_flag,
)
from findfolly.pkgconfig.probe import probe
from findfolly.pkgconfig.runner import PkgConfigRunner

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from findfolly.core.directives import DirectiveSink
    from findfolly.pkgconfig.runner import QueryRunner

logger = logging.getLogger(__name__)

# Dependencies missing from Folly's .pc file, probed the standard way.
AUXILIARY_DEPENDENCIES = ("fmt", "gflags")

# Accepted names for boost_context, in preference order.
BOOST_CONTEXT_VARIANTS = ("boost_context", "boost_context-mt")

# System headers under this SDK root must be selected with -isysroot.
MACOS_SDK_ROOT = PurePosixPath("/Library/Developer/CommandLineTools/SDKs")
MACOS_SDK_INCLUDE_SUFFIX = ("usr", "include")


@dataclass(frozen=True)
class DiscoveryResult:
    """Everything needed to compile against Folly.

    Link libraries and search directories are emitted as directives while
    discovery runs; this holds what the caller must add to its own
    compiler invocation.

    Attributes:
        lib_dirs: Library search directories, in discovery order.
        include_paths: Include directories, in order, duplicates kept.
        other_cflags: Extra compiler flags; flag/value pairs are adjacent.
    """

    lib_dirs: tuple[Path, ...] = ()
    include_paths: tuple[Path, ...] = ()
    other_cflags: tuple[str, ...] = ()

    @property
    def compile_flags(self) -> list[str]:
        """Include flags followed by the extra compiler flags."""
        flags = [f"{INCLUDE_FLAG}{p}" for p in self.include_paths]
        flags.extend(self.other_cflags)
        return flags

    @property
    def search_flags(self) -> list[str]:
        """Linker search flags for every library directory."""
        return [f"{LIB_DIR_FLAG}{d}" for d in self.lib_dirs]

    def to_dict(self) -> dict[str, list[str]]:
        """Convert to a JSON-friendly dict."""
        return {
            "lib_dirs": [str(d) for d in self.lib_dirs],
            "include_paths": [str(p) for p in self.include_paths],
            "other_cflags": list(self.other_cflags),
        }


def _query(runner: QueryRunner, package: str, mode: str, *, strict: bool) -> str:
    """Ask pkg-config for Folly's ``--libs`` or ``--cflags``."""
    args = ["--static", mode, package]
    try:
        output = runner.run(args)
    except OSError as e:
        raise QueryMechanismUnavailableError(package, e) from e

    if not output.ok:
        if strict:
            raise PackageQueryFailedError(args, output.returncode, output.error_text())
        logger.warning(
            "pkg-config %s exited with status %d; using its output anyway",
            " ".join(args),
            output.returncode,
        )

    return output.text(f"pkg-config {mode}")


def _probe_auxiliary(runner: QueryRunner, sink: DirectiveSink) -> None:
    for name in AUXILIARY_DEPENDENCIES:
        try:
            probe(name, runner=runner, sink=sink, static_link=True)
        except PkgConfigError as e:
            raise AuxiliaryDependencyNotFoundError(name, e) from e


def _parse_libs(text: str, sink: DirectiveSink) -> list[Path]:
    """Parse linker output, emitting link directives as they're found.

    Returns the ``-L`` directories; their search directives are emitted
    later, together with the boost_context lookup.
    """
    lib_dirs: list[Path] = []
    for token in split_shell_flags(text):
        if is_flag(token):
            if (rest := strip_flag(token, LIB_DIR_FLAG)) is not None:
                lib_dirs.append(Path(rest))
            elif (rest := strip_flag(token, LINK_LIB_FLAG)) is not None:
                sink.link_lib(rest)
            continue

        # Some dependencies are listed as raw archive paths.
        path = Path(token)
        stem = path.stem
        if not stem or not stem.startswith(LIB_NAME_PREFIX):
            logger.debug("Skipping unrecognized linker token: %s", token)
            continue
        sink.link_search(path.parent)
        sink.link_lib(stem[len(LIB_NAME_PREFIX) :])

    return lib_dirs


def _find_boost_context(
    lib_dirs: Sequence[Path],
    sink: DirectiveSink,
    path_exists: Callable[[str], bool],
) -> str:
    """Emit search directives for ``lib_dirs`` and link boost_context.

    Every directory gets its search directive, even after boost_context
    has been found.

    Raises:
        VariantDependencyNotFoundError: If no directory has either variant.
    """
    found: str | None = None
    for lib_dir in lib_dirs:
        sink.link_search(lib_dir)

        if found is not None:
            continue
        for name in BOOST_CONTEXT_VARIANTS:
            candidate = lib_dir / f"{LIB_NAME_PREFIX}{name}.a"
            if not path_exists(str(candidate)):
                continue
            logger.info("Found %s", candidate)
            sink.link_lib(name)
            found = name
            break

    if found is None:
        raise VariantDependencyNotFoundError(
            [f"{LIB_NAME_PREFIX}{name}.a" for name in BOOST_CONTEXT_VARIANTS]
        )
    return found


def is_macos_sdk_include(path: PurePosixPath) -> bool:
    """Check whether an include path is a macOS SDK's ``usr/include``.

    Examples:
        >>> is_macos_sdk_include(PurePosixPath(
        ...     "/Library/Developer/CommandLineTools/SDKs/MacOSX.sdk/usr/include"))
        True
        >>> is_macos_sdk_include(PurePosixPath("/usr/include"))
        False
    """
    return (
        path.is_relative_to(MACOS_SDK_ROOT)
        and path.parts[-len(MACOS_SDK_INCLUDE_SUFFIX) :] == MACOS_SDK_INCLUDE_SUFFIX
    )


def _parse_cflags(text: str) -> tuple[list[Path], list[str]]:
    """Parse compiler output into include paths and extra flags."""
    include_paths: list[Path] = []
    other_cflags: list[str] = []
    for token in split_whitespace_flags(text):
        rest = strip_flag(token, INCLUDE_FLAG)
        if rest is None:
            continue

        path = PurePosixPath(rest)
        if is_macos_sdk_include(path):
            # -I is not the proper way to include system headers and
            # breaks compilation on macOS Catalina. Use the SDK as sysroot.
            sysroot = path.parent.parent
            logger.debug("Rewriting -I%s to %s %s", rest, SYSROOT_FLAG, sysroot)
            other_cflags.append(SYSROOT_FLAG)
            other_cflags.append(str(sysroot))
        else:
            include_paths.append(Path(rest))

    return include_paths, other_cflags


def probe_folly(
    *,
    runner: QueryRunner | None = None,
    sink: DirectiveSink | None = None,
    path_exists: Callable[[str], bool] | None = None,
    package: str | None = None,
    strict: bool | None = None,
) -> DiscoveryResult:
    """Find Folly, emit its link directives and return its compile settings.

    Args:
        runner: pkg-config runner (default: PkgConfigRunner()).
        sink: Where to emit directives (default: stdout, with the
            FINDFOLLY_DIRECTIVE_PREFIX prefix).
        path_exists: Existence check used for the boost_context lookup
            (default: os.path.exists).
        package: pkg-config name of Folly (default: FINDFOLLY_PACKAGE, or
            "libfolly").
        strict: Fail if pkg-config exits non-zero for Folly's own queries
            (default: FINDFOLLY_STRICT).

    Returns:
        DiscoveryResult with library dirs, include paths and extra cflags.

    Raises:
        AuxiliaryDependencyNotFoundError: If fmt or gflags can't be probed.
        QueryMechanismUnavailableError: If pkg-config can't be launched.
        VariantDependencyNotFoundError: If boost_context isn't next to Folly.
        PackageQueryFailedError: In strict mode, if a query exits non-zero.
    """
    if runner is None:
        runner = PkgConfigRunner()
    if sink is None:
        sink = StreamDirectiveSink(prefix=directive_prefix())
    if path_exists is None:
        path_exists = os.path.exists
    if package is None:
        package = folly_package()
    if strict is None:
        strict = strict_mode()

    _probe_auxiliary(runner, sink)

    libs_text = _query(runner, package, "--libs", strict=strict)
    lib_dirs = _parse_libs(libs_text, sink)
    boost_context = _find_boost_context(lib_dirs, sink, path_exists)

    cflags_text = _query(runner, package, "--cflags", strict=strict)
    include_paths, other_cflags = _parse_cflags(cflags_text)

    logger.info(
        "Found %s: %d library dir(s), %d include path(s), using %s",
        package,
        len(lib_dirs),
        len(include_paths),
        boost_context,
    )
    return DiscoveryResult(
        lib_dirs=tuple(lib_dirs),
        include_paths=tuple(include_paths),
        other_cflags=tuple(other_cflags),
    )
