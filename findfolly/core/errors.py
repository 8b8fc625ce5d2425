# SPDX-License-Identifier: MIT
"""Custom exceptions for findfolly.

All discovery failures inherit from FindFollyError and carry an ErrorKind
naming the stage that failed. Every one of them is terminal: discovery
aborts and no partial result is returned.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence


class ErrorKind(Enum):
    """Stage of discovery at which a failure happened."""

    AUXILIARY_DEPENDENCY = "auxiliary-dependency"
    QUERY_MECHANISM = "query-mechanism"
    VARIANT_DEPENDENCY = "variant-dependency"
    QUERY_FAILED = "query-failed"


class FindFollyError(Exception):
    """Base class for all findfolly discovery errors.

    Attributes:
        message: The error message.
        kind: The stage that failed.
    """

    kind: ErrorKind

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class PkgConfigError(Exception):
    """A package could not be probed through pkg-config.

    Attributes:
        name: The package that was probed.
        message: What went wrong.
    """

    def __init__(self, name: str, message: str) -> None:
        self.name = name
        self.message = message
        super().__init__(f"{name}: {message}")


class AuxiliaryDependencyNotFoundError(FindFollyError):
    """One of the dependencies missing from Folly's .pc file was not found.

    Attributes:
        which: Name of the dependency ("fmt" or "gflags").
        cause: The underlying lookup error.
    """

    kind = ErrorKind.AUXILIARY_DEPENDENCY

    def __init__(self, which: str, cause: PkgConfigError) -> None:
        self.which = which
        self.cause = cause
        super().__init__(f"`{which}` dependency couldn't be located: {cause}")


class QueryMechanismUnavailableError(FindFollyError):
    """pkg-config could not be launched to query the main package.

    Attributes:
        package: The package being queried.
        cause: The OSError raised while launching the command.
    """

    kind = ErrorKind.QUERY_MECHANISM

    def __init__(self, package: str, cause: OSError) -> None:
        self.package = package
        self.cause = cause
        super().__init__(f"main `{package}` package couldn't be located: {cause}")


class VariantDependencyNotFoundError(FindFollyError):
    """boost_context was not found next to Folly under either of its names.

    Attributes:
        candidates: The accepted file names, in preference order.
    """

    kind = ErrorKind.VARIANT_DEPENDENCY

    def __init__(self, candidates: Sequence[str]) -> None:
        self.candidates = list(candidates)
        names = " or ".join(f"`{c}`" for c in self.candidates)
        super().__init__(
            f"could not find `boost_context`; make sure either {names} "
            "is located in the same directory as Folly"
        )


class PackageQueryFailedError(FindFollyError):
    """pkg-config ran but exited with a non-zero status (strict mode only).

    Attributes:
        query_args: Arguments passed to pkg-config.
        returncode: The exit status.
        stderr: Captured standard error, decoded leniently.
    """

    kind = ErrorKind.QUERY_FAILED

    def __init__(self, args: Sequence[str], returncode: int, stderr: str) -> None:
        self.query_args = list(args)
        self.returncode = returncode
        self.stderr = stderr
        cmd = " ".join(self.query_args)
        message = f"pkg-config {cmd} exited with status {returncode}"
        if stderr.strip():
            message += f": {stderr.strip()}"
        super().__init__(message)
