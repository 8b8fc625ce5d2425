# SPDX-License-Identifier: MIT
"""findfolly: locate the Folly C++ library for a build.

Folly ships a pkg-config file, but it doesn't list all of Folly's
dependencies and gets some of them wrong. findfolly knows about these
quirks and produces what a build needs to compile and link against Folly:
link directives emitted as they're found, plus library directories,
include directories and extra compiler flags.

Usage:
    from findfolly import probe_folly

    folly = probe_folly()
    env.cxx.includes += folly.include_paths
    env.cxx.flags += folly.other_cflags
"""

from __future__ import annotations

from findfolly.config import get_var
from findfolly.core.directives import (
    Directive,
    DirectiveKind,
    DirectiveSink,
    RecordingDirectiveSink,
    StreamDirectiveSink,
)
from findfolly.core.errors import (
    AuxiliaryDependencyNotFoundError,
    ErrorKind,
    FindFollyError,
    PackageQueryFailedError,
    PkgConfigError,
    QueryMechanismUnavailableError,
    VariantDependencyNotFoundError,
)
from findfolly.discovery import DiscoveryResult, probe_folly

__version__ = "0.1.0"

# Public API exports
__all__ = [
    # Version
    "__version__",
    # Configuration
    "get_var",
    # Discovery
    "probe_folly",
    "DiscoveryResult",
    # Directives
    "Directive",
    "DirectiveKind",
    "DirectiveSink",
    "RecordingDirectiveSink",
    "StreamDirectiveSink",
    # Errors
    "ErrorKind",
    "FindFollyError",
    "AuxiliaryDependencyNotFoundError",
    "QueryMechanismUnavailableError",
    "VariantDependencyNotFoundError",
    "PackageQueryFailedError",
    "PkgConfigError",
]
