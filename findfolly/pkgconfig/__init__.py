# SPDX-License-Identifier: MIT
"""pkg-config access for findfolly.

Available modules:
    - runner: Invoke pkg-config and capture its output
    - probe: Probe a well-behaved package and emit its link directives
"""

from __future__ import annotations

from findfolly.pkgconfig.probe import Library, probe
from findfolly.pkgconfig.runner import PkgConfigRunner, QueryOutput, QueryRunner

__all__ = ["Library", "PkgConfigRunner", "QueryOutput", "QueryRunner", "probe"]
