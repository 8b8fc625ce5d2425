# SPDX-License-Identifier: MIT
"""Configuration variables for findfolly.

Variables can be passed on the findfolly command line as KEY=value, in
which case they travel through the FINDFOLLY_VARS environment variable as
JSON, or set directly in the environment:

    findfolly PKG_CONFIG=/opt/bin/pkg-config
    FINDFOLLY_PACKAGE=folly python build.py
"""

from __future__ import annotations

import json
import os

# Name of the environment variable carrying command-line variables.
VARS_ENV = "FINDFOLLY_VARS"

DEFAULT_PKG_CONFIG = "pkg-config"
DEFAULT_PACKAGE = "libfolly"

# Internal storage for CLI variables
_cli_vars: dict[str, str] | None = None


def get_var(name: str, default: str | None = None) -> str | None:
    """Get a variable set on the command line or from the environment.

    Precedence (highest to lowest):
        1. Command line: findfolly VAR=value
        2. Environment variable: VAR=value

    Args:
        name: Variable name.
        default: Default value if not set.

    Returns:
        The variable value, or default if not set.
    """
    global _cli_vars

    # Lazy-load CLI vars from environment on first access
    if _cli_vars is None:
        raw = os.environ.get(VARS_ENV)
        if raw:
            try:
                _cli_vars = json.loads(raw)
            except json.JSONDecodeError:
                _cli_vars = {}
        else:
            _cli_vars = {}

    if name in _cli_vars:
        return _cli_vars[name]

    return os.environ.get(name, default)


def get_bool_var(name: str, default: bool = False) -> bool:
    """Get a variable as a boolean ("1", "true", "yes", "on" are true)."""
    value = get_var(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def set_cli_vars(variables: dict[str, str]) -> None:
    """Install variables parsed from the command line.

    Also exports them through FINDFOLLY_VARS so child processes see them.
    """
    global _cli_vars
    _cli_vars = dict(variables)
    os.environ[VARS_ENV] = json.dumps(_cli_vars)


def _reset_cli_vars() -> None:
    """Forget cached CLI variables (used by tests)."""
    global _cli_vars
    _cli_vars = None


def pkg_config_command() -> str:
    """The pkg-config executable to run."""
    return get_var("PKG_CONFIG") or DEFAULT_PKG_CONFIG


def folly_package() -> str:
    """The pkg-config package name for Folly."""
    return get_var("FINDFOLLY_PACKAGE") or DEFAULT_PACKAGE


def directive_prefix() -> str:
    """Prefix written before each directive line."""
    return get_var("FINDFOLLY_DIRECTIVE_PREFIX") or ""


def strict_mode() -> bool:
    """Whether a non-zero pkg-config exit status fails discovery."""
    return get_bool_var("FINDFOLLY_STRICT")
