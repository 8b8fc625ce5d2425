# SPDX-License-Identifier: MIT
"""Flag tokenizing utilities for findfolly.

pkg-config output comes in two flavours that are tokenized differently:

- Linker output (``--libs``) may contain quoted or escaped paths, and some
  packages list raw archive paths instead of ``-l`` flags. It is split with
  shell rules by split_shell_flags().
- Compiler output (``--cflags``) is split on plain whitespace by
  split_whitespace_flags().

The marker constants below name the flag prefixes the discovery code looks
for.
"""

from __future__ import annotations

import logging
import shlex

logger = logging.getLogger(__name__)

FLAG_MARKER = "-"
LIB_DIR_FLAG = "-L"
LINK_LIB_FLAG = "-l"
INCLUDE_FLAG = "-I"
DEFINE_FLAG = "-D"
SYSROOT_FLAG = "-isysroot"

# Prefix every library file name carries on Unix-like platforms.
LIB_NAME_PREFIX = "lib"


def split_shell_flags(text: str) -> list[str]:
    """Split flag text using POSIX shell quoting rules.

    Quotes and backslash escapes are honoured, ``#`` is not treated as a
    comment. If the text ends inside an unterminated quote, the tokens read
    before it are returned and the remainder is dropped with a warning.

    Args:
        text: Raw flag text, typically ``pkg-config --libs`` output.

    Returns:
        List of tokens in input order.

    Examples:
        >>> split_shell_flags("-L/opt/lib -lfoo")
        ['-L/opt/lib', '-lfoo']

        >>> split_shell_flags("'/opt/my libs/libbar.a' -lbaz")
        ['/opt/my libs/libbar.a', '-lbaz']
    """
    tokens: list[str] = []
    lexer = shlex.shlex(text, posix=True)
    lexer.whitespace_split = True
    lexer.commenters = ""
    try:
        for token in lexer:
            tokens.append(token)
    except ValueError as e:
        logger.warning("Stopped tokenizing linker flags: %s", e)
    return tokens


def split_whitespace_flags(text: str) -> list[str]:
    """Split flag text on runs of whitespace.

    No quoting is recognised; this matches how compiler flag output has
    always been consumed.

    Examples:
        >>> split_whitespace_flags("  -I/a   -I/b\\n")
        ['-I/a', '-I/b']
    """
    return text.split()


def strip_flag(token: str, flag: str) -> str | None:
    """Return the argument attached to ``flag``, or None if it doesn't match.

    Examples:
        >>> strip_flag("-L/usr/lib", "-L")
        '/usr/lib'
        >>> strip_flag("-lfoo", "-L") is None
        True
    """
    if token.startswith(flag):
        return token[len(flag) :]
    return None


def is_flag(token: str) -> bool:
    """Check whether a token is a flag rather than a bare path."""
    return token.startswith(FLAG_MARKER)
