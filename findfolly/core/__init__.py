# SPDX-License-Identifier: MIT
"""Core building blocks for findfolly.

Available modules:
    - errors: Exception hierarchy and ErrorKind
    - flags: Tokenizers for pkg-config compiler and linker output
    - directives: Build directives and the sinks that receive them
"""
