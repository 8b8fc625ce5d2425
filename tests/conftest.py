# SPDX-License-Identifier: MIT
"""Shared fixtures for findfolly tests."""

from __future__ import annotations

from collections.abc import Sequence

import pytest

from findfolly import config
from findfolly.core.directives import RecordingDirectiveSink
from findfolly.pkgconfig.runner import QueryOutput


class FakeRunner:
    """Answer pkg-config queries from a table of canned outputs.

    Keys are the argument tuples; values are either a QueryOutput, a str
    (stdout of a successful run) or an exception to raise.
    """

    def __init__(self, responses: dict[tuple[str, ...], object] | None = None):
        self.responses: dict[tuple[str, ...], object] = dict(responses or {})
        self.calls: list[tuple[str, ...]] = []

    def run(self, args: Sequence[str]) -> QueryOutput:
        key = tuple(args)
        self.calls.append(key)
        if key not in self.responses:
            return QueryOutput(
                stdout=b"",
                stderr=f"Package {key[-1]} was not found".encode(),
                returncode=1,
            )
        response = self.responses[key]
        if isinstance(response, BaseException):
            raise response
        if isinstance(response, QueryOutput):
            return response
        return QueryOutput(stdout=str(response).encode())


def auxiliary_responses() -> dict[tuple[str, ...], object]:
    """Canned answers for fmt and gflags."""
    return {
        ("--static", "--libs", "--cflags", "fmt"): "-I/usr/include -L/usr/lib -lfmt",
        ("--modversion", "fmt"): "10.1.1\n",
        ("--static", "--libs", "--cflags", "gflags"): "-lgflags -lpthread",
        ("--modversion", "gflags"): "2.2.2\n",
    }


@pytest.fixture
def runner() -> FakeRunner:
    """A runner that knows fmt and gflags."""
    return FakeRunner(auxiliary_responses())


@pytest.fixture
def sink() -> RecordingDirectiveSink:
    return RecordingDirectiveSink()


@pytest.fixture(autouse=True)
def clean_vars(monkeypatch):
    """Isolate tests from findfolly variables in the environment."""
    for name in (
        config.VARS_ENV,
        "PKG_CONFIG",
        "FINDFOLLY_PACKAGE",
        "FINDFOLLY_DIRECTIVE_PREFIX",
        "FINDFOLLY_STRICT",
    ):
        # setenv records the original value for teardown
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    config._reset_cli_vars()
    yield
    config._reset_cli_vars()


@pytest.fixture
def make_runner():
    """Build a FakeRunner; aux=True adds the fmt and gflags answers."""

    def _make(
        responses: dict[tuple[str, ...], object] | None = None, *, aux: bool = True
    ) -> FakeRunner:
        table = auxiliary_responses() if aux else {}
        table.update(responses or {})
        return FakeRunner(table)

    return _make
