# topmark:header:start
#
#   project      : ExtReg
#   file         : conftest.py
#   file_relpath : tests/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Pytest configuration for the ExtReg test suite.

This file sets up global fixtures and customizes the logging configuration for
test runs.

Notes:
    Tests should not share registry state: use the ``registry`` fixture for a
    fresh [`ExtensionRegistry`][extreg.registry.ExtensionRegistry]. Tests that
    exercise the process-wide default registry (the facade, the module-level
    API, the CLI) rely on the autouse fixture clearing it around each test.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from typing import TYPE_CHECKING, Any, TypeVar, cast

import pytest

from extreg.config import logging
from extreg.constants import LOG_LEVEL_ENV_VAR
from extreg.registry import ExtensionRegistry, get_default_registry

if TYPE_CHECKING:
    from pathlib import Path

F = TypeVar("F", bound=Callable[..., object])

DecoratorType = Callable[[F], F]


def as_typed_mark(mark: Any) -> DecoratorType[Any]:
    """Wrap a pytest mark so static type checkers preserve the function type.

    Args:
        mark (Any): A pytest mark decorator such as `pytest.mark.cli`.

    Returns:
        DecoratorType[Any]: A decorator that preserves the wrapped function's type.
    """

    def _decorator(func: F) -> F:
        return cast("F", mark(func))

    return _decorator


mark_cli: DecoratorType[Any] = as_typed_mark(pytest.mark.cli)
mark_hypothesis_slow: DecoratorType[Any] = as_typed_mark(pytest.mark.hypothesis_slow)


def hookimpl(*args: Any, **kwargs: Any) -> Callable[[F], F]:
    """Typed wrapper for `pytest.hookimpl`."""
    return as_typed_mark(pytest.hookimpl(*args, **kwargs))


@pytest.fixture(autouse=True)
def isolate_extreg_state(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Reset logging and the default registry around every test.

    The developer's ``EXTREG_LOG_LEVEL`` is ignored, logging is re-armed at
    TRACE (CLI tests reconfigure it), and the default registry starts and
    ends empty.

    Args:
        monkeypatch (pytest.MonkeyPatch): Pytest monkeypatch fixture used to manipulate
            environment variables.

    Yields:
        None: Control to the test.
    """
    monkeypatch.delenv(LOG_LEVEL_ENV_VAR, raising=False)
    logging.setup_logging(level=logging.TRACE_LEVEL)
    get_default_registry().clear()
    yield
    get_default_registry().clear()


@hookimpl(tryfirst=True)
def pytest_configure(config: pytest.Config) -> None:  # pylint: disable=unused-argument
    """Set the logging level to TRACE so registry internals are exercised verbosely.

    Args:
        config (pytest.Config): The pytest configuration object.
    """
    logging.setup_logging(level=logging.TRACE_LEVEL)


@pytest.fixture
def registry() -> ExtensionRegistry:
    """Return a fresh, isolated extension registry."""
    return ExtensionRegistry()


@pytest.fixture
def isolation(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run the test from an empty project directory.

    Config discovery walks upward from the working directory; running from a
    fresh directory keeps the repository's own files out of the way.

    Args:
        tmp_path (Path): The pytest-provided temporary directory for the test.
        monkeypatch (pytest.MonkeyPatch): Fixture to change the working directory.

    Returns:
        Path: The temporary project directory (the new CWD).
    """
    cwd: Path = tmp_path / "proj"
    cwd.mkdir()
    monkeypatch.chdir(cwd)
    return cwd


def always(value: bool) -> Callable[[object], bool]:
    """Return a validator that ignores its payload and answers ``value``."""

    def _validator(_payload: object) -> bool:
        return value

    return _validator
