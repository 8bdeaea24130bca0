# topmark:header:start
#
#   project      : CollectionView
#   file         : conftest.py
#   file_relpath : tests/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Pytest configuration for the CollectionView test suite.

This file sets up shared fixtures (sample records, a change recorder) and
customizes the logging configuration for test runs.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, TypeVar, cast

import pytest

from collectionview import CollectionView
from collectionview.config import logging
from collectionview.constants import LOG_LEVEL_ENV_VAR
from tests.helpers import ChangeRecorder, Player

F = TypeVar("F", bound=Callable[..., object])

DecoratorType = Callable[[F], F]


def as_typed_mark(mark: Any) -> DecoratorType[Any]:
    """Wrap a pytest mark so static type checkers preserve the function type.

    Args:
        mark (Any): A pytest mark decorator such as `pytest.mark.integration`.

    Returns:
        DecoratorType[Any]: A decorator that preserves the wrapped function's type.
    """

    def _decorator(func: F) -> F:
        return cast("F", mark(func))

    return _decorator


def hookimpl(*args: Any, **kwargs: Any) -> Callable[[F], F]:
    """Typed wrapper for `pytest.hookimpl`."""
    return as_typed_mark(pytest.hookimpl(*args, **kwargs))


@pytest.fixture(autouse=True)
def silence_collectionview_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    """Ensure the runtime log level is not forced via env during tests.

    Args:
        monkeypatch (pytest.MonkeyPatch): Pytest monkeypatch fixture used to manipulate
            environment variables.
    """
    monkeypatch.delenv(LOG_LEVEL_ENV_VAR, raising=False)


@hookimpl(tryfirst=True)
def pytest_configure(config: pytest.Config) -> None:  # pylint: disable=unused-argument
    """Set the logging level to TRACE so stage recomputes show up in failure output."""
    logging.setup_logging(level=logging.TRACE_LEVEL)


@pytest.fixture
def products() -> list[dict[str, Any]]:
    """Return mapping-based product records."""
    return [
        {"name": "lamp", "price": 150, "visible": True},
        {"name": "mug", "price": 50, "visible": True},
        {"name": "sofa", "price": 200, "visible": False},
    ]


@pytest.fixture
def players() -> list[Player]:
    """Return attribute-based player records."""
    return [
        Player("ana", "PT", 30),
        Player("bob", "US", 10),
        Player("carl", "DE", 30),
        Player("dina", "US", 20),
        Player("eve", "DE", 10, active=False),
    ]


@pytest.fixture
def numbers_view() -> CollectionView[int]:
    """Return a view over 1..25 with the default page size of 10."""
    return CollectionView(range(1, 26))


@pytest.fixture
def recorder() -> ChangeRecorder:
    """Return an empty change recorder."""
    return ChangeRecorder()
