"""Test fixtures package."""

from .fake_executor import FakeExecutor

__all__ = [
    "FakeExecutor",
]
