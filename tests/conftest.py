"""Shared fixtures for the sampler tests."""

from collections.abc import Callable, Sequence
from itertools import cycle

import pytest


class ScriptedSource:
    """Uniform source that replays a fixed list of draws, cycling forever."""

    def __init__(self, draws: Sequence[float]) -> None:
        self.draws = list(draws)
        self.calls = 0
        self._it = cycle(self.draws)

    def random(self) -> float:
        self.calls += 1
        return next(self._it)


@pytest.fixture
def scripted() -> Callable[[Sequence[float]], ScriptedSource]:
    """Factory for sources that return the given draws in order."""
    return ScriptedSource
