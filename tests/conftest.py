import os

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")

import pytest
from walk_driver import StepScheduler
from walk_walker import make_rng


class FakeClock:
    """Millisecond clock the test moves by hand."""

    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now

    def advance(self, ms):
        self.now += ms


class PaintRecorder:
    """Stands in for the drawing surface and remembers every call."""

    def __init__(self):
        self.calls = []

    def __call__(self, coord, color):
        self.calls.append((coord, color))

    @property
    def painted(self):
        return [coord for coord, color in self.calls if color is not None]

    @property
    def erased(self):
        return [coord for coord, color in self.calls if color is None]


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def scheduler(clock):
    return StepScheduler(clock=clock)


@pytest.fixture
def painter():
    return PaintRecorder()


@pytest.fixture
def rng():
    return make_rng(1234)
