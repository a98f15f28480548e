import numpy as np
import pytest

from floodpaint.config import FillConfig
from floodpaint.engine import FillEngine


class RecordingSink:
    """Sink that remembers every call instead of drawing."""

    def __init__(self, width, height, quit_after=None):
        self.width = width
        self.height = height
        self.quit_after = quit_after  # placements made before q is "pressed"
        self.placements = []
        self.events = []

    def dimensions(self):
        return (self.width, self.height)

    def clear(self):
        self.events.append("clear")

    def place(self, coord, colour):
        self.events.append("place")
        self.placements.append((coord, colour))

    def flush(self):
        self.events.append("flush")

    def poll_quit(self):
        return self.quit_after is not None and len(self.placements) >= self.quit_after


@pytest.fixture
def make_engine():
    """Engine factory with a seeded rng and no real sleeping."""

    def _make(seed=42, sleep=None, **overrides):
        config = FillConfig(**{"per_pixel_duration": 0, "pause_duration": 0, **overrides})
        return FillEngine(config, rng=np.random.default_rng(seed), sleep=sleep or (lambda s: None))

    return _make


@pytest.fixture
def make_sink():
    return RecordingSink
