import dataclasses

import pytest

from floodpaint.config import FillConfig


def test_defaults():
    config = FillConfig()
    assert config.random_factor == 19
    assert config.max_starting_points == 3
    assert config.per_pixel_duration == 0.001
    assert config.pause_duration == 5.0
    assert config.quit_key == "q"
    assert config.strict_bounds is True


def test_mutation_bound():
    assert FillConfig().mutation_bound == 9
    assert FillConfig(random_factor=0).mutation_bound == 0
    assert FillConfig(random_factor=20).mutation_bound == 10


def test_frozen():
    with pytest.raises(dataclasses.FrozenInstanceError):
        FillConfig().random_factor = 3


@pytest.mark.parametrize(
    "kwargs",
    [
        {"random_factor": -1},
        {"max_starting_points": 0},
        {"per_pixel_duration": -0.1},
        {"pause_duration": -1},
        {"quit_key": ""},
        {"quit_key": "qq"},
    ],
)
def test_invalid_values_rejected(kwargs):
    with pytest.raises(ValueError):
        FillConfig(**kwargs)
