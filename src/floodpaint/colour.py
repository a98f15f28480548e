from typing import NamedTuple

import numpy as np

CHANNEL_MAX = 255


class Colour(NamedTuple):
    r: int
    g: int
    b: int

    @classmethod
    def clamped(cls, r: int, g: int, b: int) -> "Colour":
        return cls(clamp_channel(r), clamp_channel(g), clamp_channel(b))


def clamp_channel(value: int) -> int:
    return max(0, min(CHANNEL_MAX, int(value)))


def random_colour(rng: np.random.Generator) -> Colour:
    r, g, b = rng.integers(0, CHANNEL_MAX + 1, size=3)
    return Colour(int(r), int(g), int(b))


def mutation_delta(rng: np.random.Generator, random_factor: int) -> np.ndarray:
    """Signed per-channel deltas in [-random_factor // 2, random_factor - 1 - random_factor // 2].

    A factor of 0 disables mutation and draws nothing from ``rng``.
    """
    if random_factor == 0:
        return np.zeros(3, dtype=np.int64)
    return rng.integers(0, random_factor, size=3) - random_factor // 2


def mutate(parent: Colour, rng: np.random.Generator, random_factor: int) -> Colour:
    """Random-walk a parent colour by one step, clamping each channel."""
    shifted = np.asarray(parent, dtype=np.int64) + mutation_delta(rng, random_factor)
    r, g, b = np.clip(shifted, 0, CHANNEL_MAX)
    return Colour(int(r), int(g), int(b))


def ensure_colour(value) -> Colour:
    """Reject anything that is not an RGB colour; cells only ever carry Colours."""
    if not isinstance(value, Colour):
        raise TypeError(f"Non-RGB colour present: {value!r}")
    if not all(0 <= channel <= CHANNEL_MAX for channel in value):
        raise TypeError(f"Colour channel out of range: {value!r}")
    return value
