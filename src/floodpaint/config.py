from dataclasses import dataclass


@dataclass(frozen=True)
class FillConfig:
    """Tunables for one fill engine. Defaults reproduce the stock animation."""

    random_factor: int = 19  # bigger = more colour drift between neighbours
    max_starting_points: int = 3
    per_pixel_duration: float = 0.001  # seconds paused after each placement
    pause_duration: float = 5.0  # seconds paused after a finished picture
    quit_key: str = "q"
    strict_bounds: bool = True  # False keeps the one-cell overhang at the far edges

    def __post_init__(self):
        if self.random_factor < 0:
            raise ValueError(f"random_factor must be >= 0, got {self.random_factor}")
        if self.max_starting_points < 1:
            raise ValueError(f"max_starting_points must be >= 1, got {self.max_starting_points}")
        if self.per_pixel_duration < 0 or self.pause_duration < 0:
            raise ValueError("durations must be non-negative")
        if len(self.quit_key) != 1:
            raise ValueError(f"quit_key must be a single character, got {self.quit_key!r}")

    @property
    def mutation_bound(self) -> int:
        """Largest absolute per-channel change a single mutation can make."""
        return self.random_factor // 2
