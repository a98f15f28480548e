from __future__ import annotations

import logging
import time
from typing import Callable, Iterator, NamedTuple, Protocol

import numpy as np

from floodpaint.colour import Colour, mutate, random_colour
from floodpaint.config import FillConfig

logger = logging.getLogger(__name__)

Coord = tuple[int, int]  # (column, row)

# dy outer, dx inner; the zero offset is excluded
NEIGHBOUR_OFFSETS = [(dx, dy) for dy in (-1, 0, 1) for dx in (-1, 0, 1) if (dx, dy) != (0, 0)]


class Cell(NamedTuple):
    coord: Coord
    colour: Colour


class Sink(Protocol):
    def dimensions(self) -> Coord:
        """Current (width, height) in character cells."""
        ...

    def clear(self) -> None: ...

    def place(self, coord: Coord, colour: Colour) -> None:
        """Paint one cell at ``coord`` with ``colour`` as background."""
        ...

    def flush(self) -> None: ...

    def poll_quit(self) -> bool:
        """Non-blocking: has the quit key arrived since the last call?"""
        ...


class Frontier:
    """Pending cells, addressable by index for uniform random swap-removal."""

    def __init__(self):
        self._cells: list[Cell] = []
        self._index: dict[Coord, int] = {}

    def __len__(self) -> int:
        return len(self._cells)

    def __contains__(self, coord) -> bool:
        return coord in self._index

    def __iter__(self) -> Iterator[Cell]:
        return iter(self._cells)

    def add(self, cell: Cell) -> None:
        if cell.coord in self._index:
            raise ValueError(f"{cell.coord} is already pending")
        self._index[cell.coord] = len(self._cells)
        self._cells.append(cell)

    def pop_random(self, rng: np.random.Generator) -> Cell:
        i = int(rng.integers(len(self._cells)))
        cell = self._cells[i]
        last = self._cells.pop()
        if i < len(self._cells):
            self._cells[i] = last
            self._index[last.coord] = i
        del self._index[cell.coord]
        return cell


class FillEngine:
    """Randomised flood fill that paints the grid outward from a few seeds.

    Each step picks a pending cell uniformly at random, marks it visited,
    queues its unseen neighbours with a colour mutated from its own, and
    hands the cell to the sink before the next pick.
    """

    def __init__(
        self,
        config: FillConfig | None = None,
        rng: np.random.Generator | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.config = config or FillConfig()
        self.rng = rng if rng is not None else np.random.default_rng()
        self.sleep = sleep
        self.frontier = Frontier()
        self.visited: dict[Coord, Colour] = {}

    def seed(self, width: int, height: int) -> Frontier:
        frontier = Frontier()
        if width <= 0 or height <= 0:
            return frontier
        count = int(self.rng.integers(1, self.config.max_starting_points + 1))
        for _ in range(count):
            colour = random_colour(self.rng)
            coord = (int(self.rng.integers(width)), int(self.rng.integers(height)))
            # two seeds on one cell would break frontier exclusivity; first one wins
            if coord not in frontier:
                frontier.add(Cell(coord, colour))
        return frontier

    def neighbours(self, coord: Coord, width: int, height: int) -> Iterator[Coord]:
        x, y = coord
        for dx, dy in NEIGHBOUR_OFFSETS:
            nx, ny = x + dx, y + dy
            if nx < 0 or ny < 0:
                continue
            if self.config.strict_bounds:
                if nx >= width or ny >= height:
                    continue
            elif (x >= width and dx == 1) or (y >= height and dy == 1):
                # edge check only stops growth past an overhang cell
                continue
            yield (nx, ny)

    def cycle(self, width: int, height: int) -> Iterator[Cell]:
        """Fill a ``width`` x ``height`` grid, yielding cells in placement order."""
        self.visited = {}
        self.frontier = self.seed(width, height)
        logger.debug("Starting %dx%d cycle with %d seed(s)", width, height, len(self.frontier))
        while self.frontier:
            cell = self.frontier.pop_random(self.rng)
            self.visited[cell.coord] = cell.colour
            for coord in self.neighbours(cell.coord, width, height):
                if coord in self.visited or coord in self.frontier:
                    continue
                self.frontier.add(Cell(coord, mutate(cell.colour, self.rng, self.config.random_factor)))
            yield cell

    def run_cycle(self, sink: Sink) -> bool:
        """Paint one full picture. Returns False if the user asked to quit."""
        sink.clear()
        width, height = sink.dimensions()
        placed = 0
        for cell in self.cycle(width, height):
            if sink.poll_quit():
                logger.debug("Quit requested after %d placements", placed)
                return False
            sink.place(cell.coord, cell.colour)
            sink.flush()
            placed += 1
            self._pause(self.config.per_pixel_duration)
        logger.debug("Cycle complete: %d placements", placed)
        return True

    def run(self, sink: Sink, max_cycles: int | None = None) -> int:
        """Paint pictures until quit (or ``max_cycles``); returns completed cycles."""
        completed = 0
        while max_cycles is None or completed < max_cycles:
            if not self.run_cycle(sink):
                break
            completed += 1
            self._pause(self.config.pause_duration)
            if sink.poll_quit():
                logger.debug("Quit requested between cycles")
                break
        return completed

    def _pause(self, seconds: float) -> None:
        if seconds > 0:
            self.sleep(seconds)
