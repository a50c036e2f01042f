"""The square grid of tiles the game is played on."""

import random
from collections.abc import Iterator

from tilewar.tile import Tile


class Board:
    """A grid of ``height`` rows and ``width`` columns of tiles."""

    def __init__(self, width: int = 10, height: int = 10, rng: random.Random | None = None) -> None:
        rng = rng if rng is not None else random.Random()
        self.width = width
        self.height = height
        self._rows = [[Tile(x, y, rng) for y in range(width)] for x in range(height)]

    @property
    def size(self) -> tuple[int, int]:
        """(height, width) of the board."""
        return self.height, self.width

    def __iter__(self) -> Iterator[Tile]:
        for row in self._rows:
            yield from row

    def tile(self, x: int, y: int) -> Tile | None:
        """Return the tile at row ``x``, column ``y``, or None off the board."""
        if 0 <= x < self.height and 0 <= y < self.width:
            return self._rows[x][y]
        return None

    def tick(self) -> None:
        """Run the end-of-turn update on every tile."""
        for tile in self:
            tile.tick()

    def highlight(self, tile: Tile) -> None:
        """Enable ``tile`` and disable every other tile."""
        for current in self:
            if current is tile:
                current.draw_enabled()
            else:
                current.draw_disabled()

    def unhighlight_all(self) -> None:
        for tile in self:
            tile.draw_enabled()

    def combat(self, attacking: Tile, defending: Tile) -> tuple[int, int]:
        """Return the attack power of ``attacking`` and the defence power of ``defending``."""
        return attacking.attack_power, defending.defence_power