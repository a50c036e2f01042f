"""Players and their factions."""

from dataclasses import dataclass
from enum import IntEnum


class Fraction(IntEnum):
    """Faction a player belongs to."""

    NULL = 0
    A = 1
    B = 2


@dataclass(eq=False)
class Player:
    """A player identified by the colour of their tiles."""

    color: str
    score: int = 0
    money: int = 0
    fraction: Fraction = Fraction.NULL

    def change_money(self, value: int) -> None:
        """Add ``value`` (possibly negative) to the player's money."""
        self.money += value