"""Terrain types with combat bonuses."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Land:
    """A kind of terrain; bonuses are single-byte values."""

    name: str
    defence_bonus: int
    attack_bonus: int

    def __post_init__(self) -> None:
        for label, value in (("defence_bonus", self.defence_bonus), ("attack_bonus", self.attack_bonus)):
            if not 0 <= value <= 255:
                raise ValueError(f"{label} must be in 0..255, got {value}")