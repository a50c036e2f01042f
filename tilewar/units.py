"""Combat units."""

from abc import ABC
from enum import IntEnum
from typing import ClassVar

from tilewar.objects import GameObject


class UnitType(IntEnum):
    """Kinds of units that can be ordered from a building."""

    NULL = 0
    ARCHER = 1
    HORSEMAN = 2
    SWORDSMAN = 3


class Unit(GameObject, ABC):
    """A single unit with power, action points and a per-turn act flag."""

    unit_type: ClassVar[UnitType]
    kind: ClassVar[int]
    base_power: ClassVar[int]
    base_action_points: ClassVar[int]
    build_time: ClassVar[int]
    image: ClassVar[str]
    actions: ClassVar[tuple[str, ...]] = ("move", "attack")
    bonuses: ClassVar[dict[UnitType, int]] = {}

    def __init__(self, power: int | None = None, action_points: int | None = None) -> None:
        super().__init__()
        self.power = self.base_power if power is None else power
        self._reserve_power = self.power // 2
        self.action_points = self.base_action_points if action_points is None else action_points
        self.can_act = True
        self.possible_actions = list(self.actions)

    @property
    def combat_power(self) -> int:
        """Power used in combat; never below half the starting power."""
        return max(self.power, self._reserve_power)

    def pure_damage(self, damage: int) -> None:
        """Reduce the unit's power by ``damage``."""
        self.power -= damage

    def set_acted(self) -> None:
        """Mark the unit as having used its turn."""
        self.can_act = False

    def refresh(self) -> None:
        """Allow the unit to act again."""
        self.can_act = True


class Archer(Unit):
    unit_type = UnitType.ARCHER
    kind = 0
    base_power = 4
    base_action_points = 1
    build_time = 6
    image = "images/archer.png"
    actions = ("move", "shoot")


class Horseman(Unit):
    unit_type = UnitType.HORSEMAN
    kind = 1
    base_power = 10
    base_action_points = 2
    build_time = 8
    image = "images/horseman.png"
    actions = ("move", "attack")


class Swordsman(Unit):
    unit_type = UnitType.SWORDSMAN
    kind = 2
    base_power = 6
    base_action_points = 1
    build_time = 4
    image = "images/swordsman.png"
    actions = ("move", "attack")