"""Buildings that stand on tiles and the factory that creates them."""

from enum import IntEnum
from typing import ClassVar

from tilewar.action import Action
from tilewar.objects import GameObject
from tilewar.unitfactory import UnitFactory
from tilewar.units import Unit, UnitType


class BuildingType(IntEnum):
    """Kinds of buildings a tile can hold."""

    NULL = 0
    CASTLE = 1
    BARRACKS = 2
    MINE = 3
    FORT = 4


# Unit codes carried in the first parameter of a "create unit" action.
_UNIT_ORDER_CODES = {
    1: UnitType.SWORDSMAN,
    2: UnitType.ARCHER,
    3: UnitType.HORSEMAN,
}


class Building(GameObject):
    """A building with combat bonuses, income and hit points."""

    image: ClassVar[str] = ""
    income: ClassVar[int] = 0
    defence_bonus: ClassVar[float] = 1.0
    attack_bonus: ClassVar[float] = 1.0
    actions: ClassVar[tuple[str, ...]] = ()
    max_health: ClassVar[int] = 100

    def __init__(self) -> None:
        super().__init__()
        self.health = self.max_health
        self.possible_actions = list(self.actions)

    @property
    def produced_money(self) -> int:
        """Money the building yields each turn."""
        return self.income

    def produce_unit(self) -> Unit | None:
        """Advance unit production by one turn; plain buildings produce nothing."""
        return None

    def pure_damage(self, damage: int) -> bool:
        """Reduce health by ``damage``; return True once the building is destroyed."""
        self.health = max(self.health - damage, 0)
        return self.health == 0

    def handle_action(self, action: Action) -> Action:
        return Action(self.id, "purge")


class _UnitProducer(Building, UnitFactory):
    """A building that trains units on order."""

    actions = ("browse create unit",)

    def produce_unit(self) -> Unit | None:
        return self.tick()

    def handle_action(self, action: Action) -> Action:
        """Place a unit order from the code in ``action.params[0]``."""
        if not action.params:
            raise ValueError("a unit order needs a unit code parameter")
        unit_type = _UNIT_ORDER_CODES.get(action.params[0])
        if unit_type is not None:
            self.order(unit_type)
        return Action(self.id, "purge")


class Castle(_UnitProducer):
    image = "images/castle.png"
    income = 5
    defence_bonus = 1.4
    attack_bonus = 1.1


class Barracks(_UnitProducer):
    image = "images/barracks.png"
    income = 0
    defence_bonus = 1.2
    attack_bonus = 1.0


class Mine(Building):
    image = "images/mine.png"
    income = 2
    defence_bonus = 1.0
    attack_bonus = 1.4


class Fort(Building):
    image = "images/fort.png"
    income = 0
    defence_bonus = 1.4
    attack_bonus = 0.9


_BUILDING_CLASSES: dict[BuildingType, type[Building]] = {
    BuildingType.CASTLE: Castle,
    BuildingType.BARRACKS: Barracks,
    BuildingType.MINE: Mine,
    BuildingType.FORT: Fort,
}


def create_building(building_type: BuildingType | int) -> Building | None:
    """Create a building of the given type, or None for the null type."""
    cls = _BUILDING_CLASSES.get(BuildingType(building_type))
    return cls() if cls is not None else None