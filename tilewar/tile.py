"""A single board square holding an army, a building and an owner."""

import random

from tilewar.action import Action
from tilewar.army import Army
from tilewar.buildings import Building, BuildingType, create_building
from tilewar.objects import GameObject
from tilewar.player import Player


class Tile(GameObject):
    """A board square at row ``x``, column ``y``."""

    def __init__(self, x: int = 0, y: int = 0, rng: random.Random | None = None) -> None:
        super().__init__()
        self.x = x
        self.y = y
        self.army = Army()
        self.building: Building | None = None
        self.owner: Player | None = None
        self.enabled = True
        self.variant = (rng if rng is not None else random).randint(1, 4)
        self.image = f"images/field{self.variant}.png"
        self.image_disabled = f"images/fielddisabled{self.variant}.png"
        self.picture = self.image

    @property
    def is_army_empty(self) -> bool:
        return self.army.is_empty

    @property
    def has_building(self) -> bool:
        return self.building is not None

    @property
    def background(self) -> str:
        """Colour the tile is drawn in: its owner's, or white when unowned."""
        return self.owner.color if self.owner is not None else "white"

    @property
    def attack_bonus(self) -> float:
        return self.building.attack_bonus if self.building is not None else 1.0

    @property
    def defence_bonus(self) -> float:
        return self.building.defence_bonus if self.building is not None else 1.0

    @property
    def attack_power(self) -> int:
        """Army power scaled by the building's attack bonus."""
        return int(self.army.power * self.attack_bonus)

    @property
    def defence_power(self) -> int:
        """Army power scaled by the building's defence bonus."""
        return int(self.army.power * self.defence_bonus)

    def set_building(self, building_type: BuildingType | int) -> Building | None:
        """Replace the tile's building with a new one of ``building_type``."""
        self.building = create_building(building_type)
        return self.building

    def produce_money(self, income: int) -> None:
        """Pay ``income`` to the tile's owner."""
        if self.owner is None:
            raise ValueError("tile has no owner to receive money")
        self.owner.change_money(income)

    def handle_action(self, action: Action) -> Action:
        return Action(self.id, "purge")

    def tick(self) -> None:
        """End-of-turn update: collect produced units and refresh the army."""
        if self.building is not None:
            unit = self.building.produce_unit()
            if unit is not None:
                self.army.add_unit(unit)
        self.army.refresh()
        self.draw_enabled()

    def draw_enabled(self) -> None:
        self.picture = self.image
        self.enabled = True

    def draw_disabled(self) -> None:
        self.picture = self.image_disabled
        self.enabled = False