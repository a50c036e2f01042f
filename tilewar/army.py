"""A stack of units standing on one tile."""

from tilewar.action import Action
from tilewar.objects import GameObject
from tilewar.units import Unit


class Army(GameObject):
    """Units on a tile, acting either together or one by one."""

    def __init__(self) -> None:
        super().__init__()
        self._units: list[Unit] = []
        self.united = False
        self.can_act = True
        self.divide()
        self.can_act = True

    @property
    def units(self) -> tuple[Unit, ...]:
        """The units in order; the first one takes damage first."""
        return tuple(self._units)

    @property
    def is_empty(self) -> bool:
        return not self._units

    @property
    def power(self) -> int:
        """Sum of the combat power of all units."""
        return sum(unit.combat_power for unit in self._units)

    def __len__(self) -> int:
        return len(self._units)

    def add_unit(self, unit: Unit) -> None:
        self._units.append(unit)

    def remove_unit(self, unit: Unit) -> None:
        """Remove ``unit``; raise ValueError if it is not in the army."""
        for index, member in enumerate(self._units):
            if member is unit:
                del self._units[index]
                return
        raise ValueError("unit is not in this army")

    def unite(self) -> None:
        """Make the units act as one army."""
        self.possible_actions = ["army move", "army attack", "divide"]
        self.united = True
        self.set_acted()

    def divide(self) -> None:
        """Let each unit act on its own."""
        self.possible_actions = ["browse units", "unite"]
        self.united = False
        self.set_acted()

    def damage(self, power: int) -> None:
        """Destroy units front to back while ``power`` covers them, then wound the next."""
        while self._units and power >= self._units[0].power:
            power -= self._units.pop(0).power
        if self._units:
            self._units[0].pure_damage(power)

    def handle_action(self, action: Action) -> Action:
        if action.name == "unite":
            self.unite()
        elif action.name == "divide":
            self.divide()
        return Action(self.id, "purge")

    def refresh(self) -> None:
        """Allow the army and every unit to act again."""
        self.can_act = True
        for unit in self._units:
            unit.refresh()

    def set_acted(self) -> None:
        self.can_act = False