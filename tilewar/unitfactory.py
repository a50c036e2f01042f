"""Timed production of units by buildings."""

from tilewar.units import Archer, Horseman, Swordsman, Unit, UnitType

_UNIT_CLASSES: dict[UnitType, type[Unit]] = {
    UnitType.ARCHER: Archer,
    UnitType.HORSEMAN: Horseman,
    UnitType.SWORDSMAN: Swordsman,
}


def create_unit(unit_type: UnitType | int) -> Unit | None:
    """Create a fresh unit of the given type, or None for the null type."""
    cls = _UNIT_CLASSES.get(UnitType(unit_type))
    return cls() if cls is not None else None


class UnitFactory:
    """Holds one production order and counts down its build time."""

    _pending: UnitType = UnitType.NULL
    _timer: int = 0

    @property
    def pending(self) -> UnitType:
        """Type of the unit currently being built."""
        return self._pending

    @property
    def remaining(self) -> int:
        """Ticks left before the pending unit is ready."""
        return self._timer

    def order(self, unit_type: UnitType | int) -> None:
        """Start building a unit, replacing any earlier order."""
        unit_type = UnitType(unit_type)
        self._pending = unit_type
        cls = _UNIT_CLASSES.get(unit_type)
        self._timer = cls.build_time if cls is not None else 0

    def tick(self) -> Unit | None:
        """Advance production by one turn; return the unit once it is ready."""
        if self._pending is UnitType.NULL:
            return None
        self._timer -= 1
        if self._timer > 0:
            return None
        unit = create_unit(self._pending)
        self._pending = UnitType.NULL
        self._timer = 0
        return unit