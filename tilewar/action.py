"""Actions exchanged between game objects and the action panel."""

from dataclasses import dataclass, field

_TITLES = {
    "browse create unit": "Создать юнит",
    "unite": "Объединить юниты",
    "divide": "Разделить армию",
    "browse units": "Действия отдельных юнитов",
    "army move": "Двигаться армией",
    "army attack": "Атаковать армией",
    "move": "Двигаться",
    "attack": "Атаковать",
    "shoot": "Выстрелить",
}


def action_title(name: str) -> str:
    """Return the button caption shown for an action name."""
    return _TITLES.get(name, "empty name")


@dataclass
class Action:
    """A named request sent by the object with id ``sender``."""

    sender: int = 0
    name: str = "error action"
    params: list[int] = field(default_factory=list)