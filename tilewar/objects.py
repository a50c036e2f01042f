"""Base class for everything on the board that can receive actions."""

import itertools

from tilewar.action import Action


class GameObject:
    """An object with a unique id and a list of actions it offers."""

    _ids = itertools.count(1)

    def __init__(self) -> None:
        super().__init__()
        self.id: int = next(GameObject._ids)
        self.possible_actions: list[str] = []
        self.highlighted: bool = False

    def handle_action(self, action: Action) -> Action:
        """React to an action; by default the panel steps back."""
        return Action(0, "back")

    def highlight(self) -> None:
        """Mark the object as selected."""
        self.highlighted = True

    def unhighlight(self) -> None:
        """Clear the selection mark."""
        self.highlighted = False