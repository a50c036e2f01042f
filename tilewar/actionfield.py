"""The side panel of action buttons, organised as a stack of menus."""

from dataclasses import dataclass, field

from tilewar.action import Action


@dataclass(eq=False)
class Button:
    """A panel button that triggers ``action`` when pressed."""

    action: Action = field(default_factory=Action)
    text: str = ""


class ActionField:
    """A stack of button menus; only the top menu is shown."""

    def __init__(self) -> None:
        self._menus: list[list[Button]] = []
        self.new_menu()

    @property
    def buttons(self) -> tuple[Button, ...]:
        """Buttons of the menu currently shown."""
        return tuple(self._menus[-1])

    @property
    def depth(self) -> int:
        """Number of menus on the stack, the base menu included."""
        return len(self._menus)

    @property
    def is_empty(self) -> bool:
        """True when only the base menu is left."""
        return len(self._menus) <= 1

    def new_menu(self) -> None:
        """Open an empty menu on top of the current one."""
        self._menus.append([])

    def add_button(self, button: Button) -> None:
        """Add ``button`` to the menu on top."""
        self._menus[-1].append(button)

    def pop(self) -> None:
        """Close the top menu and show the one beneath it."""
        if len(self._menus) <= 1:
            raise IndexError("cannot close the base menu")
        self._menus.pop()

    def purge(self) -> None:
        """Close every menu above the base menu."""
        while len(self._menus) > 1:
            self.pop()