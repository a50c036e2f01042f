"""Lookup of game objects by id."""

from collections.abc import Iterator

from tilewar.objects import GameObject


class Database:
    """Maps object ids to the registered objects."""

    def __init__(self) -> None:
        self._objects: dict[int, GameObject] = {}

    def get(self, object_id: int) -> GameObject:
        """Return the object with ``object_id``; raise KeyError if unknown."""
        try:
            return self._objects[object_id]
        except KeyError:
            raise KeyError(f"no object with id {object_id}") from None

    def register(self, obj: GameObject) -> None:
        """Add or replace the object under its own id."""
        self._objects[obj.id] = obj

    def remove(self, object_id: int) -> None:
        """Forget the object with ``object_id`` if it is known."""
        self._objects.pop(object_id, None)

    def __contains__(self, object_id: object) -> bool:
        return object_id in self._objects

    def __len__(self) -> int:
        return len(self._objects)

    def __iter__(self) -> Iterator[GameObject]:
        return iter(self._objects.values())