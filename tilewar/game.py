"""Turn logic of a two-player local game: selection, menus and combat."""

import random
import struct
from collections.abc import Callable, Iterable
from enum import Enum, auto

from tilewar.action import Action, action_title
from tilewar.actionfield import ActionField, Button
from tilewar.board import Board
from tilewar.buildings import BuildingType
from tilewar.database import Database
from tilewar.player import Player
from tilewar.tile import Tile
from tilewar.units import Archer, Horseman, Swordsman, Unit


class MapState(Enum):
    """What a click on the board currently means."""

    WAITING_TILE_CLICK = auto()
    DISABLED = auto()
    WAITING_TARGET_CLICK = auto()


_BACK = "Назад"

_BUILDING_CODES = {
    1: BuildingType.BARRACKS,
    2: BuildingType.FORT,
    3: BuildingType.MINE,
}

_UNIT_TITLES = {0: "Лучник", 1: "Всадник", 2: "Мечник"}

_WIN_MESSAGES = {"darkred": "Красный игрок победил"}
_DEFAULT_WIN_MESSAGE = "Синий игрок победил"


def _f32(value: float) -> float:
    """Round ``value`` to single precision."""
    return struct.unpack("f", struct.pack("f", value))[0]


def _scale(power: int, bonus: float) -> int:
    """Multiply power by a single-precision bonus and truncate."""
    return int(_f32(power * _f32(bonus)))


def _resolve(defence: int, attack: int) -> tuple[int, int]:
    """The stronger side doubles its margin over the weaker one."""
    if defence > attack:
        defence += defence - attack
    else:
        attack += attack - defence
    return defence, attack


class Game:
    """A game on a 10x10 board between a red and a blue player."""

    def __init__(self, rng: random.Random | None = None) -> None:
        self.database = Database()
        self.players: dict[int, Player] = {0: Player("darkred"), 1: Player("darkblue")}
        self.turn = 0
        self.building_created = False
        self.winner: Player | None = None
        self.result_message = ""

        self.board = Board(rng=rng)
        for tile in self.board:
            self.database.register(tile)
            self.database.register(tile.army)

        self._prepare_demo()
        self.board.unhighlight_all()

        self.action_field = ActionField()
        self.add_button("next turn", 0, "Следующий ход")

        self.map_state = MapState.WAITING_TILE_CLICK
        self.highlighted: Tile | None = None
        self.last_action = Action()

    def _tile(self, x: int, y: int) -> Tile:
        tile = self.board.tile(x, y)
        if tile is None:
            raise IndexError(f"no tile at ({x}, {y})")
        return tile

    def _prepare_demo(self) -> None:
        red, blue = self.players[0], self.players[1]
        for x in range(5):
            for y in range(5):
                self._tile(x, y).owner = red
        self._tile(4, 4).owner = None
        for x in range(5, 10):
            for y in range(5, 10):
                self._tile(x, y).owner = blue
        self._tile(5, 5).owner = None

        for (x, y), kind in (
            ((3, 3), BuildingType.CASTLE),
            ((6, 6), BuildingType.CASTLE),
            ((1, 3), BuildingType.BARRACKS),
            ((3, 1), BuildingType.BARRACKS),
            ((8, 6), BuildingType.BARRACKS),
            ((6, 8), BuildingType.BARRACKS),
        ):
            self.database.register(self._tile(x, y).set_building(kind))

        placements: list[tuple[tuple[int, int], type[Unit]]] = [
            ((3, 4), Swordsman), ((3, 4), Swordsman),
            ((4, 3), Swordsman), ((4, 3), Swordsman),
            ((6, 5), Swordsman), ((6, 5), Swordsman),
            ((5, 6), Swordsman), ((5, 6), Swordsman),
            ((2, 4), Horseman), ((4, 2), Horseman),
            ((7, 5), Horseman), ((5, 7), Horseman),
            ((2, 3), Archer), ((3, 2), Archer),
            ((6, 7), Archer), ((7, 6), Archer),
        ]
        for (x, y), cls in placements:
            self._tile(x, y).army.add_unit(cls())

    @property
    def current_player(self) -> Player:
        return self.players[self.turn]

    @property
    def opponent(self) -> Player:
        return self.players[self.turn ^ 1]

    @property
    def background(self) -> str:
        """Colour of the player whose turn it is."""
        return self.current_player.color

    def add_button(
        self,
        action_name: str,
        sender: int,
        title: str = "sample",
        params: Iterable[int] | None = None,
    ) -> Button:
        """Add a button for ``action_name`` to the menu on top of the panel."""
        button = Button(Action(sender, action_name, list(params or [])), title)
        self.action_field.add_button(button)
        return button

    def check_win(self) -> Player | None:
        """Declare a winner once one player holds both home squares."""
        owner = self._tile(7, 7).owner
        if owner is self._tile(2, 2).owner and owner is not None:
            self.winner = owner
            self.result_message = _WIN_MESSAGES.get(owner.color, _DEFAULT_WIN_MESSAGE)
        return self.winner

    def _enable_targets(self, action: Action, accepts: Callable[[int, Tile], bool]) -> None:
        highlighted = self._require_highlighted()
        self.map_state = MapState.WAITING_TARGET_CLICK
        self.action_field.new_menu()
        highlighted.draw_disabled()
        own = highlighted.owner is self.current_player
        for tile in self.board:
            distance = abs(tile.x - highlighted.x) + abs(tile.y - highlighted.y)
            if own and accepts(distance, tile):
                tile.draw_enabled()
        self.last_action = action
        self.add_button("back", 0, _BACK)

    def _require_highlighted(self) -> Tile:
        if self.highlighted is None:
            raise RuntimeError("no tile is selected")
        return self.highlighted

    def _unit(self, object_id: int) -> Unit:
        unit = self.database.get(object_id)
        if not isinstance(unit, Unit):
            raise TypeError(f"object {object_id} is not a unit")
        return unit

    def _is_enemy_army(self, tile: Tile) -> bool:
        return tile.owner is self.opponent and not tile.army.is_empty

    def handle_action(self, action: Action) -> None:
        """Carry out an action chosen on the panel or returned by an object."""
        name = action.name
        if name == "next turn":
            self.board.tick()
            self.turn ^= 1
            self.building_created = False
        elif name == "purge":
            self.action_field.purge()
            self.map_state = MapState.WAITING_TILE_CLICK
            if self.highlighted is not None:
                self.board.unhighlight_all()
            self.highlighted = None
        elif name == "back":
            if action.sender != 0:
                self.board.unhighlight_all()
            self.action_field.pop()
            if self.map_state is MapState.WAITING_TARGET_CLICK:
                self.map_state = MapState.DISABLED
                self.board.highlight(self._require_highlighted())
            if self.action_field.is_empty:
                self.map_state = MapState.WAITING_TILE_CLICK
        elif name == "browse":
            obj = self.database.get(action.sender)
            self.action_field.new_menu()
            for option in obj.possible_actions:
                self.add_button(option, action.sender, action_title(option))
            self.add_button("back", 0, _BACK)
        elif name == "browse create building":
            self.action_field.new_menu()
            self.add_button("create building", action.sender, "Создать казармы", [1])
            self.add_button("create building", action.sender, "Создать форт", [2])
            self.add_button("create building", action.sender, "Создать окоп", [3])
            self.add_button("back", 0, _BACK)
        elif name == "create building":
            tile = self.database.get(action.sender)
            if not isinstance(tile, Tile):
                raise TypeError(f"object {action.sender} is not a tile")
            if not action.params or action.params[0] not in _BUILDING_CODES:
                raise ValueError(f"unknown building code in {action.params!r}")
            self.building_created = True
            self.database.register(tile.set_building(_BUILDING_CODES[action.params[0]]))
            self.handle_action(Action(0, "purge"))
        elif name == "browse create unit":
            self.action_field.new_menu()
            self.add_button("create unit", action.sender, "Создать мечника", [1])
            self.add_button("create unit", action.sender, "Создать лучника", [2])
            self.add_button("create unit", action.sender, "Создать всадника", [3])
            self.add_button("back", 0, _BACK)
        elif name == "army move":
            self._enable_targets(action, lambda d, t: d == 1 and t.is_army_empty)
        elif name in ("army attack", "attack"):
            self._enable_targets(action, lambda d, t: d == 1 and self._is_enemy_army(t))
        elif name == "browse units":
            self.action_field.new_menu()
            for unit in self._require_highlighted().army.units:
                self.database.register(unit)
                if not unit.can_act:
                    continue
                title = _UNIT_TITLES.get(unit.kind)
                if title is not None:
                    self.add_button("browse", unit.id, title)
            self.add_button("back", 0, _BACK)
        elif name == "move":
            points = self._unit(action.sender).action_points
            self._enable_targets(
                action,
                lambda d, t: 0 < d <= points and (t.is_army_empty or t.owner is not self.opponent),
            )
        elif name == "shoot":
            self._enable_targets(action, lambda d, t: 0 < d <= 2 and self._is_enemy_army(t))
        else:
            self.handle_action(self.database.get(action.sender).handle_action(action))

    def press_button(self, button: Button) -> None:
        """React to a click on a panel button."""
        self.handle_action(button.action)

    def press_tile(self, tile: Tile) -> None:
        """React to a click on a board tile."""
        if not tile.enabled:
            return
        if self.map_state is MapState.WAITING_TILE_CLICK:
            if tile.owner is not self.current_player:
                return
            self.map_state = MapState.DISABLED
            self.highlighted = tile
            self.board.highlight(tile)
            self.browse_tile_actions(tile)
        elif self.map_state is MapState.WAITING_TARGET_CLICK:
            self._resolve_target(tile)
            self.handle_action(Action(0, "purge"))

    def _resolve_target(self, target: Tile) -> None:
        source = self._require_highlighted()
        name = self.last_action.name
        if name == "army move":
            moving, staying = source.army, target.army
            moving.set_acted()
            target.army = moving
            source.army = staying
            target.owner = source.owner
            self.check_win()
        elif name == "army attack":
            defenders, attackers = target.army, source.army
            attackers.set_acted()
            defence = _scale(defenders.power, source.defence_bonus)
            attack = int(attackers.power * (1.2 * _f32(source.attack_bonus)))
            defence, attack = _resolve(defence, attack)
            defenders.damage((attack + 1) // 2)
            attackers.damage((defence + 1) // 2)
        elif name == "move":
            unit = self._unit(self.last_action.sender)
            unit.set_acted()
            source.army.remove_unit(unit)
            target.army.add_unit(unit)
            target.owner = source.owner
            self.check_win()
        elif name == "attack":
            unit = self._unit(self.last_action.sender)
            unit.set_acted()
            defence = _scale(target.army.power, source.defence_bonus)
            attack = _scale(unit.combat_power, source.attack_bonus)
            defence, attack = _resolve(defence, attack)
            target.army.damage((attack + 1) // 2)
            unit.pure_damage((defence + 1) // 2)
            if unit.power <= 0:
                source.army.remove_unit(unit)
        elif name == "shoot":
            unit = self._unit(self.last_action.sender)
            unit.set_acted()
            defence = _scale(target.army.power, source.defence_bonus)
            attack = _scale(unit.power, source.attack_bonus)
            defence, attack = _resolve(defence, attack)
            target.army.damage((attack + 1) // 2)

    def browse_actions(self, object_id: int) -> None:
        """Open a menu with a button for every action the object offers."""
        self.action_field.new_menu()
        for option in self.database.get(object_id).possible_actions:
            self.add_button(option, object_id)

    def browse_tile_actions(self, tile: Tile) -> None:
        """Open the menu shown after selecting a tile."""
        self.action_field.new_menu()
        if tile.building is not None:
            self.add_button("browse", tile.building.id, "Действия здания")
        elif not self.building_created:
            self.add_button("browse create building", tile.id, "Создать здание")
        if not tile.is_army_empty and tile.army.can_act:
            self.add_button("browse", tile.army.id, "Действия юнитов")
        self.add_button("back", tile.id, _BACK)