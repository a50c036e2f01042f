import random

from tilewar.board import Board
from tilewar.buildings import BuildingType
from tilewar.units import Archer, Swordsman


def make_board():
    return Board(rng=random.Random(3))


def test_default_size():
    board = make_board()
    assert board.size == (10, 10)
    assert len(list(board)) == board.width * board.height


def test_tiles_know_their_position():
    board = make_board()
    for tile in board:
        assert board.tile(tile.x, tile.y) is tile


def test_tile_off_board_is_none():
    board = make_board()
    assert board.tile(-1, 0) is None
    assert board.tile(0, -1) is None
    assert board.tile(board.height, 0) is None
    assert board.tile(0, board.width) is None


def test_rectangular_board_bounds():
    board = Board(width=4, height=2, rng=random.Random(0))
    assert board.tile(1, 3) is not None and board.tile(1, 3).y == 3
    assert board.tile(2, 0) is None


def test_tiles_are_distinct_objects():
    board = make_board()
    ids = [tile.id for tile in board]
    assert len(set(ids)) == len(ids)


def test_highlight_enables_only_target():
    board = make_board()
    target = board.tile(3, 4)
    board.highlight(target)
    assert target.enabled
    assert [t for t in board if t.enabled] == [target]


def test_unhighlight_all_enables_everything():
    board = make_board()
    board.highlight(board.tile(0, 0))
    board.unhighlight_all()
    assert all(tile.enabled for tile in board)


def test_tick_advances_every_tile():
    board = make_board()
    tile = board.tile(1, 3)
    tile.set_building(BuildingType.BARRACKS)
    tile.building.order(Archer.unit_type)
    acted = board.tile(6, 6)
    acted.army.add_unit(Swordsman())
    acted.army.set_acted()
    for _ in range(Archer.build_time):
        board.tick()
    assert isinstance(tile.army.units[0], Archer)
    assert acted.army.can_act


def test_combat_uses_tile_powers():
    board = make_board()
    attacker, defender = board.tile(0, 0), board.tile(0, 1)
    attacker.army.add_unit(Swordsman())
    defender.army.add_unit(Archer())
    defender.set_building(BuildingType.FORT)
    assert board.combat(attacker, defender) == (attacker.attack_power, defender.defence_power)