import pytest

from tilewar.action import Action
from tilewar.buildings import (
    Barracks,
    BuildingType,
    Castle,
    Fort,
    Mine,
    create_building,
)
from tilewar.units import Archer, Horseman, Swordsman, UnitType


def test_produced_money_per_building():
    assert create_building(BuildingType.CASTLE).produced_money == 5
    assert create_building(BuildingType.BARRACKS).produced_money == 0
    assert create_building(BuildingType.MINE).produced_money == 2
    assert create_building(BuildingType.FORT).produced_money == 0


@pytest.mark.parametrize(
    "building_type, cls",
    [
        (BuildingType.CASTLE, Castle),
        (BuildingType.BARRACKS, Barracks),
        (BuildingType.MINE, Mine),
        (BuildingType.FORT, Fort),
    ],
)
def test_create_building_types(building_type, cls):
    assert type(create_building(building_type)) is cls


def test_create_null_building():
    assert create_building(BuildingType.NULL) is None


def test_create_unknown_building_type():
    with pytest.raises(ValueError):
        create_building(42)


def _ticks_until_unit(building, limit=20):
    for count in range(1, limit + 1):
        unit = building.produce_unit()
        if unit is not None:
            return count, unit
    return None, None


@pytest.mark.parametrize(
    "unit_type, cls",
    [
        (UnitType.ARCHER, Archer),
        (UnitType.HORSEMAN, Horseman),
        (UnitType.SWORDSMAN, Swordsman),
    ],
)
def test_castle_produces_ordered_unit_after_build_time(unit_type, cls):
    castle = Castle()
    castle.order(unit_type)
    count, unit = _ticks_until_unit(castle)
    assert count == cls.build_time
    assert isinstance(unit, cls)


def test_castle_orders_in_sequence():
    castle = Castle()
    castle.order(UnitType.ARCHER)
    assert _ticks_until_unit(castle)[0] == Archer.build_time
    castle.order(UnitType.HORSEMAN)
    assert _ticks_until_unit(castle)[0] == Horseman.build_time
    castle.order(UnitType.SWORDSMAN)
    assert isinstance(_ticks_until_unit(castle)[1], Swordsman)


def test_castle_without_order_produces_nothing():
    assert Castle().produce_unit() is None


def test_mine_and_fort_never_produce():
    assert Mine().produce_unit() is None
    assert Fort().produce_unit() is None


@pytest.mark.parametrize(
    "code, unit_type",
    [(1, UnitType.SWORDSMAN), (2, UnitType.ARCHER), (3, UnitType.HORSEMAN)],
)
def test_barracks_handle_action_places_order(code, unit_type):
    barracks = Barracks()
    reply = barracks.handle_action(Action(barracks.id, "create unit", [code]))
    assert reply == Action(barracks.id, "purge")
    assert barracks.pending is unit_type


def test_handle_action_unknown_code_places_no_order():
    castle = Castle()
    castle.handle_action(Action(castle.id, "create unit", [9]))
    assert castle.pending is UnitType.NULL


def test_handle_action_without_params():
    castle = Castle()
    with pytest.raises(ValueError):
        castle.handle_action(Action(castle.id, "create unit"))


def test_mine_handle_action_purges():
    mine = Mine()
    assert mine.handle_action(Action(0, "anything")) == Action(mine.id, "purge")


def test_bonuses():
    castle, barracks, mine, fort = Castle(), Barracks(), Mine(), Fort()
    assert (castle.defence_bonus, castle.attack_bonus) == (1.4, 1.1)
    assert (barracks.defence_bonus, barracks.attack_bonus) == (1.2, 1.0)
    assert (mine.defence_bonus, mine.attack_bonus) == (1.0, 1.4)
    assert (fort.defence_bonus, fort.attack_bonus) == (1.4, 0.9)


def test_producing_buildings_offer_unit_menu():
    assert Castle().possible_actions == ["browse create unit"]
    assert Barracks().possible_actions == ["browse create unit"]
    assert Mine().possible_actions == []


def test_pure_damage_destroys_at_zero():
    fort = Fort()
    assert fort.pure_damage(fort.max_health - 1) is False
    assert fort.health == 1
    assert fort.pure_damage(1) is True
    assert fort.health == 0


def test_pure_damage_does_not_go_negative():
    mine = Mine()
    assert mine.pure_damage(mine.max_health * 2) is True
    assert mine.health == 0