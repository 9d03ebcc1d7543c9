"""
Tests for building improvements and sabotage.
"""

from fortunopoly.events import LogCategory


def test_cannot_build_without_monopoly(basic_game, give_property):
    give_property(basic_game, 0, 1)
    assert not basic_game.build_house(0, 1)
    assert basic_game.get_player(0).money == 1500


def test_build_up_to_hotel(basic_game, give_property):
    game = basic_game
    give_property(game, 0, 1, 3)
    for _ in range(5):
        assert game.build_house(0, 1)
    assert game.get_houses(1) == 5
    assert game.get_player(0).money == 1500 - 5 * 50
    assert "Hotel" in game.event_log.messages()[-1]
    assert not game.build_house(0, 1)
    assert game.get_houses(1) == 5


def test_build_requires_money(basic_game, give_property):
    give_property(basic_game, 0, 37, 39)
    basic_game.get_player(0).money = 199
    assert not basic_game.build_house(0, 37)
    assert basic_game.get_houses(37) == 0


def test_cannot_build_on_station(basic_game, give_property):
    give_property(basic_game, 0, 5, 15, 25, 35)
    assert not basic_game.build_house(0, 5)


def test_cannot_build_on_others_tile(basic_game, give_property):
    give_property(basic_game, 1, 1, 3)
    assert not basic_game.build_house(0, 1)


def test_cannot_build_out_of_turn(basic_game, give_property):
    give_property(basic_game, 1, 1, 3)
    assert not basic_game.build_house(1, 1)


def test_sabotage_removes_one_level(basic_game, give_property):
    game = basic_game
    give_property(game, 1, 1, 3, houses=2)
    assert game.sabotage_property(0, 1)
    assert game.get_houses(1) == 1
    assert game.get_player(0).money == 1350
    assert game.get_player(1).money == 1500
    assert game.event_log.get_recent(1)[0].category == LogCategory.JAIL


def test_cannot_sabotage_bare_tile(basic_game, give_property):
    give_property(basic_game, 1, 1)
    assert not basic_game.sabotage_property(0, 1)
    assert basic_game.get_player(0).money == 1500


def test_cannot_sabotage_own_tile(basic_game, give_property):
    give_property(basic_game, 0, 1, 3, houses=1)
    assert not basic_game.sabotage_property(0, 1)


def test_sabotage_requires_fee(basic_game, give_property):
    give_property(basic_game, 1, 1, 3, houses=1)
    basic_game.get_player(0).money = 149
    assert not basic_game.sabotage_property(0, 1)
    assert basic_game.get_houses(1) == 1
