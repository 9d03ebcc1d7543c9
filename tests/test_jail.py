"""
Tests for jail entry, escape and bail.
"""

from fortunopoly.events import LogCategory
from fortunopoly.results import DiceRoll


def jail(game, player_id):
    game.send_to_jail(player_id)
    return game.get_player(player_id)


def test_send_to_jail_skips_start_bonus(basic_game):
    game = basic_game
    game.get_player(0).position = 35
    player = jail(game, 0)
    assert player.position == 10
    assert player.in_jail
    assert player.jail_turns == 0
    assert player.money == 1500
    assert game.event_log.get_recent(1)[0].category == LogCategory.JAIL


def test_doubles_escape(basic_game):
    player = jail(basic_game, 0)
    result = basic_game.process_jail_turn(0, DiceRoll(3, 3))
    assert result.escaped
    assert result.can_move
    assert not player.in_jail


def test_failed_roll_stays_in_jail(basic_game):
    player = jail(basic_game, 0)
    result = basic_game.process_jail_turn(0, DiceRoll(1, 2))
    assert not result.escaped
    assert not result.can_move
    assert player.in_jail
    assert player.jail_turns == 1


def test_third_failed_roll_forces_bail(basic_game):
    player = jail(basic_game, 0)
    player.jail_turns = 2
    result = basic_game.process_jail_turn(0, DiceRoll(1, 2))
    assert result.escaped
    assert result.can_move
    assert not player.in_jail
    assert player.money == 1450


def test_third_failed_roll_without_bail_bankrupts(four_player_game, give_property):
    """A jailed player with $30 on the third turn goes bankrupt to the bank."""
    game = four_player_game
    give_property(game, 0, 1, 3, houses=1)
    player = jail(game, 0)
    player.jail_turns = 2
    player.money = 30

    result = game.process_jail_turn(0, DiceRoll(1, 2))

    assert not result.can_move
    assert player.is_bankrupt
    assert player.properties == set()
    assert 1 not in game.property_owners
    assert 3 not in game.property_owners
    assert 1 not in game.property_houses
    assert not game.is_over


def test_pay_bail(basic_game):
    player = jail(basic_game, 0)
    assert basic_game.pay_jail_bail(0)
    assert not player.in_jail
    assert player.money == 1450


def test_bail_uses_card_first(basic_game):
    player = jail(basic_game, 0)
    player.has_jail_free_card = True
    assert basic_game.pay_jail_bail(0)
    assert not player.in_jail
    assert not player.has_jail_free_card
    assert player.money == 1500


def test_bail_without_money_fails(basic_game):
    player = jail(basic_game, 0)
    player.money = 10
    assert not basic_game.pay_jail_bail(0)
    assert player.in_jail
    assert player.money == 10


def test_bail_when_free_fails(basic_game):
    assert not basic_game.pay_jail_bail(0)
    assert basic_game.get_player(0).money == 1500


def test_bail_out_of_turn_fails(basic_game):
    player = jail(basic_game, 1)
    assert not basic_game.pay_jail_bail(1)
    assert player.in_jail
