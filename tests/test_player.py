"""
Tests for player state: money, holdings and movement.
"""

import pytest

from fortunopoly.board import Board
from fortunopoly.config import BotDifficulty
from fortunopoly.player import Player, PlayerState


@pytest.fixture
def board():
    return Board()


@pytest.fixture
def player(board):
    return PlayerState(0, "Alice", board)


def test_new_player_defaults(player):
    assert player.money == 1500
    assert player.position == 0
    assert player.properties == set()
    assert not player.in_jail
    assert not player.is_bankrupt


def test_bot_player_defaults_to_medium():
    bot = Player(3, "Robo", is_bot=True)
    assert bot.bot_difficulty == BotDifficulty.MEDIUM
    assert Player(4, "Human").bot_difficulty is None
    assert Player(5, "Tough", is_bot=True, bot_difficulty="hard").bot_difficulty == BotDifficulty.HARD


def test_debit_leaves_money_untouched_on_shortfall(player):
    assert player.debit(500)
    assert player.money == 1000
    assert not player.debit(1001)
    assert player.money == 1000


def test_drain_takes_everything(player):
    player.money = 75
    assert player.drain() == 75
    assert player.money == 0


def test_release_lifts_mortgage(player):
    player.acquire(1)
    player.mortgaged.add(1)
    player.release(1)
    assert not player.owns(1)
    assert not player.is_mortgaged(1)


def test_acquire_is_idempotent(player):
    player.acquire(1)
    player.acquire(1)
    assert player.property_count == 1


def test_monopoly_needs_whole_group(player):
    player.acquire(6)
    player.acquire(8)
    assert player.count_in_group("lightblue") == 2
    assert not player.owns_monopoly("lightblue")
    player.acquire(9)
    assert player.owns_monopoly("lightblue")


def test_unknown_group_is_never_a_monopoly(player):
    assert not player.owns_monopoly("purple")


def test_station_and_utility_counts(player):
    for pos in (5, 15, 12):
        player.acquire(pos)
    assert player.count_railroads() == 2
    assert player.count_utilities() == 1


def test_advance_past_start_collects_bonus(player):
    player.position = 38
    assert player.advance(5)
    assert player.position == 3
    assert player.money == 1700


def test_advance_backwards_never_passes_start(player):
    player.position = 2
    assert not player.advance(-3)
    assert player.position == 39
    assert player.money == 1500


def test_advance_in_jail_pays_no_bonus(player):
    player.position = 38
    player.in_jail = True
    assert player.advance(5)
    assert player.money == 1500


def test_relocate_backwards_collects_bonus(player):
    player.position = 33
    assert player.relocate(5)
    assert player.money == 1700


def test_relocate_to_jail_is_not_passing_start(player):
    player.position = 30
    assert not player.relocate(10)
    assert player.money == 1500


def test_relocate_without_collect(player):
    player.position = 33
    assert not player.relocate(5, collect_start=False)
    assert player.money == 1500


def test_send_to_jail_and_release(player):
    player.position = 30
    player.send_to_jail()
    assert player.position == 10
    assert player.in_jail
    assert player.increment_jail_turn() == 1
    player.release_from_jail()
    assert not player.in_jail
    assert player.jail_turns == 0


def test_net_worth_counts_face_prices(player):
    player.acquire(1)
    player.acquire(5)
    assert player.net_worth() == 1500 + 60 + 200


def test_go_bankrupt_zeroes_money(player):
    player.go_bankrupt()
    assert player.is_bankrupt
    assert player.money == 0
