"""
Tests for the scripted bot's decisions.
"""

import pytest

from fortunopoly import BotDifficulty, GameConfig, Player, create_game
from fortunopoly.agents import DIFFICULTY, BotAgent, create_bot_for
from fortunopoly.trading import TradeProposal


def make_bot(difficulty, roll=None):
    bot = BotAgent(0, "Alice", difficulty)
    if roll is not None:
        bot.rng.random = lambda: roll
    return bot


def test_difficulty_table():
    assert DIFFICULTY[BotDifficulty.EASY].buy_chance == 0.4
    assert DIFFICULTY[BotDifficulty.MEDIUM].min_money_buffer == 250
    assert DIFFICULTY[BotDifficulty.HARD].sabotage_chance == 0.5
    assert not DIFFICULTY[BotDifficulty.EASY].prioritize_monopoly


def test_create_bot_uses_seat_difficulty():
    players = [Player(0, "Alice", is_bot=True, bot_difficulty="hard"), Player(1, "Bob", is_bot=True)]
    game = create_game(GameConfig(seed=1), players)
    assert create_bot_for(game, 0).difficulty == BotDifficulty.HARD
    assert create_bot_for(game, 1).difficulty == BotDifficulty.MEDIUM


# Buying


def test_buy_when_it_completes_monopoly(basic_game, give_property):
    give_property(basic_game, 0, 1)
    basic_game.get_player(0).money = 70
    assert make_bot(BotDifficulty.EASY, roll=0.99).should_buy(basic_game, 3)


def test_hard_bot_buys_stations(basic_game):
    basic_game.get_player(0).money = 300
    assert make_bot(BotDifficulty.HARD, roll=0.99).should_buy(basic_game, 5)
    assert not make_bot(BotDifficulty.MEDIUM, roll=0.0).should_buy(basic_game, 5)


def test_hard_bot_blocks_opponent(basic_game, give_property):
    give_property(basic_game, 1, 6, 8)
    basic_game.get_player(0).money = 200
    assert make_bot(BotDifficulty.HARD, roll=0.99).should_buy(basic_game, 9)
    assert not make_bot(BotDifficulty.MEDIUM, roll=0.0).should_buy(basic_game, 9)


def test_keeps_cash_buffer(basic_game):
    basic_game.get_player(0).money = 600
    assert not make_bot(BotDifficulty.MEDIUM, roll=0.0).should_buy(basic_game, 39)


def test_medium_builds_on_partial_group(basic_game, give_property):
    give_property(basic_game, 0, 6)
    assert make_bot(BotDifficulty.MEDIUM, roll=0.99).should_buy(basic_game, 8)


def test_random_purchase(basic_game):
    assert make_bot(BotDifficulty.EASY, roll=0.1).should_buy(basic_game, 11)
    assert not make_bot(BotDifficulty.EASY, roll=0.5).should_buy(basic_game, 11)


# Jail


def test_always_uses_jail_card(basic_game):
    basic_game.get_player(0).has_jail_free_card = True
    assert make_bot(BotDifficulty.EASY).should_pay_bail(basic_game)


def test_stays_in_jail_early(basic_game, give_property):
    give_property(basic_game, 0, 1, 6)
    assert not make_bot(BotDifficulty.HARD).should_pay_bail(basic_game)


@pytest.mark.parametrize(
    "difficulty, money, expected",
    [
        (BotDifficulty.MEDIUM, 450, False),
        (BotDifficulty.HARD, 450, True),
        (BotDifficulty.EASY, 700, True),
    ],
)
def test_bail_depends_on_cash(basic_game, give_property, difficulty, money, expected):
    give_property(basic_game, 0, 1, 6, 11)
    basic_game.get_player(0).money = money
    assert make_bot(difficulty).should_pay_bail(basic_game) is expected


def test_bail_with_monopoly(basic_game, give_property):
    give_property(basic_game, 0, 1, 3, 6)
    basic_game.get_player(0).money = 350
    assert make_bot(BotDifficulty.EASY).should_pay_bail(basic_game)


# Building


def test_builds_once_per_tile(basic_game, give_property):
    give_property(basic_game, 0, 1, 3)
    bot = make_bot(BotDifficulty.MEDIUM, roll=0.0)
    assert bot.try_build_houses(basic_game) == 2
    assert basic_game.get_houses(1) == 1
    assert basic_game.get_houses(3) == 1
    assert basic_game.get_player(0).money == 1400


def test_build_gate_can_skip(basic_game, give_property):
    give_property(basic_game, 0, 1, 3)
    assert make_bot(BotDifficulty.MEDIUM, roll=0.99).try_build_houses(basic_game) == 0


def test_build_respects_buffer(basic_game, give_property):
    give_property(basic_game, 0, 1, 3)
    basic_game.get_player(0).money = 299
    assert make_bot(BotDifficulty.MEDIUM, roll=0.0).try_build_houses(basic_game) == 0


# Trading


def test_accepts_generous_trade(basic_game, give_property):
    give_property(basic_game, 1, 39)
    proposal = TradeProposal(1, 0, offered_properties=[39], requested_money=100)
    assert make_bot(BotDifficulty.HARD, roll=0.99).evaluate_trade(basic_game, proposal)


def test_rejects_poor_trade(basic_game, give_property):
    give_property(basic_game, 0, 39)
    proposal = TradeProposal(1, 0, offered_money=50, requested_properties=[39])
    assert not make_bot(BotDifficulty.EASY, roll=0.99).evaluate_trade(basic_game, proposal)


def test_hard_bot_takes_monopoly_completing_trade(basic_game, give_property):
    give_property(basic_game, 0, 1)
    give_property(basic_game, 1, 3)
    proposal = TradeProposal(1, 0, offered_properties=[3], requested_money=100)
    assert make_bot(BotDifficulty.HARD, roll=0.99).evaluate_trade(basic_game, proposal)
    assert not make_bot(BotDifficulty.MEDIUM, roll=0.99).evaluate_trade(basic_game, proposal)


# Card choices and sabotage


def test_steals_from_richest(three_player_game):
    three_player_game.get_player(2).money = 3000
    bot = make_bot(BotDifficulty.EASY)
    assert bot.choose_steal_target(three_player_game, [1, 2]) == 2
    assert bot.choose_steal_target(three_player_game, []) is None


def test_burns_most_improved(basic_game, give_property):
    give_property(basic_game, 1, 1, 3)
    basic_game.property_houses[1] = 1
    basic_game.property_houses[3] = 4
    assert make_bot(BotDifficulty.EASY).choose_demolish_target(basic_game, [1, 3]) == 3


def test_sabotage_picks_target(basic_game, give_property):
    give_property(basic_game, 1, 1, 3, houses=2)
    assert make_bot(BotDifficulty.MEDIUM, roll=0.0).consider_sabotage(basic_game) == 1
    assert make_bot(BotDifficulty.MEDIUM, roll=0.99).consider_sabotage(basic_game) is None


def test_no_sabotage_without_targets(basic_game):
    assert make_bot(BotDifficulty.HARD, roll=0.0).consider_sabotage(basic_game) is None
