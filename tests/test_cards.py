"""
Tests for Fortune and Fate decks and card effects.
"""

import random

import pytest

from fortunopoly.cards import (
    FATE_CARDS,
    FORTUNE_CARDS,
    DeckType,
    create_fate_deck,
    create_fortune_deck,
    find_card,
)
from fortunopoly.results import ChoiceType, LandingAction


def test_deck_sizes():
    assert len(FORTUNE_CARDS) == 16
    assert len(FATE_CARDS) == 12
    assert create_fate_deck(random.Random(1)).size == 12


def test_card_ids_are_unique():
    ids = [card.card_id for card in FATE_CARDS + FORTUNE_CARDS]
    assert sorted(ids) == list(range(1, 29))


def test_full_cycle_deals_each_card_once():
    """Drawing the deck size deals every card exactly once."""
    deck = create_fortune_deck(random.Random(7))
    drawn = [deck.draw().card_id for _ in range(deck.size)]
    assert sorted(drawn) == sorted(card.card_id for card in FORTUNE_CARDS)
    assert len(deck) == 0


def test_exhausted_deck_reshuffles():
    deck = create_fate_deck(random.Random(7))
    for _ in range(deck.size):
        deck.draw()
    card = deck.draw()
    assert card in FATE_CARDS
    assert len(deck) == deck.size - 1


def test_find_card():
    assert find_card(26).text.startswith("Heist Opportunity")
    with pytest.raises(KeyError):
        find_card(99)


def test_landing_on_card_tile_draws_from_its_deck(basic_game):
    game = basic_game
    game.get_player(0).position = 7
    result = game.process_landing(0)
    assert result.action == LandingAction.CHANCE_CARD
    assert result.deck == DeckType.FATE
    assert result.card in FATE_CARDS
    assert len(game.decks[DeckType.FATE]) == 11


def test_money_cards(basic_game):
    game = basic_game
    game.apply_card_effect(0, find_card(1))
    assert game.get_player(0).money == 1700
    game.apply_card_effect(0, find_card(9))
    assert game.get_player(0).money == 1600


def test_unaffordable_fine_bankrupts(three_player_game):
    game = three_player_game
    game.get_player(0).money = 10
    game.apply_card_effect(0, find_card(8))
    assert game.get_player(0).is_bankrupt


def test_advance_to_start_collects_bonus(basic_game):
    game = basic_game
    game.get_player(0).position = 17
    result = game.apply_card_effect(0, find_card(12))
    assert result.needs_landing
    assert game.get_player(0).position == 0
    assert game.get_player(0).money == 1700


def test_move_forward_without_passing_start(basic_game):
    game = basic_game
    game.get_player(0).position = 2
    game.apply_card_effect(0, find_card(13))
    assert game.get_player(0).position == 5
    assert game.get_player(0).money == 1500


def test_move_back_three_never_collects(basic_game):
    game = basic_game
    game.get_player(0).position = 2
    result = game.apply_card_effect(0, find_card(17))
    assert result.needs_landing
    assert game.get_player(0).position == 39
    assert game.get_player(0).money == 1500


def test_go_to_jail_card(basic_game):
    game = basic_game
    game.get_player(0).position = 36
    result = game.apply_card_effect(0, find_card(18))
    player = game.get_player(0)
    assert not result.needs_landing
    assert player.in_jail
    assert player.position == 10
    assert player.money == 1500


def test_jail_free_card(basic_game):
    basic_game.apply_card_effect(0, find_card(19))
    assert basic_game.get_player(0).has_jail_free_card


def test_collect_from_each_takes_what_they_have(three_player_game):
    game = three_player_game
    game.get_player(1).money = 10
    game.apply_card_effect(0, find_card(20))
    assert game.get_player(0).money == 1500 + 10 + 25
    assert game.get_player(1).money == 0
    assert game.get_player(2).money == 1475


def test_pay_each_player(three_player_game):
    game = three_player_game
    game.apply_card_effect(0, find_card(21))
    assert game.get_player(0).money == 1480
    assert game.get_player(1).money == 1510
    assert game.get_player(2).money == 1510


def test_pay_each_player_shortfall_bankrupts(three_player_game):
    game = three_player_game
    game.get_player(0).money = 15
    game.apply_card_effect(0, find_card(21))
    assert game.get_player(0).is_bankrupt
    assert game.get_player(1).money == 1500


def test_street_repairs_per_property(basic_game, give_property):
    game = basic_game
    give_property(game, 0, 1, 5)
    game.apply_card_effect(0, find_card(22))
    assert game.get_player(0).money == 1450


def test_steal_from_richest(three_player_game):
    game = three_player_game
    game.get_player(2).money = 2000
    game.apply_card_effect(0, find_card(23))
    assert game.get_player(0).money == 1600
    assert game.get_player(2).money == 1900
    assert game.get_player(1).money == 1500


def test_steal_from_all(three_player_game):
    game = three_player_game
    game.get_player(2).money = 30
    game.apply_card_effect(0, find_card(25))
    assert game.get_player(0).money == 1500 + 50 + 30
    assert game.get_player(1).money == 1450
    assert game.get_player(2).money == 0


def test_steal_choice_waits_for_target(three_player_game):
    game = three_player_game
    result = game.apply_card_effect(0, find_card(26))
    assert result.needs_choice
    assert result.choice.choice_type == ChoiceType.STEAL_TARGET
    assert result.choice.amount == 150
    assert result.choice.candidates == [1, 2]
    assert game.pending_choice is result.choice

    assert game.resolve_steal_choice(0, 1)
    assert game.get_player(0).money == 1650
    assert game.get_player(1).money == 1350
    assert game.pending_choice is None


def test_steal_choice_rejects_self(three_player_game):
    game = three_player_game
    game.apply_card_effect(0, find_card(26))
    assert not game.resolve_steal_choice(0, 0)
    assert game.get_player(0).money == 1500


def test_arson_without_buildings_is_a_no_op(basic_game):
    result = basic_game.apply_card_effect(0, find_card(24))
    assert not result.needs_choice
    assert basic_game.pending_choice is None


def test_arson_removes_one_level(basic_game, give_property):
    game = basic_game
    give_property(game, 1, 1, 3, houses=2)
    give_property(game, 0, 6)
    game.property_houses[6] = 1

    result = game.apply_card_effect(0, find_card(24))
    assert result.choice.choice_type == ChoiceType.DEMOLISH_TARGET
    assert result.choice.candidates == [1, 3]

    assert not game.resolve_demolish_choice(0, 6)
    assert game.resolve_demolish_choice(0, 3)
    assert game.get_houses(3) == 1
    assert game.get_player(0).money == 1500


def test_steal_needs_a_drawn_card(basic_game):
    """Without a pending steal card nothing can be taken."""
    game = basic_game
    result = game.resolve_steal_choice(0, 1)
    assert not result
    assert result.reason == "No steal target pending"
    assert game.get_player(0).money == 1500
    assert game.get_player(1).money == 1500


def test_demolish_needs_a_drawn_card(basic_game, give_property):
    game = basic_game
    give_property(game, 1, 1, 3, houses=3)
    result = game.resolve_demolish_choice(0, 1)
    assert not result
    assert result.reason == "No demolition target pending"
    assert game.get_houses(1) == 3


def test_pending_choice_types_do_not_mix(three_player_game, give_property):
    game = three_player_game
    give_property(game, 1, 1, 3, houses=2)
    game.apply_card_effect(0, find_card(26))
    assert not game.resolve_demolish_choice(0, 1)
    assert game.get_houses(1) == 2
    assert game.pending_choice is not None


def test_steal_target_must_be_a_candidate(three_player_game):
    game = three_player_game
    game.apply_card_effect(0, find_card(26))
    game.pending_choice.candidates.remove(2)
    assert not game.resolve_steal_choice(0, 2)
    assert game.get_player(2).money == 1500


def test_market_crash_spares_drawer_from_bankruptcy(three_player_game):
    """The drawer is drained to zero but stays in; others go bankrupt."""
    game = three_player_game
    game.get_player(0).money = 20
    game.get_player(1).money = 50
    game.apply_card_effect(0, find_card(27))
    assert game.get_player(0).money == 0
    assert not game.get_player(0).is_bankrupt
    assert game.get_player(1).is_bankrupt
    assert game.get_player(2).money == 1425


def test_gamble_win(basic_game):
    basic_game.rng.random = lambda: 0.9
    basic_game.apply_card_effect(0, find_card(28))
    assert basic_game.get_player(0).money == 1700


def test_gamble_loss(basic_game):
    basic_game.rng.random = lambda: 0.1
    basic_game.apply_card_effect(0, find_card(28))
    assert basic_game.get_player(0).money == 1400


def test_gamble_loss_without_money_bankrupts(basic_game):
    basic_game.rng.random = lambda: 0.1
    basic_game.get_player(0).money = 50
    basic_game.apply_card_effect(0, find_card(28))
    assert basic_game.get_player(0).is_bankrupt
    assert basic_game.is_over
