"""Shared test fixtures for Fortunopoly tests."""

import pytest

from fortunopoly import GameConfig, Player, create_game


@pytest.fixture
def game_config():
    """Default game configuration with fixed seed for reproducibility."""
    return GameConfig(seed=42)


@pytest.fixture
def two_players():
    """Two test players."""
    return [Player(0, "Alice"), Player(1, "Bob")]


@pytest.fixture
def three_players():
    """Three test players."""
    return [Player(0, "Alice"), Player(1, "Bob"), Player(2, "Charlie")]


@pytest.fixture
def four_players():
    """Four test players."""
    return [
        Player(0, "Alice"),
        Player(1, "Bob"),
        Player(2, "Charlie"),
        Player(3, "Diana"),
    ]


@pytest.fixture
def basic_game(game_config, two_players):
    """Basic game with two players and fixed seed."""
    return create_game(game_config, two_players)


@pytest.fixture
def three_player_game(game_config, three_players):
    """Game with three players, so one bankruptcy does not end it."""
    return create_game(game_config, three_players)


@pytest.fixture
def four_player_game(game_config, four_players):
    """Game with four players and fixed seed."""
    return create_game(game_config, four_players)


@pytest.fixture
def give_property():
    """Write tiles straight into the ownership ledger."""

    def _give(game, player_id, *positions, houses=0, mortgaged=False):
        player = game.get_player(player_id)
        for pos in positions:
            player.acquire(pos)
            game.property_owners[pos] = player_id
            game.property_houses[pos] = houses
            if mortgaged:
                player.mortgaged.add(pos)

    return _give


@pytest.fixture
def rig_dice():
    """Replace the game's dice with a fixed sequence of faces."""

    def _rig(game, *faces):
        values = iter(faces)
        game.rng.randint = lambda low, high: next(values)

    return _rig
