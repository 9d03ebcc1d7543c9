"""
Command-line simulator for all-bot Fortunopoly games.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from fortunopoly.agents import create_bot_for
from fortunopoly.config import BotDifficulty
from fortunopoly.game import GameState, create_game
from fortunopoly.player import Player
from fortunopoly.rules import run_bot_game
from fortunopoly.settings import get_settings
from fortunopoly.snapshot import dumps

DEFAULT_NAMES = ["Alice", "Bob", "Charlie", "Diana", "Eve", "Frank"]


def print_game_summary(game: GameState) -> None:
    """Print final game summary."""
    print("\n" + "=" * 60)
    print("GAME OVER")
    print("=" * 60)

    winner = game.get_winner()
    print(f"\nWinner: {winner.name}")
    print(f"Final Money: ${winner.money}")
    print(f"Properties Owned: {winner.property_count}")

    print("\nFinal Standings:")
    for rank, player in enumerate(game.get_standings(), start=1):
        status = "BANKRUPT" if player.is_bankrupt else f"${player.net_worth()}"
        print(f"  {rank}. {player.name} ({player.bot_difficulty.value}): {status}")

    print(f"\nRounds played: {game.round}")


def build_roster(names: List[str], difficulties: List[str], default: BotDifficulty) -> List[Player]:
    roster = []
    for index, name in enumerate(names):
        difficulty = BotDifficulty(difficulties[index]) if index < len(difficulties) else default
        roster.append(Player(index, name, is_bot=True, bot_difficulty=difficulty))
    return roster


def main(argv: Optional[List[str]] = None) -> int:
    settings = get_settings()

    parser = argparse.ArgumentParser(description="Simulate an all-bot Fortunopoly game")
    parser.add_argument(
        "--players",
        type=int,
        default=4,
        help="Number of bots (2-6, default: 4)",
    )
    parser.add_argument(
        "--names",
        nargs="+",
        help="Bot names, overrides --players",
    )
    parser.add_argument(
        "--difficulty",
        nargs="+",
        choices=[d.value for d in BotDifficulty],
        default=[],
        help="Difficulty per seat, in seat order (default from settings)",
    )
    parser.add_argument("--seed", type=int, default=settings.seed, help="Random seed")
    parser.add_argument(
        "--max-rounds",
        type=int,
        default=settings.max_rounds,
        help=f"Stop after this many rounds (default: {settings.max_rounds})",
    )
    parser.add_argument("--parking-jackpot", action="store_true", help="Enable the Free Parking jackpot")
    parser.add_argument("--double-go", action="store_true", help="Pay double for landing on START")
    parser.add_argument("--snapshot", type=str, help="Write the final snapshot JSON to this file")
    parser.add_argument("--quiet", action="store_true", help="Only print the summary")
    parser.add_argument("--log-level", default=settings.log_level, help="Python logging level")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    names = args.names or DEFAULT_NAMES[: args.players]
    if not 2 <= len(names) <= len(DEFAULT_NAMES):
        print(f"Need between 2 and {len(DEFAULT_NAMES)} players, got {len(names)}")
        return 1

    config = settings.to_config()
    config.seed = args.seed
    config.house_rules.parking_jackpot = config.house_rules.parking_jackpot or args.parking_jackpot
    config.house_rules.double_go = config.house_rules.double_go or args.double_go

    game = create_game(config, build_roster(names, args.difficulty, settings.bot_difficulty))
    seed_base = args.seed if args.seed is not None else 0
    agents = [create_bot_for(game, p.player_id, seed=seed_base + p.player_id) for p in game.players]

    if not args.quiet:
        print(f"Starting game with {len(names)} bots (seed: {args.seed})")

    run_bot_game(game, agents, max_rounds=args.max_rounds)

    if not args.quiet:
        for entry in game.event_log.get_recent(20):
            print(f"  {entry.message}")

    print_game_summary(game)

    if args.snapshot:
        Path(args.snapshot).write_text(dumps(game), encoding="utf-8")
        print(f"\nSnapshot written to {args.snapshot}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
