"""
Command-line match runner for NoGo agents.

Plays a series of games between two agents and reports the results.

Example usage:
    # MCTS as black against the random baseline
    nogo-play --black mcts --black-args "T=500" --white random --games 10

    # Two seeded MCTS agents on a small board, saving the last game
    nogo-play --black mcts --white mcts --size 5 --seed 1 --save game.json
"""
import argparse
import sys
from typing import Dict, List, Optional, Tuple

from rich.console import Console
from rich.table import Table
from tqdm import tqdm

from nogo_ai.core.agents import Agent, RandomAgent
from nogo_ai.core.constants import PieceType, SIDES, DEFAULT_BOARD_WIDTH
from nogo_ai.core.game import Game
from nogo_ai.mcts.agent import MCTSAgent


AGENT_TYPES = ["random", "mcts"]


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments for the match."""
    parser = argparse.ArgumentParser(description="Play NoGo matches between agents")

    # Agents
    parser.add_argument("--black", type=str, default="mcts", choices=AGENT_TYPES,
                        help="Agent playing black")
    parser.add_argument("--white", type=str, default="random", choices=AGENT_TYPES,
                        help="Agent playing white")
    parser.add_argument("--black-args", type=str, default="",
                        help="Option string for the black agent, e.g. \"T=1000 c=1.41\"")
    parser.add_argument("--white-args", type=str, default="",
                        help="Option string for the white agent")

    # Match configuration
    parser.add_argument("--games", type=int, default=1,
                        help="Number of games to play")
    parser.add_argument("--size", type=int, default=DEFAULT_BOARD_WIDTH,
                        help="Board size (square board)")
    parser.add_argument("--seed", type=int, default=None,
                        help="Random seed (white uses seed + 1)")
    parser.add_argument("--save", type=str, default=None,
                        help="Save the last game record to this JSON file")
    parser.add_argument("--verbose", action="store_true",
                        help="Print search information after every MCTS move")

    return parser.parse_args(argv)


def create_agent(kind: str, role: str, args: str = "", verbose: bool = False) -> Agent:
    """
    Create an agent from its type and option string.

    Args:
        kind: ``random`` or ``mcts``
        role: ``black`` or ``white``
        args: Extra options; they override ``role``
        verbose: Print search information (MCTS only)

    Returns:
        Agent instance
    """
    options = f"role={role} {args}"
    if kind == "random":
        return RandomAgent(options)
    if kind == "mcts":
        return MCTSAgent(options, verbose=verbose)
    raise ValueError(f"Unknown agent type: {kind}")


def play_match(
    agents: Dict[PieceType, Agent],
    size: int,
    games: int
) -> Tuple[Dict[PieceType, int], Game]:
    """
    Play a series of games with fixed colours.

    Args:
        agents: Agent per side
        size: Board size
        games: Number of games

    Returns:
        Tuple of (wins per side, last game played)
    """
    wins = {side: 0 for side in SIDES}
    game = None

    for _ in tqdm(range(games), desc="Games", disable=games < 2):
        game = Game(width=size, height=size,
                    player_names={side: agent.name for side, agent in agents.items()})
        for side, agent in agents.items():
            agent.open_episode()
            game.register_agent(side, agent.get_action_callback())

        game.run_game()

        for agent in agents.values():
            agent.close_episode()
        wins[game.get_winner()] += 1

    return wins, game


def print_summary(console: Console, agents: Dict[PieceType, Agent], wins: Dict[PieceType, int], last_game: Game) -> None:
    """Print the final board of the last game and the results table."""
    console.print(f"\n[bold]Last game[/bold] ({last_game.turn_count} moves)")
    console.print(str(last_game.state), highlight=False)

    total = sum(wins.values())
    table = Table(title="Results")
    table.add_column("Side")
    table.add_column("Agent")
    table.add_column("Wins", justify="right")
    table.add_column("Win rate", justify="right")
    for side in SIDES:
        table.add_row(side.name.capitalize(), str(agents[side]), str(wins[side]),
                      f"{wins[side] / total:.1%}")
    console.print(table)


def main(argv: Optional[List[str]] = None) -> int:
    """Main function."""
    args = parse_args(argv)
    console = Console()

    if args.games <= 0:
        console.print("[red]Error:[/red] --games must be positive")
        return 2

    try:
        agents = {}
        for side, kind, extra in ((PieceType.BLACK, args.black, args.black_args),
                                  (PieceType.WHITE, args.white, args.white_args)):
            if args.seed is not None:
                extra = f"seed={args.seed + side.value} {extra}"
            agents[side] = create_agent(kind, side.name.lower(), extra, args.verbose)
        wins, last_game = play_match(agents, args.size, args.games)
    except ValueError as e:
        console.print(f"[red]Error:[/red] {e}")
        return 2
    except KeyboardInterrupt:
        console.print("\nMatch interrupted by user.")
        return 130

    print_summary(console, agents, wins, last_game)

    if args.save:
        last_game.save_game(args.save)
        console.print(f"Saved last game to {args.save}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
