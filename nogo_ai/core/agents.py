"""
Player base classes for NoGo.

Players are configured with whitespace-separated ``key=value`` option strings,
for example ``"name=mcts role=black T=1000 seed=7"``. This module provides the
option parser, the Agent base class that stores those options, a seeded base
for players that need randomness, and the uniform random baseline player.
"""
from typing import Callable, Dict, List
import random

from nogo_ai.core.actions import Action, PlaceAction, NO_ACTION
from nogo_ai.core.board import Board
from nogo_ai.core.constants import PieceType, ROLE_NAMES, INVALID_NAME_CHARS


def parse_agent_args(args: str) -> Dict[str, str]:
    """
    Parse an option string into a dictionary.

    Later pairs override earlier ones. A token without ``=`` maps to itself,
    so ``"mcts"`` becomes ``{"mcts": "mcts"}``.

    Args:
        args: Whitespace-separated ``key=value`` pairs

    Returns:
        Dictionary of option values (all strings)
    """
    meta = {}
    for pair in args.split():
        key, sep, value = pair.partition("=")
        meta[key] = value if sep else key
    return meta


class Agent:
    """
    Base class for all players.

    Stores the player's options. ``name`` and ``role`` always exist and
    default to ``unknown``.
    """

    def __init__(self, args: str = ""):
        self.meta = parse_agent_args("name=unknown role=unknown " + args)

    @property
    def name(self) -> str:
        return self.meta["name"]

    @property
    def role(self) -> str:
        return self.meta["role"]

    def get_property(self, key: str) -> str:
        """Look up an option; raises KeyError if it was never set."""
        return self.meta[key]

    def notify(self, message: str) -> None:
        """Set an option at runtime from a ``key=value`` message."""
        self.meta.update(parse_agent_args(message))

    def open_episode(self, flag: str = "") -> None:
        pass

    def close_episode(self, flag: str = "") -> None:
        pass

    def select_action(self, state: Board) -> Action:
        return NO_ACTION

    def get_action_callback(self) -> Callable[[Board, PieceType], Action]:
        """
        Get a callback function for selecting actions.

        This is useful for registering the agent with a Game object.

        Returns:
            Callback function that takes a board and side and returns an action
        """
        return lambda state, side: self.select_action(state)

    def __str__(self) -> str:
        return f"{self.name} ({self.role})"


class SeededAgent(Agent):
    """
    Base class for players that play one side and use randomness.

    The ``seed`` option seeds the player's private generator; without it the
    generator is seeded from system entropy.
    """

    def __init__(self, args: str = ""):
        super().__init__(args)

        if any(char in self.name for char in INVALID_NAME_CHARS):
            raise ValueError(f"invalid name: {self.name}")
        if self.role not in ROLE_NAMES:
            raise ValueError(f"invalid role: {self.role}")
        self.side: PieceType = ROLE_NAMES[self.role]

        seed = self.meta.get("seed")
        try:
            self.rng = random.Random(int(seed) if seed is not None else None)
        except ValueError:
            raise ValueError(f"invalid seed: {seed}") from None

    def placements(self, state: Board) -> List[PlaceAction]:
        """Every cell of ``state`` as a placement for this player's side."""
        return [PlaceAction(position, self.side) for position in range(state.size)]


class RandomAgent(SeededAgent):
    """
    Agent that places a stone on a random legal cell.

    This agent serves as a baseline for comparison with the search player.
    """

    def __init__(self, args: str = ""):
        super().__init__("name=random " + args)

    def select_action(self, state: Board) -> Action:
        """
        Select a random legal placement.

        Args:
            state: Current board

        Returns:
            Randomly selected placement, or NO_ACTION if none is legal
        """
        space = self.placements(state)
        self.rng.shuffle(space)
        for move in space:
            if state.is_legal(move.position, move.side):
                return move
        return NO_ACTION
