"""
Game flow management for NoGo.

This module defines:
- GameResult: Status of a game
- Game: Manager for turn order, agents, results and game records
- Helper functions for game setup and random self-play

A game ends as soon as the side to move has no legal placement (or its agent
answers with the "no move" sentinel); that side loses.
"""
from __future__ import annotations
from enum import Enum, auto
from typing import Any, Callable, Dict, List, Optional, Tuple
import json
import time

from nogo_ai.core.actions import Action, create_action_from_dict
from nogo_ai.core.agents import RandomAgent
from nogo_ai.core.board import Board
from nogo_ai.core.constants import PieceType, SIDES, DEFAULT_BOARD_WIDTH, DEFAULT_BOARD_HEIGHT


class GameResult(Enum):
    """Enum representing possible game results."""
    IN_PROGRESS = auto()
    WINNER = auto()  # NoGo has no draws


class Game:
    """
    Manager for NoGo game flow and rules.

    The game owns the authoritative board in ``state``. Agents are handed a
    clone of it, so nothing an agent does can corrupt the game.
    """

    def __init__(
        self,
        width: int = DEFAULT_BOARD_WIDTH,
        height: int = DEFAULT_BOARD_HEIGHT,
        player_names: Optional[Dict[PieceType, str]] = None,
        board: Optional[Board] = None
    ):
        """
        Initialize a new NoGo game.

        Args:
            width: Board width (ignored when ``board`` is given)
            height: Board height (ignored when ``board`` is given)
            player_names: Display names per side (defaults to "Black"/"White")
            board: Optional starting position
        """
        self.initial_board = board.clone() if board is not None else Board(width, height)
        self.player_names = {side: side.name.capitalize() for side in SIDES}
        if player_names:
            self.player_names.update(player_names)

        self.agent_callbacks: Dict[PieceType, Callable[[Board, PieceType], Action]] = {}
        self.reset()

    def reset(self) -> Board:
        """
        Reset the game to its starting position.

        Returns:
            New board
        """
        self.state = self.initial_board.clone()
        self.actions_history: List[Tuple[PieceType, Action]] = []
        self.game_over = False
        self.winner: Optional[PieceType] = None
        self.result = GameResult.IN_PROGRESS
        self.start_time = time.time()
        self.end_time: Optional[float] = None
        return self.state

    @property
    def turn_count(self) -> int:
        return len(self.actions_history)

    def register_agent(self, side: PieceType, agent_callback: Callable[[Board, PieceType], Action]) -> None:
        """
        Register an agent for a side.

        The callback receives a copy of the board and the side to move and
        must return an action.

        Args:
            side: Side the agent plays
            agent_callback: Function that selects an action
        """
        self.agent_callbacks[side] = agent_callback

    def _end_game(self, loser: PieceType) -> None:
        self.game_over = True
        self.winner = loser.opponent
        self.result = GameResult.WINNER
        self.end_time = time.time()

    def step(self, action: Optional[Action] = None) -> Tuple[Board, bool]:
        """
        Advance the game by one placement.

        If no action is given, the registered agent of the side to move is
        asked for one.

        Args:
            action: Optional action to apply

        Returns:
            Tuple of (board, whether the game is over)
        """
        if self.game_over:
            return self.state, True

        side = self.state.side_to_move
        if not self.state.has_legal_move():
            self._end_game(loser=side)
            return self.state, True

        if action is None:
            if side not in self.agent_callbacks:
                raise ValueError(f"No action provided and no agent callback registered for {side.name}")
            action = self.agent_callbacks[side](self.state.clone(), side)

        # The side gave up
        if not action:
            self._end_game(loser=side)
            return self.state, True

        if not action.apply(self.state):
            raise ValueError(f"Invalid action: {action}")
        self.actions_history.append((side, action))

        if not self.state.has_legal_move():
            self._end_game(loser=self.state.side_to_move)

        return self.state, self.game_over

    def run_game(self, max_turns: Optional[int] = None) -> Board:
        """
        Run the game until completion or ``max_turns`` placements.

        This method requires both sides to have agent callbacks registered.

        Args:
            max_turns: Optional cap on the number of placements

        Returns:
            Final board
        """
        for side in SIDES:
            if side not in self.agent_callbacks:
                raise ValueError(f"No agent callback registered for {side.name}")

        while not self.game_over and (max_turns is None or self.turn_count < max_turns):
            self.step()

        return self.state

    def get_winner(self) -> Optional[PieceType]:
        """
        Get the winning side, if any.

        Returns:
            Winning side, or None if the game is not over
        """
        return self.winner if self.game_over else None

    def get_result(self) -> GameResult:
        return self.result

    def get_game_statistics(self) -> Dict[str, Any]:
        """
        Get statistics about the game.

        Returns:
            Dictionary of game statistics
        """
        end_time = self.end_time if self.end_time is not None else time.time()
        stats: Dict[str, Any] = {
            "turns": self.turn_count,
            "result": self.result.name,
            "duration": end_time - self.start_time,
            "black_stones": self.state.count(PieceType.BLACK),
            "white_stones": self.state.count(PieceType.WHITE),
        }
        if self.winner is not None:
            stats["winner"] = self.winner.name
            stats["winner_name"] = self.player_names[self.winner]
        return stats

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert the game record to a dictionary.

        Returns:
            Dictionary with the starting position, the moves and the result
        """
        return {
            "initial_board": self.initial_board.to_dict(),
            "player_names": {side.name: name for side, name in self.player_names.items()},
            "actions": [
                {"side": side.name, "action": action.to_dict()}
                for side, action in self.actions_history
            ],
            "result": self.result.name,
            "winner": self.winner.name if self.winner is not None else None,
        }

    def save_game(self, filename: str) -> None:
        """
        Save the game record to a JSON file.

        Args:
            filename: Path of the file to write
        """
        with open(filename, 'w') as f:
            json.dump(self.to_dict(), f, indent=2)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Game':
        """
        Rebuild a game by replaying a game record.

        Args:
            data: Dictionary produced by ``to_dict``

        Returns:
            Game object in the recorded final state
        """
        game = cls(
            board=Board.from_dict(data["initial_board"]),
            player_names={PieceType[side]: name for side, name in data.get("player_names", {}).items()}
        )
        for entry in data["actions"]:
            game.step(create_action_from_dict(entry["action"]))

        # A recorded resignation leaves legal moves on the board
        if data.get("winner") and not game.game_over:
            game._end_game(loser=PieceType[data["winner"]].opponent)
        return game

    @classmethod
    def load_game(cls, filename: str) -> 'Game':
        """
        Load a game record from a JSON file.

        Args:
            filename: Path of the file to read

        Returns:
            Game object
        """
        with open(filename, 'r') as f:
            return cls.from_dict(json.load(f))

    def __str__(self) -> str:
        lines = [f"Turn {self.turn_count}"]
        if self.game_over:
            lines.append(f"Game over: {self.player_names[self.winner]} ({self.winner.name}) wins")
        lines.append(str(self.state))
        return "\n".join(lines)


def create_game(
    width: int = DEFAULT_BOARD_WIDTH,
    height: int = DEFAULT_BOARD_HEIGHT,
    player_names: Optional[Dict[PieceType, str]] = None
) -> Game:
    """
    Create a new NoGo game.

    Args:
        width: Board width
        height: Board height
        player_names: Display names per side

    Returns:
        Game object
    """
    return Game(width=width, height=height, player_names=player_names)


def simulate_random_game(
    width: int = DEFAULT_BOARD_WIDTH,
    height: int = DEFAULT_BOARD_HEIGHT,
    random_seed: Optional[int] = None
) -> Tuple[Board, Optional[PieceType]]:
    """
    Simulate a game between two random agents.

    Args:
        width: Board width
        height: Board height
        random_seed: Random seed for reproducibility

    Returns:
        Tuple of (final board, winning side)
    """
    game = create_game(width=width, height=height)

    for side in SIDES:
        args = f"role={side.name.lower()}"
        if random_seed is not None:
            args += f" seed={random_seed + side.value}"
        game.register_agent(side, RandomAgent(args).get_action_callback())

    final_state = game.run_game()
    return final_state, game.get_winner()
