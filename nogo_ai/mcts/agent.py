"""
Monte Carlo Tree Search Agent for NoGo.

This module provides the MCTSAgent class, a ready-to-use player that uses
Monte Carlo Tree Search to select placements. The agent is configured from an
option string (``"role=black T=1000 seed=7"``) or an explicit MCTSConfig and
provides statistics about its search process.
"""
from typing import Any, Dict, List, Optional, Tuple
import json

from nogo_ai.core.actions import Action, PlaceAction
from nogo_ai.core.agents import SeededAgent
from nogo_ai.core.board import Board
from nogo_ai.mcts.config import MCTSConfig
from nogo_ai.mcts.node import SearchTree
from nogo_ai.mcts.search import (
    run_search, choose_action, get_action_statistics, get_principal_variation
)


class MCTSAgent(SeededAgent):
    """
    Monte Carlo Tree Search agent for playing NoGo.

    The agent plays the side given by its ``role`` option. Every decision
    builds a fresh search tree; the tree of the most recent decision is kept
    only for inspection.
    """

    def __init__(
        self,
        args: str = "",
        config: Optional[MCTSConfig] = None,
        verbose: bool = False
    ):
        """
        Initialize an MCTS agent.

        Args:
            args: Option string, e.g. ``"name=mcts role=white T=500 seed=3"``
            config: MCTS configuration (overrides search options in ``args``)
            verbose: Whether to print a summary after every decision
        """
        super().__init__("name=mcts " + args)
        self.config = config or MCTSConfig.from_args(self.meta)
        self.verbose = verbose

        # Statistics from the most recent search
        self.last_stats: Dict[str, Any] = {}

        # History of all actions and their statistics
        self.action_history: List[Tuple[Action, Dict[str, Any]]] = []

        # Search tree of the most recent decision
        self.last_tree: Optional[SearchTree] = None

    def select_action(self, state: Board) -> Action:
        """
        Select a placement using Monte Carlo Tree Search.

        Args:
            state: Current board

        Returns:
            Selected placement, or NO_ACTION if there is no legal placement
        """
        if state.side_to_move is not self.side:
            raise ValueError(f"Not {self.side.name}'s turn")

        self.last_tree, stats = run_search(state, self.side, self.config, self.rng)
        action = choose_action(self.last_tree, state, self.config)

        stats["action"] = str(action)
        self.last_stats = stats
        self.action_history.append((action, stats))

        if self.verbose:
            self._print_search_info(state, action, stats)

        return action

    def _print_search_info(self, state: Board, action: Action, stats: Dict[str, Any]) -> None:
        """
        Print information about the search.

        Args:
            state: Board the search ran on
            action: Selected action
            stats: Search statistics
        """
        move = state.position_label(action.position) if isinstance(action, PlaceAction) else str(action)
        print(f"\n{self.name} ({self.role}) selected: {move}")
        print(f"Iterations: {stats['iterations']}")
        print(f"Time: {stats['time_elapsed']:.3f}s ({stats['iterations_per_second']:.1f} it/s)")
        print(f"Nodes: {stats['node_count']}")
        print(f"Max depth: {stats['max_depth']}")

        # Print top actions by visit count
        if stats["action_visits"]:
            print("\nTop actions:")
            actions_by_visits = sorted(
                stats["action_visits"].items(),
                key=lambda x: x[1],
                reverse=True
            )
            for i, (label, visits) in enumerate(actions_by_visits[:5]):
                win_rate = stats["action_rewards"].get(label, 0.0)
                print(f"{i+1}. {label} - {visits} visits, {win_rate:.3f} value")

    def get_last_statistics(self) -> Dict[str, Any]:
        return self.last_stats

    def get_principal_variation(self) -> List[Tuple[PlaceAction, float]]:
        """
        Get the principal variation (most visited path) from the last search.

        Returns:
            List of (action, win rate) pairs
        """
        if self.last_tree is None:
            return []

        return get_principal_variation(self.last_tree)

    def get_action_statistics(self) -> Dict[int, Dict[str, float]]:
        """
        Get statistics for all root moves of the last search.

        Returns:
            Dictionary mapping placement positions to statistics
        """
        if self.last_tree is None:
            return {}

        return get_action_statistics(self.last_tree, self.config.exploration_weight)

    def close_episode(self, flag: str = "") -> None:
        # Trees never outlive a game
        self.last_tree = None

    def reset_statistics(self) -> None:
        """Reset all statistics."""
        self.last_stats = {}
        self.action_history = []
        self.last_tree = None

    def save_statistics(self, filename: str) -> None:
        """
        Save statistics to a file.

        Args:
            filename: Name of the file to save to
        """
        # Convert actions to strings for JSON serialization
        history = []
        for action, stats in self.action_history:
            history.append({
                "action": str(action),
                "stats": {k: v for k, v in stats.items() if not isinstance(v, dict)}
            })

        data = {
            "agent_name": self.name,
            "role": self.role,
            "config": self.config.to_dict(),
            "history": history,
            "total_actions": len(self.action_history)
        }

        with open(filename, 'w') as f:
            json.dump(data, f, indent=2)

    def __str__(self) -> str:
        return f"{self.name} ({self.role}, MCTS, {self.config.iterations} iterations)"


class MCTSAgentFactory:
    """
    Factory for creating MCTS agents with different configurations.

    This class provides methods for creating MCTS agents with different
    strengths for either side.
    """

    @staticmethod
    def create_fast(role: str, seed: Optional[int] = None) -> MCTSAgent:
        """
        Create a fast MCTS agent with fewer iterations.

        Args:
            role: ``black`` or ``white``
            seed: Optional random seed

        Returns:
            MCTSAgent
        """
        return MCTSAgent(_role_args("fast-mcts", role, seed), config=MCTSConfig.fast())

    @staticmethod
    def create_standard(role: str, seed: Optional[int] = None) -> MCTSAgent:
        """
        Create a standard MCTS agent with balanced parameters.

        Args:
            role: ``black`` or ``white``
            seed: Optional random seed

        Returns:
            MCTSAgent
        """
        return MCTSAgent(_role_args("mcts", role, seed), config=MCTSConfig.default())

    @staticmethod
    def create_strong(role: str, seed: Optional[int] = None) -> MCTSAgent:
        """
        Create a strong MCTS agent with more iterations.

        Args:
            role: ``black`` or ``white``
            seed: Optional random seed

        Returns:
            MCTSAgent
        """
        return MCTSAgent(_role_args("strong-mcts", role, seed), config=MCTSConfig.deep())


def _role_args(name: str, role: str, seed: Optional[int]) -> str:
    args = f"name={name} role={role}"
    if seed is not None:
        args += f" seed={seed}"
    return args
