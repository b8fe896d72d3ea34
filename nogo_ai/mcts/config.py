"""
Configuration for Monte Carlo Tree Search (MCTS).

This module defines the configuration parameters for the MCTS algorithm:
the iteration budget, the two exploration constants and the random seed.
"""
from dataclasses import dataclass, fields
from typing import Mapping, Optional, Literal, ClassVar, Dict
import math

from nogo_ai.core.constants import (
    DEFAULT_MCTS_ITERATIONS, DEFAULT_MCTS_EXPLORATION, DEFAULT_MCTS_DECISION
)


@dataclass
class MCTSConfig:
    """
    Configuration parameters for Monte Carlo Tree Search.

    This class defines all tunable parameters for the MCTS algorithm,
    with validation and sensible defaults.
    """
    # Search parameters
    iterations: int = DEFAULT_MCTS_ITERATIONS
    """Number of MCTS iterations to perform per move decision"""

    exploration_weight: float = DEFAULT_MCTS_EXPLORATION
    """UCB1 exploration parameter used while descending the tree"""

    decision_weight: float = DEFAULT_MCTS_DECISION
    """UCB1 exploration parameter for the final move choice (near zero = greedy on win rate)"""

    seed: Optional[int] = None
    """Seed for the search's random generator (None = non-deterministic)"""

    # Strategy parameters
    reward_perspective: Literal["searcher", "mover"] = "searcher"
    """Whose result a node accumulates: the searching side's for every node,
    or each node's own mover"""

    # Aliases accepted in agent option strings
    ARG_ALIASES: ClassVar[Dict[str, str]] = {
        "T": "iterations",
        "c": "exploration_weight",
    }

    def __post_init__(self):
        """Validate configuration parameters."""
        if self.iterations <= 0:
            raise ValueError("iterations must be positive")

        if self.exploration_weight <= 0 or not math.isfinite(self.exploration_weight):
            raise ValueError("exploration_weight must be positive")

        if self.decision_weight < 0 or not math.isfinite(self.decision_weight):
            raise ValueError("decision_weight must be non-negative")

        if self.reward_perspective not in ["searcher", "mover"]:
            raise ValueError("reward_perspective must be 'searcher' or 'mover'")

    @classmethod
    def default(cls) -> 'MCTSConfig':
        """
        Get the default configuration.

        Returns:
            Default MCTSConfig object
        """
        return cls()

    @classmethod
    def fast(cls) -> 'MCTSConfig':
        """
        Get a configuration optimized for speed (fewer iterations).

        Returns:
            Fast MCTSConfig object
        """
        return cls(iterations=100)

    @classmethod
    def deep(cls) -> 'MCTSConfig':
        """
        Get a configuration optimized for deep search.

        Returns:
            Deep MCTSConfig object
        """
        return cls(
            iterations=5000,
            exploration_weight=1.2,  # Slightly less exploration
            reward_perspective="mover"
        )

    @classmethod
    def from_dict(cls, config_dict: dict) -> 'MCTSConfig':
        """
        Create a configuration from a dictionary.

        Args:
            config_dict: Dictionary of configuration parameters

        Returns:
            MCTSConfig object
        """
        # Filter out any keys that aren't valid parameters
        valid_params = {k: v for k, v in config_dict.items()
                        if k in cls.__dataclass_fields__}
        return cls(**valid_params)

    @classmethod
    def from_args(cls, meta: Mapping[str, str]) -> 'MCTSConfig':
        """
        Create a configuration from parsed agent options.

        Recognises the field names plus the short aliases ``T`` (iterations)
        and ``c`` (exploration_weight). Unrelated options such as ``name`` and
        ``role`` are ignored.

        Args:
            meta: Option dictionary with string values

        Returns:
            MCTSConfig object
        """
        converters = {
            "iterations": int,
            "exploration_weight": float,
            "decision_weight": float,
            "seed": int,
            "reward_perspective": str,
        }

        params = {}
        for key, value in meta.items():
            name = cls.ARG_ALIASES.get(key, key)
            if name not in converters:
                continue
            try:
                params[name] = converters[name](value)
            except ValueError:
                raise ValueError(f"invalid value for {key}: {value!r}") from None
        return cls(**params)

    def to_dict(self) -> dict:
        """
        Convert the configuration to a dictionary.

        Returns:
            Dictionary of configuration parameters
        """
        return {f.name: getattr(self, f.name) for f in fields(self)}

    def __str__(self) -> str:
        params = ", ".join(f"{name}={value}" for name, value in self.to_dict().items())
        return f"MCTSConfig({params})"
