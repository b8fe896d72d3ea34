"""
Monte Carlo Tree Search (MCTS) implementation for NoGo.

This package provides a complete MCTS player that needs no training or
evaluation function. Each iteration of the search:

1. Selection: Starting from the root, select children with UCB1 until reaching
   a node without children, playing their moves on a copy of the board.
2. Expansion: On a node's first visit, add a child for every legal placement
   and play the first of them (in shuffled order).
3. Simulation: From there, play uniformly random legal placements until the
   side to move is stuck.
4. Backpropagation: Credit the result to every node on the path to the root.

After the iteration budget, the root child with the best win rate is played.
"""

from nogo_ai.mcts.node import SearchNode, SearchTree
from nogo_ai.mcts.agent import MCTSAgent, MCTSAgentFactory
from nogo_ai.mcts.search import (
    mcts_search,
    run_search,
    run_iteration,
    choose_action,
    ucb_score,
    select_child,
    select_node,
    expand_node,
    simulate_game,
    backpropagate
)
from nogo_ai.mcts.config import MCTSConfig

# Default configuration
DEFAULT_CONFIG = MCTSConfig(
    iterations=1000,           # Number of MCTS iterations per move
    exploration_weight=1.41,   # UCB1 exploration parameter (sqrt(2))
    decision_weight=1e-12,     # Near-greedy final choice
    seed=None,                 # Non-deterministic
)

__all__ = [
    'MCTSAgent',
    'MCTSAgentFactory',
    'SearchNode',
    'SearchTree',
    'MCTSConfig',
    'mcts_search',
    'run_search',
    'run_iteration',
    'choose_action',
    'ucb_score',
    'select_child',
    'select_node',
    'expand_node',
    'simulate_game',
    'backpropagate',
    'DEFAULT_CONFIG'
]
