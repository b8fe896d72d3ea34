"""
Monte Carlo Tree Search (MCTS) algorithm for NoGo.

This module implements the core MCTS algorithm with the four standard phases:
1. Selection: Walk the tree with UCB1 (and the board with it) to a childless node
2. Expansion: On a node's first visit, add one child per legal placement
3. Simulation: Play uniformly random legal placements until a side is stuck
4. Backpropagation: Update statistics from the simulated node up to the root

All randomness comes from one ``random.Random`` passed explicitly into the
expansion and simulation phases, so a search is reproducible from its seed.
"""
from __future__ import annotations
from typing import Any, Dict, List, Optional, Tuple
import math
import random
import time

from nogo_ai.core.actions import Action, PlaceAction, NO_ACTION
from nogo_ai.core.board import Board
from nogo_ai.core.constants import PieceType
from nogo_ai.mcts.config import MCTSConfig
from nogo_ai.mcts.node import SearchNode, SearchTree


def ucb_score(child: SearchNode, root_visits: int, exploration_weight: float) -> float:
    """
    Calculate the UCB1 score for a child node.

    UCB1 = average_reward + exploration_weight * sqrt(ln(root_visits) / child_visits)

    Args:
        child: Child node to calculate score for
        root_visits: Visit count of the tree's root
        exploration_weight: Weight of the exploration term

    Returns:
        UCB1 score (infinite for an unvisited child)
    """
    # If the child has never been visited, treat it as having infinite value
    if child.is_unvisited():
        return math.inf

    exploitation = child.total_reward / child.visits
    exploration = math.sqrt(math.log(max(root_visits, 1)) / child.visits)
    return exploitation + exploration_weight * exploration


def select_child(
    tree: SearchTree,
    node: SearchNode,
    state: Board,
    exploration_weight: float
) -> Optional[SearchNode]:
    """
    Select the child of ``node`` with the highest UCB1 score.

    The first child reaching the maximum wins, so unvisited children are
    tried in order before any child is selected twice. The selected child's
    placement is applied to ``state``.

    Args:
        tree: Search tree
        node: Node whose children to choose from
        state: Working board, positioned at ``node``
        exploration_weight: Weight of the exploration term

    Returns:
        Selected child, or None if ``node`` has no children
    """
    if not node.children:
        return None

    root_visits = tree.root.visits
    best_child = None
    best_score = -math.inf
    for child in tree.children_of(node):
        score = ucb_score(child, root_visits, exploration_weight)
        if best_child is None or score > best_score:
            best_child = child
            best_score = score

    if not best_child.action.apply(state):
        raise ValueError(f"Child move {best_child.action} is not legal in the working position")
    return best_child


def select_node(tree: SearchTree, state: Board, exploration_weight: float) -> SearchNode:
    """
    Descend from the root to a node without children.

    Args:
        tree: Search tree
        state: Working board, positioned at the root; moved along with the walk
        exploration_weight: Weight of the exploration term

    Returns:
        The childless node reached
    """
    node = tree.root
    while node.children:
        node = select_child(tree, node, state, exploration_weight)
    return node


def expand_node(
    tree: SearchTree,
    node: SearchNode,
    state: Board,
    rng: random.Random
) -> Optional[SearchNode]:
    """
    Add one child per legal placement of the side to move.

    Candidates are tried in an order shuffled by ``rng``, each on a private
    copy of ``state``. A node without legal placements stays childless for
    good: it is a terminal position.

    Args:
        tree: Search tree
        node: Unvisited, childless node to expand
        state: Working board, positioned at ``node``
        rng: The search's random generator

    Returns:
        The first child created, or None if there was no legal placement
    """
    if not node.is_unvisited() or node.children:
        raise ValueError(f"Cannot expand node {node.index}: it has already been visited")

    side = state.side_to_move
    space = [PlaceAction(position, side) for position in range(state.size)]
    rng.shuffle(space)

    for move in space:
        after = state.clone()
        if move.apply(after):
            tree.add_child(node, move, node.mover.opponent)

    return tree[node.children[0]] if node.children else None


def playout_reward(state: Board, side: PieceType) -> int:
    """
    Score a finished position for ``side``.

    The side to move in a finished position has no legal placement and has
    lost.

    Returns:
        1 if ``side`` won, 0 otherwise
    """
    return 1 if state.side_to_move is not side else 0


def simulate_game(state: Board, side: PieceType, rng: random.Random) -> Tuple[int, int]:
    """
    Run a random playout from ``state`` to the end of the game.

    Every ply the full set of legal placements is recomputed and one of them
    is chosen uniformly at random.

    Args:
        state: Board to start from (not modified)
        side: Searching side, whose result is reported
        rng: The search's random generator

    Returns:
        Tuple of (reward for ``side``, number of placements played)
    """
    board = state.clone()

    steps = 0
    while True:
        legal = board.get_legal_positions()
        if not legal:
            break
        board.place(rng.choice(legal))
        steps += 1

    return playout_reward(board, side), steps


def backpropagate(
    tree: SearchTree,
    node: Optional[SearchNode],
    result: int,
    searcher: Optional[PieceType] = None
) -> bool:
    """
    Update statistics from ``node`` up to and including the root.

    Every node on the path gains one visit. By default every node is also
    credited with ``result``. When ``searcher`` is given, each node is
    credited from its own mover's point of view instead: ``result`` if the
    mover is the searching side, ``1 - result`` otherwise.

    Args:
        tree: Search tree
        node: Node the simulation ran from
        result: Binary playout result for the searching side
        searcher: Searching side, to credit each node for its mover

    Returns:
        False if ``node`` is None (nothing is updated), True otherwise
    """
    if node is None:
        return False

    for current in tree.path_to_root(node):
        current.visits += 1
        if searcher is not None and current.mover is not searcher:
            current.total_reward += 1 - result
        else:
            current.total_reward += result
    return True


def run_iteration(
    tree: SearchTree,
    state: Board,
    side: PieceType,
    config: MCTSConfig,
    rng: random.Random
) -> Tuple[SearchNode, int, int]:
    """
    Run one select-expand-simulate-backpropagate iteration.

    On a node's first visit, the node is expanded and the first child in
    shuffled order is played before the simulation; its siblings are left
    for later iterations.

    Args:
        tree: Search tree, rooted at ``state``
        state: The real position (not modified)
        side: Searching side
        config: MCTS configuration parameters
        rng: The search's random generator

    Returns:
        Tuple of (node backpropagated from, reward, playout length)
    """
    board = state.clone()

    node = select_node(tree, board, config.exploration_weight)

    if node.is_unvisited():
        child = expand_node(tree, node, board, rng)
        if child is not None:
            child.action.apply(board)
            node = child

    reward, steps = simulate_game(board, side, rng)

    searcher = side if config.reward_perspective == "mover" else None
    backpropagate(tree, node, reward, searcher)

    return node, reward, steps


def run_search(
    state: Board,
    side: PieceType,
    config: Optional[MCTSConfig] = None,
    rng: Optional[random.Random] = None
) -> Tuple[SearchTree, Dict[str, Any]]:
    """
    Build a search tree for ``side`` with the full iteration budget.

    Args:
        state: Current board; ``side`` must be to move
        side: Searching side
        config: MCTS configuration parameters
        rng: Random generator (defaults to one seeded with ``config.seed``)

    Returns:
        Tuple of (search tree, search statistics)
    """
    if config is None:
        config = MCTSConfig()
    if rng is None:
        rng = random.Random(config.seed)
    if state.side_to_move is not side:
        raise ValueError(f"Not {side.name}'s turn")

    tree = SearchTree(root_mover=side.opponent)

    stats: Dict[str, Any] = {
        "iterations": 0,
        "wins": 0,
        "max_depth": 0,
        "total_simulation_steps": 0,
        "time_elapsed": 0.0,
    }

    start_time = time.time()

    for _ in range(config.iterations):
        node, reward, steps = run_iteration(tree, state, side, config, rng)

        stats["iterations"] += 1
        stats["wins"] += reward
        stats["total_simulation_steps"] += steps
        stats["max_depth"] = max(stats["max_depth"], tree.depth_of(node))

    stats["time_elapsed"] = time.time() - start_time
    stats["iterations_per_second"] = stats["iterations"] / max(0.001, stats["time_elapsed"])
    stats["average_simulation_steps"] = stats["total_simulation_steps"] / max(1, stats["iterations"])
    stats["node_count"] = count_nodes(tree)

    # Record statistics about each root move
    stats["action_visits"] = {}
    stats["action_rewards"] = {}
    for child in tree.children_of(tree.root):
        label = state.position_label(child.action.position)
        stats["action_visits"][label] = child.visits
        stats["action_rewards"][label] = child.win_rate

    return tree, stats


def choose_action(tree: SearchTree, state: Board, config: MCTSConfig) -> Action:
    """
    Pick the move to play from a finished search.

    Applies UCB1 once over the root's children with ``config.decision_weight``.

    Args:
        tree: Finished search tree
        state: The real position the tree is rooted at (not modified)
        config: MCTS configuration parameters

    Returns:
        The chosen placement, or NO_ACTION if the root has no children
    """
    best_child = select_child(tree, tree.root, state.clone(), config.decision_weight)
    if best_child is None:
        return NO_ACTION
    return best_child.action


def mcts_search(
    state: Board,
    side: PieceType,
    config: Optional[MCTSConfig] = None,
    rng: Optional[random.Random] = None
) -> Tuple[Action, Dict[str, Any]]:
    """
    Run Monte Carlo Tree Search to find the best action.

    This function runs the full MCTS algorithm:
    1. Create a fresh tree rooted at the current position
    2. Run the configured number of iterations
    3. Return the root child chosen with the near-greedy decision constant

    Args:
        state: Current board
        side: Side to find a move for
        config: MCTS configuration parameters
        rng: Random generator (defaults to one seeded with ``config.seed``)

    Returns:
        Tuple of (best action or NO_ACTION, search statistics)
    """
    if config is None:
        config = MCTSConfig()

    tree, stats = run_search(state, side, config, rng)
    return choose_action(tree, state, config), stats


def count_nodes(tree: SearchTree) -> int:
    """Total number of nodes in the tree."""
    return len(tree)


def tree_depth(tree: SearchTree) -> int:
    """Largest number of edges between the root and any node."""
    depths = [0] * len(tree)
    for node in tree:
        if node.parent is not None:
            # Children are always created after their parent
            depths[node.index] = depths[node.parent] + 1
    return max(depths)


def get_principal_variation(tree: SearchTree, max_depth: int = 10) -> List[Tuple[PlaceAction, float]]:
    """
    Get the principal variation (most visited path) from the root.

    This is useful for analysis and debugging.

    Args:
        tree: Search tree
        max_depth: Maximum depth to explore

    Returns:
        List of (action, win rate) pairs along the most visited path
    """
    result = []
    current = tree.root

    while current.children and len(result) < max_depth:
        best_child = max(tree.children_of(current), key=lambda c: c.visits)
        if best_child.is_unvisited():
            break
        result.append((best_child.action, best_child.win_rate))
        current = best_child

    return result


def get_action_statistics(
    tree: SearchTree,
    exploration_weight: float = math.sqrt(2)
) -> Dict[int, Dict[str, float]]:
    """
    Get statistics for all root moves.

    Args:
        tree: Search tree
        exploration_weight: Weight used for the reported UCB1 score

    Returns:
        Dictionary mapping placement positions to statistics
    """
    root = tree.root
    return {
        child.action.position: {
            "visits": child.visits,
            "reward": child.total_reward,
            "value": child.win_rate,
            "score": ucb_score(child, root.visits, exploration_weight),
        }
        for child in tree.children_of(root)
    }
