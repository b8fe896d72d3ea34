"""
NoGo AI Core Package

This package contains the core game logic for NoGo, including:
- Board representation and placement rules
- Player actions and the "no move" sentinel
- Player option parsing and the random baseline player
- Game flow management
- Constants and enums

All core components can be imported directly from this package.
"""

# Constants
from nogo_ai.core.constants import (
    PieceType, SIDES, DEFAULT_BOARD_WIDTH, DEFAULT_BOARD_HEIGHT
)

# Actions
from nogo_ai.core.actions import (
    Action, ActionType, PlaceAction, NoAction, NO_ACTION,
    create_action_from_dict
)

# Board
from nogo_ai.core.board import Board

# Agents
from nogo_ai.core.agents import Agent, SeededAgent, RandomAgent, parse_agent_args

# Game
from nogo_ai.core.game import Game, GameResult, create_game, simulate_random_game

__all__ = [
    # Constants
    'PieceType', 'SIDES', 'DEFAULT_BOARD_WIDTH', 'DEFAULT_BOARD_HEIGHT',

    # Actions
    'Action', 'ActionType', 'PlaceAction', 'NoAction', 'NO_ACTION',
    'create_action_from_dict',

    # Board
    'Board',

    # Agents
    'Agent', 'SeededAgent', 'RandomAgent', 'parse_agent_args',

    # Game
    'Game', 'GameResult', 'create_game', 'simulate_random_game',
]
