"""
NoGo AI - A Monte Carlo Tree Search player for the board game NoGo.

This package provides an implementation of the NoGo rules, a uniform random
baseline player and a Monte Carlo Tree Search player.
"""

__version__ = "0.1.0"
__author__ = "NoGo AI Team"

# Make key components available at package level
from nogo_ai.core.board import Board
from nogo_ai.core.game import Game
from nogo_ai.core.actions import Action, PlaceAction, NO_ACTION
from nogo_ai.core.constants import PieceType

# Version info as a tuple for programmatic access
VERSION_INFO = tuple(map(int, __version__.split('.')))

# Default configuration
DEFAULT_CONFIG = {
    "width": 9,
    "height": 9,
    "iterations": 1000,
}
