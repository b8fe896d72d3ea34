"""
Action definitions for NoGo.

This module defines the moves a player can return:
- Place a stone of the player's colour on an empty cell
- No action: the explicit "no legal move" answer of a player that is stuck

It also provides helpers for serializing actions into game records.
"""
from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum, auto
from typing import ClassVar, Dict, TYPE_CHECKING

from nogo_ai.core.constants import PieceType

if TYPE_CHECKING:
    from nogo_ai.core.board import Board


class ActionType(Enum):
    """Enum representing the different types of actions in NoGo."""
    PLACE = auto()
    NONE = auto()


class Action(ABC):
    """
    Abstract base class for all NoGo actions.

    All specific action types inherit from this class and implement
    the required abstract methods.
    """
    action_type: ClassVar[ActionType]

    @abstractmethod
    def apply(self, board: Board) -> bool:
        """
        Apply the action to a board.

        Args:
            board: Board to modify

        Returns:
            True if the action was legal and applied, False otherwise
        """
        pass

    @abstractmethod
    def to_dict(self) -> Dict:
        """
        Convert the action to a dictionary for serialization.

        Returns:
            Dictionary representation of the action
        """
        pass

    @abstractmethod
    def __str__(self) -> str:
        pass


@dataclass(frozen=True)
class PlaceAction(Action):
    """Place a stone of ``side`` on cell ``position``."""
    position: int
    side: PieceType
    action_type: ClassVar[ActionType] = ActionType.PLACE

    def apply(self, board: Board) -> bool:
        return board.place(self.position, self.side)

    def to_dict(self) -> Dict:
        return {
            "type": self.action_type.name,
            "position": self.position,
            "side": self.side.name,
        }

    def __str__(self) -> str:
        return f"{self.side.name.capitalize()} @{self.position}"


class NoAction(Action):
    """
    The "no legal move" sentinel.

    Returned by players that cannot place anywhere. It is falsy so callers
    can write ``if action:``.
    """
    action_type: ClassVar[ActionType] = ActionType.NONE

    def apply(self, board: Board) -> bool:
        return False

    def to_dict(self) -> Dict:
        return {"type": self.action_type.name}

    def __bool__(self) -> bool:
        return False

    def __eq__(self, other: object) -> bool:
        return isinstance(other, NoAction)

    def __hash__(self) -> int:
        return hash(NoAction)

    def __repr__(self) -> str:
        return "NoAction()"

    def __str__(self) -> str:
        return "no move"


NO_ACTION = NoAction()


def create_action_from_dict(data: Dict) -> Action:
    """
    Create an action from a dictionary representation.

    Args:
        data: Dictionary produced by ``Action.to_dict``

    Returns:
        Action object
    """
    action_type = ActionType[data["type"]]
    if action_type == ActionType.PLACE:
        return PlaceAction(position=int(data["position"]), side=PieceType[data["side"]])
    return NO_ACTION
