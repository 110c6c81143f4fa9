"""Models package for the Big Two client."""

from .cards import Card, PlayedHand, SortPreference
from .commands import Command, PlayCards, PassTurn, SendChat, SetAlias, NewGame
from .messages import (
    ActionSuccessMessage,
    ChatMessage,
    ErrorMessage,
    GameStateMessage,
    ServerMessage,
    SystemMessage,
)
from .session import GamePhase, LocalPlayer, PlayerView, ScoreRecord, Session, TurnState

__all__ = [
    "Card",
    "PlayedHand",
    "SortPreference",
    "Command",
    "PlayCards",
    "PassTurn",
    "SendChat",
    "SetAlias",
    "NewGame",
    "ActionSuccessMessage",
    "ChatMessage",
    "ErrorMessage",
    "GameStateMessage",
    "ServerMessage",
    "SystemMessage",
    "GamePhase",
    "LocalPlayer",
    "PlayerView",
    "ScoreRecord",
    "Session",
    "TurnState",
]
