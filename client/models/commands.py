"""
Outbound commands sent to the game server.

Commands are fire-and-forget: the client never waits for an acknowledgment,
the next authoritative snapshot settles the outcome.
"""

from dataclasses import dataclass, field
from typing import ClassVar

from models.cards import Card


@dataclass(frozen=True)
class Command:
    """Base class for outbound commands."""

    type: ClassVar[str] = ""

    def to_dict(self) -> dict:
        return {"type": self.type}


@dataclass(frozen=True)
class PlayCards(Command):
    type: ClassVar[str] = "playCards"
    cards: tuple[Card, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict:
        return {"type": self.type, "cards": [card.to_dict() for card in self.cards]}


@dataclass(frozen=True)
class PassTurn(Command):
    type: ClassVar[str] = "passTurn"


@dataclass(frozen=True)
class SendChat(Command):
    type: ClassVar[str] = "chat"
    content: str = ""

    def to_dict(self) -> dict:
        return {"type": self.type, "content": self.content}


@dataclass(frozen=True)
class SetAlias(Command):
    type: ClassVar[str] = "setAlias"
    alias: str = ""

    def to_dict(self) -> dict:
        return {"type": self.type, "alias": self.alias}


@dataclass(frozen=True)
class NewGame(Command):
    type: ClassVar[str] = "newGame"
