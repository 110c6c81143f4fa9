"""
Side-effect intents produced by the client core.

The core never sends, renders or plays sounds itself; it returns intents and
the transport/UI layer carries them out.
"""

from dataclasses import dataclass
from typing import Optional, Union

from models.commands import Command
from notifications import NotificationKind


@dataclass(frozen=True)
class SendCommand:
    """Send ``command`` to the server."""
    command: Command


@dataclass(frozen=True)
class Notify:
    """Raise a turn-change notification (e.g. play a sound)."""
    kind: NotificationKind


@dataclass(frozen=True)
class Diagnostic:
    """An inbound payload was rejected."""
    reason: str


@dataclass(frozen=True)
class RoundOver:
    winner_id: Optional[str]


@dataclass(frozen=True)
class MatchOver:
    winner_id: Optional[str]


@dataclass(frozen=True)
class GameMessage:
    """Free-text game message from the server."""
    text: str


Intent = Union[SendCommand, Notify, Diagnostic, RoundOver, MatchOver, GameMessage]
