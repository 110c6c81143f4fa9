"""
Turn-change notifications.

Decides, at most once per change of turn owner, whether the local player
should be told that it is their turn or that play moved to an opponent.
Playing the sound is left to whoever consumes the Notify intent.
"""

import logging
from enum import Enum
from typing import Optional

from models.session import Session

logger = logging.getLogger(__name__)


class NotificationKind(str, Enum):
    SELF_TURN = "selfTurn"
    OPPONENT_TURN = "opponentTurn"


def decide_notification(
    previous_player_id: Optional[str],
    new_player_id: Optional[str],
    your_player_id: Optional[str],
    channel_unlocked: bool,
) -> Optional[NotificationKind]:
    """
    Pick the notification for a turn transition, if any.

    Nothing is emitted while the channel is locked, on the first snapshot of a
    session (no previous owner) or when the turn owner did not change.
    """
    if not channel_unlocked:
        return None
    if previous_player_id is None:
        return None
    if new_player_id == previous_player_id:
        return None
    if your_player_id is not None and new_player_id == your_player_id:
        return NotificationKind.SELF_TURN
    return NotificationKind.OPPONENT_TURN


class NotificationEmitter:
    """Applies decide_notification to the session and advances the previous owner."""

    def observe(self, session: Session, channel_unlocked: bool) -> Optional[NotificationKind]:
        kind = decide_notification(
            session.previous_current_player_id,
            session.current_player_id,
            session.your_player_id,
            channel_unlocked,
        )
        session.previous_current_player_id = session.current_player_id
        if kind:
            logger.debug(f"Turn notification: {kind.value}")
        return kind
