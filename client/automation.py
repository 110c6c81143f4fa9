"""
Turn ownership and auto-pass automation.

Auto-pass lets a player who is waiting for their turn ask to pass
automatically when it arrives. After every snapshot the engine:

    1. Force-clears auto-pass when the round or match is over.
    2. Force-clears auto-pass when a new trick starts:
         - passCount == 0 and the last play's owner is the new current
           player (the trick winner leads again), or
         - passCount == 0 and nothing has been played (first turn of a round).
    3. If it is now the local player's turn and auto-pass is still armed,
       synthesizes exactly one pass for this turn.

Auto-pass stays armed after it fires; only the trick-boundary rule, the end
of the round or match, or the player cancels it.
"""

import logging
from typing import Sequence

from errors import ActionRejectedError
from models.cards import Card
from models.commands import Command, PassTurn, PlayCards
from models.session import Session

logger = logging.getLogger(__name__)


def is_new_trick(session: Session) -> bool:
    """True when the snapshot marks the start of a trick."""
    if session.pass_count != 0:
        return False
    played = session.last_played_hand
    if played is None or played.is_empty:
        return True
    return played.owner_id == session.current_player_id


class TurnEngine:
    """Derives automation from the session and guards turn actions."""

    def after_snapshot(self, session: Session, can_send: bool = True) -> list[Command]:
        """
        Run the reset and consumption rules once for a reconciled snapshot.

        Args:
            session: The reconciled session.
            can_send: False while the connection is down.

        Returns:
            Commands to send (at most one pass).
        """
        if session.is_over:
            if session.auto_pass_enabled:
                logger.info("Auto-pass cleared: round or match is over")
            session.auto_pass_enabled = False
            session.auto_pass_fired = False
            return []

        if session.auto_pass_enabled and is_new_trick(session):
            logger.info("Auto-pass cleared: a new trick is starting")
            session.auto_pass_enabled = False

        if not session.is_your_turn:
            session.auto_pass_fired = False
            return []

        if not session.auto_pass_enabled or session.auto_pass_fired:
            return []

        if not can_send:
            logger.warning("Auto-pass due but the connection is down")
            return []

        session.auto_pass_fired = True
        logger.info("Auto-passing")
        return [PassTurn()]

    # -------------------------------------------------------------------------
    # User actions
    # -------------------------------------------------------------------------

    def press_pass(self, session: Session, can_send: bool = True) -> list[Command]:
        """
        The pass button: pass now if it is our turn, otherwise toggle auto-pass.

        Raises:
            ActionRejectedError: If the round/match is over, or a pass is due
                while disconnected.
        """
        if session.is_your_turn:
            self._check_can_act(session, "passTurn", can_send)
            session.auto_pass_enabled = False
            return [PassTurn()]

        self.toggle_auto_pass(session)
        return []

    def toggle_auto_pass(self, session: Session) -> bool:
        """
        Arm or cancel auto-pass while waiting for our turn.

        Returns:
            The new auto-pass state.

        Raises:
            ActionRejectedError: If it is our turn or the round/match is over.
        """
        if session.is_over:
            raise ActionRejectedError("toggleAutoPass", "The game is over.")
        if session.is_your_turn:
            raise ActionRejectedError("toggleAutoPass", "It's your turn: pass or play instead.")

        session.auto_pass_enabled = not session.auto_pass_enabled
        logger.info(f"Auto-pass {'armed' if session.auto_pass_enabled else 'cancelled'}")
        return session.auto_pass_enabled

    def play(self, session: Session, cards: Sequence[Card], can_send: bool = True) -> list[Command]:
        """
        Play the selected cards. Cancels auto-pass.

        Raises:
            ActionRejectedError: If the round/match is over, the connection
                is down, or no cards are selected.
        """
        self._check_can_act(session, "playCards", can_send)
        if not cards:
            raise ActionRejectedError("playCards", "No cards selected to play.")

        if session.auto_pass_enabled:
            logger.info("Auto-pass cancelled by a play")
            session.auto_pass_enabled = False
        return [PlayCards(cards=tuple(cards))]

    def _check_can_act(self, session: Session, action: str, can_send: bool) -> None:
        if session.is_over:
            session.auto_pass_enabled = False
            raise ActionRejectedError(action, "The game is over.")
        if not can_send:
            raise ActionRejectedError(action, "Not connected to server.")
