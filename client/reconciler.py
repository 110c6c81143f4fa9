"""
Snapshot reconciliation.

Merges an authoritative gameState snapshot into the Session. The snapshot
owns the public fields it carries; the session keeps what the snapshot does
not own (the local hand between snapshots that omit it, the sort preference,
auto-pass flags).

Optional-field policy:
    - A field the server omitted keeps its previous value.
    - A nullable field sent as null (lastPlayedHand, currentPlayerId,
      winnerId, overallWinnerId, currentPlayerName) is cleared.
    - A non-nullable field sent as null (passCount, isGameOver, ...) is
      treated as omitted.

Usage:
    reconciler = Reconciler(HandSorter(), ScoreHistoryTracker())
    result = reconciler.apply(session, message)
    if result.round_closed:
        ...
"""

import logging
from dataclasses import dataclass

from models.messages import GameStateMessage
from models.session import GamePhase, LocalPlayer, PlayerView, Session
from hand_sort import HandSorter
from scores import ScoreHistoryTracker

logger = logging.getLogger(__name__)


# (snapshot field, session attribute, null clears the attribute)
SNAPSHOT_FIELDS: tuple[tuple[str, str, bool], ...] = (
    ("current_player_id", "current_player_id", True),
    ("current_player_name", "current_player_name", True),
    ("pass_count", "pass_count", False),
    ("round_number", "round_number", False),
    ("target_score", "target_score", False),
    ("is_game_over", "is_round_over", False),
    ("is_match_over", "is_match_over", False),
    ("winner_id", "winner_id", True),
    ("overall_winner_id", "overall_winner_id", True),
    ("game_message", "last_game_message", False),
)


@dataclass
class ReconcileResult:
    """
    Transitions observed while applying one snapshot.

    Attributes:
        round_closed: isGameOver went from false to true.
        match_closed: isMatchOver went from false to true.
        new_match: isMatchOver went from true to false.
        new_round: The view left the ended phase for a new round.
        phase_changed: Session.phase changed.
        hand_replaced: The snapshot carried the local hand.
        history_changed: Session.history changed.
    """
    round_closed: bool = False
    match_closed: bool = False
    new_match: bool = False
    new_round: bool = False
    phase_changed: bool = False
    hand_replaced: bool = False
    history_changed: bool = False


class Reconciler:
    """Applies gameState snapshots to a Session."""

    def __init__(self, sorter: HandSorter, tracker: ScoreHistoryTracker):
        self.sorter = sorter
        self.tracker = tracker

    def apply(self, session: Session, message: GameStateMessage) -> ReconcileResult:
        """
        Merge ``message`` into ``session``.

        Args:
            session: Session to mutate.
            message: Validated gameState snapshot.

        Returns:
            ReconcileResult describing the transitions that occurred.
        """
        result = ReconcileResult()
        was_round_over = session.is_round_over
        was_match_over = session.is_match_over
        previous_phase = session.phase

        # Identity first: players and the hand are matched against it
        if message.your_player_id is not None:
            session.your_player_id = message.your_player_id

        if message.players_info is not None:
            self._rebuild_players(session, message)
        else:
            self._ensure_local_player(session)

        hand = message.cards_in_hand()
        if hand is not None:
            me = session.local_player
            if me is not None:
                me.hand = hand
                result.hand_replaced = True
            else:
                your_id = session.your_player_id
                reason = f"{your_id!r} not in player list" if your_id else "identity unknown"
                logger.warning(f"Dropping hand of {len(hand)} cards: local player {reason}")

        self._apply_fields(session, message)

        if session.current_player_id and session.players and session.current_player is None:
            logger.warning(f"Current player {session.current_player_id!r} is not in the player list")

        self.sorter.apply(session)

        result.round_closed = session.is_round_over and not was_round_over
        result.match_closed = session.is_match_over and not was_match_over
        result.new_match = was_match_over and not session.is_match_over
        result.history_changed = self._update_history(session, message, result)

        self._advance_phase(session, message)
        result.phase_changed = session.phase != previous_phase
        result.new_round = previous_phase == GamePhase.ENDED and session.phase == GamePhase.PLAYING

        return result

    # -------------------------------------------------------------------------
    # Steps
    # -------------------------------------------------------------------------

    def _rebuild_players(self, session: Session, message: GameStateMessage) -> None:
        """Replace the player list, carrying the local hand forward."""
        previous = {player.id: player for player in session.players}
        players: list[PlayerView] = []

        for info in message.players_info:
            if info.id == session.your_player_id:
                old = previous.get(info.id)
                hand = list(old.hand) if isinstance(old, LocalPlayer) else []
                players.append(LocalPlayer(
                    id=info.id,
                    name=info.name,
                    card_count=info.card_count,
                    has_passed=info.has_passed,
                    hand=hand,
                ))
            else:
                players.append(PlayerView(
                    id=info.id,
                    name=info.name,
                    card_count=info.card_count,
                    has_passed=info.has_passed,
                ))

        session.players = players

    def _ensure_local_player(self, session: Session) -> None:
        """
        Keep exactly one LocalPlayer, matching the current identity.

        A former identity loses its hand; an identity missing from the list
        gets a placeholder entry until the server sends the player list.
        """
        your_id = session.your_player_id
        if your_id is None:
            return

        found = False
        for i, player in enumerate(session.players):
            if player.id == your_id:
                found = True
                if not isinstance(player, LocalPlayer):
                    session.players[i] = LocalPlayer(
                        id=player.id,
                        name=player.name,
                        card_count=player.card_count,
                        has_passed=player.has_passed,
                    )
            elif isinstance(player, LocalPlayer):
                session.players[i] = PlayerView(
                    id=player.id,
                    name=player.name,
                    card_count=player.card_count,
                    has_passed=player.has_passed,
                )

        if not found:
            logger.debug(f"Local player {your_id!r} not in player list yet, adding placeholder")
            session.players.append(LocalPlayer(id=your_id))

    def _apply_fields(self, session: Session, message: GameStateMessage) -> None:
        for source, target, null_clears in SNAPSHOT_FIELDS:
            if not message.provided(source):
                continue
            value = getattr(message, source)
            if value is None and not null_clears:
                continue
            setattr(session, target, value)

        if message.provided("last_played_hand"):
            played = message.last_played_hand
            session.last_played_hand = played.to_played_hand() if played is not None else None

        if message.scores is not None:
            session.totals = dict(message.scores)

    def _update_history(self, session: Session, message: GameStateMessage, result: ReconcileResult) -> bool:
        if result.new_match:
            logger.info("New match started, clearing score history")
            self.tracker.reset(session)

        history = message.round_scores_history
        if history is not None:
            return self.tracker.replace(session, history, new_match=result.new_match) or result.new_match

        if result.round_closed:
            self.tracker.close_round(session)
            return True

        return result.new_match

    def _advance_phase(self, session: Session, message: GameStateMessage) -> None:
        if session.phase == GamePhase.LOADING and session.your_player_id:
            session.phase = GamePhase.PLAYING

        if session.is_over:
            if session.phase != GamePhase.LOADING:
                session.phase = GamePhase.ENDED
        elif session.phase == GamePhase.ENDED and message.provided("is_game_over"):
            session.phase = GamePhase.PLAYING
