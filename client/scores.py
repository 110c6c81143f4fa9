"""
Round score history and the running score table.

History is append-only: entry ``i`` holds the points each player scored in
round ``i + 1``. The server's roundScoresHistory is authoritative whenever it
is sent; when a round closes without one, the tracker records the round
itself as the difference between the new totals and the sum of the rounds
already recorded, so totals stay consistent with the history.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional, Union

from constants import SCORE_PLACEHOLDER
from models.session import ScoreRecord, Session

logger = logging.getLogger(__name__)

ScoreCell = Union[int, str]


@dataclass
class ScoreRow:
    """One player's line in the score table."""
    player_id: str
    name: str
    rounds: list[ScoreCell] = field(default_factory=list)
    total: int = 0


@dataclass
class ScoreTable:
    """
    Display projection of the match score.

    Attributes:
        columns: "Round 1".."Round N" followed by "Total".
        rows: One row per player, in seat order.
        target_score: Score that ends the match.
    """
    columns: list[str]
    rows: list[ScoreRow]
    target_score: int

    @property
    def rounds_played(self) -> int:
        return len(self.columns) - 1


class ScoreHistoryTracker:
    """Maintains Session.history; never shortens it within a match."""

    def close_round(self, session: Session) -> ScoreRecord:
        """
        Append a record for the round that just ended, derived from totals.

        Returns:
            The appended record.
        """
        accumulated: dict[str, int] = {}
        for record in session.history:
            for player_id, points in record.items():
                accumulated[player_id] = accumulated.get(player_id, 0) + points

        record = {
            player_id: total - accumulated.get(player_id, 0)
            for player_id, total in session.totals.items()
        }
        session.history.append(record)
        logger.info(f"Round {len(session.history)} recorded locally: {record}")
        return record

    def replace(self, session: Session, history: list[ScoreRecord], new_match: bool = False) -> bool:
        """
        Adopt the server's history.

        A shorter history is only accepted when a new match has started;
        otherwise it is ignored so the history never shrinks.

        Returns:
            True if the session history was replaced.
        """
        if len(history) < len(session.history) and not new_match:
            logger.warning(
                f"Ignoring server score history with {len(history)} rounds "
                f"(have {len(session.history)})"
            )
            return False

        session.history = [dict(record) for record in history]
        return True

    def reset(self, session: Session) -> None:
        """Start a new match history."""
        session.history = []


def project_score_table(session: Session, placeholder: Optional[str] = SCORE_PLACEHOLDER) -> ScoreTable:
    """
    Build the score table for display.

    Always has max(len(history), 1) round columns plus a Total column, so the
    table keeps its shape from the first snapshot on. Missing per-round
    entries show ``placeholder``; missing totals show 0.
    """
    rounds_played = max(len(session.history), 1)
    columns = [f"Round {i}" for i in range(1, rounds_played + 1)]
    columns.append("Total")

    rows = []
    for player in session.players:
        cells: list[ScoreCell] = []
        for i in range(rounds_played):
            record = session.history[i] if i < len(session.history) else {}
            cells.append(record.get(player.id, placeholder))
        rows.append(ScoreRow(
            player_id=player.id,
            name=player.display_name,
            rounds=cells,
            total=session.total_for(player.id),
        ))

    return ScoreTable(columns=columns, rows=rows, target_score=session.target_score)
