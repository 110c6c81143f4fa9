"""
Read-only view projection for renderers.

Builds plain data describing what a UI should show: window title, players,
the local hand, the last play, the game-over banner and the score table.
Renderers never read or write the Session directly.
"""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional

from config import config
from hand_sort import rank_key
from models.cards import Card, SortPreference
from models.session import GamePhase, Session, TurnState
from scores import ScoreTable, project_score_table

if TYPE_CHECKING:
    from game_client import GameClient


@dataclass(frozen=True)
class PlayerRow:
    id: str
    name: str
    card_count: int
    has_passed: bool
    is_current: bool
    is_you: bool


@dataclass(frozen=True)
class LastPlayedView:
    """The last play, cards ordered by rank then suit."""
    owner_name: str
    label: str
    cards: tuple[Card, ...]


@dataclass(frozen=True)
class GameOverBanner:
    title: str
    announcement: str
    button_label: str


@dataclass
class ViewSnapshot:
    title: str
    phase: GamePhase
    turn_state: TurnState
    players: list[PlayerRow]
    hand: list[Card]
    last_played: Optional[LastPlayedView]
    game_over: Optional[GameOverBanner]
    score_table: ScoreTable
    auto_pass_enabled: bool
    sort_preference: SortPreference
    connected: bool
    action_message: Optional[str] = None
    chat_lines: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    @property
    def is_your_turn(self) -> bool:
        return self.turn_state == TurnState.YOUR_TURN


def window_title(session: Session, game_title: Optional[str] = None) -> str:
    """
    Window title, prefixed with "YOUR TURN!" while the local player is to act.

    Examples:
        "Big Two"
        "Alice - Big Two (R2)"
        "YOUR TURN! - Alice - Big Two (R2)"
    """
    game_title = game_title or config.GAME_TITLE
    base = game_title
    if session.your_player_id:
        name = session.player_name(session.your_player_id)
        base = f"{name} - {game_title} (R{session.round_number})"
    if session.is_your_turn and not session.is_over:
        return f"YOUR TURN! - {base}"
    return base


def last_played_view(session: Session) -> Optional[LastPlayedView]:
    played = session.last_played_hand
    if played is None or played.is_empty:
        return None
    return LastPlayedView(
        owner_name=session.player_name(played.owner_id),
        label=played.display_label,
        cards=tuple(sorted(played.cards, key=rank_key)),
    )


def game_over_banner(session: Session) -> Optional[GameOverBanner]:
    if session.is_match_over:
        winner = session.player_name(session.overall_winner_id)
        return GameOverBanner(
            title="Match Over!",
            announcement=f"Overall Winner: {winner}! Target score was {session.target_score}.",
            button_label="New Match",
        )
    if session.is_round_over:
        winner = session.player_name(session.winner_id)
        return GameOverBanner(
            title="Round Over!",
            announcement=f"Winner of Round {session.round_number}: {winner}!",
            button_label="Next Round",
        )
    return None


def build_view(client: "GameClient") -> ViewSnapshot:
    session = client.session
    players = [
        PlayerRow(
            id=player.id,
            name=player.display_name,
            card_count=player.card_count,
            has_passed=player.has_passed,
            is_current=player.id == session.current_player_id,
            is_you=player.id == session.your_player_id,
        )
        for player in session.players
    ]

    return ViewSnapshot(
        title=window_title(session),
        phase=session.phase,
        turn_state=session.turn_state,
        players=players,
        hand=session.hand,
        last_played=last_played_view(session),
        game_over=game_over_banner(session),
        score_table=project_score_table(session),
        auto_pass_enabled=session.auto_pass_enabled,
        sort_preference=session.sort_preference,
        connected=client.connected,
        action_message=client.action_message,
        chat_lines=[f"{chat.sender}: {chat.content}" for chat in client.chat_log],
        errors=list(client.error_log),
    )
