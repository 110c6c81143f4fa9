"""
Client-side session model.

The Session is the single source of truth for everything the view derives:
turn ownership, the local hand, the last play and the running score. One
Session exists per connection; it is replaced wholesale only by the first
snapshot after a (re)connect.

Only the owning components mutate it:
    - reconciler.Reconciler: snapshot fields, players, the local hand
    - hand_sort.HandSorter: hand order and sort preference
    - scores.ScoreHistoryTracker: round history
    - automation.TurnEngine: auto-pass flags
    - notifications.NotificationEmitter: previous turn owner
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from constants import DEFAULT_ROUND_NUMBER, DEFAULT_TARGET_SCORE
from models.cards import Card, PlayedHand, SortPreference

# Player id -> points scored in one round
ScoreRecord = dict[str, int]


class GamePhase(str, Enum):
    """Lifecycle of the client view."""
    LOADING = "loading"
    PLAYING = "playing"
    ENDED = "ended"


class TurnState(str, Enum):
    """Turn ownership as seen by the local player."""
    WAITING = "waiting"
    YOUR_TURN = "yourTurn"
    ENDED = "ended"


@dataclass
class PlayerView:
    """
    Public view of a player. Never carries the player's cards.

    Attributes:
        id: Unique player identifier.
        name: Display name (alias).
        card_count: Cards left in the player's hand.
        has_passed: Whether the player passed in the current trick.
    """
    id: str
    name: str = ""
    card_count: int = 0
    has_passed: bool = False

    @property
    def display_name(self) -> str:
        return self.name or self.id


@dataclass
class LocalPlayer(PlayerView):
    """The player this client plays as; the only one whose hand is known."""
    hand: list[Card] = field(default_factory=list)


@dataclass
class Session:
    """
    Canonical client-side game model.

    Attributes:
        your_player_id: Identity assigned to this client by the server.
        current_player_id: Player whose turn it is.
        previous_current_player_id: Turn owner as of the previous snapshot.
        players: Player views in seat order.
        last_played_hand: Most recent play, None when the table is clear.
        pass_count: Consecutive passes on the current play.
        is_round_over: Server's isGameOver flag (the current round ended).
        is_match_over: The match reached its target score.
        totals: Accumulated match score per player.
        history: One ScoreRecord per completed round, oldest first.
        auto_pass_enabled: Pass automatically when the turn arrives.
        auto_pass_fired: A pass was already synthesized for the current turn.
        sort_preference: Order applied to the local hand.
        phase: Lifecycle phase of the view.
    """
    your_player_id: Optional[str] = None
    current_player_id: Optional[str] = None
    previous_current_player_id: Optional[str] = None
    current_player_name: Optional[str] = None
    players: list[PlayerView] = field(default_factory=list)
    last_played_hand: Optional[PlayedHand] = None
    pass_count: int = 0
    is_round_over: bool = False
    is_match_over: bool = False
    round_number: int = DEFAULT_ROUND_NUMBER
    target_score: int = DEFAULT_TARGET_SCORE
    totals: dict[str, int] = field(default_factory=dict)
    history: list[ScoreRecord] = field(default_factory=list)
    winner_id: Optional[str] = None
    overall_winner_id: Optional[str] = None
    last_game_message: Optional[str] = None
    auto_pass_enabled: bool = False
    auto_pass_fired: bool = False
    sort_preference: SortPreference = SortPreference.BY_RANK
    phase: GamePhase = GamePhase.LOADING

    def get_player(self, player_id: Optional[str]) -> Optional[PlayerView]:
        """Find a player by ID."""
        if player_id is None:
            return None
        for player in self.players:
            if player.id == player_id:
                return player
        return None

    def player_name(self, player_id: Optional[str], default: str = "N/A") -> str:
        """Display name for a player, falling back to the raw ID."""
        player = self.get_player(player_id)
        if player:
            return player.display_name
        return player_id or default

    @property
    def local_player(self) -> Optional[LocalPlayer]:
        player = self.get_player(self.your_player_id)
        if isinstance(player, LocalPlayer):
            return player
        return None

    @property
    def current_player(self) -> Optional[PlayerView]:
        return self.get_player(self.current_player_id)

    @property
    def hand(self) -> list[Card]:
        """The local player's hand (empty until the server sends one)."""
        me = self.local_player
        return list(me.hand) if me else []

    @property
    def is_over(self) -> bool:
        """True once the round or the match has ended."""
        return self.is_round_over or self.is_match_over

    @property
    def is_your_turn(self) -> bool:
        return self.your_player_id is not None and self.current_player_id == self.your_player_id

    @property
    def turn_state(self) -> TurnState:
        if self.is_over:
            return TurnState.ENDED
        if self.is_your_turn:
            return TurnState.YOUR_TURN
        return TurnState.WAITING

    def total_for(self, player_id: str) -> int:
        """Match total for a player (0 if the server has not reported one)."""
        return self.totals.get(player_id, 0)
