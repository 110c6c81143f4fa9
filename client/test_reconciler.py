"""
Test suite for snapshot reconciliation.

Verifies:
- Identity and player list handling (only the local player has a hand)
- The local hand survives snapshots that omit it
- Omitted fields keep their value, explicit nulls clear nullable fields
- Round boundaries append score history exactly once
- Phase transitions loading -> playing -> ended -> playing

Run with: pytest test_reconciler.py -v
"""

import logging

from hand_sort import HandSorter
from models.cards import Card, SortPreference
from models.session import GamePhase, LocalPlayer, PlayerView, Session
from reconciler import Reconciler
from scores import ScoreHistoryTracker
from validator import parse_message


# =============================================================================
# Helpers
# =============================================================================

PLAYERS = [
    {"id": "p1", "name": "Alice", "cardCount": 13, "hasPassed": False},
    {"id": "p2", "name": "Bob", "cardCount": 13, "hasPassed": False},
    {"id": "p3", "name": "Cara", "cardCount": 13, "hasPassed": False},
]


def snapshot(**fields) -> dict:
    """Build a gameState payload; keyword names are wire names."""
    data = {"type": "gameState"}
    data.update(fields)
    return data


def full_snapshot(**overrides) -> dict:
    data = snapshot(
        yourPlayerId="p1",
        currentPlayerId="p2",
        passCount=0,
        lastPlayedHand=None,
        playersInfo=PLAYERS,
        isGameOver=False,
        scores={"p1": 0, "p2": 0, "p3": 0},
        roundNumber=1,
        targetScore=100,
        isMatchOver=False,
    )
    data.update(overrides)
    return data


def make_reconciler() -> Reconciler:
    return Reconciler(HandSorter(), ScoreHistoryTracker())


def apply(session: Session, payload: dict, reconciler: Reconciler = None):
    reconciler = reconciler or make_reconciler()
    return reconciler.apply(session, parse_message(payload))


def cards(*pairs) -> list[dict]:
    return [{"rank": rank, "suit": suit} for rank, suit in pairs]


# =============================================================================
# Players and hand
# =============================================================================

class TestPlayersAndHand:

    def test_local_player_gets_hand(self):
        session = Session()
        apply(session, full_snapshot(hand=cards((5, 1), (3, 0))))

        assert isinstance(session.local_player, LocalPlayer)
        assert session.hand == [Card(3, 0), Card(5, 1)]

    def test_other_players_have_no_hand(self):
        session = Session()
        apply(session, full_snapshot(hand=cards((5, 1))))

        bob = session.get_player("p2")
        assert type(bob) is PlayerView
        assert not hasattr(bob, "hand")

    def test_hand_carried_forward_when_omitted(self):
        session = Session()
        reconciler = make_reconciler()
        apply(session, full_snapshot(hand=cards((5, 1), (9, 2))), reconciler)

        players = [dict(p) for p in PLAYERS]
        players[0]["cardCount"] = 2
        apply(session, snapshot(playersInfo=players, currentPlayerId="p3"), reconciler)

        assert session.hand == [Card(5, 1), Card(9, 2)]
        assert session.local_player.card_count == 2

    def test_hand_replaced_wholesale(self):
        session = Session()
        reconciler = make_reconciler()
        apply(session, full_snapshot(hand=cards((5, 1), (9, 2))), reconciler)
        result = apply(session, snapshot(hand=cards((12, 3))), reconciler)

        assert result.hand_replaced
        assert session.hand == [Card(12, 3)]

    def test_hand_does_not_alias_payload(self):
        session = Session()
        payload = full_snapshot(hand=cards((5, 1)))
        apply(session, payload)

        payload["hand"].append({"rank": 7, "suit": 0})
        assert session.hand == [Card(5, 1)]

    def test_hand_sorted_by_preference(self):
        session = Session(sort_preference=SortPreference.BY_SUIT)
        apply(session, full_snapshot(hand=cards((5, 3), (14, 0), (5, 0))))

        assert session.hand == [Card(5, 0), Card(14, 0), Card(5, 3)]

    def test_hand_kept_before_player_list(self):
        session = Session()
        result = apply(session, snapshot(yourPlayerId="p1", currentPlayerId="p1", hand=cards((5, 1), (3, 0))))

        assert result.hand_replaced
        assert session.hand == [Card(3, 0), Card(5, 1)]
        assert session.local_player.id == "p1"

    def test_player_list_after_identity_and_hand(self):
        session = Session()
        reconciler = make_reconciler()
        apply(session, snapshot(yourPlayerId="p1", hand=cards((9, 2), (4, 0))), reconciler)
        apply(session, snapshot(playersInfo=PLAYERS), reconciler)

        assert session.hand == [Card(4, 0), Card(9, 2)]
        assert [player.id for player in session.players] == ["p1", "p2", "p3"]
        assert session.local_player.name == "Alice"

    def test_identity_missing_from_sent_list(self):
        session = Session()
        apply(session, snapshot(yourPlayerId="p9", playersInfo=PLAYERS, hand=cards((5, 1))))

        assert session.local_player is None
        assert all(not isinstance(player, LocalPlayer) for player in session.players)

    def test_hand_without_identity_dropped(self, caplog):
        session = Session()
        with caplog.at_level(logging.WARNING):
            apply(session, snapshot(hand=cards((5, 1))))

        assert session.hand == []
        assert "Dropping hand" in caplog.text

    def test_identity_change_without_player_list(self):
        session = Session()
        reconciler = make_reconciler()
        apply(session, full_snapshot(hand=cards((5, 1), (9, 2))), reconciler)
        apply(session, snapshot(yourPlayerId="p2"), reconciler)

        old = session.get_player("p1")
        assert type(old) is PlayerView
        assert session.local_player.id == "p2"
        assert session.hand == []
        assert sum(isinstance(player, LocalPlayer) for player in session.players) == 1

    def test_identity_change_then_hand(self):
        session = Session()
        reconciler = make_reconciler()
        apply(session, full_snapshot(hand=cards((5, 1))), reconciler)
        apply(session, snapshot(yourPlayerId="p3", hand=cards((11, 0))), reconciler)

        assert session.local_player.id == "p3"
        assert session.hand == [Card(11, 0)]
        assert not hasattr(session.get_player("p1"), "hand")

    def test_identity_after_player_list(self):
        session = Session()
        reconciler = make_reconciler()
        apply(session, snapshot(playersInfo=PLAYERS), reconciler)
        apply(session, snapshot(yourPlayerId="p1", hand=cards((8, 2))), reconciler)

        assert session.hand == [Card(8, 2)]

    def test_null_identity_keeps_previous(self):
        session = Session()
        reconciler = make_reconciler()
        apply(session, full_snapshot(), reconciler)
        apply(session, snapshot(yourPlayerId=None), reconciler)

        assert session.your_player_id == "p1"


# =============================================================================
# Optional fields
# =============================================================================

class TestOptionalFields:

    def test_omitted_fields_keep_values(self):
        session = Session()
        reconciler = make_reconciler()
        apply(session, full_snapshot(passCount=2, roundNumber=3, targetScore=50), reconciler)
        apply(session, snapshot(currentPlayerId="p3"), reconciler)

        assert session.pass_count == 2
        assert session.round_number == 3
        assert session.target_score == 50
        assert session.totals == {"p1": 0, "p2": 0, "p3": 0}

    def test_omitted_last_played_hand_kept(self):
        session = Session()
        reconciler = make_reconciler()
        played = {"cards": cards((7, 1)), "playerId": "p2", "handType": 1, "rank": 7}
        apply(session, full_snapshot(lastPlayedHand=played), reconciler)
        apply(session, snapshot(passCount=1), reconciler)

        assert session.last_played_hand is not None
        assert session.last_played_hand.owner_id == "p2"

    def test_null_last_played_hand_clears(self):
        session = Session()
        reconciler = make_reconciler()
        played = {"cards": cards((7, 1)), "playerId": "p2", "handType": 1, "rank": 7}
        apply(session, full_snapshot(lastPlayedHand=played), reconciler)
        apply(session, snapshot(lastPlayedHand=None), reconciler)

        assert session.last_played_hand is None

    def test_null_non_nullable_field_is_ignored(self):
        session = Session()
        reconciler = make_reconciler()
        apply(session, full_snapshot(passCount=2), reconciler)
        apply(session, snapshot(passCount=None, isGameOver=None), reconciler)

        assert session.pass_count == 2
        assert session.is_round_over is False

    def test_null_current_player_clears(self):
        session = Session()
        reconciler = make_reconciler()
        apply(session, full_snapshot(), reconciler)
        apply(session, snapshot(currentPlayerId=None), reconciler)

        assert session.current_player_id is None

    def test_unknown_current_player_logged(self, caplog):
        session = Session()
        with caplog.at_level(logging.WARNING):
            apply(session, full_snapshot(currentPlayerId="ghost"))

        assert session.current_player_id == "ghost"
        assert "not in the player list" in caplog.text


# =============================================================================
# Round boundaries and history
# =============================================================================

class TestRoundBoundaries:

    def test_round_close_records_delta(self):
        session = Session()
        reconciler = make_reconciler()
        apply(session, full_snapshot(), reconciler)
        result = apply(session, snapshot(isGameOver=True, winnerId="p1", scores={"p1": 0, "p2": 4, "p3": 7}), reconciler)

        assert result.round_closed
        assert session.history == [{"p1": 0, "p2": 4, "p3": 7}]

    def test_second_round_delta_from_totals(self):
        session = Session()
        reconciler = make_reconciler()
        apply(session, full_snapshot(), reconciler)
        apply(session, snapshot(isGameOver=True, scores={"p1": 0, "p2": 4, "p3": 7}), reconciler)
        apply(session, snapshot(isGameOver=False, roundNumber=2), reconciler)
        apply(session, snapshot(isGameOver=True, scores={"p1": 5, "p2": 4, "p3": 9}), reconciler)

        assert session.history == [
            {"p1": 0, "p2": 4, "p3": 7},
            {"p1": 5, "p2": 0, "p3": 2},
        ]

    def test_repeated_game_over_snapshot_appends_once(self):
        session = Session()
        reconciler = make_reconciler()
        apply(session, full_snapshot(), reconciler)
        apply(session, snapshot(isGameOver=True, scores={"p1": 0, "p2": 4, "p3": 7}), reconciler)
        result = apply(session, snapshot(isGameOver=True, scores={"p1": 0, "p2": 4, "p3": 7}), reconciler)

        assert not result.round_closed
        assert len(session.history) == 1

    def test_server_history_is_authoritative(self):
        session = Session()
        reconciler = make_reconciler()
        apply(session, full_snapshot(), reconciler)
        server_history = [{"p1": 0, "p2": 6, "p3": 3}]
        apply(session, snapshot(isGameOver=True, scores={"p1": 0, "p2": 6, "p3": 3},
                                roundScoresHistory=server_history), reconciler)

        assert session.history == server_history

    def test_shorter_server_history_ignored(self):
        session = Session()
        reconciler = make_reconciler()
        apply(session, full_snapshot(roundScoresHistory=[{"p1": 1}, {"p1": 2}]), reconciler)
        apply(session, snapshot(roundScoresHistory=[{"p1": 1}]), reconciler)

        assert len(session.history) == 2

    def test_new_match_resets_history(self):
        session = Session()
        reconciler = make_reconciler()
        apply(session, full_snapshot(
            isGameOver=True, isMatchOver=True,
            roundScoresHistory=[{"p1": 60}, {"p1": 45}],
        ), reconciler)
        result = apply(session, snapshot(isGameOver=False, isMatchOver=False, roundNumber=1,
                                         scores={"p1": 0}), reconciler)

        assert result.new_match
        assert session.history == []

    def test_match_close_flag(self):
        session = Session()
        reconciler = make_reconciler()
        apply(session, full_snapshot(), reconciler)
        result = apply(session, snapshot(isGameOver=True, isMatchOver=True, overallWinnerId="p3"), reconciler)

        assert result.round_closed
        assert result.match_closed
        assert session.overall_winner_id == "p3"


# =============================================================================
# Phases
# =============================================================================

class TestPhases:

    def test_loading_until_identity(self):
        session = Session()
        apply(session, snapshot(playersInfo=PLAYERS))
        assert session.phase == GamePhase.LOADING

    def test_playing_once_identity_known(self):
        session = Session()
        result = apply(session, full_snapshot())
        assert session.phase == GamePhase.PLAYING
        assert result.phase_changed

    def test_ended_on_round_over(self):
        session = Session()
        reconciler = make_reconciler()
        apply(session, full_snapshot(), reconciler)
        apply(session, snapshot(isGameOver=True), reconciler)
        assert session.phase == GamePhase.ENDED

    def test_back_to_playing_on_new_round(self):
        session = Session()
        reconciler = make_reconciler()
        apply(session, full_snapshot(), reconciler)
        apply(session, snapshot(isGameOver=True), reconciler)
        result = apply(session, snapshot(isGameOver=False, roundNumber=2), reconciler)

        assert session.phase == GamePhase.PLAYING
        assert result.new_round

    def test_stays_ended_without_explicit_clear(self):
        session = Session()
        reconciler = make_reconciler()
        apply(session, full_snapshot(), reconciler)
        apply(session, snapshot(isGameOver=True), reconciler)
        apply(session, snapshot(passCount=0), reconciler)

        assert session.phase == GamePhase.ENDED
