"""
Big Two client core.

GameClient owns the Session for one connection and runs every inbound
payload to completion, one at a time:

    validate -> reconcile (sort, score) -> automation -> notify

It also exposes the user operations (play, pass, chat, alias, new game,
sort order, notification unlock). Nothing here performs I/O: every operation
returns a list of intents for the transport/UI layer to execute.

Usage:
    client = GameClient(get_preference_store(config.PREFERENCES_PATH))
    intents = client.on_connected()
    intents += client.process(frame)
    view = client.view()
"""

import logging
from typing import Any, Callable, Iterable, Optional, Union

from constants import DEFAULT_TARGET_SCORE
from errors import ActionRejectedError, MalformedMessageError, describe_payload
from handlers import HANDLERS
from hand_sort import HandSorter
from automation import TurnEngine
from intents import Diagnostic, Intent, SendCommand
from models.cards import Card, SortPreference
from models.commands import NewGame, SendChat, SetAlias
from models.messages import ChatMessage
from models.session import Session
from notifications import NotificationEmitter
from reconciler import Reconciler
from scores import ScoreHistoryTracker
from stores.preferences import MemoryPreferenceStore, PreferenceStore
from validator import parse_message
from view import ViewSnapshot, build_view

logger = logging.getLogger(__name__)


class GameClient:
    """
    Client-side state and automation for one player.

    Attributes:
        session: The current Session (replaced by the first snapshot after
            each connect).
        connected: Whether the transport is up.
        awaiting_fresh_snapshot: Set on connect; the next gameState starts a
            new Session.
        notifications_unlocked: Set once by a user gesture; never reset here.
        chat_log: Chat messages in arrival order.
        system_log: System message texts.
        error_log: Game errors (never dropped).
        diagnostics: Reasons for rejected inbound payloads.
        action_message: Transient result of the last attempted action.
    """

    def __init__(
        self,
        preferences: Optional[PreferenceStore] = None,
        default_sort: SortPreference = SortPreference.BY_RANK,
        default_target_score: int = DEFAULT_TARGET_SCORE,
    ):
        self.preferences = preferences if preferences is not None else MemoryPreferenceStore()
        self.default_target_score = default_target_score

        self.sorter = HandSorter()
        self.tracker = ScoreHistoryTracker()
        self.reconciler = Reconciler(self.sorter, self.tracker)
        self.engine = TurnEngine()
        self.notifier = NotificationEmitter()

        self.connected = False
        self.awaiting_fresh_snapshot = True
        self.notifications_unlocked = False

        self.chat_log: list[ChatMessage] = []
        self.system_log: list[str] = []
        self.error_log: list[str] = []
        self.diagnostics: list[str] = []
        self.action_message: Optional[str] = None

        self.session = Session(
            sort_preference=self.preferences.get_sort_preference() or default_sort,
            target_score=default_target_score,
        )

    def start_session(self) -> Session:
        """Replace the session, keeping only the client-owned sort preference."""
        sort = self.preferences.get_sort_preference() or self.session.sort_preference
        self.session = Session(sort_preference=sort, target_score=self.default_target_score)
        logger.debug("Started a new session")
        return self.session

    # -------------------------------------------------------------------------
    # Inbound
    # -------------------------------------------------------------------------

    def process(self, payload: Any) -> list[Intent]:
        """
        Handle one inbound payload.

        Malformed payloads are recorded as diagnostics and leave all state
        untouched. Any valid message clears the transient action message.
        """
        try:
            message = parse_message(payload)
        except MalformedMessageError as e:
            logger.warning(f"Dropped malformed message: {e.reason} payload={describe_payload(e.payload)}")
            self.diagnostics.append(e.reason)
            return [Diagnostic(e.reason)]

        self.action_message = None
        return HANDLERS[message.type](message, self)

    # -------------------------------------------------------------------------
    # Connection
    # -------------------------------------------------------------------------

    def on_connected(self) -> list[Intent]:
        """Transport is up. Re-sends the stored alias, if any."""
        self.connected = True
        self.awaiting_fresh_snapshot = True
        logger.info("Connected")

        alias = self.preferences.get_alias()
        if alias:
            return [SendCommand(SetAlias(alias=alias))]
        return []

    def on_disconnected(self) -> None:
        """Transport is down. The session stays as the last known (stale) state."""
        if self.connected:
            logger.warning("Disconnected from server")
        self.connected = False

    @property
    def can_act(self) -> bool:
        """Turn actions need a live connection and a snapshot from it."""
        return self.connected and not self.awaiting_fresh_snapshot

    # -------------------------------------------------------------------------
    # User actions
    # -------------------------------------------------------------------------

    def play_cards(self, cards: Iterable[Card]) -> list[Intent]:
        """Play the selected cards."""
        selected = list(cards)
        return self._run_action(lambda: self.engine.play(self.session, selected, can_send=self.can_act))

    def pass_turn(self) -> list[Intent]:
        """Pass button: pass now on our turn, otherwise arm/cancel auto-pass."""
        return self._run_action(lambda: self.engine.press_pass(self.session, can_send=self.can_act))

    def toggle_auto_pass(self) -> list[Intent]:
        def toggle():
            self.engine.toggle_auto_pass(self.session)
            return []
        return self._run_action(toggle)

    def send_chat(self, text: str) -> list[Intent]:
        content = text.strip()
        if not content:
            return []
        if not self.connected:
            self.action_message = "Not connected to server. Cannot send chat."
            return []
        return [SendCommand(SendChat(content=content))]

    def set_alias(self, alias: str) -> list[Intent]:
        """Store the alias and send it to the server."""
        alias = alias.strip()
        if not alias:
            self.action_message = "Alias cannot be empty."
            return []

        self.preferences.set_alias(alias)
        if not self.connected:
            self.action_message = "Not connected to server. Alias will be sent on connect."
            return []
        return [SendCommand(SetAlias(alias=alias))]

    def new_game(self) -> list[Intent]:
        if not self.connected:
            self.action_message = "Not connected to server. Cannot start a new game."
            return []
        return [SendCommand(NewGame())]

    def set_sort_preference(self, preference: Union[SortPreference, str]) -> None:
        """Change the hand order; re-sorts now and persists the choice."""
        if isinstance(preference, str):
            preference = SortPreference.parse(preference)
        self.sorter.set_preference(self.session, preference)
        self.preferences.set_sort_preference(preference)

    def unlock_notifications(self) -> None:
        """Called once a user gesture has unlocked the notification channel."""
        if not self.notifications_unlocked:
            logger.debug("Notification channel unlocked")
        self.notifications_unlocked = True

    def view(self) -> ViewSnapshot:
        """Read-only projection of the current state for renderers."""
        return build_view(self)

    def _run_action(self, action: Callable[[], list]) -> list[Intent]:
        try:
            commands = action()
        except ActionRejectedError as e:
            logger.info(f"{e.action} rejected: {e.reason}")
            self.action_message = e.reason
            return []
        self.action_message = None
        return [SendCommand(command) for command in commands]
