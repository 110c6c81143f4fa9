"""Inbound message handlers for the Big Two client.

Each handler corresponds to a single message type from the server.
GameClient.process() dispatches through the HANDLERS dict below; each handler returns
the side-effect intents the message produced.
"""

import logging
from typing import TYPE_CHECKING, Callable

from constants import (
    INBOUND_MESSAGE_TYPES,
    MSG_ACTION_SUCCESS,
    MSG_CHAT,
    MSG_ERROR,
    MSG_GAME_STATE,
    MSG_SYSTEM,
    VALIDATION_CONTEXT,
)
from intents import GameMessage, Intent, MatchOver, Notify, RoundOver, SendCommand
from logging_config import player_id_var, round_number_var
from models.messages import (
    ActionSuccessMessage,
    ChatMessage,
    ErrorMessage,
    GameStateMessage,
    SystemMessage,
)

if TYPE_CHECKING:
    from game_client import GameClient

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Game state
# ---------------------------------------------------------------------------

def handle_game_state(message: GameStateMessage, client: "GameClient") -> list[Intent]:
    if client.awaiting_fresh_snapshot:
        client.start_session()
        client.awaiting_fresh_snapshot = False

    session = client.session
    result = client.reconciler.apply(session, message)

    player_id_var.set(session.your_player_id)
    round_number_var.set(session.round_number)

    if result.phase_changed:
        logger.info(f"Phase -> {session.phase.value}")

    intents: list[Intent] = []

    for command in client.engine.after_snapshot(session, can_send=client.connected):
        intents.append(SendCommand(command))

    if result.round_closed:
        logger.info(f"Round {session.round_number} over, winner={session.winner_id}")
        intents.append(RoundOver(session.winner_id))
    if result.match_closed:
        logger.info(f"Match over, winner={session.overall_winner_id}")
        intents.append(MatchOver(session.overall_winner_id))

    kind = client.notifier.observe(session, client.notifications_unlocked)
    if kind:
        intents.append(Notify(kind))

    if message.game_message:
        intents.append(GameMessage(message.game_message))

    return intents


# ---------------------------------------------------------------------------
# Chat / system / errors
# ---------------------------------------------------------------------------

def handle_chat(message: ChatMessage, client: "GameClient") -> list[Intent]:
    client.chat_log.append(message)
    return []


def handle_system(message: SystemMessage, client: "GameClient") -> list[Intent]:
    client.system_log.append(message.content)
    return []


def handle_error(message: ErrorMessage, client: "GameClient") -> list[Intent]:
    if message.context == VALIDATION_CONTEXT:
        client.action_message = message.content
        return []

    logger.warning(f"Server error: {message.content}", extra={"message_type": MSG_ERROR})
    client.error_log.append(message.content)
    return []


def handle_action_success(message: ActionSuccessMessage, client: "GameClient") -> list[Intent]:
    client.action_message = None
    return []


HANDLERS: dict[str, Callable[..., list[Intent]]] = {
    MSG_GAME_STATE: handle_game_state,
    MSG_CHAT: handle_chat,
    MSG_ERROR: handle_error,
    MSG_SYSTEM: handle_system,
    MSG_ACTION_SUCCESS: handle_action_success,
}

assert set(HANDLERS) == set(INBOUND_MESSAGE_TYPES), "every message type needs a handler"
