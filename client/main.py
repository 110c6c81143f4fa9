"""Headless Big Two client: connects to the server and logs game events."""

import asyncio
import logging

from config import config
from game_client import GameClient
from intents import Diagnostic, GameMessage, Intent, MatchOver, Notify, RoundOver
from logging_config import setup_logging
from models.cards import SortPreference
from stores.preferences import get_preference_store
from transport import Connection

logger = logging.getLogger(__name__)


def log_intent(intent: Intent) -> None:
    """Default intent consumer: log what a UI would show or play."""
    if isinstance(intent, Notify):
        logger.info(f"Turn notification: {intent.kind.value}")
    elif isinstance(intent, RoundOver):
        logger.info(f"Round over, winner: {intent.winner_id}")
    elif isinstance(intent, MatchOver):
        logger.info(f"Match over, winner: {intent.winner_id}")
    elif isinstance(intent, GameMessage):
        logger.info(f"Game: {intent.text}")
    elif isinstance(intent, Diagnostic):
        logger.warning(f"Diagnostic: {intent.reason}")


def create_client() -> GameClient:
    """Build a GameClient from configuration."""
    store = get_preference_store(config.PREFERENCES_PATH)
    if config.PLAYER_ALIAS and not store.get_alias():
        store.set_alias(config.PLAYER_ALIAS)

    return GameClient(
        store,
        default_sort=SortPreference.parse(config.DEFAULT_SORT),
        default_target_score=config.DEFAULT_TARGET_SCORE,
    )


async def main() -> None:
    client = create_client()
    connection = Connection(client, config.SERVER_URL, on_intent=log_intent)
    await connection.run()
    logger.info(f"Final state: {client.view().title}")


def run():
    """Run the client with configuration from environment."""
    setup_logging(level="DEBUG" if config.DEBUG else config.LOG_LEVEL, environment=config.ENVIRONMENT)
    logger.info(f"Starting Big Two client for {config.SERVER_URL}")
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        logger.info("Interrupted")
    except OSError as e:
        logger.error(f"Could not connect to {config.SERVER_URL}: {e}")


if __name__ == "__main__":
    run()
