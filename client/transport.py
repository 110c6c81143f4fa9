"""
WebSocket transport for the Big Two client.

Feeds every frame from the server into GameClient.process() and carries out
the intents it returns: SendCommand intents go back over the socket, the rest
are handed to an optional callback (UI, sound, logging).

There is no reconnect policy here. When the socket closes the client is told
it is disconnected and run() returns; reconnecting is up to the caller.
"""

import json
from typing import Callable, Iterable, Optional

import websockets
from websockets.exceptions import ConnectionClosed

from game_client import GameClient
from intents import Intent, SendCommand
from logging_config import get_logger
from models.commands import Command

logger = get_logger(__name__)


class Connection:
    """One WebSocket connection driving a GameClient."""

    def __init__(
        self,
        client: GameClient,
        url: str,
        on_intent: Optional[Callable[[Intent], None]] = None,
    ):
        self.client = client
        self.url = url
        self.on_intent = on_intent
        self._websocket = None
        self.log = logger.with_context(server_url=url)

    @property
    def is_open(self) -> bool:
        return self._websocket is not None

    async def run(self, connect=websockets.connect) -> None:
        """
        Connect and process frames until the server closes the connection.

        Args:
            connect: Factory returning an async context manager for the socket
                (``websockets.connect`` by default).
        """
        self.log.info(f"Connecting to {self.url}")
        async with connect(self.url) as websocket:
            self._websocket = websocket
            try:
                await self.perform(self.client.on_connected())
                async for frame in websocket:
                    await self.perform(self.client.process(frame))
            except ConnectionClosed as e:
                self.log.warning(f"Connection closed: {e}")
            finally:
                self._websocket = None
                self.client.on_disconnected()

    async def perform(self, intents: Iterable[Intent]) -> None:
        """Execute intents from GameClient (inbound processing or user actions)."""
        for intent in intents:
            if isinstance(intent, SendCommand):
                await self._send(intent.command)
            elif self.on_intent:
                self.on_intent(intent)

    async def _send(self, command: Command) -> None:
        if self._websocket is None:
            self.log.warning(f"Dropping {command.type}: not connected")
            return
        await self._websocket.send(json.dumps(command.to_dict()))
        self.log.debug(f"Sent {command.type}", extra={"command": command.type})
