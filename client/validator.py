"""
Inbound message validation.

Classifies a raw payload into one of the recognized server message kinds.
Anything else is rejected with MalformedMessageError before it can touch
the session.
"""

import json
import logging
from typing import Any

from pydantic import ValidationError

from constants import INBOUND_MESSAGE_TYPES
from errors import MalformedMessageError
from models.messages import ServerMessage, server_message_adapter

logger = logging.getLogger(__name__)


def decode_payload(raw: Any) -> Any:
    """
    Decode a transport frame into a Python object.

    Text and bytes frames are JSON-decoded; anything else is assumed to be
    already decoded.

    Raises:
        MalformedMessageError: If the frame is not valid JSON.
    """
    if isinstance(raw, (bytes, bytearray)):
        try:
            raw = raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise MalformedMessageError(f"undecodable bytes: {e}") from e
    if isinstance(raw, str):
        try:
            return json.loads(raw)
        except json.JSONDecodeError as e:
            raise MalformedMessageError(f"invalid JSON: {e.msg}", raw) from e
    return raw


def parse_message(raw: Any) -> ServerMessage:
    """
    Parse a raw payload into a typed server message.

    Args:
        raw: Text/bytes frame or a decoded object.

    Returns:
        One of GameStateMessage, ChatMessage, ErrorMessage, SystemMessage,
        ActionSuccessMessage.

    Raises:
        MalformedMessageError: If the payload is not an object, has no usable
            ``type``, names an unknown type, or fails the schema for its type.
    """
    data = decode_payload(raw)

    if not isinstance(data, dict):
        raise MalformedMessageError(f"expected an object, got {type(data).__name__}", data)

    msg_type = data.get("type")
    if msg_type is None:
        raise MalformedMessageError("missing 'type' field", data)
    if not isinstance(msg_type, str):
        raise MalformedMessageError("'type' must be a string", data)
    if msg_type not in INBOUND_MESSAGE_TYPES:
        raise MalformedMessageError(f"unknown message type '{msg_type}'", data)

    try:
        message = server_message_adapter.validate_python(data)
    except ValidationError as e:
        first = e.errors()[0]
        location = ".".join(str(part) for part in first["loc"][1:]) or msg_type
        raise MalformedMessageError(
            f"invalid {msg_type} message: {location}: {first['msg']}", data
        ) from e

    logger.debug(f"Parsed {msg_type} message")
    return message
