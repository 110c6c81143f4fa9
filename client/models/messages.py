"""
Pydantic schemas for messages received from the game server.

Every inbound payload is parsed into exactly one of the five message kinds
through a discriminated union on ``type``. Field names follow the server's
camelCase wire format via aliases; attributes are snake_case.

Optional ``gameState`` fields are tracked with ``provided()`` so that a field
the server omitted can be told apart from one it sent as ``null``.
"""

from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator

from constants import MAX_RANK, MAX_SUIT, MIN_RANK, MIN_SUIT
from models.cards import Card, PlayedHand


class WireModel(BaseModel):
    """Base for wire schemas: camelCase aliases, unknown fields ignored."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)


class CardSchema(WireModel):
    rank: int = Field(ge=MIN_RANK, le=MAX_RANK)
    suit: int = Field(ge=MIN_SUIT, le=MAX_SUIT)

    def to_card(self) -> Card:
        return Card(rank=self.rank, suit=self.suit)


class PlayedHandSchema(WireModel):
    cards: list[CardSchema] = Field(default_factory=list)
    owner_id: str = Field(default="", alias="playerId")
    hand_type_code: int = Field(default=0, alias="handType")
    hand_type_label: str = Field(default="", alias="handTypeString")
    rank: int = 0

    def to_played_hand(self) -> PlayedHand:
        return PlayedHand(
            cards=tuple(card.to_card() for card in self.cards),
            owner_id=self.owner_id,
            hand_type_code=self.hand_type_code,
            hand_type_label=self.hand_type_label or "",
            rank=self.rank,
        )


class PlayerInfoSchema(WireModel):
    id: str = Field(min_length=1)
    name: str = ""
    card_count: int = Field(default=0, ge=0, alias="cardCount")
    has_passed: bool = Field(default=False, alias="hasPassed")


class GameStateMessage(WireModel):
    """Authoritative snapshot of the visible game state."""

    type: Literal["gameState"]
    hand: Optional[list[CardSchema]] = None
    last_played_hand: Optional[PlayedHandSchema] = Field(default=None, alias="lastPlayedHand")
    your_player_id: Optional[str] = Field(default=None, alias="yourPlayerId")
    current_player_id: Optional[str] = Field(default=None, alias="currentPlayerId")
    current_player_name: Optional[str] = Field(default=None, alias="currentPlayerName")
    pass_count: Optional[int] = Field(default=None, ge=0, alias="passCount")
    players_info: Optional[list[PlayerInfoSchema]] = Field(default=None, alias="playersInfo")
    is_game_over: Optional[bool] = Field(default=None, alias="isGameOver")
    scores: Optional[dict[str, int]] = None
    round_number: Optional[int] = Field(default=None, ge=1, alias="roundNumber")
    target_score: Optional[int] = Field(default=None, alias="targetScore")
    is_match_over: Optional[bool] = Field(default=None, alias="isMatchOver")
    overall_winner_id: Optional[str] = Field(default=None, alias="overallWinnerId")
    round_scores_history: Optional[list[dict[str, int]]] = Field(default=None, alias="roundScoresHistory")
    winner_id: Optional[str] = Field(default=None, alias="winnerId")
    game_message: Optional[str] = Field(default=None, alias="gameMessage")

    @field_validator(
        "your_player_id",
        "current_player_id",
        "overall_winner_id",
        "winner_id",
        mode="before",
    )
    @classmethod
    def _blank_id_is_none(cls, value):
        # The server sends "" for "no player"
        if value == "":
            return None
        return value

    def provided(self, name: str) -> bool:
        """True if the server included ``name`` in this snapshot (even as null)."""
        return name in self.model_fields_set

    def cards_in_hand(self) -> Optional[list[Card]]:
        """Fresh Card list for the local hand, or None when no hand was sent."""
        if self.hand is None:
            return None
        return [card.to_card() for card in self.hand]


class ChatMessage(WireModel):
    type: Literal["chat"]
    sender: str
    content: str


class ErrorMessage(WireModel):
    type: Literal["error"]
    content: str
    context: Optional[str] = None


class SystemMessage(WireModel):
    type: Literal["system"]
    content: str


class ActionSuccessMessage(WireModel):
    type: Literal["actionSuccess"]
    content: Optional[str] = None


ServerMessage = Annotated[
    Union[
        GameStateMessage,
        ChatMessage,
        ErrorMessage,
        SystemMessage,
        ActionSuccessMessage,
    ],
    Field(discriminator="type"),
]

server_message_adapter: TypeAdapter = TypeAdapter(ServerMessage)
