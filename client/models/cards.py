"""
Card value types shared by the wire schemas and the session model.

Cards are immutable (rank, suit) pairs using the server's integer encoding;
see constants.py for the rank and suit tables.
"""

from dataclasses import dataclass, field
from enum import Enum

from constants import HAND_TYPE_LABELS, RANK_LABELS, SUIT_NAMES


class SortPreference(str, Enum):
    """
    Ordering applied to the local player's hand.

    BY_RANK: rank ascending, then suit ascending
    BY_SUIT: suit ascending, then rank ascending
    """

    BY_RANK = "rank"
    BY_SUIT = "suit"

    @classmethod
    def parse(cls, value: str) -> "SortPreference":
        """Accept the stored names ("rank"/"suit") and the long forms ("byRank"/"bySuit")."""
        normalized = value.strip().lower()
        if normalized.startswith("by"):
            normalized = normalized[2:]
        return cls(normalized)


@dataclass(frozen=True)
class Card:
    """
    A playing card.

    Attributes:
        rank: 3..15 (14 = Ace, 15 = Two).
        suit: 0..3 (Diamonds, Clubs, Hearts, Spades).
    """

    rank: int
    suit: int

    def to_dict(self) -> dict:
        """Convert card to its wire form."""
        return {"rank": self.rank, "suit": self.suit}

    @classmethod
    def from_dict(cls, d: dict) -> "Card":
        return cls(rank=d["rank"], suit=d["suit"])

    @property
    def label(self) -> str:
        """Short display label, e.g. "AS" for the Ace of Spades."""
        suit_name = SUIT_NAMES.get(self.suit, "?")
        return f"{RANK_LABELS.get(self.rank, str(self.rank))}{suit_name[0]}"

    def __str__(self) -> str:
        return self.label


@dataclass(frozen=True)
class PlayedHand:
    """
    The most recent accepted play on the table.

    Attributes:
        cards: Cards in the play, in the order the server sent them.
        owner_id: Player who made the play.
        hand_type_code: Server hand type (see HAND_TYPE_LABELS).
        hand_type_label: Server-supplied label, may be empty.
        rank: Effective rank used by the server for comparison.
    """

    cards: tuple[Card, ...] = field(default_factory=tuple)
    owner_id: str = ""
    hand_type_code: int = 0
    hand_type_label: str = ""
    rank: int = 0

    @property
    def is_empty(self) -> bool:
        return not self.cards

    @property
    def display_label(self) -> str:
        """Server label if given, otherwise the label for the hand type code."""
        if self.hand_type_label:
            return self.hand_type_label
        return HAND_TYPE_LABELS.get(self.hand_type_code, "Hand")

    def to_dict(self) -> dict:
        return {
            "cards": [card.to_dict() for card in self.cards],
            "playerId": self.owner_id,
            "handType": self.hand_type_code,
            "handTypeString": self.hand_type_label,
            "rank": self.rank,
        }
