"""
Card, hand and protocol constants for the Big Two client.

Card encoding follows the server:
    - Ranks are integers 3..15 where 11=J, 12=Q, 13=K, 14=Ace, 15=Two
      (Ace and Two are the two highest ranks in Big Two)
    - Suits are integers 0..3: Diamonds, Clubs, Hearts, Spades (low to high)
"""

# =============================================================================
# Card Encoding
# =============================================================================

MIN_RANK = 3
MAX_RANK = 15
MIN_SUIT = 0
MAX_SUIT = 3

RANK_LABELS: dict[int, str] = {
    3: "3",
    4: "4",
    5: "5",
    6: "6",
    7: "7",
    8: "8",
    9: "9",
    10: "10",
    11: "J",
    12: "Q",
    13: "K",
    14: "A",
    15: "2",
}

SUIT_NAMES: dict[int, str] = {
    0: "Diamonds",
    1: "Clubs",
    2: "Hearts",
    3: "Spades",
}

# Hand type codes as sent in PlayedHand.handType
HAND_TYPE_LABELS: dict[int, str] = {
    0: "Invalid",
    1: "Single",
    2: "Pair",
    3: "Triple",
    4: "Straight",
    5: "Flush",
    6: "Full House",
    7: "Four of a Kind",
    8: "Straight Flush",
}


# =============================================================================
# Protocol
# =============================================================================

# Inbound message kinds
MSG_GAME_STATE = "gameState"
MSG_CHAT = "chat"
MSG_ERROR = "error"
MSG_SYSTEM = "system"
MSG_ACTION_SUCCESS = "actionSuccess"

INBOUND_MESSAGE_TYPES = (
    MSG_GAME_STATE,
    MSG_CHAT,
    MSG_ERROR,
    MSG_SYSTEM,
    MSG_ACTION_SUCCESS,
)

# Error context marking a rejected action (transient, single-slot)
VALIDATION_CONTEXT = "validation"


# =============================================================================
# Session Defaults
# =============================================================================

DEFAULT_ROUND_NUMBER = 1
DEFAULT_TARGET_SCORE = 100
SCORE_PLACEHOLDER = "-"
