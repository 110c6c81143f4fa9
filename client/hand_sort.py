"""
Hand ordering for the local player.

Two total orders over cards:
    - rank: rank ascending, then suit ascending
    - suit: suit ascending, then rank ascending

(rank, suit) pairs are unique within a hand, so either order is fully
deterministic.
"""

import logging
from typing import Callable, Iterable

from models.cards import Card, SortPreference
from models.session import Session

logger = logging.getLogger(__name__)


def rank_key(card: Card) -> tuple[int, int]:
    return (card.rank, card.suit)


def suit_key(card: Card) -> tuple[int, int]:
    return (card.suit, card.rank)


SORT_KEYS: dict[SortPreference, Callable[[Card], tuple[int, int]]] = {
    SortPreference.BY_RANK: rank_key,
    SortPreference.BY_SUIT: suit_key,
}


def sort_cards(cards: Iterable[Card], preference: SortPreference) -> list[Card]:
    """Return a new list of ``cards`` in the order given by ``preference``."""
    return sorted(cards, key=SORT_KEYS[preference])


class HandSorter:
    """Keeps the local hand in the order of the session's sort preference."""

    def apply(self, session: Session) -> bool:
        """
        Re-sort the local hand in place.

        Returns:
            True if the hand order changed.
        """
        me = session.local_player
        if me is None or not me.hand:
            return False

        ordered = sort_cards(me.hand, session.sort_preference)
        if ordered == me.hand:
            return False
        me.hand = ordered
        return True

    def set_preference(self, session: Session, preference: SortPreference) -> bool:
        """
        Change the sort preference and re-sort immediately.

        Returns:
            True if the hand order changed.
        """
        if preference != session.sort_preference:
            logger.debug(f"Sort preference {session.sort_preference.value} -> {preference.value}")
        session.sort_preference = preference
        return self.apply(session)
