# memorize/game.py
from __future__ import annotations
import logging
import random
from dataclasses import dataclass, replace
from typing import Callable, Generic, Iterator, List, Optional, Tuple, TypeVar, Union

logger = logging.getLogger(__name__)

ContentT = TypeVar("ContentT")


@dataclass(frozen=True)
class Card(Generic[ContentT]):
    id: int
    content: ContentT
    is_face_up: bool = False
    is_matched: bool = False


class MemoryGame(Generic[ContentT]):
    """
    Mutable memory-matching game.

    Rep:
      - cards holds 2 * pair_count Card values; ids 2*i and 2*i+1 share the
        content generated for pair i
      - the pending card (the one and only face-up, unmatched card) is never
        stored, it is recomputed from cards on every access
      - a matched card never becomes unmatched until restart()
    Safety:
      - no internal locking; callers on several threads must serialize
        choose/shuffle/restart themselves
    """

    def __init__(
        self,
        pair_count: int,
        content_generator: Callable[[int], ContentT],
        *,
        rng: Optional[random.Random] = None,
    ):
        if isinstance(pair_count, bool) or not isinstance(pair_count, int):
            raise TypeError("pair_count must be an int")
        if pair_count < 0:
            raise ValueError("pair_count must be non-negative")
        if not callable(content_generator):
            raise TypeError("content_generator must be callable")

        self._pair_count = pair_count
        self._content_generator = content_generator
        self._rng = rng if rng is not None else random.Random()
        self._cards: List[Card[ContentT]] = []

        self._deal()

    def _deal(self) -> None:
        cards: List[Card[ContentT]] = []
        for pair_index in range(self._pair_count):
            content = self._content_generator(pair_index)
            cards.append(Card(id=pair_index * 2, content=content))
            cards.append(Card(id=pair_index * 2 + 1, content=content))
        self._rng.shuffle(cards)
        self._cards = cards
        logger.debug("dealt %d cards (%d pairs)", len(cards), self._pair_count)
        self._check_rep()

    def _check_rep(self) -> None:
        assert len(self._cards) == 2 * self._pair_count
        assert sorted(card.id for card in self._cards) == list(range(2 * self._pair_count))
        face_up_unmatched = sum(1 for card in self._cards if card.is_face_up and not card.is_matched)
        # two only right after a mismatched second flip
        assert face_up_unmatched <= 2
        assert sum(1 for card in self._cards if card.is_matched) % 2 == 0

    # ----- read side -----

    @property
    def cards(self) -> Tuple[Card[ContentT], ...]:
        return tuple(self._cards)

    @property
    def pair_count(self) -> int:
        return self._pair_count

    @property
    def pending_index(self) -> Optional[int]:
        """Index of the one and only face-up, unmatched card, else None."""
        indices = [i for i, card in enumerate(self._cards) if card.is_face_up and not card.is_matched]
        if len(indices) == 1:
            return indices[0]
        return None

    @property
    def pending_card(self) -> Optional[Card[ContentT]]:
        index = self.pending_index
        return None if index is None else self._cards[index]

    @property
    def is_finished(self) -> bool:
        return all(card.is_matched for card in self._cards)

    def card(self, card_id: int) -> Optional[Card[ContentT]]:
        index = self._index_of(card_id)
        return None if index is None else self._cards[index]

    def __len__(self) -> int:
        return len(self._cards)

    def __iter__(self) -> Iterator[Card[ContentT]]:
        return iter(self.cards)

    # ----- mutators -----

    def choose(self, card: Union[int, Card[ContentT]]) -> None:
        """
        Flip a card face-up and resolve the round.

        Unknown ids, non-int ids (bools included), face-up cards and
        matched cards are ignored.
        """
        card_id = card.id if isinstance(card, Card) else card
        if isinstance(card_id, bool) or not isinstance(card_id, int):
            return
        chosen_index = self._index_of(card_id)
        if chosen_index is None:
            return
        chosen = self._cards[chosen_index]
        if chosen.is_face_up or chosen.is_matched:
            return

        pending_index = self.pending_index
        if pending_index is None:
            # new round: everything else goes face down, matched cards too
            for i, other in enumerate(self._cards):
                if i != chosen_index and other.is_face_up:
                    self._cards[i] = replace(other, is_face_up=False)
            self._cards[chosen_index] = replace(chosen, is_face_up=True)
        else:
            pending = self._cards[pending_index]
            if chosen.content == pending.content:
                self._cards[pending_index] = replace(pending, is_matched=True)
                self._cards[chosen_index] = replace(chosen, is_face_up=True, is_matched=True)
                logger.debug("matched cards %d and %d", pending.id, chosen.id)
            else:
                self._cards[chosen_index] = replace(chosen, is_face_up=True)

        self._check_rep()

    def shuffle(self) -> None:
        self._rng.shuffle(self._cards)
        self._check_rep()

    def restart(self) -> None:
        """Throw the deck away and deal a fresh one with the same pairs and generator."""
        logger.debug("restarting game with %d pairs", self._pair_count)
        self._deal()

    def _index_of(self, card_id: int) -> Optional[int]:
        for i, card in enumerate(self._cards):
            if card.id == card_id:
                return i
        return None
