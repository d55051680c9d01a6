# memorize/emoji_game.py
from __future__ import annotations
import random
from typing import Callable, Dict, List, Optional, Sequence, Tuple, Union

from .config import get_config
from .game import Card, MemoryGame

EMOJIS: Tuple[str, ...] = (
    "🚗", "✈️", "🛵", "🚢", "🚅", "🚉",
    "🛴", "🚲", "🛺", "🚨", "🚔", "🚍",
    "🚘", "🚖", "🚡", "🚠", "🚟", "🚃",
    "🚋", "🚞", "🚝", "🚄", "🚈", "🚂",
    "🚆", "🚇", "🚊",
)

Listener = Callable[["EmojiMemoryGame"], None]


class EmojiMemoryGame:
    """
    A MemoryGame[str] dealt from an emoji theme.

    Every forwarded mutator notifies subscribers afterwards, whether or not
    the engine changed anything, so a presentation layer can simply re-read
    ``cards`` or ``snapshot()``.
    """

    def __init__(
        self,
        pair_count: Optional[int] = None,
        *,
        emojis: Sequence[str] = EMOJIS,
        rng: Optional[random.Random] = None,
    ):
        # environment is only consulted for the defaults actually needed
        if pair_count is None:
            pair_count = get_config().pairs
        if pair_count < 0:
            raise ValueError("pair_count must be non-negative")
        if rng is None:
            seed = get_config().seed
            if seed is not None:
                rng = random.Random(seed)

        self._emojis = tuple(emojis)
        self._listeners: List[Listener] = []
        self._model: MemoryGame[str] = MemoryGame(
            min(pair_count, len(self._emojis)),
            self._emojis.__getitem__,
            rng=rng,
        )

    @property
    def cards(self) -> Tuple[Card[str], ...]:
        return self._model.cards

    @property
    def model(self) -> MemoryGame[str]:
        return self._model

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _changed(self) -> None:
        for listener in list(self._listeners):
            listener(self)

    # ----- intents -----

    def choose(self, card: Union[int, Card[str]]) -> None:
        self._model.choose(card)
        self._changed()

    def shuffle(self) -> None:
        self._model.shuffle()
        self._changed()

    def restart(self) -> None:
        self._model.restart()
        self._changed()

    def snapshot(self) -> Dict:
        """JSON-serializable view of the current deal."""
        return {
            "pairs": self._model.pair_count,
            "finished": self._model.is_finished,
            "cards": [
                {
                    "id": card.id,
                    "content": card.content,
                    "face_up": card.is_face_up,
                    "matched": card.is_matched,
                }
                for card in self._model.cards
            ],
        }
