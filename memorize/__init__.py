# memorize/__init__.py
import logging

from .emoji_game import EMOJIS, EmojiMemoryGame
from .game import Card, MemoryGame

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = ["Card", "MemoryGame", "EmojiMemoryGame", "EMOJIS"]
