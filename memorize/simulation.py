# memorize/simulation.py
# Concurrent random-play simulation of a MemoryGame.
# The engine has no locking of its own; every choose() below runs in a worker
# thread while holding one shared lock.

from __future__ import annotations

import asyncio
import random
import threading
from dataclasses import dataclass
from typing import Optional

from .emoji_game import EmojiMemoryGame
from .game import MemoryGame


@dataclass
class Stats:
    total_flips: int = 0
    successful_matches: int = 0
    ignored_flips: int = 0
    rounds: int = 0


# ----- tiny helpers -----

async def timeout_ms(milliseconds: float) -> None:
    await asyncio.sleep(milliseconds / 1000.0)

def board_to_string(game: MemoryGame) -> str:
    cells = []
    for card in game.cards:
        if card.is_matched:
            cells.append(f"[{card.content}]")
        elif card.is_face_up:
            cells.append(f" {card.content} ")
        else:
            cells.append(" ? ")
    return " ".join(cells)


# ---- adapter: run engine calls in threads under the caller's lock ----

def _flip(game: MemoryGame, lock: threading.Lock, card_id: int, stats: Stats) -> bool:
    """Choose card_id under lock; returns False without flipping once the game is finished."""
    with lock:
        if game.is_finished:
            return False
        before = game.card(card_id)
        starts_round = game.pending_card is None
        game.choose(card_id)
        stats.total_flips += 1

        if before is None or before.is_face_up or before.is_matched:
            stats.ignored_flips += 1
        elif starts_round:
            stats.rounds += 1
        elif game.card(card_id).is_matched:
            stats.successful_matches += 1
        return True


async def simulate(
    game: MemoryGame,
    *,
    players: int = 4,
    tries: int = 100,
    rng: Optional[random.Random] = None,
    min_delay_ms: float = 0.0,
    max_delay_ms: float = 0.0,
    lock: Optional[threading.Lock] = None,
) -> Stats:
    """Let several players flip random cards until they run out of tries or the game is finished."""
    rng = rng if rng is not None else random.Random()
    lock = lock if lock is not None else threading.Lock()
    stats = Stats()
    with lock:
        card_count = len(game)

    async def delay() -> None:
        await timeout_ms(min_delay_ms + rng.random() * (max_delay_ms - min_delay_ms))

    async def player() -> None:
        if card_count == 0:
            return
        for _ in range(tries):
            await delay()
            first = rng.randrange(card_count)
            if not await asyncio.to_thread(_flip, game, lock, first, stats):
                return

            await delay()
            second = rng.randrange(card_count)
            if not await asyncio.to_thread(_flip, game, lock, second, stats):
                return

    await asyncio.gather(*(player() for _ in range(players)))
    return stats


def play_to_completion(game: MemoryGame) -> int:
    """Match every remaining pair by id; returns the number of choose() calls made."""
    calls = 0
    for pair_index in range(game.pair_count):
        first_id, second_id = pair_index * 2, pair_index * 2 + 1
        # a leftover pending card can absorb the first flip; at most one retry
        for _ in range(2):
            if game.card(first_id).is_matched:
                break
            game.choose(first_id)
            game.choose(second_id)
            calls += 2
    return calls


def main() -> None:
    print("MEMORIZE - CONCURRENT SIMULATION")

    theme = EmojiMemoryGame()
    game = theme.model
    print(f"\nDealt {len(game)} cards ({game.pair_count} pairs)")
    print(board_to_string(game))

    players = 4
    tries = 25
    print(f"\nStarting simulation with {players} players, {tries} attempts each\n")
    stats = asyncio.run(simulate(game, players=players, tries=tries, max_delay_ms=2.0))

    print("SIMULATION COMPLETE")
    print(f"Total flips attempted: {stats.total_flips}")
    print(f"Rounds started: {stats.rounds}")
    print(f"Successful matches: {stats.successful_matches}")
    print(f"Ignored flips: {stats.ignored_flips}")
    print("\nBoard after simulation:")
    print(board_to_string(game))

    if not game.is_finished:
        calls = play_to_completion(game)
        print(f"\nCleared the rest of the board in {calls} more flips:")
        print(board_to_string(game))


if __name__ == "__main__":
    main()
