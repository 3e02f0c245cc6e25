# game.py
# UI-agnostic engine for the "word scramble" game
# Rules:
# - A root word is picked at random from a list of start words.
# - The player makes other words out of its letters. Each letter of the
#   root can be used at most as many times as it appears in the root.
# - A guess must be new, spellable from the root, a real word, longer
#   than three letters and not the root itself.
# - Score = total number of letters across all accepted words.
# - Example: root="silkworm", guess="silk" -> accepted, +4
#
# This module is UI-agnostic (no input/print in core logic).
# Import WordScramble in a GUI, or run the CLI at the bottom for quick play.

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Sequence

from .providers import DictionaryLookup, WordSource

logger = logging.getLogger(__name__)

DEFAULT_ROOT_WORD = "silkworm"
DEFAULT_LANGUAGE = "en"
MIN_WORD_LENGTH = 4


# -------------------------
# Checks
# -------------------------

def normalize(raw: Optional[str]) -> str:
    return (raw or "").strip().lower()


def is_original(word: str, used_words: Sequence[str]) -> bool:
    word = word.lower()
    return all(u.lower() != word for u in used_words)


def is_possible(word: str, root: str) -> bool:
    """
    True if `word` can be spelled from the letters of `root`.
    Each letter of the root is used up once matched, so "silkworms" is not
    possible from "silkworm" (only one 's').
    """
    remaining = list(root)
    for letter in word:
        try:
            remaining.remove(letter)
        except ValueError:
            return False
    return True


def is_short(word: str) -> bool:
    return len(word) < MIN_WORD_LENGTH


def is_same_word(word: str, root: str) -> bool:
    return word == root


class Rejection(Enum):
    ALREADY_USED = ("Word used already", "Be more original")
    NOT_COMPOSABLE = ("Word not possible", "You can't spell that word from '{root}'!")
    NOT_RECOGNIZED = ("Word not recognized", "You can't just make them up, you know!")
    TOO_SHORT = ("Short word", "You can't play such a short word")
    EQUALS_ROOT = ("Same word", "The word you entered is the same as the starting one, be more creative!")

    @property
    def title(self) -> str:
        return self.value[0]

    def message(self, root: str = "") -> str:
        return self.value[1].format(root=root)


@dataclass
class GuessResult:
    valid: bool
    word: str = ""
    reason: Optional[Rejection] = None
    message: str = ""

    @property
    def title(self) -> str:
        return self.reason.title if self.reason else ""


def _reject(word: str, reason: Rejection, root: str) -> GuessResult:
    return GuessResult(valid=False, word=word, reason=reason, message=reason.message(root))


# -------------------------
# Game state
# -------------------------

@dataclass
class GameState:
    root_word: str = DEFAULT_ROOT_WORD
    used_words: List[str] = field(default_factory=list)  # newest first

    def start_round(self, candidates: Sequence[str], rng: Optional[random.Random] = None) -> str:
        """
        Pick a new root word uniformly from `candidates` and clear the guesses.
        Blank candidates are skipped; with nothing left the default is used.
        """
        pool = [normalize(c) for c in candidates if normalize(c)]
        self.root_word = (rng or random).choice(pool) if pool else DEFAULT_ROOT_WORD
        self.used_words = []
        return self.root_word

    def accept_guess(self, word: str) -> None:
        # caller has already validated the word
        self.used_words.insert(0, word)

    def score(self) -> int:
        return sum(len(w) for w in self.used_words)


def validate(raw: Optional[str], state: GameState, dictionary: DictionaryLookup,
             language: str = DEFAULT_LANGUAGE) -> GuessResult:
    """
    Run the guess through the checks in order; the first failure wins.
    Never mutates `state`.
    """
    word = normalize(raw)
    root = state.root_word

    if not is_original(word, state.used_words):
        return _reject(word, Rejection.ALREADY_USED, root)
    if not is_possible(word, root):
        return _reject(word, Rejection.NOT_COMPOSABLE, root)
    if not dictionary.is_recognized(word, language):
        return _reject(word, Rejection.NOT_RECOGNIZED, root)
    if is_short(word):
        return _reject(word, Rejection.TOO_SHORT, root)
    if is_same_word(word, root):
        return _reject(word, Rejection.EQUALS_ROOT, root)

    # nothing to say about an empty guess
    if not word:
        return GuessResult(valid=False, word=word)

    return GuessResult(valid=True, word=word)


# -------------------------
# Game Engine
# -------------------------

@dataclass
class WordScramble:
    source: WordSource
    dictionary: DictionaryLookup
    language: str = DEFAULT_LANGUAGE
    rng: Optional[random.Random] = None

    state: GameState = field(default_factory=GameState, init=False)
    status: str = field(default="idle", init=False)  # "idle" | "playing"

    # ------------- lifecycle -------------

    def new_game(self) -> "WordScramble":
        """
        Start a new round with a fresh root word.
        Raises StartWordsMissing if the word source has no resource to read.
        """
        candidates = self.source.load_candidates()
        if not candidates:
            logger.warning("[!] No start words available; using '%s'", DEFAULT_ROOT_WORD)
        root = self.state.start_round(candidates, self.rng)
        self.status = "playing"
        logger.info("New round with root word '%s'", root)
        return self

    # ------------- gameplay -------------

    def guess(self, raw: str) -> GuessResult:
        if self.status != "playing":
            return GuessResult(valid=False, message="Start a new game first.")

        result = validate(raw, self.state, self.dictionary, self.language)
        if result.valid:
            self.state.accept_guess(result.word)
            logger.debug("Accepted '%s' (score %d)", result.word, self.score)
        elif result.reason is not None:
            logger.debug("Rejected '%s': %s", result.word, result.reason.name)
        return result

    # ------------- accessors -------------

    @property
    def root_word(self) -> str:
        return self.state.root_word

    @property
    def score(self) -> int:
        return self.state.score()

    def history(self) -> List[str]:
        return list(self.state.used_words)


# -------------------------
# Optional: tiny CLI for quick testing
# -------------------------

def _cli(argv: Optional[Sequence[str]] = None):
    """
    Quick terminal game for manual testing (kept minimal):
    - Run:  python -m wordscramble [start_words.txt] [--online-words]
    - Guesses are checked online unless $WORD_LIST points at a word list.
    - Type :new to restart, :quit (or Ctrl-D) to stop.
    """
    import argparse
    import os
    import sys
    from .providers import (FileWordSource, OnlineDictionary, OnlineWordSource,
                            StartWordsMissing, WordListDictionary)

    ap = argparse.ArgumentParser(prog="wordscramble", description="Make words out of a root word")
    ap.add_argument("start_words", nargs="?", default=None,
                    help="newline-delimited start words (default: bundled list)")
    ap.add_argument("--online-words", action="store_true",
                    help="fetch root words from random-word-api instead of a file")
    args = ap.parse_args(argv)

    logging.basicConfig(level=logging.WARNING, format="%(levelname)s: %(message)s")

    if os.environ.get("WORD_LIST"):
        dictionary = WordListDictionary.from_env()
    else:
        dictionary = OnlineDictionary(timeout=5)
    if args.online_words:
        source = OnlineWordSource(dictionary)
    else:
        source = FileWordSource(args.start_words)
    engine = WordScramble(source=source, dictionary=dictionary)

    def start():
        try:
            engine.new_game()
        except StartWordsMissing as e:
            sys.exit(f"[!] {e}")
        print(f"Make words from: {engine.root_word.upper()}")

    start()
    while True:
        try:
            g = input("Your word: ")
        except EOFError:
            break
        if g.strip() == ":quit":
            break
        if g.strip() == ":new":
            start()
            continue

        res = engine.guess(g)
        if not res.valid:
            if res.reason is not None:
                print(f"[!] {res.title}: {res.message}")
            continue
        print(f"+{len(res.word)} | Total score: {engine.score}")

    print("Words:")
    for w in engine.history():
        print(f"{len(w):2d}  {w}")
    print(f"Your total score is {engine.score}")


if __name__ == "__main__":
    _cli()
