import logging
import os
import time
from importlib import resources
from pathlib import Path
from typing import Iterable, List, Optional, Protocol, Set, Tuple, Union

import requests

logger = logging.getLogger(__name__)

DICTIONARY_API = "https://api.dictionaryapi.dev/api/v2/entries"
RANDOM_WORD_API = "https://random-word-api.herokuapp.com/word"

# Bundled start-words resource, overridable with WORDSCRAMBLE_START_WORDS
START_WORDS_FILE = resources.files("wordscramble") / "start.txt"
SYSTEM_WORD_LIST = Path("/usr/share/dict/words")


class StartWordsMissing(FileNotFoundError):
    """The start-words resource could not be found; no round can start."""


class DictionaryLookup(Protocol):
    def is_recognized(self, word: str, language: str = "en") -> bool:
        ...


class WordSource(Protocol):
    def load_candidates(self) -> List[str]:
        ...


def default_start_words_path():
    p = os.environ.get("WORDSCRAMBLE_START_WORDS")
    if p:
        return Path(p)
    return START_WORDS_FILE


# -------------------------
# Dictionaries
# -------------------------

class OnlineDictionary:
    """
    Spell-check backed by the free dictionaryapi.dev service.
    200 means the word has an entry, 404 means it doesn't. Anything else
    (timeouts, 5xx, connection errors) counts as "not recognized" for this
    attempt but is not cached, so the same word can be retried later.
    """

    def __init__(self, timeout: float = 5, *, session: Optional[requests.Session] = None):
        if timeout <= 0:
            raise ValueError("timeout must be positive")
        self.timeout = timeout
        self.session = session or requests.Session()
        # simple in-memory caches for lookup results (per instance)
        self._valid_cache: Set[Tuple[str, str]] = set()
        self._invalid_cache: Set[Tuple[str, str]] = set()

    def is_recognized(self, word: str, language: str = "en") -> bool:
        if not word:
            return False
        key = (language, word.lower())
        if key in self._valid_cache:
            return True
        if key in self._invalid_cache:
            return False
        try:
            response = self.session.get(
                f"{DICTIONARY_API}/{language}/{key[1]}",
                timeout=self.timeout
            )
        except requests.exceptions.Timeout:
            logger.warning("[!] Timeout while looking up word: %s", word)
            return False
        except requests.exceptions.RequestException as e:
            logger.warning("[!] Network error while looking up %s: %s", word, e)
            return False

        if response.status_code == 200:
            self._valid_cache.add(key)
            return True
        if response.status_code == 404:
            self._invalid_cache.add(key)
            return False

        logger.warning("[!] Unexpected status %s for word: %s", response.status_code, word)
        return False

    def clear_cache(self):
        self._valid_cache.clear()
        self._invalid_cache.clear()

    def close(self):
        self.session.close()


class WordListDictionary:
    """Offline English dictionary over a plain word list."""

    language = "en"

    def __init__(self, words: Iterable[str]):
        self._words: Set[str] = {w.strip().lower() for w in words if w.strip()}

    def __len__(self) -> int:
        return len(self._words)

    @classmethod
    def from_file(cls, path: Union[Path, str]) -> "WordListDictionary":
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Word list file not found: {path}")
        with open(path, "r", encoding="utf-8", errors="ignore") as f:
            return cls(f)

    @classmethod
    def from_env(cls) -> "WordListDictionary":
        """Load from $WORD_LIST, or the system word list if that's unset."""
        p = os.environ.get("WORD_LIST")
        if p:
            return cls.from_file(p)
        if SYSTEM_WORD_LIST.exists():
            return cls.from_file(SYSTEM_WORD_LIST)
        raise FileNotFoundError(
            "No word list found. Set WORD_LIST to a path or install a system dict "
            f"(e.g. {SYSTEM_WORD_LIST})."
        )

    def is_recognized(self, word: str, language: str = "en") -> bool:
        if not word or language != self.language:
            return False
        return word.lower() in self._words


# -------------------------
# Word sources
# -------------------------

class FileWordSource:
    """Candidate root words from a newline-delimited text file."""

    def __init__(self, path: Union[Path, str, None] = None):
        self.path = Path(path) if path is not None else default_start_words_path()

    def load_candidates(self) -> List[str]:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            raise StartWordsMissing(f"Can't find start words file: {self.path}") from None
        return [line.strip().lower() for line in raw.splitlines() if line.strip()]




class OnlineWordSource:
    """
    Root words from random-word-api, filtered through a dictionary.
    The API happily returns obscure or made-up words, so only the ones
    `dictionary` confirms are offered. A batch with nothing usable is
    fetched again, up to `attempts` times with a growing pause; after
    that an empty list is returned and the game uses its default word.
    """

    def __init__(self, dictionary: DictionaryLookup, length: int = 8, count: int = 10,
                 timeout: float = 5, *, attempts: int = 3, pause: float = 1.0,
                 language: str = "en"):
        if length <= 0 or count <= 0 or attempts <= 0:
            raise ValueError("length, count and attempts must be positive")
        self.dictionary = dictionary
        self.length = length
        self.count = count
        self.timeout = timeout
        self.attempts = attempts
        self.pause = pause
        self.language = language

    def _fetch(self) -> List[str]:
        response = requests.get(
            RANDOM_WORD_API,
            params={"length": self.length, "number": self.count},
            timeout=self.timeout
        )
        response.raise_for_status()
        data = response.json()
        if not isinstance(data, list):
            raise TypeError(f"expected a list of words, got {type(data).__name__}")
        return [w.strip().lower() for w in data if isinstance(w, str) and w.strip()]

    def load_candidates(self) -> List[str]:
        for attempt in range(1, self.attempts + 1):
            try:
                fetched = self._fetch()
            except requests.exceptions.RequestException as e:
                logger.warning("[!] Couldn't fetch start words (%d/%d): %s", attempt, self.attempts, e)
            except (ValueError, TypeError) as e:
                logger.warning("[!] Unusable start words payload (%d/%d): %s", attempt, self.attempts, e)
            else:
                words = [w for w in fetched if self.dictionary.is_recognized(w, self.language)]
                if words:
                    return words
                logger.warning("[!] None of %d fetched start words are in the dictionary (%d/%d)",
                               len(fetched), attempt, self.attempts)

            if attempt < self.attempts:
                time.sleep(self.pause * attempt)

        return []
