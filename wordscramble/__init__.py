from .game import (DEFAULT_ROOT_WORD, GameState, GuessResult, Rejection, WordScramble,
                   normalize, validate)
from .providers import (DictionaryLookup, FileWordSource, OnlineDictionary, OnlineWordSource,
                        StartWordsMissing, WordListDictionary, WordSource)

__all__ = [
    "DEFAULT_ROOT_WORD", "GameState", "GuessResult", "Rejection", "WordScramble",
    "normalize", "validate",
    "DictionaryLookup", "FileWordSource", "OnlineDictionary", "OnlineWordSource",
    "StartWordsMissing", "WordListDictionary", "WordSource",
]
