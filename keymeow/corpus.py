#!/usr/bin/env python3
"""
Character interning and ngram frequencies.

A Corpus maps characters to small integer symbols. Characters listed in the
same group (for example 'a' and 'A') share one symbol; symbol 0 is reserved
for the empty slot. Frequencies of unigrams, bigrams and trigrams are kept in
numpy arrays indexed by symbol.
"""

import logging
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence

import numpy as np
import pandas as pd

logger = logging.getLogger(__name__)

EMPTY_CHAR = '\0'
"""Character standing for an unassigned slot."""

EMPTY_SYMBOL = 0
"""Interned form of EMPTY_CHAR, never assigned to a real character."""


def default_char_list() -> List[List[str]]:
    """
    Character groups for an English letter corpus.

    Returns:
        Lowercase/uppercase pairs for a-z followed by the common punctuation
        keys with their shifted characters
    """
    char_list = [[c, c.upper()] for c in 'abcdefghijklmnopqrstuvwxyz']
    char_list.extend([
        [',', '<'],
        ['.', '>'],
        ['/', '?'],
        ["'", '"'],
        [';', ':'],
    ])
    return char_list


class Corpus:
    """Symbol interner with ngram frequency counts."""

    def __init__(self, char_list: Sequence[Sequence[str]]):
        """
        Initialize an empty corpus over a list of character groups.

        Args:
            char_list: Groups of characters; each group becomes one symbol,
                decoded back to its first character

        Raises:
            ValueError: If a group is empty, an entry is not a single
                character, or a character appears in two groups
        """
        self.char_list: List[List[str]] = [[EMPTY_CHAR]]
        self.c2i: Dict[str, int] = {EMPTY_CHAR: EMPTY_SYMBOL}

        for group in char_list:
            group = list(group)
            if not group:
                raise ValueError("Character groups cannot be empty")
            symbol = len(self.char_list)
            for c in group:
                if not isinstance(c, str) or len(c) != 1:
                    raise ValueError(f"Corpus entries must be single characters, got {c!r}")
                if c in self.c2i:
                    raise ValueError(f"Character {c!r} appears in more than one group")
                self.c2i[c] = symbol
            self.char_list.append(group)

        size = len(self.char_list)
        self.chars = np.zeros(size, dtype=np.float64)
        self.bigrams = np.zeros((size, size), dtype=np.float64)
        self.trigrams = np.zeros((size, size, size), dtype=np.float64)

    @classmethod
    def with_char_list(cls, char_list: Sequence[Sequence[str]]) -> 'Corpus':
        return cls(char_list)

    def __len__(self) -> int:
        """Number of symbols, the empty symbol included."""
        return len(self.char_list)

    def corpus_char(self, c: Optional[str]) -> int:
        """
        Intern a character.

        None, EMPTY_CHAR and characters outside the corpus all map to
        EMPTY_SYMBOL.
        """
        if c is None:
            return EMPTY_SYMBOL
        symbol = self.c2i.get(c)
        if symbol is None:
            logger.debug(f"Character {c!r} is not in the corpus, using the empty symbol")
            return EMPTY_SYMBOL
        return symbol

    def uncorpus_unigram(self, symbol: int) -> str:
        """Decode a symbol to the first character of its group."""
        if not 0 <= symbol < len(self.char_list):
            raise ValueError(f"Symbol {symbol} is outside the corpus (size {len(self.char_list)})")
        return self.char_list[symbol][0]

    def symbols(self, text: Iterable[str]) -> List[int]:
        """Intern a sequence of characters; unknown characters become EMPTY_SYMBOL."""
        return [self.c2i.get(c, EMPTY_SYMBOL) for c in text]

    def add_text(self, text: str) -> None:
        """
        Count unigram, bigram and trigram occurrences in a text.

        Ngrams touching a character outside the corpus are skipped, so the
        empty symbol never accumulates frequency.
        """
        symbols = self.symbols(text)
        for i, a in enumerate(symbols):
            if a == EMPTY_SYMBOL:
                continue
            self.chars[a] += 1
            if i + 1 < len(symbols) and symbols[i + 1] != EMPTY_SYMBOL:
                b = symbols[i + 1]
                self.bigrams[a, b] += 1
                if i + 2 < len(symbols) and symbols[i + 2] != EMPTY_SYMBOL:
                    self.trigrams[a, b, symbols[i + 2]] += 1

    def add_file(self, filepath: str) -> None:
        """
        Count ngrams from a UTF-8 text file.

        Raises:
            FileNotFoundError: If the file doesn't exist
        """
        path = Path(filepath)
        if not path.exists():
            raise FileNotFoundError(f"Corpus text file not found: {filepath}")
        text = path.read_text(encoding='utf-8')
        self.add_text(text)
        logger.info(f"Added {len(text)} characters from {filepath} to the corpus")

    def add_frequency_csv(self, filepath: str,
                          ngram_col: str = 'ngram',
                          count_col: str = 'count') -> int:
        """
        Add precomputed ngram counts from a CSV file.

        Each row holds a unigram, bigram or trigram and its count. Rows whose
        ngram has another length, or touches a character outside the corpus,
        are skipped.

        Args:
            filepath: Path to CSV file
            ngram_col: Name of the ngram column
            count_col: Name of the count column

        Returns:
            Number of rows added

        Raises:
            FileNotFoundError: If the file doesn't exist
            ValueError: If required columns are missing
        """
        if not Path(filepath).exists():
            raise FileNotFoundError(f"Frequency file not found: {filepath}")

        df = pd.read_csv(filepath, dtype=str, keep_default_na=False)
        missing_columns = [col for col in (ngram_col, count_col) if col not in df.columns]
        if missing_columns:
            raise ValueError(
                f"Missing required columns in {filepath}: {missing_columns}. "
                f"Available columns: {list(df.columns)}"
            )

        added = 0
        for ngram, count in zip(df[ngram_col], pd.to_numeric(df[count_col], errors='coerce')):
            if pd.isna(count) or not 1 <= len(ngram) <= 3:
                continue
            symbols = tuple(self.symbols(ngram))
            if EMPTY_SYMBOL in symbols:
                continue
            if len(symbols) == 1:
                self.chars[symbols] += count
            elif len(symbols) == 2:
                self.bigrams[symbols] += count
            else:
                self.trigrams[symbols] += count
            added += 1

        logger.info(f"Added {added} ngram counts from {filepath} to the corpus")
        return added
