from __future__ import annotations

import re
from typing import Iterator, List

# Runs of sentence terminators
_SENTENCE_SPLIT = re.compile(r"[.!?]+")

DEFAULT_MAX_CHUNK_CHARS = 1000


def split_sentences(text: str) -> List[str]:
    """Split on sentence terminators, trimming and dropping empty fragments."""
    return [s.strip() for s in _SENTENCE_SPLIT.split(text) if s.strip()]


class TextChunks:
    """
    Lazy, restartable view over the chunks of a text.

    Every call to ``iter()`` re-runs the greedy accumulation, so the same
    object can be consumed more than once.
    """

    def __init__(self, text: str, max_chunk_chars: int = DEFAULT_MAX_CHUNK_CHARS):
        if max_chunk_chars <= 0:
            raise ValueError("max_chunk_chars must be positive")
        self.text = text
        self.max_chunk_chars = max_chunk_chars

    def __iter__(self) -> Iterator[str]:
        current = ""
        for sentence in split_sentences(self.text):
            candidate = f"{current} {sentence}" if current else sentence
            if len(candidate) > self.max_chunk_chars and current:
                yield current
                current = sentence
            else:
                current = candidate

        if current:
            yield current

    def first(self) -> str | None:
        return next(iter(self), None)


def chunk_text(text: str, max_chunk_chars: int = DEFAULT_MAX_CHUNK_CHARS) -> TextChunks:
    return TextChunks(text, max_chunk_chars)
