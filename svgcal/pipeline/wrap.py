from __future__ import annotations

import re
from itertools import islice
from typing import Iterator, List

from ..config import NOTE_MAX_LINES, NOTE_WRAP_LENGTH


SENTENCE_BREAK = re.compile(r"[.!?]+")
TERMINALS = (".", "!", "?")


def split_sentences(text: str) -> List[str]:
    pieces = (piece.strip() for piece in SENTENCE_BREAK.split(text))
    return [piece for piece in pieces if piece]


def _pack_sentences(sentences: List[str], max_line_length: int) -> Iterator[str]:
    current = ""
    for sentence in sentences:
        if not sentence.endswith(TERMINALS):
            sentence += "."
        if not current:
            current = sentence
        elif len(f"{current} {sentence}") <= max_line_length:
            current = f"{current} {sentence}"
        else:
            yield current
            current = sentence
    if current:
        yield current


def _pack_words(text: str, max_line_length: int) -> Iterator[str]:
    current: List[str] = []
    for word in text.split():
        if current and len(" ".join(current + [word])) > max_line_length:
            yield " ".join(current)
            current = [word]
        else:
            current.append(word)
    if current:
        yield " ".join(current)


def wrap(text: str, max_line_length: int) -> Iterator[str]:
    """
    Break note text into display lines of at most max_line_length characters.

    Whole sentences are kept together when the text has more than one;
    otherwise the text is wrapped word by word. A sentence or word longer
    than the limit gets a line of its own and is never split.
    """
    sentences = split_sentences(text)
    if len(sentences) > 1:
        return _pack_sentences(sentences, max_line_length)
    return _pack_words(text, max_line_length)


def note_lines(
    text: str,
    max_line_length: int = NOTE_WRAP_LENGTH,
    max_lines: int = NOTE_MAX_LINES,
) -> List[str]:
    # lines past max_lines would run into the weekday header
    return list(islice(wrap(text, max_line_length), max_lines))
