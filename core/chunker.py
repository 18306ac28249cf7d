# core/chunker.py
import re
from typing import List
from core.entities import TextChunk

_WORD_RE = re.compile(r"\S+")


def chunk_text(
    text: str, window_words: int = 500, overlap_words: int = 50
) -> List[TextChunk]:
    """
    Split `text` into overlapping windows of whitespace-delimited words.

    Windows start every `window_words - overlap_words` words. A window's span
    runs from its first word's offset to its last word's end, recorded while
    scanning, so repeated passages anchor to the right place. Text with no
    more than one window of words, blank text included, gives a single chunk
    over the whole text.
    """
    if window_words <= 0:
        raise ValueError("window_words must be positive")
    if overlap_words < 0 or overlap_words >= window_words:
        raise ValueError("overlap_words must be in [0, window_words)")

    text = text or ""
    words = list(_WORD_RE.finditer(text))
    if len(words) <= window_words:
        joined = " ".join(m.group() for m in words)
        return [TextChunk(text=joined, start_char=0, end_char=len(text))]

    stride = window_words - overlap_words
    chunks: List[TextChunk] = []
    for i in range(0, len(words), stride):
        window = words[i : i + window_words]
        chunks.append(
            TextChunk(
                text=" ".join(m.group() for m in window),
                start_char=window[0].start(),
                end_char=window[-1].end(),
            )
        )
        if i + window_words >= len(words):
            break
    return chunks
