# util/functions.py
from typing import Iterable, List
from util.constants import ELLIPSIS
from util.enums import ErrorMessage
from util.errors import AppError


def clip_chars(text: str, max_chars: int = 200) -> str:
    """
    - Keep the first `max_chars` characters of `text`.
    - Appends "..." only when something was cut.
    """
    if len(text) <= max_chars:
        return text
    return text[:max_chars] + ELLIPSIS


def clean_terms(terms: Iterable[object] | None) -> List[str]:
    """Drop blanks and non-strings; keep order and original casing."""
    out: List[str] = []
    for t in terms or []:
        if isinstance(t, str) and t.strip():
            out.append(t.strip())
    return out


def contains_term(required: str, candidates: Iterable[str]) -> bool:
    # Asymmetric: a candidate "Python 3.11" satisfies required "python".
    needle = required.lower()
    return any(needle in c.lower() for c in candidates)


def require_positive_int(value: object, default: int) -> int:
    """`value` when it is a positive int, `default` when it is None."""
    if value is None:
        return default
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise AppError.of(ErrorMessage.INVALID_RESULT_SIZE)
    return value
