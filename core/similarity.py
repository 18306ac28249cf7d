# core/similarity.py
import math
from typing import Optional
import numpy as np
from util.types import VectorLike


def cosine_similarity(a: Optional[VectorLike], b: Optional[VectorLike]) -> float:
    """
    Cosine of the angle between `a` and `b`, clamped to [-1, 1].

    Total function: absent vectors, differing lengths, empty or non-numeric
    input, a zero norm, or a non-finite result all give 0.0.
    """
    if a is None or b is None:
        return 0.0
    try:
        va = np.asarray(a, dtype=np.float64)
        vb = np.asarray(b, dtype=np.float64)
    except (TypeError, ValueError):
        return 0.0
    if va.ndim != 1 or va.shape != vb.shape or va.size == 0:
        return 0.0

    dot = float(va @ vb)
    norm_a = math.sqrt(float(va @ va))
    norm_b = math.sqrt(float(vb @ vb))
    if norm_a == 0.0 or norm_b == 0.0:
        return 0.0

    sim = dot / (norm_a * norm_b)
    if not math.isfinite(sim):
        return 0.0
    return max(-1.0, min(1.0, sim))
