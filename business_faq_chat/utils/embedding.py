import math
from typing import List, Sequence

# Vectors from different versions are not comparable
EMBEDDING_VERSION = "letterfreq-v1"
EMBEDDING_DIM = 100

_ORD_A = ord("a")
_ORD_Z = ord("z")


def embed_text(text: str) -> List[float]:
    """
    Letter-frequency embedding used for demo-grade retrieval.

    Counts a-z occurrences (case-folded) into the first 26 of
    EMBEDDING_DIM buckets and L2-normalizes. Buckets 26..99 are always
    zero. Text without a-z letters maps to the all-zero vector.
    """
    vector = [0.0] * EMBEDDING_DIM

    for ch in text.lower():
        code = ord(ch)
        if _ORD_A <= code <= _ORD_Z:
            vector[code - _ORD_A] += 1.0

    magnitude = math.sqrt(sum(v * v for v in vector))
    if magnitude == 0:
        return vector
    return [v / magnitude for v in vector]


def cosine_sim(v1: Sequence[float], v2: Sequence[float]) -> float:
    if not v1 or not v2 or len(v1) != len(v2):
        return 0.0

    dot = sum(a * b for a, b in zip(v1, v2))

    norm1 = math.sqrt(sum(a * a for a in v1))
    norm2 = math.sqrt(sum(b * b for b in v2))

    if norm1 == 0 or norm2 == 0:
        return 0.0

    # float error can push identical vectors a hair past 1
    return max(-1.0, min(1.0, dot / (norm1 * norm2)))
