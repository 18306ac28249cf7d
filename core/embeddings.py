# core/embeddings.py
import asyncio
import re
from collections import Counter
from functools import lru_cache
from typing import Any, Dict, List, Optional, Protocol
import httpx
import numpy as np
from config.settings import settings
from util.enums import EmbeddingBackend
from util.timing import timed
import logging

logger = logging.getLogger(__name__)

_TOKEN_RE = re.compile(r"\b\w+\b")


class EmbeddingProvider(Protocol):
    """Anything that turns text into a fixed-dimension vector without raising."""

    dimension: int

    async def embed(self, text: str) -> List[float]: ...


def zero_vector(dimension: int) -> List[float]:
    return [0.0] * dimension


def fallback_embedding(
    text: str, dimension: int = 768, vocab_size: int = 100
) -> List[float]:
    """
    Deterministic bag-of-words vector used when no model is reachable.

    The `vocab_size` most frequent tokens (ties in first-seen order) are laid
    cyclically over `dimension` slots, each slot holding its token's count,
    then the vector is L2-normalized.
    """
    tokens = _TOKEN_RE.findall((text or "").lower())
    if not tokens:
        return zero_vector(dimension)

    ranked = Counter(tokens).most_common(vocab_size)
    counts = np.array([c for _, c in ranked], dtype=np.float64)
    vec = np.resize(counts, dimension)

    norm = float(np.linalg.norm(vec))
    if norm == 0.0:
        return zero_vector(dimension)
    return (vec / norm).tolist()


def _valid_vector(values: Any, dimension: int) -> Optional[List[float]]:
    if not isinstance(values, list) or len(values) != dimension:
        return None
    try:
        vec = [float(v) for v in values]
    except (TypeError, ValueError):
        return None
    if not all(np.isfinite(vec)):
        return None
    return vec


class LocalFrequencyEmbedder:
    """Offline provider: always answers with the deterministic fallback."""

    def __init__(
        self,
        dimension: int = settings.EMBEDDING_DIM,
        vocab_size: int = settings.FALLBACK_VOCAB_SIZE,
    ) -> None:
        self.dimension = dimension
        self._vocab = vocab_size

    async def embed(self, text: str) -> List[float]:
        if not text or not text.strip():
            return zero_vector(self.dimension)
        return fallback_embedding(text, self.dimension, self._vocab)


class _FallbackMixin:
    dimension: int
    _vocab: int

    def _fallback(self, text: str, reason: str) -> List[float]:
        # reason only, never the text itself
        logger.warning("embed.fallback provider=%s reason=%s", type(self).__name__, reason)
        return fallback_embedding(text, self.dimension, self._vocab)


class GeminiEmbedder(_FallbackMixin):
    """
    Google Generative Language `embedContent` over HTTP.

    `transport` lets tests swap the network for an `httpx.MockTransport`.
    """

    def __init__(
        self,
        *,
        api_key: str = settings.GEMINI_API_KEY,
        model: str = settings.GEMINI_EMBEDDING_MODEL,
        api_url: str = settings.GEMINI_API_URL,
        dimension: int = settings.EMBEDDING_DIM,
        max_chars: int = settings.EMBEDDING_MAX_CHARS,
        timeout: float = settings.EMBEDDING_TIMEOUT_SECONDS,
        vocab_size: int = settings.FALLBACK_VOCAB_SIZE,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.dimension = dimension
        self._api_key = api_key
        self._model = model
        self._url = f"{api_url.rstrip('/')}/{model}:embedContent"
        self._max_chars = max_chars
        self._timeout = timeout
        self._vocab = vocab_size
        self._transport = transport

    def _payload(self, text: str) -> Dict[str, Any]:
        return {
            "model": f"models/{self._model}",
            "content": {"parts": [{"text": text[: self._max_chars]}]},
        }

    async def _request(self, text: str) -> Dict[str, Any]:
        async with httpx.AsyncClient(
            timeout=self._timeout, transport=self._transport
        ) as client:
            r = await client.post(
                self._url,
                headers={
                    "x-goog-api-key": self._api_key,
                    "content-type": "application/json",
                },
                json=self._payload(text),
            )
            r.raise_for_status()
            return r.json()

    async def embed(self, text: str) -> List[float]:
        if not text or not text.strip():
            return zero_vector(self.dimension)
        if not self._api_key:
            return self._fallback(text, "missing_api_key")

        try:
            with timed(
                logger,
                "embed.gemini",
                failure_level=logging.DEBUG,
                chars=min(len(text), self._max_chars),
            ):
                data = await self._request(text)
        except httpx.HTTPStatusError as e:
            return self._fallback(text, f"status_{e.response.status_code}")
        except Exception as e:
            return self._fallback(text, type(e).__name__)

        node = data.get("embedding") if isinstance(data, dict) else None
        values = node.get("values") if isinstance(node, dict) else None
        vec = _valid_vector(values, self.dimension)
        if vec is None:
            return self._fallback(text, "malformed_response")
        return vec


@lru_cache(maxsize=1)
def _load_sentence_model(name: str):
    """
    Lazy-load the local sentence embedding model, once per process.
    """
    from sentence_transformers import SentenceTransformer

    with timed(logger, "embed.model.load", failure_level=logging.DEBUG, model=name):
        model = SentenceTransformer(name, device="cpu")
    return model


class SentenceTransformerEmbedder(_FallbackMixin):
    """Local model; encoding runs in a worker thread off the event loop."""

    def __init__(
        self,
        model_name: str = settings.LOCAL_EMBEDDING_MODEL_NAME,
        dimension: int = settings.EMBEDDING_DIM,
        max_chars: int = settings.EMBEDDING_MAX_CHARS,
        vocab_size: int = settings.FALLBACK_VOCAB_SIZE,
    ) -> None:
        self.dimension = dimension
        self._model_name = model_name
        self._max_chars = max_chars
        self._vocab = vocab_size

    def _encode(self, text: str) -> List[float]:
        model = _load_sentence_model(self._model_name)
        vec = model.encode(
            [text[: self._max_chars]],
            convert_to_numpy=True,
            normalize_embeddings=True,
        )[0]
        return vec.astype(np.float64, copy=False).tolist()

    async def embed(self, text: str) -> List[float]:
        if not text or not text.strip():
            return zero_vector(self.dimension)
        try:
            with timed(
                logger, "embed.local", failure_level=logging.DEBUG, model=self._model_name
            ):
                values = await asyncio.to_thread(self._encode, text)
        except Exception as e:
            return self._fallback(text, type(e).__name__)

        vec = _valid_vector(values, self.dimension)
        if vec is None:
            return self._fallback(text, "dimension_mismatch")
        return vec


@lru_cache(maxsize=1)
def get_embedder() -> EmbeddingProvider:
    backend = (settings.EMBEDDING_BACKEND or "").lower()
    if backend == EmbeddingBackend.SENTENCE_TRANSFORMERS:
        provider: EmbeddingProvider = SentenceTransformerEmbedder()
    elif backend == EmbeddingBackend.LOCAL:
        provider = LocalFrequencyEmbedder()
    else:
        provider = GeminiEmbedder()
    logger.info("embed.provider backend=%s dim=%d", type(provider).__name__, provider.dimension)
    return provider
