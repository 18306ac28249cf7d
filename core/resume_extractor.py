# core/resume_extractor.py
"""
Structured resume fields from a Gemini `generateContent` call.

The extractor never raises: any failure (missing key, network, HTTP status,
non-JSON answer, fields of the wrong shape) is logged and reported as None,
and the caller falls back to the rule-based parser.
"""
import json
import logging
import re
from functools import lru_cache
from typing import Any, Dict, Optional, Protocol
import httpx
from pydantic import ValidationError
from config.settings import settings
from model.resume import ParsedResume
from util.enums import ResumeExtractorBackend
from util.timing import timed

logger = logging.getLogger(__name__)

_FENCE_RE = re.compile(r"```(?:json)?\s*")

_PROMPT = """Extract structured information from the following resume text. Return ONLY valid JSON with no additional text or markdown formatting.

Resume Text:
{text}

Extract and return a JSON object with this exact structure:
{{
  "name": "Full name of the candidate",
  "email": "Email address",
  "phone": "Phone number",
  "location": "City, State or location",
  "summary": "Professional summary or objective",
  "skills": ["skill1", "skill2"],
  "experience": [
    {{"company": "Company name", "position": "Job title", "startDate": "Start date", "endDate": "End date or Present", "description": "Brief description of role"}}
  ],
  "education": [
    {{"institution": "School name", "degree": "Degree type", "field": "Field of study", "graduationDate": "Graduation date"}}
  ],
  "certifications": ["cert1"],
  "languages": ["language1"]
}}

If any field is not found, use an empty string for strings, empty array for arrays, or omit optional fields."""


class ResumeExtractor(Protocol):
    async def extract(self, text: str) -> Optional[ParsedResume]: ...


def _answer_text(data: Any) -> Optional[str]:
    if not isinstance(data, dict):
        return None
    candidates = data.get("candidates")
    if not isinstance(candidates, list) or not candidates:
        return None
    content = candidates[0].get("content") if isinstance(candidates[0], dict) else None
    parts = content.get("parts") if isinstance(content, dict) else None
    if not isinstance(parts, list):
        return None
    texts = [p["text"] for p in parts if isinstance(p, dict) and isinstance(p.get("text"), str)]
    return "".join(texts) or None


def parse_answer(answer: str) -> ParsedResume:
    """
    Model answer -> `ParsedResume`.
    Markdown fences are stripped and null values dropped so defaults apply.
    Raises ValueError (json) or ValidationError (shape).
    """
    payload = json.loads(_FENCE_RE.sub("", answer).strip())
    if not isinstance(payload, dict):
        raise ValueError("answer is not a JSON object")
    return ParsedResume.model_validate(
        {k: v for k, v in payload.items() if v is not None}
    )


class GeminiResumeExtractor:
    """
    `transport` lets tests swap the network for an `httpx.MockTransport`.
    """

    def __init__(
        self,
        *,
        api_key: str = settings.GEMINI_API_KEY,
        model: str = settings.GEMINI_EXTRACTION_MODEL,
        api_url: str = settings.GEMINI_API_URL,
        max_chars: int = settings.EXTRACTION_MAX_CHARS,
        timeout: float = settings.EXTRACTION_TIMEOUT_SECONDS,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._api_key = api_key
        self._model = model
        self._url = f"{api_url.rstrip('/')}/{model}:generateContent"
        self._max_chars = max_chars
        self._timeout = timeout
        self._transport = transport

    def _payload(self, text: str) -> Dict[str, Any]:
        return {
            "contents": [
                {"parts": [{"text": _PROMPT.format(text=text[: self._max_chars])}]}
            ],
            "generationConfig": {"responseMimeType": "application/json"},
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

    @staticmethod
    def _give_up(reason: str) -> None:
        logger.warning("extract.fallback reason=%s", reason)
        return None

    async def extract(self, text: str) -> Optional[ParsedResume]:
        if not text or not text.strip():
            return None
        if not self._api_key:
            return self._give_up("missing_api_key")

        try:
            with timed(
                logger,
                "extract.gemini",
                failure_level=logging.DEBUG,
                chars=min(len(text), self._max_chars),
            ):
                data = await self._request(text)
        except httpx.HTTPStatusError as e:
            return self._give_up(f"status_{e.response.status_code}")
        except Exception as e:
            return self._give_up(type(e).__name__)

        answer = _answer_text(data)
        if answer is None:
            return self._give_up("malformed_response")
        try:
            return parse_answer(answer)
        except ValidationError:
            return self._give_up("schema_mismatch")
        except ValueError:
            return self._give_up("invalid_json")


@lru_cache(maxsize=1)
def get_resume_extractor() -> Optional[ResumeExtractor]:
    """The configured model extractor, or None for rules only."""
    backend = (settings.RESUME_EXTRACTOR or "").lower()
    if backend == ResumeExtractorBackend.RULES:
        logger.info("extract.provider backend=rules")
        return None
    logger.info("extract.provider backend=%s", GeminiResumeExtractor.__name__)
    return GeminiResumeExtractor()
