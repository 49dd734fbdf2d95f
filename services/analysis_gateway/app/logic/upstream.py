"""Single-shot calls to the upstream language model.

The API key is attached here and nowhere else. It is sent as a header, not a
query parameter, so request logging by the HTTP client never includes it.
"""
import logging
from typing import Any, Dict, Optional

import httpx

from ..config import GEMINI_API_URL, HTTP_TIMEOUT_SECONDS
from ..schemas.analysis import GenerationConfig

logger = logging.getLogger(__name__)


class UpstreamError(Exception):
    """The model call failed or returned no usable text."""


def extract_reply_text(envelope: Any) -> str:
    try:
        text = envelope["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError) as exc:
        raise UpstreamError("Invalid response from Gemini API") from exc
    if not isinstance(text, str) or not text.strip():
        raise UpstreamError("Empty response from Gemini API")
    return text


async def generate(
    prompt: str,
    api_key: str,
    generation: GenerationConfig,
    system_instruction: Optional[str] = None,
) -> str:
    """Send one prompt and return the model's raw text reply. No retries."""
    payload: Dict[str, Any] = {
        "contents": [{"parts": [{"text": prompt}]}],
        "generationConfig": generation.model_dump(by_alias=True),
    }
    if system_instruction:
        payload["systemInstruction"] = {"parts": [{"text": system_instruction}]}
    headers = {"Content-Type": "application/json", "x-goog-api-key": api_key}
    try:
        async with httpx.AsyncClient(timeout=HTTP_TIMEOUT_SECONDS) as client:
            r = await client.post(GEMINI_API_URL, json=payload, headers=headers)
    except httpx.HTTPError as exc:
        raise UpstreamError(f"Gemini API request failed: {exc.__class__.__name__}") from exc

    if r.status_code != 200:
        raise UpstreamError(f"Gemini API returned HTTP {r.status_code}")
    try:
        envelope = r.json()
    except ValueError as exc:
        raise UpstreamError("Gemini API returned a non-JSON body") from exc

    text = extract_reply_text(envelope)
    logger.debug("Gemini reply received (%d chars)", len(text))
    return text
