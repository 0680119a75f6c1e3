import json
import logging
from typing import Any, Optional, Union

import httpx
from pydantic import BaseModel

from clearwrite.errors import UpstreamError

logger = logging.getLogger(__name__)


class Generated(BaseModel):
    text: str


class MalformedResponse(BaseModel):
    reason: str = "missing candidates[0].content.parts[0].text"


GenerationResult = Union[Generated, MalformedResponse]


def _first(value: Any, key: str) -> Any:
    """Return ``value[key][0]`` when that shape is present, else ``None``."""
    if not isinstance(value, dict):
        return None
    items = value.get(key)
    if not isinstance(items, list) or not items:
        return None
    return items[0]


def decode_response(data: Any) -> GenerationResult:
    candidate = _first(data, "candidates")
    content = candidate.get("content") if isinstance(candidate, dict) else None
    part = _first(content, "parts")
    text = part.get("text") if isinstance(part, dict) else None
    if not isinstance(text, str) or not text:
        return MalformedResponse()
    return Generated(text=text)


class GeminiClient:
    def __init__(
        self,
        api_key: str,
        api_url: str,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: float = 60.0,
    ) -> None:
        self.api_key = api_key
        self.api_url = api_url
        self._transport = transport
        self._timeout = timeout

    async def generate(self, prompt: str) -> GenerationResult:
        headers = {
            "Content-Type": "application/json",
            "X-goog-api-key": self.api_key,
        }
        payload = {"contents": [{"parts": [{"text": prompt}]}]}

        async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
            try:
                response = await client.post(self.api_url, headers=headers, json=payload)
                response.raise_for_status()
            except httpx.HTTPStatusError as exc:
                status_code = exc.response.status_code
                raise UpstreamError(
                    f"API request failed: {status_code} {exc.response.reason_phrase}".rstrip(),
                    upstream_status=status_code,
                ) from exc
            except httpx.RequestError as exc:
                raise UpstreamError(f"Unable to reach generative API: {exc!r}") from exc

        try:
            data = response.json()
        except json.JSONDecodeError:
            logger.warning("Generative API returned a non-JSON body")
            return MalformedResponse(reason="response body is not JSON")
        return decode_response(data)
