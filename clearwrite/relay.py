import logging
from typing import Callable, Optional

from clearwrite.config import Settings
from clearwrite.errors import InvalidRequest, ServerMisconfigured
from clearwrite.gemini_client import GeminiClient, Generated
from clearwrite.prompts import build_prompt, parse_action
from clearwrite.schemas import DEFAULT_STYLE, Action, ProcessRequest, ProcessResult

logger = logging.getLogger(__name__)

NO_RESPONSE_PLACEHOLDER = "No response generated"
# Fixed label; no language detection is performed.
DETECTED_LANGUAGE_LABEL = "Auto-detected"

ClientFactory = Callable[[Settings], GeminiClient]


def default_client_factory(settings: Settings) -> GeminiClient:
    return GeminiClient(
        settings.api_key or "",
        settings.api_url or "",
        timeout=settings.request_timeout,
    )


class TextRelay:
    """Turns a ``ProcessRequest`` into one call to the generative API."""

    def __init__(self, settings: Settings, client_factory: Optional[ClientFactory] = None) -> None:
        self.settings = settings
        self._client_factory = client_factory or default_client_factory

    async def process(self, request: ProcessRequest) -> ProcessResult:
        text = request.text or ""
        if not text.strip() or not request.action:
            raise InvalidRequest()

        missing = self.settings.missing_credentials()
        if missing:
            logger.error("Generative API is not configured, missing %s", ", ".join(missing))
            raise ServerMisconfigured()

        action = parse_action(request.action)
        prompt = build_prompt(action, text, request.style or DEFAULT_STYLE)

        logger.info("Processing %s request (%d characters)", action.value, len(text))
        client = self._client_factory(self.settings)
        generated = await client.generate(prompt)

        if isinstance(generated, Generated):
            result = generated.text
        else:
            logger.warning("Generative API response was malformed: %s", generated.reason)
            result = NO_RESPONSE_PLACEHOLDER

        return ProcessResult(
            result=result,
            detected_language=DETECTED_LANGUAGE_LABEL if action is Action.TRANSLATE else None,
        )
