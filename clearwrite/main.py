import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import HTMLResponse, JSONResponse
from fastapi.templating import Jinja2Templates

from clearwrite.config import Settings, get_settings
from clearwrite.errors import RelayError, UpstreamError
from clearwrite.logging_setup import setup_logging
from clearwrite.markdown import render_markdown
from clearwrite.relay import TextRelay
from clearwrite.schemas import (
    DEFAULT_STYLE,
    PARAPHRASE_STYLES,
    ErrorResponse,
    ProcessRequest,
    ProcessResult,
    WorkbenchResult,
)

logger = logging.getLogger(__name__)

WORKBENCH_ACTIONS = [
    {
        "value": "translate",
        "label": "Translate",
        "title": "Language Translation",
        "description": "Automatically detect language and translate to English with high accuracy",
        "button": "Translate Text",
    },
    {
        "value": "paraphrase",
        "label": "Paraphrase",
        "title": "Text Paraphrasing",
        "description": "Rewrite your text while preserving meaning and adjusting style",
        "button": "Paraphrase",
    },
    {
        "value": "summarize",
        "label": "Summarize",
        "title": "Text Summarization",
        "description": "Create a concise summary highlighting the main points and key information",
        "button": "Summarize",
    },
    {
        "value": "grammar",
        "label": "Grammar",
        "title": "Grammar Correction",
        "description": "Fix grammar, spelling errors, and improve overall text fluency",
        "button": "Correct Grammar",
    },
    {
        "value": "tone",
        "label": "Tone",
        "title": "Tone Adjustment",
        "description": "Adjust tone to professional, friendly, or academic while preserving meaning",
        "button": "Adjust Tone",
    },
    {
        "value": "keywords",
        "label": "Keywords",
        "title": "Keyword Extraction",
        "description": "Extract key terms, important concepts, and main topics from your text",
        "button": "Extract Keywords",
    },
]


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_json)
    missing = settings.missing_credentials()
    if missing:
        logger.warning("Starting without %s; text processing requests will fail", ", ".join(missing))
    yield


app = FastAPI(title="ClearWrite AI", lifespan=lifespan)
templates = Jinja2Templates(directory=str(Path(__file__).parent / "templates"))

ERROR_RESPONSES = {400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}}


def get_relay(settings: Settings = Depends(get_settings)) -> TextRelay:
    return TextRelay(settings)


@app.exception_handler(RelayError)
async def relay_error_handler(request: Request, exc: RelayError) -> JSONResponse:
    if isinstance(exc, UpstreamError):
        logger.error("Generative API call failed: %s", exc.detail)
    elif exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    else:
        logger.warning("%s %s rejected: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.warning("%s %s rejected: invalid body %s", request.method, request.url.path, exc.errors())
    return JSONResponse(status_code=400, content={"error": "Invalid request body"})


async def _run_relay(relay: TextRelay, req: ProcessRequest) -> ProcessResult:
    try:
        return await relay.process(req)
    except RelayError:
        raise
    except Exception as exc:
        logger.exception("Error processing text")
        raise RelayError() from exc


@app.get("/", response_class=HTMLResponse)
async def index(request: Request):
    return templates.TemplateResponse(
        request,
        "index.html",
        {
            "actions": WORKBENCH_ACTIONS,
            "styles": PARAPHRASE_STYLES,
            "default_style": DEFAULT_STYLE,
        },
    )


@app.post("/api/process-text", response_model=ProcessResult, responses=ERROR_RESPONSES)
async def process_text(req: ProcessRequest, relay: TextRelay = Depends(get_relay)):
    return await _run_relay(relay, req)


@app.post("/api/workbench/process", response_model=WorkbenchResult, responses=ERROR_RESPONSES)
async def workbench_process(req: ProcessRequest, relay: TextRelay = Depends(get_relay)):
    processed = await _run_relay(relay, req)
    return WorkbenchResult(
        result=processed.result,
        detected_language=processed.detected_language,
        html=render_markdown(processed.result),
    )
