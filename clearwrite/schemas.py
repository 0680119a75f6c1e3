from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class Action(str, Enum):
    TRANSLATE = "translate"
    PARAPHRASE = "paraphrase"
    SUMMARIZE = "summarize"
    GRAMMAR = "grammar"
    TONE = "tone"
    KEYWORDS = "keywords"


PARAPHRASE_STYLES = ("formal", "casual", "concise", "detailed")
DEFAULT_STYLE = "formal"


class ProcessRequest(BaseModel):
    # Raw strings so that missing fields and unknown actions are reported by the relay.
    text: Optional[str] = None
    action: Optional[str] = None
    style: Optional[str] = DEFAULT_STYLE


class ProcessResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    result: str
    detected_language: Optional[str] = Field(default=None, alias="detectedLanguage")


class WorkbenchResult(ProcessResult):
    html: str


class ErrorResponse(BaseModel):
    error: str
