import re
from typing import Callable, Union

from clearwrite.errors import InvalidAction
from clearwrite.schemas import DEFAULT_STYLE, Action

TRANSLATE_PROMPT = """Detect the language of this text and translate it to English if it's not already in English. \
If it's already in English, just return it as is. Format your response with proper markdown formatting including \
headers, bullet points, and emphasis where appropriate. Text: "{text}\""""

PARAPHRASE_PROMPT = """Paraphrase the following text in a {style} style while preserving the original meaning. \
Format the response with proper markdown formatting including headers and emphasis where appropriate: "{text}\""""

SUMMARIZE_PROMPT = """Provide a well-organized summary of the following text. Use markdown formatting with headers \
(## Key Points), bullet points for main ideas, and **bold** for important terms. Text: "{text}\""""

GRAMMAR_PROMPT = """Correct the grammar, spelling, and improve the fluency of this text. Present the corrected \
version with proper markdown formatting and highlight key improvements with **bold** text: "{text}\""""

TONE_PROMPT = """Rewrite this text with a professional tone while preserving the core message. Format the response \
with proper markdown including headers and emphasis for key points: "{text}\""""

KEYWORDS_PROMPT = """Extract and organize the key terms and important concepts from this text. Format as markdown with:
## Key Terms
- List important keywords with **bold** emphasis
## Main Concepts
- List core concepts and themes
## Topics
- List relevant topics and categories

Text: "{text}\""""


_PLACEHOLDER = re.compile(r"\{(text|style)\}")


# Placeholders are filled in a single pass so that braces or placeholder names
# inside the user's text are passed through untouched.
def _fill(template: str, text: str, style: str = DEFAULT_STYLE) -> str:
    values = {"text": text, "style": style}
    return _PLACEHOLDER.sub(lambda match: values[match.group(1)], template)


def _translate(text: str, style: str) -> str:
    return _fill(TRANSLATE_PROMPT, text)


def _paraphrase(text: str, style: str) -> str:
    return _fill(PARAPHRASE_PROMPT, text, style or DEFAULT_STYLE)


def _summarize(text: str, style: str) -> str:
    return _fill(SUMMARIZE_PROMPT, text)


def _grammar(text: str, style: str) -> str:
    return _fill(GRAMMAR_PROMPT, text)


def _tone(text: str, style: str) -> str:
    return _fill(TONE_PROMPT, text)


def _keywords(text: str, style: str) -> str:
    return _fill(KEYWORDS_PROMPT, text)


PROMPT_BUILDERS: dict[Action, Callable[[str, str], str]] = {
    Action.TRANSLATE: _translate,
    Action.PARAPHRASE: _paraphrase,
    Action.SUMMARIZE: _summarize,
    Action.GRAMMAR: _grammar,
    Action.TONE: _tone,
    Action.KEYWORDS: _keywords,
}

_unmapped = set(Action) - set(PROMPT_BUILDERS)
if _unmapped:
    raise RuntimeError(f"No prompt builder for actions: {sorted(a.value for a in _unmapped)}")


def parse_action(action: Union[Action, str]) -> Action:
    try:
        return Action(action)
    except ValueError as exc:
        raise InvalidAction(action) from exc


def build_prompt(action: Union[Action, str], text: str, style: str = DEFAULT_STYLE) -> str:
    return PROMPT_BUILDERS[parse_action(action)](text, style)
