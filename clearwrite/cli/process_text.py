import argparse
import asyncio
import sys
from typing import Optional

from clearwrite.config import get_settings
from clearwrite.errors import RelayError
from clearwrite.logging_setup import setup_logging
from clearwrite.markdown import render_markdown
from clearwrite.relay import TextRelay
from clearwrite.schemas import DEFAULT_STYLE, PARAPHRASE_STYLES, Action, ProcessRequest, ProcessResult


async def process(action: str, text: str, style: str) -> ProcessResult:
    relay = TextRelay(get_settings())
    return await relay.process(ProcessRequest(text=text, action=action, style=style))


def _read_text(provided: Optional[str]) -> str:
    if provided and provided != "-":
        return provided
    return sys.stdin.read()


def main(argv: Optional[list[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Transform text with the generative API")
    parser.add_argument(
        "action",
        choices=[action.value for action in Action],
        help="Transformation to apply",
    )
    parser.add_argument(
        "text",
        nargs="?",
        help="Text to transform; read from stdin when omitted or '-'",
    )
    parser.add_argument(
        "--style",
        default=DEFAULT_STYLE,
        help=f"Paraphrase style, e.g. {', '.join(PARAPHRASE_STYLES)}",
    )
    parser.add_argument(
        "--html",
        action="store_true",
        help="Print the result rendered as an HTML fragment",
    )

    args = parser.parse_args(argv)
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_json, stream=sys.stderr)

    try:
        outcome = asyncio.run(process(args.action, _read_text(args.text), args.style))
    except RelayError as exc:
        raise SystemExit(exc.message) from exc

    if outcome.detected_language:
        print(f"Detected language: {outcome.detected_language}", file=sys.stderr)
    print(render_markdown(outcome.result) if args.html else outcome.result)


if __name__ == "__main__":
    main()
