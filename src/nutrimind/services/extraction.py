"""Free-text extraction of food and exercise entries using an LLM."""

import json
import logging
import re
from dataclasses import dataclass
from typing import Protocol

from pydantic import ValidationError

from nutrimind.domain.extraction import ExtractedItem, ExtractionReply, ExtractionResult
from nutrimind.domain.nutrients import MICRONUTRIENTS, NutrientUnit
from nutrimind.errors import MalformedResponseError

_logger = logging.getLogger(__name__)

_JSON_FENCE = re.compile(
    r"```json[ \t]*\r?\n(.*?)\r?\n?```", re.DOTALL | re.IGNORECASE
)
_ANY_FENCE = re.compile(r"```(?:[A-Za-z0-9_-]*[ \t]*\r?\n)?(.*?)```", re.DOTALL)
_EXCERPT_LENGTH = 200

_UNIT_NAMES = {
    NutrientUnit.GRAMS: "Grams (g)",
    NutrientUnit.MILLIGRAMS: "Milligrams (mg)",
    NutrientUnit.MICROGRAMS: "Micrograms (mcg)",
}


def _micros_skeleton() -> str:
    return ", ".join(f'"{nutrient.key}": number' for nutrient in MICRONUTRIENTS)


def _unit_table() -> str:
    lines = []
    for unit, unit_name in _UNIT_NAMES.items():
        keys = [nutrient.key for nutrient in MICRONUTRIENTS if nutrient.unit == unit]
        lines.append(f"- {unit_name}: {', '.join(keys)}")
    return "\n".join(lines)


def build_instructions() -> str:
    """Return the static instruction template sent with every request."""
    return f"""You are an expert nutritionist and fitness tracker AI.
Analyze the user's natural language input, which may describe food or exercise,
and return structured nutritional data.

1. Decide whether each item is FOOD or EXERCISE.
2. If the input mentions several items (e.g. "eggs and toast"), return one object
   per item.
3. For FOOD, estimate calories, macros and every micronutrient listed below.
4. For EXERCISE, estimate calories burned as a positive number and set all
   macros and micronutrients to 0.
5. If an item is ambiguous or brand-specific, use web search to find accurate
   data.
6. Respond with a JSON array inside a ```json fenced code block, using exactly
   this structure:

[
  {{
    "kind": "FOOD" or "EXERCISE",
    "name": "Specific item name (e.g. '1 large egg')",
    "calories": number,
    "macros": {{"protein": number, "carbs": number, "fat": number}},
    "micros": {{{_micros_skeleton()}}},
    "confidence_score": number between 0 and 1
  }}
]

Micronutrient units:
{_unit_table()}

Use 0 only for values you cannot estimate at all; otherwise estimate from
standard nutritional data. Return nothing but the code block."""


INSTRUCTIONS = build_instructions()


class ExtractionClient(Protocol):
    """Interface for the hosted model that turns text into entries."""

    async def complete(  # noqa: PLR0913
        self,
        *,
        model: str,
        reasoning_effort: str | None,
        store: bool,
        instructions: str,
        text: str,
        web_search: bool,
    ) -> ExtractionReply:
        """Return the model's text reply and any citation URLs."""


@dataclass
class ExtractionService:
    """Service that prompts the model and validates its reply."""

    client: ExtractionClient
    model: str
    reasoning_effort: str | None
    store: bool
    web_search_enabled: bool = True

    async def extract(self, text: str) -> ExtractionResult:
        """Extract food and exercise entries from free text.

        Raises ``MissingCredentialError`` or ``ServiceError`` from the client and
        ``MalformedResponseError`` when the reply cannot be parsed. Nothing is
        returned on failure, so callers never persist a partial batch.
        """
        cleaned = text.strip()
        if not cleaned:
            raise ValueError("Entry text must not be empty")
        reply = await self.client.complete(
            model=self.model,
            reasoning_effort=self.reasoning_effort,
            store=self.store,
            instructions=INSTRUCTIONS,
            text=cleaned,
            web_search=self.web_search_enabled,
        )
        try:
            items = parse_items(reply.text)
        except MalformedResponseError:
            _logger.warning(
                "Could not parse extraction reply: %r",
                reply.text[:_EXCERPT_LENGTH],
            )
            raise
        citation_urls = list(reply.citation_urls)
        return ExtractionResult(
            entries=[item.to_candidate(citation_urls) for item in items],
            citation_urls=citation_urls,
        )


def parse_items(text: str) -> list[ExtractedItem]:
    """Parse and validate the item array contained in a model reply."""
    payload = _load_payload(text)
    raw_items = payload if isinstance(payload, list) else [payload]
    if not raw_items:
        raise MalformedResponseError("Reply contained no items", raw_text=text)
    try:
        return [ExtractedItem.model_validate(item) for item in raw_items]
    except ValidationError as exc:
        raise MalformedResponseError(
            f"Reply items have the wrong shape ({exc.error_count()} errors)",
            raw_text=text,
        ) from exc


def _load_payload(text: str) -> object:
    """Decode JSON from a ```json fence, any fence, or the whole text."""
    for candidate in _payload_candidates(text):
        try:
            return json.loads(candidate)
        except json.JSONDecodeError:
            continue
    raise MalformedResponseError("Reply did not contain valid JSON", raw_text=text)


def _payload_candidates(text: str) -> list[str]:
    candidates = []
    for pattern in (_JSON_FENCE, _ANY_FENCE):
        match = pattern.search(text)
        if match:
            candidates.append(match.group(1).strip())
    stripped = text.strip()
    if stripped:
        candidates.append(stripped)
    return candidates
