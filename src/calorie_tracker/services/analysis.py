"""AI-assisted food and activity analysis."""

import asyncio
import base64
import binascii
import json
import logging
from collections.abc import Awaitable
from dataclasses import dataclass, field
from typing import Protocol, TypeVar
from uuid import UUID

from pydantic import BaseModel
from pydantic import ValidationError as SchemaValidationError

from calorie_tracker.domain.analysis import FoodAnalysis, SportAnalysis
from calorie_tracker.domain.errors import UpstreamAnalysisError, ValidationError
from calorie_tracker.services.users import ProfileService

DEFAULT_BODY_WEIGHT_KG = 70.0

_logger = logging.getLogger(__name__)

_ResultT = TypeVar("_ResultT", bound=BaseModel)

_NULLABLE_NUMBER = {"anyOf": [{"type": "number", "minimum": 0}, {"type": "null"}]}

FOOD_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {
        "foods": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "name": {"type": "string"},
                    "calories": {"type": "number", "minimum": 0},
                    "weight_g": _NULLABLE_NUMBER,
                    "protein_g": {"type": "number", "minimum": 0},
                    "carbs_g": {"type": "number", "minimum": 0},
                    "fat_g": {"type": "number", "minimum": 0},
                },
                "required": [
                    "name",
                    "calories",
                    "weight_g",
                    "protein_g",
                    "carbs_g",
                    "fat_g",
                ],
                "additionalProperties": False,
            },
        }
    },
    "required": ["foods"],
    "additionalProperties": False,
}

SPORT_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {
        "name": {"type": "string"},
        "calories": {"type": "number", "minimum": 0},
        "duration_min": _NULLABLE_NUMBER,
        "intensity": {"anyOf": [{"type": "string"}, {"type": "null"}]},
    },
    "required": ["name", "calories", "duration_min", "intensity"],
    "additionalProperties": False,
}

_FOOD_FORMAT = (
    "Return ONLY a valid JSON object without Markdown: "
    '{"foods": [{"name": "Food name", "calories": 100, "weight_g": 100, '
    '"protein_g": 5, "carbs_g": 10, "fat_g": 5}]}. '
    "Estimate the values as well as you can."
)


class Analyzer(Protocol):
    """Capability interface for an AI analysis provider."""

    async def analyze_image(
        self, *, prompt: str, image_data_url: str, schema: dict[str, object]
    ) -> str:
        """Return the provider's raw JSON text for an image prompt."""

    async def analyze_text(self, *, prompt: str, schema: dict[str, object]) -> str:
        """Return the provider's raw JSON text for a text prompt."""


@dataclass
class AnalyzerRegistry:
    """Configured analyzers keyed by provider name."""

    analyzers: dict[str, Analyzer] = field(default_factory=dict)

    def register(self, name: str, analyzer: Analyzer) -> None:
        """Add or replace the analyzer for a provider."""
        self.analyzers[name] = analyzer

    def get(self, name: str) -> Analyzer:
        """Return the analyzer for ``name`` or raise when it isn't configured."""
        analyzer = self.analyzers.get(name)
        if analyzer is None:
            raise UpstreamAnalysisError(f"Analysis provider {name!r} is not configured")
        return analyzer


@dataclass
class AnalysisService:
    """Routes analysis requests to the user's provider and validates results.

    Results are returned to the caller only; nothing is persisted here.
    """

    registry: AnalyzerRegistry
    profile_service: ProfileService
    default_provider: str = "gemini"
    timeout_seconds: float = 30.0

    async def analyze_food_image(self, user_id: UUID, image: str) -> FoodAnalysis:
        """Estimate the foods visible in an image."""
        data_url = _normalize_image(image)
        analyzer, provider = self._select(user_id)
        prompt = (
            "Analyze this picture of a meal and identify its components. "
            + _FOOD_FORMAT
        )
        return await self._run(
            provider,
            analyzer.analyze_image(
                prompt=prompt, image_data_url=data_url, schema=FOOD_SCHEMA
            ),
            FoodAnalysis,
        )

    async def analyze_food_text(self, user_id: UUID, text: str) -> FoodAnalysis:
        """Estimate the foods in a free-text meal description."""
        if not text or not text.strip():
            raise ValidationError("No text provided")
        analyzer, provider = self._select(user_id)
        prompt = f'Analyze the following meal description: "{text}". ' + _FOOD_FORMAT
        return await self._run(
            provider,
            analyzer.analyze_text(prompt=prompt, schema=FOOD_SCHEMA),
            FoodAnalysis,
        )

    async def analyze_sport(
        self, user_id: UUID, text: str, weight_kg: float | None = None
    ) -> SportAnalysis:
        """Estimate calories burned by a described activity."""
        if not text or not text.strip():
            raise ValidationError("No text provided")
        analyzer, provider = self._select(user_id)
        if weight_kg is None:
            profile = self.profile_service.get_profile(user_id)
            weight_kg = (profile.weight if profile else None) or DEFAULT_BODY_WEIGHT_KG
        prompt = (
            f'Analyze the following activity description: "{text}". '
            f"User body weight: {weight_kg:g} kg. "
            "Estimate the calories burned from activity, intensity and duration. "
            "If no duration is given, assume a typical duration that fits the "
            "description instead of asking. "
            "Return ONLY a valid JSON object without Markdown: "
            '{"name": "Activity name", "calories": 300, "duration_min": 30, '
            '"intensity": "moderate"}'
        )
        return await self._run(
            provider,
            analyzer.analyze_text(prompt=prompt, schema=SPORT_SCHEMA),
            SportAnalysis,
        )

    def _select(self, user_id: UUID) -> tuple[Analyzer, str]:
        profile = self.profile_service.get_profile(user_id)
        provider = (profile.ai_provider if profile else None) or self.default_provider
        return self.registry.get(provider), provider

    async def _run(
        self,
        provider: str,
        call: Awaitable[str],
        model: type[_ResultT],
    ) -> _ResultT:
        try:
            raw = await asyncio.wait_for(call, timeout=self.timeout_seconds)
        except TimeoutError as exc:
            _logger.warning("Analysis timed out: provider=%s", provider)
            raise UpstreamAnalysisError("Analysis provider timed out") from exc
        except UpstreamAnalysisError:
            raise
        except Exception as exc:
            _logger.exception("Analysis provider failed: provider=%s", provider)
            raise UpstreamAnalysisError(f"Analysis failed: {exc}") from exc
        return parse_analysis(raw, model)


def parse_analysis(raw: str, model: type[_ResultT]) -> _ResultT:
    """Parse provider text into ``model``, tolerating Markdown code fences."""
    cleaned = _strip_code_fences(raw or "")
    try:
        payload = json.loads(cleaned)
    except json.JSONDecodeError as exc:
        _logger.warning("Analysis returned non-JSON output: %r", cleaned[:200])
        raise UpstreamAnalysisError("Failed to parse AI response") from exc
    try:
        return model.model_validate(payload)
    except SchemaValidationError as exc:
        raise UpstreamAnalysisError("AI response did not match the schema") from exc


def _strip_code_fences(text: str) -> str:
    return text.replace("```json", "").replace("```", "").strip()


def _normalize_image(image: str) -> str:
    """Return ``image`` as a data URL, wrapping raw base64 if needed."""
    if not image:
        raise ValidationError("No image provided")
    if image.startswith("data:"):
        return image
    try:
        image_bytes = base64.b64decode(image, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise ValidationError("Image must be a data URL or base64 string") from exc
    return _to_data_url(image_bytes)


def split_data_url(data_url: str) -> tuple[str, bytes]:
    """Split a base64 data URL into its MIME type and decoded bytes."""
    header, _, encoded = data_url.partition(",")
    mime_type = header.removeprefix("data:").split(";", maxsplit=1)[0] or "image/jpeg"
    return mime_type, base64.b64decode(encoded)


def _to_data_url(image_bytes: bytes) -> str:
    """Convert bytes to a base64 data URL for image input."""
    mime_type = _detect_mime_type(image_bytes)
    encoded = base64.b64encode(image_bytes).decode("utf-8")
    return f"data:{mime_type};base64,{encoded}"


def _detect_mime_type(image_bytes: bytes) -> str:
    """Infer a basic image MIME type from file signatures."""
    if image_bytes.startswith(b"\xff\xd8\xff"):
        return "image/jpeg"
    if image_bytes.startswith(b"\x89PNG\r\n\x1a\n"):
        return "image/png"
    if image_bytes[:4] == b"RIFF" and image_bytes[8:12] == b"WEBP":
        return "image/webp"
    return "image/jpeg"
