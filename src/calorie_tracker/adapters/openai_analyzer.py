"""OpenAI Responses API analyzer."""

from dataclasses import dataclass

import httpx
from openai import AsyncOpenAI

from calorie_tracker.services.analysis import Analyzer


@dataclass
class OpenAIAnalyzer(Analyzer):
    """Analyzer backed by the OpenAI Responses API with structured outputs."""

    client: AsyncOpenAI
    model: str

    @classmethod
    def create(
        cls, api_key: str, model: str, timeout_seconds: float
    ) -> "OpenAIAnalyzer":
        """Create an OpenAI analyzer with a bounded request timeout."""
        return cls(
            client=AsyncOpenAI(
                api_key=api_key,
                timeout=httpx.Timeout(timeout_seconds, connect=5.0),
                max_retries=0,
            ),
            model=model,
        )

    async def analyze_image(
        self, *, prompt: str, image_data_url: str, schema: dict[str, object]
    ) -> str:
        """Send a prompt with an inline image."""
        return await self._create(
            [
                {"type": "input_text", "text": prompt},
                {"type": "input_image", "image_url": image_data_url},
            ],
            schema,
        )

    async def analyze_text(self, *, prompt: str, schema: dict[str, object]) -> str:
        """Send a text-only prompt."""
        return await self._create([{"type": "input_text", "text": prompt}], schema)

    async def _create(
        self, content: list[dict[str, object]], schema: dict[str, object]
    ) -> str:
        response = await self.client.responses.create(
            model=self.model,
            input=[{"role": "user", "content": content}],
            text={
                "format": {
                    "type": "json_schema",
                    "name": "nutrition_estimate",
                    "strict": True,
                    "schema": schema,
                }
            },
            store=False,
        )
        output_text = response.output_text
        if not output_text:
            raise RuntimeError("OpenAI returned an empty response")
        return output_text

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.client.close()
