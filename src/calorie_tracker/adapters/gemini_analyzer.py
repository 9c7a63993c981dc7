"""Google Gemini analyzer."""

from dataclasses import dataclass

from google import genai
from google.genai import types as genai_types

from calorie_tracker.services.analysis import Analyzer, split_data_url


@dataclass
class GeminiAnalyzer(Analyzer):
    """Analyzer backed by the Gemini API in JSON response mode.

    The response format comes from the prompt; ``schema`` is not forwarded.
    """

    client: genai.Client
    model: str

    @classmethod
    def create(
        cls, api_key: str, model: str, timeout_seconds: float
    ) -> "GeminiAnalyzer":
        """Create a Gemini analyzer with a bounded request timeout."""
        return cls(
            client=genai.Client(
                api_key=api_key,
                http_options=genai_types.HttpOptions(
                    timeout=int(timeout_seconds * 1000)
                ),
            ),
            model=model,
        )

    async def analyze_image(
        self, *, prompt: str, image_data_url: str, schema: dict[str, object]
    ) -> str:
        """Send a prompt with an inline image part."""
        mime_type, image_bytes = split_data_url(image_data_url)
        return await self._generate(
            [
                prompt,
                genai_types.Part.from_bytes(data=image_bytes, mime_type=mime_type),
            ]
        )

    async def analyze_text(self, *, prompt: str, schema: dict[str, object]) -> str:
        """Send a text-only prompt."""
        return await self._generate(prompt)

    async def _generate(self, contents: object) -> str:
        response = await self.client.aio.models.generate_content(
            model=self.model,
            contents=contents,
            config=genai_types.GenerateContentConfig(
                response_mime_type="application/json",
                temperature=0.2,
            ),
        )
        text = response.text
        if not text:
            raise RuntimeError("Gemini returned an empty response")
        return text
