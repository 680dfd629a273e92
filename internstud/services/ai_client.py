"""
Generative AI Client

The model is reached through an OpenAI-compatible endpoint, so we use the
openai library. The default base URL is Gemini's OpenAI-compatible API;
any compatible provider works by changing AI_BASE_URL / AI_MODEL.

The client is stateless apart from the SDK handle: every interview request
is a single prompt -> single completion call. No retries.
"""
import json
import logging

from openai import OpenAI

from internstud.core.config import Settings, get_settings

logger = logging.getLogger(__name__)


class AIResponseError(Exception):
    """The model call failed or its output could not be decoded."""


class AIClient:
    """
    Wrapper around the OpenAI SDK, constructed from explicit settings.
    """

    def __init__(self, settings: Settings):
        self.client = OpenAI(
            api_key=settings.ai_api_key or "missing-key",
            base_url=settings.ai_base_url
        )
        self.model = settings.ai_model
        self.temperature = settings.ai_temperature
        self.max_tokens = settings.ai_max_tokens

    def complete(self, prompt: str) -> str:
        """
        Send one user prompt and return the raw text response.
        Raises AIResponseError on any SDK/network failure.
        """
        try:
            response = self.client.chat.completions.create(
                model=self.model,
                messages=[{"role": "user", "content": prompt}],
                max_tokens=self.max_tokens,
                temperature=self.temperature
            )
        except Exception as e:
            logger.error("AI request failed: %s", e)
            raise AIResponseError(f"AI request failed: {e}") from e

        content = response.choices[0].message.content if response.choices else None
        if not content:
            raise AIResponseError("AI returned an empty response")
        return content

    def complete_json(self, prompt: str) -> dict:
        """Call the model and decode the JSON object it was asked to produce."""
        return extract_json(self.complete(prompt))


def extract_json(text: str) -> dict:
    """
    Extract the JSON object between the first '{' and the last '}'.
    Models often wrap JSON in prose or markdown code fences.
    """
    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end == -1 or end < start:
        logger.debug("No JSON object in AI response: %r", text)
        raise AIResponseError("Invalid JSON response from API")

    try:
        data = json.loads(text[start:end + 1])
    except json.JSONDecodeError as e:
        logger.debug("Unparsable AI response: %r", text)
        raise AIResponseError(f"Invalid JSON response from API: {e}") from e

    if not isinstance(data, dict):
        raise AIResponseError("Invalid JSON response from API")
    return data


def get_ai_client() -> AIClient:
    """
    Dependency for FastAPI route injection.
    Tests replace it through app.dependency_overrides.
    """
    return AIClient(get_settings())
