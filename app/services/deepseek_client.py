"""
DeepSeek API Client

DeepSeek uses OpenAI-compatible API, so we use the openai library.

Used only when `generation_backend = "deepseek"`; the default backend is the
simulated generator. Every call carries an explicit timeout so a hung request
resolves to a failure instead of holding the single-flight latch.
"""
from openai import OpenAI
from app.core.config import get_settings
import json


class DeepSeekClient:
    """
    Wrapper for DeepSeek API used to polish generated portfolio text.
    """

    def __init__(self):
        settings = get_settings()
        self.client = OpenAI(
            api_key=settings.deepseek_api_key,
            base_url=settings.deepseek_base_url,
            timeout=settings.generation_timeout_seconds,
            max_retries=0,
        )
        self.model = settings.deepseek_model

    def _call_api(self, system_prompt: str, user_content: str, max_tokens: int = 600) -> str:
        """
        Internal method to call DeepSeek API.
        Returns raw text response.
        """
        response = self.client.chat.completions.create(
            model=self.model,
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_content}
            ],
            max_tokens=max_tokens,
            temperature=0.3
        )
        return response.choices[0].message.content or ""

    def _extract_json(self, text: str):
        """
        Extract JSON from API response.
        Handles cases where model wraps JSON in markdown code blocks.
        """
        text = text.strip()
        if text.startswith("```json"):
            text = text[7:]
        if text.startswith("```"):
            text = text[3:]
        if text.endswith("```"):
            text = text[:-3]

        return json.loads(text.strip())

    def rewrite(self, instruction: str, facts: str) -> str:
        """
        Rewrite a drafted portfolio text. The facts must be kept verbatim.
        """
        system_prompt = f"""You write concise copy for a student's portfolio.
{instruction}
Keep every number, skill name and project count from the draft unchanged.
Return ONLY the rewritten text, no explanation."""

        return self._call_api(system_prompt, facts).strip()

    def suggest_list(self, instruction: str, facts: str) -> list[str]:
        """
        Ask for a list of short suggestions. Returns a list of strings.
        """
        system_prompt = f"""{instruction}
Return ONLY a JSON array of strings.
Return format: ["Idea 1", "Idea 2"]"""

        items = self._extract_json(self._call_api(system_prompt, facts, max_tokens=400))
        if not isinstance(items, list):
            raise ValueError("Expected a JSON array of suggestions")
        return [str(item).strip() for item in items if str(item).strip()]


# Singleton instance
_deepseek_client: DeepSeekClient = None


def get_deepseek_client() -> DeepSeekClient:
    """Get or create DeepSeek client (singleton pattern)"""
    global _deepseek_client
    if _deepseek_client is None:
        _deepseek_client = DeepSeekClient()
    return _deepseek_client
