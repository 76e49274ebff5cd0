"""
Macro Estimator - asks a language model for a meal's nutritional macros.

The fixed system prompt is the only contract the model is given, so the text
it returns still has to go through the normalizer.
"""

import logging
from typing import Dict, List, Optional

from adapters.completion_adapter import ChatCompletionClient
from app.config import Settings
from services.retry_policy import RetryPolicy

logger = logging.getLogger("macrolog.estimator")

SYSTEM_PROMPT = """You are a strict, expert nutritional analyst.
The user will give you a natural language description of a meal they ate.
You must estimate the absolute best guess for the nutritional macros of that meal.
You MUST reply ONLY with a valid JSON object matching this exact structure, with NO surrounding markdown or text:
{
  "calories": number,
  "protein": number,
  "fat": number,
  "fibre": number,
  "sugar": number
}"""


def build_messages(meal_text: str) -> List[Dict[str, str]]:
    """Two-message prompt: fixed instruction, then the user's description verbatim."""
    return [
        {"role": "system", "content": SYSTEM_PROMPT},
        {"role": "user", "content": meal_text},
    ]


class MacroEstimator:
    """Sends meal descriptions to the completion service"""

    def __init__(self, client: ChatCompletionClient, retry_policy: Optional[RetryPolicy] = None):
        self.client = client
        self.retry_policy = retry_policy or RetryPolicy()

    @classmethod
    def from_settings(cls, settings: Settings, transport=None) -> "MacroEstimator":
        """
        Build an estimator from application settings.

        Raises:
            MissingCredentialError: MOONSHOT_API_KEY is not configured
        """
        client = ChatCompletionClient(
            api_key=settings.moonshot_api_key,
            base_url=settings.estimator_base_url,
            model=settings.estimator_model,
            temperature=settings.estimator_temperature,
            timeout=settings.estimator_timeout_sec,
            transport=transport,
        )
        return cls(client, RetryPolicy.from_settings(settings))

    def request_estimate(self, meal_text: str) -> str:
        """Return the model's raw completion text for a meal description."""
        logger.info(
            f"estimate_requested model={self.client.model} chars={len(meal_text)}"
        )
        return self.retry_policy.call(self.client.complete, build_messages(meal_text))
