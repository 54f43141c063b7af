"""
Inference backends

Both take a prompt and return the model's reply text. Any transport,
HTTP or payload-shape failure raises InferenceUnavailable.
"""

import logging

import requests

from easy_apply_autopilot import config
from easy_apply_autopilot.errors import InferenceUnavailable

logger = logging.getLogger(__name__)


class GeminiBackend:
    """Standard tier: Gemini generateContent with the user's own access token"""

    name = "gemini"

    def __init__(self, access_token, model=config.DEFAULT_GEMINI_MODEL,
                 timeout=config.INFERENCE_TIMEOUT_SECONDS):
        self.access_token = access_token
        self.model = model
        self.timeout = timeout

    @property
    def available(self):
        return bool(self.access_token)

    def complete(self, prompt):
        url = config.GEMINI_URL_TEMPLATE.format(model=self.model)
        try:
            resp = requests.post(
                url,
                params={"key": self.access_token},
                headers={"Content-Type": "application/json"},
                json={"contents": [{"parts": [{"text": prompt}]}]},
                timeout=self.timeout,
            )
            resp.raise_for_status()
            data = resp.json()
        except (requests.RequestException, ValueError) as e:
            raise InferenceUnavailable(f"Gemini request failed: {e}") from e

        try:
            return data["candidates"][0]["content"]["parts"][0]["text"].strip()
        except (KeyError, IndexError, TypeError, AttributeError) as e:
            raise InferenceUnavailable(f"Unexpected Gemini response shape: {e}") from e


class PremiumBackend:
    """Premium tier: hosted endpoint authenticated with the plan's API token"""

    name = "premium"

    def __init__(self, api_token, url=config.PREMIUM_API_URL,
                 timeout=config.INFERENCE_TIMEOUT_SECONDS):
        self.api_token = api_token
        self.url = url
        self.timeout = timeout

    @property
    def available(self):
        return bool(self.api_token)

    def complete(self, prompt):
        try:
            resp = requests.post(
                self.url,
                headers={"Content-Type": "application/json", "x-api-key": self.api_token},
                json={"query": prompt},
                timeout=self.timeout,
            )
            resp.raise_for_status()
            data = resp.json()
        except (requests.RequestException, ValueError) as e:
            raise InferenceUnavailable(f"Premium API request failed: {e}") from e

        try:
            return data["data"]["text"]
        except (KeyError, TypeError) as e:
            raise InferenceUnavailable(f"Unexpected premium API response shape: {e}") from e


def backend_for(settings):
    """Pick the backend for the account tier"""
    if settings.is_premium:
        return PremiumBackend(settings.api_token)
    return GeminiBackend(settings.access_token, model=settings.gemini_model)
