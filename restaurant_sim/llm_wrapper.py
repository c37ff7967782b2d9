# restaurant_sim/llm_wrapper.py
import json
import logging
import re
from typing import Any, Dict, Optional

import httpx

from .baselines import fallback_decision
from .config import (
    GEMINI_API_KEY,
    GEMINI_API_URL,
    GEMINI_MAX_TOKENS,
    GEMINI_MODEL,
    GEMINI_TEMPERATURE,
    GEMINI_TIMEOUT_SECONDS,
    SCENARIOS,
)
from .decisions import parse_decision
from .models import DecisionResult
from .prompts import build_prompt

logger = logging.getLogger(__name__)


class GeminiDecisionProvider:
    """
    Decision provider backed by the Gemini generateContent API.

    provide() always resolves to a DecisionResult: a missing key, timeout,
    HTTP error, unparseable reply or incomplete decision all degrade to the
    rule-based fallback for that scenario.
    """

    name = 'gemini'

    def __init__(self, model_name: str = GEMINI_MODEL, api_key: Optional[str] = None,
                 base_url: str = GEMINI_API_URL, timeout: float = GEMINI_TIMEOUT_SECONDS,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        self.model_name = model_name
        self.api_key = GEMINI_API_KEY if api_key is None else api_key
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.transport = transport

    async def provide(self, scenario: str, input_data: Dict[str, Any]) -> DecisionResult:
        if not isinstance(input_data, dict):
            logger.warning("Invalid input data for '%s'. Using an empty object.", scenario)
            input_data = {}

        if not self.api_key:
            logger.warning("Gemini API key is not configured. Using fallback logic.")
            return fallback_decision(scenario, input_data)
        if scenario not in SCENARIOS:
            logger.error("Unsupported scenario: %s. Using fallback logic.", scenario)
            return fallback_decision(scenario, input_data)

        try:
            text = await self._call_llm(build_prompt(scenario, input_data))
        except httpx.TimeoutException:
            logger.error("Gemini request timed out after %.0fs. Falling back to rule-based logic.", self.timeout)
            return fallback_decision(scenario, input_data)
        except (httpx.HTTPError, KeyError, IndexError, TypeError, ValueError) as e:
            logger.error("Gemini request for '%s' failed: %s. Falling back to rule-based logic.", scenario, e)
            return fallback_decision(scenario, input_data)

        result = self._parse_response(scenario, text)
        if result is None:
            return fallback_decision(scenario, input_data)
        return result

    def _parse_response(self, scenario: str, response_text: str) -> Optional[DecisionResult]:
        """Extract the JSON reply and validate it; None when it is unusable."""
        match = re.search(r'\{.*\}', response_text or '', re.DOTALL)
        try:
            data = json.loads(match.group(0) if match else response_text)
        except (TypeError, ValueError):
            logger.error("Failed to parse Gemini response as JSON: %.200s", response_text)
            return None

        if not isinstance(data, dict) or not isinstance(data.get('decision'), dict):
            logger.warning("Incomplete response from Gemini. Falling back to rule-based logic.")
            return None
        if not (data.get('rationale') or data['decision'].get('rationale')):
            logger.warning("Gemini response has no rationale. Falling back to rule-based logic.")
            return None

        result = parse_decision(scenario, dict(data, source='provider'))
        if result is None:
            logger.warning("Gemini decision for '%s' did not validate. Falling back.", scenario)
        return result

    async def _call_llm(self, prompt: str) -> str:
        url = f"{self.base_url}/models/{self.model_name}:generateContent"
        payload = {
            'contents': [{'role': 'user', 'parts': [{'text': prompt}]}],
            'generationConfig': {
                'maxOutputTokens': GEMINI_MAX_TOKENS,
                'temperature': GEMINI_TEMPERATURE,
                'responseMimeType': 'application/json',
            },
        }
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            response = await client.post(
                url,
                headers={'x-goog-api-key': self.api_key, 'Content-Type': 'application/json'},
                json=payload,
            )
            response.raise_for_status()
            data = response.json()
        return data['candidates'][0]['content']['parts'][0]['text']
