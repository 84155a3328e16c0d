"""
Text generation clients for industry insights.

Each client turns an instruction prompt into the model's raw text. Transport
and service failures (missing key, timeout, HTTP error, SDK exception) raise
UpstreamUnavailable. Whatever text comes back is returned untouched, however
malformed; parsing happens downstream. No client retries.
"""

from typing import Any, Dict, Optional

import requests
from google import genai
from google.genai import types as genai_types
from openai import OpenAI

from ..simple_logger import get_logger
from .errors import UpstreamUnavailable

logger = get_logger("insight_client")


class InsightTextClient:
    """Base class: ``generate(prompt) -> str``"""

    provider = "base"
    default_model = ""

    def __init__(self, model: Optional[str] = None, timeout: float = 60, temperature: float = 0.7):
        self.model = model or self.default_model
        self.timeout = timeout
        self.temperature = temperature

    def is_configured(self) -> bool:
        return True

    def generate(self, prompt: str) -> str:
        raise NotImplementedError

    def get_health_status(self) -> Dict[str, Any]:
        return {
            "provider": self.provider,
            "model": self.model,
            "configured": self.is_configured(),
        }


class GeminiTextClient(InsightTextClient):
    provider = "gemini"
    default_model = "gemini-2.0-flash"

    def __init__(self, api_key: str, **kwargs):
        super().__init__(**kwargs)
        self.api_key = api_key
        self._client = None

    def is_configured(self) -> bool:
        return bool(self.api_key)

    def _get_client(self):
        if self._client is None:
            self._client = genai.Client(
                api_key=self.api_key,
                http_options=genai_types.HttpOptions(timeout=int(self.timeout * 1000)),
            )
        return self._client

    def generate(self, prompt: str) -> str:
        if not self.is_configured():
            raise UpstreamUnavailable("Gemini API key not configured. Set GEMINI_API_KEY.")
        try:
            response = self._get_client().models.generate_content(
                model=self.model,
                contents=prompt,
                config=genai_types.GenerateContentConfig(temperature=self.temperature),
            )
        except Exception as e:
            logger.error(f"Gemini API error: {e}")
            raise UpstreamUnavailable(f"Gemini request failed: {e}") from e
        return response.text or ""


class OpenAITextClient(InsightTextClient):
    provider = "openai"
    default_model = "gpt-4o-mini"

    def __init__(self, api_key: str, **kwargs):
        super().__init__(**kwargs)
        self.api_key = api_key
        self._client = None

    def is_configured(self) -> bool:
        return bool(self.api_key)

    def _get_client(self):
        if self._client is None:
            self._client = OpenAI(api_key=self.api_key, timeout=self.timeout)
        return self._client

    def generate(self, prompt: str) -> str:
        if not self.is_configured():
            raise UpstreamUnavailable("OpenAI API key not configured. Set OPENAI_API_KEY.")
        try:
            response = self._get_client().chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": "You are an industry analyst that answers in JSON."},
                    {"role": "user", "content": prompt}
                ],
                temperature=self.temperature
            )
            content = response.choices[0].message.content
        except Exception as e:
            logger.error(f"OpenAI API error: {e}")
            raise UpstreamUnavailable(f"OpenAI request failed: {e}") from e
        return content or ""


class OllamaTextClient(InsightTextClient):
    provider = "ollama"
    default_model = "llama3:8b"

    def __init__(self, ollama_url: str = "http://localhost:11434", **kwargs):
        super().__init__(**kwargs)
        self.ollama_url = ollama_url.rstrip("/")

    def is_configured(self) -> bool:
        return bool(self.ollama_url)

    def generate(self, prompt: str) -> str:
        payload = {
            "model": self.model,
            "prompt": prompt,
            "stream": False,
            "options": {
                "temperature": self.temperature,
            }
        }
        try:
            response = requests.post(
                f"{self.ollama_url}/api/generate",
                json=payload,
                timeout=self.timeout
            )
        except requests.exceptions.Timeout as e:
            raise UpstreamUnavailable("Ollama request timeout") from e
        except requests.exceptions.RequestException as e:
            logger.error(f"Ollama request error: {e}")
            raise UpstreamUnavailable(f"Ollama request failed: {e}") from e

        if response.status_code != 200:
            raise UpstreamUnavailable(f"Ollama API error: {response.status_code}")
        try:
            data = response.json()
        except ValueError as e:
            raise UpstreamUnavailable("Ollama returned a non-JSON envelope") from e
        if not isinstance(data, dict):
            raise UpstreamUnavailable(f"Ollama returned an unexpected envelope: {type(data).__name__}")
        text = data.get("response")
        return text if isinstance(text, str) else ""


def build_text_client(config) -> InsightTextClient:
    """Client for the provider named in ``INSIGHT_PROVIDER``."""
    provider = (config.get("INSIGHT_PROVIDER") or "gemini").lower()
    options = {
        "model": config.get("INSIGHT_MODEL") or None,
        "timeout": config.get("INSIGHT_TIMEOUT_SECONDS", 60),
        "temperature": config.get("INSIGHT_TEMPERATURE", 0.7),
    }
    if provider == "gemini":
        return GeminiTextClient(api_key=config.get("GEMINI_API_KEY", ""), **options)
    if provider == "openai":
        return OpenAITextClient(api_key=config.get("OPENAI_API_KEY", ""), **options)
    if provider == "ollama":
        return OllamaTextClient(ollama_url=config.get("OLLAMA_URL", "http://localhost:11434"), **options)
    raise ValueError(f"Unknown insight provider: {provider}")
