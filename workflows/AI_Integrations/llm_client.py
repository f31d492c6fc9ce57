from __future__ import annotations
from typing import Optional

from google import genai
from google.genai import types
from openai import OpenAI

from workflows.prospect_research.errors import LLMCallFailed, LLMUnavailable
from workflows.prospect_research.logger import get_logger
from workflows.prospect_research.settings import Settings

logger = get_logger()

PROVIDERS = ("gemini", "openai")


class LLMClient:
    """Tiny wrapper over the web-search capable model of the configured provider.

    gemini -> Google GenAI SDK with Google Search grounding
    openai -> OpenAI Responses API with the web_search tool
    """
    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or Settings.from_env()
        self.provider = self.settings.llm_provider
        self.model = self.settings.llm_model
        self._client = None

        if self.provider == "gemini" and self.settings.gemini_api_key:
            self._client = genai.Client(
                api_key=self.settings.gemini_api_key,
                # HttpOptions.timeout is in milliseconds
                http_options=types.HttpOptions(timeout=self.settings.llm_timeout_sec * 1000),
            )
        elif self.provider == "openai" and self.settings.openai_api_key:
            self._client = OpenAI(
                api_key=self.settings.openai_api_key,
                timeout=self.settings.llm_timeout_sec,
            )
        elif self.provider not in PROVIDERS:
            logger.warning(f"⚠️ Unknown LLM_PROVIDER {self.provider!r}; expected one of {PROVIDERS}")
        else:
            logger.warning(f"⚠️ No API key configured for LLM provider {self.provider!r}")

    def available(self) -> bool:
        return self._client is not None

    def generate(self, prompt: str) -> str:
        """Send one prompt and return the raw reply text."""
        if self.provider not in PROVIDERS:
            raise LLMUnavailable(
                f"Provider AI sconosciuto '{self.provider}': imposta LLM_PROVIDER a uno tra {', '.join(PROVIDERS)}."
            )
        if not self.available():
            raise LLMUnavailable(
                f"Nessun modello AI configurato (provider '{self.provider}'): imposta la chiave API."
            )

        logger.info(f"🤖 Querying {self.provider}:{self.model} with web search")
        try:
            if self.provider == "gemini":
                text = self._generate_gemini(prompt)
            else:
                text = self._generate_openai(prompt)
        except Exception as e:
            logger.error(f"❌ {self.provider} call failed: {e}")
            raise LLMCallFailed(f"Errore durante la ricerca AI ({self.provider}): {e}") from e

        text = (text or "").strip()
        if not text:
            raise LLMCallFailed(f"Il modello {self.model} ha restituito una risposta vuota. Riprova.")
        return text

    def _generate_gemini(self, prompt: str) -> str:
        resp = self._client.models.generate_content(
            model=self.model,
            contents=prompt,
            config=types.GenerateContentConfig(
                # grounding lets the model look up real companies
                tools=[types.Tool(google_search=types.GoogleSearch())],
                temperature=self.settings.llm_temperature,
            ),
        )
        return resp.text

    def _generate_openai(self, prompt: str) -> str:
        resp = self._client.responses.create(
            model=self.model,
            tools=[{"type": "web_search"}],
            input=prompt,
            temperature=self.settings.llm_temperature,
        )
        return resp.output_text
