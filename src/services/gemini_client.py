from __future__ import annotations

import json
import logging

import httpx
from google import genai
from google.genai import errors as genai_errors
from google.genai import types
from pydantic import BaseModel, ValidationError

from src.app.domain.errors import (
    GenerationConfigurationError,
    ProviderEmptyError,
    ProviderUnavailableError,
    ProviderUnparseableError,
)
from src.app.domain.models import GeneratedArtifact
from src.services.prompt_builder import GenerationPrompt

logger = logging.getLogger(__name__)

DEFAULT_MODEL_NAME = "gemini-2.5-flash"


class ArtifactPayload(BaseModel):
    name: str
    ingredients: list[str]
    effects: list[str]
    instructions: str


class GeminiClient:
    def __init__(
        self,
        api_key: str,
        model_name: str = DEFAULT_MODEL_NAME,
        timeout_seconds: float | None = None,
    ) -> None:
        self.api_key = api_key
        self.model_name = model_name
        self.timeout_seconds = timeout_seconds
        self._client = self._configure_api()

    def _configure_api(self) -> genai.Client:
        if not self.api_key:
            raise GenerationConfigurationError("Missing Gemini API key.")
        http_options = None
        if self.timeout_seconds:
            http_options = types.HttpOptions(timeout=int(self.timeout_seconds * 1000))
        return genai.Client(api_key=self.api_key, http_options=http_options)

    def _parse_artifact(self, raw_json: str) -> GeneratedArtifact:
        try:
            payload = ArtifactPayload.model_validate(json.loads(raw_json))
        except json.JSONDecodeError as decode_error:
            raise ProviderUnparseableError(f"invalid JSON: {decode_error}") from decode_error
        except ValidationError as validation_error:
            raise ProviderUnparseableError(str(validation_error)) from validation_error

        return GeneratedArtifact(
            name=payload.name.strip(),
            ingredients=tuple(item.strip() for item in payload.ingredients if item.strip()),
            effects=tuple(item.strip() for item in payload.effects if item.strip()),
            instructions=payload.instructions.strip(),
        )

    def generate(self, prompt: GenerationPrompt) -> GeneratedArtifact:
        config = types.GenerateContentConfig(
            response_mime_type="application/json",
            response_schema=prompt.response_schema,
        )
        try:
            response = self._client.models.generate_content(
                model=self.model_name,
                contents=prompt.text,
                config=config,
            )
        except genai_errors.APIError as api_error:
            logger.warning("Gemini API error: code=%s %s", api_error.code, api_error.message)
            raise ProviderUnavailableError(str(api_error)) from api_error
        except genai_errors.UnknownApiResponseError as response_error:
            # Corpo que não é JSON (ex.: página HTML de um proxy)
            logger.warning("Gemini returned an unreadable response: %s", response_error)
            raise ProviderUnparseableError(str(response_error)) from response_error
        except httpx.HTTPError as transport_error:
            logger.warning("Gemini transport error: %s", transport_error)
            raise ProviderUnavailableError(str(transport_error)) from transport_error

        raw_json = response.text
        if not raw_json or not raw_json.strip():
            raise ProviderEmptyError()
        return self._parse_artifact(raw_json)
