"""LLM-backed extraction of schema-validated objects."""

from __future__ import annotations

import json
import re
from typing import Any, TypeVar

from config.config import Config, get_config
from config.logging_utils import get_logger
from openai import OpenAI
from openai.types.chat import ChatCompletionMessageParam
from pydantic import BaseModel, ValidationError

SchemaT = TypeVar("SchemaT", bound=BaseModel)


class StructuredExtractor:
    """Ask the model for output shaped like a pydantic schema and validate it.

    ``extract`` returns ``None`` whenever the model declines or produces
    something that does not fit the schema. Errors raised by the OpenAI client
    itself (network, auth, rate limits) propagate to the caller.
    """

    def __init__(
        self,
        openai_client: Any | None = None,
        config: Config | None = None,
        logger=None,
    ):
        self.config = config or get_config()
        self.logger = logger or get_logger(__name__)
        self.client = openai_client or self._maybe_create_client()

    def extract(
        self,
        system_prompt: str,
        user_text: str,
        schema: type[SchemaT],
        schema_name: str | None = None,
    ) -> SchemaT | None:
        """Run one structured completion.

        Args:
            system_prompt: Instruction for the model
            user_text: Text the instruction applies to
            schema: pydantic model describing the expected output
            schema_name: Name reported to the API (defaults to the model name in kebab case)

        Returns:
            Validated instance of ``schema`` or None when no conforming output was produced
        """
        if self.client is None:
            raise RuntimeError("OpenAI client not initialized")

        name = schema_name or _kebab_case(schema.__name__)
        messages: list[ChatCompletionMessageParam] = [
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": user_text},
        ]

        self.logger.debug(f"Requesting '{name}' from {self.config.openai_model}")
        resp = self.client.chat.completions.create(
            model=self.config.openai_model,
            messages=messages,
            temperature=self.config.openai_temperature,
            response_format={
                "type": "json_schema",
                "json_schema": {
                    "name": name,
                    "schema": schema.model_json_schema(),
                    "strict": True,
                },
            },
        )

        if not resp.choices:
            self.logger.warning(f"Extraction '{name}' returned no choices")
            return None

        message = resp.choices[0].message
        refusal = getattr(message, "refusal", None)
        if refusal:
            self.logger.warning(f"Extraction '{name}' refused by model: {refusal}")
            return None

        content = message.content or ""
        if not content.strip():
            self.logger.warning(f"Extraction '{name}' returned empty content")
            return None

        try:
            data = json.loads(content)
        except json.JSONDecodeError as exc:
            self.logger.warning(f"Extraction '{name}' returned invalid JSON: {exc}")
            return None

        try:
            return schema.model_validate(data)
        except ValidationError as exc:
            self.logger.warning(
                f"Extraction '{name}' does not match schema: {exc.error_count()} error(s)"
            )
            return None

    def _maybe_create_client(self) -> OpenAI | None:
        """Create an OpenAI client if an API key is present."""

        api_key = getattr(self.config, "openai_api_key", "")
        if not api_key:
            self.logger.warning("OPENAI_API_KEY not set; structured extraction unavailable")
            return None
        return OpenAI(api_key=api_key)


def _kebab_case(name: str) -> str:
    return re.sub(r"(?<!^)(?=[A-Z])", "-", name).lower()
