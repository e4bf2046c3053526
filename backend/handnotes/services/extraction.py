import json
import logging
from functools import lru_cache

import httpx
import openai
from pydantic import ValidationError

from handnotes.ai_config import AIConfig, EXTRACT_TOOL_NAME
from handnotes.config import settings
from handnotes.errors import (
    InvalidInput,
    MalformedModelOutput,
    Misconfigured,
    QuotaExhausted,
    RateLimited,
    UpstreamFailure,
)
from handnotes.models.note import MeetingData

LOGGER = logging.getLogger("handnotes.extraction")


class ExtractionClient:
    """
    Turns one image (as a data URL) into MeetingData by forcing the gateway
    model to call the extract_meeting_data tool. One upstream call per
    extract(), no retries.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str,
        model: str,
        http_client: httpx.Client | None = None,
    ):
        self.api_key = api_key
        self.base_url = base_url
        self.model = model
        self.client = openai.OpenAI(
            api_key=api_key,
            base_url=base_url,
            max_retries=0,
            http_client=http_client,
        )

    def extract(self, image_data: str | None) -> MeetingData:
        if not image_data:
            raise InvalidInput()
        if not self.api_key:
            raise Misconfigured()

        try:
            completion = self.client.chat.completions.create(
                model=self.model,
                messages=AIConfig.build_messages(image_data),
                tools=[AIConfig.EXTRACT_TOOL],
                tool_choice=AIConfig.TOOL_CHOICE,
            )
        except openai.APIStatusError as e:
            if e.status_code == 429:
                raise RateLimited() from e
            if e.status_code == 402:
                raise QuotaExhausted() from e
            LOGGER.error("AI gateway error: %s %s", e.status_code, e.response.text)
            raise UpstreamFailure() from e
        except openai.APIConnectionError as e:
            LOGGER.error("AI gateway unreachable: %s", e)
            raise UpstreamFailure() from e

        return parse_completion(completion)


def parse_completion(completion) -> MeetingData:
    """Pick the first function tool call and validate its arguments."""
    choices = completion.choices or []
    tool_calls = (choices[0].message.tool_calls or []) if choices else []
    call = next((c for c in tool_calls if c.type == "function"), None)
    if call is None:
        raise MalformedModelOutput()
    if call.function.name != EXTRACT_TOOL_NAME:
        LOGGER.warning("Model called unexpected tool %r", call.function.name)

    try:
        return MeetingData.model_validate(json.loads(call.function.arguments))
    except (json.JSONDecodeError, TypeError, ValidationError) as e:
        LOGGER.error("Tool arguments do not match schema: %s", e)
        raise MalformedModelOutput() from e


@lru_cache
def get_extraction_client() -> ExtractionClient:
    return ExtractionClient(
        api_key=settings.ai_gateway_api_key,
        base_url=settings.ai_gateway_url,
        model=settings.ai_model,
    )
