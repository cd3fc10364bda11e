"""Chat completions through OpenRouter's OpenAI-compatible endpoint."""

import logging
from typing import Dict, List, Optional

import httpx
import openai

from .errors import CompletionError


OPENROUTER_ENDPOINT = "https://openrouter.ai/api/v1"
REFERER = "https://github.com/0raclide/oshi3-nihonto"
APP_TITLE = "Oshi3 Nihonto"

logger = logging.getLogger(__name__)


def user_message(text: str, image_url: Optional[str] = None) -> Dict:
    """Build a user turn, with the image first when one is attached."""
    if image_url is None:
        return {"role": "user", "content": text}
    return {
        "role": "user",
        "content": [
            {"type": "image_url", "image_url": {"url": image_url}},
            {"type": "text", "text": text},
        ],
    }


class CompletionClient:
    """Thin wrapper over openai.OpenAI pointed at OpenRouter."""

    def __init__(
        self,
        api_key: str,
        endpoint: str = OPENROUTER_ENDPOINT,
        timeout: float = 300.0,
        client: Optional[openai.OpenAI] = None,
    ):
        if client is None:
            client = openai.OpenAI(
                api_key=api_key,
                base_url=endpoint,
                http_client=httpx.Client(timeout=timeout),
                default_headers={"HTTP-Referer": REFERER, "X-Title": APP_TITLE},
                max_retries=0,
            )
        self.client = client

    def complete(
        self,
        model: str,
        messages: List[Dict],
        max_tokens: int,
        temperature: float,
    ) -> str:
        """Return the first choice's text.

        Raises:
            CompletionError: On any API error or an empty reply.
        """
        roles = [m["role"] for m in messages]
        logger.debug(f"Requesting {model} (roles={roles}, max_tokens={max_tokens}, temperature={temperature})")

        try:
            response = self.client.chat.completions.create(
                model=model,
                messages=messages,
                max_tokens=max_tokens,
                temperature=temperature,
            )
        except openai.APIStatusError as e:
            raise CompletionError(f"OpenRouter API error {e.status_code}: {e.message}") from e
        except openai.APIError as e:
            raise CompletionError(f"OpenRouter API error: {e}") from e

        if not response.choices:
            raise CompletionError("OpenRouter returned no choices")

        content = response.choices[0].message.content
        if not content or not content.strip():
            raise CompletionError("OpenRouter returned an empty completion")

        return content
