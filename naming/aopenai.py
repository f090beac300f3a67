import json
from typing import Any

import openai

from naming.exceptions import UpstreamNetworkError, UpstreamParseError


TIMEOUT = 60 * 2
DEFAULT_MODEL = "gpt-4o"


def openai_client_factory(
    token: str | None,
    *,
    timeout: float = TIMEOUT,
) -> openai.AsyncClient:
    # Retries happen in the pipeline's attempt loop, not here.
    return openai.AsyncClient(api_key=token, timeout=timeout, max_retries=0)


async def quick_chat(
    msg: str,
    *,
    openai_client: openai.AsyncClient,
    model: str = DEFAULT_MODEL,
    json_mode: bool = False,
    **kwargs: Any,
) -> str:
    if json_mode:
        kwargs["response_format"] = {"type": "json_object"}
    try:
        resp = await openai_client.chat.completions.create(
            model=model,
            messages=[{"role": "user", "content": msg}],
            **kwargs,
        )
    except openai.APIError as e:
        raise UpstreamNetworkError(f"OpenAI request failed. {e}") from e
    ans = resp.choices[0].message.content or ""
    return ans.strip()


def parse_json_object(text: str) -> dict[str, Any]:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise UpstreamParseError(f"Provider did not return valid JSON. {e}") from e
    if not isinstance(data, dict):
        raise UpstreamParseError("Provider did not return a JSON object.")
    return data
