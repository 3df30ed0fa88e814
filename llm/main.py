import logging
from typing import Optional
import openai
from .config import config, PLACEHOLDER_API_KEY

logger = logging.getLogger(__name__)


class LLMNotConfiguredError(RuntimeError):
    pass


def is_configured() -> bool:
    """A real Groq key is set (not missing, not the .env placeholder)."""
    api_key = config.GROQ_API_KEY
    return bool(api_key) and api_key != PLACEHOLDER_API_KEY


def _client() -> openai.OpenAI:
    # No client-side retries: a slow or failing call falls back instead
    return openai.OpenAI(
        api_key=config.GROQ_API_KEY,
        base_url=config.LLM_BASE_URL,
        timeout=config.LLM_TIMEOUT,
        max_retries=0,
    )


def complete(
    prompt: str,
    max_tokens: Optional[int] = None,
    temperature: Optional[float] = None,
) -> str:
    """
    Single-shot completion against the configured OpenAI-compatible endpoint.

    Args:
        prompt: Full user prompt
        max_tokens: Token budget (defaults to LLM_MAX_TOKENS)
        temperature: Sampling temperature (defaults to LLM_TEMPERATURE)

    Returns:
        str: Raw response text, possibly empty

    Raises:
        LLMNotConfiguredError: No API key configured
        openai.APIError: Request failed or timed out
    """
    if not is_configured():
        raise LLMNotConfiguredError("GROQ_API_KEY is not set")

    logger.debug(f"Requesting completion from {config.LLM_MODEL}")
    response = _client().chat.completions.create(
        model=config.LLM_MODEL,
        messages=[{"role": "user", "content": prompt}],
        max_tokens=max_tokens if max_tokens is not None else config.LLM_MAX_TOKENS,
        temperature=temperature if temperature is not None else config.LLM_TEMPERATURE,
    )

    if not response.choices:
        return ""
    return response.choices[0].message.content or ""
