import logging
import random
import re
from typing import Callable, Optional

import llm
from llm.config import config as llm_config
from llm.prompt import REMINDER_PROMPTS
from ..scheduler_config import MESSAGE_MAX_LENGTH

logger = logging.getLogger(__name__)

DEFAULT_LANGUAGE = "en"

FALLBACK_MESSAGES = {
    "cs": [
        "Neboj se, napij se!",
        "Kdo nepije, nežije!",
        "Kde bys byl, kdyby ses nenapil?",
        "Je čas na sklenici vody",
    ],
    "en": [
        "Time to hydrate!",
        "Drink up!",
        "Stay refreshed!",
        "Quick water break?",
    ],
}

NOTIFICATION_TITLES = {
    "cs": "Připomínka pití vody",
    "en": "Water reminder",
}

SUPPORTED_LANGUAGES = tuple(FALLBACK_MESSAGES)

_QUOTES = "\"'“”„‘’"
_LOCALE_SEPARATOR = re.compile(r"[_\-.@]")


def map_locale_to_language(locale: Optional[str]) -> str:
    """cs_CZ / cs-CZ -> "cs"; anything unsupported or malformed -> "en"."""
    if not locale or not isinstance(locale, str):
        return DEFAULT_LANGUAGE
    base_lang = _LOCALE_SEPARATOR.split(locale.strip(), 1)[0].lower()
    if base_lang in FALLBACK_MESSAGES:
        return base_lang
    return DEFAULT_LANGUAGE


def pick_fallback_message(lang: str, rng: Optional[random.Random] = None) -> str:
    messages = FALLBACK_MESSAGES.get(lang) or FALLBACK_MESSAGES[DEFAULT_LANGUAGE]
    return (rng or random).choice(messages)


def clean_generated_text(text: str, max_length: int = MESSAGE_MAX_LENGTH) -> str:
    """Strip whitespace and one pair of surrounding quotes, cap the length."""
    message = (text or "").strip()
    if message[:1] in _QUOTES:
        message = message[1:]
    if message[-1:] in _QUOTES:
        message = message[:-1]
    message = message.strip()

    if len(message) > max_length:
        message = message[:max_length] + "..."
    return message


def generate_reminder_message(
    locale: Optional[str],
    complete: Optional[Callable[..., str]] = None,
    rng: Optional[random.Random] = None,
) -> str:
    """
    Produce the reminder body text in the subscriber's language.

    Tries the LLM first; any failure (no key, timeout, API error, empty
    output) falls back to a curated message. Never raises.
    """
    lang = map_locale_to_language(locale)

    if complete is None:
        if not llm.is_configured():
            return pick_fallback_message(lang, rng)
        complete = llm.complete

    try:
        text = complete(REMINDER_PROMPTS[lang], max_tokens=llm_config.LLM_MAX_TOKENS,
                        temperature=llm_config.LLM_TEMPERATURE)
        logger.info(f"AI message generated ({lang}): {text!r}")
        message = clean_generated_text(text)
    except Exception as e:
        logger.error(f"AI message generation failed, using fallback: {e}")
        return pick_fallback_message(lang, rng)

    if not message:
        return pick_fallback_message(lang, rng)
    return message
