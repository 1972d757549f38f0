import logging
import os
import random
import time
from typing import cast

from fastapi import HTTPException
from openai import OpenAI, RateLimitError
from openai.types.chat import ChatCompletionMessageParam

from .models import ChatMessage

logger = logging.getLogger(__name__)

HISTORY_LIMIT = 12
FALLBACK_REPLY = "Sorry, I'm having trouble generating a response right now."

SYSTEM_PROMPT = (
    "You are an education counselor for students. "
    "Help with choosing colleges, finding scholarships and planning careers. "
    "Be concise, correct, and ask at most one clarifying question when needed."
)

LANGUAGE_NAMES = {
    "en": "English",
    "hi": "Hindi",
    "ta": "Tamil",
    "te": "Telugu",
    "bn": "Bengali",
    "mr": "Marathi",
}


def get_or_client() -> OpenAI:
    api_key = os.getenv("OPENROUTER_API_KEY")
    if not api_key:
        raise HTTPException(status_code=500, detail="OPENROUTER_API_KEY is not set")

    return OpenAI(
        api_key=api_key,
        base_url="https://openrouter.ai/api/v1",
        default_headers={
            "HTTP-Referer": os.getenv("OPENROUTER_SITE_URL", "http://localhost"),
            "X-Title": os.getenv("OPENROUTER_APP_NAME", "edu-counselor"),
        },
    )


def call_with_backoff(fn, max_retries: int = 5):
    base = 0.5
    for attempt in range(max_retries):
        try:
            return fn()
        except RateLimitError:
            if attempt == max_retries - 1:
                raise
            time.sleep(min(15.0, base * (2 ** attempt)) + random.uniform(0, 0.25))


def build_messages(history: list[ChatMessage], language: str | None = None) -> list[ChatCompletionMessageParam]:
    """``history`` is oldest first and already ends with the new user message."""
    system_prompt = SYSTEM_PROMPT
    lang = (language or "en").strip().lower()
    if lang != "en":
        system_prompt += f" Always answer in {LANGUAGE_NAMES.get(lang, lang)}."

    msgs = [{"role": "system", "content": system_prompt}]
    for m in history:
        if m.content:
            msgs.append({"role": "user" if m.is_user else "assistant", "content": m.content})
    return cast(list[ChatCompletionMessageParam], msgs)


def generate_reply(history: list[ChatMessage], language: str | None = None) -> str:
    client = get_or_client()
    model = os.getenv("OPENROUTER_MODEL", "deepseek/deepseek-r1-0528:free")
    input_messages = build_messages(history, language)

    try:
        resp = call_with_backoff(lambda: client.chat.completions.create(
            model=model,
            messages=input_messages,
        ))
        if resp is not None and resp.choices:
            reply = (resp.choices[0].message.content or "").strip()
        else:
            reply = ""
        return reply or FALLBACK_REPLY
    except RateLimitError:
        raise HTTPException(status_code=429, detail="Rate limited. Please retry in a few seconds.")
    except Exception as e:
        logger.error("LLM provider error: %s", e)
        raise HTTPException(status_code=502, detail=f"LLM provider error: {type(e).__name__}")
