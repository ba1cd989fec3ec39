# stylist/domain/services/completion_svc.py

from __future__ import annotations
from typing import List, Optional, Protocol
import asyncio
import json
import re
import logging
from time import monotonic as _now

from openai import AsyncOpenAI
from pydantic import BaseModel, Field, ValidationError

from stylist.core.config import Settings, get_settings
from stylist.domain.services.errors import CompletionError
from stylist.domain.services.constants import MAX_SUGGESTIONS
from stylist.domain.services.prompts import (
    RELATED_SEARCH_CONTEXT,
    chat_task,
    related_searches_task,
    system_prompt,
)

logger = logging.getLogger(__name__)

# =============================================================================
#                               RESULT SCHEMA
# =============================================================================

class Completion(BaseModel):
    text: str
    suggestions: List[str] = Field(default_factory=list)


class _CompletionPayload(BaseModel):
    """
    Expected JSON shape inside the model reply:
      {"response": "...", "suggestions": ["...", ...]}
    """
    response: str = ""
    suggestions: List[str] = Field(default_factory=list)


class TextCompleter(Protocol):
    async def complete(self, prompt: str, context: str = "") -> Completion: ...


# Regex to strip code fences (``` or ```json) from LLM output
_CODE_FENCE_RE = re.compile(r"^```(?:json)?\s*|\s*```$", re.MULTILINE)
# First {...} block, greedy so nested objects survive
_JSON_OBJECT_RE = re.compile(r"\{[\s\S]*\}")


def _strip_fences(s: str) -> str:
    """Remove ``` or ```json fences the LLM might add."""
    return _CODE_FENCE_RE.sub("", s).strip()


def parse_completion(raw: str) -> Completion:
    """
    Best-effort extraction of the JSON object embedded in free text.
    Falls back to the raw text with no suggestions when nothing parses.
    """
    text = _strip_fences(raw)
    match = _JSON_OBJECT_RE.search(text)
    if match:
        try:
            payload = _CompletionPayload.model_validate(json.loads(match.group(0)))
            return Completion(
                text=payload.response.strip() or text,
                suggestions=[s.strip() for s in payload.suggestions if s and s.strip()],
            )
        except (json.JSONDecodeError, ValidationError) as e:
            logger.debug(f"Could not parse JSON from completion, using raw text: {e}")
    return Completion(text=text)


# =============================================================================
#                               OPENAI COMPLETER
# =============================================================================

class OpenAICompleter:
    """
    Text-completion collaborator over OpenAI chat completions.
    Every call is bounded by `settings.openai_timeout_s`; any failure surfaces
    as CompletionError and is never retried here.
    """

    def __init__(self, settings: Optional[Settings] = None, client: Optional[AsyncOpenAI] = None):
        self.settings = settings or get_settings()
        self._client = client

    @property
    def client(self) -> AsyncOpenAI:
        if self._client is None:
            if not self.settings.OPENAI_API_KEY:
                raise CompletionError("OPENAI_API_KEY is not configured")
            self._client = AsyncOpenAI(api_key=self.settings.OPENAI_API_KEY)
        return self._client

    async def _call_llm(self, messages: List[dict]) -> str:
        s = self.settings
        t0 = _now()
        resp = await asyncio.wait_for(
            self.client.chat.completions.create(
                model=s.OPENAI_CHAT_MODEL,
                messages=messages,
                max_tokens=s.openai_max_tokens,
                temperature=s.openai_temperature,
                timeout=s.openai_timeout_s,
            ),
            timeout=s.openai_timeout_s,
        )
        dt = _now() - t0
        # Best-effort usage logging
        u = getattr(resp, "usage", None)
        logger.info(
            f"LLM call model={getattr(resp, 'model', s.OPENAI_CHAT_MODEL)} duration={dt:.3f}s "
            f"tokens(prompt={getattr(u, 'prompt_tokens', None)}, "
            f"completion={getattr(u, 'completion_tokens', None)})"
        )
        return resp.choices[0].message.content or ""

    async def complete(self, prompt: str, context: str = "") -> Completion:
        messages = [
            {"role": "system", "content": system_prompt(context)},
            {"role": "user", "content": chat_task(prompt)},
        ]
        try:
            raw = await self._call_llm(messages)
        except CompletionError:
            raise
        except asyncio.TimeoutError as e:
            raise CompletionError(f"completion timed out after {self.settings.openai_timeout_s}s") from e
        except Exception as e:
            raise CompletionError(f"completion failed: {e}") from e

        if not raw.strip():
            raise CompletionError("empty completion")
        logger.debug(f"LLM raw response preview: {raw[:500]}{'…' if len(raw) > 500 else ''}")
        return parse_completion(raw)


# =============================================================================
#                             RELATED SEARCHES
# =============================================================================

# Leading "-", "*", "•" or "1." / "1)" list markers
_LIST_MARKER_RE = re.compile(r"^\s*(?:[-*•]|\d+[.)])\s*")


async def related_searches(completer: TextCompleter, query: str, limit: int = MAX_SUGGESTIONS) -> List[str]:
    """
    Related shopping queries for `query`, one chip per suggestion or line of
    text. Returns [] when the completer fails.
    """
    try:
        completion = await completer.complete(related_searches_task(query), RELATED_SEARCH_CONTEXT)
    except CompletionError as e:
        logger.warning(f"Related searches unavailable: {e}")
        return []

    lines = completion.suggestions or completion.text.splitlines()
    out: List[str] = []
    for line in lines:
        chip = _LIST_MARKER_RE.sub("", line).strip().strip('"').strip()
        if chip and chip not in out:
            out.append(chip)
    return out[:limit]
