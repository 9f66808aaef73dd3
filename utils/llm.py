# utils/llm.py
from __future__ import annotations
from typing import Dict, Any, Optional
import json
import logging

import requests
from langsmith import traceable

from utils import config

logger = logging.getLogger(__name__)

_BACKEND      = config.LLM_BACKEND
_API_KEY      = config.GEMINI_API_KEY
_MODEL        = config.GEMINI_MODEL
_GEMINI_URL   = config.GEMINI_URL
_OLLAMA_URL   = config.OLLAMA_URL
_OLLAMA_MODEL = config.OLLAMA_MODEL
_TIMEOUT      = config.LLM_TIMEOUT

NOT_CONFIGURED = "API Key not configured."
UNAVAILABLE = "AI service temporarily unavailable."
ADDRESS_UNAVAILABLE = "Address verification unavailable."


def is_configured() -> bool:
    if _BACKEND == "gemini":
        return bool(_API_KEY)
    return _BACKEND == "ollama"


def _gemini_generate(prompt: str, *, no_thinking: bool = False,
                     tools: Optional[list] = None, tool_config: Optional[dict] = None) -> Dict[str, Any]:
    """POST models/<model>:generateContent and return the decoded response body."""
    payload: Dict[str, Any] = {"contents": [{"role": "user", "parts": [{"text": prompt}]}]}
    if no_thinking:
        payload["generationConfig"] = {"thinkingConfig": {"thinkingBudget": 0}}
    if tools:
        payload["tools"] = tools
    if tool_config:
        payload["toolConfig"] = tool_config

    resp = requests.post(
        f"{_GEMINI_URL}/models/{_MODEL}:generateContent",
        headers={"x-goog-api-key": _API_KEY, "Content-Type": "application/json"},
        json=payload,
        timeout=_TIMEOUT,
    )
    resp.raise_for_status()
    return resp.json()


def _gemini_text(body: Dict[str, Any]) -> str:
    candidates = body.get("candidates") or []
    if not candidates:
        return ""
    parts = (candidates[0].get("content") or {}).get("parts") or []
    return "".join(p.get("text", "") for p in parts if isinstance(p, dict)).strip()


def _ollama_generate(prompt: str, max_tokens: int = 256) -> str:
    """
    Call Ollama /api/generate and accumulate the streamed 'response' field.
    """
    payload = {
        "model": _OLLAMA_MODEL,
        "prompt": prompt,
        "options": {"num_predict": max_tokens},
    }
    resp = requests.post(f"{_OLLAMA_URL}/api/generate", json=payload, timeout=_TIMEOUT, stream=True)
    resp.raise_for_status()

    text = ""
    for line in resp.iter_lines():
        if not line:
            continue
        try:
            obj = json.loads(line.decode("utf-8"))
        except ValueError:
            # partial chunk
            continue
        text += obj.get("response", "")
        if obj.get("done", False):
            break
    return text.strip()


def _generate(prompt: str, *, no_thinking: bool = False) -> str:
    if _BACKEND == "ollama":
        return _ollama_generate(prompt)
    return _gemini_text(_gemini_generate(prompt, no_thinking=no_thinking))


def _ask(prompt: str, empty_reply: str, *, no_thinking: bool = False) -> str:
    if not is_configured():
        return NOT_CONFIGURED
    try:
        text = _generate(prompt, no_thinking=no_thinking)
    except (requests.RequestException, ValueError) as e:
        logger.error("Generative API error: %s", e)
        return UNAVAILABLE
    return text or empty_reply


@traceable(name="ai.insights", tags=["ai", "dashboard"])
def generate_insights(context_data: str) -> str:
    return _ask(config.INSIGHTS_PROMPT.format(context=context_data), "No insights available.", no_thinking=True)


@traceable(name="ai.marketing", tags=["ai", "crm"])
def generate_marketing_campaign(segment: str, customer_data: str) -> str:
    prompt = config.MARKETING_PROMPT.format(segment=segment, customer_data=customer_data)
    return _ask(prompt, "Could not generate campaign.")


@traceable(name="ai.inventory", tags=["ai", "inventory"])
def generate_inventory_insight(inventory_context: str) -> str:
    return _ask(config.INVENTORY_PROMPT.format(context=inventory_context), "No insights available.", no_thinking=True)


@traceable(name="ai.staffing", tags=["ai", "staff"])
def generate_staffing_insight(schedule_context: str) -> str:
    return _ask(config.STAFFING_PROMPT.format(context=schedule_context), "No staffing insights available.",
                no_thinking=True)


def _first_map_uri(body: Dict[str, Any]) -> Optional[str]:
    candidates = body.get("candidates") or []
    if not candidates:
        return None
    chunks = (candidates[0].get("groundingMetadata") or {}).get("groundingChunks") or []
    for chunk in chunks:
        uri = (chunk.get("maps") or {}).get("uri")
        if uri:
            return uri
    return None


@traceable(name="ai.verify_address", tags=["ai", "delivery"])
def verify_address(address: str, user_location: Optional[Dict[str, float]] = None) -> Dict[str, Optional[str]]:
    """
    Ask the model to confirm or correct a delivery address using Maps grounding.
    ``user_location`` is ``{"lat": .., "lng": ..}`` and only biases the lookup.
    """
    if not is_configured():
        return {"text": NOT_CONFIGURED, "map_uri": None}

    prompt = config.ADDRESS_PROMPT.format(address=address)
    try:
        if _BACKEND == "ollama":
            # no grounding tools on a local model
            return {"text": _ollama_generate(prompt) or "No details found.", "map_uri": None}

        tool_config = None
        if user_location:
            tool_config = {
                "retrievalConfig": {
                    "latLng": {"latitude": user_location["lat"], "longitude": user_location["lng"]}
                }
            }
        body = _gemini_generate(prompt, tools=[{"googleMaps": {}}], tool_config=tool_config)
    except (requests.RequestException, ValueError, KeyError) as e:
        logger.error("Generative API error: %s", e)
        return {"text": ADDRESS_UNAVAILABLE, "map_uri": None}

    return {"text": _gemini_text(body) or "No details found.", "map_uri": _first_map_uri(body)}


def ping_backend(timeout: float = 0.8) -> bool:
    if _BACKEND != "ollama":
        return True
    try:
        return requests.get(f"{_OLLAMA_URL}/api/tags", timeout=timeout).ok
    except requests.RequestException:
        return False
