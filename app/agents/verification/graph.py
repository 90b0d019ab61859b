"""Waste Verification Agent: LangGraph StateGraph implementation.

Graph: prepare_image → call_model → parse_response → validate → END
Any node that fails sets ``error`` and the graph ends early with status=failure.
Single attempt; nothing is retried.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any, Literal

from langgraph.graph import StateGraph, END
from pydantic import ValidationError

from app.agents.llm_provider import LLMProvider
from app.agents.state import VerificationState
from app.agents.verification.prompts import WASTE_VERIFICATION_PROMPT
from app.config import get_settings
from app.schemas import VerificationResult
from app.services.image_intake import ImageSelection, split_data_url

logger = logging.getLogger(__name__)

REQUIRED_KEYS = ("wasteType", "quantity", "confidence")

_FENCE_RE = re.compile(r"^\s*```(?:json)?\s*(.*?)\s*```\s*$", re.DOTALL | re.IGNORECASE)


# ── Helpers ───────────────────────────────────────────────

def strip_code_fence(text: str) -> str:
    """Remove one surrounding markdown code fence, if present."""
    m = _FENCE_RE.match(text)
    return m.group(1) if m else text.strip()


def parse_reply(text: str) -> dict[str, Any]:
    """Parse the model reply as a JSON object. Raises ValueError otherwise."""
    parsed = json.loads(strip_code_fence(text))
    if not isinstance(parsed, dict):
        raise ValueError(f"Expected a JSON object, got {type(parsed).__name__}")
    return parsed


def _is_present(key: str, value: Any, allow_zero_confidence: bool) -> bool:
    if (
        key == "confidence" and allow_zero_confidence
        and isinstance(value, (int, float)) and not isinstance(value, bool)
    ):
        return True
    return bool(value)


def missing_keys(parsed: dict[str, Any], allow_zero_confidence: bool = False) -> list[str]:
    """Required keys that are absent or falsy. Confidence 0 counts as missing by default."""
    return [k for k in REQUIRED_KEYS if not _is_present(k, parsed.get(k), allow_zero_confidence)]


# ── Node functions ────────────────────────────────────────

def prepare_image_node(state: VerificationState) -> dict:
    """Strip the data-URL header, keeping the mime type separately."""
    try:
        mime_type, b64_data = split_data_url(state["data_url"])
    except ValueError as e:
        logger.error(f"Cannot prepare image payload: {e}")
        return {"error": "bad_image"}
    return {"mime_type": mime_type, "b64_data": b64_data}


def build_call_model_node(llm: LLMProvider | None):
    async def call_model_node(state: VerificationState) -> dict:
        """Send prompt + inline image in one request, await the full text."""
        try:
            provider = llm
            if provider is None:
                from app.agents.llm_provider import get_llm_provider
                provider = get_llm_provider()
            text = await provider.analyze_image(state["prompt"], state["mime_type"], state["b64_data"])
        except Exception as e:
            logger.error(f"Error verifying waste: {e}")
            return {"error": "upstream"}
        return {"raw_text": text or ""}

    return call_model_node


def parse_response_node(state: VerificationState) -> dict:
    try:
        parsed = parse_reply(state["raw_text"])
    except ValueError:
        # json.JSONDecodeError is a ValueError
        logger.error(f"Failed to parse JSON response: {state['raw_text']!r}")
        return {"error": "malformed"}
    return {"parsed": parsed}


def validate_node(state: VerificationState) -> dict:
    parsed = state["parsed"]
    missing = missing_keys(parsed, state["config"].get("allow_zero_confidence", False))
    if missing:
        logger.error(f"Invalid verification result (missing {missing}): {parsed}")
        return {"error": "invalid"}
    try:
        result = VerificationResult(
            waste_type=str(parsed["wasteType"]),
            quantity=str(parsed["quantity"]),
            confidence=parsed["confidence"],
        )
    except ValidationError as e:
        logger.error(f"Invalid verification result: {e}")
        return {"error": "invalid"}
    return {"result": result.model_dump(by_alias=True)}


def finalize_node(state: VerificationState) -> dict:
    return {"status": "failure" if state["error"] else "success"}


def continue_or_finalize(state: VerificationState) -> Literal["next", "finalize"]:
    """Conditional edge: skip to finalize once a node has reported an error."""
    return "finalize" if state["error"] else "next"


# ── Build graph ───────────────────────────────────────────

def build_verification_graph(llm: LLMProvider | None = None):
    graph = StateGraph(VerificationState)

    graph.add_node("prepare_image", prepare_image_node)
    graph.add_node("call_model", build_call_model_node(llm))
    graph.add_node("parse_response", parse_response_node)
    graph.add_node("validate", validate_node)
    graph.add_node("finalize", finalize_node)

    graph.set_entry_point("prepare_image")
    for node, next_node in (
        ("prepare_image", "call_model"),
        ("call_model", "parse_response"),
        ("parse_response", "validate"),
    ):
        graph.add_conditional_edges(node, continue_or_finalize, {
            "next": next_node,
            "finalize": "finalize",
        })
    graph.add_edge("validate", "finalize")
    graph.add_edge("finalize", END)

    return graph.compile()


# ── Public API ────────────────────────────────────────────

async def run_verification(
    image: ImageSelection,
    llm: LLMProvider | None = None,
    allow_zero_confidence: bool | None = None,
) -> VerificationResult | None:
    """Classify the waste in ``image``. Returns None on any failure."""
    if allow_zero_confidence is None:
        allow_zero_confidence = get_settings().verification.allow_zero_confidence
    initial_state: VerificationState = {
        "data_url": image.preview,
        "mime_type": "",
        "b64_data": "",
        "prompt": WASTE_VERIFICATION_PROMPT,
        "raw_text": "",
        "parsed": {},
        "result": {},
        "error": "",
        "status": "",
        "config": {"allow_zero_confidence": allow_zero_confidence},
    }

    graph = build_verification_graph(llm)
    final = await graph.ainvoke(initial_state)

    if final["status"] != "success":
        return None
    return VerificationResult.model_validate(final["result"])
