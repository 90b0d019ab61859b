"""LangGraph TypedDict state for the waste verification agent."""

from __future__ import annotations

from typing import TypedDict, Any


class VerificationState(TypedDict):
    data_url: str  # preview data URL of the selected image
    mime_type: str
    b64_data: str  # data-URL header stripped
    prompt: str
    raw_text: str  # model reply, verbatim
    parsed: dict[str, Any]
    result: dict[str, Any]  # validated {wasteType, quantity, confidence}
    error: str  # "" while the pipeline is healthy
    status: str  # success | failure
    config: dict
