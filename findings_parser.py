"""Parsing of raw findings emitted by the reviewing agent."""

import json
import logging
import re

from pydantic import ValidationError as PydanticValidationError

from errors import ValidationError
from models import Finding, describe_validation_error

logger = logging.getLogger(__name__)

_FENCED_BLOCK = re.compile(r"```(?:json)?\s*(.*?)```", re.DOTALL)


def _looks_like_findings(value) -> bool:
    if isinstance(value, dict):
        return "findings" in value
    return isinstance(value, list) and all(isinstance(item, dict) for item in value)


def _scan(text: str, decoder: json.JSONDecoder):
    """Yield ``(value, error)`` for each top-level bracket in *text*."""
    pos = 0
    while True:
        starts = [i for i in (text.find("{", pos), text.find("[", pos)) if i != -1]
        if not starts:
            return
        start = min(starts)
        try:
            value, end = decoder.raw_decode(text, start)
        except json.JSONDecodeError as e:
            yield None, e
            pos = start + 1
        else:
            yield value, None
            pos = end


def _extract_payload(text: str):
    """
    Find the findings payload in *text*.

    A fenced block is searched before the whole text, and bracketed prose
    around the payload is skipped. When nothing looks like findings the
    first decoded value is returned so the caller can report its shape.
    """
    decoder = json.JSONDecoder()
    fenced = _FENCED_BLOCK.search(text)
    sources = [fenced.group(1), text] if fenced else [text]

    first_value, first_error, decoded = None, None, False
    for source in sources:
        for value, error in _scan(source, decoder):
            if error is not None:
                first_error = first_error or error
                continue
            if _looks_like_findings(value):
                return value
            if not decoded:
                first_value, decoded = value, True

    if decoded:
        return first_value
    if first_error is not None:
        raise ValidationError(f"Malformed findings JSON: {first_error}") from first_error
    raise ValidationError("No JSON findings payload found")


def parse_findings(text: str) -> list[Finding]:
    """
    Validate the agent's findings payload into Finding objects.

    Accepts ``{"findings": [...], "summary": "..."}`` or a bare array,
    optionally wrapped in a Markdown code fence or surrounded by prose.
    Emission order is kept.

    Raises:
        ValidationError: If the payload or any single finding is invalid
    """
    payload = _extract_payload(text)

    if isinstance(payload, dict):
        if "findings" not in payload:
            raise ValidationError("Payload has no 'findings' array")
        entries = payload["findings"]
    else:
        entries = payload

    if not isinstance(entries, list):
        raise ValidationError("'findings' must be a JSON array")

    findings: list[Finding] = []
    for index, entry in enumerate(entries, 1):
        if not isinstance(entry, dict):
            raise ValidationError(f"Finding #{index} is not a JSON object")
        try:
            findings.append(Finding.model_validate(entry))
        except PydanticValidationError as e:
            logger.warning("Rejected finding #%d (%d error(s))", index, e.error_count())
            raise ValidationError(
                f"Finding #{index}: {describe_validation_error(e)}"
            ) from e

    logger.info("Parsed %d finding(s)", len(findings))
    return findings
