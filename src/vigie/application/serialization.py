"""
Serialization helpers for result payloads.
"""

from typing import Any, Dict


def normalize_outcome_fields(payload: Dict[str, Any]) -> Dict[str, Any]:
    """
    Ensure every object of a result payload has "status" and "outcome".

    Legacy producers emit only one of the two synonyms; the missing one
    is synthesized as a copy, recursively through "checks". The payload
    is copied, never modified in place.

    Args:
        payload: Result dictionary (CheckResult.to_dict shape)

    Returns:
        Normalized copy of the payload
    """
    normalized = dict(payload)

    status = normalized.get("status")
    outcome = normalized.get("outcome")
    if status is not None and outcome is None:
        normalized["outcome"] = status
    elif outcome is not None and status is None:
        normalized["status"] = outcome

    checks = normalized.get("checks")
    if checks is not None:
        normalized["checks"] = [
            normalize_outcome_fields(check) if isinstance(check, dict) else check
            for check in checks
        ]

    return normalized
