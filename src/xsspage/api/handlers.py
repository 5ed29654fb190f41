"""Request handling for the HTTP adapter, independent of Flask.

Each handler takes the already-decoded request parameters (JSON body or
query string) plus the ``AppConfig``, validates them, calls one engine and
returns the JSON-ready response body. Validation failures raise
``PayloadValidationError``; the Flask layer turns that into a 400.
"""

from __future__ import annotations

import logging
import math
import random
import re
from collections.abc import Mapping
from typing import Any

from xsspage.config import AppConfig
from xsspage.core.csp import calculate_security_score, parse_csp, test_payload_against_csp
from xsspage.core.dom import SUPPORTED_FRAMEWORKS, calculate_risk_score, detect_framework, scan_code
from xsspage.core.fuzzer import STRATEGY_KEYS, generate_mutations
from xsspage.core.payloads import INJECTION_CONTEXTS, generate_random_payloads, search_payloads
from xsspage.exceptions import PayloadValidationError

logger = logging.getLogger(__name__)

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def parse_limit(raw: Any, default: int, maximum: int) -> int:
    """Coerce a requested limit into ``[1, maximum]``.

    Strings are read by their leading digits, so ``"5abc"`` means 5. Missing,
    non-numeric or non-positive values fall back to *default*.
    """
    if isinstance(raw, bool):
        return default
    if isinstance(raw, int):
        limit = raw
    elif isinstance(raw, float):
        if not math.isfinite(raw):
            return default
        limit = int(raw)
    elif isinstance(raw, str):
        match = _LEADING_INT.match(raw)
        if match is None:
            return default
        limit = int(match.group(1))
    else:
        return default
    if limit < 1:
        return default
    return min(limit, maximum)


def parse_strategies(raw: Any, default_all: bool = True) -> dict[str, bool]:
    """Normalize a strategy list into the engine's flag mapping.

    Accepts a list of keys or a comma-separated string. Omitted (None or
    empty string) enables every strategy when *default_all* is True and none
    otherwise. Unknown keys are dropped.
    """
    if raw is None or raw == "":
        return {key: default_all for key in STRATEGY_KEYS}
    if isinstance(raw, str):
        requested = [part.strip() for part in raw.split(",")]
    elif isinstance(raw, (list, tuple)):
        requested = [str(part) for part in raw]
    else:
        raise PayloadValidationError(
            "Strategies must be a list or a comma-separated string"
        )
    return {key: key in requested for key in STRATEGY_KEYS}


def _parse_seed(raw: Any) -> int | str | None:
    if raw is None or raw == "":
        return None
    if isinstance(raw, bool) or not isinstance(raw, (int, str)):
        raise PayloadValidationError("Seed must be an integer or string")
    return raw


def _require_string(params: Mapping[str, Any], name: str, label: str) -> str:
    value = params.get(name)
    if value is None or value == "":
        raise PayloadValidationError(f"Missing required parameter: {name}")
    if not isinstance(value, str):
        raise PayloadValidationError(f"{label} must be a string")
    return value


# ---------------------------------------------------------------------------
# Handlers
# ---------------------------------------------------------------------------


def handle_fuzz(params: Mapping[str, Any], config: AppConfig) -> dict[str, Any]:
    """Mutation mode: mutate a supplied payload.

    The untouched original is left out of ``mutations`` and ``total``; it is
    returned as ``basePayload``.
    """
    payload = _require_string(params, "payload", "Payload")
    if len(payload) > config.max_payload_length:
        raise PayloadValidationError(
            f"Payload too large (max {config.max_payload_length} characters)"
        )

    limit = parse_limit(params.get("limit"), config.default_limit, config.max_limit)
    result = generate_mutations(payload, parse_strategies(params.get("strategies")))
    mutations = [m for m in result.mutations if m.strategy != "original"]
    returned = mutations[:limit]

    return {
        "mode": "mutation",
        "basePayload": payload,
        "strategies": result.strategies,
        "total": len(mutations),
        "returned": len(returned),
        "limit": limit,
        "mutations": [m.to_dict() for m in returned],
    }


def handle_generate(params: Mapping[str, Any], config: AppConfig) -> dict[str, Any]:
    """Generation mode: random payloads, optionally mutated once each.

    When strategies are given, each payload is replaced by its first
    mutation (if any) and tagged with the strategy that produced it.
    """
    limit = parse_limit(
        params.get("limit"), config.default_generate_count, config.max_limit
    )
    context = params.get("context")
    if context not in INJECTION_CONTEXTS:
        context = "any"

    rng = random.Random(_parse_seed(params.get("seed")))

    strategies = parse_strategies(params.get("strategies"), default_all=False)
    mutate = any(strategies.values())

    payloads: list[dict[str, Any]] = []
    for generated in generate_random_payloads(limit, context=context, rng=rng):
        entry = generated.to_dict()
        if mutate:
            result = generate_mutations(generated.payload, strategies)
            first = next((m for m in result.mutations if m.strategy != "original"), None)
            if first is not None:
                entry.update(
                    payload=first.payload,
                    mutationStrategy=first.strategy,
                    mutated=True,
                )
        payloads.append(entry)

    return {
        "mode": "generation",
        "context": context,
        "total": len(payloads),
        "returned": len(payloads),
        "limit": limit,
        "mutationsApplied": mutate,
        "payloads": payloads,
    }


def _optional_string(params: Mapping[str, Any], name: str) -> str | None:
    value = params.get(name)
    if value is None or value == "":
        return None
    if not isinstance(value, str):
        raise PayloadValidationError(f"Parameter {name} must be a string")
    return value


def handle_search(params: Mapping[str, Any], config: AppConfig) -> dict[str, Any]:
    """Query the payload database.

    ``count`` is the number of matches before the limit is applied.
    """
    query = _optional_string(params, "q") or ""
    filters = {
        name: _optional_string(params, name)
        for name in ("category", "severity", "context", "browser")
    }
    limit = parse_limit(
        params.get("limit"),
        min(config.default_search_limit, config.max_limit),
        config.max_limit,
    )

    matches = search_payloads(query, **filters)
    returned = matches[:limit]
    return {
        "query": query,
        "filters": filters,
        "count": len(matches),
        "returned": len(returned),
        "payloads": [p.to_dict() for p in returned],
    }


def handle_scan(params: Mapping[str, Any], config: AppConfig) -> dict[str, Any]:
    """Scan code for sinks and sources; ``framework: "auto"`` detects it."""
    code = _require_string(params, "code", "Code")
    if len(code) > config.max_code_length:
        raise PayloadValidationError(
            f"Code too large (max {config.max_code_length} characters)"
        )

    framework = params.get("framework") or config.default_framework
    if framework == "auto":
        framework = detect_framework(code)
    elif framework not in SUPPORTED_FRAMEWORKS:
        raise PayloadValidationError(
            f"Unknown framework: {framework} "
            f"(expected one of: auto, {', '.join(SUPPORTED_FRAMEWORKS)})"
        )

    result = scan_code(code, framework)
    body = result.to_dict()
    body["framework"] = framework
    body["risk"] = calculate_risk_score(result).to_dict()
    return body


def handle_csp(params: Mapping[str, Any], config: AppConfig) -> dict[str, Any]:
    """Parse and score a policy, and judge a payload against it if given."""
    policy = _require_string(params, "policy", "Policy")
    parsed = parse_csp(policy)
    body: dict[str, Any] = {
        "parsed": parsed.to_dict(),
        "score": calculate_security_score(parsed).to_dict(),
    }

    payload = params.get("payload")
    if payload:
        if not isinstance(payload, str):
            raise PayloadValidationError("Payload must be a string")
        if len(payload) > config.max_payload_length:
            raise PayloadValidationError(
                f"Payload too large (max {config.max_payload_length} characters)"
            )
        body["verdict"] = test_payload_against_csp(payload, parsed).to_dict()
    return body
