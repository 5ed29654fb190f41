"""Remediation lookups for scanner findings."""

from __future__ import annotations

import re

from xsspage.core.dom.catalog import (
    FRAMEWORK_GUIDANCE,
    GENERAL_RECOMMENDATIONS,
    SAFE_ALTERNATIVES,
)
from xsspage.core.dom.models import Finding, RemediationAdvice, SafeAlternative

_NON_LETTERS = re.compile(r"[^a-z]")


def _normalize(name: str) -> str:
    return _NON_LETTERS.sub("", name.lower())


_ALTERNATIVES_BY_KEY: dict[str, tuple[SafeAlternative, ...]] = {
    _normalize(name): alternatives for name, alternatives in SAFE_ALTERNATIVES.items()
}


def get_safe_alternatives(sink_name: str) -> list[SafeAlternative]:
    """Return the safe replacements for a sink, or an empty list.

    Names are compared lowercased with non-letters removed, so ``v-html``,
    ``VHTML`` and ``v_html`` all resolve to the same entry.
    """
    return list(_ALTERNATIVES_BY_KEY.get(_normalize(sink_name), ()))


def get_remediation_advice(finding: Finding | str) -> RemediationAdvice:
    """Build remediation advice for a finding (or a bare sink name).

    Falls back to the three general recommendations when the sink has no
    dedicated alternatives.
    """
    name = finding if isinstance(finding, str) else finding.name
    alternatives = get_safe_alternatives(name)
    if not alternatives:
        return RemediationAdvice("General Recommendations", GENERAL_RECOMMENDATIONS)
    return RemediationAdvice(f"Safe Alternatives to {name}", tuple(alternatives))


def get_framework_guidance(framework: str) -> dict[str, object]:
    """Safe practices for *framework*; unknown names get the vanilla advice."""
    return FRAMEWORK_GUIDANCE.get(framework, FRAMEWORK_GUIDANCE["vanilla"])
