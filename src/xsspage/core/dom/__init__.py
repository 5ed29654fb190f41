"""DOM sink/source pattern scanner."""

from xsspage.core.dom.catalog import (
    DANGEROUS_SINKS,
    FRAMEWORK_GUIDANCE,
    KNOWN_PATTERNS,
    SAFE_ALTERNATIVES,
    SUPPORTED_FRAMEWORKS,
    UNTRUSTED_SOURCES,
)
from xsspage.core.dom.models import (
    DataFlow,
    Detection,
    Finding,
    KnownPattern,
    PatternMatch,
    RemediationAdvice,
    RiskScore,
    SafeAlternative,
    ScanResult,
    ScanSummary,
    SinkDefinition,
    SourceDefinition,
)
from xsspage.core.dom.remediation import (
    get_framework_guidance,
    get_remediation_advice,
    get_safe_alternatives,
)
from xsspage.core.dom.scanner import (
    calculate_risk_score,
    detect_framework,
    scan_code,
)

__all__ = [
    "DANGEROUS_SINKS",
    "FRAMEWORK_GUIDANCE",
    "KNOWN_PATTERNS",
    "SAFE_ALTERNATIVES",
    "SUPPORTED_FRAMEWORKS",
    "UNTRUSTED_SOURCES",
    "DataFlow",
    "Detection",
    "Finding",
    "KnownPattern",
    "PatternMatch",
    "RemediationAdvice",
    "RiskScore",
    "SafeAlternative",
    "ScanResult",
    "ScanSummary",
    "SinkDefinition",
    "SourceDefinition",
    "calculate_risk_score",
    "detect_framework",
    "get_framework_guidance",
    "get_remediation_advice",
    "get_safe_alternatives",
    "scan_code",
]
