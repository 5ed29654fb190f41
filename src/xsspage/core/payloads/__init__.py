"""Random payload generation, payload indicator detection and the payload
reference database."""

from xsspage.core.payloads.database import (
    PAYLOAD_CATEGORIES,
    PAYLOADS,
    PayloadRecord,
    category_counts,
    get_payloads_by_category,
    search_payloads,
)
from xsspage.core.payloads.detector import (
    DETECTION_NOTE,
    DetectionResult,
    detect_xss,
    get_severity,
)
from xsspage.core.payloads.generator import (
    INJECTION_CONTEXTS,
    GeneratedPayload,
    apply_random_variations,
    generate_random_payloads,
)

__all__ = [
    "DETECTION_NOTE",
    "INJECTION_CONTEXTS",
    "PAYLOADS",
    "PAYLOAD_CATEGORIES",
    "DetectionResult",
    "GeneratedPayload",
    "PayloadRecord",
    "apply_random_variations",
    "category_counts",
    "detect_xss",
    "generate_random_payloads",
    "get_payloads_by_category",
    "get_severity",
    "search_payloads",
]
