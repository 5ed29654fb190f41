"""Content-Security-Policy parser, payload evaluator and scorer."""

from xsspage.core.csp.builder import analyze_csp, generate_csp
from xsspage.core.csp.directives import (
    BYPASS_TECHNIQUES,
    CATEGORIES,
    CSP_DIRECTIVES,
    CSP_TEMPLATES,
    directives_by_category,
)
from xsspage.core.csp.evaluator import (
    DIRECTIVE_FOR_TYPE,
    detect_payload_type,
    test_payload_against_csp,
)
from xsspage.core.csp.models import (
    BypassTechnique,
    CSPDirective,
    CSPTemplate,
    CSPVerdict,
    ParsedCSP,
    ParsedDirective,
    SecurityScore,
)
from xsspage.core.csp.parser import INVALID_HEADER, parse_csp
from xsspage.core.csp.scoring import calculate_security_score, rating_for

__all__ = [
    "BYPASS_TECHNIQUES",
    "CATEGORIES",
    "CSP_DIRECTIVES",
    "CSP_TEMPLATES",
    "DIRECTIVE_FOR_TYPE",
    "INVALID_HEADER",
    "BypassTechnique",
    "CSPDirective",
    "CSPTemplate",
    "CSPVerdict",
    "ParsedCSP",
    "ParsedDirective",
    "SecurityScore",
    "analyze_csp",
    "calculate_security_score",
    "detect_payload_type",
    "directives_by_category",
    "generate_csp",
    "parse_csp",
    "rating_for",
    "test_payload_against_csp",
]
