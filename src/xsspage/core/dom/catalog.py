"""Rule catalogs for the DOM pattern scanner.

Dangerous sinks, untrusted sources, named vulnerability patterns, safe
alternatives and framework indicators. The tables are plain data consulted
by the generic dispatch in ``scanner``; adding a rule never needs new code
as long as its ``type`` is one the scanner already understands.

Entry order matters: findings are reported in catalog order, and
``FRAMEWORK_INDICATORS`` is checked first-match-wins.
"""

from __future__ import annotations

import re

from xsspage.core.dom.models import (
    KnownPattern,
    SafeAlternative,
    SinkDefinition,
    SourceDefinition,
)
from xsspage.core.severity import Severity

_C = Severity.CRITICAL
_H = Severity.HIGH
_M = Severity.MEDIUM

_XSS = "CWE-79"
_CODE_INJECTION = "CWE-95"

# ---------------------------------------------------------------------------
# Dangerous sinks
# ---------------------------------------------------------------------------

DANGEROUS_SINKS: tuple[SinkDefinition, ...] = (
    # Direct HTML manipulation
    SinkDefinition("innerHTML", "property", _C,
                   "Parses and renders HTML, allowing script execution",
                   "element.innerHTML = userInput;", "textContent", cwe=_XSS),
    SinkDefinition("outerHTML", "property", _C,
                   "Replaces element with parsed HTML",
                   "element.outerHTML = userInput;", "textContent", cwe=_XSS),
    SinkDefinition("insertAdjacentHTML", "method", _C,
                   "Inserts HTML at specified position",
                   'element.insertAdjacentHTML("beforeend", userInput);',
                   "insertAdjacentText or createElement", cwe=_XSS),
    SinkDefinition("document.write", "method", _C,
                   "Writes HTML directly to document stream",
                   "document.write(userInput);", "DOM manipulation methods", cwe=_XSS),
    SinkDefinition("document.writeln", "method", _C,
                   "Writes HTML with newline to document stream",
                   "document.writeln(userInput);", "DOM manipulation methods", cwe=_XSS),
    # JavaScript execution
    SinkDefinition("eval", "function", _C,
                   "Executes arbitrary JavaScript code",
                   "eval(userInput);", "JSON.parse for data, avoid for code",
                   cwe=_CODE_INJECTION),
    SinkDefinition("Function", "constructor", _C,
                   "Creates function from string, executes code",
                   "new Function(userInput)();", "Predefined functions",
                   cwe=_CODE_INJECTION),
    SinkDefinition("setTimeout", "function", _H,
                   "Executes code when first argument is string",
                   "setTimeout(userInput, 1000);", "setTimeout with function reference",
                   cwe=_CODE_INJECTION),
    SinkDefinition("setInterval", "function", _H,
                   "Executes code repeatedly when first argument is string",
                   "setInterval(userInput, 1000);", "setInterval with function reference",
                   cwe=_CODE_INJECTION),
    SinkDefinition("setImmediate", "function", _H,
                   "Executes code when argument is string",
                   "setImmediate(userInput);", "setImmediate with function reference",
                   cwe=_CODE_INJECTION),
    # Dynamic script loading
    SinkDefinition("script.src", "property", _C,
                   "Loads and executes external script",
                   "script.src = userInput;", "Whitelist allowed script sources", cwe=_XSS),
    SinkDefinition("script.text", "property", _C,
                   "Sets script content to be executed",
                   "script.text = userInput;", "Avoid dynamic script generation", cwe=_XSS),
    SinkDefinition("script.textContent", "property", _C,
                   "Sets script content to be executed",
                   "script.textContent = userInput;", "Avoid dynamic script generation",
                   cwe=_XSS),
    # Event handlers
    SinkDefinition("element.on*", "property", _H,
                   "Sets event handler from string",
                   "element.onclick = userInput;", "addEventListener with function",
                   cwe=_XSS),
    SinkDefinition("setAttribute", "method", _H,
                   "Can set dangerous attributes like onclick, onerror",
                   'element.setAttribute("onclick", userInput);',
                   "addEventListener for events, direct property for safe attributes",
                   cwe=_XSS),
    # Navigation
    SinkDefinition("location", "property", _H,
                   "Navigates to URL, javascript: URLs execute code",
                   "location = userInput;", "Validate URL, use location.href with checks",
                   cwe=_XSS),
    SinkDefinition("location.href", "property", _H,
                   "Navigates to URL, javascript: URLs execute code",
                   "location.href = userInput;", "Validate URL protocol", cwe=_XSS),
    SinkDefinition("location.assign", "method", _H,
                   "Navigates to URL, javascript: URLs execute code",
                   "location.assign(userInput);", "Validate URL protocol", cwe=_XSS),
    SinkDefinition("location.replace", "method", _H,
                   "Navigates to URL, javascript: URLs execute code",
                   "location.replace(userInput);", "Validate URL protocol", cwe=_XSS),
    # React
    SinkDefinition("dangerouslySetInnerHTML", "prop", _C,
                   "React prop that bypasses XSS protection",
                   "<div dangerouslySetInnerHTML={{__html: userInput}} />",
                   "Use children or textContent, sanitize with DOMPurify if needed",
                   framework="react", cwe=_XSS),
    # Vue
    SinkDefinition("v-html", "directive", _C,
                   "Vue directive that renders raw HTML",
                   '<div v-html="userInput"></div>',
                   "Use text interpolation {{ }}, sanitize with DOMPurify if needed",
                   framework="vue", cwe=_XSS),
    # Angular
    SinkDefinition("[innerHTML]", "binding", _H,
                   "Angular property binding for HTML content",
                   '<div [innerHTML]="userInput"></div>',
                   "Use text interpolation, sanitize with DomSanitizer",
                   framework="angular", cwe=_XSS),
    SinkDefinition("bypassSecurityTrustHtml", "method", _C,
                   "Angular method that bypasses sanitization",
                   "this.sanitizer.bypassSecurityTrustHtml(userInput)",
                   "Avoid bypassing, use Angular sanitization",
                   framework="angular", cwe=_XSS),
    SinkDefinition("bypassSecurityTrustScript", "method", _C,
                   "Angular method that bypasses script sanitization",
                   "this.sanitizer.bypassSecurityTrustScript(userInput)",
                   "Avoid bypassing security", framework="angular", cwe=_CODE_INJECTION),
    SinkDefinition("bypassSecurityTrustUrl", "method", _H,
                   "Angular method that bypasses URL sanitization",
                   "this.sanitizer.bypassSecurityTrustUrl(userInput)",
                   "Validate URLs instead of bypassing", framework="angular", cwe=_XSS),
    # jQuery
    SinkDefinition("$.html()", "method", _C,
                   "jQuery method that sets HTML content",
                   '$("div").html(userInput);', "$.text() for text content",
                   framework="jquery", cwe=_XSS),
    SinkDefinition("$.append()", "method", _H,
                   "jQuery method that can append HTML",
                   '$("div").append(userInput);',
                   "Create elements with $.text() or escape content",
                   framework="jquery", cwe=_XSS),
)

# ---------------------------------------------------------------------------
# Untrusted sources
# ---------------------------------------------------------------------------

UNTRUSTED_SOURCES: tuple[SourceDefinition, ...] = (
    # URL
    SourceDefinition("location.hash", "property", _H, "URL fragment, user-controllable",
                     "const data = location.hash;", "Sanitize, validate format"),
    SourceDefinition("location.search", "property", _H, "URL query string, user-controllable",
                     "const data = location.search;", "Parse and validate parameters"),
    SourceDefinition("location.pathname", "property", _M,
                     "URL path, potentially user-controllable",
                     "const data = location.pathname;", "Validate against allowed paths"),
    SourceDefinition("location.href", "property", _H, "Full URL, user-controllable",
                     "const data = location.href;", "Parse and validate components"),
    SourceDefinition("window.name", "property", _H,
                     "Window name, persists across pages, user-controllable",
                     "const data = window.name;", "Treat as untrusted user input"),
    # Document
    SourceDefinition("document.referrer", "property", _M, "Referrer URL, user-controllable",
                     "const data = document.referrer;", "Validate origin and format"),
    SourceDefinition("document.cookie", "property", _M,
                     "Cookies, potentially user-controllable",
                     "const data = document.cookie;", "Parse and validate cookie values"),
    SourceDefinition("document.URL", "property", _H, "Current document URL, user-controllable",
                     "const data = document.URL;", "Parse and validate components"),
    SourceDefinition("document.documentURI", "property", _H, "Document URI, user-controllable",
                     "const data = document.documentURI;", "Parse and validate components"),
    SourceDefinition("document.baseURI", "property", _M, "Base URI of document",
                     "const data = document.baseURI;",
                     "Validate if used in sensitive contexts"),
    # Messaging
    SourceDefinition("postMessage event data", "event", _H,
                     "Cross-origin message data, untrusted",
                     'window.addEventListener("message", e => { data = e.data; });',
                     "Validate origin, sanitize data"),
    # Storage
    SourceDefinition("localStorage", "api", _M,
                     "Local storage, can contain user input or be manipulated",
                     'const data = localStorage.getItem("key");',
                     "Validate and sanitize stored data"),
    SourceDefinition("sessionStorage", "api", _M, "Session storage, can contain user input",
                     'const data = sessionStorage.getItem("key");',
                     "Validate and sanitize stored data"),
    SourceDefinition("indexedDB", "api", _M, "IndexedDB data, can be manipulated",
                     'const data = await db.get("key");',
                     "Validate and sanitize retrieved data"),
    # Network
    SourceDefinition("WebSocket", "api", _H,
                     "WebSocket message data, potentially untrusted",
                     "ws.onmessage = e => { data = e.data; };",
                     "Validate message origin and content"),
    SourceDefinition("fetch", "api", _M,
                     "HTTP response data, validate even if from your API",
                     "const data = await fetch(url).then(r => r.text());",
                     "Validate and sanitize response data"),
    SourceDefinition("XMLHttpRequest", "api", _M, "HTTP response data",
                     "const data = xhr.responseText;", "Validate and sanitize response data"),
)

# ---------------------------------------------------------------------------
# Named vulnerability patterns (substring co-occurrence)
# ---------------------------------------------------------------------------

KNOWN_PATTERNS: tuple[KnownPattern, ...] = (
    KnownPattern("URL Fragment XSS", "location.hash", "innerHTML",
                 'document.getElementById("content").innerHTML = location.hash.substring(1);',
                 _C, "Use textContent or sanitize with DOMPurify"),
    KnownPattern("Query Parameter XSS", "location.search", "innerHTML",
                 'const params = new URLSearchParams(location.search); '
                 'div.innerHTML = params.get("name");',
                 _C, "Use textContent or sanitize"),
    KnownPattern("postMessage XSS", "postMessage event", "innerHTML",
                 'window.addEventListener("message", e => { div.innerHTML = e.data; });',
                 _C, "Validate origin, sanitize data, use textContent"),
    KnownPattern("localStorage XSS", "localStorage", "innerHTML",
                 'div.innerHTML = localStorage.getItem("username");',
                 _H, "Validate and sanitize stored data before rendering"),
    KnownPattern("Eval with URL", "location.search", "eval",
                 'eval(new URLSearchParams(location.search).get("code"));',
                 _C, "Never use eval with user input, use safer alternatives"),
    KnownPattern("JavaScript URL Navigation", "location.hash", "location.href",
                 "location.href = location.hash.substring(1);",
                 _H, "Validate URL protocol to prevent javascript: URLs"),
)

# ---------------------------------------------------------------------------
# Safe alternatives, keyed by sink name
# ---------------------------------------------------------------------------

SAFE_ALTERNATIVES: dict[str, tuple[SafeAlternative, ...]] = {
    "innerHTML": (
        SafeAlternative("textContent", "Sets text content without parsing HTML",
                        "When displaying plain text", "element.textContent = userInput;"),
        SafeAlternative("createElement + textContent",
                        "Create elements programmatically with safe text",
                        "When building DOM structures",
                        'const p = document.createElement("p"); p.textContent = userInput; '
                        "parent.appendChild(p);"),
        SafeAlternative("DOMPurify.sanitize", "Sanitize HTML with DOMPurify library",
                        "When you must render user HTML",
                        "element.innerHTML = DOMPurify.sanitize(userInput);"),
    ),
    "eval": (
        SafeAlternative("JSON.parse", "Parse JSON data safely",
                        "When parsing JSON data", "const data = JSON.parse(userInput);"),
        SafeAlternative("Predefined functions", "Use predefined function references",
                        "When selecting from known operations",
                        "const fn = functionMap[userInput]; if (fn) fn();"),
    ),
    "dangerouslySetInnerHTML": (
        SafeAlternative("Children", "Use React children for content",
                        "When displaying text or React elements", "<div>{userInput}</div>"),
        SafeAlternative("DOMPurify + dangerouslySetInnerHTML",
                        "Sanitize HTML before rendering", "When you must render user HTML",
                        "<div dangerouslySetInnerHTML={{__html: DOMPurify.sanitize(userInput)}} />"),
    ),
    "v-html": (
        SafeAlternative("Text interpolation", "Use Vue text interpolation",
                        "When displaying text content", "<div>{{ userInput }}</div>"),
        SafeAlternative("DOMPurify + v-html", "Sanitize HTML before rendering",
                        "When you must render user HTML",
                        '<div v-html="sanitize(userInput)"></div>'),
    ),
    "location.href": (
        SafeAlternative("URL validation", "Validate URL before navigation",
                        "When navigating based on user input",
                        'if (url.startsWith("https://trusted.com")) location.href = url;'),
        SafeAlternative("Whitelist check", "Check against allowed URLs",
                        "When you have a fixed set of destinations",
                        'const allowed = ["https://app.com/page1", "https://app.com/page2"]; '
                        "if (allowed.includes(url)) location.href = url;"),
    ),
}

GENERAL_RECOMMENDATIONS: tuple[SafeAlternative, ...] = (
    SafeAlternative("Input Validation", "Validate and sanitize all user input", "Always"),
    SafeAlternative("Output Encoding",
                    "Encode data based on context (HTML, JavaScript, URL)",
                    "Before rendering user data"),
    SafeAlternative("Use Security Libraries",
                    "Use established libraries like DOMPurify for sanitization",
                    "When rendering HTML content"),
)

# ---------------------------------------------------------------------------
# Framework detection and guidance
# ---------------------------------------------------------------------------

FRAMEWORK_INDICATORS: dict[str, tuple[re.Pattern[str], ...]] = {
    "react": (
        re.compile(r"import\s+.*from\s+['\"]react['\"]"),
        re.compile(r"dangerouslySetInnerHTML"),
        re.compile(r"<[A-Z][a-zA-Z0-9]*[\s>]"),  # JSX component
        re.compile(r"className="),
    ),
    "vue": (
        re.compile(r"import\s+.*from\s+['\"]vue['\"]"),
        re.compile(r"v-html"),
        re.compile(r"v-bind"),
        re.compile(r"v-if"),
        re.compile(r"v-for"),
    ),
    "angular": (
        re.compile(r"import\s+.*from\s+['\"]@angular"),
        re.compile(r"\[innerHTML\]"),
        re.compile(r"bypassSecurityTrust"),
        re.compile(r"\*ngIf"),
        re.compile(r"\*ngFor"),
    ),
    "jquery": (
        re.compile(r"\$\("),
        re.compile(r"jQuery\("),
        re.compile(r"\.html\("),
        re.compile(r"\.append\("),
    ),
}

FRAMEWORK_GUIDANCE: dict[str, dict[str, object]] = {
    "react": {
        "name": "React",
        "safePractices": [
            "Use JSX text interpolation {userInput} for text",
            "React auto-escapes text content",
            "Avoid dangerouslySetInnerHTML unless absolutely necessary",
            "Use DOMPurify if you must render user HTML",
            "Validate URLs before using in href or src",
        ],
        "dangerousPatterns": ["dangerouslySetInnerHTML"],
    },
    "vue": {
        "name": "Vue",
        "safePractices": [
            "Use text interpolation {{ userInput }} for text",
            "Vue auto-escapes text content",
            "Avoid v-html unless absolutely necessary",
            "Use DOMPurify if you must render user HTML",
            "Validate URLs before using in v-bind:href",
        ],
        "dangerousPatterns": ["v-html"],
    },
    "angular": {
        "name": "Angular",
        "safePractices": [
            "Use text interpolation {{ userInput }} for text",
            "Angular auto-sanitizes by default",
            "Avoid bypassSecurityTrust* methods",
            "Use DomSanitizer only when necessary",
            "Trust Angular sanitization for most cases",
        ],
        "dangerousPatterns": ["[innerHTML]", "bypassSecurityTrustHtml", "bypassSecurityTrustScript"],
    },
    "vanilla": {
        "name": "Vanilla JavaScript",
        "safePractices": [
            "Use textContent for text, not innerHTML",
            "Create elements with createElement",
            "Use addEventListener for events, not inline handlers",
            "Validate and sanitize all user input",
            "Use DOMPurify for any HTML rendering",
        ],
        "dangerousPatterns": ["innerHTML", "outerHTML", "eval", "document.write"],
    },
}

SUPPORTED_FRAMEWORKS: tuple[str, ...] = ("vanilla", *FRAMEWORK_INDICATORS)

# Identifiers never treated as shared data between a source and a sink line.
JS_KEYWORDS: frozenset[str] = frozenset({
    "const", "let", "var", "function", "if", "else", "for", "while",
    "return", "new", "this", "true", "false", "null", "undefined",
})
