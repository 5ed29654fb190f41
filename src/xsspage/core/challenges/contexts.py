"""Injection contexts: where in a page user input ends up.

Each context wraps a (filtered) payload in the snippet of markup it would
land in, so a learner can see whether the payload breaks out. Rendering is
plain text substitution; nothing is parsed or executed.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

PLACEHOLDER = "{input}"


@dataclass(frozen=True)
class InjectionContext:
    key: str
    name: str
    description: str
    template: str
    example: str
    safety_note: str
    page: str

    def render(self, value: str) -> str:
        """The context snippet with *value* substituted in."""
        return self.template.replace(PLACEHOLDER, value)

    def render_page(self, value: str) -> str:
        """A small complete HTML document embedding *value*."""
        return self.page.replace(PLACEHOLDER, value)

    def to_dict(self) -> dict[str, Any]:
        return {
            "key": self.key,
            "name": self.name,
            "description": self.description,
            "example": self.example,
            "safetyNote": self.safety_note,
        }


def _page(body: str) -> str:
    return f"\n<!DOCTYPE html>\n<html>\n<body>\n{body}\n</body>\n</html>"


CONTEXTS: dict[str, InjectionContext] = {
    c.key: c
    for c in (
        InjectionContext(
            "html", "HTML Context", "Injected directly into HTML body",
            '<div class="output">{input}</div>',
            "<script>alert(1)</script>",
            "Encode <, >, &, \", and ' characters",
            _page(
                '  <div class="search-results">\n'
                "    <h3>Search results for:</h3>\n"
                '    <div class="output">{input}</div>\n'
                "  </div>"
            ),
        ),
        InjectionContext(
            "attribute", "HTML Attribute", "Injected into an HTML attribute value",
            '<input type="text" value="{input}">',
            '" onload="alert(1)',
            "Encode quotes and use attribute context escaping",
            _page(
                "  <form>\n"
                '    <input type="text" value="{input}" placeholder="Search...">\n'
                "    <button>Search</button>\n"
                "  </form>"
            ),
        ),
        InjectionContext(
            "javascript", "JavaScript Context", "Injected into a JavaScript string",
            "<script>var search = '{input}';</script>",
            "'; alert(1); //",
            "Use JSON.stringify() or proper JavaScript escaping",
            _page(
                "  <script>\n"
                "    var userInput = '{input}';\n"
                "    console.log('User searched for: ' + userInput);\n"
                "  </script>"
            ),
        ),
        InjectionContext(
            "url", "URL/Href Context", "Injected into a URL or href attribute",
            '<a href="{input}">Click here</a>',
            "javascript:alert(1)",
            "Validate URL scheme, use whitelist of allowed protocols",
            _page(
                '  <div class="links">\n'
                '    <a href="{input}">Click here</a>\n'
                "  </div>"
            ),
        ),
        InjectionContext(
            "css", "CSS Context", "Injected into CSS style attribute or tag",
            '<div style="background: {input};">Content</div>',
            "expression(alert(1))",
            "Avoid user input in CSS, validate CSS properties",
            _page(
                '  <div style="background: {input}; padding: 20px;">\n'
                "    <p>Styled content</p>\n"
                "  </div>"
            ),
        ),
        InjectionContext(
            "srcAttribute", "Src Attribute", "Injected into src attribute (img, script, iframe)",
            '<img src="{input}">',
            'x" onerror="alert(1)',
            "Validate URLs, use CSP, check for valid image/resource",
            _page(
                '  <div class="image-container">\n'
                '    <img src="{input}" alt="User uploaded image">\n'
                "  </div>"
            ),
        ),
    )
}


def get_context(name: str | None) -> InjectionContext:
    """Return the named context, falling back to ``html``."""
    return CONTEXTS.get(name or "", CONTEXTS["html"])
