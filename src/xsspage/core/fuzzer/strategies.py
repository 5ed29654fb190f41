"""Mutation strategy catalog and the pure transforms behind it.

Each strategy family is a plain function ``str -> list[Mutation]``. A family
may emit several variants (decimal and hex entities, single and double URL
encoding, ...) and may emit nothing when it does not apply to the input.
``STRATEGIES`` binds the wire keys used by callers (``htmlEntities``,
``urlEncoding``, ...) to those functions, in application order.

The transforms are intentionally simple string rewrites used for teaching
filter-bypass ideas; none of them parses HTML or JavaScript.
"""

from __future__ import annotations

import base64
import binascii
import logging
import re
from dataclasses import dataclass
from typing import Callable
from urllib.parse import quote

from xsspage.core.fuzzer.models import Mutation

logger = logging.getLogger(__name__)

# Characters left alone by JavaScript's encodeURIComponent besides
# alphanumerics and ``-_.~`` (which ``quote`` never escapes).
_URI_COMPONENT_SAFE = "!*'()"

_HTML_SPECIAL = re.compile(r"[<>\"'&]")
_URL_SPECIAL = re.compile(r"[<>\"'&()]")
_ESCAPE_SPECIAL = frozenset("<>\"'&")
_WORD_START = re.compile(r"\b\w", re.ASCII)
_OPEN_TAG_NAME = re.compile(r"<(\w+)", re.ASCII)
_SCRIPT_OPEN = re.compile(r"(<script[^>]*>)", re.IGNORECASE)
_JS_PROTOCOL = re.compile(r"javascript:", re.IGNORECASE)
_URL_ATTRIBUTE = re.compile(r"(src|href)=", re.IGNORECASE)
_VOID_TAG = re.compile(r"<(img|input|br|hr)([^>]*)>", re.IGNORECASE)

# ---------------------------------------------------------------------------
# Encoding helpers
# ---------------------------------------------------------------------------


def encode_uri_component(text: str) -> str:
    """Percent-encode *text* the way ``encodeURIComponent`` does."""
    return quote(text, safe=_URI_COMPONENT_SAFE)


def _utf16_units(char: str) -> list[int]:
    """Return the UTF-16 code units of a single character."""
    code = ord(char)
    if code <= 0xFFFF:
        return [code]
    code -= 0x10000
    return [0xD800 + (code >> 10), 0xDC00 + (code & 0x3FF)]


def _escape_chars(payload: str, template: str) -> str:
    out: list[str] = []
    for char in payload:
        if ord(char) > 127 or char in _ESCAPE_SPECIAL:
            out.extend(template.format(unit) for unit in _utf16_units(char))
        else:
            out.append(char)
    return "".join(out)


# ---------------------------------------------------------------------------
# Strategy families
# ---------------------------------------------------------------------------


def html_entities(payload: str) -> list[Mutation]:
    """Decimal and hex HTML entities, full-string and special-chars-only."""
    mutations = [
        Mutation(
            "".join(f"&#{unit};" for c in payload for unit in _utf16_units(c)),
            "html-entity-decimal",
            "html",
        )
    ]
    partial = _HTML_SPECIAL.sub(lambda m: f"&#{ord(m.group())};", payload)
    if partial != payload:
        mutations.append(Mutation(partial, "html-entity-partial-decimal", "html"))

    mutations.append(
        Mutation(
            "".join(f"&#x{unit:x};" for c in payload for unit in _utf16_units(c)),
            "html-entity-hex",
            "html",
        )
    )
    partial = _HTML_SPECIAL.sub(lambda m: f"&#x{ord(m.group()):x};", payload)
    if partial != payload:
        mutations.append(Mutation(partial, "html-entity-partial-hex", "html"))
    return mutations


def _url_variants(payload: str, double_encode: bool) -> list[Mutation]:
    encoded = encode_uri_component(payload)
    mutations = [Mutation(encoded, "url-encoding-single", "url")]
    if double_encode:
        mutations.append(
            Mutation(encode_uri_component(encoded), "url-encoding-double", "url")
        )
    partial = _URL_SPECIAL.sub(lambda m: encode_uri_component(m.group()), payload)
    if partial != payload:
        mutations.append(Mutation(partial, "url-encoding-partial", "url"))
    return mutations


def url_encoding(payload: str) -> list[Mutation]:
    """Single, partial and double percent-encoding.

    Duplicates between the single-pass and double-pass runs are left for the
    engine's deduplication step.
    """
    return _url_variants(payload, False) + _url_variants(payload, True)


def unicode_escapes(payload: str) -> list[Mutation]:
    """``\\uXXXX`` and ``\\xXX`` escapes of non-ASCII and HTML-special chars."""
    mutations: list[Mutation] = []
    escaped = _escape_chars(payload, "\\u{:04x}")
    if escaped != payload:
        mutations.append(Mutation(escaped, "unicode-escape", "unicode"))
    escaped = _escape_chars(payload, "\\x{:02x}")
    if escaped != payload:
        mutations.append(Mutation(escaped, "hex-escape", "unicode"))
    return mutations


def base64_encoding(payload: str) -> list[Mutation]:
    """Base64 as a ``data:`` URI and bare; nothing if the text won't encode."""
    try:
        encoded = base64.b64encode(payload.encode("utf-8")).decode("ascii")
    except (UnicodeEncodeError, binascii.Error):
        logger.debug("base64 encoding failed; skipping family", exc_info=True)
        return []
    return [
        Mutation(f"data:text/html;base64,{encoded}", "base64-data-uri", "base64"),
        Mutation(encoded, "base64", "base64"),
    ]


def _alternate_case(payload: str) -> str:
    # Parity follows UTF-16 positions; astral characters are left as they are.
    out: list[str] = []
    position = 0
    for char in payload:
        width = len(_utf16_units(char))
        if width == 1:
            out.append(char.lower() if position % 2 == 0 else char.upper())
        else:
            out.append(char)
        position += width
    return "".join(out)


def case_variations(payload: str) -> list[Mutation]:
    mutations = [
        Mutation(payload.upper(), "case-uppercase", "none"),
        Mutation(payload.lower(), "case-lowercase", "none"),
    ]
    mixed = _WORD_START.sub(lambda m: m.group().upper(), payload)
    if mixed != payload:
        mutations.append(Mutation(mixed, "case-mixed", "none"))
    alternate = _alternate_case(payload)
    if alternate != payload:
        mutations.append(Mutation(alternate, "case-alternating", "none"))
    return mutations


def quote_substitution(payload: str) -> list[Mutation]:
    has_double = '"' in payload
    has_single = "'" in payload
    if not (has_double or has_single or "`" in payload):
        return []

    mutations: list[Mutation] = []
    if has_double:
        mutations.append(Mutation(payload.replace('"', "'"), "quote-single", "none"))
    if has_single:
        mutations.append(Mutation(payload.replace("'", '"'), "quote-double", "none"))
    if has_double or has_single:
        backticked = payload.replace('"', "`").replace("'", "`")
        mutations.append(Mutation(backticked, "quote-backtick", "none"))
    stripped = re.sub(r"[\"'`]", "", payload)
    if stripped != payload:
        mutations.append(Mutation(stripped, "quote-none", "none"))
    return mutations


def whitespace_variation(payload: str) -> list[Mutation]:
    if " " not in payload:
        return []
    return [
        Mutation(payload.replace(" ", "\t"), "whitespace-tab", "none"),
        Mutation(payload.replace(" ", "\n"), "whitespace-newline", "none"),
        Mutation(payload.replace(" ", "  "), "whitespace-double", "none"),
        Mutation(payload.replace(" ", "\f"), "whitespace-formfeed", "none"),
    ]


def null_bytes(payload: str) -> list[Mutation]:
    mutations: list[Mutation] = []
    if "</" in payload:
        mutations.append(
            Mutation(payload.replace("</", "\x00</"), "null-byte-before-close", "none")
        )
    if "<" in payload:
        with_null = _OPEN_TAG_NAME.sub("<\\1\x00", payload)
        if with_null != payload:
            mutations.append(Mutation(with_null, "null-byte-after-tag", "none"))
    return mutations


def comments(payload: str) -> list[Mutation]:
    mutations = [Mutation(f"<!-->{payload}", "comment-html-before", "none")]
    if "script" in payload.lower():
        block = _SCRIPT_OPEN.sub(r"\1/**/", payload, count=1)
        if block != payload:
            mutations.append(Mutation(block, "comment-js-after-open", "none"))
        line = _SCRIPT_OPEN.sub("\\1//\n", payload, count=1)
        if line != payload:
            mutations.append(Mutation(line, "comment-js-line", "none"))
    return mutations


def protocol_variation(payload: str) -> list[Mutation]:
    mutations: list[Mutation] = []
    if "javascript:" in payload.lower():
        mutations.extend([
            Mutation(_JS_PROTOCOL.sub("java script:", payload), "protocol-space", "none"),
            Mutation(_JS_PROTOCOL.sub("vbscript:", payload), "protocol-vbscript", "none"),
            Mutation(_JS_PROTOCOL.sub("data:text/html,", payload), "protocol-data", "none"),
        ])
    if "src=" in payload or "href=" in payload:
        injected = _URL_ATTRIBUTE.sub(r"\1=javascript:", payload)
        if injected != payload:
            mutations.append(Mutation(injected, "protocol-javascript-inject", "none"))
    return mutations


def obfuscation(payload: str) -> list[Mutation]:
    mutations: list[Mutation] = []
    if "alert" in payload:
        mutations.extend([
            Mutation(payload.replace("alert", "'al'+'ert'"), "obfuscation-concat", "none"),
            Mutation(payload.replace("alert", "`alert`"), "obfuscation-template", "none"),
            Mutation(
                payload.replace("alert", "\\x61\\x6c\\x65\\x72\\x74"),
                "obfuscation-hex-string",
                "none",
            ),
        ])

    if "/>" in payload:
        mutations.append(
            Mutation(payload.replace("/>", ">"), "obfuscation-remove-self-close", "none")
        )
    elif _VOID_TAG.search(payload):
        closed = _VOID_TAG.sub(r"<\1\2/>", payload)
        if closed != payload:
            mutations.append(Mutation(closed, "obfuscation-add-self-close", "none"))
    return mutations


# ---------------------------------------------------------------------------
# Catalog
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class MutationStrategy:
    """A named transform family keyed by its wire identifier."""

    key: str
    label: str
    transform: Callable[[str], list[Mutation]]


STRATEGIES: dict[str, MutationStrategy] = {
    s.key: s
    for s in (
        MutationStrategy("htmlEntities", "HTML Entities", html_entities),
        MutationStrategy("urlEncoding", "URL Encoding", url_encoding),
        MutationStrategy("unicodeEscapes", "Unicode Escapes", unicode_escapes),
        MutationStrategy("base64", "Base64 Encoding", base64_encoding),
        MutationStrategy("caseVariations", "Case Variations", case_variations),
        MutationStrategy("quoteSubstitution", "Quote Substitution", quote_substitution),
        MutationStrategy("whitespaceVariation", "Whitespace Variations", whitespace_variation),
        MutationStrategy("nullBytes", "Null Byte Injection", null_bytes),
        MutationStrategy("comments", "Comment Insertion", comments),
        MutationStrategy("protocolVariation", "Protocol Variations", protocol_variation),
        MutationStrategy("obfuscation", "Obfuscation", obfuscation),
    )
}

STRATEGY_KEYS: tuple[str, ...] = tuple(STRATEGIES)


def format_strategy_name(key: str) -> str:
    """Return the display label for a strategy key, or the key itself."""
    strategy = STRATEGIES.get(key)
    return strategy.label if strategy else key
