"""HTML sanitization for user-authored rich text."""

import bleach

ALLOWED_TAGS = frozenset({
    "p", "br", "strong", "em", "u", "ol", "ul", "li",
    "h1", "h2", "h3", "h4", "h5", "h6",
    "blockquote", "code", "pre", "a", "img",
})

ALLOWED_ATTRIBUTES = {
    "*": ["class"],
    "a": ["href", "target"],
    "img": ["src", "alt", "width", "height"],
}

ALLOWED_PROTOCOLS = frozenset({"http", "https", "mailto", "tel"})


def sanitize_html(html: str) -> str:
    """Strip disallowed markup from editor output, keeping the text content."""
    return bleach.clean(
        html,
        tags=ALLOWED_TAGS,
        attributes=ALLOWED_ATTRIBUTES,
        protocols=ALLOWED_PROTOCOLS,
        strip=True,
    )
