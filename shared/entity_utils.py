"""
HTML entity utilities for the Google Review Scraper.

Meta tag content on review pages is entity-encoded. Only a small fixed set of
named references shows up in practice, plus decimal numeric references.
"""

import re

# Named references seen in review metadata
HTML_ENTITIES = {
    '&amp;': '&',
    '&lt;': '<',
    '&gt;': '>',
    '&quot;': '"',
    '&#39;': "'",
    '&nbsp;': ' ',
    '&apos;': "'",
    '&#x2F;': '/',
    '&#x27;': "'",
    '&#x60;': '`',
    '&ldquo;': '"',
    '&rdquo;': '"',
    '&rsquo;': "'",
    '&lsquo;': "'",
    '&ndash;': '–',
    '&mdash;': '—',
}

ENTITY_PATTERN = re.compile(r'&(?:#\d+|#[xX][0-9a-fA-F]+|[A-Za-z][A-Za-z0-9]*);')
NUMERIC_ENTITY_PATTERN = re.compile(r'&#(\d+);')


def _replace_entity(match: re.Match) -> str:
    entity = match.group(0)
    if entity in HTML_ENTITIES:
        return HTML_ENTITIES[entity]

    numeric = NUMERIC_ENTITY_PATTERN.fullmatch(entity)
    if numeric:
        try:
            return chr(int(numeric.group(1)))
        except (ValueError, OverflowError):
            # Code point outside the Unicode range
            return entity

    return entity


def decode_html_entities(text: str) -> str:
    """
    Decode HTML character references in a single pass.

    Args:
        text: Entity-encoded text (None is treated as empty)

    Returns:
        Decoded text. Unknown references are left as-is.

    Examples:
        >>> decode_html_entities("Joe&#39;s &amp; Sons")
        "Joe's & Sons"

        >>> decode_html_entities("&amp;amp;")
        '&amp;'
    """
    if not text:
        return ''

    return ENTITY_PATTERN.sub(_replace_entity, text)
