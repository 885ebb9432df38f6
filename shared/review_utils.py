"""
Review metadata utilities for the Google Review Scraper.

Google review share pages carry everything we need in two microdata meta tags:
- itemprop="name":        "Google review of <business> by <reviewer>"
- itemprop="description": "★★★★☆ \"<review text>\""

Parsing is plain regex over the raw HTML.
"""

import json
import re
from pathlib import Path
from typing import Dict, List, NamedTuple, Optional, Tuple

from .entity_utils import decode_html_entities

DEFAULT_LANGUAGE = 'en'

FILLED_STAR = '★'
EMPTY_STAR = '☆'
STAR_GLYPHS = FILLED_STAR + EMPTY_STAR

# Shown when a review is a bare star rating
PLACEHOLDER_TEXTS = {
    'en': 'This is a star rating without any review text',
    'de': 'Es handelt sich um eine Sterne-Bewertung ohne Begründung',
}

LANGUAGES_FILE = Path(__file__).parent / 'languages.json'

HTML_LANG_PATTERN = re.compile(r'<html\b[^>]*?(?<![\w:-])lang\s*=\s*["\']([^"\']*)["\']', re.I)
CONTENT_ATTR_PATTERN = re.compile(r'(?<![\w-])content\s*=\s*(["\'])(.*?)\1', re.I | re.S)


class TitleTemplate(NamedTuple):
    """One locale's "<prefix> <business> <connector> <reviewer>" phrase."""
    language: str
    pattern: re.Pattern
    business_group: int
    reviewer_group: int


def load_title_templates(path: Path = LANGUAGES_FILE) -> List[TitleTemplate]:
    """
    Load the locale template table from JSON.

    The file maps a language tag to {pattern, business_group, reviewer_group}.
    Order in the file is match order.
    """
    with open(path, encoding='utf-8') as f:
        config = json.load(f)

    return [
        TitleTemplate(
            language=language,
            pattern=re.compile(entry['pattern'], re.I | re.S),
            business_group=entry.get('business_group', 1),
            reviewer_group=entry.get('reviewer_group', 2),
        )
        for language, entry in config.items()
    ]


TITLE_TEMPLATES = load_title_templates()


def _meta_tag_pattern(itemprop: str) -> re.Pattern:
    return re.compile(
        r'<meta\b[^>]*?(?<![\w-])itemprop\s*=\s*["\']' + re.escape(itemprop) + r'["\'][^>]*>',
        re.I,
    )


META_PATTERNS = {
    'name': _meta_tag_pattern('name'),
    'description': _meta_tag_pattern('description'),
}


def extract_meta_content(html: str, itemprop: str) -> str:
    """Return the raw content attribute of the first meta tag with this itemprop."""
    if not html:
        return ''

    pattern = META_PATTERNS.get(itemprop) or _meta_tag_pattern(itemprop)
    tag = pattern.search(html)
    if not tag:
        return ''

    content = CONTENT_ATTR_PATTERN.search(tag.group(0))
    return content.group(2) if content else ''


def extract_page_language(html: str) -> str:
    """Primary subtag of <html lang>, e.g. "en" from "en-US". Defaults to "en"."""
    if not html:
        return DEFAULT_LANGUAGE

    match = HTML_LANG_PATTERN.search(html)
    if not match:
        return DEFAULT_LANGUAGE

    primary = re.split(r'[-_]', match.group(1).strip(), maxsplit=1)[0].lower()
    return primary or DEFAULT_LANGUAGE


def extract_meta_fields(html: str) -> Dict[str, str]:
    """
    Extract the review metadata from a raw review page.

    Returns dict with:
        name: str - decoded itemprop="name" content, '' if missing
        description: str - decoded itemprop="description" content, '' if missing
        page_lang: str - two-letter page language
    """
    return {
        'name': decode_html_entities(extract_meta_content(html, 'name')),
        'description': decode_html_entities(extract_meta_content(html, 'description')),
        'page_lang': extract_page_language(html),
    }


def parse_review_title(
    name: str,
    templates: Optional[List[TitleTemplate]] = None,
) -> Tuple[str, str, str]:
    """
    Split the review title into business and reviewer names.

    Args:
        name: Decoded itemprop="name" content
        templates: Template table to try in order (default: languages.json)

    Returns:
        Tuple of (business_name, reviewer_name, language). All empty when no
        template matches.

    Examples:
        >>> parse_review_title("Google review of Joe's Pizza by Jane Doe")
        ("Joe's Pizza", 'Jane Doe', 'en')
    """
    if not name:
        return ('', '', '')

    if templates is None:
        templates = TITLE_TEMPLATES

    for template in templates:
        match = template.pattern.search(name)
        if match:
            business_name = (match.group(template.business_group) or '').strip()
            reviewer_name = (match.group(template.reviewer_group) or '').strip()
            return (business_name, reviewer_name, template.language)

    return ('', '', '')


def get_placeholder_text(language: str) -> str:
    """Placeholder review text for a star-only review."""
    return PLACEHOLDER_TEXTS.get(language, PLACEHOLDER_TEXTS[DEFAULT_LANGUAGE])


def count_stars(description: str) -> int:
    """Number of filled stars in the description."""
    if not description:
        return 0
    return description.count(FILLED_STAR)


def strip_stars(description: str) -> str:
    """Remove every star glyph and trim."""
    if not description:
        return ''
    return description.translate({ord(glyph): None for glyph in STAR_GLYPHS}).strip()


def normalize_review_content(description: str, language: str = DEFAULT_LANGUAGE) -> Tuple[int, str]:
    """
    Turn the description metadata into a rating and review text.

    The review text is unwrapped from its surrounding double quotes when the
    whole remaining string is quoted. Internal quotes are kept as-is.

    Args:
        description: Decoded itemprop="description" content
        language: Page language, selects the placeholder text

    Returns:
        Tuple of (rating, review_content). review_content is never empty.

    Examples:
        >>> normalize_review_content('★★★★★ "Great service!"')
        (5, 'Great service!')

        >>> normalize_review_content('★★', 'de')
        (2, 'Es handelt sich um eine Sterne-Bewertung ohne Begründung')
    """
    rating = count_stars(description)
    text = strip_stars(description)

    if not text:
        return (rating, get_placeholder_text(language))

    if len(text) >= 2 and text.startswith('"') and text.endswith('"'):
        inner = text[1:-1].strip()
        return (rating, inner or get_placeholder_text(language))

    return (rating, text)
