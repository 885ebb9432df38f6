"""Shared utilities for the Google Review Scraper."""

from .entity_utils import (
    HTML_ENTITIES,
    decode_html_entities,
)

from .review_utils import (
    DEFAULT_LANGUAGE,
    PLACEHOLDER_TEXTS,
    TITLE_TEMPLATES,
    TitleTemplate,
    load_title_templates,
    extract_meta_content,
    extract_page_language,
    extract_meta_fields,
    parse_review_title,
    get_placeholder_text,
    count_stars,
    strip_stars,
    normalize_review_content,
)

__all__ = [
    # Entity utilities
    'HTML_ENTITIES',
    'decode_html_entities',
    # Review utilities
    'DEFAULT_LANGUAGE',
    'PLACEHOLDER_TEXTS',
    'TITLE_TEMPLATES',
    'TitleTemplate',
    'load_title_templates',
    'extract_meta_content',
    'extract_page_language',
    'extract_meta_fields',
    'parse_review_title',
    'get_placeholder_text',
    'count_stars',
    'strip_stars',
    'normalize_review_content',
]
