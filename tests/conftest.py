"""
Shared pytest fixtures for Google Review Scraper tests.
"""

import pytest
import sys
import importlib.util
from pathlib import Path

# Project root for finding Cloud Function modules
PROJECT_ROOT = Path(__file__).parent.parent


def _load_module_from_path(module_name: str, file_path: Path):
    """Load a module from a specific file path."""
    spec = importlib.util.spec_from_file_location(module_name, file_path)
    module = importlib.util.module_from_spec(spec)
    sys.modules[module_name] = module
    spec.loader.exec_module(module)
    return module


# Load the Cloud Function module with a unique name at module load time
_review_scraper_module = _load_module_from_path(
    'review_scraper_main',
    PROJECT_ROOT / 'review-scraper' / 'main.py'
)


# ============================================================================
# Review Scraper Function Fixtures
# ============================================================================

@pytest.fixture
def review_scraper_module():
    """Returns the loaded review-scraper module."""
    return _review_scraper_module


@pytest.fixture
def scrape_review_page():
    """Returns scrape_review_page function from review-scraper."""
    return _review_scraper_module.scrape_review_page


@pytest.fixture
def build_result():
    """Returns build_result function from review-scraper."""
    return _review_scraper_module.build_result


@pytest.fixture
def build_debug_info():
    """Returns build_debug_info function from review-scraper."""
    return _review_scraper_module.build_debug_info


@pytest.fixture
def build_request_headers():
    """Returns build_request_headers function from review-scraper."""
    return _review_scraper_module.build_request_headers


@pytest.fixture
def get_fetch_timeout():
    """Returns get_fetch_timeout function from review-scraper."""
    return _review_scraper_module.get_fetch_timeout


@pytest.fixture
def user_agents():
    """Returns the user agent pool from review-scraper."""
    return _review_scraper_module.USER_AGENTS


# ============================================================================
# Sample Pages
# ============================================================================

def make_review_page(name=None, description=None, lang='en-US'):
    """Build a minimal review page with the given meta tag contents."""
    html_tag = f'<html lang="{lang}">' if lang is not None else '<html>'
    metas = []
    if name is not None:
        metas.append(f'<meta content="{name}" itemprop="name">')
    if description is not None:
        metas.append(f'<meta content="{description}" itemprop="description">')

    return f"""<!DOCTYPE html>
{html_tag}
<head>
    <title>Google Maps</title>
    <meta property="og:title" content="Google Maps">
    {''.join(metas)}
</head>
<body><div id="app"></div></body>
</html>
"""


@pytest.fixture
def review_page_factory():
    """Factory for review pages with custom meta tag contents."""
    return make_review_page


@pytest.fixture
def sample_review_html():
    """English review page with a quoted review."""
    return make_review_page(
        name="Google review of Joe&#39;s Pizza by Jane Doe",
        description="★★★★☆ &quot;Great crust, friendly staff &amp; quick service.&quot;",
        lang='en-US',
    )


@pytest.fixture
def sample_german_review_html():
    """German review page with a star-only rating."""
    return make_review_page(
        name="Google-Rezension über Café Mitte von Hans Müller",
        description="★★☆☆☆",
        lang='de-DE',
    )


@pytest.fixture
def sample_unrelated_html():
    """Page without any review metadata."""
    return """<!DOCTYPE html>
<html>
<head><title>Not a review</title></head>
<body><p>Nothing to see here.</p></body>
</html>
"""


# ============================================================================
# HTTP Fixtures
# ============================================================================

@pytest.fixture
def mock_flask_request():
    """Factory for creating mock Flask request objects."""
    class MockRequest:
        def __init__(self, args=None, method='GET'):
            self.args = args or {}
            self.method = method
            self.data = b''

        def get_json(self, force=False, silent=False):
            return None

    return MockRequest


@pytest.fixture
def fetch_review_page():
    """Returns fetch_review_page function from review-scraper."""
    return _review_scraper_module.fetch_review_page


@pytest.fixture
def scrape_review():
    """Returns main entry point from review-scraper."""
    return _review_scraper_module.scrape_review
