"""
Google Review Scraper Cloud Function

Fetches a public Google review page and extracts the review from its
microdata meta tags.

Responsibilities:
- Fetch the review page
- Extract business name, reviewer name, star rating and review text
- Detect the review language

Does NOT:
- Render JavaScript or follow pagination
- Retry failed fetches (caller's job)
- Persist anything
"""

import functions_framework
import requests
import random
import json
import os
import sys
import traceback

# Add shared module to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))
from shared.review_utils import extract_meta_fields, parse_review_title, normalize_review_content

# Configuration
DEFAULT_FETCH_TIMEOUT_SECONDS = 25.0  # Platform ceiling is 30s

USER_AGENTS = [
    'Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36',
    'Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36',
]

REQUEST_HEADERS = {
    'Accept': 'text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8',
    'Accept-Language': 'en-US,en;q=0.5',
    'Accept-Encoding': 'gzip, deflate, br',
}

CORS_HEADERS = {
    'Access-Control-Allow-Origin': '*',
    'Access-Control-Allow-Methods': 'GET',
    'Access-Control-Allow-Headers': 'Content-Type',
}


def get_fetch_timeout() -> float:
    """Outbound fetch timeout from FETCH_TIMEOUT_SECONDS, default when unset or invalid."""
    raw = os.environ.get('FETCH_TIMEOUT_SECONDS')
    if not raw:
        return DEFAULT_FETCH_TIMEOUT_SECONDS

    try:
        timeout = float(raw)
    except ValueError:
        print(f"Invalid FETCH_TIMEOUT_SECONDS {raw!r}, using {DEFAULT_FETCH_TIMEOUT_SECONDS}s")
        return DEFAULT_FETCH_TIMEOUT_SECONDS

    return timeout if timeout > 0 else DEFAULT_FETCH_TIMEOUT_SECONDS


def build_request_headers() -> dict:
    """Outbound headers with a randomly picked user agent."""
    headers = dict(REQUEST_HEADERS)
    headers['User-Agent'] = random.choice(USER_AGENTS)
    return headers


def fetch_review_page(url: str) -> tuple:
    """Fetch the review page. Returns (page, error) where page is {status_code, html}."""
    try:
        response = requests.get(
            url,
            headers=build_request_headers(),
            timeout=get_fetch_timeout(),
            allow_redirects=True
        )
        response.raise_for_status()

        # requests falls back to ISO-8859-1 for text/html without a charset
        if 'charset' not in response.headers.get('Content-Type', '').lower():
            response.encoding = 'utf-8'

        return {'status_code': response.status_code, 'html': response.text}, None

    except requests.exceptions.Timeout:
        return None, 'Request timed out'
    except requests.exceptions.HTTPError as e:
        return None, f'HTTP error: {e.response.status_code}'
    except requests.exceptions.RequestException as e:
        return None, f'Request failed: {str(e)}'


def build_result(title: tuple, rating: int, review_content: str, page_lang: str) -> dict:
    """Assemble the review record returned to the caller."""
    business_name, reviewer_name, detected_language = title

    return {
        'businessName': business_name,
        'reviewerName': reviewer_name,
        'rating': rating,
        'reviewContent': review_content,
        'language': {
            'detected': detected_language or page_lang,
            'pageLang': page_lang,
        },
    }


def build_debug_info(url: str, data: dict, status_code: int, meta: dict) -> dict:
    """Debug block: which fields were found, upstream status and the raw metadata."""
    return {
        'url': url,
        'hasData': {
            'businessName': bool(data['businessName']),
            'reviewerName': bool(data['reviewerName']),
            'reviewContent': bool(data['reviewContent']),
        },
        'statusCode': status_code,
        'rawMeta': {
            'name': meta['name'],
            'description': meta['description'],
        },
    }


def scrape_review_page(html: str) -> tuple:
    """Run the extraction pipeline on raw HTML. Returns (data, meta)."""
    meta = extract_meta_fields(html)
    title = parse_review_title(meta['name'])
    rating, review_content = normalize_review_content(meta['description'], meta['page_lang'])

    return build_result(title, rating, review_content, meta['page_lang']), meta


def error_response(message: str, headers: dict) -> tuple:
    return (json.dumps({
        'success': False,
        'error': 'Failed to scrape data',
        'details': {
            'message': message
        }
    }), 500, headers)


@functions_framework.http
def scrape_review(request):
    """
    Main Cloud Function entry point.

    Expected query string:
        GET ?url=https://www.google.com/maps/reviews/...
    """
    # Handle CORS
    if request.method == 'OPTIONS':
        return ('', 204, CORS_HEADERS)

    headers = dict(CORS_HEADERS)
    headers['Content-Type'] = 'application/json'

    url = request.args.get('url')
    if not url:
        return (json.dumps({
            'error': 'URL parameter is required'
        }), 400, headers)

    try:
        print(f"Scraping review: {url}")

        page, fetch_error = fetch_review_page(url)
        if fetch_error:
            print(f"Fetch error for {url}: {fetch_error}")
            return error_response(fetch_error, headers)

        data, meta = scrape_review_page(page['html'])

        return (json.dumps({
            'success': True,
            'data': data,
            'debugInfo': build_debug_info(url, data, page['status_code'], meta),
        }), 200, headers)

    except Exception as e:
        print(f"Scraping error: {e}")
        print(f"Full traceback: {traceback.format_exc()}")
        return error_response(str(e), headers)
