# core/scheme_classifier.py

import re
from typing import Iterable, Optional

DEFAULT_NON_HTTP_URI_SCHEMES = ('mailto', 'tel', 'ftp', 'res', 'skype', 'ssh')
DEFAULT_IGNORE_MARKER_PATTERN = r'(\[sitetree|assets)'

def _non_http_scheme_pattern(non_http_schemes: Iterable[str]):
    schemes = [re.escape(s) for s in non_http_schemes if s]
    if not schemes:
        return None
    return re.compile(rf"^({'|'.join(schemes)}):", re.IGNORECASE)

def ignore_reason(url: str,
                  non_http_schemes: Iterable[str] = DEFAULT_NON_HTTP_URI_SCHEMES,
                  ignore_marker_pattern: str = DEFAULT_IGNORE_MARKER_PATTERN) -> Optional[str]:
    """
    Returns a short description of why a URL should be left alone, or None if
    the URL is eligible for rewriting. A URL is ignored if it is:

    - An empty string
    - A non-HTTP scheme like an email link, e.g. mailto:me@example.com
    - An absolute url, i.e. anything that begins with 'http'
    - Already a CMS reference, e.g. [sitetree_link,id=12] or assets/Images/logo.gif
    """
    url = (url or '').strip()

    if not url:
        return "ignoring empty URL"

    scheme_pattern = _non_http_scheme_pattern(non_http_schemes)
    if scheme_pattern and scheme_pattern.match(url):
        return f"ignoring Non-HTTP URL: {url}"

    if url[:4] == 'http':
        return f"ignoring external url: {url}"

    if ignore_marker_pattern and re.search(ignore_marker_pattern, url):
        return f"ignoring CMS link: {url}"

    return None

def should_ignore(url: str,
                  non_http_schemes: Iterable[str] = DEFAULT_NON_HTTP_URI_SCHEMES,
                  ignore_marker_pattern: str = DEFAULT_IGNORE_MARKER_PATTERN) -> bool:
    """True if the URL should not be rewritten at all."""
    return ignore_reason(url, non_http_schemes, ignore_marker_pattern) is not None

def with_assets_url(ignore_marker_pattern: str, assets_url: str) -> str:
    """
    Extends the marker pattern so that links already pointing at the assets
    URL (e.g. /media/logo.gif) count as rewritten.
    """
    if not assets_url:
        return ignore_marker_pattern
    asset_pattern = f"^{re.escape(assets_url)}"
    if not ignore_marker_pattern:
        return asset_pattern
    return f"{ignore_marker_pattern}|{asset_pattern}"
