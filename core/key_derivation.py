# core/key_derivation.py
"""
Lookup keys for the content and asset maps.

The two keys are deliberately built differently. Page URLs were run through
the source's URL processor and reduced to their path when the pages were
imported, so the content key is the *processed* URL's path joined onto the
base URL. Files were stored under their raw crawled URL, so the asset key is
the *raw* input URL joined onto the base URL. Making the two rules agree
would stop existing lookups from matching.
"""

from typing import Tuple
from urllib.parse import parse_qsl, urlencode, urlparse

def split_fragment(url: str) -> Tuple[str, str]:
    """Splits a URL on its first '#', returning (url, fragment)."""
    if '#' not in url:
        return url, ""
    url, fragment = url.split('#', 1)
    return url, fragment

def strip_trailing_slash(url: str) -> str:
    """Removes a single trailing '/', so '/' becomes ''."""
    return url[:-1] if url.endswith('/') else url

def join_links(*parts) -> str:
    """
    Joins URL parts with exactly one '/' between them, the same way the
    importer built the keys. Query strings from any part are merged and
    appended at the end; only the last fragment is kept.
    """
    result = ""
    query_args = []
    fragment = None

    for part in parts:
        if part is None:
            continue
        part = str(part)
        if '#' in part:
            part, fragment = part.split('#', 1)
        if '?' in part:
            part, query = part.split('?', 1)
            query_args.extend(parse_qsl(query, keep_blank_values=True))
        if not part:
            continue
        if result and not result.endswith('/') and not part.startswith('/'):
            result += f"/{part}"
        elif result.endswith('/') and part.startswith('/'):
            result += part.lstrip('/')
        else:
            result += part

    if query_args:
        result += '?' + urlencode(query_args)
    if fragment:
        result += f"#{fragment}"
    return result

def derive_content_key(url: str, base_url: str) -> str:
    """Key into the content map: the URL's path only, joined onto the base URL."""
    url, _ = split_fragment(url)
    url = strip_trailing_slash(url)
    return join_links(base_url, urlparse(url).path)

def derive_asset_key(url: str, base_url: str) -> str:
    """Key into the asset map: the raw, unprocessed URL joined onto the base URL."""
    url, _ = split_fragment(url)
    url = strip_trailing_slash(url)
    return join_links(base_url, url)
