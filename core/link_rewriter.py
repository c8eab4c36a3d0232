# core/link_rewriter.py

import re
from html import escape, unescape
from typing import Callable, Optional, Tuple

# Attribute values may be double-quoted, single-quoted or bare.
ATTRIBUTE_VALUE = r'''("[^"]*"|'[^']*'|[^\s"'>]+)'''

# <a href="...">, <area href>, <link href>
HREF_PATTERN = re.compile(
    r'(<(?:a|area|link)\b[^>]*?(?<![\w-])href\s*=\s*)' + ATTRIBUTE_VALUE,
    re.IGNORECASE | re.DOTALL
)
# <img src="...">, <iframe src>, <embed src>, <source src>, <script src>
SRC_PATTERN = re.compile(
    r'(<(?:img|iframe|embed|source|script)\b[^>]*?(?<![\w-])src\s*=\s*)' + ATTRIBUTE_VALUE,
    re.IGNORECASE | re.DOTALL
)

# A markdown URL, allowing one level of balanced parentheses: /wiki/Foo_(bar)
MARKDOWN_URL = r'(?:[^()\s]|\([^()\s]*\))+'
MARKDOWN_TITLE = r'(?:\s+"[^"]*")?'

# [text](url "title") and ![alt](url)
MARKDOWN_LINK_PATTERN = re.compile(
    r'(!?\[[^\[\]]*\]\()(' + MARKDOWN_URL + r')(' + MARKDOWN_TITLE + r'\))'
)
# A link wrapped around an image: [![alt](image)](url)
MARKDOWN_LINKED_IMAGE_PATTERN = re.compile(
    r'(\[[^\[\]]*!\[[^\[\]]*\]\(' + MARKDOWN_URL + MARKDOWN_TITLE + r'\)[^\[\]]*\]\()'
    r'(' + MARKDOWN_URL + r')(' + MARKDOWN_TITLE + r'\))'
)

def _html_attribute_replacer(callback: Callable[[str], Optional[str]]):
    def replacer(match):
        prefix, value = match.groups()
        if value[0] in '"\'':
            quote, url = value[0], value[1:-1]
        else:
            quote, url = '', value
        new_url = callback(unescape(url))
        if new_url is None:
            return match.group(0)
        return f"{prefix}{quote}{escape(new_url, quote=True)}{quote}"
    return replacer

def _markdown_link_replacer(callback: Callable[[str], Optional[str]]):
    def replacer(match):
        prefix, url, suffix = match.groups()
        new_url = callback(url)
        if new_url is None:
            return match.group(0)
        return f"{prefix}{new_url}{suffix}"
    return replacer

def rewrite_links_in_content(content: str, callback: Callable[[str], Optional[str]]) -> Tuple[str, bool]:
    """
    Finds every link in a block of HTML or markdown and passes its URL to
    `callback`. Whatever the callback returns replaces the URL; returning None
    leaves the original text untouched.

    Returns the new content and whether it differs from the input.
    """
    if not content:
        return content, False

    new_content = HREF_PATTERN.sub(_html_attribute_replacer(callback), content)
    new_content = SRC_PATTERN.sub(_html_attribute_replacer(callback), new_content)
    # Outer links of linked images first; the images themselves are left
    # in place for the plain link pass.
    new_content = MARKDOWN_LINKED_IMAGE_PATTERN.sub(_markdown_link_replacer(callback), new_content)
    new_content = MARKDOWN_LINK_PATTERN.sub(_markdown_link_replacer(callback), new_content)

    # Square brackets in references get url-encoded somewhere upstream.
    new_content = new_content.replace('%5B', '[').replace('%5D', ']')

    return new_content, new_content != content
