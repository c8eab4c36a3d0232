# core/url_processors.py
"""
URL processors rewrite a crawled URL the same way it was rewritten when the
content was imported, so that it matches the stored original URLs.

A processor has a single method, `process(url, mime)`, returning a dict with
at least a `url` key.
"""

import re

class NoOpURLProcessor:
    """Returns URLs unchanged. Used when a source has no processor configured."""
    description = "No processing"

    def process(self, url: str, mime: str = "text/html") -> dict:
        return {'url': url, 'mime': mime}

class DropExtensionsURLProcessor:
    """
    Drops file extensions from page URLs, e.g. /about/team.php becomes /about/team.
    Query strings are kept.
    """
    description = "Drop file extensions from page URLs"
    extension_pattern = re.compile(r'\.[^./?]+(\?|$)')

    def process(self, url: str, mime: str = "text/html") -> dict:
        if mime == 'text/html':
            url = self.extension_pattern.sub(r'\1', url, count=1)
        return {'url': url, 'mime': mime}

class MossURLProcessor(DropExtensionsURLProcessor):
    """
    Removes the SharePoint (MOSS) artefacts from a URL: the /Pages/ folder,
    the .aspx extension and a trailing /default page.
    """
    description = "Remove /Pages/ and .aspx from MOSS URLs"

    def process(self, url: str, mime: str = "text/html") -> dict:
        url = re.sub(r'/Pages/', '/', url, flags=re.IGNORECASE)
        result = super().process(url, mime)
        result['url'] = re.sub(r'/default$', '', result['url'], flags=re.IGNORECASE)
        return result

URL_PROCESSORS = {
    'noop': NoOpURLProcessor,
    'drop-extensions': DropExtensionsURLProcessor,
    'moss': MossURLProcessor,
}

def get_url_processor(name):
    """
    Instantiates the processor registered under `name`. An empty name gives
    None, meaning URLs are used as-is.
    """
    if not name:
        return None
    try:
        return URL_PROCESSORS[name]()
    except KeyError:
        raise ValueError(f"Unknown URL processor '{name}'. Available: {', '.join(sorted(URL_PROCESSORS))}")
