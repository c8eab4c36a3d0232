"""
Shared fixtures for the link rewriter test suite.

Builds a small imported site on disk (markdown pages plus an asset
manifest) so the tests run without a real CMS export.
"""

import textwrap

import pytest

from core.file_system import MarkdownContentRepository
from core.lookup_tables import LookupTables
from core.link_resolver import LinkResolver
from models.content import AssetRecord

BASE_URL = "http://www.example.org"


def write_page(directory, name, page_id, title, legacy_url, body, extra=""):
    path = directory / name
    path.write_text(textwrap.dedent(f"""\
        ---
        id: {page_id}
        title: {title}
        legacy_url: {legacy_url}
        {extra}
        ---
        """) + body, encoding="utf-8")
    return path


# ---------------------------------------------------------------------------
# Imported site fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def site_dir(tmp_path):
    """An imported site with three pages and one image."""
    content_dir = tmp_path / "content"
    assets_dir = tmp_path / "assets"
    content_dir.mkdir()
    assets_dir.mkdir()

    write_page(content_dir, "01-home.md", 1, "Home", BASE_URL,
               '<p>Read <a href="/about#team">about us</a> and <a href="/old-page-never-imported">this</a>.</p>\n'
               '<img src="/files/logo.gif">\n')
    write_page(content_dir, "02-about.md", 2, "About", f"{BASE_URL}/about",
               "Back [home](/) or email [us](mailto:info@example.org).\n")
    write_page(content_dir, "03-contact.md", 3, "Contact", f"{BASE_URL}/contact",
               "Nothing to rewrite here.\n")

    (assets_dir / "logo.gif").write_bytes(b"GIF89a")
    (assets_dir / "manifest.yaml").write_text(textwrap.dedent(f"""\
        files:
          - id: 7
            legacy_url: {BASE_URL}/files/logo.gif
            filename: logo.gif
          - id: 8
            legacy_url: {BASE_URL}/files/deleted.pdf
            filename: deleted.pdf
        """), encoding="utf-8")
    return tmp_path


@pytest.fixture
def repository(site_dir):
    return MarkdownContentRepository(site_dir / "content", site_dir / "assets" / "manifest.yaml")


@pytest.fixture
def sources(site_dir):
    """Content source config as it would be loaded from YAML."""
    return {
        "1": {
            "name": "Test site",
            "base_url": BASE_URL,
            "content_dir": str(site_dir / "content"),
            "assets_manifest": str(site_dir / "assets" / "manifest.yaml"),
            "assets_url": "/assets/",
            "url_processor": None,
            "schemas": [{"url_pattern": ".*", "fields": ["content"]}],
        }
    }


# ---------------------------------------------------------------------------
# In-memory resolver fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def logo_asset():
    return AssetRecord(id=7, original_url=f"{BASE_URL}/files/logo.gif",
                       filename="logo.gif", relative_link="/assets/logo.gif")


@pytest.fixture
def make_resolver(logo_asset):
    """Factory for a LinkResolver over plain dict lookups."""
    def _make(content=None, assets=None, base_url=BASE_URL, assets_by_id=None, **kwargs):
        lookups = LookupTables(content=content or {}, assets=assets or {})
        known = {logo_asset.id: logo_asset} if assets_by_id is None else assets_by_id
        return LinkResolver(lookups, base_url, asset_resolver=known.get, **kwargs)
    return _make


@pytest.fixture
def page_writer():
    """Writes an extra markdown page into a content directory."""
    return write_page
