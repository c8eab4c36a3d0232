# models/content.py
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

@dataclass
class ContentRecord:
    """
    A single imported page. `original_url` is the URL the page had on the
    legacy site, recorded verbatim at import time.
    """
    id: int
    original_url: str
    title: str
    fields: Dict[str, str] = field(default_factory=dict)
    path: Optional[Path] = None
    draft: bool = True

    def get_field(self, name: str) -> str:
        value = self.fields.get(name)
        return value if isinstance(value, str) else ""

@dataclass
class AssetRecord:
    """A single imported file, e.g. an image or a PDF."""
    id: int
    original_url: str
    filename: str
    relative_link: str = ""

@dataclass
class ImportSchema:
    """The set of rewritable fields for pages whose URL matches `url_pattern`."""
    url_pattern: str
    fields: List[str] = field(default_factory=list)

    def matches(self, url: str) -> bool:
        return re.search(self.url_pattern, url or '') is not None

@dataclass
class ContentSource:
    """
    A crawled legacy site whose imported content needs its links rewritten.
    """
    id: str
    name: str
    base_url: str
    content_dir: Path
    assets_manifest: Optional[Path] = None
    assets_url: str = "/assets/"
    url_processor: Optional[str] = None
    schemas: List[ImportSchema] = field(default_factory=list)

    def get_schema_for_url(self, url: str) -> Optional[ImportSchema]:
        """Returns the first schema whose pattern matches the URL, if any."""
        for schema in self.schemas:
            if schema.matches(url):
                return schema
        return None

    def get_fields_for_url(self, url: str) -> Optional[List[str]]:
        schema = self.get_schema_for_url(url)
        if schema is None:
            return None
        # Keep the configured order but drop duplicates.
        return list(dict.fromkeys(schema.fields))
