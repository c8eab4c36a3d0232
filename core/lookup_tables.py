# core/lookup_tables.py

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterable, Mapping

def build_lookup(records: Iterable) -> Mapping[str, int]:
    """
    Maps each record's original URL to its ID. Records are read in order, so a
    later record with the same URL wins. Records without a URL are skipped.
    The returned mapping is read-only.
    """
    lookup = {}
    for record in records:
        if record.original_url:
            lookup[record.original_url] = record.id
    return MappingProxyType(lookup)

@dataclass(frozen=True)
class LookupTables:
    """The content and asset lookups for a single rewriting run."""
    content: Mapping[str, int] = field(default_factory=lambda: MappingProxyType({}))
    assets: Mapping[str, int] = field(default_factory=lambda: MappingProxyType({}))

    @classmethod
    def from_records(cls, content_records: Iterable, asset_records: Iterable) -> "LookupTables":
        return cls(content=build_lookup(content_records), assets=build_lookup(asset_records))
