# models/resolution.py
from dataclasses import dataclass, field
from typing import Iterable, Iterator, List, Optional, Union

MISSING_ASSET = "missing-asset"

@dataclass(frozen=True)
class LinkContext:
    """The page a link was found in, used to give failures some context."""
    title: str = ""
    id: Optional[int] = None

@dataclass(frozen=True)
class Ignored:
    """The URL is intentionally left untouched."""

@dataclass(frozen=True)
class ResolvedContent:
    id: int
    fragment: str = ""

@dataclass(frozen=True)
class ResolvedAsset:
    id: int
    relative_link: str = ""

@dataclass(frozen=True)
class Failed:
    reason: str

Resolution = Union[Ignored, ResolvedContent, ResolvedAsset, Failed]

@dataclass(frozen=True)
class FailureEntry:
    """A link that could not be rewritten, along with where it was found."""
    original_url: str
    context_title: str = ""
    context_id: Optional[int] = None
    reason: Optional[str] = None

    def describe(self) -> str:
        return (
            f"Couldn't rewrite: {self.original_url}"
            f" Found in Page: {self.context_title}"
            f" (ID:{'' if self.context_id is None else self.context_id})"
        )

@dataclass
class FailureLog:
    """An append-only, insertion-ordered list of failed rewrites."""
    entries: List[FailureEntry] = field(default_factory=list)

    def append(self, entry: FailureEntry):
        self.entries.append(entry)

    def extend(self, other: Iterable[FailureEntry]):
        """Merges another log (e.g. from a worker) after the existing entries."""
        self.entries.extend(other)

    def descriptions(self) -> List[str]:
        return [entry.describe() for entry in self.entries]

    def __iter__(self) -> Iterator[FailureEntry]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)
