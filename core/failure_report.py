# core/failure_report.py
"""
Summarises failed link rewrites.

It's only after attempting to rewrite links that we can analyse why some
failed. Often the URL being rewritten never made it through the import, so
failures are grouped into categories based on the shape of the URL.
"""

import re
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Dict, Iterable

from core.scheme_classifier import DEFAULT_NON_HTTP_URI_SCHEMES
from models.resolution import MISSING_ASSET, FailureEntry, FailureLog

THIRD_PARTY = 'ThirdParty'
BAD_SCHEME = 'BadScheme'
BAD_IMPORT = 'BadImport'
JUNK = 'Junk'
MISSING_ASSET_CATEGORY = 'MissingAsset'

FAILURE_CATEGORIES = (THIRD_PARTY, BAD_SCHEME, BAD_IMPORT, JUNK, MISSING_ASSET_CATEGORY)
TOTAL_LABEL = 'Total failures'

FAILURE_PREFIX = "Couldn't rewrite: "
HEADER_PREFIX = "Imported link failure log: "
FAILURE_LINE_PATTERN = re.compile(r"^Couldn't rewrite: (.*) Found in Page: (.*) \(ID:(\d*)\)$")
COUNT_LINE_PATTERN = re.compile(r"^(.+): (\d+)$")

@dataclass
class FailureSummary:
    counts: Dict[str, int]
    report: str

def name_to_label(name: str) -> str:
    """Turns a camel-cased name into a label, e.g. 'ThirdParty' -> 'Third Party'."""
    label = re.sub(r'([a-z]+)([A-Z])', r'\1 \2', name)
    return label[:1].upper() + label[1:]

def classify_url(url: str, non_http_schemes: Iterable[str] = DEFAULT_NON_HTTP_URI_SCHEMES) -> str:
    """
    Works out the failure category of a URL that could not be rewritten:
    - ThirdParty: an absolute http(s) URL that isn't on the imported site
    - BadScheme: a non http(s) URI scheme, e.g. mailto or tel
    - BadImport: a rooted path that was never imported
    - Junk: anything else
    """
    url = url.replace(FAILURE_PREFIX, '').strip()
    schemes = '|'.join(re.escape(s) for s in non_http_schemes if s)

    if 'http' in url.lower():
        return THIRD_PARTY
    if schemes and re.search(rf"({schemes}):", url, re.IGNORECASE):
        return BAD_SCHEME
    if url.startswith('/'):
        return BAD_IMPORT
    return JUNK

def classify_failure(entry: FailureEntry, non_http_schemes: Iterable[str] = DEFAULT_NON_HTTP_URI_SCHEMES) -> str:
    if entry.reason == MISSING_ASSET:
        return MISSING_ASSET_CATEGORY
    return classify_url(entry.original_url, non_http_schemes)

def count_failure_types(failure_log: Iterable[FailureEntry],
                        non_http_schemes: Iterable[str] = DEFAULT_NON_HTTP_URI_SCHEMES) -> Dict[str, int]:
    """Returns the total number of failures followed by a count per category."""
    counts = {category: 0 for category in FAILURE_CATEGORIES}
    total = 0
    for entry in failure_log:
        counts[classify_failure(entry, non_http_schemes)] += 1
        total += 1
    return {TOTAL_LABEL: total, **counts}

def summarize(failure_log: Iterable[FailureEntry], now: datetime = None,
              non_http_schemes: Iterable[str] = DEFAULT_NON_HTTP_URI_SCHEMES) -> FailureSummary:
    """
    Counts the failures per category and renders the failure log text:
    a timestamped header, the counts, then one line per failure in the
    order they were recorded.
    """
    entries = list(failure_log)
    now = now or datetime.now()
    counts = count_failure_types(entries, non_http_schemes)

    header = f"{HEADER_PREFIX}({now.strftime('%d/%m/%Y %H:%M:%S')})\n\n"
    for label, count in counts.items():
        header += f"{name_to_label(label)}: {count}\n"

    failures = "\n".join(entry.describe() for entry in entries)
    return FailureSummary(counts=counts, report=f"{header}\n{failures}\n")

def write_failure_log(summary: FailureSummary, log_file: Path) -> Path:
    """Appends the rendered report to the log file, creating it if needed."""
    log_file = Path(log_file)
    log_file.parent.mkdir(parents=True, exist_ok=True)
    with open(log_file, 'a', encoding='utf-8') as f:
        f.write(summary.report)
    return log_file

def parse_failure_line(line: str):
    """Turns a "Couldn't rewrite: ..." line back into a FailureEntry, or None."""
    match = FAILURE_LINE_PATTERN.match(line.strip())
    if not match:
        return None
    url, title, page_id = match.groups()
    return FailureEntry(original_url=url, context_title=title, context_id=int(page_id) if page_id else None)

def read_failure_log(log_file: Path) -> FailureLog:
    """
    Reads the failures of the most recent run back from a log file. Runs are
    appended to the same file, each starting with its own header line.
    """
    failure_log = FailureLog()
    with open(log_file, 'r', encoding='utf-8') as f:
        for line in f:
            if line.startswith(HEADER_PREFIX):
                failure_log = FailureLog()
                continue
            entry = parse_failure_line(line)
            if entry:
                failure_log.append(entry)
    return failure_log

def read_failure_counts(log_file: Path) -> Dict[str, int]:
    """
    Reads the category counts written in the header of the most recent run.

    The failure lines don't say why a link failed, so missing assets can only
    be told apart from other failures by these counts. Returns an empty dict
    if the header has no count for one of the categories.
    """
    names = {name_to_label(name): name for name in (TOTAL_LABEL,) + FAILURE_CATEGORIES}
    counts = {}
    with open(log_file, 'r', encoding='utf-8') as f:
        for line in f:
            if line.startswith(HEADER_PREFIX):
                counts = {}
                continue
            match = COUNT_LINE_PATTERN.match(line.rstrip('\n'))
            if match and match.group(1) in names:
                counts[names[match.group(1)]] = int(match.group(2))

    if len(counts) != len(names):
        return {}
    return {name: counts[name] for name in names.values()}
