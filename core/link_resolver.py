# core/link_resolver.py

from typing import Callable, Iterable, Optional

from core.failure_report import classify_url
from core.key_derivation import derive_asset_key, derive_content_key, split_fragment
from core.lookup_tables import LookupTables
from core.messages import print_message
from core.scheme_classifier import (
    DEFAULT_IGNORE_MARKER_PATTERN, DEFAULT_NON_HTTP_URI_SCHEMES, ignore_reason
)
from models.resolution import (
    MISSING_ASSET, Failed, FailureEntry, FailureLog, Ignored, LinkContext,
    Resolution, ResolvedAsset, ResolvedContent
)

DEFAULT_CONTENT_REFERENCE_FORMAT = '[sitetree_link,id={id}]{fragment}'

class LinkResolver:
    """
    Decides what a single link found in imported content should become:
    a content reference, an asset link, or nothing (ignored or failed).

    Failed links are appended to `failure_log`, which is summarised once the
    whole import has been processed.
    """

    def __init__(self, lookups: LookupTables, base_url: str,
                 asset_resolver: Callable[[int], Optional[object]],
                 url_processor=None,
                 non_http_schemes: Iterable[str] = DEFAULT_NON_HTTP_URI_SCHEMES,
                 ignore_marker_pattern: str = DEFAULT_IGNORE_MARKER_PATTERN,
                 content_reference_format: str = DEFAULT_CONTENT_REFERENCE_FORMAT,
                 failure_log: FailureLog = None,
                 verbose: bool = False):
        self.lookups = lookups
        self.base_url = base_url or ''
        self.asset_resolver = asset_resolver
        self.url_processor = url_processor
        self.non_http_schemes = tuple(non_http_schemes)
        self.ignore_marker_pattern = ignore_marker_pattern
        self.content_reference_format = content_reference_format
        self.failure_log = failure_log if failure_log is not None else FailureLog()
        self.verbose = verbose

    def _log(self, message, level=None, url=None):
        if self.verbose:
            print_message(message, level, url)

    def _process_url(self, url: str) -> str:
        """
        Runs the URL through the source's URL processor so it matches the
        original URLs as they were stored during import. Anything unexpected
        from the processor means the URL is used unprocessed.
        """
        if self.url_processor is None or not url.strip():
            return url
        try:
            processed = self.url_processor.process(url, 'text/html')
        except Exception as e:
            print_message(f"URL processor failed: {e}", 'WARNING', url)
            return url
        processed_url = processed.get('url') if isinstance(processed, dict) else None
        if not processed_url or not isinstance(processed_url, str):
            print_message("URL processor returned no URL, using it unprocessed", 'WARNING', url)
            return url
        return processed_url

    def _record_failure(self, url_input: str, context: LinkContext, reason: str = None):
        self.failure_log.append(FailureEntry(
            original_url=url_input,
            context_title=context.title,
            context_id=context.id,
            reason=reason,
        ))

    def resolve(self, raw_url: str, context: LinkContext = None) -> Resolution:
        """
        Resolves one URL. Content is always looked up before assets.
        """
        context = context or LinkContext()
        url_input = raw_url or ''

        url, fragment = split_fragment(url_input)
        fragment = f"ID={fragment}" if fragment else ""

        url = self._process_url(url)

        reason = ignore_reason(url, self.non_http_schemes, self.ignore_marker_pattern)
        if reason:
            self._log(f"+ {reason}")
            return Ignored()

        try:
            content_key = derive_content_key(url, self.base_url)
            asset_key = derive_asset_key(url_input, self.base_url)
        except ValueError as e:
            print_message(f"Malformed URL: {e}", 'WARNING', url_input)
            self._record_failure(url_input, context)
            return Failed(reason=classify_url(url_input, self.non_http_schemes))

        self._log(f'# rewriting: "{url_input}"')
        if fragment:
            self._log(f' - fragment: "{fragment}"')
        self._log(f' - page-key: "{content_key}"')
        self._log(f' - file-key: "{asset_key}"')

        content_id = self.lookups.content.get(content_key)
        if content_id:
            self._log(f"+ found: page ID#{content_id}")
            return ResolvedContent(id=content_id, fragment=fragment)

        asset_id = self.lookups.assets.get(asset_key)
        if asset_id:
            asset = self._resolve_asset(asset_id)
            if asset is not None:
                self._log(f"+ found: file ID#{asset_id}")
                return ResolvedAsset(id=asset_id, relative_link=asset.relative_link)
            print_message(f"File lookup failed with FileID: {asset_id}, FileMapKey: {asset_key}", 'WARNING')
            self._record_failure(url_input, context, MISSING_ASSET)
            return Failed(reason=MISSING_ASSET)

        print_message("Rewriter failed ", 'WARNING', url_input)
        self._record_failure(url_input, context)
        return Failed(reason=classify_url(url_input, self.non_http_schemes))

    def _resolve_asset(self, asset_id: int):
        try:
            return self.asset_resolver(asset_id)
        except Exception as e:
            print_message(f"Could not load file ID#{asset_id}: {e}", 'WARNING')
            return None

    def to_token(self, resolution: Resolution) -> Optional[str]:
        """The text to splice in for a resolution, or None to leave the URL as it was."""
        if isinstance(resolution, ResolvedContent):
            return self.content_reference_format.format(id=resolution.id, fragment=resolution.fragment)
        if isinstance(resolution, ResolvedAsset):
            return resolution.relative_link or None
        return None

    def rewrite_url(self, url: str, context: LinkContext = None) -> Optional[str]:
        """Callback for the content link rewriter."""
        return self.to_token(self.resolve(url, context))
