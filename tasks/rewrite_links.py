# tasks/rewrite_links.py
"""
Rewrites all links in content imported from a crawled legacy site.

All rewrite failures are written to a log file (see LOG_FILE in the config).
It's only after attempting to rewrite links that we can analyse why some
failed: often the URL being rewritten never made it through the import.
"""

import config
from core.failure_report import summarize, write_failure_log
from core.file_system import MarkdownContentRepository
from core.link_resolver import LinkResolver
from core.link_rewriter import rewrite_links_in_content
from core.lookup_tables import LookupTables
from core.messages import print_message
from core.scheme_classifier import with_assets_url
from core.url_processors import get_url_processor
from models.resolution import FailureLog, LinkContext

def print_task_info(sources=None):
    """Prints the available content sources and command line options."""
    sources = config.CONTENT_SOURCES if sources is None else sources
    print_message("Please choose a Content Source ID e.g. --source 1", 'WARNING')
    if sources:
        print_message("\nAvailable content-sources:\n")
        for source_id, data in sources.items():
            print_message(f"\t{source_id}: {data.get('name', '')} ({data.get('base_url', '')})")
    print_message("\nAvailable command line options:\n")
    print_message("\t--show content \tPrint the contents of the content map.")
    print_message("\t--show assets \tPrint the contents of the assets map.")
    print_message("\t--show-only \t\tStop processing after showing map contents.")
    print_message("\t--verbose \t\tShow debug information while processing.")
    print_message("\t--publish \t\tPublish changed pages instead of only saving them.")

def _show_lookup(title, lookup):
    print_message(title)
    for url, record_id in lookup.items():
        print_message(f"{record_id} => {url}")

def rewrite_record(record, fields, resolver):
    """
    Rewrites the links in the given fields of one record. Returns the names
    of the fields that changed; the record's fields are updated in place.
    """
    context = LinkContext(title=record.title, id=record.id)
    changed_fields = []
    for field in fields:
        original = record.get_field(field)
        new_content, changed = rewrite_links_in_content(
            original, lambda url: resolver.rewrite_url(url, context)
        )
        if changed:
            record.fields[field] = new_content
            changed_fields.append(field)
    return changed_fields

def run_rewrite_links(source_id=None, verbose=False, show=None, show_only=False, publish=False,
                      repository=None, log_file=None, sources=None):
    """
    The main task runner for rewriting the links of one content source.
    Returns the run's FailureLog, or None if nothing was processed.
    """
    if not source_id or not str(source_id).isdigit():
        print_task_info(sources)
        return None

    source = config.get_content_source(source_id, sources)
    if source is None:
        print_message(f"No content source found via ID: {source_id}", 'WARNING')
        return None

    print("🚀 Starting link rewriting...")
    repository = repository or MarkdownContentRepository.for_source(source)
    log_file = log_file or config.LOG_FILE

    pages = repository.list_content_records()
    files = repository.list_asset_records()
    print_message(f"Processing Import: {len(pages)} pages, {len(files)} files", 'NOTICE')

    lookups = LookupTables.from_records(pages, files)

    if show == 'content':
        _show_lookup('Content Map', lookups.content)
    elif show == 'assets':
        _show_lookup('Assets Map', lookups.assets)

    if show_only:
        return None

    failure_log = FailureLog()
    resolver = LinkResolver(
        lookups,
        source.base_url,
        asset_resolver=repository.resolve_asset_by_id,
        url_processor=get_url_processor(source.url_processor),
        non_http_schemes=config.NON_HTTP_URI_SCHEMES,
        ignore_marker_pattern=with_assets_url(config.IGNORE_MARKER_PATTERN, source.assets_url),
        content_reference_format=config.CONTENT_REFERENCE_FORMAT,
        failure_log=failure_log,
        verbose=verbose,
    )

    changed_field_count = 0
    for i, page in enumerate(pages):
        if verbose:
            print_message('------------------------------------------------')
            print_message(f"[{i + 1}/{len(pages)}] {page.title}")

        fields = source.get_fields_for_url(page.original_url)
        if fields is None:
            print_message(f"No schema found for {page.title}", 'WARNING')
            continue

        try:
            changed_fields = rewrite_record(page, fields, resolver)
            for field in changed_fields:
                print_message(f"Changed field: '{field}' on page: \"{page.title}\" (ID: {page.id})", 'NOTICE')
            changed_field_count += len(changed_fields)

            # Only save the page if something changed. Publishing is opt-in.
            if changed_fields:
                repository.save_record(page, publish=publish)
        except Exception as e:
            print(f"  [ERROR] Could not process {page.title} (ID: {page.id}): {e}")

    print_message("\nComplete.")
    print_message(f"Amended {changed_field_count} content fields.")
    print_message("Tips:")
    print_message("\n - 100% of links won't get fixed. It's recommended to also run a 3rd party link-checker over your imported content.")
    print_message(f" - Check {log_file} for more detail on failed link-rewrites.")

    summary = summarize(failure_log, non_http_schemes=config.NON_HTTP_URI_SCHEMES)
    write_failure_log(summary, log_file)
    print(f"\n✨ Link rewriting finished with {len(failure_log)} failure(s).")
    return failure_log
