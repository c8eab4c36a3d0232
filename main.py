import argparse
import sys

from tasks.rewrite_links import run_rewrite_links
from tasks.failure_report import run_failure_report

def main():
    """
    The main entry point for the command-line interface.
    """
    parser = argparse.ArgumentParser(
        description="Rewrites links in content imported from a crawled legacy site."
    )
    subparsers = parser.add_subparsers(dest="command", required=True, help="Available commands")

    rewrite_parser = subparsers.add_parser(
        "rewrite-links",
        help="Rewrite imported links into content references and asset links."
    )
    rewrite_parser.add_argument(
        '--source',
        dest='source_id',
        help="The ID of the content source whose links should be rewritten."
    )
    rewrite_parser.add_argument(
        '--verbose',
        action='store_true',
        help="Show debug information while processing."
    )
    rewrite_parser.add_argument(
        '--show',
        choices=['content', 'assets'],
        help="Print the contents of the content or assets map."
    )
    rewrite_parser.add_argument(
        '--show-only',
        action='store_true',
        help="Stop processing after showing map contents."
    )
    rewrite_parser.add_argument(
        '--publish',
        action='store_true',
        help="Publish changed pages instead of only saving them."
    )
    rewrite_parser.set_defaults(handler=run_rewrite_links)

    report_parser = subparsers.add_parser(
        "failure-report",
        help="Summarise the failed link-rewrites of the last run."
    )
    report_parser.add_argument(
        '--log-file',
        type=str,
        help="The failure log to read. Defaults to LOG_FILE from the config."
    )
    report_parser.set_defaults(handler=run_failure_report)

    args = parser.parse_args()

    if hasattr(args, 'handler'):
        if args.command == 'rewrite-links':
            args.handler(
                source_id=args.source_id,
                verbose=args.verbose,
                show=args.show,
                show_only=args.show_only,
                publish=args.publish
            )
        elif args.command == 'failure-report':
            args.handler(log_file=args.log_file)
    else:
        parser.print_help()
        sys.exit(1)

if __name__ == "__main__":
    main()
