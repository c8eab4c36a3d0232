# tasks/failure_report.py

from pathlib import Path

import config
from core.failure_report import (
    count_failure_types, name_to_label, read_failure_counts, read_failure_log
)
from core.messages import print_message

def run_failure_report(log_file=None):
    """
    Re-reads the most recent run from the failure log and prints how many
    failed rewrites fall into each category.
    """
    log_file = Path(log_file or config.LOG_FILE)
    if not log_file.is_file():
        print_message(f"No failure log found at {log_file}", 'WARNING')
        return None

    print(f"🔎 Reading failed link-rewrites from '{log_file}'...")
    counts = read_failure_counts(log_file)
    if not counts:
        # Logs without a full header: classify the failure lines by URL.
        failure_log = read_failure_log(log_file)
        counts = count_failure_types(failure_log, config.NON_HTTP_URI_SCHEMES)

    for label, count in counts.items():
        print_message(f"{name_to_label(label)}: {count}")
    return counts
