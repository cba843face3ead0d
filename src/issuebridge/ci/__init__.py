"""CI tooling - Flaky-example report merging and detection."""

from issuebridge.ci.flaky_reports import (
    FlakyReportError,
    describe_example,
    detect_new_flaky_examples,
    load_report,
    merge_reports,
)

__all__ = [
    "FlakyReportError",
    "describe_example",
    "detect_new_flaky_examples",
    "load_report",
    "merge_reports",
]
