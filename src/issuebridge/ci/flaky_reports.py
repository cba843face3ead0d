"""Merging and checking of flaky-example reports produced by test jobs.

A report is a JSON object mapping an example's uid to its details.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from issuebridge.logging import get_logger

logger = get_logger("ci")


class FlakyReportError(Exception):
    """Raised when a report file can't be read or isn't a JSON object."""


def load_report(path: Path | str) -> dict[str, Any]:
    """Load a report; a missing file reads as an empty report.

    Raises:
        FlakyReportError: If the file is not a JSON object
    """
    path = Path(path)
    if not path.exists():
        return {}
    try:
        data = json.loads(path.read_text(encoding="utf-8") or "{}")
    except json.JSONDecodeError as e:
        raise FlakyReportError(f"Invalid JSON in {path}: {e}") from e
    if not isinstance(data, dict):
        raise FlakyReportError(f"Report {path} must be a JSON object, got {type(data).__name__}")
    return data


def merge_reports(output: Path | str, inputs: list[Path | str]) -> dict[str, Any]:
    """Merge input reports into output, later inputs winning on duplicate keys.

    The existing contents of output are the starting point.

    Returns:
        The merged report, as written
    """
    output = Path(output)
    merged = load_report(output)
    for path in inputs:
        report = load_report(path)
        logger.debug("Merging %d example(s) from %s", len(report), path)
        merged.update(report)

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(json.dumps(merged, indent=2, sort_keys=True) + "\n", encoding="utf-8")
    logger.info("Merged %d report(s) into %s (%d example(s))", len(inputs), output, len(merged))
    return merged


def detect_new_flaky_examples(report_path: Path | str) -> list[dict[str, Any]]:
    """Return the examples listed in a new-flaky report, in key order."""
    report = load_report(report_path)
    examples = []
    for uid in sorted(report):
        entry = report[uid]
        details = dict(entry) if isinstance(entry, dict) else {"details": entry}
        details.setdefault("uid", uid)
        examples.append(details)
    return examples


def describe_example(example: dict[str, Any]) -> str:
    """One line per example for terminal output."""
    location = example.get("file") or example.get("example_id") or example["uid"]
    description = example.get("description")
    return f"{location}: {description}" if description else str(location)
