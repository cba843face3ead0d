"""CLI entry point for IssueBridge.

- serve: run the REST API with uvicorn
- flaky merge: combine flaky-example reports from parallel test jobs
- flaky detect: fail when a report lists newly flaky examples
"""

from __future__ import annotations

import sys
from pathlib import Path

import click

from issuebridge.ci import FlakyReportError, describe_example, detect_new_flaky_examples, merge_reports
from issuebridge.config import ConfigError, resolve_config
from issuebridge.logging import setup_logging


@click.group()
@click.version_option(package_name="issuebridge")
def main() -> None:
    """IssueBridge - forward host events to external issue trackers."""
    pass


@main.command()
@click.option(
    "-c",
    "--config",
    "config_path",
    type=click.Path(exists=True, path_type=Path),
    help="Path to issuebridge.yaml (auto-detected if not specified)",
)
@click.option("--host", default="127.0.0.1", show_default=True, help="Bind address")
@click.option("--port", type=int, default=8000, show_default=True, help="Bind port")
def serve(config_path: Path | None, host: str, port: int) -> None:
    """Run the IssueBridge REST API."""
    import uvicorn  # noqa: PLC0415

    from issuebridge.api.app import create_app  # noqa: PLC0415

    try:
        config = resolve_config(config_path)
    except ConfigError as e:
        click.echo(f"Configuration error: {e}", err=True)
        sys.exit(1)

    setup_logging(
        log_dir=config.logging.dir,
        level=config.logging.level,
        console=config.logging.console,
    )
    uvicorn.run(create_app(config), host=host, port=port, log_level="info")


@main.group()
def flaky() -> None:
    """Flaky-example report tooling for CI."""
    pass


@flaky.command("merge")
@click.argument("output", type=click.Path(dir_okay=False, path_type=Path))
@click.argument("inputs", nargs=-1, type=click.Path(dir_okay=False, path_type=Path))
def merge_command(output: Path, inputs: tuple[Path, ...]) -> None:
    """Merge INPUTS into the OUTPUT report (later inputs win)."""
    try:
        merged = merge_reports(output, list(inputs))
    except FlakyReportError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    click.echo(f"Merged {len(inputs)} report(s) into {output} ({len(merged)} example(s))")


@flaky.command("detect")
@click.argument("report", type=click.Path(dir_okay=False, path_type=Path))
def detect_command(report: Path) -> None:
    """Exit with status 1 when REPORT lists new flaky examples."""
    try:
        examples = detect_new_flaky_examples(report)
    except FlakyReportError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    if not examples:
        click.echo("No new flaky examples detected.")
        return

    click.echo(f"{len(examples)} new flaky example(s) detected:", err=True)
    for example in examples:
        click.echo(f"  - {describe_example(example)}", err=True)
    sys.exit(1)


if __name__ == "__main__":
    main()
