"""scalesight CLI - Main entry point.

Provides the ``match`` command for checking whether template images appear
on a screenshot.

Exit codes:
    0: All templates found
    1: At least one template not found
    2: Configuration error
    3: Runtime error
"""

import sys
import time
from pathlib import Path
from typing import Any

import click

from ..config import ScalesightSettings
from ..exceptions import ConfigurationException, PerceptionException
from ..logging import setup_logging
from .formatters import format_results

# Exit codes
EXIT_SUCCESS = 0
EXIT_NOT_FOUND = 1
EXIT_CONFIG_ERROR = 2
EXIT_RUNTIME_ERROR = 3


@click.group()
@click.version_option(prog_name="scalesight")
@click.pass_context
def main(ctx: click.Context) -> None:
    """scalesight CLI - Scale-independent visual checks.

    Find template images on screenshots regardless of resolution.
    """
    ctx.ensure_object(dict)


@main.command()
@click.argument("target", type=click.Path(dir_okay=False))
@click.argument("templates", nargs=-1, required=True, type=click.Path(dir_okay=False))
@click.option(
    "--threshold", "-t", type=float, help="Minimum match quality (default from settings)"
)
@click.option("--description", "-d", help="Check name, used for result image file names")
@click.option(
    "--output-dir", "-o", type=click.Path(file_okay=False), help="Directory for result images"
)
@click.option("--no-save", is_flag=True, help="Do not write annotated result images")
@click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice(["text", "json", "junit", "tap"]),
    default="text",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
def match(
    target: str,
    templates: tuple[str, ...],
    threshold: float | None,
    description: str | None,
    output_dir: str | None,
    no_save: bool,
    output_format: str,
    verbose: bool,
) -> None:
    """Check whether each TEMPLATE appears in TARGET.

    TARGET: Path to the screenshot to search in
    TEMPLATES: One or more template images to search for
    """
    setup_logging(level="DEBUG" if verbose else "WARNING", structured=False)

    overrides: dict[str, Any] = {}
    if output_dir:
        overrides["result_dir"] = Path(output_dir)
    if no_save:
        overrides["save_annotated_results"] = False

    try:
        settings = ScalesightSettings(**overrides)
        from ..find import TemplateMatcher

        matcher = TemplateMatcher(settings=settings)
    except (ConfigurationException, ValueError) as e:
        click.echo(f"Configuration error: {e}", err=True)
        sys.exit(EXIT_CONFIG_ERROR)

    results: list[dict[str, Any]] = []
    start_time = time.time()

    try:
        for template in templates:
            check_name = description or Path(template).stem
            if description and len(templates) > 1:
                check_name = f"{description} - {Path(template).stem}"

            check_start = time.time()
            result = matcher.match(target, template, threshold, check_name)
            results.append(
                {
                    "template": template,
                    "duration": time.time() - check_start,
                    **result.to_dict(),
                }
            )
    except ConfigurationException as e:
        click.echo(f"Configuration error: {e}", err=True)
        sys.exit(EXIT_CONFIG_ERROR)
    except PerceptionException as e:
        click.echo(f"Runtime error: {e}", err=True)
        sys.exit(EXIT_RUNTIME_ERROR)

    found = sum(1 for r in results if r["found"])
    summary = {
        "target": target,
        "total_checks": len(results),
        "found": found,
        "not_found": len(results) - found,
        "total_duration": time.time() - start_time,
        "timestamp": start_time,
    }

    click.echo(format_results(results, summary, output_format))
    sys.exit(EXIT_SUCCESS if found == len(results) else EXIT_NOT_FOUND)


if __name__ == "__main__":
    main()
