"""Result formatters for CLI output.

Provides formatting for visual check results in multiple formats:
- text: Human-readable summary
- JSON: Machine-readable format
- JUnit XML: CI/CD integration format
- TAP: Test Anything Protocol format
"""

import json
import time
import xml.etree.ElementTree as ET
from datetime import datetime
from typing import Any


def format_results(
    results: list[dict[str, Any]],
    summary: dict[str, Any],
    format_type: str,
) -> str:
    """Format check results in the specified format.

    Args:
        results: List of check result dictionaries
        summary: Summary statistics dictionary
        format_type: Output format ("text", "json", "junit", or "tap")

    Returns:
        Formatted string output

    Raises:
        ValueError: If format_type is not recognized
    """
    if format_type == "text":
        return _format_text(results, summary)
    elif format_type == "json":
        return _format_json(results, summary)
    elif format_type == "junit":
        return _format_junit(results, summary)
    elif format_type == "tap":
        return _format_tap(results, summary)
    else:
        raise ValueError(f"Unknown format type: {format_type}")


def _describe(result: dict[str, Any]) -> str:
    """One-line verdict for a single check."""
    score = result.get("score")
    quality = f"{score:.4f}" if score is not None else "n/a"
    if result.get("found"):
        x, y = result["location"]
        return f"found at ({x}, {y}) scale {result.get('scale', 1.0):.3f} quality {quality}"
    return f"not found (closest quality {quality})"


def _format_text(results: list[dict[str, Any]], summary: dict[str, Any]) -> str:
    """Format results as plain text.

    Args:
        results: List of check result dictionaries
        summary: Summary statistics dictionary

    Returns:
        Text formatted string
    """
    lines = []
    for result in results:
        lines.append(f"{result.get('template', 'unknown')}: {_describe(result)}")
        if result.get("result_file"):
            lines.append(f"  result image: {result['result_file']}")

    lines.append("")
    lines.append(
        f"{summary.get('found', 0)}/{summary.get('total_checks', 0)} templates found "
        f"in {summary.get('target', 'target')}"
    )
    return "\n".join(lines)


def _format_json(results: list[dict[str, Any]], summary: dict[str, Any]) -> str:
    """Format results as JSON.

    Args:
        results: List of check result dictionaries
        summary: Summary statistics dictionary

    Returns:
        JSON formatted string
    """
    timestamp = summary.get("timestamp", time.time())
    timestamp_iso = datetime.fromtimestamp(timestamp).isoformat()

    output = {
        "summary": summary,
        "checks": results,
        "timestamp_iso": timestamp_iso,
    }

    return json.dumps(output, indent=2)


def _format_junit(results: list[dict[str, Any]], summary: dict[str, Any]) -> str:
    """Format results as JUnit XML.

    Args:
        results: List of check result dictionaries
        summary: Summary statistics dictionary

    Returns:
        JUnit XML formatted string
    """
    testsuites = ET.Element("testsuites")
    testsuites.set("tests", str(summary.get("total_checks", 0)))
    testsuites.set("failures", str(summary.get("not_found", 0)))
    testsuites.set("time", f"{summary.get('total_duration', 0):.3f}")

    testsuite = ET.SubElement(testsuites, "testsuite")
    testsuite.set("name", "Visual checks")
    testsuite.set("tests", str(summary.get("total_checks", 0)))
    testsuite.set("failures", str(summary.get("not_found", 0)))
    testsuite.set("time", f"{summary.get('total_duration', 0):.3f}")

    for result in results:
        testcase = ET.SubElement(testsuite, "testcase")
        testcase.set("name", result.get("template", "unknown"))
        testcase.set("classname", "scalesight.checks")
        testcase.set("time", f"{result.get('duration', 0):.2f}")

        if not result.get("found", False):
            failure = ET.SubElement(testcase, "failure")
            failure.set("message", _describe(result))
            failure.set("type", "TemplateNotFound")
            failure.text = f"{result.get('template')} not found in {summary.get('target')}"

    xml_string = ET.tostring(testsuites, encoding="unicode")
    return f'<?xml version="1.0" encoding="UTF-8"?>\n{xml_string}'


def _format_tap(results: list[dict[str, Any]], summary: dict[str, Any]) -> str:
    """Format results as TAP (Test Anything Protocol).

    Args:
        results: List of check result dictionaries
        summary: Summary statistics dictionary

    Returns:
        TAP formatted string
    """
    lines = []

    lines.append("TAP version 13")
    lines.append(f"1..{summary.get('total_checks', 0)}")

    for i, result in enumerate(results, 1):
        name = result.get("template", "unknown")
        if result.get("found", False):
            lines.append(f"ok {i} - {name}")
        else:
            lines.append(f"not ok {i} - {name}")

        # YAML diagnostics block
        lines.append("  ---")
        lines.append(f"  verdict: {_describe(result)}")
        lines.append(f"  duration_ms: {result.get('duration', 0) * 1000:.2f}")
        lines.append("  ...")

    lines.append("")
    lines.append(f"# Total: {summary.get('total_checks', 0)}")
    lines.append(f"# Found: {summary.get('found', 0)}")
    lines.append(f"# Not found: {summary.get('not_found', 0)}")

    return "\n".join(lines)
