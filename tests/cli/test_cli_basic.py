"""Basic tests for scalesight CLI commands."""

import json

import cv2
import numpy as np
import pytest
from click.testing import CliRunner

from scalesight.cli.main import main


@pytest.fixture
def cli_runner():
    """Create CLI runner."""
    return CliRunner()


@pytest.fixture
def screen_files(tmp_path, marked_screen):
    """Write a screenshot, a template on it and a template that is not on it."""
    screen, template = marked_screen
    target = tmp_path / "screen.png"
    present = tmp_path / "red_box.png"
    absent = tmp_path / "noise.png"
    cv2.imwrite(str(target), screen)
    cv2.imwrite(str(present), template)
    rng = np.random.default_rng(11)
    cv2.imwrite(str(absent), rng.integers(0, 256, (60, 60, 3), dtype=np.uint8))
    return target, present, absent


def test_cli_help(cli_runner):
    """Test that CLI help works."""
    result = cli_runner.invoke(main, ["--help"])
    assert result.exit_code == 0
    assert "scalesight CLI" in result.output


def test_cli_version(cli_runner):
    """Test that version command works."""
    result = cli_runner.invoke(main, ["--version"])
    assert result.exit_code == 0
    assert "scalesight" in result.output


def test_match_command_help(cli_runner):
    """Test match command help."""
    result = cli_runner.invoke(main, ["match", "--help"])
    assert result.exit_code == 0
    assert "TEMPLATE appears in TARGET" in result.output


def test_match_found(cli_runner, screen_files, tmp_path):
    """Test a template that is on the screenshot."""
    target, present, _ = screen_files
    output_dir = tmp_path / "out"

    result = cli_runner.invoke(
        main,
        [
            "match",
            str(target),
            str(present),
            "--threshold",
            "0.95",
            "--description",
            "red box",
            "--output-dir",
            str(output_dir),
            "--format",
            "json",
        ],
    )

    assert result.exit_code == 0
    data = json.loads(result.stdout)
    assert data["summary"]["found"] == 1
    check = data["checks"][0]
    assert check["found"] is True
    assert check["location"] == [450, 450]
    assert (output_dir / "red box.png").is_file()


def test_match_not_found(cli_runner, screen_files, tmp_path):
    """Test that a missing template exits with code 1."""
    target, present, absent = screen_files

    result = cli_runner.invoke(
        main,
        [
            "match",
            str(target),
            str(present),
            str(absent),
            "-t",
            "0.95",
            "-o",
            str(tmp_path / "out"),
        ],
    )

    assert result.exit_code == 1  # NOT_FOUND
    assert "red_box.png: found at (450, 450)" in result.stdout
    assert "noise.png: not found" in result.stdout
    assert "1/2 templates found" in result.stdout


def test_match_no_save(cli_runner, screen_files, tmp_path):
    """Test that --no-save suppresses result images."""
    target, present, _ = screen_files
    output_dir = tmp_path / "out"

    result = cli_runner.invoke(
        main,
        ["match", str(target), str(present), "-t", "0.95", "-o", str(output_dir), "--no-save"],
    )

    assert result.exit_code == 0
    assert not output_dir.exists()


def test_match_tap_names_checks_per_template(cli_runner, screen_files, tmp_path):
    """Test result file names when one description covers several templates."""
    target, present, absent = screen_files
    output_dir = tmp_path / "out"

    result = cli_runner.invoke(
        main,
        [
            "match",
            str(target),
            str(present),
            str(absent),
            "-t",
            "0.95",
            "-d",
            "home",
            "-o",
            str(output_dir),
            "-f",
            "tap",
        ],
    )

    assert result.exit_code == 1
    assert "not ok 2" in result.stdout
    assert (output_dir / "home - red_box.png").is_file()


def test_match_missing_file(cli_runner, screen_files, tmp_path):
    """Test that an unreadable image exits with a runtime error."""
    target, _, _ = screen_files

    result = cli_runner.invoke(main, ["match", str(target), str(tmp_path / "nope.png")])

    assert result.exit_code == 3  # RUNTIME_ERROR
    assert "file not found" in result.output


def test_match_disabled(cli_runner, screen_files, monkeypatch):
    """Test that disabled matching exits with a configuration error."""
    target, present, _ = screen_files
    monkeypatch.setenv("SCALESIGHT_VISUAL_MATCHING_ENABLED", "false")

    result = cli_runner.invoke(main, ["match", str(target), str(present)])

    assert result.exit_code == 2  # CONFIG_ERROR
    assert "Visual matching is disabled" in result.output


def test_match_invalid_settings(cli_runner, screen_files, monkeypatch):
    """Test that inconsistent width bounds exit with a configuration error."""
    target, present, _ = screen_files
    monkeypatch.setenv("SCALESIGHT_MIN_IMAGE_WIDTH", "4000")

    result = cli_runner.invoke(main, ["match", str(target), str(present)])

    assert result.exit_code == 2  # CONFIG_ERROR


def test_match_requires_template(cli_runner, screen_files):
    """Test that at least one template is required."""
    target, _, _ = screen_files

    result = cli_runner.invoke(main, ["match", str(target)])

    assert result.exit_code == 2  # click usage error
