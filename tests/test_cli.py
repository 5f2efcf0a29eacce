"""Mini README: Tests for the Typer command line interface."""

from __future__ import annotations

import json

from typer.testing import CliRunner

from main_route_service import cli

runner = CliRunner()


def test_optimize_demo_prints_route_and_totals(tmp_path) -> None:
    geojson_path = tmp_path / "route.geojson"

    result = runner.invoke(
        cli,
        [
            "optimize",
            "--demo",
            "--provider",
            "straight_line",
            "--departure",
            "2024-05-01T09:00:00",
            "--geojson-out",
            str(geojson_path),
        ],
    )

    assert result.exit_code == 0, result.output
    assert "Total:" in result.output
    assert "arrive" in result.output
    collection = json.loads(geojson_path.read_text(encoding="utf-8"))
    assert len(collection["features"]) == 6


def test_optimize_reads_point_file(tmp_path) -> None:
    points_path = tmp_path / "points.json"
    points_path.write_text(
        json.dumps(
            [
                {"id": "far", "latitude": 0.03, "longitude": 0.0},
                {"id": "near", "latitude": 0.01, "longitude": 0.0},
            ]
        ),
        encoding="utf-8",
    )

    result = runner.invoke(
        cli,
        ["optimize", str(points_path), "--start-lat", "0", "--start-lon", "0", "--mode", "walking"],
    )

    assert result.exit_code == 0, result.output
    assert "  1. near" in result.output
    assert "  2. far" in result.output
    assert "walking" in result.output


def test_optimize_rejects_unknown_provider() -> None:
    result = runner.invoke(cli, ["optimize", "--demo", "--provider", "teleport"])

    assert result.exit_code == 2


def test_optimize_rejects_bad_coordinates(tmp_path) -> None:
    points_path = tmp_path / "points.json"
    points_path.write_text(json.dumps([{"id": "x", "latitude": 91, "longitude": 0}]), encoding="utf-8")

    result = runner.invoke(cli, ["optimize", str(points_path), "--start-lat", "0", "--start-lon", "0"])

    assert result.exit_code == 2


def test_optimize_rejects_duplicate_point_ids(tmp_path) -> None:
    points_path = tmp_path / "points.json"
    points_path.write_text(
        json.dumps(
            [
                {"id": "x", "latitude": 0.01, "longitude": 0.0},
                {"id": "x", "latitude": 0.02, "longitude": 0.0},
            ]
        ),
        encoding="utf-8",
    )

    result = runner.invoke(cli, ["optimize", str(points_path), "--start-lat", "0", "--start-lon", "0"])

    assert result.exit_code == 2
    assert "appears more than once" in result.output


def test_optimize_treats_null_dwell_as_default(tmp_path) -> None:
    points_path = tmp_path / "points.json"
    points_path.write_text(
        json.dumps([{"id": "x", "latitude": 0.01, "longitude": 0.0, "dwell_seconds": None}]),
        encoding="utf-8",
    )

    result = runner.invoke(cli, ["optimize", str(points_path), "--start-lat", "0", "--start-lon", "0"])

    assert result.exit_code == 0, result.output
    assert "15 min at stops" in result.output


def test_optimize_rejects_non_numeric_dwell(tmp_path) -> None:
    points_path = tmp_path / "points.json"
    points_path.write_text(
        json.dumps([{"id": "x", "latitude": 0.01, "longitude": 0.0, "dwell_seconds": "a while"}]),
        encoding="utf-8",
    )

    result = runner.invoke(cli, ["optimize", str(points_path), "--start-lat", "0", "--start-lon", "0"])

    assert result.exit_code == 2
