"""Tests for the click CLI."""

import json
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from daybook.adapters.openweather_api import CityNotFoundError
from daybook.cli import main
from daybook.config import Config
from daybook.core.weather import CurrentWeather, ForecastEntry

from fakes import FakeWeatherService


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture(autouse=True)
def config(tmp_path):
    cfg = Config(data_dir=str(tmp_path / "data"), openweather_api_key="k")
    with patch("daybook.cli.load_config", return_value=cfg):
        yield cfg


def listed(runner, *args) -> list[dict]:
    result = runner.invoke(main, ["list", "--json", *args])
    assert result.exit_code == 0, result.output
    return json.loads(result.output)


class TestTodoCommands:
    def test_add_and_list(self, runner):
        result = runner.invoke(main, ["add", "Buy milk", "-p", "Work", "--priority", "high", "--due", "2099-01-01"])
        assert result.exit_code == 0
        assert "Buy milk" in result.output

        tasks = listed(runner)
        assert len(tasks) == 1
        assert tasks[0]["project"] == "Work"
        assert tasks[0]["priority"] == "high"
        assert tasks[0]["dueDate"] == "2099-01-01"

    def test_add_blank_fails(self, runner):
        result = runner.invoke(main, ["add", "   "])
        assert result.exit_code == 1
        assert listed(runner) == []

    def test_add_bad_date(self, runner):
        result = runner.invoke(main, ["add", "x", "--due", "tomorrow"])
        assert result.exit_code != 0
        assert "YYYY-MM-DD" in result.output

    def test_list_text_output_and_counts(self, runner):
        runner.invoke(main, ["add", "first"])
        runner.invoke(main, ["add", "second"])
        result = runner.invoke(main, ["list", "--search", "SEC"])
        assert "second" in result.output
        assert "first" not in result.output
        assert "2 total, 0 completed, 2 pending, 0 overdue" in result.output

    def test_list_empty(self, runner):
        result = runner.invoke(main, ["list"])
        assert "No tasks found." in result.output

    def test_done_toggles(self, runner):
        runner.invoke(main, ["add", "a"])
        task_id = listed(runner)[0]["id"]

        result = runner.invoke(main, ["done", task_id])
        assert "Completed: a" in result.output
        assert listed(runner, "--status", "completed")[0]["id"] == task_id

        result = runner.invoke(main, ["done", task_id])
        assert "Reopened: a" in result.output

    def test_done_missing(self, runner):
        result = runner.invoke(main, ["done", "nope"])
        assert result.exit_code == 1
        assert "Task nope not found." in result.output

    def test_edit(self, runner):
        runner.invoke(main, ["add", "a", "--due", "2099-01-01"])
        task_id = listed(runner)[0]["id"]

        result = runner.invoke(main, ["edit", task_id, "--text", "b", "--due", "", "--priority", "low"])
        assert result.exit_code == 0
        task = listed(runner)[0]
        assert task["text"] == "b"
        assert task["dueDate"] is None
        assert task["priority"] == "low"

    def test_rm_with_confirmation(self, runner):
        runner.invoke(main, ["add", "a"])
        task_id = listed(runner)[0]["id"]

        result = runner.invoke(main, ["rm", task_id], input="n\n")
        assert len(listed(runner)) == 1

        result = runner.invoke(main, ["rm", task_id], input="y\n")
        assert "Deleted" in result.output
        assert listed(runner) == []

    def test_move(self, runner):
        for text in ["c", "b", "a"]:
            runner.invoke(main, ["add", text])
        a, b, c = (t["id"] for t in listed(runner))

        result = runner.invoke(main, ["move", b, a])
        assert result.exit_code == 0
        assert [t["text"] for t in listed(runner)] == ["b", "a", "c"]

    def test_clear_and_sort(self, runner):
        runner.invoke(main, ["add", "low", "--priority", "low"])
        runner.invoke(main, ["add", "high", "--priority", "high"])
        runner.invoke(main, ["add", "done"])
        done_id = listed(runner)[0]["id"]
        runner.invoke(main, ["done", done_id])

        result = runner.invoke(main, ["clear", "--yes"])
        assert "Removed 1 completed task(s)." in result.output

        runner.invoke(main, ["sort", "due"])
        runner.invoke(main, ["sort", "priority"])
        assert [t["text"] for t in listed(runner)] == ["high", "low"]

    def test_projects(self, runner):
        runner.invoke(main, ["project", "add", "Work"])
        runner.invoke(main, ["add", "a", "-p", "Work"])
        result = runner.invoke(main, ["project", "list"])
        assert result.output.splitlines() == ["Inbox (0)", "Work (1)"]

        result = runner.invoke(main, ["project", "add", "Work"])
        assert "already exists" in result.output

    def test_stats_json(self, runner):
        runner.invoke(main, ["add", "a"])
        result = runner.invoke(main, ["stats", "--json"])
        data = json.loads(result.output)
        assert data["total"] == 1
        assert data["projects"] == {"Inbox": 1}


class TestExportImport:
    def test_export_then_import(self, runner, tmp_path):
        runner.invoke(main, ["add", "a"])
        out = tmp_path / "export.json"
        result = runner.invoke(main, ["export", "json", "--out", str(out)])
        assert result.exit_code == 0

        result = runner.invoke(main, ["import", str(out)])
        assert "Imported 1 task(s)." in result.output
        assert len(listed(runner)) == 2

    def test_export_csv(self, runner, tmp_path):
        runner.invoke(main, ["add", 'say "hi"'])
        out = tmp_path / "export.csv"
        runner.invoke(main, ["export", "csv", "-o", str(out)])
        assert '"say ""hi"""' in out.read_text()

    def test_export_csv_without_tasks(self, runner, tmp_path):
        result = runner.invoke(main, ["export", "csv", "-o", str(tmp_path / "x.csv")])
        assert result.exit_code == 1
        assert "No tasks." in result.output

    def test_import_invalid(self, runner, tmp_path):
        bad = tmp_path / "bad.json"
        bad.write_text('{"tasks": 1}')
        result = runner.invoke(main, ["import", str(bad)])
        assert result.exit_code == 1
        assert "Error:" in result.output

    def test_import_undecodable_file(self, runner, tmp_path):
        bad = tmp_path / "bad.json"
        bad.write_bytes(b"\xff\xfe\x00garbage")
        result = runner.invoke(main, ["import", str(bad)])
        assert result.exit_code == 1
        assert "Error:" in result.output
        assert len(listed(runner)) == 0


class TestTheme:
    def test_toggle(self, runner):
        assert "Theme: light" in runner.invoke(main, ["theme"]).output
        assert "Theme: dark" in runner.invoke(main, ["theme", "dark"]).output
        assert "Theme: dark" in runner.invoke(main, ["theme"]).output


PARIS = CurrentWeather(
    name="Paris",
    description="light rain",
    temp=12.5,
    temp_min=10.0,
    temp_max=14.2,
    humidity=81,
    wind_speed=4.1,
    icon="10n",
)


class TestWeatherCommands:
    def test_weather(self, runner):
        forecast = [ForecastEntry.from_api({"dt_txt": "2025-01-15 12:00:00", "main": {"temp": 9}})]
        service = FakeWeatherService(current=PARIS, forecast=forecast)
        with patch("daybook.cli.get_weather_service", return_value=service):
            result = runner.invoke(main, ["weather", "Paris,FR"])

        assert result.exit_code == 0
        assert "Paris (night)" in result.output
        assert "LIGHT RAIN" in result.output
        assert "Humidity: 81%" in result.output
        assert "9.0°" in result.output

        result = runner.invoke(main, ["favorites"])
        assert "Paris,FR" in result.output

    def test_weather_not_found(self, runner):
        service = FakeWeatherService(error=CityNotFoundError("City not found"))
        with patch("daybook.cli.get_weather_service", return_value=service):
            result = runner.invoke(main, ["weather", "Atlantis"])

        assert result.exit_code == 1
        assert 'Could not find "Atlantis".' in result.output
        assert "No favorites yet." in runner.invoke(main, ["favorites"]).output

    def test_weather_here(self, runner):
        service = FakeWeatherService(current=PARIS)
        with patch("daybook.cli.get_weather_service", return_value=service):
            result = runner.invoke(main, ["weather-here", "--lat", "48.8", "--lon", "2.3"])
        assert result.exit_code == 0
        assert "Paris" in result.output

    def test_cities(self, runner):
        result = runner.invoke(main, ["cities", "par"])
        assert result.output.splitlines() == ["Paris,FR"]
