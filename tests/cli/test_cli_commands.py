"""Tests for the records CLI."""

from unittest.mock import patch

from typer.testing import CliRunner

from records.cli.commands import app

runner = CliRunner()


class TestReadCommands:
    """Tests for stats / students / courses / grades."""

    def test_stats(self):
        result = runner.invoke(app, ["stats"])
        assert result.exit_code == 0
        assert "Dashboard" in result.stdout
        assert "Emily Johnson" in result.stdout
        assert "A (90-100%)" in result.stdout

    def test_stats_empty(self):
        result = runner.invoke(app, ["stats", "--empty"])
        assert result.exit_code == 0
        assert "Top students" not in result.stdout

    def test_students(self):
        result = runner.invoke(app, ["students"])
        assert result.exit_code == 0
        assert "S1001" in result.stdout
        assert "S1004" in result.stdout

    def test_courses(self):
        result = runner.invoke(app, ["courses"])
        assert result.exit_code == 0
        assert "PHY301" in result.stdout

    def test_grades_term_filter(self):
        result = runner.invoke(app, ["grades", "--term", "Fall 1999"])
        assert result.exit_code == 0
        assert "No grades" in result.stdout


class TestReportCommand:
    """Tests for records report."""

    def test_student_report(self):
        result = runner.invoke(app, ["report", "students"])
        assert result.exit_code == 0
        assert "S1002" in result.stdout

    def test_course_report(self):
        result = runner.invoke(app, ["report", "courses"])
        assert result.exit_code == 0
        assert "HIS202" in result.stdout

    def test_unknown_report(self):
        result = runner.invoke(app, ["report", "faculty"])
        assert result.exit_code == 1
        assert "Unknown report" in result.stdout


class TestConfigAndServe:
    """Tests for show-config and serve."""

    def test_show_config_defaults(self):
        result = runner.invoke(app, ["show-config"])
        assert result.exit_code == 0
        assert "defaults" in result.stdout
        assert "top_students: 3" in result.stdout

    def test_serve_runs_uvicorn(self):
        with patch("uvicorn.run") as mock_run:
            result = runner.invoke(app, ["serve", "--port", "9001", "--empty"])

        assert result.exit_code == 0
        mock_run.assert_called_once()
        web_app = mock_run.call_args.args[0]
        assert mock_run.call_args.kwargs["port"] == 9001
        assert web_app.state.store.list_students() == []
