"""
Tests for the sptable command line entry point.

Exit codes:
    0 - Success
    1 - Input error
    2 - Analysis error
"""
import json

import pytest

from sptable import cli

ABERRANT_CSV = "id,p1,p2,p3,p4\ns1,1,1,1,0\ns2,1,1,0,0\ns3,0,0,1,1\ns4,1,0,0,0\n"


@pytest.fixture(autouse=True)
def _no_logging_setup(monkeypatch):
    """Keep the test run's logging configuration untouched."""
    monkeypatch.setattr(cli, "setup_logging", lambda: None)


@pytest.fixture
def csv_file(tmp_path):
    path = tmp_path / "results.csv"
    path.write_text(ABERRANT_CSV, encoding="utf-8")
    return path


class TestSuccess:
    """Tests for successful runs."""

    def test_text_summary(self, csv_file, capsys):
        """The default output is a readable summary."""
        assert cli.main([str(csv_file)]) == 0

        out = capsys.readouterr().out
        assert "4 students x 4 problems (layout: standard)" in out
        assert "Disparity coefficient D*: 0.6667" in out
        assert "Caution students: 1 (high: 1)" in out
        assert "CS=2.0000" in out
        assert "critical" in out

    def test_text_summary_marks_null_indices(self, tmp_path, capsys):
        """Not computable indices are shown as N/A."""
        path = tmp_path / "single.csv"
        path.write_text("id,q1\nonly,1\n", encoding="utf-8")

        assert cli.main([str(path)]) == 0

        out = capsys.readouterr().out
        assert "CS=N/A" in out
        assert "CP=N/A" in out
        assert "unknown" in out

    def test_json_to_stdout(self, csv_file, capsys):
        """--format json writes the JSON export document."""
        assert cli.main([str(csv_file), "--format", "json"]) == 0

        document = json.loads(capsys.readouterr().out)
        assert document["statistics"]["disparity_coefficient"] == pytest.approx(2 / 3)
        assert document["students"][2]["id"] == "s3"

    def test_csv_to_file(self, csv_file, tmp_path, capsys):
        """--output writes the document to a file instead of stdout."""
        output = tmp_path / "out.csv"

        assert cli.main([str(csv_file), "--format", "csv", "--output", str(output)]) == 0

        assert capsys.readouterr().out == ""
        lines = output.read_text(encoding="utf-8").splitlines()
        assert lines[0] == "student_id,original_index,p1,p2,p3,p4,score,cs"

    def test_explicit_layout(self, tmp_path, capsys):
        """--layout selects the CSV layout."""
        path = tmp_path / "transposed.csv"
        path.write_text("id,s1,s2\nq1,1,0\nq2,1,1\n", encoding="utf-8")

        assert cli.main([str(path), "--layout", "transposed"]) == 0
        assert "2 students x 2 problems (layout: transposed)" in capsys.readouterr().out


class TestFailures:
    """Tests for error exit codes."""

    def test_missing_file(self, tmp_path):
        """An unreadable file exits with 1."""
        assert cli.main([str(tmp_path / "missing.csv")]) == 1

    def test_invalid_csv(self, tmp_path):
        """A malformed table exits with 1."""
        path = tmp_path / "bad.csv"
        path.write_text("id,q1\ns1,maybe\n", encoding="utf-8")
        assert cli.main([str(path)]) == 1

    def test_duplicate_ids(self, tmp_path):
        """A table violating the input contract exits with 1."""
        path = tmp_path / "dupes.csv"
        path.write_text("id,q1\ns1,1\ns1,0\n", encoding="utf-8")
        assert cli.main([str(path)]) == 1

    def test_unwritable_output(self, csv_file, tmp_path):
        """An output path that cannot be written exits with 1."""
        output = tmp_path / "no-such-dir" / "out.csv"
        assert cli.main([str(csv_file), "--output", str(output)]) == 1

    def test_analysis_error(self, csv_file, monkeypatch):
        """An unexpected analysis failure exits with 2."""

        def broken_analysis(data):
            raise RuntimeError("boom")

        monkeypatch.setattr(cli, "analyze_sp_table", broken_analysis)
        assert cli.main([str(csv_file)]) == 2

    def test_invalid_layout_argument(self, csv_file):
        """An unknown --layout is rejected by argparse."""
        with pytest.raises(SystemExit) as exc_info:
            cli.main([str(csv_file), "--layout", "sideways"])
        assert exc_info.value.code == 2
