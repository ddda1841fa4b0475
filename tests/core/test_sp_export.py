"""
Tests for CSV and JSON export of analysis results.
"""

import csv
import io
import json
from datetime import datetime, timezone

import pytest

from sptable.core.sp import (
    NOT_COMPUTABLE_MARKER,
    RawResponseMatrix,
    analyze_sp_table,
    export_to_csv,
    export_to_json,
    format_caution_index,
    result_to_dict,
)


def _csv_blocks(text):
    """Split an exported CSV document into its three blocks of rows."""
    blocks = [[]]
    for row in csv.reader(io.StringIO(text)):
        if not row:
            blocks.append([])
        else:
            blocks[-1].append(row)
    return blocks


class TestFormatCautionIndex:
    """Tests for format_caution_index."""

    def test_value(self):
        """Values are written with four decimals by default."""
        assert format_caution_index(0.123456) == "0.1235"

    def test_custom_decimals(self):
        """The number of decimals can be chosen."""
        assert format_caution_index(2.0, decimals=2) == "2.00"

    def test_null_is_marker(self):
        """A null index is written as the explicit marker."""
        assert format_caution_index(None) == NOT_COMPUTABLE_MARKER == "N/A"

    def test_zero_is_not_marker(self):
        """A computed 0 is written as a number."""
        assert format_caution_index(0.0) == "0.0000"


class TestExportToCSV:
    """Tests for export_to_csv."""

    def test_three_blocks(self, aberrant_data):
        """Students, problems and summary are separated by blank lines."""
        blocks = _csv_blocks(export_to_csv(analyze_sp_table(aberrant_data)))
        assert len(blocks) == 3
        assert len(blocks[0]) == 1 + 4
        assert len(blocks[1]) == 1 + 4

    def test_student_block(self, aberrant_data):
        """Student rows hold id, original index, responses, score and CS."""
        students, _, _ = _csv_blocks(export_to_csv(analyze_sp_table(aberrant_data)))

        assert students[0] == [
            "student_id", "original_index", "p1", "p2", "p3", "p4", "score", "cs",
        ]
        assert students[3] == ["s3", "2", "0", "0", "1", "1", "2", "2.0000"]

    def test_problem_block(self, aberrant_data):
        """Problem rows hold id, original index, count, rate and CP."""
        _, problems, _ = _csv_blocks(export_to_csv(analyze_sp_table(aberrant_data)))

        assert problems[0] == [
            "problem_id", "original_index", "correct_count", "correct_rate", "cp",
        ]
        assert problems[1] == ["p1", "0", "3", "0.7500", "1.0000"]

    def test_summary_block(self, aberrant_data):
        """Summary rows are key/value pairs starting with D*."""
        _, _, summary = _csv_blocks(export_to_csv(analyze_sp_table(aberrant_data)))
        values = dict(summary)

        assert summary[0][0] == "disparity_coefficient"
        assert values["disparity_coefficient"] == "0.6667"
        assert values["average_score"] == "2.00"
        assert values["average_correct_rate"] == "0.5000"
        assert values["caution_student_count"] == "1"
        assert values["high_caution_problem_count"] == "2"

    def test_null_index_written_as_marker(self, guttman_data):
        """Not computable indices are N/A, never blank or 0."""
        students, problems, _ = _csv_blocks(export_to_csv(analyze_sp_table(guttman_data)))

        assert students[1][-1] == "N/A"
        assert problems[1][-1] == "N/A"
        assert students[2][-1] == "0.0000"

    def test_empty_result(self, build_matrix):
        """An empty table exports headers and the summary only."""
        blocks = _csv_blocks(export_to_csv(analyze_sp_table(build_matrix([]))))
        assert blocks[0] == [["student_id", "original_index", "score", "cs"]]
        assert dict(blocks[2])["disparity_coefficient"] == "0.0000"


class TestExportToJSON:
    """Tests for export_to_json and result_to_dict."""

    def test_document_structure(self, aberrant_data):
        """The document holds students, problems, matrix, curves and statistics."""
        exported_at = datetime(2026, 1, 15, 9, 30, tzinfo=timezone.utc)
        document = json.loads(
            export_to_json(analyze_sp_table(aberrant_data), exported_at=exported_at)
        )

        assert set(document) == {
            "students", "problems", "matrix", "curves", "statistics", "exported_at",
        }
        assert document["exported_at"] == "2026-01-15T09:30:00+00:00"
        assert document["matrix"][2] == [0, 0, 1, 1]
        assert document["statistics"]["disparity_coefficient"] == pytest.approx(2 / 3)
        assert document["statistics"]["separation_area"] == 2

    def test_student_entries(self, aberrant_data):
        """Student entries include the caution level."""
        document = json.loads(export_to_json(analyze_sp_table(aberrant_data)))
        s3 = document["students"][2]

        assert s3["id"] == "s3"
        assert s3["original_index"] == 2
        assert s3["total_score"] == 2
        assert s3["responses"] == [0, 0, 1, 1]
        assert s3["caution_index"] == pytest.approx(2.0)
        assert s3["caution_level"] == "critical"

    def test_null_index_is_json_null(self, guttman_data):
        """Not computable indices are null with level unknown."""
        document = json.loads(export_to_json(analyze_sp_table(guttman_data)))

        assert document["students"][0]["caution_index"] is None
        assert document["students"][0]["caution_level"] == "unknown"
        assert document["problems"][0]["caution_index"] is None

    def test_curves(self, guttman_data):
        """Curves are lists of x/y points."""
        document = json.loads(export_to_json(analyze_sp_table(guttman_data)))

        assert document["curves"]["s_curve"][0] == {"x": 0.0, "y": 0.0}
        assert len(document["curves"]["s_curve"]) == 7
        assert len(document["curves"]["p_curve"]) == 7

    def test_exported_at_defaults_to_now(self, guttman_data):
        """Without a timestamp the current UTC time is used."""
        document = json.loads(export_to_json(analyze_sp_table(guttman_data)))
        exported_at = datetime.fromisoformat(document["exported_at"])
        assert exported_at.tzinfo is not None

    def test_non_ascii_ids_preserved(self):
        """Identifiers are written as-is, not escaped."""
        data = RawResponseMatrix(
            student_ids=("生徒1",), problem_ids=("問1",), matrix=[[1]]
        )
        text = export_to_json(analyze_sp_table(data))
        assert "生徒1" in text

    def test_result_to_dict_is_json_native(self, aberrant_data):
        """result_to_dict holds only plain Python types."""
        data = result_to_dict(analyze_sp_table(aberrant_data))
        assert json.loads(json.dumps(data)) == data
