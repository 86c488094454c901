"""Tests for the hl7wire command line entry point."""

from pathlib import Path

import pytest

from hl7wire.cli import main, summarize
from hl7wire.model.message import parse_message

ORU_R01_MESSAGE = (
    "MSH|^~\\&|LAB|HOSP|HL7WIRE|RT|20250101140000||ORU^R01|MSG002|P|2.5\r"
    "PID|||PAT001^^^HOSP^MR||DOE^JOHN\r"
    "OBX|1|NM|2160-0^Creatinine^LN||1.2|mg/dL|0.7-1.3||||F\r"
)


@pytest.fixture
def message_file(tmp_path: Path) -> Path:
    path = tmp_path / "oru.hl7"
    path.write_text(ORU_R01_MESSAGE, encoding="utf-8")
    return path


class TestCLI:
    def test_normalizes_message(self, message_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert main([str(message_file)]) == 0
        out = capsys.readouterr().out
        assert out.startswith("MSH|^~\\&|LAB|HOSP|HL7WIRE|RT|20250101140000||ORU^R01|MSG002|P|2.5|\n")
        assert out.endswith("OBX|1|NM|2160-0^Creatinine^LN||1.2|mg/dL|0.7-1.3||||F|\n")

    def test_output_options(self, message_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert main([str(message_file), "--segment-separator", "crlf", "--no-ending-bar"]) == 0
        out = capsys.readouterr().out
        assert out.split("\r\n")[1] == "PID|||PAT001^HOSP^MR||DOE^JOHN"

    def test_keep_empty(self, message_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert main([str(message_file), "--keep-empty"]) == 0
        assert "PID|||PAT001^^^HOSP^MR||DOE^JOHN|" in capsys.readouterr().out

    def test_summary(self, message_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert main([str(message_file), "--summary"]) == 0
        out = capsys.readouterr().out
        assert "type=ORU^R01 control_id=MSG002 version=2.5" in out
        assert "OBX  11 fields" in out

    def test_invalid_message(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        path = tmp_path / "bad.hl7"
        path.write_text("PID|||PAT001\r", encoding="utf-8")
        assert main([str(path)]) == 1
        assert "invalid control segment" in capsys.readouterr().err

    def test_missing_file(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert main([str(tmp_path / "missing.hl7")]) == 1
        assert "Error reading" in capsys.readouterr().err

    def test_summarize_lists_segments(self) -> None:
        lines = summarize(parse_message(ORU_R01_MESSAGE)).splitlines()
        assert len(lines) == 4
        assert lines[1].split() == ["0", "MSH", "12", "fields"]
