"""Integration tests for the command line entry point."""

import json
from pathlib import Path

import pytest

from doc_inspector.cli import main


@pytest.fixture
def sample_file(tmp_path):
    """Write a small Markdown document."""
    path = tmp_path / "doc.md"
    path.write_text("# Title\nHello world.\n", encoding="utf-8")
    return path


@pytest.fixture
def conf_file(tmp_path):
    """Write a configuration with a strict sentence length."""
    path = tmp_path / "conf.json"
    path.write_text(json.dumps({
        "validators": [{"name": "SentenceLength", "attributes": {"max_len": 5}}],
    }), encoding="utf-8")
    return path


class TestCli:
    """Tests for running the CLI."""

    def test_errors_over_limit(self, sample_file, conf_file, capsys):
        """Test that errors above the limit give exit code 1."""
        code = main(["--conf", str(conf_file), str(sample_file)])

        assert code == 1
        output = capsys.readouterr().out
        assert "1 errors" in output
        assert "SentenceLength" in output

    def test_errors_within_limit(self, sample_file, conf_file):
        """Test that errors up to the limit give exit code 0."""
        assert main(["--conf", str(conf_file), "--limit", "1", str(sample_file)]) == 0

    def test_json_result(self, sample_file, conf_file, capsys):
        """Test the JSON result format."""
        main(["--conf", str(conf_file), "--result-format", "json", str(sample_file)])

        payload = json.loads(capsys.readouterr().out)
        assert payload[0]["document"] == str(sample_file)
        assert payload[0]["errors"][0]["position"] == {"line": 2, "offset": 0}

    def test_explicit_format(self, tmp_path, conf_file, capsys):
        """Test overriding format detection."""
        path = tmp_path / "notes.txt"
        path.write_text("h1. Hi\n", encoding="utf-8")

        code = main(["--conf", str(conf_file), "--format", "wiki", str(path)])

        assert code == 0
        assert "no errors" in capsys.readouterr().out

    def test_invalid_configuration(self, tmp_path, sample_file, capsys):
        """Test that configuration errors give exit code 1."""
        conf = tmp_path / "bad.json"
        conf.write_text(json.dumps({"validators": ["NoSuchRule"]}), encoding="utf-8")

        assert main(["--conf", str(conf), str(sample_file)]) == 1
        assert "Configuration error" in capsys.readouterr().err

    def test_unreadable_file_is_skipped(self, sample_file, conf_file, capsys):
        """Test that a missing file is reported and the others are checked."""
        missing = Path(sample_file.parent) / "missing.md"

        code = main(["--conf", str(conf_file), str(missing), str(sample_file)])

        captured = capsys.readouterr()
        assert code == 1
        assert "Failed to read" in captured.err
        assert str(sample_file) in captured.out
