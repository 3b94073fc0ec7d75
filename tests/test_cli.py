"""Tests for the command driver."""
import io

import pytest
from indexstore.cli.driver_cli import CommandError, main, run_commands


def _run(monkeypatch, capsys, store_path, data):
    monkeypatch.setattr('sys.stdin', io.TextIOWrapper(io.BytesIO(data)))
    code = main(['--data-file', store_path])
    return code, capsys.readouterr()


def _run_commands(store, data):
    out = io.StringIO()
    count = run_commands(store, io.BytesIO(data), out)
    return count, out.getvalue()


class TestDriver:
    """Test command parsing and output."""

    def test_example_session(self, monkeypatch, capsys, store_path):
        """Test the documented five-command example."""
        code, captured = _run(
            monkeypatch, capsys, store_path,
            b"5\ninsert a 10\ninsert a 5\ndelete a 10\nfind a\nfind b\n"
        )
        assert code == 0
        assert captured.out == "5\nnull\n"

    def test_state_persists_between_runs(self, monkeypatch, capsys, store_path):
        """Test that a second run sees the first run's inserts."""
        _run(monkeypatch, capsys, store_path, b"2\ninsert a 5\ninsert a 3\n")
        code, captured = _run(monkeypatch, capsys, store_path, b"1\nfind a\n")
        assert code == 0
        assert captured.out == "3 5\n"

    def test_insert_and_delete_print_nothing(self, monkeypatch, capsys, store_path):
        """Test that only find produces output."""
        code, captured = _run(monkeypatch, capsys, store_path, b"2 insert k 1 delete k 1")
        assert code == 0
        assert captured.out == ""

    def test_non_utf8_key(self, monkeypatch, capsys, store_path):
        """Test that keys are taken as raw bytes, not decoded text."""
        code, captured = _run(
            monkeypatch, capsys, store_path,
            b"3\ninsert k\xff 1\nfind k\xff\nfind a\n"
        )
        assert code == 0
        assert captured.out == "1\nnull\n"

    def test_non_utf8_key_stored_verbatim(self, temp_store):
        """Test that the stored key is the exact input bytes."""
        _run_commands(temp_store, b"1 insert \xfe\xff 7")
        assert temp_store.find(b"\xfe\xff") == [7]

    def test_unknown_verb_skipped(self, temp_store):
        """Test that an unknown verb is skipped and counted."""
        _, output = _run_commands(temp_store, b"2 bogus find a")
        assert output == "null\n"

    def test_only_count_commands_run(self, temp_store):
        """Test that input past the command count is ignored."""
        count, output = _run_commands(temp_store, b"1 find a find b")
        assert count == 1
        assert output == "null\n"

    def test_signed_values(self, temp_store):
        """Test that explicit signs are accepted."""
        _, output = _run_commands(temp_store, b"3 insert a +4 insert a -2 find a")
        assert output == "-2 4\n"

    def test_bad_value(self, monkeypatch, capsys, store_path):
        """Test that a non-integer value exits with an error."""
        code, captured = _run(monkeypatch, capsys, store_path, b"1 insert a x")
        assert code == 1
        assert "Invalid value" in captured.err

    @pytest.mark.parametrize("token", [b"1_000", "٣".encode('utf-8'), b"0x10", b"1.5", b"+"])
    def test_rejects_non_decimal_integers(self, temp_store, token):
        """Test that only optionally signed ASCII digits parse as integers."""
        with pytest.raises(CommandError):
            _run_commands(temp_store, b"1 insert a " + token)
        assert temp_store.find("a") == []

    def test_truncated_input(self, temp_store):
        """Test that a missing argument is reported."""
        with pytest.raises(CommandError):
            _run_commands(temp_store, b"1 insert a")

    def test_missing_count(self, temp_store):
        """Test that empty input is reported."""
        with pytest.raises(CommandError):
            _run_commands(temp_store, b"")
