"""Tests for the high-score stores."""

import json

import pytest

from classic_snake.highscore import JsonHighScoreStore, MemoryHighScoreStore


class TestMemoryStore:
    def test_defaults_to_zero(self):
        assert MemoryHighScoreStore().read() == 0

    def test_write_then_read(self):
        store = MemoryHighScoreStore()
        store.write(70)
        assert store.read() == 70
        assert store.writes == 1


class TestJsonStore:
    def test_missing_file_reads_zero(self, tmp_path):
        assert JsonHighScoreStore(tmp_path / "none.json").read() == 0

    def test_write_creates_parents(self, tmp_path):
        path = tmp_path / "nested" / "dir" / "best.json"
        store = JsonHighScoreStore(path)
        store.write(130)
        assert json.loads(path.read_text()) == {"high_score": 130}
        assert store.read() == 130
        assert not path.with_suffix(".json.tmp").exists()

    def test_survives_new_instance(self, tmp_path):
        path = tmp_path / "best.json"
        JsonHighScoreStore(path).write(40)
        assert JsonHighScoreStore(path).read() == 40

    def test_corrupt_file(self, tmp_path):
        path = tmp_path / "best.json"
        path.write_text("{not json")
        with pytest.raises(ValueError, match="Corrupt"):
            JsonHighScoreStore(path).read()

    @pytest.mark.parametrize("payload", ['{"high_score": -3}', '{"high_score": "9"}', "[1]"])
    def test_invalid_contents(self, tmp_path, payload):
        path = tmp_path / "best.json"
        path.write_text(payload)
        with pytest.raises(ValueError, match="Invalid"):
            JsonHighScoreStore(path).read()

    def test_clear(self, tmp_path):
        path = tmp_path / "best.json"
        store = JsonHighScoreStore(path)
        store.write(10)
        store.clear()
        assert not path.exists()
        assert store.read() == 0
        # Clearing twice is fine.
        store.clear()
