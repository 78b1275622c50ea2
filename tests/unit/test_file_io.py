"""Unit tests for core.file_io: locked JSONL append and line iteration."""

from __future__ import annotations

import json
import threading
from pathlib import Path

from pancake_lab.core.file_io import iter_lines, safe_append_line


class TestSafeAppendLine:
    def test_appends_lines_in_order(self, tmp_path: Path) -> None:
        path = tmp_path / "journal.jsonl"
        for n in range(3):
            safe_append_line(path, json.dumps({"n": n}))

        lines = path.read_text().strip().split("\n")
        assert [json.loads(line)["n"] for line in lines] == [0, 1, 2]

    def test_creates_parent_directories(self, tmp_path: Path) -> None:
        path = tmp_path / "a" / "b" / "journal.jsonl"
        safe_append_line(path, '{"nested": true}')
        assert json.loads(path.read_text().strip()) == {"nested": True}

    def test_concurrent_appends_do_not_interleave(self, tmp_path: Path) -> None:
        path = tmp_path / "journal.jsonl"

        def writer(tid: int) -> None:
            for i in range(25):
                safe_append_line(path, json.dumps({"t": tid, "i": i, "pad": "x" * 200}))

        threads = [threading.Thread(target=writer, args=(t,)) for t in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        lines = path.read_text().strip().split("\n")
        assert len(lines) == 100
        for line in lines:
            json.loads(line)


class TestIterLines:
    def test_missing_file_yields_nothing(self, tmp_path: Path) -> None:
        assert list(iter_lines(tmp_path / "none.jsonl")) == []

    def test_skips_blank_lines_and_keeps_numbers(self, tmp_path: Path) -> None:
        path = tmp_path / "journal.jsonl"
        path.write_text('{"a": 1}\n\n   \n{"b": 2}\n')
        assert list(iter_lines(path)) == [(1, '{"a": 1}'), (4, '{"b": 2}')]
