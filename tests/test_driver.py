import io
import logging
import os
import subprocess
import sys
from pathlib import Path

from circq.core.circular_queue import CircularQueue
from circq.core.ids import IdGenerator
from circq.driver import MenuDriver, main, parse_selection


def _feeder(lines):
    it = iter(lines)

    def _input(prompt=""):
        try:
            return next(it)
        except StopIteration:
            raise EOFError
    return _input


def _run(lines, cap=5):
    q = CircularQueue.initialize(cap, IdGenerator())
    out = io.StringIO()
    MenuDriver(q, input_fn=_feeder(lines), out=out).run()
    return q, out.getvalue()


def test_parse_selection():
    assert parse_selection(" 3\n") == 3
    assert parse_selection("abc") is None
    assert parse_selection("") is None


def test_session_view_dequeue_enqueue_exit():
    q, text = _run(["1", "2", "3", "4"])
    assert "CIRCULAR QUEUE SIMULATOR (CAP: 5)" in text
    assert "Removed item from the front. ID: 1" in text
    assert "Inserted new item at the back. ID: 6" in text
    assert "Bye!" in text
    assert q.snapshot() == [2, 3, 4, 5, 6]


def test_full_and_empty_reported(caplog):
    caplog.set_level(logging.INFO, logger="circq.driver")
    q, text = _run(["3", "2", "2", "2", "4"], cap=2)
    assert "ERROR: queue is full" in text
    assert "ERROR: queue is empty" in text
    assert "| Queue EMPTY |" in text
    assert q.is_empty()
    rejected = [r for r in caplog.records if r.name == "circq.driver" and "rejected" in r.getMessage()]
    assert len(rejected) == 2
    assert all(r.levelno == logging.INFO for r in rejected)


def test_invalid_input_is_noop():
    q, text = _run(["x", "9", "4"])
    assert "Invalid input. Please type a number from 1 to 4." in text
    assert "Invalid option. Try again." in text
    assert q.snapshot() == [1, 2, 3, 4, 5]


def test_eof_ends_loop():
    q, text = _run(["2"])
    assert q.snapshot() == [2, 3, 4, 5]
    assert "Bye!" not in text


def test_main_runs_session(tmp_path, monkeypatch):
    monkeypatch.delenv("CIRCQ_CAPACITY", raising=False)
    out = io.StringIO()
    rc = main(["--capacity", "3"], input_fn=_feeder(["2", "3", "1", "4"]), out=out)
    assert rc == 0
    assert "(CAP: 3)" in out.getvalue()
    assert "[ID: 02]" in out.getvalue()


def test_main_bad_config(tmp_path, monkeypatch):
    monkeypatch.delenv("CIRCQ_CAPACITY", raising=False)
    p = tmp_path / "bad.yaml"
    p.write_text("queue:\n  capacity: -2\n", encoding="utf-8")
    assert main(["--config", str(p)], input_fn=_feeder([])) == 2


SRC = Path(__file__).resolve().parents[1] / "src"


def _cli(stdin: str, tmp_path: Path, **env_extra):
    env = {k: v for k, v in os.environ.items() if k not in ("LOG_LEVEL", "LOG_JSON", "CIRCQ_CAPACITY")}
    env["PYTHONPATH"] = os.pathsep.join(filter(None, [str(SRC), env.get("PYTHONPATH")]))
    env.update(env_extra)
    return subprocess.run(
        [sys.executable, "-m", "circq.driver"],
        input=stdin, capture_output=True, text=True, cwd=tmp_path, env=env, timeout=30,
    )


def test_cli_transcript_has_single_error_line(tmp_path):
    proc = _cli("3\n4\n", tmp_path)
    assert proc.returncode == 0
    errors = [ln for ln in proc.stdout.splitlines() if "queue is full" in ln]
    assert errors == ["ERROR: queue is full (capacity=5); no item can be inserted"]
    assert "[ctr]" not in proc.stdout
    assert "WARNING" not in proc.stdout and "INFO" not in proc.stdout
    assert proc.stdout.rstrip().endswith("Bye!")
    assert proc.stderr == ""


def test_cli_info_logs_go_to_stderr(tmp_path):
    proc = _cli("3\n4\n", tmp_path, LOG_LEVEL="INFO")
    assert proc.returncode == 0
    assert "rejected: queue is full" in proc.stderr
    assert "[ctr] queue_rejected_total" in proc.stderr
    assert "rejected:" not in proc.stdout
    assert "[ctr]" not in proc.stdout
