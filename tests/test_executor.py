import logging
import subprocess

import pytest

from pool_bootstrap.errors import ExecutionError, ParseError
from pool_bootstrap.executor import ProcessRunner
from pool_bootstrap.logging_utils import get_logger, start_run_log


def _fake_run(returncode=0, stdout="", stderr=""):
    calls = []

    def run(command, **kwargs):
        calls.append((command, kwargs))
        return subprocess.CompletedProcess(command, returncode, stdout=stdout, stderr=stderr)

    return run, calls


def test_execute_returns_parsed_payload(monkeypatch):
    run, calls = _fake_run(stdout='BUILDING pkg\n{"activeAddress": "0xme"}\n')
    monkeypatch.setattr(subprocess, "run", run)

    payload = ProcessRunner().execute("sui client active-address --json")

    assert payload == {"activeAddress": "0xme"}
    command, kwargs = calls[0]
    assert command == "sui client active-address --json"
    assert kwargs["shell"] is True
    assert kwargs["capture_output"] is True
    assert kwargs["check"] is False


def test_non_zero_exit_raises_execution_error(monkeypatch):
    run, _ = _fake_run(returncode=1, stdout="partial", stderr="Insufficient gas")
    monkeypatch.setattr(subprocess, "run", run)

    with pytest.raises(ExecutionError) as excinfo:
        ProcessRunner().execute("sui client publish --json .")

    err = excinfo.value
    assert err.command == "sui client publish --json ."
    assert err.returncode == 1
    assert err.stderr == "Insufficient gas"
    assert err.stdout == "partial"


def test_zero_exit_without_payload_raises_parse_error(monkeypatch):
    run, _ = _fake_run(stdout="Nothing structured here\n")
    monkeypatch.setattr(subprocess, "run", run)

    with pytest.raises(ParseError) as excinfo:
        ProcessRunner().execute("sui client gas --json")
    assert excinfo.value.raw_output == "Nothing structured here\n"


def test_cwd_is_passed_as_string(monkeypatch, tmp_path):
    run, calls = _fake_run(stdout="[]")
    monkeypatch.setattr(subprocess, "run", run)

    ProcessRunner(cwd=tmp_path).execute("sui client gas --json")

    assert calls[0][1]["cwd"] == str(tmp_path)


def test_run_log_records_command_and_output(monkeypatch, tmp_path):
    log_path = tmp_path / "deploy.log"
    log_path.write_text("stale line from last run\n", encoding="utf-8")
    logger = start_run_log(log_path)
    run, _ = _fake_run(stdout='{"ok": true}', stderr="[warn] version mismatch")
    monkeypatch.setattr(subprocess, "run", run)

    ProcessRunner(logger=logger).execute("sui client gas --json")
    for handler in logger.handlers:
        handler.flush()

    text = log_path.read_text(encoding="utf-8")
    assert "stale line from last run" not in text
    assert "Running: sui client gas --json" in text
    assert "Exit code: 0" in text
    assert '{"ok": true}' in text
    assert "[warn] version mismatch" in text
    for handler in list(logger.handlers):
        if isinstance(handler, logging.FileHandler):
            logger.removeHandler(handler)
            handler.close()


class _RecordingHandler(logging.Handler):
    def __init__(self):
        super().__init__(level=logging.INFO)
        self.messages = []

    def emit(self, record):
        self.messages.append(record.getMessage())


def test_raw_output_stays_out_of_the_console(monkeypatch):
    logger = get_logger()
    console = [h for h in logger.handlers if not isinstance(h, logging.FileHandler)]
    assert console and all(h.level == logging.INFO for h in console)

    recorder = _RecordingHandler()
    logger.addHandler(recorder)
    run, _ = _fake_run(stdout='{"secret_payload": 1}', stderr="noisy build output")
    monkeypatch.setattr(subprocess, "run", run)
    try:
        ProcessRunner(logger=logger).execute("sui client gas --json")
    finally:
        logger.removeHandler(recorder)

    assert "Running: sui client gas --json" in recorder.messages
    assert "Exit code: 0" in recorder.messages
    assert not any("secret_payload" in m or "noisy build output" in m for m in recorder.messages)


def test_missing_shell_raises_execution_error(monkeypatch):
    def run(command, **kwargs):
        raise FileNotFoundError(2, "No such file or directory", "/bin/sh")

    monkeypatch.setattr(subprocess, "run", run)

    with pytest.raises(ExecutionError) as excinfo:
        ProcessRunner().execute("sui client gas --json")

    assert excinfo.value.returncode == -1
    assert "No such file or directory" in excinfo.value.stderr
