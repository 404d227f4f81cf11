import json
import logging

import pytest

import machinekeysync
from config import LOGGER_NAME, SESSION_LOG_FILE_PREFIX, ExitCode
from src.pipelines.key_repair_pipeline import KeyRepairPipeline
from src.utilities.errors import IdentityReadError


@pytest.fixture
def patch_pipeline(monkeypatch, keys_dir):
    def install(identity_reader):
        monkeypatch.setattr(
            machinekeysync,
            "KeyRepairPipeline",
            lambda logger: KeyRepairPipeline(
                logger=logger, keys_dir=keys_dir, identity_reader=identity_reader
            ),
        )

    return install


def _session_files(log_dir, extension):
    return list(log_dir.glob(f"{SESSION_LOG_FILE_PREFIX}-*.{extension}"))


def test_run_writes_transcript_and_summary(tmp_path, keys_dir, write_key, patch_pipeline):
    write_key("MY_OLD-GUID_S-1-5-21")
    patch_pipeline(lambda _logger: "NEW-GUID")
    log_dir = tmp_path / "logs"
    log_dir.mkdir()

    assert machinekeysync.main([str(log_dir)]) == ExitCode.SUCCESS

    assert (keys_dir / "MY_NEW-GUID_S-1-5-21").exists()
    [transcript] = _session_files(log_dir, "log")
    assert "Successfully copied MY_OLD-GUID_S-1-5-21" in transcript.read_text(
        encoding="utf-8"
    )
    [summary] = _session_files(log_dir, "json")
    assert json.loads(summary.read_text(encoding="utf-8"))["copied_files"] == [
        str(keys_dir / "MY_NEW-GUID_S-1-5-21")
    ]


def test_log_dir_defaults_to_working_directory(
    tmp_path, keys_dir, patch_pipeline, monkeypatch
):
    patch_pipeline(lambda _logger: "NEW-GUID")
    monkeypatch.chdir(tmp_path)

    assert machinekeysync.main([]) == ExitCode.SUCCESS

    [transcript] = _session_files(tmp_path, "log")
    assert "No files to fix." in transcript.read_text(encoding="utf-8")


def test_identity_failure_exit_code(tmp_path, keys_dir, write_key, patch_pipeline):
    write_key("MY_OLD-GUID")

    def unreadable(_logger):
        raise IdentityReadError("registry unavailable")

    patch_pipeline(unreadable)

    assert machinekeysync.main([str(tmp_path)]) == ExitCode.IDENTITY_UNREADABLE
    assert [p.name for p in keys_dir.iterdir()] == ["MY_OLD-GUID"]


def test_dry_run_creates_no_files(tmp_path, keys_dir, write_key, patch_pipeline):
    write_key("MY_OLD-GUID")
    patch_pipeline(lambda _logger: "NEW-GUID")

    assert machinekeysync.main([str(tmp_path), "--dry-run"]) == ExitCode.SUCCESS
    assert [p.name for p in keys_dir.iterdir()] == ["MY_OLD-GUID"]


def test_missing_log_dir_is_fatal(tmp_path, capsys):
    assert machinekeysync.main([str(tmp_path / "absent")]) == (
        ExitCode.LOG_SINK_UNAVAILABLE
    )
    assert "Log directory does not exist" in capsys.readouterr().err


def test_transcript_handlers_are_released(tmp_path, keys_dir, patch_pipeline):
    patch_pipeline(lambda _logger: "NEW-GUID")

    machinekeysync.main([str(tmp_path)])

    assert logging.getLogger(LOGGER_NAME).handlers == []
