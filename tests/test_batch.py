"""Tests for batch discovery and processing."""

import os

import pytest

from vidsub.batch import find_and_sort_videos, process_batch, run_batch_processing
from vidsub.exceptions import TranscriptionError
from vidsub.notifications import Notifier
from vidsub.progress import ProcessingState
from vidsub.session import SubtitleSession

from conftest import FakeTranscriber


def _write(path, size):
    path.write_bytes(b"\x00" * size)
    return str(path)


def test_find_and_sort_videos(tmp_path):
    big = _write(tmp_path / "big.mkv", 300)
    small = _write(tmp_path / "small.MP4", 100)
    mid = _write(tmp_path / "mid.webm", 200)
    _write(tmp_path / "notes.txt", 10)
    (tmp_path / "folder.mp4").mkdir()

    assert find_and_sort_videos(str(tmp_path)) == [(small, 100), (mid, 200), (big, 300)]


def test_find_missing_directory(tmp_path):
    with pytest.raises(FileNotFoundError):
        find_and_sort_videos(str(tmp_path / "nope"))


def test_find_rejects_file(tmp_path):
    with pytest.raises(ValueError):
        find_and_sort_videos(_write(tmp_path / "a.mp4", 1))


def test_process_batch_counts_failures(make_context, sample_segments, tmp_path):
    good = _write(tmp_path / "good.mp4", 10)
    bad = _write(tmp_path / "bad.mp4", 20)
    transcriber = FakeTranscriber(sample_segments, error=TranscriptionError("unreadable"), fail_when="bad")
    session = SubtitleSession(make_context(transcriber=transcriber), Notifier())
    output_dir = tmp_path / "Subs"

    processed, failed = process_batch(session, [good, bad], str(output_dir))

    assert (processed, failed) == (1, 1)
    assert os.listdir(output_dir) == ["good.srt"]
    assert session.state is ProcessingState.IDLE


def test_process_batch_keeps_videos_with_same_base_name_apart(make_context, sample_segments, tmp_path):
    mp4 = _write(tmp_path / "clip.mp4", 10)
    mkv = _write(tmp_path / "clip.mkv", 20)
    session = SubtitleSession(make_context(sample_segments), Notifier())
    output_dir = tmp_path / "Subs"

    processed, failed = process_batch(session, [mp4, mkv], str(output_dir))

    assert (processed, failed) == (2, 0)
    assert sorted(os.listdir(output_dir)) == ["clip.mkv.srt", "clip.srt"]


def test_batch_logs_to_configured_file(monkeypatch, tmp_path, restore_logging):
    config_path = tmp_path / "config.yaml"
    config_path.write_text(f"log_dir: {tmp_path / 'logs'}\nlog_file: nightly.log\n", encoding="utf-8")
    calls = []
    monkeypatch.setattr("vidsub.batch.setup_logging", lambda **kwargs: calls.append(kwargs))

    with pytest.raises(SystemExit) as excinfo:
        run_batch_processing(["-i", str(tmp_path), "-c", str(config_path)])

    assert excinfo.value.code == 0
    assert calls[-1]["log_file"] == "nightly.log"
    assert calls[-1]["log_dir"] == str(tmp_path / "logs")
