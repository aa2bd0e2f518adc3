import io
import json

import pytest
import zstandard

from s3handler.errors import InvalidObjectContent, NotFound
from s3handler.storage import log_scan


def compress(text: str) -> bytes:
    return zstandard.ZstdCompressor().compress(text.encode("utf-8"))


def json_lines(n: int) -> str:
    return "".join(json.dumps({"seq": i, "msg": f"event {i}"}) + "\n" for i in range(n))


# ---------------------------------------------------------------------
# count_log_events()
# ---------------------------------------------------------------------
def test_count_zstd_lines():
    stream = io.BytesIO(compress(json_lines(3)))

    summary = log_scan.count_log_events(stream)

    assert summary.num_log_events == 3
    assert summary.msg.startswith("elapsed=")
    assert summary.msg.endswith("num_log_events=3")


def test_count_uncompressed_lines():
    stream = io.BytesIO(json_lines(5).encode("utf-8"))

    summary = log_scan.count_log_events(stream, compression="none")

    assert summary.num_log_events == 5


def test_last_line_without_newline_is_counted():
    stream = io.BytesIO(b'{"a": 1}\n{"a": 2}')

    summary = log_scan.count_log_events(stream, compression="none")

    assert summary.num_log_events == 2


def test_blank_lines_are_skipped():
    stream = io.BytesIO(b'{"a": 1}\n\n   \n{"a": 2}\n')

    summary = log_scan.count_log_events(stream, compression="none")

    assert summary.num_log_events == 2


def test_lines_spanning_read_chunks(monkeypatch):
    monkeypatch.setattr(log_scan, "READ_CHUNK_SIZE", 7)
    stream = io.BytesIO(compress(json_lines(50)))

    summary = log_scan.count_log_events(stream)

    assert summary.num_log_events == 50


def test_long_line_across_many_chunks(monkeypatch):
    monkeypatch.setattr(log_scan, "READ_CHUNK_SIZE", 3)
    line = json.dumps({"message": "x" * 5000})
    stream = io.BytesIO(f"{line}\n{line}\n".encode())

    summary = log_scan.count_log_events(stream, compression="none")

    assert summary.num_log_events == 2


def test_split_lines_joins_fragments():
    chunks = iter([b"ab", b"c", b"d\nef", b"\n\ng", b"h"])

    assert list(log_scan._split_lines(chunks)) == [b"abcd", b"ef", b"", b"gh"]


def test_concatenated_zstd_frames():
    stream = io.BytesIO(compress(json_lines(3)) + compress(json_lines(4)))

    summary = log_scan.count_log_events(stream)

    assert summary.num_log_events == 7


def test_truncated_zstd_data():
    data = compress(json_lines(5000))
    stream = io.BytesIO(data[: len(data) // 2])

    with pytest.raises(InvalidObjectContent, match="middle of a zstd frame"):
        log_scan.count_log_events(stream)


def test_empty_object():
    summary = log_scan.count_log_events(io.BytesIO(b""), compression="none")

    assert summary.num_log_events == 0


def test_invalid_json_reports_line_number():
    stream = io.BytesIO(compress('{"ok": true}\nnot json\n'))

    with pytest.raises(InvalidObjectContent) as exc_info:
        log_scan.count_log_events(stream, bucket="b", key="k")

    assert exc_info.value.line_number == 2
    assert exc_info.value.key == "k"


def test_not_zstd_data():
    stream = io.BytesIO(b'{"plain": "json"}\n')

    with pytest.raises(InvalidObjectContent, match="zstd"):
        log_scan.count_log_events(stream)


def test_non_utf8_content():
    stream = io.BytesIO(b"\xff\xfe\n")

    with pytest.raises(InvalidObjectContent, match="UTF-8"):
        log_scan.count_log_events(stream, compression="none")


def test_progress_logged_every_interval(mocker):
    info = mocker.patch("s3handler.logging.operations.clogger.info")

    log_scan.count_log_events(
        io.BytesIO(json_lines(25).encode("utf-8")),
        compression="none",
        progress_interval=10,
    )

    messages = [c.args[0] for c in info.call_args_list]
    progress = [m for m in messages if m.startswith("num_log_events=")]
    assert progress == ["num_log_events=10", "num_log_events=20"]


# ---------------------------------------------------------------------
# scan_log_object()
# ---------------------------------------------------------------------
def test_scan_log_object(s3_bucket):
    s3_bucket.put_object(
        Bucket="test-bucket", Key="logs/app.jsonl.zst", Body=compress(json_lines(1200))
    )

    summary = log_scan.scan_log_object("test-bucket", "logs/app.jsonl.zst")

    assert summary.num_log_events == 1200


def test_scan_log_object_missing(s3_bucket):
    with pytest.raises(NotFound):
        log_scan.scan_log_object("test-bucket", "logs/missing.zst")
