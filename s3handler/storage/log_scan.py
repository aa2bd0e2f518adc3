"""
Streaming scan of newline-delimited JSON log objects.

The object is decompressed on the fly (zstd by default) and split into lines;
every non-blank line must be a JSON document. Only the event count is kept, so
memory use does not grow with the object size.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import IO, Iterator, List

import zstandard
from botocore.exceptions import BotoCoreError

from s3handler.errors import InvalidObjectContent
from s3handler.events import Compression
from s3handler.logging import ProgressLogger, clogger
from s3handler.settings import SCAN_PROGRESS_INTERVAL
from s3handler.storage.s3_utils import open_object_stream, raise_storage_error


@dataclass(frozen=True)
class ScanSummary:
    num_log_events: int
    elapsed_seconds: float

    @property
    def elapsed_ms(self) -> int:
        return int(self.elapsed_seconds * 1000)

    @property
    def msg(self) -> str:
        return f"elapsed={self.elapsed_seconds:.3f}s num_log_events={self.num_log_events}"


READ_CHUNK_SIZE = 64 * 1024


def _read_chunks(source: IO[bytes], chunk_size: int) -> Iterator[bytes]:
    while True:
        chunk = source.read(chunk_size)
        if not chunk:
            return
        yield chunk


def _decompress_zstd(chunks: Iterator[bytes]) -> Iterator[bytes]:
    dobj = zstandard.ZstdDecompressor().decompressobj()
    in_frame = False
    for chunk in chunks:
        data = chunk
        while data:
            in_frame = True
            out = dobj.decompress(data)
            if out:
                yield out
            if not dobj.eof:
                break
            # a decompressobj handles one frame; the rest goes to a fresh one
            data = dobj.unused_data
            dobj = zstandard.ZstdDecompressor().decompressobj()
            in_frame = False
    if in_frame:
        raise zstandard.ZstdError("object ends in the middle of a zstd frame")


def _split_lines(chunks: Iterator[bytes]) -> Iterator[bytes]:
    fragments: List[bytes] = []
    for chunk in chunks:
        parts = chunk.split(b"\n")
        if len(parts) == 1:
            fragments.append(chunk)
            continue
        fragments.append(parts[0])
        yield b"".join(fragments)
        yield from parts[1:-1]
        fragments = [parts[-1]]
    tail = b"".join(fragments)
    if tail:
        yield tail


def _text_lines(raw: IO[bytes], compression: Compression) -> Iterator[str]:
    chunks = _read_chunks(raw, READ_CHUNK_SIZE)
    if compression == "zstd":
        chunks = _decompress_zstd(chunks)
    for line in _split_lines(chunks):
        yield line.decode("utf-8")


def count_log_events(
    stream: IO[bytes],
    compression: Compression = "zstd",
    bucket: str = "",
    key: str = "",
    progress_interval: int = SCAN_PROGRESS_INTERVAL,
) -> ScanSummary:
    """
    Count the JSON log events in a (possibly compressed) byte stream.

    Raises InvalidObjectContent on a decompression, decoding or JSON error.
    """
    progress = ProgressLogger("num_log_events", interval=progress_interval)
    line_number = 0

    try:
        for line_number, line in enumerate(_text_lines(stream, compression), start=1):
            if not line.strip():
                continue
            json.loads(line)
            progress.advance()
    except zstandard.ZstdError as e:
        raise InvalidObjectContent(
            f"Object is not valid zstd data: {e}",
            bucket=bucket,
            key=key,
            line_number=line_number + 1,
        ) from e
    except UnicodeDecodeError as e:
        raise InvalidObjectContent(
            "Object is not UTF-8 text",
            bucket=bucket,
            key=key,
            line_number=line_number + 1,
        ) from e
    except json.JSONDecodeError as e:
        raise InvalidObjectContent(
            f"Line {line_number} is not valid JSON: {e.msg}",
            bucket=bucket,
            key=key,
            line_number=line_number,
        ) from e

    summary = ScanSummary(
        num_log_events=progress.count,
        elapsed_seconds=progress.elapsed_seconds,
    )
    clogger.info(
        summary.msg,
        extra={"num_log_events": summary.num_log_events, "scan_elapsed_ms": summary.elapsed_ms},
    )
    return summary


def scan_log_object(
    bucket: str, key: str, compression: Compression = "zstd"
) -> ScanSummary:
    """
    Stream an S3 log object and count its JSON events (one GetObject request).
    """
    body = open_object_stream(bucket, key)
    try:
        return count_log_events(body, compression=compression, bucket=bucket, key=key)
    except BotoCoreError as e:
        raise_storage_error(e, bucket, key, "GetObject")
    finally:
        body.close()
