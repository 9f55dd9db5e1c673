"""Line decoding and field splitting for legacy CSV exports."""

from __future__ import annotations

import codecs
from collections.abc import Callable, Iterator
from pathlib import Path

from .models import Row

PRIMARY_ENCODING = "utf-8"
FALLBACK_ENCODING = "cp1252"
UTF8_BOM = b"\xef\xbb\xbf"
C1_PASSTHROUGH = "cp1252-c1-passthrough"

DecodeErrorHandler = Callable[[Path, int, UnicodeDecodeError], None]


def _c1_passthrough(exc: UnicodeError) -> tuple[str, int]:
    # cp1252 leaves 0x81, 0x8D, 0x8F, 0x90 and 0x9D unmapped; WHATWG maps
    # them to the C1 control with the same code point.
    if not isinstance(exc, UnicodeDecodeError):
        raise exc
    undefined = exc.object[exc.start : exc.end]
    return "".join(chr(byte) for byte in undefined), exc.end


codecs.register_error(C1_PASSTHROUGH, _c1_passthrough)


def decode_line(data: bytes) -> str:
    """Decode one line as UTF-8, falling back to Windows-1252.

    The fallback follows the WHATWG windows-1252 table, so every byte
    sequence decodes.
    """
    try:
        return data.decode(PRIMARY_ENCODING)
    except UnicodeDecodeError:
        return data.decode(FALLBACK_ENCODING, errors=C1_PASSTHROUGH)


def split_fields(line: str, delimiter: str = ",") -> tuple[str, ...]:
    """Split a decoded line and trim whitespace from every field."""
    return tuple(field.strip() for field in line.split(delimiter))


def _strip_terminator(data: bytes) -> bytes:
    if data.endswith(b"\n"):
        data = data[:-1]
    if data.endswith(b"\r"):
        data = data[:-1]
    return data


def iter_rows(
    path: str | Path,
    *,
    delimiter: str = ",",
    on_decode_error: DecodeErrorHandler | None = None,
) -> Iterator[Row]:
    """Yield rows of a file lazily, numbered from 1 by physical line.

    A line decode_line rejects is handed to on_decode_error and skipped,
    keeping later row numbers aligned with the file. Without a handler the
    UnicodeDecodeError propagates. Opening or reading the file may raise
    OSError.
    """
    file_path = Path(path)
    with file_path.open("rb") as handle:
        for index, data in enumerate(handle, start=1):
            data = _strip_terminator(data)
            if index == 1 and data.startswith(UTF8_BOM):
                data = data[len(UTF8_BOM) :]
            try:
                text = decode_line(data)
            except UnicodeDecodeError as exc:
                if on_decode_error is None:
                    raise
                on_decode_error(file_path, index, exc)
                continue
            yield Row(index=index, fields=split_fields(text, delimiter), raw=text)
