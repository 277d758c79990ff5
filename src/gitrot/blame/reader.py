"""Parse ``git blame --line-porcelain`` output into authorship records."""

import re
from pathlib import Path
from typing import Iterable, Iterator, Optional, Union

from ..exceptions import BlameParseError, BlameReadError
from ..logging_config import get_logger
from .models import AuthorshipRecord

logger = get_logger(__name__)

# Keys every record must carry before its content line
_REQUIRED_KEYS = (
    "author",
    "author-mail",
    "author-time",
    "author-tz",
    "committer",
    "committer-mail",
    "committer-time",
    "committer-tz",
    "summary",
    "filename",
)
_OPTIONAL_KEYS = ("previous",)


class BlameReader:
    """Turn a porcelain blame stream into one AuthorshipRecord per line.

    Each record in the stream looks like::

        <revision> <orig-line> <final-line> [<group-size>]
        author <name>
        author-mail <email>
        author-time <unix-seconds>
        author-tz <tz>
        committer <name>
        committer-mail <email>
        committer-time <unix-seconds>
        committer-tz <tz>
        summary <text>
        [previous <revision> <filename>]
        [boundary]
        filename <path>
        \\t<line content>

    ``previous`` is missing on boundary commits, where ``filename`` follows
    ``summary`` directly. Fields are matched by key rather than position.

    Sequence numbers start at ``start`` for every reader, so each file gets
    its own 1-based numbering.
    """

    # Matches: revision | original line | final line | optional group size
    _HEADER_RE = re.compile(r"^([0-9a-fA-F]{4,64}) (\d+) (\d+)(?: (\d+))?$")

    def __init__(self, path: Union[str, Path] = "<stream>", start: int = 1):
        self.path = Path(path)
        self.start = start

    def read(self, stream: Iterable[str]) -> list[AuthorshipRecord]:
        """Read every record from ``stream``.

        Raises:
            BlameReadError: The stream failed mid-read. Nothing is returned.
            BlameParseError: A record was malformed. ``records`` on the
                exception holds the records read before it.
        """
        records: list[AuthorshipRecord] = []
        try:
            for record in self.iter_records(stream):
                records.append(record)
        except BlameParseError as e:
            raise BlameParseError(e.reason, e.line_number, records) from e
        return records

    def iter_records(self, stream: Iterable[str]) -> Iterator[AuthorshipRecord]:
        sequence = self.start
        stream_line = 0
        header: Optional[re.Match] = None
        fields: dict[str, str] = {}
        boundary = False

        lines = iter(stream)
        while True:
            try:
                raw = next(lines)
            except StopIteration:
                break
            except (OSError, UnicodeDecodeError) as e:
                raise BlameReadError(self.path, str(e)) from e

            stream_line += 1
            line = _strip_terminator(raw)

            if header is None:
                header = self._HEADER_RE.match(line)
                if header is None:
                    raise BlameParseError(f"unexpected header {line!r}", stream_line)
                fields = {}
                boundary = False
                continue

            if line.startswith("\t"):
                yield self._build(header, fields, boundary, line[1:], sequence, stream_line)
                sequence += 1
                header = None
                continue

            key, _, value = line.partition(" ")
            if key == "boundary":
                boundary = True
            elif key in _REQUIRED_KEYS or key in _OPTIONAL_KEYS:
                fields[key] = value
            else:
                logger.debug("Ignoring unknown blame key %r in %s", key, self.path)

        if header is not None:
            raise BlameParseError("stream ended inside a record", stream_line)

    def _build(
        self,
        header: re.Match,
        fields: dict[str, str],
        boundary: bool,
        content: str,
        sequence: int,
        stream_line: int,
    ) -> AuthorshipRecord:
        missing = [key for key in _REQUIRED_KEYS if key not in fields]
        if missing:
            raise BlameParseError(f"missing {', '.join(missing)}", stream_line)

        group = header.group(4)
        return AuthorshipRecord(
            commit_id=header.group(1),
            orig_line=int(header.group(2)),
            final_line=int(header.group(3)),
            group_size=int(group) if group else None,
            author=fields["author"],
            author_email=_strip_mail(fields["author-mail"]),
            author_time=_parse_time(fields["author-time"], "author-time", stream_line),
            author_tz=fields["author-tz"],
            committer=fields["committer"],
            committer_email=_strip_mail(fields["committer-mail"]),
            committer_time=_parse_time(fields["committer-time"], "committer-time", stream_line),
            committer_tz=fields["committer-tz"],
            summary=fields["summary"],
            previous=fields.get("previous"),
            boundary=boundary,
            filename=fields["filename"],
            content=content,
            sequence_number=sequence,
        )


def read_blame(stream: Iterable[str], path: Union[str, Path] = "<stream>") -> list[AuthorshipRecord]:
    """Read a whole blame stream for one file."""
    return BlameReader(path).read(stream)


def _strip_terminator(raw: str) -> str:
    if raw.endswith("\n"):
        raw = raw[:-1]
    if raw.endswith("\r"):
        raw = raw[:-1]
    return raw


def _strip_mail(value: str) -> str:
    if value.startswith("<") and value.endswith(">"):
        return value[1:-1]
    return value


def _parse_time(value: str, key: str, stream_line: int) -> int:
    # Some producers append the offset to the seconds value; keep the seconds
    try:
        return int(value.split(" ")[0])
    except ValueError:
        raise BlameParseError(f"{key} is not a unix timestamp: {value!r}", stream_line)
