"""Parser for ``git blame --porcelain`` output."""

import re
from datetime import datetime, timedelta, timezone
from typing import Dict, List, Optional, Tuple

from linelore.repositories.version_control.dtos.blame_record_dto import BlameRecordDto
from linelore.repositories.version_control.dtos.commit_meta_dto import CommitMetaDto

# <hash> <orig-line> <final-line> [<group-size>]; SHA-1 or SHA-256 object names
_HEADER_RE = re.compile(r"^([0-9a-f]{40}|[0-9a-f]{64}) (\d+) (\d+)(?: (\d+))?$")
_TZ_RE = re.compile(r"^([+-])(\d{2})(\d{2})$")


def is_null_commit(commit_id: str) -> bool:
    """Uncommitted lines are attributed to the all-zero object name."""
    return set(commit_id) == {"0"}


def _format_author_time(epoch: str, tz: str) -> str:
    match = _TZ_RE.match(tz.strip())
    offset = timedelta(0)
    if match:
        sign = -1 if match.group(1) == "-" else 1
        offset = sign * timedelta(hours=int(match.group(2)), minutes=int(match.group(3)))
    return datetime.fromtimestamp(int(epoch), tz=timezone(offset)).isoformat()


def parse_porcelain(output: str) -> Tuple[List[BlameRecordDto], Dict[str, CommitMetaDto]]:
    """Parse porcelain blame text into per-line records and commit metadata.

    Porcelain output emits the commit headers (author, summary, ...) only the
    first time a commit appears, so metadata is collected per commit while
    every line still yields a record. Content lines start with a tab and are
    never mistaken for headers.

    Args:
        output: Raw stdout of ``git blame --porcelain``

    Returns:
        Tuple of (records in output order, metadata keyed by commit id)
    """
    records: List[BlameRecordDto] = []
    headers: Dict[str, Dict[str, str]] = {}
    filenames: Dict[str, str] = {}

    current_id: Optional[str] = None
    current_line = 0

    for raw in output.split("\n"):
        if raw.startswith("\t"):
            if current_id is None:
                continue
            records.append(
                BlameRecordDto(
                    line_number=current_line,
                    commit_id=None if is_null_commit(current_id) else current_id,
                    source_path=filenames.get(current_id),
                )
            )
            current_id = None
            continue

        match = _HEADER_RE.match(raw)
        if match:
            current_id = match.group(1)
            current_line = int(match.group(3))
            headers.setdefault(current_id, {})
            continue

        if current_id is None or " " not in raw:
            # "boundary" and similar flag lines carry no value
            continue

        key, value = raw.split(" ", 1)
        if key == "filename":
            filenames[current_id] = value
        else:
            headers[current_id].setdefault(key, value)

    metadata: Dict[str, CommitMetaDto] = {}
    for commit_id, fields in headers.items():
        if is_null_commit(commit_id) or not {"author", "author-time", "summary"} <= fields.keys():
            continue
        email = fields.get("author-mail", "").strip("<>") or None
        metadata[commit_id] = CommitMetaDto(
            id=commit_id,
            author=fields["author"],
            author_email=email,
            authored_date=_format_author_time(fields["author-time"], fields.get("author-tz", "+0000")),
            subject=fields["summary"],
        )

    return records, metadata
