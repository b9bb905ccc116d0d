"""Timeline Merger: chronological interleaving of commits and external records."""

from datetime import datetime, timezone
from typing import Iterable, List, Protocol, Sequence, Union

from linelore.repositories.version_control.dtos.commit_analysis_dto import CommitAnalysisDto
from linelore.repositories.version_control.dtos.timeline_entry_dto import TimelineEntryDto

COMMIT_KIND = "commit"


class TimelineRecord(Protocol):
    """An externally supplied record, such as a discussion thread."""

    kind: str
    date: Union[datetime, str]


def parse_timestamp(value: Union[datetime, str]) -> datetime:
    """Parse an ISO-8601 timestamp; naive values are taken as UTC.

    An empty value (metadata that could not be fetched) sorts as the oldest.
    """
    if not value:
        return datetime.min.replace(tzinfo=timezone.utc)
    parsed = value if isinstance(value, datetime) else datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def sort_by_date(analyses: Sequence[CommitAnalysisDto], newest_first: bool = True) -> List[CommitAnalysisDto]:
    """Re-sort analyses by authored date for presentation.

    The engine itself keeps first-seen-by-line order; this is a separate
    step for callers that want chronology. Equal dates keep their order.
    """
    return sorted(analyses, key=lambda a: parse_timestamp(a.commit.authored_date), reverse=newest_first)


def merge_timeline(
    analyses: Iterable[CommitAnalysisDto],
    records: Iterable[TimelineRecord] = (),
    newest_first: bool = True,
) -> List[TimelineEntryDto]:
    """Interleave commit analyses with external records by date.

    Args:
        analyses: Commit analyses from the engine
        records: Objects exposing ``kind`` and ``date`` attributes
        newest_first: Sort direction, most recent first by default

    Returns:
        Timeline entries; ties keep commits before records, each in input order
    """
    entries: List[TimelineEntryDto] = [
        TimelineEntryDto(kind=COMMIT_KIND, date=parse_timestamp(a.commit.authored_date), payload=a) for a in analyses
    ]
    entries.extend(TimelineEntryDto(kind=r.kind, date=parse_timestamp(r.date), payload=r) for r in records)
    return sorted(entries, key=lambda e: e.date, reverse=newest_first)
