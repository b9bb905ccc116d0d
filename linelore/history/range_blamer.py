"""Range Blamer: line-range attribution for a selection."""

import logging
import re
from dataclasses import dataclass, field
from typing import Dict, List

from linelore.errors import GitCommandError, GitTimeoutError, InvalidLineRangeError
from linelore.history.porcelain_parser import parse_porcelain
from linelore.repositories.version_control.abstract_version_controller import AbstractVersionController
from linelore.repositories.version_control.dtos.blame_record_dto import BlameRecordDto
from linelore.repositories.version_control.dtos.commit_meta_dto import CommitMetaDto
from linelore.repositories.version_control.dtos.line_range_dto import LineRangeDto
from linelore.repositories.version_control.repository_locator import ensure_tracked

logger = logging.getLogger(__name__)

_OUT_OF_RANGE_RE = re.compile(r"has only (\d+) lines?")


@dataclass
class BlameOutput:
    """Per-line attribution for exactly the requested range."""

    raw: str
    records: List[BlameRecordDto] = field(default_factory=list)
    metadata: Dict[str, CommitMetaDto] = field(default_factory=dict)


class RangeBlamer:
    """Runs blame over a single line range, never the whole file."""

    def __init__(self, controller: AbstractVersionController):
        self.controller = controller

    def blame(self, relative_path: str, line_range: LineRangeDto) -> BlameOutput:
        """Attribute every line of ``line_range`` to a commit.

        Args:
            relative_path: Path relative to the repository root
            line_range: 1-based inclusive selection

        Returns:
            BlameOutput with raw porcelain text, records and embedded metadata

        Raises:
            UntrackedFileError: The file exists but is not tracked
            MissingFileError: The file does not exist
            InvalidLineRangeError: The range extends past the end of the file
        """
        ensure_tracked(self.controller, relative_path)

        logger.info(f"Blaming {relative_path} lines {line_range.start}-{line_range.end}")
        try:
            raw = self.controller.blame_porcelain(relative_path, line_range.start, line_range.end)
        except GitTimeoutError:
            raise
        except GitCommandError as e:
            match = _OUT_OF_RANGE_RE.search(e.stderr)
            if match:
                raise InvalidLineRangeError(
                    relative_path, line_range.start, line_range.end, f"file has only {match.group(1)} lines"
                ) from e
            raise

        records, metadata = parse_porcelain(raw)
        logger.debug(f"Blame returned {len(records)} records for {line_range.size} requested lines")
        return BlameOutput(raw=raw, records=records, metadata=metadata)
