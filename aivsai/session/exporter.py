"""Markdown export of conversation sessions."""

import re
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional

from pydantic import BaseModel, ValidationError

from aivsai.session.models import Session, Turn
from aivsai.utils.errors import EmptySessionError, FileAccessError
from aivsai.utils.logging import get_logger

logger = get_logger(__name__)

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"
FILENAME_TIMESTAMP_FORMAT = "%Y-%m-%d_%H-%M-%S"
PREFIX_LENGTH = 20
DOCUMENT_TITLE = "# AI vs AI Conversation"

_HEADER_LINE = re.compile(r"^- \*\*(?P<key>[A-Za-z]+):\*\* (?P<value>.*)$")
_HEADER_KEYS = {
    "Started": "started_at",
    "Saved": "saved_at",
    "Turns": "turn_count",
    "Answerer": "answerer_model",
    "Reviewer": "reviewer_model",
}


class ExportHeader(BaseModel):
    """Metadata block at the top of an exported conversation."""

    started_at: datetime
    saved_at: datetime
    turn_count: int
    answerer_model: str
    reviewer_model: str


class ExportSummary(BaseModel):
    path: Path
    header: ExportHeader


def sanitize_prefix(text: str, length: int = PREFIX_LENGTH) -> str:
    """First ``length`` characters of ``text`` with non-alphanumerics as ``_``."""
    return "".join(c if c.isalnum() else "_" for c in text[:length])


def blockquote(text: str) -> str:
    lines = text.splitlines() or [""]
    return "\n".join(f"> {line}" if line.strip() else ">" for line in lines)


def read_header(text: str) -> ExportHeader:
    """Parse the metadata block of an exported conversation.

    Raises:
        ValueError: the document does not start with a complete header.
    """
    lines = text.splitlines()
    if not lines or lines[0].strip() != DOCUMENT_TITLE:
        raise ValueError("Not an AI vs AI conversation export")

    values: Dict[str, str] = {}
    for line in lines[1:]:
        if line.strip() == "---":
            break
        match = _HEADER_LINE.match(line)
        if match and match.group("key") in _HEADER_KEYS:
            values[_HEADER_KEYS[match.group("key")]] = match.group("value")

    missing = [field for field in _HEADER_KEYS.values() if field not in values]
    if missing:
        raise ValueError(f"Export header is missing: {', '.join(missing)}")

    try:
        return ExportHeader(
            started_at=datetime.strptime(values["started_at"], TIMESTAMP_FORMAT),
            saved_at=datetime.strptime(values["saved_at"], TIMESTAMP_FORMAT),
            turn_count=int(values["turn_count"]),
            answerer_model=values["answerer_model"],
            reviewer_model=values["reviewer_model"],
        )
    except ValidationError as e:
        raise ValueError(f"Invalid export header: {e}") from e


class SessionExporter:
    """Writes sessions as timestamped markdown files."""

    def __init__(self, output_dir: Path):
        """Initialize exporter.

        Args:
            output_dir: Directory that receives the exported files. Created
                on first save.
        """
        self.output_dir = Path(output_dir)

    def build_filename(self, session: Session, saved_at: datetime) -> str:
        prefix = sanitize_prefix(session.first_question or "")
        return f"{saved_at.strftime(FILENAME_TIMESTAMP_FORMAT)}_{prefix}.md"

    def _unused_path(self, filename: str) -> Path:
        """``filename`` in the output directory, suffixed ``_2``, ``_3``... if taken."""
        path = self.output_dir / filename
        counter = 2
        while path.exists():
            path = self.output_dir / f"{Path(filename).stem}_{counter}.md"
            counter += 1
        return path

    def _render_turn(self, turn: Turn) -> List[str]:
        return [
            f"## Turn {turn.sequence_number} ({turn.created_at.strftime('%H:%M:%S')})",
            "",
            "### Question",
            "",
            turn.question,
            "",
            "### Answer",
            "",
            blockquote(turn.answer),
            "",
            "### Review",
            "",
            blockquote(turn.review),
            "",
            "---",
            "",
        ]

    def render_markdown(
        self,
        session: Session,
        answerer_model: str,
        reviewer_model: str,
        saved_at: datetime,
    ) -> str:
        """Render the whole session; output depends only on the arguments."""
        lines = [
            DOCUMENT_TITLE,
            "",
            f"- **Started:** {session.started_at.strftime(TIMESTAMP_FORMAT)}",
            f"- **Saved:** {saved_at.strftime(TIMESTAMP_FORMAT)}",
            f"- **Turns:** {len(session.turns)}",
            f"- **Answerer:** {answerer_model}",
            f"- **Reviewer:** {reviewer_model}",
            "",
            "---",
            "",
        ]
        for turn in session.turns:
            lines.extend(self._render_turn(turn))
        return "\n".join(lines)

    def save(
        self,
        session: Session,
        answerer_model: str,
        reviewer_model: str,
        now: Optional[datetime] = None,
    ) -> Path:
        """Export ``session`` to a new markdown file and return its path.

        Raises:
            EmptySessionError: the session has no turns; nothing is written.
            FileAccessError: the directory or file could not be written.
        """
        if not session.turns:
            raise EmptySessionError()

        saved_at = now or datetime.now()
        document = self.render_markdown(session, answerer_model, reviewer_model, saved_at)
        path = self._unused_path(self.build_filename(session, saved_at))
        tmp_path = path.with_suffix(".tmp")

        try:
            self.output_dir.mkdir(parents=True, exist_ok=True)
            with open(tmp_path, "w", encoding="utf-8") as f:
                f.write(document)
            tmp_path.replace(path)
        except OSError as e:
            logger.error(f"Failed to export session to {path}: {e}")
            if tmp_path.exists():
                tmp_path.unlink()
            raise FileAccessError(f"Failed to save conversation: {e}", path=path) from e

        logger.debug(f"Exported {len(session.turns)} turn(s) to {path}")
        return path

    def list_exports(self) -> List[ExportSummary]:
        """Headers of all exports in the output directory, newest first."""
        if not self.output_dir.is_dir():
            return []

        summaries = []
        for path in self.output_dir.glob("*.md"):
            try:
                header = read_header(path.read_text(encoding="utf-8"))
            except (OSError, UnicodeDecodeError, ValueError) as e:
                logger.warning(f"Skipping unreadable export {path.name}: {e}")
                continue
            summaries.append(ExportSummary(path=path, header=header))

        summaries.sort(key=lambda s: s.header.saved_at, reverse=True)
        return summaries
