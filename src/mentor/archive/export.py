"""Transcript and backup file rendering.

Hides the layout of exported files:
- plain-text transcripts (``role: text`` paragraphs)
- paginated A4 PDF transcripts
- timestamped JSON backup names
"""

import io
import re
import time
from enum import Enum
from pathlib import Path

from reportlab.lib.pagesizes import A4
from reportlab.lib.units import mm
from reportlab.lib.utils import simpleSplit
from reportlab.pdfgen import canvas

from ..chat.models import ArchiveEntry

# PDF layout, in millimetres from the top-left corner
PDF_FONT = "Helvetica"
PDF_FONT_SIZE = 12
PDF_MARGIN_X = 15
PDF_TOP = 20
PDF_TITLE_GAP = 10
PDF_WRAP_WIDTH = 180
PDF_LINE_HEIGHT = 7
PDF_PARAGRAPH_GAP = 4
PDF_PAGE_LIMIT = 270

BACKUP_PREFIX = "ai-mentor-backup"

_UNSAFE_FILENAME = re.compile(r'[\\/:*?"<>|\x00-\x1f]+')


class ExportFormat(str, Enum):
    """Single-chat export formats."""

    TEXT = "txt"
    PDF = "pdf"


def safe_filename(name: str, fallback: str = "chat") -> str:
    """Turn a chat name into something usable as a file name."""
    cleaned = _UNSAFE_FILENAME.sub("_", name).strip(" .")
    return cleaned or fallback


def backup_filename(timestamp_ms: int | None = None) -> str:
    """File name for a full-archive backup, e.g. ``ai-mentor-backup-1700000000000.json``."""
    if timestamp_ms is None:
        timestamp_ms = int(time.time() * 1000)
    return f"{BACKUP_PREFIX}-{timestamp_ms}.json"


def render_text(entry: ArchiveEntry) -> str:
    """Plain-text transcript with a blank line between turns."""
    return entry.transcript("\n\n")


def layout_pdf(entry: ArchiveEntry) -> list[list[tuple[float, str]]]:
    """Lay out a transcript as pages of ``(y_mm, line)`` pairs.

    Each message becomes an ``ROLE: text`` paragraph word-wrapped to a
    fixed column. A page break is taken before any line that would start
    below the page limit, so paragraphs continue onto the next page
    instead of running off the bottom.
    """
    pages: list[list[tuple[float, str]]] = [[]]
    y: float = PDF_TOP
    pages[-1].append((y, entry.name))
    y += PDF_TITLE_GAP

    for message in entry.messages:
        paragraph = f"{message.role.value.upper()}: {message.text}"
        for line in simpleSplit(paragraph, PDF_FONT, PDF_FONT_SIZE, PDF_WRAP_WIDTH * mm):
            if y > PDF_PAGE_LIMIT:
                pages.append([])
                y = PDF_TOP
            pages[-1].append((y, line))
            y += PDF_LINE_HEIGHT
        y += PDF_PARAGRAPH_GAP

    return pages


def render_pdf(entry: ArchiveEntry) -> bytes:
    """Render a transcript as an A4 PDF document."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=A4)
    c.setTitle(entry.name)
    _, height = A4

    for page in layout_pdf(entry):
        c.setFont(PDF_FONT, PDF_FONT_SIZE)
        for y, line in page:
            c.drawString(PDF_MARGIN_X * mm, height - y * mm, line)
        c.showPage()

    c.save()
    return buf.getvalue()


def export_entry(entry: ArchiveEntry, fmt: ExportFormat, directory: str | Path) -> Path:
    """Write a single saved chat to ``directory``.

    Returns:
        Path of the written file (``<name>.txt`` or ``<name>.pdf``)
    """
    out_dir = Path(directory).expanduser()
    out_dir.mkdir(parents=True, exist_ok=True)
    path = out_dir / f"{safe_filename(entry.name)}.{fmt.value}"

    if fmt == ExportFormat.TEXT:
        path.write_text(render_text(entry), encoding="utf-8")
    else:
        path.write_bytes(render_pdf(entry))
    return path


def write_backup(data: bytes, directory: str | Path, timestamp_ms: int | None = None) -> Path:
    """Write an archive backup with a timestamp-bearing name."""
    out_dir = Path(directory).expanduser()
    out_dir.mkdir(parents=True, exist_ok=True)
    path = out_dir / backup_filename(timestamp_ms)
    path.write_bytes(data)
    return path
