"""Saved-chat archive and its export formats."""

from .export import (
    ExportFormat,
    backup_filename,
    export_entry,
    layout_pdf,
    render_pdf,
    render_text,
    write_backup,
)
from .store import ArchiveStore

__all__ = [
    "ArchiveStore",
    "ExportFormat",
    "backup_filename",
    "export_entry",
    "layout_pdf",
    "render_pdf",
    "render_text",
    "write_backup",
]
