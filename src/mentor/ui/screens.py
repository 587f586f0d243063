"""Modal screens for the TUI.

This module hides the design decisions about:
- Confirmation dialog appearance (CSS, layout)
- How a user turn is edited before it is re-run
- How saved chats are browsed, renamed, exported and imported
- How themes are picked

To change how dialogs look, modify only this file.
"""

import logging
from pathlib import Path

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, Input, OptionList, Static, TextArea
from textual.widgets.option_list import Option

from ..archive import ArchiveStore, ExportFormat, export_entry, write_backup
from ..errors import MalformedArchive
from .config import CLEAR_WARNING, IMPORT_WARNING
from .themes import THEMES

logger = logging.getLogger(__name__)

CLEAR_ALL = "clear-all"
TOGGLE_THEME = "toggle-theme"

DIALOG_CSS = """
{screen} {{
    align: center middle;
    background: $background 70%;
}}

{screen} > Vertical {{
    width: 80;
    height: auto;
    max-height: 90%;
    border: tall $accent;
    background: $surface;
    padding: 1 2;
}}

{screen} .dialog-title {{
    width: 100%;
    height: auto;
    text-align: center;
    text-style: bold;
    color: $accent;
    padding: 0 0 1 0;
    border-bottom: solid $border;
    margin-bottom: 1;
}}

{screen} .dialog-buttons {{
    width: 100%;
    height: auto;
    align: center middle;
    margin-top: 1;
}}

{screen} .dialog-buttons Button {{
    margin: 0 1;
    min-width: 8;
}}
"""


class ConfirmationScreen(ModalScreen[str]):
    """Modal confirmation dialog.

    Dismisses with the chosen option, lower-cased.
    """

    CSS = DIALOG_CSS.format(screen="ConfirmationScreen") + """
    #confirmation-prompt {
        width: 100%;
        height: auto;
        text-align: center;
        padding: 1 2;
        background: $panel;
        border: round $border;
        color: $foreground;
    }
    """

    BINDINGS = [
        Binding("y", "confirm_yes", "Yes", show=False),
        Binding("n", "confirm_no", "No", show=False),
        Binding("escape", "confirm_no", "Cancel", show=False),
    ]

    def __init__(self, prompt: str, options: list[str] | None = None) -> None:
        super().__init__()
        self._prompt = prompt
        self._options = options or ["yes", "no"]

    def compose(self) -> ComposeResult:
        with Vertical():
            yield Static("Confirmation Required", classes="dialog-title")
            yield Static(self._prompt, id="confirmation-prompt")
            with Horizontal(classes="dialog-buttons"):
                for option in self._options:
                    if option.lower() == "yes":
                        variant = "success"
                    elif option.lower() == "no":
                        variant = "error"
                    else:
                        variant = "primary"
                    yield Button(option.capitalize(), id=f"btn-{option}", variant=variant)

    def on_button_pressed(self, event: Button.Pressed) -> None:
        button_id = event.button.id or ""
        if button_id.startswith("btn-"):
            self.dismiss(button_id[4:])

    def action_confirm_yes(self) -> None:
        if "yes" in self._options:
            self.dismiss("yes")

    def action_confirm_no(self) -> None:
        if "no" in self._options:
            self.dismiss("no")


class EditMessageScreen(ModalScreen[str | None]):
    """Edit a user turn before it is re-run.

    Dismisses with the new text, or None when cancelled.
    """

    CSS = DIALOG_CSS.format(screen="EditMessageScreen") + """
    #edit-input {
        height: 8;
    }
    """

    BINDINGS = [Binding("escape", "cancel", "Cancel", show=False)]

    def __init__(self, text: str) -> None:
        super().__init__()
        self._text = text

    def compose(self) -> ComposeResult:
        with Vertical():
            yield Static("Edit & Re-run", classes="dialog-title")
            yield TextArea(self._text, id="edit-input", show_line_numbers=False)
            with Horizontal(classes="dialog-buttons"):
                yield Button("Re-run", id="rerun-btn", variant="success")
                yield Button("Cancel", id="cancel-btn", variant="error")

    def on_mount(self) -> None:
        self.query_one("#edit-input", TextArea).focus()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        if event.button.id == "rerun-btn":
            self.dismiss(self.query_one("#edit-input", TextArea).text)
        else:
            self.dismiss(None)

    def action_cancel(self) -> None:
        self.dismiss(None)


class SavedChatsScreen(ModalScreen[str | None]):
    """Browse and manage saved chats.

    Rename, delete, export and import happen in place. Dismisses with the
    id of the entry to load, or None when closed.
    """

    CSS = DIALOG_CSS.format(screen="SavedChatsScreen") + """
    #saved-list {
        height: 12;
        border: round $border;
    }

    #saved-empty {
        color: $text-muted;
        text-align: center;
        padding: 1;
    }

    SavedChatsScreen Input {
        margin-top: 1;
    }
    """

    BINDINGS = [Binding("escape", "close", "Close", show=False)]

    def __init__(self, archive: ArchiveStore, export_dir: str | Path) -> None:
        super().__init__()
        self._archive = archive
        self._export_dir = Path(export_dir)

    def compose(self) -> ComposeResult:
        with Vertical():
            yield Static("Saved Chats", classes="dialog-title")
            yield Static("No saved chats yet.", id="saved-empty")
            yield OptionList(id="saved-list")
            yield Input(placeholder="New name for the selected chat", id="rename-input")
            with Horizontal(classes="dialog-buttons"):
                yield Button("Load", id="load-btn", variant="success")
                yield Button("Rename", id="rename-btn")
                yield Button("Delete", id="delete-btn", variant="error")
                yield Button("TXT", id="txt-btn")
                yield Button("PDF", id="pdf-btn")
            yield Input(placeholder="Path of a backup file to import", id="import-input")
            with Horizontal(classes="dialog-buttons"):
                yield Button("Export All", id="export-all-btn", variant="primary")
                yield Button("Import", id="import-btn", variant="warning")
                yield Button("Close", id="close-btn")

    def on_mount(self) -> None:
        self._refresh_list()

    def _refresh_list(self) -> None:
        option_list = self.query_one("#saved-list", OptionList)
        option_list.clear_options()
        entries = self._archive.entries
        option_list.add_options([
            Option(f"{entry.name}  ({len(entry.messages)} messages)", id=entry.id)
            for entry in entries
        ])
        option_list.display = bool(entries)
        self.query_one("#saved-empty", Static).display = not entries
        if entries:
            option_list.highlighted = 0

    def _selected_id(self) -> str | None:
        option_list = self.query_one("#saved-list", OptionList)
        if option_list.highlighted is None or option_list.option_count == 0:
            return None
        return option_list.get_option_at_index(option_list.highlighted).id

    def on_option_list_option_selected(self, event: OptionList.OptionSelected) -> None:
        event.stop()
        self.dismiss(event.option.id)

    def on_button_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        button_id = event.button.id
        if button_id == "close-btn":
            self.dismiss(None)
        elif button_id == "export-all-btn":
            self._export_all()
        elif button_id == "import-btn":
            self._confirm_import()
        else:
            entry_id = self._selected_id()
            if entry_id is None:
                self.notify("No saved chat selected", severity="warning", timeout=2)
                return
            if button_id == "load-btn":
                self.dismiss(entry_id)
            elif button_id == "rename-btn":
                self._rename(entry_id)
            elif button_id == "delete-btn":
                self._archive.delete(entry_id)
                self._refresh_list()
            elif button_id == "txt-btn":
                self._export(entry_id, ExportFormat.TEXT)
            elif button_id == "pdf-btn":
                self._export(entry_id, ExportFormat.PDF)

    def _rename(self, entry_id: str) -> None:
        name_input = self.query_one("#rename-input", Input)
        self._archive.rename(entry_id, name_input.value)
        name_input.value = ""
        self._refresh_list()

    def _export(self, entry_id: str, fmt: ExportFormat) -> None:
        entry = self._archive.get(entry_id)
        if entry is None:
            return
        try:
            path = export_entry(entry, fmt, self._export_dir)
        except OSError as e:
            logger.error("Export failed: %s", e)
            self.notify(f"Export failed: {e}", severity="error", timeout=5)
            return
        self.notify(f"Saved {path}", timeout=3)

    def _export_all(self) -> None:
        try:
            path = write_backup(self._archive.export_all(), self._export_dir)
        except OSError as e:
            logger.error("Backup failed: %s", e)
            self.notify(f"Backup failed: {e}", severity="error", timeout=5)
            return
        self.notify(f"Backup written to {path}", timeout=3)

    def _confirm_import(self) -> None:
        raw_path = self.query_one("#import-input", Input).value.strip()
        if not raw_path:
            self.notify("Enter the path of a backup file", severity="warning", timeout=2)
            return
        path = Path(raw_path).expanduser()
        try:
            data = path.read_bytes()
        except OSError as e:
            self.notify(f"Could not read {path}: {e}", severity="error", timeout=5)
            return

        def on_confirm(answer: str | None) -> None:
            if answer != "yes":
                return
            try:
                count = self._archive.import_all(data)
            except MalformedArchive as e:
                self.notify(f"Import failed: {e.message}", severity="error", timeout=5)
                return
            self.query_one("#import-input", Input).value = ""
            self._refresh_list()
            self.notify(f"Imported {count} saved chats", timeout=3)

        self.app.push_screen(ConfirmationScreen(IMPORT_WARNING), on_confirm)

    def action_close(self) -> None:
        self.dismiss(None)


class SettingsScreen(ModalScreen[str | None]):
    """Theme picker and archive reset.

    Dismisses with a theme name, ``TOGGLE_THEME``, ``CLEAR_ALL`` or None.
    """

    CSS = DIALOG_CSS.format(screen="SettingsScreen") + """
    #current-theme {
        width: 100%;
        text-align: center;
        color: $text-muted;
    }
    """

    BINDINGS = [Binding("escape", "close", "Close", show=False)]

    def __init__(self, current_theme: str) -> None:
        super().__init__()
        self._current_theme = current_theme

    def compose(self) -> ComposeResult:
        with Vertical():
            yield Static("Settings", classes="dialog-title")
            yield Static(f"Theme: {self._current_theme}", id="current-theme")
            with Horizontal(classes="dialog-buttons"):
                for name in THEMES:
                    variant = "primary" if name == self._current_theme else "default"
                    yield Button(name, name=name, classes="theme-btn", variant=variant)
            with Horizontal(classes="dialog-buttons"):
                yield Button("Dark / Light", id="toggle-theme-btn")
                yield Button("Clear All Saved Chats", id="clear-all-btn", variant="error")
                yield Button("Close", id="close-btn")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        button = event.button
        if button.has_class("theme-btn"):
            self.dismiss(button.name)
        elif button.id == "toggle-theme-btn":
            self.dismiss(TOGGLE_THEME)
        elif button.id == "clear-all-btn":
            def on_confirm(answer: str | None) -> None:
                if answer == "yes":
                    self.dismiss(CLEAR_ALL)

            self.app.push_screen(ConfirmationScreen(CLEAR_WARNING), on_confirm)
        else:
            self.dismiss(None)

    def action_close(self) -> None:
        self.dismiss(None)
