"""CSS styles for the TUI.

Hides layout and styling decisions from the application logic.
Colors come from theme variables so every theme restyles the whole app.
"""

APP_CSS = """
/* ============================================
   Main Screen Layout
   ============================================ */
Screen {
    background: $background;
}

#body {
    height: 1fr;
}

/* ============================================
   Sidebar
   ============================================ */
#sidebar {
    width: 30;
    height: 100%;
    background: $panel;
    border-right: solid $border;
    padding: 1 1;

    &.-collapsed {
        display: none;
    }
}

#sidebar-title {
    color: $primary;
    text-style: bold;
    padding: 0 0 1 0;
}

#sidebar Button {
    width: 100%;
    margin: 0 0 1 0;
}

#pinned-title {
    color: $text-muted;
    text-style: bold;
    margin-top: 1;
}

#pinned-panel {
    height: 1fr;
    scrollbar-size-vertical: 1;
}

.pinned-item {
    background: $surface;
    padding: 0 1;
    margin: 0 0 1 0;
}

.pinned-empty {
    color: $text-muted;
}

/* ============================================
   Main Column
   ============================================ */
#main {
    width: 1fr;
    height: 100%;
}

#session-tabs {
    background: $panel;
}

#top-bar {
    height: 3;
    background: $panel;
    border-bottom: solid $border;
    padding: 0 1;
}

#session-name {
    width: 1fr;
    content-align: left middle;
    height: 3;
    text-style: bold;
}

#tone-select {
    width: 24;
}

#top-bar Button {
    margin-left: 1;
}

/* ============================================
   Chat View
   ============================================ */
#chat-view {
    height: 1fr;
    padding: 1 2;
    scrollbar-gutter: stable;
}

.chat-message {
    height: auto;
    max-width: 80%;
    padding: 0 1;
    margin-bottom: 1;
    border: round $border;
}

.user-message {
    align-horizontal: right;
    background: $primary 25%;
    border: round $primary;
}

.assistant-message {
    background: $surface;
    border: round $secondary 50%;
}

.message-header {
    color: $text-muted;
    text-style: bold;
}

.message-content {
    height: auto;
}

.message-actions, .message-suggestions {
    height: auto;
    margin-top: 1;
}

.message-actions Button, .message-suggestions Button {
    min-width: 6;
    height: 1;
    border: none;
    margin-right: 1;
}

.suggestion-btn {
    background: $panel;
}

.pinned .pin-btn {
    background: $accent;
    color: $background;
}

#pending-indicator {
    height: 1;
    padding: 0 2;
    color: $accent;
    display: none;

    &.-visible {
        display: block;
    }
}

#error-banner {
    height: auto;
    padding: 0 2;
    color: $error;
    background: $error 15%;
    border-top: solid $error;
    text-align: center;
    display: none;

    &.-visible {
        display: block;
    }
}

/* ============================================
   Input Area
   ============================================ */
#chat-input-bar {
    height: auto;
    max-height: 8;
    padding: 0 1;
    background: $panel;
    border-top: solid $border;
}

#chat-input {
    width: 1fr;
    height: auto;
    min-height: 3;
    max-height: 6;
}

#send-btn {
    width: 10;
    margin-left: 1;
}

#options-bar {
    height: 3;
    padding: 0 1;
    background: $panel;
}

#options-bar Static {
    width: auto;
    content-align: left middle;
    height: 3;
    padding: 0 1;
}

#speed-input {
    width: 10;
}

/* ============================================
   Log Panel
   ============================================ */
#debug-panel {
    height: 10;
    border: round $warning 60%;
    border-title-color: $warning;
    background: $panel;
}
"""
