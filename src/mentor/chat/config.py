"""Chat behaviour constants.

Centralizes tones, typing-effect timing and user-facing error texts.
"""

# Tone directives
DEFAULT_TONE = "Default"
TONES = ("Default", "Formal", "Friendly", "Teacher", "Child-friendly", "Sarcastic")

# Typing-effect reveal
DEFAULT_TYPING_EFFECT = True
DEFAULT_TYPING_SPEED = 12  # Characters revealed per tick
MIN_TYPING_SPEED = 4
MAX_TYPING_SPEED = 40
REVEAL_FIRST_TICK = 0.010  # Seconds before the first reveal step
REVEAL_TICK_INTERVAL = 0.025  # Seconds between reveal steps

# Summaries
SUMMARY_INSTRUCTION = "Summarize the following conversation in 5 concise bullets."

# Session-level error banners
SEND_FAILED = "Something went wrong. Check your backend server."
RERUN_FAILED = "Re-run failed. Check backend."
SUMMARY_FAILED = "Failed to summarize."

# Session naming
FIRST_SESSION_NAME = "Chat 1"
