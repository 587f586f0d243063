"""Unit tests for follow-up suggestions."""
from mentor.chat import get_suggestions
from mentor.chat.suggestions import BASE_SUGGESTIONS


class TestSuggestions:
    """Tests for get_suggestions."""

    def test_short_plain_reply(self):
        """Test that a short reply gets the base suggestions."""
        assert get_suggestions("Sure.") == list(BASE_SUGGESTIONS)

    def test_long_reply_offers_shortening(self):
        """Test that replies over 240 characters offer a shorter answer."""
        suggestions = get_suggestions("word " * 60)
        assert suggestions[0] == "Shorten that answer"
        assert len(suggestions) == 3

    def test_code_mention_offers_snippet(self):
        """Test that mentions of code are matched case-insensitively."""
        assert get_suggestions("Call the api twice")[0] == "Show a minimal code snippet"
        assert get_suggestions("This FUNCTION returns")[0] == "Show a minimal code snippet"

    def test_long_code_reply(self):
        """Test that both extra suggestions come before the base list."""
        suggestions = get_suggestions("code " * 60)
        assert suggestions == [
            "Show a minimal code snippet",
            "Shorten that answer",
            BASE_SUGGESTIONS[0],
        ]

    def test_limit(self):
        """Test that the limit caps the list."""
        assert len(get_suggestions("Sure.", limit=1)) == 1
