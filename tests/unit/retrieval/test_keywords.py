"""
Keyword Extraction Tests

Tests for extract_keywords():
- Normalization (lowercase, punctuation stripped, hyphens kept)
- Stop word and short token filtering
- Order preservation and the five keyword cap
"""

import pytest

from sidekick.retrieval.keywords import (
    MAX_KEYWORDS,
    STOP_WORDS,
    extract_keywords,
    latest_user_message,
)

# =============================================================================
# Normalization
# =============================================================================


class TestNormalization:
    """Tests for lowercasing and character filtering."""

    def test_lowercases_tokens(self) -> None:
        assert extract_keywords("Block PARTY") == ["block", "party"]

    def test_punctuation_splits_tokens(self) -> None:
        assert extract_keywords("garden,compost!tools?") == ["garden", "compost", "tools"]

    def test_hyphenated_words_are_kept_whole(self) -> None:
        assert extract_keywords("a sign-up sheet") == ["sign-up", "sheet"]

    def test_apostrophes_break_words(self) -> None:
        # "neighbor's" -> "neighbor" + "s"; the single letter is dropped
        assert extract_keywords("my neighbor's garden") == ["neighbor", "garden"]


# =============================================================================
# Filtering
# =============================================================================


class TestFiltering:
    """Tests for stop word and length filtering."""

    def test_drops_tokens_of_two_characters_or_less(self) -> None:
        assert extract_keywords("an ox at zoo") == ["zoo"]

    @pytest.mark.parametrize(
        "word",
        ["remix", "create", "build", "make", "help", "please", "let", "lets", "should", "them"],
    )
    def test_task_filler_and_function_words_are_stop_words(self, word: str) -> None:
        assert word in STOP_WORDS
        assert extract_keywords(word) == []

    def test_only_stop_words_yields_empty_list(self) -> None:
        assert extract_keywords("Can you please help me make something?") == []

    def test_empty_message_yields_empty_list(self) -> None:
        assert extract_keywords("") == []


# =============================================================================
# Ordering and Cap
# =============================================================================


class TestOrderingAndCap:
    """Tests for order preservation and the keyword cap."""

    def test_block_party_request(self) -> None:
        keywords = extract_keywords(
            "I want to remix a prompt for a block party in my neighborhood"
        )

        assert keywords == ["prompt", "block", "party", "neighborhood"]

    def test_caps_at_five_keywords_in_order(self) -> None:
        keywords = extract_keywords("garden compost seeds tools soil water sunlight")

        assert len(keywords) == MAX_KEYWORDS
        assert keywords == ["garden", "compost", "seeds", "tools", "soil"]

    def test_duplicates_are_not_removed(self) -> None:
        assert extract_keywords("garden garden garden") == ["garden", "garden", "garden"]

    def test_custom_cap(self) -> None:
        assert extract_keywords("garden compost seeds", max_keywords=2) == ["garden", "compost"]

    @pytest.mark.parametrize(
        "message",
        [
            "What tools can help neighbors share resources?",
            "Show me stories of neighbors building tech together",
            "!!! ### ???",
            "The QUICK brown-fox jumps over 12 lazy dogs at 3pm",
        ],
    )
    def test_output_invariants(self, message: str) -> None:
        keywords = extract_keywords(message)

        assert len(keywords) <= MAX_KEYWORDS
        for keyword in keywords:
            assert len(keyword) >= 3
            assert keyword not in STOP_WORDS
            assert keyword == keyword.lower()


# =============================================================================
# Latest User Message
# =============================================================================


class TestLatestUserMessage:
    """Tests for latest_user_message()."""

    def test_returns_last_user_turn(self) -> None:
        messages = [
            {"role": "user", "content": "first"},
            {"role": "assistant", "content": "reply"},
            {"role": "user", "content": "second"},
            {"role": "assistant", "content": "another reply"},
        ]

        assert latest_user_message(messages) == "second"

    def test_no_user_turn_returns_empty_string(self) -> None:
        assert latest_user_message([{"role": "assistant", "content": "hi"}]) == ""
