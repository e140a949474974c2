"""
Relevance Ranker Tests

Tests for score_record() and RelevanceRanker:
- Additive per-keyword, per-field weights
- Stable descending sort
- Top-N cap per collection
"""

from sidekick.retrieval.models import PromptTemplate, RetrievedContent, Story, ToolListing
from sidekick.retrieval.ranker import FIELD_WEIGHTS, RelevanceRanker, score_record

BLOCK_PARTY = ["block", "party"]


# =============================================================================
# score_record
# =============================================================================


class TestScoreRecord:
    """Tests for weighted substring scoring."""

    def test_story_scores_title_and_body_per_keyword(self) -> None:
        story = Story(
            id="s1",
            title="Block Party Planning",
            body="neighbors love a block party",
        )

        # 10 + 10 (title) + 3 + 3 (body)
        assert score_record(story, BLOCK_PARTY) == 26

    def test_story_attribution_is_not_scored(self) -> None:
        story = Story(id="s1", title="Dinner", body="We ate.", attribution="Block Club")

        assert score_record(story, ["block"]) == 0

    def test_prompt_weights(self) -> None:
        prompt = PromptTemplate(
            id="p1",
            title="Garden Share",
            category="Garden",
            description="Share your garden harvest",
        )

        assert score_record(prompt, ["garden"]) == 10 + 5 + 3

    def test_tool_weights(self) -> None:
        tool = ToolListing(id="t1", name="Neighbor Hub", description="A hub for neighbors")

        assert score_record(tool, ["hub"]) == 10 + 5

    def test_substring_match_is_not_word_bounded(self) -> None:
        tool = ToolListing(id="t1", name="Partygoers", description="")

        assert score_record(tool, ["party"]) == 10

    def test_match_is_case_insensitive(self) -> None:
        tool = ToolListing(id="t1", name="COMPOST Map", description="")

        assert score_record(tool, ["Compost"]) == 10

    def test_no_hits_scores_zero(self) -> None:
        tool = ToolListing(id="t1", name="Library", description="Books")

        assert score_record(tool, BLOCK_PARTY) == 0

    def test_weight_table_covers_every_collection(self) -> None:
        assert {t.value for t in FIELD_WEIGHTS} == {"story", "prompt", "tool"}


# =============================================================================
# RelevanceRanker
# =============================================================================


def _tool(tool_id: str, name: str, description: str = "") -> ToolListing:
    return ToolListing(id=tool_id, name=name, description=description)


class TestRelevanceRanker:
    """Tests for ranking and the top-N cap."""

    def test_sorts_by_score_descending(self) -> None:
        ranker = RelevanceRanker()
        tools = [
            _tool("low", "Other", "block"),
            _tool("high", "Block Party Kit", "block party"),
            _tool("mid", "Block", ""),
        ]

        ranked = ranker.rank(tools, BLOCK_PARTY)

        assert [s.record.id for s in ranked] == ["high", "mid", "low"]
        assert [s.score for s in ranked] == [30, 10, 5]

    def test_equal_scores_keep_retrieval_order(self) -> None:
        ranker = RelevanceRanker()
        tools = [_tool("first", "Block A"), _tool("second", "Block B"), _tool("third", "Block C")]

        ranked = ranker.rank(tools, ["block"])

        assert [s.record.id for s in ranked] == ["first", "second", "third"]

    def test_keeps_top_three_of_ten(self) -> None:
        ranker = RelevanceRanker()
        tools = [_tool(f"t{i}", "Tool", "block") for i in range(7)]
        tools.insert(2, _tool("best", "Block Party", "block party"))
        tools.insert(5, _tool("second", "Block", "party"))
        tools.insert(8, _tool("third", "Party", ""))

        ranked = ranker.rank(tools, BLOCK_PARTY)

        assert len(tools) == 10
        assert len(ranked) == 3
        assert [s.record.id for s in ranked] == ["best", "second", "third"]

    def test_zero_score_records_are_retained(self) -> None:
        ranker = RelevanceRanker()
        story = Story(id="s1", title="Dinner", body="We ate.", attribution="Block Club")

        ranked = ranker.rank([story], ["block"])

        assert len(ranked) == 1
        assert ranked[0].score == 0

    def test_custom_top_n(self) -> None:
        ranker = RelevanceRanker(top_n=1)

        ranked = ranker.rank([_tool("a", "Block"), _tool("b", "Block")], ["block"])

        assert [s.record.id for s in ranked] == ["a"]

    def test_rank_all_ranks_each_collection_independently(self) -> None:
        ranker = RelevanceRanker()
        content = RetrievedContent(
            stories=[Story(id="s1", title="Block", body="")],
            prompts=[],
            tools=[_tool(f"t{i}", "Block") for i in range(5)],
        )

        ranked = ranker.rank_all(content, ["block"])

        assert len(ranked.stories) == 1
        assert ranked.prompts == []
        assert len(ranked.tools) == 3
        assert not ranked.is_empty()
