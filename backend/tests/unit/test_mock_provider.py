"""
Unit tests for MockResponseProvider.
"""

import pytest
from domain import MockReplies, Turn
from providers import MockResponseProvider, is_opening_turn


@pytest.fixture
def mock_provider():
    return MockResponseProvider(
        replies={
            "a": MockReplies(opening="Alpha opens", follow_up="Alpha follows up"),
            "b": MockReplies(opening="Bravo opens", follow_up="Bravo follows up"),
        }
    )


class TestOpeningTurnDetection:
    @pytest.mark.unit
    def test_single_user_turn_is_opening(self):
        """Test single user turn is opening."""
        assert is_opening_turn([Turn.from_user("Topic X")]) is True

    @pytest.mark.unit
    def test_later_turns_are_not_opening(self):
        """Test later turns are not opening."""
        history = [Turn.from_user("Topic X"), Turn(speaker="a", content="Alpha said: hi")]
        assert is_opening_turn(history) is False

    @pytest.mark.unit
    def test_reset_marker_does_not_count(self):
        """Test reset marker does not count."""
        history = [Turn.marker("Discussion cleared."), Turn.from_user("Topic X")]
        assert is_opening_turn(history) is True


class TestMockReplies:
    @pytest.mark.asyncio
    async def test_opening_and_follow_up_lines(self, mock_provider):
        """Test opening and follow up lines."""
        opening = await mock_provider.generate("a", [Turn.from_user("Topic X")])
        follow_up = await mock_provider.generate(
            "a", [Turn.from_user("Topic X"), Turn(speaker="b", content="Bravo said: hey")]
        )

        assert opening == "Alpha opens"
        assert follow_up == "Alpha follows up"

    @pytest.mark.asyncio
    async def test_reply_is_pure_function_of_id_and_opening(self, mock_provider):
        """Test reply is pure function of id and opening."""
        first = await mock_provider.generate("b", [Turn.from_user("Topic X")])
        second = await mock_provider.generate("b", [Turn.from_user("Something else entirely")])

        assert first == second == "Bravo opens"

    @pytest.mark.asyncio
    async def test_unknown_participant_gets_generic_line(self, mock_provider):
        """Test unknown participant gets generic line."""
        reply = await mock_provider.generate("zed", [Turn.from_user("Topic X")])

        assert reply
        assert reply == mock_provider.reply_for("zed", True)

    @pytest.mark.asyncio
    async def test_latency_uses_injected_sleep(self, sleep_recorder):
        """Test latency uses injected sleep."""
        provider = MockResponseProvider(latency=1.5, sleep=sleep_recorder)

        await provider.generate("a", [Turn.from_user("Topic X")])

        assert sleep_recorder.delays == [1.5]

    @pytest.mark.asyncio
    async def test_zero_latency_does_not_sleep(self, sleep_recorder):
        """Test zero latency does not sleep."""
        provider = MockResponseProvider(latency=0, sleep=sleep_recorder)

        await provider.generate("a", [Turn.from_user("Topic X")])

        assert sleep_recorder.delays == []
