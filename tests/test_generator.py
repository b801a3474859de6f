"""Tests for the review generator."""

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest
from langchain_core.messages import AIMessage

from src.core.exceptions import LanguageDetectionError, MalformedPatchError
from src.core.language import LanguageDetector
from src.services.reviewer.schemas import ChangedFile
from tests.fakes import FOO_JAVA_PATCH


def human_text(call) -> str:
    messages = call.args[0]
    return messages[-1].content


class TestReview:
    """Tests for ReviewGenerator.review."""

    @pytest.mark.asyncio
    async def test_returns_model_text(self, llm, make_generator):
        generator = make_generator(llm)

        result = await generator.review(ChangedFile(filename="Foo.java", patch=FOO_JAVA_PATCH))

        assert result.filename == "Foo.java"
        assert result.text == "Looks solid."
        assert result.chunk_index is None

    @pytest.mark.asyncio
    async def test_one_request_with_whole_patch(self, llm, make_generator):
        generator = make_generator(llm)

        await generator.review(ChangedFile(filename="Foo.java", patch=FOO_JAVA_PATCH))

        assert llm.ainvoke.await_count == 1
        prompt = human_text(llm.ainvoke.await_args)
        assert FOO_JAVA_PATCH in prompt
        assert "is Java." in prompt

    @pytest.mark.asyncio
    async def test_succeeds_on_third_attempt(self, make_generator):
        """Two transient failures, then the third attempt's text is used."""
        llm = MagicMock()
        llm.ainvoke = AsyncMock(
            side_effect=[
                TimeoutError("timed out"),
                ConnectionError("429 rate limited"),
                AIMessage(content="third time lucky"),
            ]
        )
        generator = make_generator(llm, max_attempts=3)

        result = await generator.review(ChangedFile(filename="Foo.java", patch=FOO_JAVA_PATCH))

        assert result.text == "third time lucky"
        assert llm.ainvoke.await_count == 3

    @pytest.mark.asyncio
    async def test_exhausted_retries_propagate_last_error(self, make_generator):
        last = ConnectionError("503 third")
        llm = MagicMock()
        llm.ainvoke = AsyncMock(
            side_effect=[ConnectionError("503 first"), ConnectionError("503 second"), last]
        )
        generator = make_generator(llm, max_attempts=3)

        with pytest.raises(ConnectionError) as exc_info:
            await generator.review(ChangedFile(filename="Foo.java", patch=FOO_JAVA_PATCH))

        assert exc_info.value is last

    @pytest.mark.asyncio
    async def test_content_blocks_are_flattened(self, make_generator):
        llm = MagicMock()
        llm.ainvoke = AsyncMock(
            return_value=AIMessage(content=[{"type": "text", "text": "part one, "}, "part two"])
        )
        generator = make_generator(llm)

        result = await generator.review(ChangedFile(filename="a.py", patch="@@ -1 +1 @@\n-a\n+b"))

        assert result.text == "part one, part two"

    @pytest.mark.asyncio
    async def test_empty_language_is_a_detection_failure(self, llm, make_generator):
        detector = MagicMock(spec=LanguageDetector)
        detector.detect.return_value = ""
        generator = make_generator(llm, detector=detector)

        with pytest.raises(LanguageDetectionError):
            await generator.review(ChangedFile(filename="Foo.java", patch=FOO_JAVA_PATCH))

        llm.ainvoke.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_missing_patch_is_rejected(self, llm, make_generator):
        generator = make_generator(llm)

        with pytest.raises(MalformedPatchError):
            await generator.review(ChangedFile(filename="logo.png", patch=None))


class TestReviewChunks:
    """Tests for ReviewGenerator.review_chunks."""

    @pytest.mark.asyncio
    async def test_one_request_per_chunk(self, llm, make_generator):
        generator = make_generator(llm)

        results = await generator.review_chunks(ChangedFile(filename="Foo.java", patch=FOO_JAVA_PATCH))

        assert len(results) == 2
        assert llm.ainvoke.await_count == 2
        prompts = [human_text(call) for call in llm.ainvoke.await_args_list]
        assert sum("@@ -1,3 +1,4 @@" in p for p in prompts) == 1
        assert sum("@@ -10,2 +11,3 @@" in p for p in prompts) == 1
        # no request carries both hunks
        assert not any("@@ -1,3 +1,4 @@" in p and "@@ -10,2 +11,3 @@" in p for p in prompts)

    @pytest.mark.asyncio
    async def test_results_keep_chunk_order(self, make_generator):
        """The first chunk finishes last but is still returned first."""

        async def slow_first_chunk(messages):
            prompt = messages[-1].content
            if "@@ -1,3 +1,4 @@" in prompt:
                await asyncio.sleep(0.05)
                return AIMessage(content="review of chunk 1")
            return AIMessage(content="review of chunk 2")

        llm = MagicMock()
        llm.ainvoke = AsyncMock(side_effect=slow_first_chunk)
        generator = make_generator(llm)

        results = await generator.review_chunks(ChangedFile(filename="Foo.java", patch=FOO_JAVA_PATCH))

        assert [r.text for r in results] == ["review of chunk 1", "review of chunk 2"]
        assert [r.chunk_index for r in results] == [0, 1]

    @pytest.mark.asyncio
    async def test_chunks_are_one_shot_by_default(self, make_generator):
        llm = MagicMock()
        llm.ainvoke = AsyncMock(side_effect=ConnectionError("boom"))
        generator = make_generator(llm)

        with pytest.raises(ConnectionError):
            await generator.review_chunks(ChangedFile(filename="Foo.java", patch=FOO_JAVA_PATCH))

        # at most one call per chunk
        assert llm.ainvoke.await_count <= 2

    @pytest.mark.asyncio
    async def test_failed_chunk_cancels_the_others(self, make_generator):
        """Sibling chunk calls still in flight are cancelled, not left running."""
        finished = []
        cancelled = []

        async def first_chunk_fails(messages):
            prompt = messages[-1].content
            if "@@ -1,3 +1,4 @@" in prompt:
                raise ConnectionError("503")
            try:
                await asyncio.sleep(0.05)
            except asyncio.CancelledError:
                cancelled.append("chunk 2")
                raise
            finished.append("chunk 2")
            return AIMessage(content="review of chunk 2")

        llm = MagicMock()
        llm.ainvoke = AsyncMock(side_effect=first_chunk_fails)
        generator = make_generator(llm)

        with pytest.raises(ConnectionError):
            await generator.review_chunks(ChangedFile(filename="Foo.java", patch=FOO_JAVA_PATCH))

        await asyncio.sleep(0.1)
        assert finished == []
        assert cancelled == ["chunk 2"]

    @pytest.mark.asyncio
    async def test_chunk_retry_when_enabled(self, make_generator):
        llm = MagicMock()
        llm.ainvoke = AsyncMock(
            side_effect=[ConnectionError("boom"), AIMessage(content="ok")]
        )
        generator = make_generator(llm, chunk_retry=True)

        results = await generator.review_chunks(
            ChangedFile(filename="a.py", patch="@@ -1 +1 @@\n-a\n+b")
        )

        assert [r.text for r in results] == ["ok"]
        assert llm.ainvoke.await_count == 2

    @pytest.mark.asyncio
    @pytest.mark.parametrize("patch", [None, ""])
    async def test_nothing_to_review_fails(self, llm, make_generator, patch):
        generator = make_generator(llm)

        with pytest.raises(MalformedPatchError):
            await generator.review_chunks(ChangedFile(filename="Foo.java", patch=patch))

        llm.ainvoke.assert_not_awaited()
