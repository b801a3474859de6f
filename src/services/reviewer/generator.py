"""Review generation - one model call per file, or per hunk."""

import asyncio
from collections.abc import Awaitable, Callable

from langchain_core.language_models import BaseChatModel

from src.core.exceptions import LanguageDetectionError, MalformedPatchError
from src.core.language import LanguageDetector
from src.core.llm import response_text
from src.core.logging import get_logger
from src.core.retry import RetryPolicy
from src.services.reviewer.diff_parser import parse_patch
from src.services.reviewer.schemas import ChangedFile, DiffChunk, ReviewRequest, ReviewResult

logger = get_logger("reviewer.generator")


class ReviewGenerator:
    """Builds review requests and sends them to the chat model.

    ``review`` critiques a whole file diff and retries failed model calls.
    ``review_chunks`` critiques every hunk on its own, concurrently, and
    returns results in hunk order. Chunk calls are one-shot unless
    ``chunk_retry`` is set.
    """

    def __init__(
        self,
        llm: BaseChatModel,
        detector: LanguageDetector | None = None,
        max_attempts: int = 3,
        base_delay: float = 1.0,
        jitter_ratio: float = 0.5,
        chunk_retry: bool = False,
        max_concurrency: int = 5,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self.llm = llm
        self.detector = detector or LanguageDetector()
        self.retry_policy = RetryPolicy(
            max_attempts=max_attempts,
            base_delay=base_delay,
            jitter_ratio=jitter_ratio,
            sleep=sleep,
        )
        self.chunk_retry = chunk_retry
        self.max_concurrency = max_concurrency

    def detect_language(self, file: ChangedFile) -> str:
        language = self.detector.detect(file.filename)
        if not language:
            raise LanguageDetectionError(file.filename)
        return language

    async def review(self, file: ChangedFile) -> ReviewResult:
        """Review the whole diff of a file."""
        if file.patch is None:
            raise MalformedPatchError(file.filename, "file has no patch")

        language = self.detect_language(file)
        request = ReviewRequest(language=language, diff_text=file.patch)

        logger.info(f"Reviewing {file.filename} ({language})")
        text = await self.retry_policy.run(lambda: self._complete(request))
        logger.info(f"Review generated for {file.filename}: {len(text)} chars")

        return ReviewResult(filename=file.filename, text=text)

    async def review_chunks(self, file: ChangedFile) -> list[ReviewResult]:
        """Review every hunk of a file separately, results in hunk order."""
        language = self.detect_language(file)
        chunks = parse_patch(file.patch, file.filename)
        if not chunks:
            raise MalformedPatchError(file.filename, "no hunks to review")

        logger.info(f"Reviewing {file.filename} ({language}) in {len(chunks)} chunks")

        semaphore = asyncio.Semaphore(self.max_concurrency)

        async def review_one(index: int, chunk: DiffChunk) -> ReviewResult:
            request = ReviewRequest(language=language, diff_text=chunk.content)
            async with semaphore:
                if self.chunk_retry:
                    text = await self.retry_policy.run(lambda: self._complete(request))
                else:
                    text = await self._complete(request)
            logger.debug(f"Chunk {index + 1}/{len(chunks)} of {file.filename} reviewed")
            return ReviewResult(filename=file.filename, text=text, chunk_index=index)

        tasks = [asyncio.create_task(review_one(i, chunk)) for i, chunk in enumerate(chunks)]
        try:
            # gather keeps input order, whatever order the calls finish in
            return list(await asyncio.gather(*tasks))
        except BaseException:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise

    async def _complete(self, request: ReviewRequest) -> str:
        response = await self.llm.ainvoke(request.to_messages())
        return response_text(response)
