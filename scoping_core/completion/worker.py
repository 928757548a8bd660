"""
'completion/worker.py': Background worker that turns submitted answer batches into recommendation messages.

Jobs are queued by the message service after the placeholder message has been returned to the caller.
Each job builds a prompt, calls the completion client under a bounded retry policy and overwrites the
placeholder with either the serialized completion (status=completed) or a failure notice (status=failed).
"""
import asyncio
import logging
from dataclasses import dataclass, field
from typing import List, Optional

from tenacity import AsyncRetrying, stop_after_attempt, wait_exponential, retry_if_exception_type

from .base import BaseCompletionClient
from .prompts import RECOMMENDATION_CONTEXT, FAILED_MESSAGE_TEXT, build_prompt
from ..datastore.base import BaseMessageRepository
from ..entities import ChatCompletion, Message, MessageStatus
from ..exceptions import CompletionError


@dataclass
class CompletionJob:
    """A persisted answer batch awaiting a recommendation."""
    user_id: str
    placeholder_id: str
    messages: List[Message] = field(default_factory=list)


class CompletionWorker:
    """Bounded pool of asyncio consumers draining a queue of completion jobs."""

    def __init__(
            self,
            message_repository: BaseMessageRepository,
            completion_client: BaseCompletionClient,
            context: str = RECOMMENDATION_CONTEXT,
            workers: int = 2,
            retry_attempts: int = 3,
            retry_wait_min: float = 1,
            retry_wait_max: float = 10,
            logger: Optional[logging.Logger] = None,
    ):
        self.message_repository = message_repository
        self.completion_client = completion_client
        self.context = context
        self.workers = max(1, workers)
        self.retry_attempts = max(1, retry_attempts)
        self.retry_wait_min = retry_wait_min
        self.retry_wait_max = retry_wait_max
        self.logger = logger or logging.getLogger("scoping.worker")

        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._queue: Optional[asyncio.Queue] = None
        self._tasks: List[asyncio.Task] = []

    @property
    def running(self) -> bool:
        return bool(self._tasks)

    async def start(self) -> None:
        """Start the consumer tasks on the running event loop."""
        if self.running:
            return
        self._loop = asyncio.get_running_loop()
        self._queue = asyncio.Queue()
        self._tasks = [
            asyncio.create_task(self._consume(index), name=f"completion-worker-{index}")
            for index in range(self.workers)
        ]
        self.logger.info(f"[start] Started {self.workers} completion workers")

    async def stop(self) -> None:
        """Cancel the consumers. Jobs still queued are abandoned."""
        if not self.running:
            return
        abandoned = self._queue.qsize()
        for task in self._tasks:
            task.cancel()
        await asyncio.gather(*self._tasks, return_exceptions=True)
        self._tasks = []
        if abandoned:
            self.logger.warning(f"[stop] Abandoned {abandoned} queued completion jobs")
        self.logger.info("[stop] Completion workers stopped")

    async def join(self) -> None:
        """Wait until every queued job has been processed."""
        if self._queue is not None:
            await self._queue.join()

    def submit(self, job: CompletionJob) -> None:
        """Queue a job. Safe to call from threads other than the worker's event loop."""
        if not self.running:
            self.logger.error(f"[submit] Worker not running; placeholder {job.placeholder_id} stays pending")
            return
        self._loop.call_soon_threadsafe(self._queue.put_nowait, job)
        self.logger.debug(f"[submit] Queued completion for placeholder {job.placeholder_id}")

    async def _consume(self, index: int) -> None:
        while True:
            job = await self._queue.get()
            try:
                await self.process(job)
            except Exception as e:
                self.logger.error(f"[_consume] Worker {index} failed on placeholder {job.placeholder_id}: {e}", exc_info=True)
                await self._mark_failed(job)
            finally:
                self._queue.task_done()

    async def _complete(self, prompt: str) -> ChatCompletion:
        async for attempt in AsyncRetrying(
                stop=stop_after_attempt(self.retry_attempts),
                wait=wait_exponential(multiplier=1, min=self.retry_wait_min, max=self.retry_wait_max),
                retry=retry_if_exception_type(CompletionError),
                reraise=True,
        ):
            with attempt:
                if attempt.retry_state.attempt_number > 1:
                    self.logger.warning(f"[_complete] Retrying completion (attempt {attempt.retry_state.attempt_number})")
                return await self.completion_client.post_prompt(self.context, prompt)

    async def process(self, job: CompletionJob) -> Message:
        """
        Produce the recommendation for one job and overwrite its placeholder.

        Returns:
            Message: The final state written to the placeholder.
        """
        self.logger.debug(f"[process] Prompting the completion API for placeholder {job.placeholder_id}")

        prompt = build_prompt(job.messages, self.logger)
        if not prompt:
            self.logger.error(f"[process] No answered questions for placeholder {job.placeholder_id}")
            return await self._mark_failed(job)

        try:
            completion = await self._complete(prompt)
        except CompletionError as e:
            self.logger.error(f"[process] Completion failed after {self.retry_attempts} attempts: {e}")
            return await self._mark_failed(job)
        except Exception as e:
            self.logger.error(f"[process] Unexpected completion failure for placeholder {job.placeholder_id}: {e}", exc_info=True)
            return await self._mark_failed(job)

        message = Message(
            id=job.placeholder_id,
            user_id=job.user_id,
            message_text=completion.model_dump_json(),
            status=MessageStatus.COMPLETED,
        )
        try:
            return await asyncio.to_thread(self.message_repository.update_message, message)
        except Exception as e:
            self.logger.error(f"[process] Failed to update placeholder {job.placeholder_id}: {e}")
            return await self._mark_failed(job)

    async def _mark_failed(self, job: CompletionJob) -> Message:
        message = Message(
            id=job.placeholder_id,
            user_id=job.user_id,
            message_text=FAILED_MESSAGE_TEXT,
            status=MessageStatus.FAILED,
        )
        try:
            await asyncio.to_thread(self.message_repository.update_message, message)
        except Exception as e:
            self.logger.error(f"[_mark_failed] Could not mark placeholder {job.placeholder_id} as failed: {e}")
        return message
