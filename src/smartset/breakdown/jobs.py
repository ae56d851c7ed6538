"""Background breakdown jobs and the keyed store that tracks them.

A job is started, returns its id at once, and is then polled until it reaches
``done`` or ``error``. Jobs live in a :class:`JobStore` owned by whoever runs
them (the API app state or a CLI command); finished jobs expire after a
TTL.
"""

from __future__ import annotations

import asyncio
import threading
import time
from collections.abc import Callable
from typing import Any

from smartset.breakdown.extractor import (
    build_breakdown_request,
    check_pdf_payload,
    estimate_input_bytes,
    parse_breakdown,
    summarize_breakdown,
)
from smartset.config import get_logger
from smartset.exceptions import JobNotFoundError, LLMCredentialError, SmartSetError
from smartset.llm import LLMClient
from smartset.models import AnalysisJob, JobStatus

logger = get_logger(__name__)

STEP_QUEUED = "File received, starting analysis"
STEP_RUNNING = "The model is analyzing the document"
STEP_PARSING = "Processing the extracted results"
STEP_DONE = "Analysis completed"
STEP_ERROR = "AI analysis failed"


class JobStore:
    """Thread-safe keyed store of analysis jobs with TTL eviction."""

    def __init__(
        self,
        ttl_seconds: float = 3600,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """Initialize job store.

        Args:
            ttl_seconds: Seconds after the last update before a finished job
                is evicted
            clock: Time source, replaceable in tests
        """
        self.ttl_seconds = ttl_seconds
        self.clock = clock
        self._jobs: dict[str, AnalysisJob] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._jobs)

    def create(self, input_bytes: int | None = None) -> AnalysisJob:
        """Register a new queued job."""
        now = self.clock()
        job = AnalysisJob(
            step=STEP_QUEUED,
            input_bytes=input_bytes,
            created_at=now,
            updated_at=now,
        )
        with self._lock:
            self._evict_expired(now)
            self._jobs[job.id] = job
            return job.model_copy(deep=True)

    def get(self, job_id: str) -> AnalysisJob:
        """Return a snapshot of a job.

        Raises:
            JobNotFoundError: If the id is unknown or the job expired
        """
        with self._lock:
            self._evict_expired(self.clock())
            job = self._jobs.get(job_id)
            if job is None:
                raise JobNotFoundError(job_id)
            return job.model_copy(deep=True)

    def update(self, job_id: str, **changes: Any) -> AnalysisJob:
        """Apply field changes to a job and refresh its timestamp."""
        with self._lock:
            job = self._jobs.get(job_id)
            if job is None:
                raise JobNotFoundError(job_id)
            for key, value in changes.items():
                setattr(job, key, value)
            job.updated_at = self.clock()
            return job.model_copy(deep=True)

    def evict_expired(self) -> int:
        """Drop finished jobs idle for longer than the TTL.

        Queued and running jobs are kept so their runner can still record
        the outcome.

        Returns:
            Number of jobs removed
        """
        with self._lock:
            return self._evict_expired(self.clock())

    def _evict_expired(self, now: float) -> int:
        expired = [
            job_id
            for job_id, job in self._jobs.items()
            if job.status.is_terminal and now - job.updated_at > self.ttl_seconds
        ]
        for job_id in expired:
            del self._jobs[job_id]
        if expired:
            logger.debug("Evicted expired jobs", count=len(expired))
        return len(expired)


class BreakdownJobRunner:
    """Runs screenplay breakdowns as background tasks."""

    def __init__(self, jobs: JobStore, client: LLMClient) -> None:
        """Initialize job runner.

        Args:
            jobs: Store the job state is written to
            client: LLM client performing the extraction
        """
        self.jobs = jobs
        self.client = client
        self._tasks: set[asyncio.Task[None]] = set()

    async def start(self, pdf_base64: str) -> AnalysisJob:
        """Queue a breakdown and return immediately.

        Must be awaited inside a running event loop; the analysis continues
        as a task on that loop.

        Raises:
            ValidationError: If the payload is missing
            LLMCredentialError: If no API key is configured
        """
        check_pdf_payload(pdf_base64)
        if not await self.client.has_credentials():
            raise LLMCredentialError()

        job = self.jobs.create(input_bytes=estimate_input_bytes(pdf_base64))
        task = asyncio.create_task(self.run(job.id, pdf_base64))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        logger.info(
            "Queued breakdown job", job_id=job.id, input_bytes=job.input_bytes
        )
        return job

    async def run(self, job_id: str, pdf_base64: str) -> None:
        """Execute one job, recording every state change in the store.

        Failures end the job in ``error`` with the message recorded; they are
        reported through the job rather than raised.
        """
        self.jobs.update(
            job_id,
            status=JobStatus.RUNNING,
            step=STEP_RUNNING,
            model_id=self.client.primary_model,
        )
        try:
            response = await self.client.generate(build_breakdown_request(pdf_base64))
            self.jobs.update(
                job_id,
                status=JobStatus.PARSING,
                step=STEP_PARSING,
                model_id=response.model,
                raw_preview=response.text[: self.client.preview_chars],
            )
            result = parse_breakdown(
                response.text, response.model, self.client.preview_chars
            )
        except SmartSetError as e:
            logger.warning("Breakdown job failed", job_id=job_id, error=e.message)
            self.jobs.update(
                job_id, status=JobStatus.ERROR, step=STEP_ERROR, error=e.message
            )
            return
        except Exception as e:
            logger.error(
                "Breakdown job crashed",
                job_id=job_id,
                error=str(e),
                error_type=type(e).__name__,
            )
            self.jobs.update(
                job_id, status=JobStatus.ERROR, step=STEP_ERROR, error=str(e)
            )
            return

        self.jobs.update(
            job_id,
            status=JobStatus.DONE,
            step=STEP_DONE,
            result=result,
            result_summary=summarize_breakdown(result),
        )
        logger.info("Breakdown job done", job_id=job_id, scenes=len(result.scenes))

    def status(self, job_id: str) -> AnalysisJob:
        """Return the current state of a job."""
        return self.jobs.get(job_id)

    async def wait(
        self,
        job_id: str,
        poll_interval: float = 2.0,
        on_poll: Callable[[AnalysisJob], None] | None = None,
    ) -> AnalysisJob:
        """Poll a job at a fixed interval until it reaches a terminal state."""
        while True:
            job = self.jobs.get(job_id)
            if on_poll is not None:
                on_poll(job)
            if job.status.is_terminal:
                return job
            await asyncio.sleep(poll_interval)
