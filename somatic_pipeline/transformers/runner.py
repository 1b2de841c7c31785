"""
Worker pool for running transformers concurrently.

Each transformer is an independent unit of work with its own dedup state and
staging file. A run's deadline is measured from the moment a worker picks it
up, so time spent queued behind other runs does not count against it. A run
that misses its deadline is cancelled, which takes effect before its next
record read.
"""

import time
from collections.abc import Iterable
from concurrent.futures import FIRST_COMPLETED, CancelledError, Future, ThreadPoolExecutor
from concurrent.futures import wait as wait_futures
from dataclasses import dataclass
from pathlib import Path

from loguru import logger

from somatic_pipeline.config import settings
from somatic_pipeline.errors import RunCancelled
from somatic_pipeline.transformers.base import BaseTransformer, TransformResult

STATUS_SUCCESS = "success"
STATUS_FAILED = "failed"
STATUS_TIMEOUT = "timeout"
STATUS_CANCELLED = "cancelled"

# Upper bound on how late a missed deadline is noticed
POLL_INTERVAL = 0.05


@dataclass
class RunOutcome:
    """How one submitted transformer finished."""
    input_path: Path | None
    status: str
    staging_file: Path | None = None
    error: str | None = None
    result: TransformResult | None = None

    @property
    def success(self) -> bool:
        return self.status == STATUS_SUCCESS


class _Run:
    """A submitted transformer plus the monotonic time a worker started it."""

    def __init__(self, transformer: BaseTransformer):
        self.transformer = transformer
        self.started_at: float | None = None
        self.future: Future | None = None

    def __call__(self) -> Path:
        self.started_at = time.monotonic()
        return self.transformer()

    def overdue(self, now: float, timeout: float) -> bool:
        return self.started_at is not None and now - self.started_at >= timeout


class TransformerPool:
    """
    Fixed-size pool of transformer runs.

    Usage:
        with TransformerPool(max_workers=3) as pool:
            outcomes = pool.run_all(transformers, timeout=90)
    """

    def __init__(self, max_workers: int | None = None):
        self.max_workers = max_workers or settings.pipeline.max_workers
        self._executor = ThreadPoolExecutor(
            max_workers=self.max_workers,
            thread_name_prefix="transformer",
        )

    def __enter__(self) -> "TransformerPool":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.shutdown()

    def submit(self, transformer: BaseTransformer) -> Future:
        """Submit a transformer; the future resolves to its input path."""
        return self._executor.submit(transformer)

    def run_all(self, transformers: Iterable[BaseTransformer], timeout: float | None = None) -> list[RunOutcome]:
        """
        Run every transformer and collect their outcomes in submission order.

        Args:
            transformers: Transformers with input paths already set
            timeout: Wall-clock seconds each run may take once started
                     (defaults to settings)

        Returns:
            One RunOutcome per transformer
        """
        timeout = timeout or settings.pipeline.run_timeout
        runs = [_Run(transformer) for transformer in transformers]
        for run in runs:
            run.future = self._executor.submit(run)

        outcomes: dict[int, RunOutcome] = {}
        pending = set(range(len(runs)))
        while pending:
            now = time.monotonic()
            for index in sorted(pending):
                run = runs[index]
                if run.future.done():
                    outcomes[index] = self._finished(run)
                elif run.overdue(now, timeout):
                    outcomes[index] = self._timed_out(run, timeout)
                else:
                    continue
                pending.discard(index)

            if pending:
                wait_futures(
                    [runs[index].future for index in pending],
                    timeout=POLL_INTERVAL,
                    return_when=FIRST_COMPLETED,
                )

        return [outcomes[index] for index in range(len(runs))]

    def _finished(self, run: _Run) -> RunOutcome:
        transformer = run.transformer
        input_path = transformer.input_path
        try:
            path = run.future.result()
            logger.info(f"Path {path}")
            return RunOutcome(
                input_path=path,
                status=STATUS_SUCCESS,
                staging_file=transformer.staging_file,
                result=transformer.result,
            )
        except (CancelledError, RunCancelled) as e:
            return RunOutcome(
                input_path=input_path,
                status=STATUS_CANCELLED,
                error=str(e) or "Cancelled",
                result=transformer.result,
            )
        except Exception as e:
            logger.error(f"Transformation of {input_path} failed: {e}")
            return RunOutcome(
                input_path=input_path,
                status=STATUS_FAILED,
                error=str(e),
                result=transformer.result,
            )

    def _timed_out(self, run: _Run, timeout: float) -> RunOutcome:
        transformer = run.transformer
        logger.error(f"Transformation of {transformer.input_path} exceeded {timeout}s; cancelling")
        run.future.cancel()
        transformer.cancel()
        return RunOutcome(
            input_path=transformer.input_path,
            status=STATUS_TIMEOUT,
            error=f"No result within {timeout}s",
            result=transformer.result,
        )

    def shutdown(self, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait)
        logger.info("service shutdown")
