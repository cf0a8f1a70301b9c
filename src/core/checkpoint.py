"""Checkpoint Store - Durable workflow run state.

The workflow engine saves a run before every suspension, so a restarted
process can continue from the next step with the saved transcript.
"""

from __future__ import annotations

import asyncio
import os
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path

import aiofiles

from src.models import WorkflowRun, WorkflowStatus
from src.utils.logging import get_logger

logger = get_logger(__name__)

_FINISHED_STATES = (WorkflowStatus.COMPLETED, WorkflowStatus.FAILED)


class CheckpointStore(ABC):
    """Abstract base class for workflow checkpoint storage."""

    @abstractmethod
    async def save(self, run: WorkflowRun) -> None:
        """Persist the current state of a run, replacing any earlier state."""
        pass

    @abstractmethod
    async def load(self, run_id: str) -> WorkflowRun | None:
        """Load a run by ID, or None if unknown."""
        pass

    @abstractmethod
    async def list_runs(self) -> list[WorkflowRun]:
        """List all stored runs ordered by creation time."""
        pass

    async def list_unfinished(self) -> list[WorkflowRun]:
        """List runs that are neither completed nor failed."""
        return [run for run in await self.list_runs() if run.status not in _FINISHED_STATES]


class InMemoryCheckpointStore(CheckpointStore):
    """In-memory checkpoint store.

    Survives suspensions inside one process only. Runs are stored as copies so
    callers cannot mutate the saved state.
    """

    def __init__(self) -> None:
        self._runs: dict[str, WorkflowRun] = {}
        self._lock = asyncio.Lock()

    async def save(self, run: WorkflowRun) -> None:
        async with self._lock:
            self._runs[run.id] = run.model_copy(deep=True)

    async def load(self, run_id: str) -> WorkflowRun | None:
        async with self._lock:
            run = self._runs.get(run_id)
            return run.model_copy(deep=True) if run else None

    async def list_runs(self) -> list[WorkflowRun]:
        async with self._lock:
            runs = [run.model_copy(deep=True) for run in self._runs.values()]
        return sorted(runs, key=lambda r: r.created_at)


class FileCheckpointStore(CheckpointStore):
    """Checkpoint store writing one JSON file per run.

    Writes go to a temporary file that is atomically renamed over the
    previous checkpoint.
    """

    def __init__(self, directory: str | Path) -> None:
        self._directory = Path(directory)
        self._directory.mkdir(parents=True, exist_ok=True)
        self._lock = asyncio.Lock()

    @property
    def directory(self) -> Path:
        """Get the checkpoint directory."""
        return self._directory

    def _path_for(self, run_id: str) -> Path:
        return self._directory / f"{run_id}.json"

    async def save(self, run: WorkflowRun) -> None:
        payload = run.model_dump_json(indent=2)
        async with self._lock:
            temp_fd, temp_path = tempfile.mkstemp(
                dir=str(self._directory), prefix=f".{run.id}.", suffix=".tmp"
            )
            try:
                os.close(temp_fd)
                async with aiofiles.open(temp_path, "w", encoding="utf-8") as f:
                    await f.write(payload)
                os.replace(temp_path, self._path_for(run.id))
            except BaseException:
                try:
                    os.unlink(temp_path)
                except OSError:
                    pass
                raise

    async def load(self, run_id: str) -> WorkflowRun | None:
        path = self._path_for(run_id)
        async with self._lock:
            if not path.is_file():
                return None
            async with aiofiles.open(path, "r", encoding="utf-8") as f:
                payload = await f.read()
        return WorkflowRun.model_validate_json(payload)

    async def list_runs(self) -> list[WorkflowRun]:
        runs = []
        async with self._lock:
            for path in sorted(self._directory.glob("*.json")):
                async with aiofiles.open(path, "r", encoding="utf-8") as f:
                    payload = await f.read()
                try:
                    runs.append(WorkflowRun.model_validate_json(payload))
                except ValueError:
                    logger.warning("Skipping unreadable checkpoint", path=str(path))
        return sorted(runs, key=lambda r: r.created_at)
