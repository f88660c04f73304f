from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Worker


class WorkerRepository(Protocol):
    """Per-record access to the worker roster.

    Note (DIP): services depend on this interface, not on a concrete database.
    """

    def get_by_id(self, worker_id: str) -> Optional[Worker]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Worker]:
        raise NotImplementedError

    def upsert(self, worker: Worker) -> Worker:
        raise NotImplementedError

    def delete(self, worker_id: str) -> bool:
        raise NotImplementedError
