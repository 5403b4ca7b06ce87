"""Deferred-execution variant of the FHIR client.

Every network operation on ``AsyncClient`` returns a ``Task`` instead of a
result. A Task does nothing until it is driven, either by calling it, by
``task.run()``, or by awaiting it inside an asyncio event loop. The
library ships no scheduler; the embedding application decides when tasks
run.

    client = AsyncClient(base_url="https://fhir.example.com/r4")
    task = client.get("Patient", "p-001")
    patient = task()          # blocking round-trip, result cached
    patient is task()         # True: settled tasks never re-run
"""

from __future__ import annotations

import asyncio
import enum
import logging
from typing import Any, Callable, Generator

from .client import Client
from .errors import PreconditionError
from .searchset import SearchSet

logger = logging.getLogger(__name__)


class TaskState(enum.Enum):
    PENDING = "pending"
    RUNNING = "running"
    FINISHED = "finished"
    FAILED = "failed"


class Task:
    """A resumable unit of work wrapping one synchronous client operation.

    States: PENDING -> RUNNING -> FINISHED (result cached) or FAILED
    (exception cached and re-raised on every invocation).
    """

    def __init__(self, fn: Callable[..., Any], *args: Any, **kwargs: Any) -> None:
        self._fn = fn
        self._args = args
        self._kwargs = kwargs
        self._state = TaskState.PENDING
        self._result: Any = None
        self._exception: BaseException | None = None
        self._callbacks: list[Callable[[Task], Any]] = []

    @property
    def state(self) -> TaskState:
        return self._state

    def done(self) -> bool:
        return self._state in (TaskState.FINISHED, TaskState.FAILED)

    def run(self) -> Any:
        """Drive the task to completion and return its result.

        Raises:
            PreconditionError: if called re-entrantly while running.
            Exception: whatever the underlying operation raised.
        """
        if self._state is TaskState.FINISHED:
            return self._result
        if self._state is TaskState.FAILED:
            raise self._exception  # type: ignore[misc]
        if self._state is TaskState.RUNNING:
            raise PreconditionError(f"{self!r} is already running")

        self._state = TaskState.RUNNING
        try:
            self._result = self._fn(*self._args, **self._kwargs)
        except Exception as exc:
            self._exception = exc
            self._state = TaskState.FAILED
            self._settle()
            raise
        self._state = TaskState.FINISHED
        self._settle()
        return self._result

    __call__ = run

    def result(self) -> Any:
        """Return the result, running the task first if it is still pending."""
        return self.run()

    def exception(self) -> BaseException | None:
        """Return the captured exception, or None if the task did not fail."""
        return self._exception

    def add_done_callback(self, fn: Callable[[Task], Any]) -> None:
        """Call ``fn(task)`` once the task settles (immediately if it already has)."""
        if self.done():
            fn(self)
        else:
            self._callbacks.append(fn)

    def __await__(self) -> Generator[Any, None, Any]:
        if self.done():
            return self.run()
        loop = asyncio.get_running_loop()
        # run() blocks on I/O, so it goes to the loop's default executor
        return (yield from loop.run_in_executor(None, self.run).__await__())

    def _settle(self) -> None:
        callbacks, self._callbacks = self._callbacks, []
        for callback in callbacks:
            callback(self)

    def __repr__(self) -> str:
        name = getattr(self._fn, "__qualname__", repr(self._fn))
        return f"<Task {name} {self._state.value}>"


class AsyncSearchSet(SearchSet):
    """SearchSet whose terminal operations return Tasks."""

    def fetch(self) -> Task:  # type: ignore[override]
        return Task(super().fetch)

    def first(self) -> Task:  # type: ignore[override]
        return Task(super().first)


class AsyncClient(Client):
    """Client whose CRUD, search and Google helpers return Tasks.

    Accepts the same arguments as Client; ``mode`` is always ``"async"``.
    """

    mode = "async"

    def create(self, resource):  # type: ignore[override]
        return Task(super().create, resource)

    def save(self, resource):  # type: ignore[override]
        return Task(super().save, resource)

    def get(self, resource_type, resource_id):  # type: ignore[override]
        return Task(super().get, resource_type, resource_id)

    def patch(self, resource_type, resource_id, patch_body):  # type: ignore[override]
        return Task(super().patch, resource_type, resource_id, patch_body)

    def delete(self, resource_type, resource_id):  # type: ignore[override]
        return Task(super().delete, resource_type, resource_id)

    def resources(self, resource_type: str) -> AsyncSearchSet:
        return AsyncSearchSet(self, resource_type)

    def google_search(self, resource_type, params=None):  # type: ignore[override]
        return Task(super().google_search, resource_type, params)

    def google_create_resource(self, resource_type, resource_data):  # type: ignore[override]
        return Task(super().google_create_resource, resource_type, resource_data)

    def google_get_resource(self, resource_type, resource_id):  # type: ignore[override]
        return Task(super().google_get_resource, resource_type, resource_id)

    def google_update_resource(self, resource_type, resource_id, resource_data):  # type: ignore[override]
        return Task(super().google_update_resource, resource_type, resource_id, resource_data)

    def google_delete_resource(self, resource_type, resource_id):  # type: ignore[override]
        return Task(super().google_delete_resource, resource_type, resource_id)
