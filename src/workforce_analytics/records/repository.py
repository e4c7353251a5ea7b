from __future__ import annotations

from typing import Any, Iterable, Mapping, Protocol, Sequence

Document = Mapping[str, Any]


class RecordStore(Protocol):
    """Document store holding the four collections (read side only)."""

    def list_users(self) -> Sequence[Document]:
        raise NotImplementedError

    def list_attendance(self) -> Sequence[Document]:
        raise NotImplementedError

    def list_leaves(self) -> Sequence[Document]:
        raise NotImplementedError

    def list_tasks(self) -> Sequence[Document]:
        raise NotImplementedError


class InMemoryRecordStore:
    """Store whose collections are replaced wholesale on every update."""

    def __init__(
        self,
        *,
        users: Iterable[Document] = (),
        attendance: Iterable[Document] = (),
        leaves: Iterable[Document] = (),
        tasks: Iterable[Document] = (),
    ):
        self._users = tuple(users)
        self._attendance = tuple(attendance)
        self._leaves = tuple(leaves)
        self._tasks = tuple(tasks)

    def replace(
        self,
        *,
        users: Iterable[Document] | None = None,
        attendance: Iterable[Document] | None = None,
        leaves: Iterable[Document] | None = None,
        tasks: Iterable[Document] | None = None,
    ) -> None:
        if users is not None:
            self._users = tuple(users)
        if attendance is not None:
            self._attendance = tuple(attendance)
        if leaves is not None:
            self._leaves = tuple(leaves)
        if tasks is not None:
            self._tasks = tuple(tasks)

    def list_users(self) -> Sequence[Document]:
        return self._users

    def list_attendance(self) -> Sequence[Document]:
        return self._attendance

    def list_leaves(self) -> Sequence[Document]:
        return self._leaves

    def list_tasks(self) -> Sequence[Document]:
        return self._tasks
