"""Credential stores.

The client never keeps a credential beyond a single call: every lookup goes
through a store's ``load`` and every fresh credential through ``save``. Back
the store with shared storage (a database, redis, a shared file) to share
tokens across processes and machines; keep the hosts' clocks in sync.

A ``load`` result may be a :class:`~wechat_api.models.Credential`, a mapping
accepted by :meth:`~wechat_api.models.Credential.from_dict`, or ``None``.
"""

from __future__ import annotations

import json
import os
import tempfile
import threading
from pathlib import Path
from typing import Any, Awaitable, Mapping, Protocol, runtime_checkable

from .models import Credential
from .telemetry import get_logger

StoredCredential = Credential | Mapping[str, Any] | None


@runtime_checkable
class CredentialStore(Protocol):
    """Synchronous load/save hooks supplied by the embedding application."""

    def load(self, kind: str) -> StoredCredential:
        """Return the last saved credential for ``kind`` or ``None``."""
        ...

    def save(self, kind: str, credential: Credential) -> None:
        """Persist ``credential`` under ``kind``."""
        ...


@runtime_checkable
class AsyncCredentialStore(Protocol):
    """Coroutine variant of :class:`CredentialStore` for the async client."""

    def load(self, kind: str) -> Awaitable[StoredCredential]:
        ...

    def save(self, kind: str, credential: Credential) -> Awaitable[None]:
        ...


_path_locks: dict[Path, Any] = {}
_path_locks_guard = threading.Lock()


def _lock_for(path: Path) -> Any:
    with _path_locks_guard:
        return _path_locks.setdefault(path.resolve(), threading.RLock())


def _is_production() -> bool:
    return "production" in (
        os.environ.get("PYTHON_ENV", "").lower(),
        os.environ.get("ENV", "").lower(),
    )


class MemoryCredentialStore:
    """Per-process store.

    Not shared between processes: in a cluster or multi-host deployment each
    process fetches its own credential and may invalidate the others'.
    """

    def __init__(self) -> None:
        self._credentials: dict[str, Credential] = {}
        self._warned = False

    def load(self, kind: str) -> Credential | None:
        return self._credentials.get(kind)

    def save(self, kind: str, credential: Credential) -> None:
        if not self._warned and _is_production():
            get_logger().warning(
                "Credential kept in process memory; use a shared store "
                "for multi-process deployments",
                kind=kind,
            )
            self._warned = True
        self._credentials[kind] = credential

    def clear(self) -> None:
        """Forget every stored credential."""
        self._credentials.clear()


class FileCredentialStore:
    """JSON file store, one object keyed by credential kind.

    Suitable for several threads and processes on one host. Writes go through
    a uniquely named temporary file and an atomic rename, so readers never see
    a partial document. Saves to one path from threads of a process are
    serialized; saves from separate processes may still overwrite each
    other's kinds.
    """

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self.path = Path(path)
        self._lock = _lock_for(self.path)

    def _read(self) -> dict[str, Any]:
        try:
            text = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        if not text.strip():
            return {}
        data = json.loads(text)
        return data if isinstance(data, dict) else {}

    def load(self, kind: str) -> Credential | None:
        entry = self._read().get(kind)
        if not entry:
            return None
        return Credential.from_dict(entry)

    def save(self, kind: str, credential: Credential) -> None:
        with self._lock:
            data = self._read()
            data[kind] = credential.to_dict()
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=self.path.parent,
                prefix=f"{self.path.name}.",
                suffix=".tmp",
                delete=False,
            ) as tmp:
                json.dump(data, tmp)
            try:
                os.replace(tmp.name, self.path)
            except OSError:
                os.unlink(tmp.name)
                raise
