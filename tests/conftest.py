"""Shared fixtures: in-memory S3 clients and a clean environment."""

from __future__ import annotations

import threading

import pytest

BENCH_ENV_VARS = (
    "CONCURRENCY", "ENDPOINT", "BUCKET", "ACCESSKEY", "SECRETKEY",
    "NODE", "REGION", "S3_SECURE", "S3_VERIFY_SSL", "S3PUTBENCH_BACKEND",
)


class FakeClient:
    """Records uploads instead of talking to S3."""

    def __init__(self, fail_keys: set[str] | None = None) -> None:
        self.fail_keys = fail_keys or set()
        self.uploads: list[tuple[str, bytes, dict[str, str]]] = []
        self.closed = False

    def upload(self, key: str, data: bytes, metadata: dict[str, str]) -> None:
        if key in self.fail_keys:
            raise RuntimeError(f"simulated failure for {key}")
        self.uploads.append((key, data, metadata))

    def close(self) -> None:
        self.closed = True


class FakeClientFactory:
    """Callable handing out one ``FakeClient`` per task."""

    def __init__(self, fail_keys: set[str] | None = None) -> None:
        self.fail_keys = fail_keys or set()
        self.clients: list[FakeClient] = []
        self._lock = threading.Lock()

    def __call__(self, *args: object, **kwargs: object) -> FakeClient:
        client = FakeClient(self.fail_keys)
        with self._lock:
            self.clients.append(client)
        return client

    @property
    def uploads(self) -> list[tuple[str, bytes, dict[str, str]]]:
        return [u for c in self.clients for u in c.uploads]


@pytest.fixture
def fake_factory() -> FakeClientFactory:
    return FakeClientFactory()


@pytest.fixture
def bench_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    """Environment with every benchmark variable cleared."""
    for name in BENCH_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch
