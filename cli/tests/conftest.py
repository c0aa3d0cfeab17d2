from __future__ import annotations

import pytest
from rendevo_client import ClientConfig, RendevoClient, RequestExecutor

from factories import BASE_URL, MockAPI, RecordingSleep


@pytest.fixture
def api() -> MockAPI:
    return MockAPI()


@pytest.fixture
def recorded_sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def executor_factory(api, recorded_sleep):
    def _make(**cfg_kwargs) -> RequestExecutor:
        cfg_kwargs.setdefault("base_url", BASE_URL)
        cfg_kwargs.setdefault("retries", "disabled")
        return RequestExecutor(ClientConfig(**cfg_kwargs), transport=api.transport, sleep=recorded_sleep)

    return _make


@pytest.fixture
def client_factory(api, recorded_sleep):
    def _make(**cfg_kwargs) -> RendevoClient:
        cfg_kwargs.setdefault("base_url", BASE_URL)
        cfg_kwargs.setdefault("retries", "disabled")
        return RendevoClient(ClientConfig(**cfg_kwargs), transport=api.transport, sleep=recorded_sleep)

    return _make
