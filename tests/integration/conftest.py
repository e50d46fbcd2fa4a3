"""Integration test fixtures.

Builds the full application (middleware, rate limits, exception handlers,
lifespan services) from the ``test`` configuration environment. Outbound
HTTP for link previews is mocked with respx.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from fastapi.testclient import TestClient

from recipe_manager.cache.rate_limit import limiter
from recipe_manager.core.config import Settings
from recipe_manager.factory import create_app


if TYPE_CHECKING:
    from collections.abc import Iterator

    from fastapi import FastAPI


USER_ID = "user-42"


@pytest.fixture(autouse=True)
def _reset_rate_limits() -> Iterator[None]:
    limiter.reset()
    yield
    limiter.reset()


@pytest.fixture
def settings() -> Settings:
    return Settings(staging={"max_item_bytes": 1024, "max_total_bytes": 4096})


@pytest.fixture
def app(settings: Settings) -> FastAPI:
    return create_app(settings)


@pytest.fixture
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def auth_headers() -> dict[str, str]:
    return {"X-User-ID": USER_ID}
