"""Shared fixtures: an in-memory management API behind httpx.MockTransport."""

from __future__ import annotations

import itertools
import json
from typing import Any

import httpx
import pytest

from riverspec.api import ApiClient
from riverspec.lifecycle import LifecycleCoordinator
from riverspec.provider import Provider
from riverspec.serializer import NullSerializer

BASE_URL = "https://api.test/api/v1/"
BASE_PATH = "/api/v1/"


class FakeApi:
    """Stores objects by resource path; PUT merges like the real API does."""

    def __init__(self) -> None:
        self.objects: dict[str, dict[str, Any]] = {}
        self.calls: list[tuple[str, str]] = []
        self.failures: dict[tuple[str, str], int] = {}
        self._ids = itertools.count(1)

    def fail(self, method: str, path: str, status: int) -> None:
        self.failures[(method, path)] = status

    def seed(self, path: str, obj: dict[str, Any]) -> None:
        self.objects[path] = obj

    def __call__(self, request: httpx.Request) -> httpx.Response:
        method = request.method
        path = request.url.path.removeprefix(BASE_PATH)
        self.calls.append((method, path))

        if (method, path) in self.failures:
            return httpx.Response(self.failures[(method, path)], json={"detail": "injected failure"})

        if method == "POST":
            obj = json.loads(request.content)
            obj["id"] = str(next(self._ids))
            self.objects[f"{path}{obj['id']}/"] = obj
            return httpx.Response(201, json=obj)

        if path not in self.objects:
            return httpx.Response(404, json={"detail": "Not found."})

        if method == "GET":
            return httpx.Response(200, json=self.objects[path])
        if method == "PUT":
            self.objects[path].update(json.loads(request.content))
            return httpx.Response(200, json=self.objects[path])
        if method == "DELETE":
            del self.objects[path]
            return httpx.Response(204)
        return httpx.Response(405)


@pytest.fixture
def fake_api() -> FakeApi:
    return FakeApi()


@pytest.fixture
def client(fake_api: FakeApi) -> ApiClient:
    return ApiClient("test-token", endpoint=BASE_URL, transport=httpx.MockTransport(fake_api))


@pytest.fixture
def provider(client: ApiClient) -> Provider:
    return Provider(client, LifecycleCoordinator(NullSerializer()))
