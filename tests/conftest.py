from __future__ import annotations

import copy
from types import SimpleNamespace
from typing import Any

import pytest
from elasticsearch import BadRequestError, ConnectionError as ESConnectionError
from fastapi.testclient import TestClient

from autocomplete_api.config.settings import Settings
from autocomplete_api.main import create_app
from autocomplete_api.services.container import ServiceContainer
from autocomplete_api.services.elasticsearch_service import ElasticsearchService


def _response(body: Any = None, status: int = 200) -> SimpleNamespace:
    return SimpleNamespace(body=body, meta=SimpleNamespace(status=status))


def _merge(target: dict, source: dict) -> None:
    for key, value in source.items():
        if isinstance(value, dict) and isinstance(target.get(key), dict):
            _merge(target[key], value)
        else:
            target[key] = copy.deepcopy(value)


class FakeIndices:
    def __init__(self, engine: "FakeElasticsearch") -> None:
        self._engine = engine

    async def exists(self, index):
        self._engine.calls.append(("exists", index))
        if self._engine.fail_on == "exists":
            raise ESConnectionError("connection refused")
        if self._engine.exists_status is not None:
            return _response(status=self._engine.exists_status)
        return _response(status=200 if index in self._engine.index_data else 404)

    async def create(self, index, settings=None, mappings=None):
        self._engine.calls.append(("create", index))
        if self._engine.fail_on == "create":
            raise ESConnectionError("connection refused")
        if index in self._engine.index_data or self._engine.create_race:
            raise BadRequestError(
                "resource_already_exists_exception",
                meta=SimpleNamespace(status=400),
                body={"error": {"type": "resource_already_exists_exception", "root_cause": []}},
            )
        self._engine.index_data[index] = {"settings": settings, "mappings": mappings, "docs": {}}
        return _response({"acknowledged": True, "index": index})


class FakeElasticsearch:
    """In-memory stand-in for AsyncElasticsearch covering the calls the services make."""

    def __init__(self) -> None:
        self.indices = FakeIndices(self)
        self.index_data: dict[str, dict] = {}
        self.calls: list[tuple] = []
        self.fail_on: str | None = None
        self.exists_status: int | None = None
        self.create_race = False
        self.search_body: Any = None
        self.closed = False

    def docs(self, index: str = "autocomplete") -> dict[str, dict]:
        return self.index_data[index]["docs"]

    async def update(self, index, id, doc, doc_as_upsert=False):
        self.calls.append(("update", index, id))
        if self.fail_on == "update":
            raise ESConnectionError("connection refused")
        docs = self.index_data[index]["docs"]
        if id in docs:
            _merge(docs[id], doc)
        elif doc_as_upsert:
            docs[id] = copy.deepcopy(doc)
        return _response({"_id": id, "result": "updated"})

    async def search(self, index, suggest):
        self.calls.append(("search", index))
        if self.fail_on == "search":
            raise ESConnectionError("connection refused")
        if self.search_body is not None:
            return _response(self.search_body)

        result = {}
        for name, spec in suggest.items():
            prefix = spec["prefix"].lower()
            completion = spec["completion"]
            field = completion["field"]
            matches = []
            for doc in self.index_data[index]["docs"].values():
                entry = doc[field]
                for text in entry["input"]:
                    if text.lower().startswith(prefix):
                        matches.append((entry["weight"], text))
            matches.sort(key=lambda item: -item[0])

            seen = set()
            options = []
            for weight, text in matches:
                if completion.get("skip_duplicates") and text in seen:
                    continue
                seen.add(text)
                options.append({"text": text, "_index": index, "_score": float(weight)})
            result[name] = [{"text": spec["prefix"], "offset": 0, "length": len(prefix), "options": options[: completion["size"]]}]
        return _response({"took": 1, "timed_out": False, "suggest": result})

    async def get(self, index, id):
        self.calls.append(("get", index, id))
        if self.fail_on == "get":
            raise ESConnectionError("connection refused")
        docs = self.index_data[index]["docs"]
        if id not in docs:
            return _response({"_index": index, "_id": id, "found": False})
        return _response({"_index": index, "_id": id, "found": True, "_source": copy.deepcopy(docs[id])})

    async def count(self, index):
        self.calls.append(("count", index))
        if self.fail_on == "count":
            raise ESConnectionError("connection refused")
        return _response({"count": len(self.index_data[index]["docs"])})

    async def close(self):
        self.closed = True


@pytest.fixture()
def settings(monkeypatch) -> Settings:
    for name in (
        "ELASTICSEARCH_URL",
        "ELASTICSEARCH_USERNAME",
        "ELASTICSEARCH_PASSWORD",
        "ELASTICSEARCH_INDEX",
        "PORT",
    ):
        monkeypatch.delenv(name, raising=False)
    return Settings()


@pytest.fixture()
def fake_es() -> FakeElasticsearch:
    return FakeElasticsearch()


@pytest.fixture()
def es_service(settings, fake_es) -> ElasticsearchService:
    return ElasticsearchService(settings, client=fake_es)


@pytest.fixture()
def container(settings, fake_es) -> ServiceContainer:
    return ServiceContainer(settings, client=fake_es)


@pytest.fixture()
def client(container):
    app = create_app(container=container)
    with TestClient(app) as test_client:
        yield test_client
