"""
Fixtures del tablero.

FakeBackend reemplaza a requests.Session: guarda los recursos en memoria y
responde como el backend REST (lista paginada, PATCH con id, DELETE ?id=).
"""

from __future__ import annotations

import copy
from urllib.parse import parse_qs, urlsplit

import pytest
import requests

from tablero.api_client import API_CLIENT

BASE_URL = "http://backend.test/api"


class FakeResponse:
    def __init__(self, status_code=200, payload=None, text=None):
        self.status_code = status_code
        self._payload = payload
        if text is None:
            text = "" if payload is None else str(payload)
        self.text = text
        self.content = text.encode("utf-8")

    def json(self):
        if self._payload is None:
            raise ValueError("sin cuerpo JSON")
        return self._payload


class FakeBackend:
    def __init__(self, resources=None):
        self.resources = copy.deepcopy(resources or {})
        self.calls = []
        self.failures = {}
        self.finished_work = 0
        self._next_id = 1000

    def fail(self, method, resource, status_code=500, message="Falla del servidor", exc=None):
        self.failures[(method, resource)] = (status_code, message, exc)

    def calls_for(self, method):
        return [c for c in self.calls if c["method"] == method]

    def request(self, method, url, headers=None, params=None, json=None, timeout=None):
        parts = urlsplit(url)
        segments = [s for s in parts.path.split("/") if s][1:]
        resource = segments[0]
        sub = segments[1] if len(segments) > 1 else None
        query = parse_qs(parts.query, keep_blank_values=True)
        params = dict(params or {})
        self.calls.append(
            {"method": method, "url": url, "resource": resource, "sub": sub,
             "query": query, "params": params, "json": json, "timeout": timeout}
        )

        failure = self.failures.get((method, resource))
        if failure is not None:
            status_code, message, exc = failure
            if exc is not None:
                raise exc
            return FakeResponse(status_code, {"message": message})

        records = self.resources.setdefault(resource, [])

        if method == "GET" and "list" in query:
            page = int(params["page"])
            size = int(params["page_size"])
            start = (page - 1) * size
            return FakeResponse(200, {"count": len(records), resource: copy.deepcopy(records[start:start + size])})

        if method == "GET":
            record = self._find(records, params.get("id"))
            if record is None:
                return FakeResponse(404, {"detail": "No encontrado"})
            return FakeResponse(200, {resource[:-1].capitalize(): copy.deepcopy(record)})

        if method == "POST" and sub == "finish-work":
            self.finished_work += 1
            return FakeResponse(200, {"status": "ok"})

        if method == "POST":
            self._next_id += 1
            record = {"id": str(self._next_id), **(json or {})}
            records.append(record)
            return FakeResponse(201, copy.deepcopy(record))

        if method == "PATCH" and sub == "address":
            return FakeResponse(200, copy.deepcopy(json))

        if method == "PATCH":
            record = self._find(records, (json or {}).get("id"))
            if record is None:
                return FakeResponse(404, {"detail": "No encontrado"})
            record.update(json)
            return FakeResponse(200, copy.deepcopy(record))

        if method == "DELETE":
            if sub == "address":
                return FakeResponse(204)
            record = self._find(records, params.get("id"))
            if record is None:
                return FakeResponse(404, {"detail": "No encontrado"})
            records.remove(record)
            return FakeResponse(204)

        return FakeResponse(405, {"message": f"Método {method} no soportado"})

    @staticmethod
    def _find(records, record_id):
        for record in records:
            if str(record.get("id")) == str(record_id):
                return record
        return None


class RecordingNotifier:
    def __init__(self):
        self.successes = []
        self.errors = []

    def success(self, message, description=None):
        self.successes.append((message, description))

    def error(self, message, description=None):
        self.errors.append((message, description))


def make_customers(n):
    return [
        {
            "id": str(i),
            "name": f"Cliente {i:02d}",
            "email": f"cliente{i}@correo.mx",
            "phone": f"55-0000-{i:04d}",
            "document": f"RFC{i:04d}",
            "city": "CDMX" if i % 2 else "Monterrey",
        }
        for i in range(1, n + 1)
    ]


def make_orders():
    return [
        {"id": "o3", "order_number": "3", "customer_name": "Ana", "quantity": 2, "total": 150.0,
         "delivery_date": "2026-10-20", "order_status": {"identifier": 2, "name": "En ruta"}, "is_delivered": False},
        {"id": "o1", "order_number": "1", "customer_name": "Luis", "quantity": 1, "total": 80.5,
         "delivery_date": "2026-10-19", "order_status": {"identifier": 1, "name": "Preparando"}, "is_delivered": False},
        {"id": "o2", "order_number": "2", "customer_name": "Marta", "quantity": 5, "total": 420.0,
         "delivery_date": None, "order_status": {"identifier": 2, "name": "En ruta"}, "is_delivered": False},
    ]


def make_products():
    return [
        {"id": "p1", "name": "Pan de caja", "packs_per_batch": 20, "price": 45.5, "unit_weight": "500g"},
        {"id": "p2", "name": "Bolillo", "packs_per_batch": 50, "price": 3.0, "unit_weight": "80g"},
    ]


@pytest.fixture
def yaml_data():
    return {
        "api": {"base_url": BASE_URL, "timeout": 5, "headers": {"Content-Type": "application/json"}},
        "tables": {"page_size": 10, "page_size_options": [10, 20, 30, 40, 50]},
        "orders": {"delivered_status_id": "status-entregado", "awaiting_delivery_identifier": 2},
    }


@pytest.fixture
def backend():
    return FakeBackend(
        {
            "customers": make_customers(25),
            "orders": make_orders(),
            "products": make_products(),
        }
    )


@pytest.fixture
def api(yaml_data, backend):
    return API_CLIENT(yaml_data, session=backend)


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def connection_error():
    return requests.ConnectionError("servidor caído")
