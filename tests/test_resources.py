import pytest

from tablero.api_client import API_CLIENT
from tablero.errors import NotFoundError, TransportError
from tablero.resources import CUSTOMERS_CLIENT, ORDERS_CLIENT, REMOTE_LIST, RESOURCE_CLIENT, ListState
from tablero.table_state import PageWindow


def test_list_goes_idle_loading_loaded(api, backend):
    remote = REMOTE_LIST(api, "customers")
    assert remote.state == ListState.IDLE
    assert remote.is_loading

    items = remote.load()

    assert remote.state == ListState.LOADED
    assert not remote.is_loading
    assert remote.total_count == 25
    assert [c["id"] for c in items] == [str(i) for i in range(1, 11)]
    # page_index 0 -> page=1 en el backend
    assert backend.calls[-1]["params"] == {"page": 1, "page_size": 10}


def test_window_change_refetches(api, backend):
    remote = REMOTE_LIST(api, "customers")
    remote.load()
    remote.set_window(PageWindow(2, 10))
    assert remote.state == ListState.IDLE

    items = remote.load()
    assert [c["id"] for c in items] == ["21", "22", "23", "24", "25"]
    assert backend.calls[-1]["params"] == {"page": 3, "page_size": 10}


def test_revisited_window_is_refetched(api, backend):
    remote = REMOTE_LIST(api, "customers")
    remote.load()
    remote.load()
    assert len(backend.calls_for("GET")) == 1

    remote.set_window(PageWindow(1, 10))
    remote.load()
    remote.set_window(PageWindow(0, 10))
    remote.load()
    assert len(backend.calls_for("GET")) == 3


def test_mutate_refreshes_current_window(api, backend):
    remote = REMOTE_LIST(api, "customers")
    remote.load()
    remote.set_window(PageWindow(1, 10))
    remote.load()

    backend.resources["customers"][10]["name"] = "Editado"
    items = remote.mutate()

    assert items[0]["name"] == "Editado"
    assert remote.window == PageWindow(1, 10)
    assert len(backend.calls_for("GET")) == 3


def test_delete_then_other_window_shows_fresh_rows(api, backend):
    remote = REMOTE_LIST(api, "customers")
    remote.load()
    remote.set_window(PageWindow(1, 10))
    remote.load()
    remote.set_window(PageWindow(0, 10))
    remote.load()

    RESOURCE_CLIENT(api, "customers").delete("1")
    remote.mutate()
    remote.set_window(PageWindow(1, 10))
    items = remote.load()

    assert remote.total_count == 24
    assert [c["id"] for c in items][0] == "12"


def test_fetch_failure_sets_error_state(api, backend):
    backend.fail("GET", "orders", status_code=503, message="Mantenimiento")
    remote = REMOTE_LIST(api, "orders")

    assert remote.load() == []
    assert remote.state == ListState.ERROR
    assert remote.error == "Mantenimiento"
    assert remote.total_count == 0


def test_transform_runs_after_fetch(api):
    remote = REMOTE_LIST(api, "orders", transform=lambda orders: [o for o in orders if o["quantity"] > 1])
    remote.load()
    assert [o["id"] for o in remote.items] == ["o3", "o2"]
    assert len(remote.raw_items) == 3
    assert remote.total_count == 3


def test_delete_is_reflected_only_after_refetch(api, backend):
    remote = REMOTE_LIST(api, "customers")
    remote.load()
    client = RESOURCE_CLIENT(api, "customers")

    client.delete("1")
    assert backend.calls[-1]["params"] == {"id": "1"}
    assert remote.items[0]["id"] == "1"

    remote.mutate()
    assert remote.items[0]["id"] == "2"
    assert remote.total_count == 24


def test_update_requires_id(api):
    client = RESOURCE_CLIENT(api, "products")
    with pytest.raises(ValueError):
        client.update({"name": "Sin id"})


def test_update_patches_resource(api, backend):
    client = RESOURCE_CLIENT(api, "products")
    result = client.update({"id": "p2", "price": 3.5})
    assert result["price"] == 3.5
    assert backend.calls[-1]["method"] == "PATCH"
    assert backend.calls[-1]["json"] == {"id": "p2", "price": 3.5}
    assert client.error is None
    assert not client.is_loading


def test_client_keeps_last_error(api):
    client = RESOURCE_CLIENT(api, "products")
    with pytest.raises(NotFoundError):
        client.update({"id": "zzz", "price": 1})
    assert client.error == "No encontrado"
    assert not client.is_loading


def test_client_normalizes_connection_errors(yaml_data, connection_error):
    class Broken:
        def request(self, *args, **kwargs):
            raise connection_error

    client = RESOURCE_CLIENT(API_CLIENT(yaml_data, session=Broken()), "products")
    with pytest.raises(TransportError):
        client.delete("p1")
    assert "servidor caído" in client.error


def test_get_by_id_and_create(api, backend):
    client = CUSTOMERS_CLIENT(api)
    assert client.get_by_id("5")["name"] == "Cliente 05"
    created = client.create({"name": "Nuevo"})
    assert created["name"] == "Nuevo"
    assert backend.resources["customers"][-1]["name"] == "Nuevo"


def test_customer_address_endpoints(api, backend):
    client = CUSTOMERS_CLIENT(api)
    client.update_address({"street": "Reforma 1", "zip": "06600"})
    assert backend.calls[-1]["sub"] == "address"
    assert backend.calls[-1]["json"] == {"address": {"street": "Reforma 1", "zip": "06600"}}

    client.delete_address("a1")
    assert backend.calls[-1]["method"] == "DELETE"
    assert backend.calls[-1]["params"] == {"id": "a1"}


def test_finish_work(api, backend):
    ORDERS_CLIENT(api).finish_work()
    assert backend.finished_work == 1


def test_programming_errors_are_not_reported_as_transport():
    class Broken:
        def patch(self, path, body):
            raise AttributeError("'NoneType' object has no attribute 'get'")

    client = RESOURCE_CLIENT(Broken(), "products")
    with pytest.raises(AttributeError):
        client.update({"id": "p1", "price": 2})
    assert client.error is None
    assert not client.is_loading
