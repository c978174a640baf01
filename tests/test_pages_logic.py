import pytest

from tablero.errors import ConfigError, NotFoundError
from tablero.pages_logic import (
    CUSTOMERS_PAGE,
    DELIVERIES_PAGE,
    ORDERS_PAGE,
    awaiting_delivery,
    build_page,
    sort_orders_ascending,
)
from tablero.table_state import PageWindow


def test_build_page_kinds(api, notifier, yaml_data):
    assert isinstance(build_page("customers", api, notifier, yaml_data), CUSTOMERS_PAGE)
    assert isinstance(build_page("orders", api, notifier, yaml_data), ORDERS_PAGE)
    assert isinstance(build_page("deliveries", api, notifier, yaml_data), DELIVERIES_PAGE)
    with pytest.raises(ValueError):
        build_page("invoices", api, notifier, yaml_data)


def test_pagination_change_moves_remote_window(api, notifier, yaml_data):
    page = build_page("customers", api, notifier, yaml_data)
    table = page.build_table()
    table.next()
    assert page.window == PageWindow(1, 10)

    table = page.build_table()
    assert table.current_page == 1
    assert [r["id"] for r in table.data][0] == "11"


def test_edit_flow_refreshes_from_server(api, backend, notifier, yaml_data):
    page = build_page("customers", api, notifier, yaml_data)
    table = page.build_table()

    editor = table.open_row("4")
    editor.set_field("city", "Mérida")
    assert editor.save() is True

    assert backend.calls_for("PATCH")[-1]["json"] == {"id": "4", "city": "Mérida"}
    assert notifier.successes == [("Cliente actualizado con éxito", None)]
    # La tabla vieja no cambia; la siguiente trae los datos del servidor
    assert table.find("4")["city"] == "Monterrey"
    assert page.build_table().find("4")["city"] == "Mérida"


def test_update_failure_notifies_and_keeps_drawer(api, backend, notifier, yaml_data):
    backend.fail("PATCH", "customers", status_code=500, message="Base de datos ocupada")
    page = build_page("customers", api, notifier, yaml_data)
    editor = page.build_table().open_row("4")
    editor.set_field("phone", "55-1234-5678")

    assert editor.save() is False
    assert editor.is_open
    assert notifier.errors == [
        ("Falla al actualizar el cliente, intenta de nuevo más tarde", "Base de datos ocupada")
    ]


def test_delete_flow(api, backend, notifier, yaml_data):
    page = build_page("customers", api, notifier, yaml_data)
    table = page.build_table()
    table.delete(table.find("1"))

    assert backend.calls_for("DELETE")[-1]["params"] == {"id": "1"}
    assert notifier.successes == [("Cliente eliminado con éxito", None)]
    assert page.build_table().find("1") is None
    assert page.remote_list.total_count == 24


def test_delete_missing_record(api, notifier, yaml_data):
    page = build_page("customers", api, notifier, yaml_data)
    with pytest.raises(NotFoundError):
        page.handle_delete({"id": "nope"})
    assert notifier.errors[0][0] == "Falla al eliminar el cliente"


def test_orders_are_sorted_by_number(api, notifier, yaml_data):
    page = build_page("orders", api, notifier, yaml_data)
    table = page.build_table()
    assert [o["order_number"] for o in table.data] == ["1", "2", "3"]


def test_sort_orders_handles_bad_numbers():
    orders = [{"order_number": "x"}, {"order_number": "5"}, {"order_number": None}, {"order_number": "2"}]
    assert [o["order_number"] for o in sort_orders_ascending(orders)] == ["x", None, "2", "5"]


def test_finish_work_notifies_and_reloads(api, backend, notifier, yaml_data):
    page = build_page("orders", api, notifier, yaml_data)
    page.build_table()
    gets = len(backend.calls_for("GET"))

    page.handle_finish_work()

    assert backend.finished_work == 1
    assert notifier.successes[-1][0] == "Expediente finalizado con éxito"
    assert len(backend.calls_for("GET")) == gets + 1


def test_deliveries_show_only_awaiting_orders(api, notifier, yaml_data):
    page = build_page("deliveries", api, notifier, yaml_data)
    table = page.build_table()
    assert [o["id"] for o in table.data] == ["o3", "o2"]
    assert not table.can_delete
    assert table.save_label == "Finalizar entrega"


def test_awaiting_delivery_skips_orders_without_status():
    orders = [{"id": 1, "order_status": None}, {"id": 2, "order_status": {"identifier": 2}}]
    assert awaiting_delivery(2)(orders) == [{"id": 2, "order_status": {"identifier": 2}}]


def test_finish_delivery_sends_status_from_config(api, backend, notifier, yaml_data):
    page = build_page("deliveries", api, notifier, yaml_data)
    editor = page.build_table().open_row("o2")

    assert editor.save() is True
    assert backend.calls_for("PATCH")[-1]["json"] == {
        "id": "o2",
        "is_delivered": True,
        "order_status_id": "status-entregado",
    }
    assert notifier.successes == [("Pedido entregado con éxito", None)]


def test_finish_delivery_without_status_id(api, backend, notifier, yaml_data):
    yaml_data["orders"]["delivered_status_id"] = None
    page = build_page("deliveries", api, notifier, yaml_data)

    with pytest.raises(ConfigError):
        page.handle_update({"id": "o2"}, {})
    assert backend.calls_for("PATCH") == []
    assert notifier.errors[0][0] == "Falla al actualizar el pedido"


def test_list_error_is_exposed(api, backend, notifier, yaml_data):
    backend.fail("GET", "products", status_code=500, message="Sin conexión a la base")
    page = build_page("products", api, notifier, yaml_data)
    table = page.build_table()
    assert page.remote_list.error == "Sin conexión a la base"
    assert table.data == []
