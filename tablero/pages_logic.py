"""
Manejadores de cada página: traducen las intenciones de la tabla en llamadas
al backend y en notificaciones.
"""
from tablero import catalog
from tablero.config import get_setting
from tablero.data_table import DATA_TABLE
from tablero.errors import ConfigError, TableroError
from tablero.resources import CUSTOMERS_CLIENT, ORDERS_CLIENT, REMOTE_LIST, RESOURCE_CLIENT


class RESOURCE_PAGE:
    title = ""
    columns = []
    schema = None
    update_model = None
    messages = {
        "updated": "Registro actualizado con éxito",
        "update_failed": "Falla al actualizar, intenta de nuevo más tarde",
        "deleted": "Registro eliminado con éxito",
        "delete_failed": "Falla al eliminar el registro",
    }
    allow_delete = True
    save_label = "Guardar cambios"
    saving_label = "Guardando..."

    def __init__(self, remote_list, client, notifier, yaml_data=None):
        self.remote_list = remote_list
        self.client = client
        self.notifier = notifier
        self.data = yaml_data or {}

    # ================== PAGINACIÓN ==================
    @property
    def window(self):
        return self.remote_list.window

    def handle_pagination_change(self, window):
        self.remote_list.set_window(window)

    # ================== MUTACIONES ==================
    def _notify_failure(self, key, error):
        message = error.message if isinstance(error, TableroError) else str(error)
        self.notifier.error(self.messages[key], description=message)

    def build_update_payload(self, original, updated):
        return {"id": original["id"], **updated}

    def handle_update(self, original, updated):
        try:
            payload = self.build_update_payload(original, updated)
            result = self.client.update(payload)
        except TableroError as e:
            self._notify_failure("update_failed", e)
            raise
        self.notifier.success(self.messages["updated"])
        return result

    def handle_delete(self, item):
        try:
            result = self.client.delete(item["id"])
        except TableroError as e:
            self._notify_failure("delete_failed", e)
            raise
        self.notifier.success(self.messages["deleted"])
        return result

    # ================== TABLA ==================
    def build_table(self, view_state=None, page_size_options=None, logger=None):
        self.remote_list.load()
        options = page_size_options or get_setting(self.data, "tables.page_size_options", [10, 20, 30, 40, 50])
        return DATA_TABLE(
            data=self.remote_list.items,
            columns=self.columns,
            total_count=self.remote_list.total_count,
            page_size=self.window.page_size,
            current_page=self.window.page_index,
            on_pagination_change=self.handle_pagination_change,
            on_update=self.handle_update,
            on_delete=self.handle_delete if self.allow_delete else None,
            mutate=self.remote_list.mutate,
            schema=self.schema,
            update_model=self.update_model,
            title=self.title,
            view_state=view_state,
            page_size_options=options,
            save_label=self.save_label,
            saving_label=self.saving_label,
            submit_unchanged=not len(self.schema),
            logger=logger,
        )


class CUSTOMERS_PAGE(RESOURCE_PAGE):
    title = "Clientes"
    columns = catalog.CUSTOMER_COLUMNS
    schema = catalog.CUSTOMER_SCHEMA
    update_model = catalog.UPDATE_MODELS["customers"]
    messages = {
        "updated": "Cliente actualizado con éxito",
        "update_failed": "Falla al actualizar el cliente, intenta de nuevo más tarde",
        "deleted": "Cliente eliminado con éxito",
        "delete_failed": "Falla al eliminar el cliente",
    }


def order_number_key(order):
    try:
        return float(order.get("order_number") or 0)
    except (TypeError, ValueError):
        return 0


def sort_orders_ascending(orders):
    return sorted(orders, key=order_number_key)


class ORDERS_PAGE(RESOURCE_PAGE):
    title = "Pedidos"
    columns = catalog.ORDER_COLUMNS
    schema = catalog.ORDER_SCHEMA
    update_model = catalog.UPDATE_MODELS["orders"]
    messages = {
        "updated": "Pedido actualizado con éxito",
        "update_failed": "Falla al actualizar el pedido",
        "deleted": "Pedido eliminado con éxito",
        "delete_failed": "Falla al eliminar el pedido",
        "finished": "Expediente finalizado con éxito",
        "finish_failed": "Falla al finalizar el expediente",
    }

    def handle_finish_work(self):
        """Manda todos los pedidos del día a logística y recarga la ventana actual."""
        try:
            result = self.client.finish_work()
        except TableroError as e:
            self._notify_failure("finish_failed", e)
            raise
        self.notifier.success(
            self.messages["finished"],
            description="Todos los pedidos fueron enviados a logística",
        )
        self.remote_list.mutate()
        return result


def awaiting_delivery(identifier):
    def _filter(orders):
        return [
            o for o in orders
            if isinstance(o.get("order_status"), dict) and o["order_status"].get("identifier") == identifier
        ]

    return _filter


class DELIVERIES_PAGE(RESOURCE_PAGE):
    title = "Pedidos esperando entrega"
    columns = catalog.ORDER_COLUMNS
    schema = catalog.DELIVERY_SCHEMA
    update_model = catalog.UPDATE_MODELS["orders"]
    allow_delete = False
    save_label = "Finalizar entrega"
    saving_label = "Finalizando..."
    messages = {
        "updated": "Pedido entregado con éxito",
        "update_failed": "Falla al actualizar el pedido",
    }

    def build_update_payload(self, original, updated):
        # El backend decide la transición; aquí solo se marca como entregado
        status_id = get_setting(self.data, "orders.delivered_status_id")
        if not status_id:
            raise ConfigError("Falta 'orders.delivered_status_id' en la configuración")
        return {"id": original["id"], "is_delivered": True, "order_status_id": status_id}


class PRODUCTS_PAGE(RESOURCE_PAGE):
    title = "Productos"
    columns = catalog.PRODUCT_COLUMNS
    schema = catalog.PRODUCT_SCHEMA
    update_model = catalog.UPDATE_MODELS["products"]
    messages = {
        "updated": "Producto actualizado con éxito",
        "update_failed": "Falla al actualizar el producto",
        "deleted": "Producto eliminado con éxito",
        "delete_failed": "Falla al eliminar el producto",
    }


def build_page(name, api, notifier, yaml_data, window=None, logger=None):
    """Arma la página `name` con su lista remota y su cliente de mutaciones."""
    if name == "customers":
        remote_list = REMOTE_LIST(api, "customers", window=window, logger=logger)
        return CUSTOMERS_PAGE(remote_list, CUSTOMERS_CLIENT(api, logger=logger), notifier, yaml_data)

    if name == "orders":
        remote_list = REMOTE_LIST(api, "orders", window=window, transform=sort_orders_ascending, logger=logger)
        return ORDERS_PAGE(remote_list, ORDERS_CLIENT(api, logger=logger), notifier, yaml_data)

    if name == "deliveries":
        identifier = get_setting(yaml_data, "orders.awaiting_delivery_identifier", 2)
        remote_list = REMOTE_LIST(api, "orders", window=window, transform=awaiting_delivery(identifier), logger=logger)
        return DELIVERIES_PAGE(remote_list, ORDERS_CLIENT(api, logger=logger), notifier, yaml_data)

    if name == "products":
        remote_list = REMOTE_LIST(api, "products", window=window, logger=logger)
        return PRODUCTS_PAGE(remote_list, RESOURCE_CLIENT(api, "products", record_key="Product", logger=logger), notifier, yaml_data)

    raise ValueError(f"Página desconocida: {name}")
