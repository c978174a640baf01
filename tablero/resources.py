"""
Recursos remotos del tablero.

REMOTE_LIST: lista paginada de un recurso con caché por ventana (page_index, page_size).
RESOURCE_CLIENT: create / update / delete contra el endpoint del recurso.
"""
from enum import Enum

import requests

from tablero.errors import TableroError, handle_api_error
from tablero.log_utils import emit
from tablero.table_state import PageWindow


class ListState(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    LOADED = "loaded"
    ERROR = "error"


class REMOTE_LIST:
    def __init__(self, client, resource, window=None, root_key=None, transform=None, logger=None):
        self.client = client
        self.resource = resource.strip("/")
        self.root_key = root_key or self.resource
        self.window = window or PageWindow()
        self.transform = transform
        self.logger = logger

        self.state = ListState.IDLE
        self.error = None
        self._cache = {}

    # -------------------------
    # Ventana actual
    # -------------------------
    @property
    def cache_key(self):
        return (self.window.page_index, self.window.page_size)

    def set_window(self, window):
        """
        Cambiar de ventana regresa a IDLE y descarta lo guardado para la ventana
        nueva: la próxima lectura siempre consulta el backend.
        """
        if window != self.window:
            self.window = window
            self._cache.pop(self.cache_key, None)
            self.state = ListState.IDLE
            self.error = None

    # -------------------------
    # Lectura
    # -------------------------
    def _fetch_page(self):
        # El backend numera las páginas desde 1
        params = {
            "page": self.window.page_index + 1,
            "page_size": self.window.page_size,
        }
        payload = self.client.get(f"/{self.resource}/?list", params=params)
        count = int(payload.get("count", 0) or 0)
        records = list(payload.get(self.root_key, []) or [])
        return count, records

    def load(self):
        """
        IDLE/LOADED -> LOADING -> LOADED | ERROR.
        Los reruns sobre la misma ventana salen de la caché.
        """
        if self.cache_key in self._cache:
            self.state = ListState.LOADED
            self.error = None
            return self.items

        self.state = ListState.LOADING
        emit(
            f"🔄 Cargando {self.resource}: página {self.window.page_index + 1} "
            f"({self.window.page_size} por página)",
            "info",
            self.logger,
        )
        try:
            self._cache[self.cache_key] = self._fetch_page()
        except TableroError as e:
            self.state = ListState.ERROR
            self.error = e.message
            emit(f"❌ Error al cargar {self.resource}: {e.message}", "error", self.logger)
            return []

        self.state = ListState.LOADED
        self.error = None
        return self.items

    def mutate(self):
        """Descarta todas las ventanas guardadas y vuelve a consultar la actual."""
        self._cache.clear()
        self.state = ListState.IDLE
        return self.load()

    @property
    def is_loading(self):
        return self.state in (ListState.IDLE, ListState.LOADING)

    @property
    def total_count(self):
        count, _ = self._cache.get(self.cache_key, (0, []))
        return count

    @property
    def raw_items(self):
        _, records = self._cache.get(self.cache_key, (0, []))
        return list(records)

    @property
    def items(self):
        records = self.raw_items
        if self.transform is not None:
            records = list(self.transform(records))
        return records


class RESOURCE_CLIENT:
    """
    Mutaciones de un recurso. Guarda el último error en `self.error`
    y vuelve a lanzar la excepción para que la página decida qué mostrar.
    """

    def __init__(self, client, resource, record_key=None, logger=None):
        self.client = client
        self.resource = resource.strip("/")
        self.record_key = record_key or self.resource[:-1].capitalize()
        self.logger = logger
        self.is_loading = False
        self.error = None

    def _run(self, label, call):
        self.is_loading = True
        self.error = None
        try:
            result = call()
        except (requests.RequestException, TableroError) as e:
            error = handle_api_error(e)
            self.error = error.message
            emit(f"❌ {label} {self.resource}: {error.message}", "error", self.logger)
            if error is e:
                raise
            raise error from e
        finally:
            self.is_loading = False
        emit(f"✅ {label} {self.resource}", "success", self.logger)
        return result

    def get_by_id(self, record_id):
        payload = self._run(
            "Consulta",
            lambda: self.client.get(f"/{self.resource}/", params={"id": record_id}),
        )
        return payload.get(self.record_key)

    def create(self, body):
        return self._run("Alta", lambda: self.client.post(f"/{self.resource}/", body))

    def update(self, body):
        if "id" not in body:
            raise ValueError("El payload de actualización necesita 'id'")
        return self._run("Actualización", lambda: self.client.patch(f"/{self.resource}/", body))

    def delete(self, record_id):
        return self._run(
            "Baja",
            lambda: self.client.delete(f"/{self.resource}/", params={"id": record_id}),
        )


class CUSTOMERS_CLIENT(RESOURCE_CLIENT):
    def __init__(self, client, logger=None):
        super().__init__(client, "customers", record_key="Customer", logger=logger)

    def update_address(self, address):
        return self._run(
            "Actualización de dirección",
            lambda: self.client.patch(f"/{self.resource}/address/", {"address": address}),
        )

    def delete_address(self, address_id):
        return self._run(
            "Baja de dirección",
            lambda: self.client.delete(f"/{self.resource}/address/", params={"id": address_id}),
        )


class ORDERS_CLIENT(RESOURCE_CLIENT):
    def __init__(self, client, logger=None):
        super().__init__(client, "orders", record_key="Order", logger=logger)

    def finish_work(self):
        """Cierra el expediente del día: el backend manda los pedidos a logística."""
        return self._run("Cierre de expediente", lambda: self.client.post(f"/{self.resource}/finish-work/"))
