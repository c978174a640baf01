"""
Tabla genérica del tablero.

La tabla no consulta datos por su cuenta: recibe la página ya cargada, pinta
las filas y avisa por `on_pagination_change` cuando el usuario quiere otra
ventana. Las ediciones van por el drawer y, al terminar bien, se llama a
`mutate()` para que la página vuelva a pedir la ventana actual.
"""
from dataclasses import dataclass
from typing import Any, Callable, Generic, Optional, TypeVar

import pandas as pd

from tablero.drawer import DRAWER_EDITOR
from tablero.table_state import PageWindow, TableViewState, can_next, can_previous, page_count

R = TypeVar("R")
U = TypeVar("U")

PAGE_SIZE_OPTIONS = (10, 20, 30, 40, 50)


@dataclass(frozen=True)
class ColumnSpec:
    key: str
    header: str
    format: Optional[Callable[[Any], str]] = None
    can_hide: bool = True
    filterable: bool = True

    def render(self, value):
        if self.format is None:
            return value
        try:
            return self.format(value)
        except (TypeError, ValueError, KeyError, AttributeError):
            return value


class DATA_TABLE(Generic[R, U]):
    def __init__(
        self,
        data,
        columns,
        total_count,
        page_size,
        current_page,
        on_pagination_change,
        on_update,
        on_delete=None,
        mutate=None,
        schema=None,
        update_model=None,
        title="",
        view_state=None,
        page_size_options=PAGE_SIZE_OPTIONS,
        save_label="Guardar cambios",
        saving_label="Guardando...",
        empty_message="Sin registros.",
        submit_unchanged=False,
        logger=None,
    ):
        self.window = PageWindow(current_page, page_size)
        self.data = list(data)
        self.columns = list(columns)
        self.total_count = int(total_count or 0)
        self.on_pagination_change = on_pagination_change
        self.on_update = on_update
        self.on_delete = on_delete
        self.mutate = mutate
        self.schema = schema
        self.update_model = update_model
        self.title = title
        self.view_state = view_state if view_state is not None else TableViewState()
        self.page_size_options = list(page_size_options)
        self.save_label = save_label
        self.saving_label = saving_label
        self.empty_message = empty_message
        self.submit_unchanged = submit_unchanged
        self.logger = logger

    # ================== PAGINACIÓN ==================
    @property
    def current_page(self):
        return self.window.page_index

    @property
    def page_size(self):
        return self.window.page_size

    @property
    def page_count(self):
        return page_count(self.total_count, self.page_size)

    @property
    def can_previous(self):
        return can_previous(self.current_page)

    @property
    def can_next(self):
        return can_next(self.current_page, self.page_count)

    def _signal(self, page_index, page_size):
        window = PageWindow(page_index, page_size)
        self.on_pagination_change(window)
        return window

    def first(self):
        if not self.can_previous:
            return None
        return self._signal(0, self.page_size)

    def previous(self):
        if not self.can_previous:
            return None
        return self._signal(self.current_page - 1, self.page_size)

    def next(self):
        if not self.can_next:
            return None
        return self._signal(self.current_page + 1, self.page_size)

    def last(self):
        if not self.can_next:
            return None
        return self._signal(self.page_count - 1, self.page_size)

    def set_page_size(self, page_size):
        page_size = int(page_size)
        if page_size == self.page_size:
            return None
        return self._signal(0, page_size)

    def page_label(self):
        return f"Página {self.current_page + 1} de {max(self.page_count, 1)}"

    # ================== FILAS ==================
    @property
    def column_keys(self):
        return [c.key for c in self.columns]

    @property
    def hideable_columns(self):
        return [c for c in self.columns if c.can_hide]

    def visible_columns(self):
        return [c for c in self.columns if not c.can_hide or self.view_state.is_visible(c.key)]

    def toggle_sorting(self, column_key):
        """Orden local de la página: sin orden -> asc -> desc. Devuelve la dirección nueva."""
        if column_key not in self.column_keys:
            raise KeyError(f"Columna desconocida: {column_key}")
        self.view_state.toggle_sorting(column_key)
        return self.view_state.sort_direction(column_key)

    def frame(self) -> pd.DataFrame:
        """Página cargada como DataFrame (valores crudos), indexada por id."""
        keys = ["id"] + [k for k in self.column_keys if k != "id"]
        rows = [{k: record.get(k) for k in keys} for record in self.data]
        df = pd.DataFrame(rows, columns=keys)
        df["id"] = df["id"].astype(str)
        return df.set_index("id", drop=False)

    def rows(self):
        """Registros de la página después de filtros y orden locales."""
        view = self.view_state.apply(self.frame())
        by_id = {str(r.get("id")): r for r in self.data}
        return [by_id[row_id] for row_id in view["id"].tolist()]

    def display_frame(self) -> pd.DataFrame:
        columns = self.visible_columns()
        records = self.rows()
        df = pd.DataFrame(
            [{c.header: c.render(r.get(c.key)) for c in columns} for r in records],
            columns=[c.header for c in columns],
        )
        df.index = [str(r.get("id")) for r in records]
        return df

    def footer(self):
        return f"Mostrando {len(self.rows())} registro(s)."

    def find(self, row_id):
        for record in self.data:
            if str(record.get("id")) == str(row_id):
                return record
        return None

    # ================== EDICIÓN ==================
    def open_row(self, row_id):
        if self.schema is None:
            raise RuntimeError("La tabla no tiene esquema de edición")
        record = self.find(row_id)
        if record is None:
            raise KeyError(f"No existe la fila {row_id} en la página actual")
        return DRAWER_EDITOR(
            record,
            self.schema,
            on_save=self.update,
            model=self.update_model,
            submit_unchanged=self.submit_unchanged,
            logger=self.logger,
        )

    def update(self, original, changed_fields):
        # Sin actualización optimista: la tabla se repinta con lo que traiga mutate()
        result = self.on_update(original, changed_fields)
        if self.mutate is not None:
            self.mutate()
        return result

    @property
    def can_delete(self):
        return self.on_delete is not None

    def delete(self, item):
        if self.on_delete is None:
            raise RuntimeError("La tabla no permite eliminar registros")
        result = self.on_delete(item)
        if self.mutate is not None:
            self.mutate()
        return result
