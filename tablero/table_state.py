import math
from dataclasses import dataclass, field

import pandas as pd


@dataclass(frozen=True)
class PageWindow:
    """Ventana de paginación. page_index empieza en 0."""

    page_index: int = 0
    page_size: int = 10

    def __post_init__(self):
        if self.page_size <= 0:
            raise ValueError(f"page_size debe ser > 0 (recibido {self.page_size})")
        if self.page_index < 0:
            raise ValueError(f"page_index debe ser >= 0 (recibido {self.page_index})")

    def as_dict(self):
        return {"pageIndex": self.page_index, "pageSize": self.page_size}


def page_count(total_count, page_size):
    if page_size <= 0:
        raise ValueError(f"page_size debe ser > 0 (recibido {page_size})")
    return math.ceil(max(total_count, 0) / page_size)


def can_previous(current_page):
    return current_page > 0


def can_next(current_page, pages):
    return current_page < pages - 1


@dataclass
class TableViewState:
    """
    Estado local de la vista: orden, filtros y columnas visibles.
    Solo afecta a la página ya cargada, nunca a los datos remotos.
    """

    sorting: list = field(default_factory=list)  # [(columna, desc)]
    column_filters: dict = field(default_factory=dict)  # {columna: texto}
    column_visibility: dict = field(default_factory=dict)  # {columna: bool}

    def reset(self):
        self.sorting = []
        self.column_filters = {}
        self.column_visibility = {}

    # -------------------------
    # Columnas
    # -------------------------
    def is_visible(self, column):
        return self.column_visibility.get(column, True)

    def toggle_visibility(self, column, visible=None):
        if visible is None:
            visible = not self.is_visible(column)
        self.column_visibility[column] = bool(visible)

    def visible_columns(self, columns):
        return [c for c in columns if self.is_visible(c)]

    # -------------------------
    # Filtros / orden
    # -------------------------
    def set_filter(self, column, value):
        if value is None or str(value).strip() == "":
            self.column_filters.pop(column, None)
        else:
            self.column_filters[column] = str(value)

    def set_sorting(self, column, desc=False):
        self.sorting = [(column, bool(desc))]

    def sort_direction(self, column):
        desc = dict(self.sorting).get(column)
        if desc is None:
            return None
        return "desc" if desc else "asc"

    def toggle_sorting(self, column):
        """Sin orden -> ascendente -> descendente -> sin orden."""
        current = dict(self.sorting).get(column)
        if current is None:
            self.set_sorting(column, desc=False)
        elif current is False:
            self.set_sorting(column, desc=True)
        else:
            self.sorting = []

    def apply(self, df: pd.DataFrame) -> pd.DataFrame:
        view = df
        for column, value in self.column_filters.items():
            if column not in view.columns:
                continue
            mask = view[column].fillna("").astype(str).str.contains(value, case=False, regex=False, na=False)
            view = view[mask]

        sort_cols = [(c, desc) for c, desc in self.sorting if c in view.columns]
        if sort_cols:
            view = view.sort_values(
                by=[c for c, _ in sort_cols],
                ascending=[not desc for _, desc in sort_cols],
                kind="mergesort",
            )
        return view
