"""
Pintado de DATA_TABLE y DRAWER_EDITOR con Streamlit.

El estado que debe sobrevivir a cada rerun (vista de la tabla, fila abierta
en el drawer) vive en st.session_state con claves prefijadas por `key`.
"""
from datetime import date

from tablero.errors import TableroError
from tablero.table_state import TableViewState

_SORT_ICONS = {None: "⇅", "asc": "▲", "desc": "▼"}


def view_state_for(st, key):
    state_key = f"{key}_view_state"
    if state_key not in st.session_state:
        st.session_state[state_key] = TableViewState()
    return st.session_state[state_key]


def _open_row_key(key):
    return f"{key}_open_row"


def _grid_nonce_key(key):
    return f"{key}_grid_nonce"


def close_drawer(st, key):
    st.session_state.pop(_open_row_key(key), None)
    # Cambiar la key del dataframe limpia la selección de fila
    st.session_state[_grid_nonce_key(key)] = st.session_state.get(_grid_nonce_key(key), 0) + 1


# ================== BARRA DE HERRAMIENTAS ==================
def render_toolbar(st, table, key):
    filterable = [c for c in table.columns if c.filterable]
    col_search, col_sort, col_columns = st.columns([2, 1, 1])

    if filterable:
        target = filterable[0]
        with col_search:
            value = st.text_input(
                f"Buscar por {target.header.lower()}",
                value=table.view_state.column_filters.get(target.key, ""),
                key=f"{key}_filter_{target.key}",
            )
            table.view_state.set_filter(target.key, value)

    with col_sort:
        headers = {c.key: c.header for c in table.columns}
        current = table.view_state.sorting[0][0] if table.view_state.sorting else None
        keys = list(headers.keys())
        sort_key = st.selectbox(
            "Ordenar por",
            options=keys,
            index=keys.index(current) if current in keys else 0,
            format_func=lambda k, m=headers: m.get(k, k),
            key=f"{key}_sort_column",
        )
        icon = _SORT_ICONS[table.view_state.sort_direction(sort_key)]
        if st.button(icon, key=f"{key}_sort_toggle", help="Sin orden / ascendente / descendente"):
            table.toggle_sorting(sort_key)
            st.rerun()

    hideable = table.hideable_columns
    if hideable:
        with col_columns:
            labels = {c.key: c.header for c in hideable}
            selected = st.multiselect(
                "Columnas",
                options=list(labels.keys()),
                default=[c.key for c in hideable if table.view_state.is_visible(c.key)],
                format_func=lambda k, m=labels: m.get(k, k),
                key=f"{key}_columns",
            )
            for column in hideable:
                table.view_state.toggle_visibility(column.key, column.key in selected)


# ================== PAGINACIÓN ==================
def render_pagination(st, table, key):
    col_info, col_size, col_label, col_nav = st.columns([2, 1, 1, 2])

    with col_info:
        st.caption(table.footer())

    with col_size:
        options = table.page_size_options
        if table.page_size not in options:
            options = sorted(set(options) | {table.page_size})
        new_size = st.selectbox(
            "Filas por página",
            options=options,
            index=options.index(table.page_size),
            key=f"{key}_page_size",
        )
        if new_size != table.page_size and table.set_page_size(new_size) is not None:
            st.rerun()

    with col_label:
        st.write(table.page_label())

    with col_nav:
        b_first, b_prev, b_next, b_last = st.columns(4)
        clicked = None
        if b_first.button("⏮", key=f"{key}_first", disabled=not table.can_previous, help="Primera página"):
            clicked = table.first()
        if b_prev.button("◀", key=f"{key}_prev", disabled=not table.can_previous, help="Página anterior"):
            clicked = table.previous()
        if b_next.button("▶", key=f"{key}_next", disabled=not table.can_next, help="Página siguiente"):
            clicked = table.next()
        if b_last.button("⏭", key=f"{key}_last", disabled=not table.can_next, help="Última página"):
            clicked = table.last()
        if clicked is not None:
            close_drawer(st, key)
            st.rerun()


# ================== DRAWER ==================
def _input_for(st, spec, value, widget_key):
    if spec.kind == "select":
        options = list(spec.options)
        index = options.index(value) if value in options else 0
        return st.selectbox(spec.label, options=options, index=index, key=widget_key)

    if spec.kind == "date":
        initial = None
        if isinstance(value, date):
            initial = value
        elif value:
            try:
                initial = date.fromisoformat(str(value)[:10])
            except ValueError:
                initial = None
        return st.date_input(spec.label, value=initial, key=widget_key)

    # Los números se capturan como texto: lo que no se pueda leer vale 0
    text = "" if value is None else str(value)
    return st.text_input(spec.label, value=text, key=widget_key)


def render_drawer(st, table, editor, key):
    row_key = f"{key}_{editor.record_id}"
    title = table.columns[0].render(editor.original.get(table.columns[0].key)) if table.columns else editor.record_id

    with st.sidebar:
        st.subheader(f"{table.title}: {title}")
        st.caption("Detalles del registro")

        if not len(table.schema):
            for column in table.columns:
                st.write(f"**{column.header}:** {column.render(editor.original.get(column.key))}")

        with st.form(f"{row_key}_form"):
            values = {}
            for spec in table.schema:
                values[spec.key] = _input_for(st, spec, editor.draft.get(spec.key), f"{row_key}_{spec.key}")
            submitted = st.form_submit_button(table.save_label, use_container_width=True)

        if submitted:
            editor.update_fields(values)
            with st.spinner(table.saving_label):
                saved = editor.save()
            if saved:
                close_drawer(st, key)
                st.rerun()
            else:
                for field_key, message in editor.errors.items():
                    label = table.schema.get(field_key).label if field_key in table.schema else field_key
                    st.error(f"{label}: {message}")
                if editor.error and not editor.errors:
                    st.error(editor.error)

        col_close, col_delete = st.columns(2)
        if col_close.button("Cerrar", key=f"{row_key}_close", use_container_width=True):
            editor.close()
            close_drawer(st, key)
            st.rerun()

        if table.can_delete and col_delete.button("Eliminar", key=f"{row_key}_delete", use_container_width=True):
            try:
                table.delete(editor.original)
            except TableroError as e:
                # La página ya notificó la falla; el drawer sigue abierto
                editor.error = e.message
                st.error(e.message)
            else:
                close_drawer(st, key)
                st.rerun()


# ================== TABLA ==================
def render_table(st, table, key):
    st.subheader(table.title)
    render_toolbar(st, table, key)

    df_view = table.display_frame()
    if df_view.empty:
        st.info(f"📭 {table.empty_message}")
    else:
        nonce = st.session_state.get(_grid_nonce_key(key), 0)
        event = st.dataframe(
            df_view,
            use_container_width=True,
            hide_index=True,
            on_select="rerun",
            selection_mode="single-row",
            key=f"{key}_grid_{nonce}",
        )
        selected_rows = event.selection.rows if event is not None else []
        if selected_rows:
            st.session_state[_open_row_key(key)] = df_view.index[selected_rows[0]]

    render_pagination(st, table, key)

    row_id = st.session_state.get(_open_row_key(key))
    if row_id is not None and table.schema is not None:
        if table.find(row_id) is None:
            # La fila ya no está en la página recargada
            close_drawer(st, key)
        else:
            render_drawer(st, table, table.open_row(row_id), key)
