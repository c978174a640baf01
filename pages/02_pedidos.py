import os
import sys

import streamlit as st

st.title("Pedidos 🧾")
st.write("Pedidos ordenados por número. Selecciona una fila para editarla o eliminarla.")

st.page_link(
    "app.py",
    label="Volver al inicio",
    icon="🏠",
)

st.divider()

# BASE_PATH = raíz del repo (un nivel arriba de /pages)
BASE_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if BASE_PATH not in sys.path:
    sys.path.insert(0, BASE_PATH)

from tablero.errors import TableroError  # noqa: E402
from tablero.page_setup import run_table_page  # noqa: E402

page = run_table_page(st, BASE_PATH, "orders")

# ================== FINALIZAR EXPEDIENTE ==================
st.divider()
st.markdown("### Finalizar expediente")
st.write("Envía todos los pedidos del día a logística.")

confirm_key = "orders_confirm_finish_work"

if st.button("Finalizar expediente", key="btn_finish_work"):
    st.session_state[confirm_key] = True

if st.session_state.get(confirm_key):
    st.warning("⚠️ ¿Seguro que quieres finalizar el expediente? Los pedidos pasarán a logística.")
    col_ok, col_cancel = st.columns(2)
    if col_ok.button("Confirmar", key="btn_finish_work_ok", use_container_width=True):
        st.session_state[confirm_key] = False
        try:
            page.handle_finish_work()
        except TableroError as e:
            st.error(f"❌ {e.message}")
        else:
            st.rerun()
    if col_cancel.button("Cancelar", key="btn_finish_work_cancel", use_container_width=True):
        st.session_state[confirm_key] = False
        st.rerun()
