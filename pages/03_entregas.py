import os
import sys

import streamlit as st

st.title("Entregas 🚚")
st.write("Pedidos esperando entrega. Abre un pedido y usa **Finalizar entrega** para marcarlo como entregado.")

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

from tablero.page_setup import run_table_page  # noqa: E402

run_table_page(st, BASE_PATH, "deliveries")
