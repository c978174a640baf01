import os
import sys

import streamlit as st

st.set_page_config(
    page_title="Tablero administrativo",
    page_icon="🥖",
    layout="wide",
)

BASE_PATH = os.path.abspath(os.path.dirname(__file__))
if BASE_PATH not in sys.path:
    sys.path.insert(0, BASE_PATH)

from tablero.api_client import API_CLIENT  # noqa: E402
from tablero.log_utils import LineLogger  # noqa: E402
from tablero.page_setup import load_page_config  # noqa: E402
from tablero.summary import summary_cards  # noqa: E402

st.title("Tablero administrativo")

page_purpose = """
- Clientes, pedidos, entregas y productos en tablas paginadas contra el backend.
- Selecciona una fila para editarla en el panel lateral; al guardar la tabla se recarga desde el servidor.
- Los errores del backend se muestran como notificaciones, la página sigue usable.
"""
st.markdown(page_purpose)

st.divider()

# ================== RESUMEN ==================
with st.expander("Log", expanded=False):
    log_placeholder = st.empty()
streamlit_logger = LineLogger(log_placeholder)

_, yaml_data = load_page_config(st, BASE_PATH, logger=streamlit_logger)

with st.spinner("Consultando resumen..."):
    cards = summary_cards(API_CLIENT(yaml_data, logger=streamlit_logger), logger=streamlit_logger)

for col, card in zip(st.columns(len(cards)), cards):
    with col:
        st.metric(f"{card['icon']} {card['label']}", card["value"], help=card["help"])

st.divider()

st.subheader("Navegación")

st.page_link(
    "pages/01_clientes.py",
    label="Clientes",
    icon="👥",
)

st.page_link(
    "pages/02_pedidos.py",
    label="Pedidos",
    icon="🧾",
)

st.page_link(
    "pages/03_entregas.py",
    label="Entregas",
    icon="🚚",
)

st.page_link(
    "pages/04_productos.py",
    label="Productos",
    icon="🥖",
)
