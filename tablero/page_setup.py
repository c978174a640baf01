from tablero.api_client import API_CLIENT
from tablero.config import get_setting, load_config
from tablero.errors import ConfigError
from tablero.log_utils import LineLogger
from tablero.notifications import STREAMLIT_NOTIFIER
from tablero.pages_logic import build_page
from tablero.resources import ListState
from tablero.streamlit_view import render_table, view_state_for
from tablero.table_state import PageWindow


def load_page_config(st, base_path, logger=None):
    """Config combinada del tablero; detiene la página si no hay ningún YAML."""
    try:
        return load_config(base_path, logger=logger)
    except ConfigError as e:
        st.error(e.message)
        st.stop()


def get_page(st, base_path, name):
    """
    La página (y su lista remota con caché) se guarda en session_state:
    así la ventana actual y la caché sobreviven a cada rerun.
    """
    state_key = f"_tablero_page_{name}"
    if state_key not in st.session_state:
        with st.expander("Log de configuración", expanded=False):
            logger = LineLogger(st.empty())
        _, yaml_data = load_page_config(st, base_path, logger=logger)
        api = API_CLIENT(yaml_data)
        window = PageWindow(0, int(get_setting(yaml_data, "tables.page_size", 10)))
        st.session_state[state_key] = build_page(name, api, STREAMLIT_NOTIFIER(st), yaml_data, window=window)
    return st.session_state[state_key]


def run_table_page(st, base_path, name):
    page = get_page(st, base_path, name)
    page.notifier.flush()

    with st.spinner(f"Cargando {page.title.lower()}..."):
        table = page.build_table(view_state=view_state_for(st, name))

    if page.remote_list.state == ListState.ERROR:
        st.error(f"❌ Error al cargar {page.title.lower()}: {page.remote_list.error}")
    else:
        render_table(st, table, name)

    page.notifier.flush()
    return page
