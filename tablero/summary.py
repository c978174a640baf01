from tablero.catalog import money
from tablero.log_utils import emit
from tablero.resources import REMOTE_LIST, ListState
from tablero.table_state import PageWindow

EMPTY_VALUE = "—"


def _count(api, resource, logger=None):
    remote = REMOTE_LIST(api, resource, window=PageWindow(0, 1), logger=logger)
    remote.load()
    if remote.state == ListState.ERROR:
        return None
    return remote.total_count


def summary_cards(api, recent_orders=50, logger=None):
    """
    Tarjetas del inicio: [{"label", "value", "icon", "help"}].
    Los ingresos solo suman los primeros `recent_orders` pedidos.
    Si una fuente falla la tarjeta muestra "—" y el error queda en el log.
    """
    orders = REMOTE_LIST(api, "orders", window=PageWindow(0, recent_orders), logger=logger)
    orders.load()
    if orders.state == ListState.ERROR:
        total_orders = None
        revenue = None
    else:
        total_orders = orders.total_count
        revenue = 0.0
        for order in orders.items:
            try:
                revenue += float(order.get("total") or 0)
            except (TypeError, ValueError):
                emit(f"⚠️ Pedido {order.get('id')} con total inválido: {order.get('total')}", "warning", logger)

    customers = _count(api, "customers", logger=logger)
    products = _count(api, "products", logger=logger)

    cards = [
        {"label": "Ventas totales", "value": total_orders, "icon": "💵",
         "help": "Número total de pedidos registrados en el backend"},
        {"label": "Clientes registrados", "value": customers, "icon": "👥",
         "help": "Número total de clientes"},
        {"label": "Ingresos recientes", "value": money(revenue) if revenue is not None else None, "icon": "🏦",
         "help": f"Suma del total de los primeros {recent_orders} pedidos, no de todas las ventas"},
        {"label": "Productos activos", "value": products, "icon": "📦",
         "help": "Número total de productos"},
    ]
    for card in cards:
        if card["value"] is None:
            card["value"] = EMPTY_VALUE
    resumen = ", ".join(f"{c['label']}={c['value']}" for c in cards)
    emit(f"📊 Resumen: {resumen}", "summary", logger)
    return cards
