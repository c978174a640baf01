"""
Columnas y esquemas de edición de cada recurso del tablero.
"""
from tablero.data_table import ColumnSpec
from tablero.models import CustomerUpdateRequest, OrderUpdateRequest, ProductUpdateRequest
from tablero.schema import FIELD_SCHEMA, FieldSpec, min_length, positive


def money(value):
    return f"$ {float(value):,.2f}"


def status_name(value):
    if isinstance(value, dict):
        return value.get("name") or str(value.get("identifier", ""))
    return "" if value is None else str(value)


def yes_no(value):
    return "Sí" if value else "No"


# ================== CLIENTES ==================
CUSTOMER_COLUMNS = [
    ColumnSpec("name", "Nombre", can_hide=False),
    ColumnSpec("email", "Correo"),
    ColumnSpec("phone", "Teléfono"),
    ColumnSpec("document", "RFC / Documento"),
    ColumnSpec("city", "Ciudad"),
]

CUSTOMER_SCHEMA = FIELD_SCHEMA([
    FieldSpec("name", "Nombre", required=True, validation=min_length(2)),
    FieldSpec("email", "Correo"),
    FieldSpec("phone", "Teléfono"),
    FieldSpec("document", "RFC / Documento"),
    FieldSpec("city", "Ciudad"),
])

# ================== PEDIDOS ==================
ORDER_COLUMNS = [
    ColumnSpec("order_number", "Pedido #", can_hide=False),
    ColumnSpec("customer_name", "Cliente"),
    ColumnSpec("quantity", "Cantidad"),
    ColumnSpec("total", "Total", format=money),
    ColumnSpec("delivery_date", "Fecha de entrega"),
    ColumnSpec("order_status", "Estatus", format=status_name, filterable=False),
    ColumnSpec("is_delivered", "Entregado", format=yes_no, filterable=False),
]

ORDER_SCHEMA = FIELD_SCHEMA([
    FieldSpec("customer_name", "Cliente", required=True),
    FieldSpec("quantity", "Cantidad", kind="number", validation=positive),
    FieldSpec("total", "Total ($)", kind="number", validation=positive, step=0.01),
    FieldSpec("delivery_date", "Fecha de entrega", kind="date"),
])

# Entregas: el drawer solo confirma la entrega, no edita campos del pedido
DELIVERY_SCHEMA = FIELD_SCHEMA([])

# ================== PRODUCTOS ==================
PRODUCT_COLUMNS = [
    ColumnSpec("name", "Nombre", can_hide=False),
    ColumnSpec("packs_per_batch", "Paquetes/Horneada", format=lambda v: f"{v} paquetes"),
    ColumnSpec("price", "Precio", format=money),
    ColumnSpec("unit_weight", "Peso/unidad"),
]

PRODUCT_SCHEMA = FIELD_SCHEMA([
    FieldSpec("name", "Nombre", required=True),
    FieldSpec("packs_per_batch", "Paquetes/Horneada", kind="number", validation=positive),
    FieldSpec("price", "Precio ($)", kind="number", validation=positive, step=0.01),
    FieldSpec("unit_weight", "Peso/unidad"),
])

UPDATE_MODELS = {
    "customers": CustomerUpdateRequest,
    "orders": OrderUpdateRequest,
    "products": ProductUpdateRequest,
}
