"""
Esquema de campos editables de un registro.

Cada FieldSpec define cómo se pinta el input en el drawer y cómo se valida
el valor antes de mandarlo al backend. El orden del esquema es el orden de
render y de validación.
"""
import math
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Callable, Optional

import pydantic

from tablero.errors import ValidationError

FIELD_KINDS = ("text", "number", "select", "date")


@dataclass(frozen=True)
class FieldSpec:
    key: str
    label: str
    kind: str = "text"
    validation: Optional[Callable[[Any], Optional[str]]] = None
    required: bool = False
    options: tuple = field(default_factory=tuple)
    step: Optional[float] = None

    def __post_init__(self):
        if self.kind not in FIELD_KINDS:
            raise ValueError(f"Tipo de campo desconocido '{self.kind}' para '{self.key}'")


def parse_number(raw):
    """
    Conversión permisiva: lo que no se pueda leer como número vale 0.
    "12,5" -> 12.5, "abc" -> 0, "" -> 0
    """
    if isinstance(raw, bool):
        return int(raw)
    if isinstance(raw, (int, float)):
        value = raw
    else:
        try:
            value = float(str(raw).strip().replace(",", "."))
        except (TypeError, ValueError):
            return 0
    if isinstance(value, float):
        if math.isnan(value) or math.isinf(value):
            return 0
        if value.is_integer():
            return int(value)
    return value


def coerce_value(spec: FieldSpec, raw):
    if spec.kind == "number":
        return parse_number(raw)
    if spec.kind == "date":
        if isinstance(raw, datetime):
            return raw.date().isoformat()
        if isinstance(raw, date):
            return raw.isoformat()
        return "" if raw is None else str(raw).strip()
    if spec.kind == "select":
        return raw
    return "" if raw is None else str(raw)


class FIELD_SCHEMA:
    def __init__(self, fields):
        self.fields = list(fields)
        seen = set()
        for spec in self.fields:
            if spec.key in seen:
                raise ValueError(f"Clave duplicada en el esquema: '{spec.key}'")
            seen.add(spec.key)
        self._by_key = {spec.key: spec for spec in self.fields}

    def __iter__(self):
        return iter(self.fields)

    def __len__(self):
        return len(self.fields)

    def __contains__(self, key):
        return key in self._by_key

    @property
    def keys(self):
        return [spec.key for spec in self.fields]

    def get(self, key):
        return self._by_key[key]

    def check_record(self, record):
        """Cada clave del esquema debe existir como atributo del registro."""
        missing = [key for key in self.keys if key not in record]
        if missing:
            raise ValueError(f"El registro no tiene los campos del esquema: {', '.join(missing)}")

    def coerce(self, key, raw):
        if key not in self._by_key:
            return raw
        return coerce_value(self._by_key[key], raw)

    def field_errors(self, values):
        """Reglas del esquema sobre los campos presentes en `values`, en orden del esquema."""
        errors = {}
        for spec in self.fields:
            if spec.key not in values:
                continue
            value = values[spec.key]

            if spec.required and (value is None or str(value).strip() == ""):
                errors[spec.key] = "Campo obligatorio"
                continue

            if spec.kind == "select" and spec.options and value not in spec.options:
                errors[spec.key] = f"Opción inválida: {value}"
                continue

            if spec.kind == "date" and value not in (None, ""):
                try:
                    date.fromisoformat(str(value))
                except ValueError:
                    errors[spec.key] = "Fecha inválida (AAAA-MM-DD)"
                    continue

            if spec.validation is not None:
                message = spec.validation(value)
                if message:
                    errors[spec.key] = message
        return errors

    def validate(self, payload, model=None):
        """
        Valida el payload con las reglas del esquema y, si se indica,
        con el modelo pydantic de actualización. Lanza ValidationError.
        """
        errors = self.field_errors(payload)
        if model is not None:
            try:
                model.model_validate(payload)
            except pydantic.ValidationError as e:
                for item in e.errors():
                    loc = item.get("loc") or ("__root__",)
                    errors.setdefault(str(loc[0]), item.get("msg", "Valor inválido"))
        if errors:
            raise ValidationError(errors)
        return payload


def positive(value):
    return None if value is not None and value >= 0 else "Debe ser mayor o igual a 0"


def min_length(n):
    def _check(value):
        return None if len(str(value or "").strip()) >= n else f"Mínimo {n} caracteres"

    return _check
