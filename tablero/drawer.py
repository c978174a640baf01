from tablero.errors import TableroError, ValidationError
from tablero.log_utils import emit


def _same(a, b):
    # Un input vacío equivale a un campo nulo del backend
    if a in (None, "") and b in (None, ""):
        return True
    return a == b


class DRAWER_EDITOR:
    """
    Formulario lateral ligado a un registro.

    El borrador (draft) vive solo mientras el drawer está abierto. Al guardar se
    manda `on_save(original, changed_fields)` con los campos que cambiaron; el
    payload que se valida es {id} + campos cambiados. Si la validación o el
    guardado fallan, el drawer sigue abierto y el borrador se conserva.
    """

    def __init__(self, record, schema, on_save, model=None, submit_unchanged=False, logger=None):
        self.original = dict(record)
        self.schema = schema
        self.on_save = on_save
        self.model = model
        self.submit_unchanged = submit_unchanged
        self.logger = logger

        schema.check_record(self.original)
        self.draft = {key: self.original.get(key) for key in schema.keys}
        self.is_open = True
        self.is_saving = False
        self.errors = {}
        self.error = None

    @property
    def record_id(self):
        return self.original.get("id")

    def set_field(self, key, raw):
        if key not in self.schema:
            raise KeyError(f"'{key}' no está en el esquema del formulario")
        original = self.original.get(key)
        if _same(raw, original):
            # Input vacío sobre un campo nulo: no se toca ("" no pasa a 0)
            self.draft[key] = original
        else:
            self.draft[key] = self.schema.coerce(key, raw)
        self.errors.pop(key, None)

    def update_fields(self, values):
        for key, raw in values.items():
            self.set_field(key, raw)

    def changed_fields(self):
        return {
            key: value
            for key, value in self.draft.items()
            if not _same(value, self.original.get(key))
        }

    def payload(self):
        return {"id": self.record_id, **self.changed_fields()}

    def save(self):
        """True si se guardó (o no había cambios) y el drawer se cerró."""
        changed = self.changed_fields()
        if not changed and not self.submit_unchanged:
            self.close()
            return True

        try:
            self.schema.validate(self.payload(), model=self.model)
        except ValidationError as e:
            self.errors = e.field_errors
            self.error = e.message
            emit(f"⚠️ Validación fallida en registro {self.record_id}: {e.message}", "warning", self.logger)
            return False

        self.is_saving = True
        try:
            self.on_save(self.original, changed)
        except TableroError as e:
            self.error = e.message
            return False
        finally:
            self.is_saving = False

        self.is_open = False
        self.errors = {}
        self.error = None
        return True

    def close(self):
        self.draft = {}
        self.errors = {}
        self.error = None
        self.is_open = False
