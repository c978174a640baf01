import requests


class TableroError(Exception):
    """Error base del tablero. Todas exponen `.message` para mostrarse en pantalla."""

    def __init__(self, message):
        super().__init__(message)
        self.message = str(message)


class ConfigError(TableroError):
    pass


class ValidationError(TableroError):
    """
    Falla de validación de un formulario.
    field_errors: dict {campo: mensaje}. Bloquea el envío, el borrador se conserva.
    """

    def __init__(self, field_errors, message=None):
        self.field_errors = dict(field_errors)
        if message is None:
            detalle = "; ".join(f"{k}: {v}" for k, v in self.field_errors.items())
            message = f"Datos inválidos ({detalle})" if detalle else "Datos inválidos"
        super().__init__(message)


class TransportError(TableroError):
    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.status_code = status_code


class NotFoundError(TransportError):
    pass


def _message_from_body(response):
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict):
        for key in ("message", "detail", "error"):
            value = body.get(key)
            if value:
                return str(value)
    return None


def error_from_response(response):
    """Convierte una respuesta HTTP no-2xx en TransportError / NotFoundError."""
    message = _message_from_body(response) or f"HTTP {response.status_code} - {response.text[:200]}"
    if response.status_code == 404:
        return NotFoundError(message, status_code=404)
    return TransportError(message, status_code=response.status_code)


def handle_api_error(error):
    """
    Normaliza cualquier falla del cliente HTTP a la taxonomía del tablero.
    Los errores del tablero pasan sin cambios.
    """
    if isinstance(error, TableroError):
        return error
    if isinstance(error, requests.HTTPError) and error.response is not None:
        return error_from_response(error.response)
    if isinstance(error, requests.Timeout):
        return TransportError(f"Tiempo de espera agotado: {error}")
    if isinstance(error, requests.ConnectionError):
        return TransportError(f"Error de conexión: {error}")
    if isinstance(error, requests.RequestException):
        return TransportError(str(error))
    return TransportError(str(error) or error.__class__.__name__)
