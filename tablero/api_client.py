import time

import requests

from tablero.config import get_setting
from tablero.errors import error_from_response, handle_api_error
from tablero.log_utils import emit


class API_CLIENT:
    """
    Cliente REST del backend del tablero.
    Todas las fallas salen como TransportError / NotFoundError con `.message`.
    """

    def __init__(self, yaml_data, session=None, logger=None):
        self.data = yaml_data
        self.base_url = str(get_setting(yaml_data, "api.base_url", "")).rstrip("/")
        self.timeout = get_setting(yaml_data, "api.timeout", 30)
        self.headers = dict(get_setting(yaml_data, "api.headers", {}) or {})
        self.session = session or requests.Session()
        self.logger = logger

    def url_for(self, path):
        return f"{self.base_url}/{path.lstrip('/')}"

    def request(self, method, path, params=None, json=None):
        url = self.url_for(path)
        start_time = time.time()
        try:
            response = self.session.request(
                method,
                url,
                headers=self.headers,
                params=params,
                json=json,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            error = handle_api_error(e)
            emit(f"❌ Error de conexión ({method} {path}): {error.message}", "error", self.logger)
            raise error from e

        elapsed = time.time() - start_time
        if not 200 <= response.status_code < 300:
            error = error_from_response(response)
            emit(f"⚠️ {method} {path}: HTTP {response.status_code} - {error.message}", "warning", self.logger)
            raise error

        emit(f"✅ {method} {path}: HTTP {response.status_code} ({elapsed:.2f}s)", "success", self.logger)
        if not response.content:
            return {}
        try:
            return response.json()
        except ValueError:
            return {}

    def get(self, path, params=None):
        return self.request("GET", path, params=params)

    def post(self, path, body=None):
        return self.request("POST", path, json=body)

    def patch(self, path, body=None):
        return self.request("PATCH", path, json=body)

    def delete(self, path, params=None):
        return self.request("DELETE", path, params=params)
