import os

import yaml
from dotenv import load_dotenv

from tablero.errors import ConfigError
from tablero.log_utils import emit

FOLDER_NAME = "MAIN_PATH"

DEFAULTS = {
    "api": {
        "base_url": "http://localhost:8000/api",
        "timeout": 30,
        "headers": {"Content-Type": "application/json"},
    },
    "tables": {
        "page_size": 10,
        "page_size_options": [10, 20, 30, 40, 50],
    },
    "orders": {
        "delivered_status_id": None,
        "awaiting_delivery_identifier": 2,
    },
}


def resolve_working_folder(base_path, logger=None):
    """
    Carpeta de trabajo:
    1) MAIN_PATH desde .env en la raíz del repo (desarrollo local)
    2) MAIN_PATH desde variables de entorno del sistema (Render.com)
    3) raíz del repo si hay .env sin MAIN_PATH, si no el directorio actual
    """
    env_file = os.path.join(base_path, ".env")

    if os.path.exists(env_file):
        load_dotenv(dotenv_path=env_file)
        env_main_path = os.getenv(FOLDER_NAME)
        if env_main_path:
            emit(f"✅ MAIN_PATH tomado desde .env: {env_main_path}", "success", logger)
            return env_main_path
        emit(
            f"⚠️ Se encontró .env en {env_file} pero la variable {FOLDER_NAME} no está definida. "
            f"Se usará BASE_PATH como working_folder: {base_path}",
            "warning",
            logger,
        )
        return base_path

    env_main_path = os.getenv(FOLDER_NAME)
    if env_main_path:
        emit(f"✅ MAIN_PATH tomado de variables de entorno del sistema: {env_main_path}", "success", logger)
        return env_main_path

    working_folder = os.getcwd()
    emit(
        "⚠️ No se encontró .env ni variable de entorno MAIN_PATH. "
        f"Se usará el directorio actual como working_folder: {working_folder}",
        "warning",
        logger,
    )
    return working_folder


def _merge(base, override):
    merged = dict(base)
    for key, value in (override or {}).items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_config(base_path, logger=None):
    """
    Carga y combina config/open_config.yml (base) y {MAIN_PATH}/config.yml (local).
    El YAML local sobreescribe las claves del base. Devuelve (working_folder, yaml_data).
    """
    working_folder = resolve_working_folder(base_path, logger=logger)

    root_yaml = os.path.join(base_path, "config", "open_config.yml")
    pkg_yaml = os.path.join(working_folder, "config.yml")

    root_exists = os.path.exists(root_yaml)
    pkg_exists = os.path.exists(pkg_yaml)

    if root_exists:
        emit(f"✅ Se encontró configuración raíz: {root_yaml}", "success", logger)
    else:
        emit(f"⚠️ No se encontró configuración raíz en: {root_yaml}", "warning", logger)

    if pkg_exists:
        emit(f"✅ Se encontró configuración de paquete: {pkg_yaml}", "success", logger)
    else:
        emit(f"⚠️ No se encontró configuración de paquete en: {pkg_yaml}", "warning", logger)

    if not root_exists and not pkg_exists:
        raise ConfigError(
            "❌ No se encontró ningún archivo de configuración.\n"
            f"- {root_yaml}\n"
            f"- {pkg_yaml}"
        )

    yaml_data = _merge({}, DEFAULTS)

    if root_exists:
        with open(root_yaml, "r", encoding="utf-8") as f:
            yaml_data = _merge(yaml_data, yaml.safe_load(f) or {})

    if pkg_exists and os.path.abspath(pkg_yaml) != os.path.abspath(root_yaml):
        with open(pkg_yaml, "r", encoding="utf-8") as f:
            yaml_data = _merge(yaml_data, yaml.safe_load(f) or {})

    return working_folder, yaml_data


def get_setting(yaml_data, dotted_key, default=None):
    """get_setting(data, "api.base_url") -> valor o default."""
    node = yaml_data
    for part in dotted_key.split("."):
        if not isinstance(node, dict) or part not in node:
            return default
        node = node[part]
    return node
