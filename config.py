"""
Configuração da API de eventos.
Os dados ficam em um único arquivo JSON (por padrão `app/data/db.json`),
acessado via `app.storage.JsonStore`. Valores podem vir do ambiente ou de um `.env`.
"""
import os

from dotenv import find_dotenv, load_dotenv

_dotenv_path = find_dotenv(usecwd=True)
if _dotenv_path:
    load_dotenv(_dotenv_path)

BASE_DIR = os.path.dirname(__file__)
JSON_DATA_DIR = os.path.join(BASE_DIR, "app", "data")


def _env_bool(name: str, default: bool = False) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ("true", "1", "yes")


class Config:
    """Configuração base da aplicação."""

    DATA_FILE = os.environ.get("EVENTOS_DB_FILE") or os.path.join(JSON_DATA_DIR, "db.json")
    EVENTOS_URL_PREFIX = os.environ.get("EVENTOS_URL_PREFIX", "/eventos")
    ID_LENGTH = int(os.environ.get("EVENTOS_ID_LENGTH", "8"))

    # DEBUG flag para desenvolvimento local
    DEBUG = _env_bool("DEBUG", False)
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
    LOG_DIR = os.environ.get("LOG_DIR")

    HOST = os.environ.get("HOST", "0.0.0.0")
    PORT = int(os.environ.get("PORT", "4000"))
