import copy
import json
import logging
import os
import tempfile
import threading
from typing import Any, Callable, Dict, List, Optional

from .errors import StorageError

logger = logging.getLogger("eventos.storage")

# coleções criadas no arquivo quando ele ainda não existe
DEFAULTS = {
    "eventos": [],
}


def ensure_data_dir(path: str) -> None:
    directory = os.path.dirname(os.path.abspath(path))
    if not os.path.exists(directory):
        os.makedirs(directory)


class JsonStore:
    """Documento JSON com coleções nomeadas, espelhado em memória.

    Toda alteração é gravada no arquivo na mesma chamada. Com `path=None`
    o documento vive só em memória (útil para testes).
    """

    def __init__(self, path: Optional[str] = None, defaults: Optional[Dict[str, List]] = None):
        self.path = path
        self._lock = threading.RLock()
        self._defaults = copy.deepcopy(defaults if defaults is not None else DEFAULTS)
        self._data = self._load()
        self._snapshot = copy.deepcopy(self._data)

    def _load(self) -> Dict[str, Any]:
        data = copy.deepcopy(self._defaults)
        if self.path is None:
            return data

        ensure_data_dir(self.path)
        if not os.path.exists(self.path):
            # criar arquivo apenas com as coleções padrão
            logger.info("Criando arquivo de dados em %s", self.path)
            try:
                self._write(data)
            except OSError as e:
                raise StorageError(f"Não foi possível criar {self.path}", {"erro": str(e)}) from e
            return data

        try:
            with open(self.path, encoding="utf-8") as f:
                content = f.read()
            loaded = json.loads(content) if content.strip() else {}
        except (OSError, ValueError) as e:
            raise StorageError(f"Não foi possível ler {self.path}", {"erro": str(e)}) from e
        if not isinstance(loaded, dict):
            raise StorageError(f"Formato inválido em {self.path}: esperado um objeto JSON")

        for name, rows in loaded.items():
            if not isinstance(rows, list):
                raise StorageError(f"Formato inválido em {self.path}: coleção {name} deve ser uma lista")
            data[name] = rows
        return data

    def _write(self, data: Dict[str, Any]) -> None:
        directory = os.path.dirname(os.path.abspath(self.path))
        fd, tmp_path = tempfile.mkstemp(prefix=".db-", suffix=".json", dir=directory)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, ensure_ascii=False, indent=2)
            os.replace(tmp_path, self.path)
        except BaseException:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise

    def persist(self) -> None:
        """Grava o documento inteiro. Em caso de falha a memória volta ao último estado gravado."""
        with self._lock:
            if self.path is not None:
                try:
                    self._write(self._data)
                except (OSError, TypeError, ValueError) as e:
                    self._data = copy.deepcopy(self._snapshot)
                    raise StorageError(f"Falha ao gravar {self.path}", {"erro": str(e)}) from e
                logger.debug("Documento gravado em %s", self.path)
            self._snapshot = copy.deepcopy(self._data)

    def _rows(self, name: str) -> List[Dict[str, Any]]:
        return self._data.setdefault(name, [])

    def collection(self, name: str) -> List[Dict[str, Any]]:
        with self._lock:
            return copy.deepcopy(self._data.get(name, []))

    def ids(self, name: str) -> List[str]:
        with self._lock:
            return [r.get("id") for r in self._data.get(name, [])]

    def find(self, name: str, record_id: str) -> Optional[Dict[str, Any]]:
        with self._lock:
            for r in self._data.get(name, []):
                if r.get("id") == record_id:
                    return copy.deepcopy(r)
        return None

    def append(self, name: str, record: Dict[str, Any]) -> Dict[str, Any]:
        with self._lock:
            self._rows(name).append(copy.deepcopy(record))
            self.persist()
            return copy.deepcopy(record)

    def append_with_id(self, name: str, body: Dict[str, Any], id_factory: Callable, build: Callable = dict) -> Dict[str, Any]:
        """Gera o id e acrescenta o registro sob o mesmo lock.

        `id_factory(ids_existentes)` devolve o novo id ou None; o registro é
        `build({"id": novo_id, **body})`, então um `id` em `body` prevalece.
        """
        with self._lock:
            novo_id = id_factory(self.ids(name))
            if novo_id is None:
                raise StorageError("Não foi possível gerar um id livre")
            return self.append(name, build({"id": novo_id, **body}))

    def merge_update(self, name: str, record_id: str, partial: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """Mescla `partial` no primeiro registro com o id. Retorna o registro resultante ou None."""
        with self._lock:
            for r in self._rows(name):
                if r.get("id") == record_id:
                    r.update(copy.deepcopy(partial))
                    self.persist()
                    return copy.deepcopy(r)
        return None

    def remove_all(self, name: str, record_id: str) -> int:
        with self._lock:
            rows = self._rows(name)
            kept = [r for r in rows if r.get("id") != record_id]
            removed = len(rows) - len(kept)
            if removed:
                self._data[name] = kept
                self.persist()
            return removed
