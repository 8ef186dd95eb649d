"""
Schema leve (dataclass) de um evento.
O schema é aberto: campos além de `id`, `name` e `costo` são preservados em `extras`.
"""
import secrets
import string
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Optional

# mesmo alfabeto do nanoid (URL-safe)
ID_ALPHABET = string.ascii_letters + string.digits + "_-"
ID_LENGTH = 8


def generate_id(length: int = ID_LENGTH) -> str:
    return "".join(secrets.choice(ID_ALPHABET) for _ in range(length))


def generate_unique_id(existing: Iterable[str], length: int = ID_LENGTH, attempts: int = 10) -> Optional[str]:
    """Gera um id que não está em `existing`. Retorna None se todas as tentativas colidirem."""
    taken = set(existing)
    for _ in range(attempts):
        candidate = generate_id(length)
        if candidate not in taken:
            return candidate
    return None


@dataclass
class Evento:
    id: Optional[str] = None
    name: Optional[str] = None
    costo: Optional[str] = None
    extras: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Evento":
        # campos conhecidos com valor null continuam em extras para não se perderem
        known = {k: data[k] for k in ("id", "name", "costo") if data.get(k) is not None}
        extras = {k: v for k, v in data.items() if k not in known}
        return cls(extras=extras, **known)

    def to_dict(self) -> Dict[str, Any]:
        row = {}
        for k in ("id", "name", "costo"):
            value = getattr(self, k)
            if value is not None:
                row[k] = value
        row.update(self.extras)
        return row
