# Tools/rnc_indexer/models.py
# Modelos de datos para el índice de RNC

from dataclasses import dataclass, field
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Mapping, Optional

from pydantic import BaseModel, ConfigDict


@dataclass(frozen=True)
class EmpresaRaw:
    """Campos literales de una fila del CSV de la DGII (ya recortados)."""
    rnc: str
    razon_social: str
    nombre_comercial: str
    estado: str


class EmpresaRNC(BaseModel):
    """Forma servida por la API y el CLI. Los nombres JSON no se pueden cambiar."""
    model_config = ConfigDict(frozen=True)

    rnc: str
    socialName: str
    comercialName: str
    status: str

    @classmethod
    def from_raw(cls, raw: EmpresaRaw) -> "EmpresaRNC":
        # El CSV no distingue nombre comercial: se repite la razón social
        return cls(
            rnc=raw.rnc,
            socialName=raw.razon_social,
            comercialName=raw.razon_social,
            status=raw.estado,
        )


class ApiError(BaseModel):
    error: str


@dataclass(frozen=True)
class Snapshot:
    """Una construcción completa e inmutable del índice."""
    entries: Mapping[str, EmpresaRNC]
    built_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def count(self) -> int:
        return len(self.entries)

    def get(self, rnc: str) -> Optional[EmpresaRNC]:
        return self.entries.get(rnc)

    @classmethod
    def freeze(cls, entries: dict) -> "Snapshot":
        return cls(entries=MappingProxyType(entries))
