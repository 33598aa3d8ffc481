# Tools/rnc_indexer/parser.py
# Lectura tolerante del CSV de la DGII
# - Primer intento en UTF-8; si falla, se rebobina y se reintenta UNA vez en latin-1
# - La primera fila siempre es encabezado; filas con menos de 5 columnas se ignoran

import io
import csv
import logging
from dataclasses import dataclass
from enum import Enum
from typing import BinaryIO, List, Optional, Tuple

from .config import (
    PRIMARY_ENCODING,
    FALLBACK_ENCODING,
    CSV_DELIMITER,
    MIN_COLUMNS,
    COL_RNC,
    COL_RAZON_SOCIAL,
    COL_NOMBRE_COMERCIAL,
    COL_ESTADO,
)
from .errors import DecodeError
from .models import EmpresaRaw

logger = logging.getLogger(__name__)


class ParseStatus(str, Enum):
    SUCCESS = "success"
    DECODE_FAILED = "decode_failed"


@dataclass(frozen=True)
class ParseAttempt:
    """Resultado etiquetado de un intento de lectura con una codificación."""
    status: ParseStatus
    encoding: str
    records: Tuple[EmpresaRaw, ...] = ()
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status is ParseStatus.SUCCESS


def row_to_raw(row: List[str]) -> EmpresaRaw:
    return EmpresaRaw(
        rnc=row[COL_RNC].strip(),
        razon_social=row[COL_RAZON_SOCIAL].strip(),
        nombre_comercial=row[COL_NOMBRE_COMERCIAL].strip(),
        estado=row[COL_ESTADO].strip(),
    )


def try_parse(stream: BinaryIO, encoding: str) -> ParseAttempt:
    """
    Lee todo el stream con la codificación dada, desde la posición actual.
    Nunca lanza por errores de decodificación o de estructura: los devuelve
    como DECODE_FAILED para que el llamador decida si reintenta.
    """
    text = io.TextIOWrapper(stream, encoding=encoding, errors="strict", newline="")
    records: List[EmpresaRaw] = []
    try:
        reader = csv.reader(text, delimiter=CSV_DELIMITER, strict=False)
        for i, row in enumerate(reader):
            if i == 0 or len(row) < MIN_COLUMNS:
                continue
            records.append(row_to_raw(row))
    except (UnicodeDecodeError, csv.Error) as e:
        return ParseAttempt(ParseStatus.DECODE_FAILED, encoding, error=str(e))
    finally:
        # No cerrar el stream del llamador
        text.detach()

    return ParseAttempt(ParseStatus.SUCCESS, encoding, records=tuple(records))


def parse_records(stream: BinaryIO) -> List[EmpresaRaw]:
    """
    Convierte el CSV en registros crudos. Exactamente un reintento:
    UTF-8 primero, latin-1 después. Lanza DecodeError si ambos fallan.
    """
    start = stream.tell()
    first = try_parse(stream, PRIMARY_ENCODING)
    if first.ok:
        return list(first.records)

    logger.warning(f"CSV no es {PRIMARY_ENCODING} válido ({first.error}); reintentando en {FALLBACK_ENCODING}")
    stream.seek(start)
    second = try_parse(stream, FALLBACK_ENCODING)
    if second.ok:
        return list(second.records)

    raise DecodeError(
        f"No se pudo leer el CSV: {PRIMARY_ENCODING}: {first.error}; {FALLBACK_ENCODING}: {second.error}"
    )


def parse_file(path: str) -> List[EmpresaRaw]:
    with open(path, "rb") as f:
        return parse_records(f)
