"""
Índice en memoria de RNC de la DGII: descarga, parseo, snapshot y recarga en caliente.
"""
from .config import RNCSettings
from .errors import (
    RNCError,
    AcquisitionError,
    DownloadError,
    ExtractionError,
    SourceIOError,
    DecodeError,
    ReloadError,
    NotFoundError,
)
from .models import EmpresaRaw, EmpresaRNC, Snapshot
from .parser import parse_records, parse_file, try_parse, ParseAttempt, ParseStatus
from .builder import build_snapshot
from .store import IndexStore, load_snapshot
from .lookup import RNCLookup
from .source import SourceAcquirer
from .context import RNCContext, build_context

__all__ = [
    "RNCSettings",
    "RNCError",
    "AcquisitionError",
    "DownloadError",
    "ExtractionError",
    "SourceIOError",
    "DecodeError",
    "ReloadError",
    "NotFoundError",
    "EmpresaRaw",
    "EmpresaRNC",
    "Snapshot",
    "parse_records",
    "parse_file",
    "try_parse",
    "ParseAttempt",
    "ParseStatus",
    "build_snapshot",
    "IndexStore",
    "load_snapshot",
    "RNCLookup",
    "SourceAcquirer",
    "RNCContext",
    "build_context",
]
