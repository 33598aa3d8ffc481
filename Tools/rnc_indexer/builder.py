# Tools/rnc_indexer/builder.py
# Construye el snapshot del índice a partir de registros crudos

from typing import Dict, Iterable

from .models import EmpresaRaw, EmpresaRNC, Snapshot


def build_snapshot(records: Iterable[EmpresaRaw]) -> Snapshot:
    """
    Una sola pasada, sin I/O. Si un RNC se repite gana la última fila
    en orden de archivo.
    """
    index: Dict[str, EmpresaRNC] = {}
    for raw in records:
        index[raw.rnc] = EmpresaRNC.from_raw(raw)
    return Snapshot.freeze(index)
