# Tools/rnc_indexer/lookup.py
# Camino de lectura: resuelve un RNC contra el snapshot publicado

from .errors import NotFoundError
from .models import EmpresaRNC
from .store import IndexStore


class RNCLookup:
    def __init__(self, store: IndexStore):
        self.store = store

    def lookup(self, rnc: str) -> EmpresaRNC:
        """Coincidencia exacta; no normaliza el RNC recibido."""
        found = self.store.get(rnc)
        if found is None:
            raise NotFoundError(rnc)
        return found
