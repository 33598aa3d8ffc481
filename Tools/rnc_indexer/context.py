# Tools/rnc_indexer/context.py
# Arma los componentes del servicio. Lo usan por igual el CLI y la API.

from dataclasses import dataclass
from typing import Optional

import httpx

from .config import RNCSettings
from .lookup import RNCLookup
from .source import SourceAcquirer
from .store import IndexStore


@dataclass
class RNCContext:
    settings: RNCSettings
    store: IndexStore
    lookup: RNCLookup
    acquirer: SourceAcquirer
    # Solo para pruebas: transporte del proxy de cédulas
    cedula_transport: Optional[httpx.AsyncBaseTransport] = None


def build_context(
    settings: Optional[RNCSettings] = None,
    download_transport: Optional[httpx.BaseTransport] = None,
    cedula_transport: Optional[httpx.AsyncBaseTransport] = None,
) -> RNCContext:
    settings = settings or RNCSettings.from_env()
    store = IndexStore(settings.csv_path)
    acquirer = SourceAcquirer(settings, on_replaced=store.reload, transport=download_transport)
    return RNCContext(
        settings=settings,
        store=store,
        lookup=RNCLookup(store),
        acquirer=acquirer,
        cedula_transport=cedula_transport,
    )
