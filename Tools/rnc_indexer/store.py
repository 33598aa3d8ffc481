# Tools/rnc_indexer/store.py
# Dueño del snapshot publicado. Lecturas concurrentes; una sola construcción a la vez.
#
# Estados: uninitialized -> building -> published
# - get(): la primera llamada construye (una sola vez aunque lleguen muchas a la vez)
# - reload(): reconstruye siempre; solo publica si la construcción terminó bien
# No hay estado "failed": un error se reporta al llamador y el siguiente get/reload reintenta.

import logging
import threading
from contextlib import contextmanager
from typing import Callable, Optional

from .builder import build_snapshot
from .errors import RNCError, ReloadError, SourceIOError
from .models import EmpresaRNC, Snapshot
from .parser import parse_file

logger = logging.getLogger(__name__)

STATE_UNINITIALIZED = "uninitialized"
STATE_BUILDING = "building"
STATE_PUBLISHED = "published"


def load_snapshot(path: str) -> Snapshot:
    """Lee, parsea y construye un snapshot nuevo desde el CSV local."""
    try:
        records = parse_file(path)
    except OSError as e:
        raise SourceIOError(f"No se pudo abrir {path}: {e}") from e
    snapshot = build_snapshot(records)
    logger.info(f"Index loaded: {snapshot.count} entries")
    return snapshot


class ReadWriteLock:
    """Muchos lectores o un escritor. Los lectores que llegan con un escritor esperando, esperan."""

    def __init__(self):
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._writers_waiting = 0

    @contextmanager
    def read_locked(self):
        with self._cond:
            while self._writer or self._writers_waiting:
                self._cond.wait()
            self._readers += 1
        try:
            yield
        finally:
            with self._cond:
                self._readers -= 1
                if self._readers == 0:
                    self._cond.notify_all()

    @contextmanager
    def write_locked(self):
        with self._cond:
            self._writers_waiting += 1
            try:
                while self._writer or self._readers:
                    self._cond.wait()
            finally:
                self._writers_waiting -= 1
            self._writer = True
        try:
            yield
        finally:
            with self._cond:
                self._writer = False
                self._cond.notify_all()


class _FirstBuild:
    """Un intento de construcción inicial compartido por quienes llegaron a la vez."""

    def __init__(self):
        self.done = threading.Event()
        self.error: Optional[BaseException] = None


class IndexStore:
    def __init__(self, csv_path: str, loader: Callable[[str], Snapshot] = load_snapshot):
        self.csv_path = csv_path
        self._loader = loader
        self._rw = ReadWriteLock()
        self._snapshot: Optional[Snapshot] = None
        self._building = False
        self._gate = threading.Lock()
        self._first_build: Optional[_FirstBuild] = None

    @property
    def state(self) -> str:
        if self._building:
            return STATE_BUILDING
        if self._snapshot is None:
            return STATE_UNINITIALIZED
        return STATE_PUBLISHED

    @property
    def snapshot(self) -> Optional[Snapshot]:
        with self._rw.read_locked():
            return self._snapshot

    def _build(self) -> Snapshot:
        # Se llama con el lock de escritura tomado
        self._building = True
        try:
            return self._loader(self.csv_path)
        except RNCError as e:
            raise ReloadError(f"Could not load CSV: {e}") from e
        finally:
            self._building = False

    def ensure_built(self) -> None:
        """Construcción inicial única. Los que llegan durante ella esperan y comparten su resultado."""
        if self._snapshot is not None:
            return

        with self._gate:
            if self._snapshot is not None:
                return
            attempt = self._first_build
            owner = attempt is None
            if owner:
                attempt = self._first_build = _FirstBuild()

        if not owner:
            attempt.done.wait()
            if isinstance(attempt.error, ReloadError):
                # Mismo mensaje y misma causa, sin compartir la instancia entre hilos
                raise ReloadError(str(attempt.error)) from attempt.error.__cause__
            if attempt.error is not None:
                raise ReloadError(f"Could not load CSV: {attempt.error!r}") from attempt.error
            return

        try:
            with self._rw.write_locked():
                # Un reload() pudo haber publicado mientras esperábamos el lock
                if self._snapshot is None:
                    self._snapshot = self._build()
        except BaseException as e:
            attempt.error = e
            raise
        finally:
            with self._gate:
                self._first_build = None
            attempt.done.set()

    def get(self, rnc: str) -> Optional[EmpresaRNC]:
        self.ensure_built()
        with self._rw.read_locked():
            return self._snapshot.get(rnc)

    def reload(self) -> Snapshot:
        """
        Reconstruye desde el archivo. Mientras dura, los lectores esperan.
        Si falla, el snapshot anterior (si existe) sigue publicado y se lanza ReloadError.
        """
        with self._rw.write_locked():
            snapshot = self._build()
            self._snapshot = snapshot
        return snapshot
