# Tools/rnc_indexer/source.py
# Garantiza la copia local del CSV: la descarga del ZIP de la DGII si no existe
# - Un solo intento con timeout fijo (sin reintentos)
# - Los temporales se borran siempre, haya éxito o error

import os
import shutil
import logging
import tempfile
import threading
import zipfile
from typing import Callable, Optional

import httpx

from .config import RNCSettings
from .errors import DownloadError, ExtractionError, ReloadError, SourceIOError

logger = logging.getLogger(__name__)


def find_dataset_entry(archive: zipfile.ZipFile, suffix: str) -> zipfile.ZipInfo:
    """Primera entrada cuyo nombre termina en `suffix` (sin distinguir mayúsculas)."""
    suffix = suffix.lower()
    for info in archive.infolist():
        if not info.is_dir() and info.filename.lower().endswith(suffix):
            return info
    raise ExtractionError(f"El ZIP no contiene ningún archivo '{suffix}'")


class SourceAcquirer:
    def __init__(
        self,
        settings: RNCSettings,
        on_replaced: Optional[Callable[[], object]] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.settings = settings
        self.path = settings.csv_path
        self.on_replaced = on_replaced
        self._transport = transport
        self._lock = threading.RLock()

    def ensure(self) -> bool:
        """No-op si el archivo ya existe. Devuelve True si hubo que descargarlo."""
        if os.path.exists(self.path):
            return False
        logger.info(f"📥 {self.path} no existe; descargando desde {self.settings.source_url}")
        self.download()
        return True

    def refresh(self) -> None:
        """
        Reemplaza el CSV local con uno recién descargado y reconstruye el índice.
        Si la reconstrucción falla se registra y el snapshot anterior sigue vigente;
        la descarga se considera exitosa igual.
        """
        self.download()
        if self.on_replaced is None:
            return
        try:
            self.on_replaced()
        except ReloadError as e:
            logger.error(f"❌ CSV descargado pero el índice no se pudo recargar: {e}")

    def download(self) -> None:
        target_dir = os.path.dirname(os.path.abspath(self.path))
        # Un solo reemplazo a la vez (p. ej. dos POST /api/reload simultáneos)
        with self._lock:
            staged = None
            try:
                os.makedirs(target_dir, exist_ok=True)
                with tempfile.TemporaryDirectory(prefix="rncs-", dir=self.settings.work_dir) as tmp:
                    zip_path = os.path.join(tmp, "source.zip")
                    self._fetch(zip_path)
                    # Se extrae junto al destino para que os.replace sea atómico
                    fd, staged = tempfile.mkstemp(prefix=".rncs-", suffix=".part", dir=target_dir)
                    os.close(fd)
                    self._extract(zip_path, staged)
                    os.replace(staged, self.path)
                    staged = None
            except OSError as e:
                raise SourceIOError(f"Error de disco preparando {self.path}: {e}") from e
            finally:
                if staged is not None:
                    self._discard(staged)
        logger.info(f"✅ CSV actualizado en {self.path}")

    @staticmethod
    def _discard(path: str) -> None:
        try:
            os.remove(path)
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.warning(f"⚠️ No se pudo borrar el temporal {path}: {e}")

    def _client(self) -> httpx.Client:
        return httpx.Client(
            timeout=self.settings.download_timeout,
            headers={"User-Agent": self.settings.user_agent},
            follow_redirects=True,
            transport=self._transport,
        )

    def _fetch(self, dest: str) -> None:
        url = self.settings.source_url
        try:
            with self._client() as client:
                with client.stream("GET", url) as response:
                    response.raise_for_status()
                    with open(dest, "wb") as f:
                        for chunk in response.iter_bytes():
                            f.write(chunk)
        except httpx.HTTPStatusError as e:
            raise DownloadError(f"HTTP {e.response.status_code} descargando {url}") from e
        except httpx.HTTPError as e:
            raise DownloadError(f"Error de red descargando {url}: {e}") from e

    def _extract(self, zip_path: str, dest: str) -> None:
        try:
            with zipfile.ZipFile(zip_path) as archive:
                entry = find_dataset_entry(archive, self.settings.source_suffix)
                with archive.open(entry) as src, open(dest, "wb") as out:
                    shutil.copyfileobj(src, out)
        except zipfile.BadZipFile as e:
            raise ExtractionError(f"Archivo ZIP inválido: {e}") from e
        logger.info(f"Extraído {entry.filename} del ZIP")
