# Tools/rnc_indexer/errors.py
# Jerarquía de errores del índice de RNC


class RNCError(Exception):
    """Base para todas las fallas del índice de RNC."""


class AcquisitionError(RNCError):
    """No se pudo obtener la copia local del CSV."""


class DownloadError(AcquisitionError):
    """Falla de red o respuesta no-2xx al descargar el ZIP."""


class ExtractionError(AcquisitionError):
    """El ZIP no es válido o no contiene el archivo esperado."""


class SourceIOError(AcquisitionError):
    """Error de disco al leer o escribir el archivo local."""


class DecodeError(RNCError):
    """El CSV no se pudo leer ni en UTF-8 ni en la codificación legacy."""


class ReloadError(RNCError):
    """Falló la construcción del índice; la causa queda en __cause__."""


class NotFoundError(RNCError):
    """El RNC no existe en el snapshot publicado."""

    def __init__(self, rnc: str):
        super().__init__(f"RNC not found: {rnc}")
        self.rnc = rnc
