# Tools/rnc_indexer/config.py
# Configuración y constantes para el índice de RNC (DGII)

import os
from dataclasses import dataclass
from typing import Optional

# ----------------------------
# Fuente de datos
# ----------------------------
CSV_FILE_NAME = "rncs.csv"
DGII_SOURCE_URL = "https://dgii.gov.do/app/WebApps/Consultas/RNC/RNC_CONTRIBUYENTES.zip"
DATASET_SUFFIX = ".csv"

# La DGII rechaza clientes sin User-Agent de navegador
BROWSER_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/124.0 Safari/537.36"
)
DOWNLOAD_TIMEOUT_SECONDS = 60.0

# ----------------------------
# Parseo del CSV
# ----------------------------
PRIMARY_ENCODING = "utf-8"
FALLBACK_ENCODING = "latin-1"
CSV_DELIMITER = ","
MIN_COLUMNS = 5

COL_RNC = 0
COL_RAZON_SOCIAL = 1
COL_NOMBRE_COMERCIAL = 2
COL_ESTADO = 4

# ----------------------------
# API
# ----------------------------
DEFAULT_PORT = 9922
CEDULA_API_URL = "https://api.digital.gob.do/v3/cedulas/{cedula}/validate"
CEDULA_TIMEOUT_SECONDS = 30.0

NOT_FOUND_MESSAGE = "This RNC does not exist"


@dataclass(frozen=True)
class RNCSettings:
    """Parámetros de ejecución; se leen del entorno (y del .env vía dotenv)."""
    csv_path: str = CSV_FILE_NAME
    source_url: str = DGII_SOURCE_URL
    source_suffix: str = DATASET_SUFFIX
    download_timeout: float = DOWNLOAD_TIMEOUT_SECONDS
    user_agent: str = BROWSER_USER_AGENT
    work_dir: Optional[str] = None
    port: int = DEFAULT_PORT
    admin_token: Optional[str] = None
    cedula_api_url: str = CEDULA_API_URL

    @classmethod
    def from_env(cls) -> "RNCSettings":
        return cls(
            csv_path=os.getenv("RNCS_CSV_PATH", CSV_FILE_NAME),
            source_url=os.getenv("RNCS_SOURCE_URL", DGII_SOURCE_URL),
            source_suffix=os.getenv("RNCS_SOURCE_SUFFIX", DATASET_SUFFIX),
            download_timeout=float(os.getenv("RNCS_DOWNLOAD_TIMEOUT", DOWNLOAD_TIMEOUT_SECONDS)),
            user_agent=os.getenv("RNCS_USER_AGENT", BROWSER_USER_AGENT),
            work_dir=os.getenv("RNCS_WORK_DIR") or None,
            port=int(os.getenv("PORT", DEFAULT_PORT)),
            admin_token=os.getenv("ADMIN_ACCESS_TOKEN") or None,
            cedula_api_url=os.getenv("CEDULA_API_URL", CEDULA_API_URL),
        )
