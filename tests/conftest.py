"""Fixtures compartidas para las pruebas del índice de RNC."""

from __future__ import annotations

import io
import zipfile
from pathlib import Path

import httpx
import pytest

from Tools.rnc_indexer.config import RNCSettings

SAMPLE_CSV = (
    'RNC,RAZON SOCIAL,ACTIVIDAD ECONOMICA,FECHA,ESTADO,REGIMEN\n'
    '"132138279","ACME SRL","",,"ACTIVO"\n'
    '"101010101","  FARMACIA LOS PRADOS  ","VENTA DE MEDICAMENTOS","01/02/2001"," SUSPENDIDO ","NORMAL"\n'
    '"999",CORTA,FILA\n'
    '"401000001","COLMADO VIEJO","","","ACTIVO"\n'
    '"401000001","COLMADO NUEVO","","","DADO DE BAJA"\n'
)

SOURCE_URL = "https://dgii.example.test/RNC_CONTRIBUYENTES.zip"


@pytest.fixture
def sample_csv(tmp_path: Path) -> Path:
    path = tmp_path / "rncs.csv"
    path.write_text(SAMPLE_CSV, encoding="utf-8")
    return path


@pytest.fixture
def work_dir(tmp_path: Path) -> Path:
    path = tmp_path / "work"
    path.mkdir()
    return path


@pytest.fixture
def make_settings(tmp_path: Path, work_dir: Path):
    def _make(csv_path: Path | None = None, **overrides) -> RNCSettings:
        values = {
            "csv_path": str(csv_path or tmp_path / "rncs.csv"),
            "source_url": SOURCE_URL,
            "work_dir": str(work_dir),
        }
        values.update(overrides)
        return RNCSettings(**values)

    return _make


@pytest.fixture
def make_zip():
    def _make(entries: dict[str, bytes]) -> bytes:
        buf = io.BytesIO()
        with zipfile.ZipFile(buf, "w") as archive:
            for name, data in entries.items():
                archive.writestr(name, data)
        return buf.getvalue()

    return _make


@pytest.fixture
def zip_transport():
    """MockTransport que sirve un cuerpo fijo y guarda cada petición recibida."""

    def _make(body: bytes, status_code: int = 200):
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(status_code, content=body)

        return httpx.MockTransport(handler), seen

    return _make
