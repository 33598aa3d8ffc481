"""Pruebas de la construcción del snapshot."""

from __future__ import annotations

import pytest

from Tools.rnc_indexer.builder import build_snapshot
from Tools.rnc_indexer.models import EmpresaRaw, EmpresaRNC
from Tools.rnc_indexer.parser import parse_file


def _raw(rnc: str, name: str, status: str = "ACTIVO") -> EmpresaRaw:
    return EmpresaRaw(rnc=rnc, razon_social=name, nombre_comercial="IGNORADO", estado=status)


def test_later_duplicate_wins() -> None:
    """Un RNC repetido se queda con la última fila del archivo."""
    snapshot = build_snapshot([_raw("1", "PRIMERO"), _raw("2", "OTRO"), _raw("1", "ULTIMO", "DADO DE BAJA")])

    assert snapshot.count == 2
    assert snapshot.get("1").socialName == "ULTIMO"
    assert snapshot.get("1").status == "DADO DE BAJA"


def test_comercial_name_mirrors_social_name(sample_csv) -> None:
    """El nombre comercial servido siempre es la razón social."""
    snapshot = build_snapshot(parse_file(str(sample_csv)))

    assert snapshot.count > 0
    for record in snapshot.entries.values():
        assert record.comercialName == record.socialName


def test_example_row_is_served_in_api_shape(sample_csv) -> None:
    """La fila de ejemplo produce exactamente los campos servidos."""
    snapshot = build_snapshot(parse_file(str(sample_csv)))

    assert snapshot.get("132138279").model_dump() == {
        "rnc": "132138279",
        "socialName": "ACME SRL",
        "comercialName": "ACME SRL",
        "status": "ACTIVO",
    }


def test_build_is_deterministic(sample_csv) -> None:
    """Dos construcciones sobre el mismo contenido dan el mismo índice."""
    first = build_snapshot(parse_file(str(sample_csv)))
    second = build_snapshot(parse_file(str(sample_csv)))

    assert dict(first.entries) == dict(second.entries)


def test_snapshot_is_read_only() -> None:
    """Las entradas publicadas no se pueden modificar."""
    snapshot = build_snapshot([_raw("1", "A")])

    with pytest.raises(TypeError):
        snapshot.entries["2"] = EmpresaRNC(rnc="2", socialName="B", comercialName="B", status="ACTIVO")


def test_missing_key_returns_none() -> None:
    snapshot = build_snapshot([_raw("1", "A")])

    assert snapshot.get("nope") is None
    assert snapshot.get(" 1") is None
