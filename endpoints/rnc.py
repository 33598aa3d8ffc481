import logging

import httpx
from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse, Response

from Tools.rnc_indexer.config import NOT_FOUND_MESSAGE, CEDULA_TIMEOUT_SECONDS
from Tools.rnc_indexer.errors import AcquisitionError, NotFoundError, ReloadError
from Tools.rnc_indexer.models import ApiError, EmpresaRNC

router = APIRouter(prefix="/api")
logger = logging.getLogger(__name__)


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ApiError(error=message).model_dump())


@router.get("/checkrnc/")
def check_rnc_missing():
    return error_response(400, "RNC not provided")


@router.get("/checkrnc/{rnc}", response_model=EmpresaRNC)
def check_rnc(rnc: str, request: Request):
    ctx = request.app.state.rnc
    try:
        return ctx.lookup.lookup(rnc)
    except NotFoundError:
        return error_response(404, NOT_FOUND_MESSAGE)
    except ReloadError as e:
        logger.error(f"❌ Índice no disponible: {e}")
        return error_response(503, str(e))


@router.post("/reload")
def reload_csv(request: Request):
    ctx = request.app.state.rnc
    expected_token = ctx.settings.admin_token
    if expected_token and request.headers.get("X-Admin-Token") != expected_token:
        return error_response(403, "Invalid or missing admin token.")

    try:
        ctx.acquirer.refresh()
    except AcquisitionError as e:
        logger.error(f"❌ Falló la recarga del CSV: {e}")
        return error_response(500, f"Error downloading CSV: {e}")
    return {"status": "reloaded"}


@router.api_route("/reload", methods=["GET", "PUT", "PATCH", "DELETE"], include_in_schema=False)
def reload_wrong_method():
    return error_response(405, "Method not allowed")


@router.get("/checkcedula/")
def check_cedula_missing():
    return error_response(400, "Cedula not provided")


@router.get("/checkcedula/{cedula}")
async def check_cedula(cedula: str, request: Request):
    """Proxy directo a la API de validación de cédulas del gobierno."""
    ctx = request.app.state.rnc
    url = ctx.settings.cedula_api_url.format(cedula=cedula)
    try:
        async with httpx.AsyncClient(timeout=CEDULA_TIMEOUT_SECONDS, transport=ctx.cedula_transport) as client:
            resp = await client.get(url)
    except httpx.HTTPError as e:
        logger.error(f"❌ Error contactando API de cédulas: {e}")
        return error_response(502, "Error contacting external API")

    return Response(
        content=resp.content,
        status_code=resp.status_code,
        media_type="application/json; charset=utf-8",
    )
