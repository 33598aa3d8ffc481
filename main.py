import sys
import json
import time
import logging
import argparse
from dotenv import load_dotenv
load_dotenv()
import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from utils.logging_config import setup_logging
from endpoints.rnc import router as rnc_router
from Tools.rnc_indexer.config import NOT_FOUND_MESSAGE, DEFAULT_PORT
from Tools.rnc_indexer.context import RNCContext, build_context
from Tools.rnc_indexer.errors import AcquisitionError, NotFoundError, ReloadError

logger = logging.getLogger("rncs")

USAGE = """
rncs  -  RNC lookup in DGII CSV

USAGE (CLI mode):
  %(prog)s <RNC>

Example:
  %(prog)s 132138279

USAGE (API mode):
  %(prog)s --foreground [port]

  If [port] is not specified, {port} is used.
  Exposed endpoints: GET  /api/checkrnc/{{RNC}}
                     GET  /api/checkcedula/{{CEDULA}}
                     POST /api/reload           (hot reload CSV)
""".format(port=DEFAULT_PORT)


def create_app(ctx: RNCContext) -> FastAPI:
    app = FastAPI(
        title="RNC Lookup API",
        description="Consulta de RNC contra el padrón de contribuyentes de la DGII",
        version="1.0.0",
    )
    app.state.rnc = ctx

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        ip = request.headers.get("X-Forwarded-For") or (request.client.host if request.client else "-")
        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.info(f"[API] {ip} {request.url.path} {response.status_code} {request.method} ({elapsed_ms:.1f} ms)")
        return response

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)})

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.exception(f"Unhandled error on {request.url.path}")
        return JSONResponse(
            status_code=500,
            content={"error": f"An unexpected error occurred: {str(exc)}"}
        )

    app.include_router(rnc_router)

    @app.get("/")
    async def root():
        return {"message": "RNC lookup API is running"}

    return app


def _print_json(payload) -> None:
    print(json.dumps(payload, ensure_ascii=False, indent=2))


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="rncs", usage=USAGE, add_help=True)
    p.add_argument("--foreground", action="store_true", help="Run in API (HTTP) mode")
    p.add_argument("args", nargs="*")
    return p


def run_lookup(ctx: RNCContext, rnc: str) -> int:
    try:
        found = ctx.lookup.lookup(rnc)
    except NotFoundError:
        _print_json({"error": NOT_FOUND_MESSAGE})
        return 1
    except ReloadError as e:
        _print_json({"error": str(e)})
        return 1
    _print_json(found.model_dump())
    return 0


def parse_port(value: str) -> int:
    port = int(value)
    if port <= 0 or port > 65535:
        raise ValueError(value)
    return port


def cli(argv=None, ctx: RNCContext = None) -> int:
    parser = _build_parser()
    argv = sys.argv[1:] if argv is None else argv
    if not argv:
        parser.print_usage()
        return 0

    opts = parser.parse_args(argv)
    setup_logging()
    if ctx is None:
        try:
            ctx = build_context()
        except ValueError as e:
            # PORT o RNCS_DOWNLOAD_TIMEOUT con valores no numéricos
            print(f"Error: invalid configuration: {e}", file=sys.stderr)
            parser.print_usage(sys.stderr)
            return 1

    if opts.foreground:
        if len(opts.args) > 1:
            print("Error: too many arguments in API mode", file=sys.stderr)
            parser.print_usage(sys.stderr)
            return 1
        port = ctx.settings.port
        if opts.args:
            try:
                port = parse_port(opts.args[0])
            except ValueError:
                print(f'Error: invalid port "{opts.args[0]}"', file=sys.stderr)
                parser.print_usage(sys.stderr)
                return 1
    elif len(opts.args) != 1:
        print("Error: missing RNC", file=sys.stderr)
        parser.print_usage(sys.stderr)
        return 1

    # Sin CSV no hay nada que servir: este es el único error fatal
    try:
        ctx.acquirer.ensure()
    except AcquisitionError as e:
        logger.critical(f"Could not obtain the CSV file: {e}")
        return 1

    if not opts.foreground:
        return run_lookup(ctx, opts.args[0])

    # Construir el índice antes de aceptar peticiones
    try:
        ctx.store.ensure_built()
    except ReloadError as e:
        logger.critical(f"Could not load CSV: {e}")
        return 1

    logger.info(f"HTTP server with CORS at :{port}")
    uvicorn.run(create_app(ctx), host="0.0.0.0", port=port, timeout_keep_alive=60, log_level="info")
    return 0


def main():
    sys.exit(cli())


if __name__ == "__main__":
    main()
