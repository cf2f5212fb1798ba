import logging
import traceback

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response
from starlette.concurrency import run_in_threadpool

from .config import get_settings
from .models import BuildRequest, ErrorResponse, HealthResponse
from .pipeline import build_workbook
from .rules import XLSX_MEDIA_TYPE
from .sources import read_csv_text

settings = get_settings()
logging.basicConfig(level=settings.log_level.upper())
logger = logging.getLogger(__name__)

app = FastAPI(
    title="winter-xlsx",
    description="Two winter-service CSV exports in, one styled xlsx workbook out",
    version="0.1.0",
)


def _error(exc: BaseException, message: str = "", status_code: int = 400) -> JSONResponse:
    stack = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    return JSONResponse(status_code=status_code, content={"error": message or str(exc), "stack": stack})


@app.exception_handler(RequestValidationError)
async def invalid_body(request: Request, exc: RequestValidationError):
    return _error(exc, f"Invalid request body: {exc.errors()}")


@app.get("/health", response_model=HealthResponse)
def health():
    return {"ok": True}


@app.post(
    "/api/build-xlsx",
    response_class=Response,
    responses={200: {"content": {XLSX_MEDIA_TYPE: {}}}, 400: {"model": ErrorResponse}},
)
async def build_xlsx(body: BuildRequest):
    try:
        sap_text = await read_csv_text(
            body.sheet1_url, body.sheet1_csv, body.sheet1_headers, timeout=settings.fetch_timeout
        )
        det_text = await read_csv_text(
            body.sheet2_url, body.sheet2_csv, body.sheet2_headers, timeout=settings.fetch_timeout
        )
        data = await run_in_threadpool(build_workbook, det_text, sap_text, body.extracted_at)
    except Exception as exc:
        logger.exception("build-xlsx failed")
        return _error(exc)

    file_name = body.file_name or settings.default_file_name
    return Response(
        content=data,
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{file_name}"'},
    )


@app.api_route(
    "/api/build-xlsx",
    methods=["GET", "HEAD", "OPTIONS", "PUT", "PATCH", "DELETE"],
    include_in_schema=False,
)
def method_not_allowed():
    return JSONResponse(status_code=405, content={"error": "Use POST"}, headers={"Allow": "POST"})
