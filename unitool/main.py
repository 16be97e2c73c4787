import base64
import hashlib
import io
import logging

from fastapi import FastAPI, UploadFile, File, HTTPException

from . import __version__
from .compare import compare_strings
from .errors import InvalidInputError, NotUtf8Error
from .models import (
    CheckResponse,
    CompareRequest,
    HealthResponse,
    NormalizedFile,
    NormalizeResponse,
    StringComparison,
)
from .normalize import check_lines, decode_utf8, normalize_stream, text_lines
from .rules import TARGET_ENCODING

logging.basicConfig(level=logging.INFO)

logger = logging.getLogger(__name__)

app = FastAPI(
    title="unitool",
    description="Unicode NFKC checking and normalization for text files",
    version=__version__,
)


async def _read_text(file: UploadFile) -> str:
    raw = await file.read()
    try:
        return decode_utf8(raw)
    except NotUtf8Error as e:
        logger.info("Rejected upload %s: %s", file.filename, e)
        raise HTTPException(status_code=422, detail=str(e))


@app.get("/health", response_model=HealthResponse)
def health():
    return {"ok": True}


@app.post("/check", response_model=CheckResponse)
async def check(file: UploadFile = File(...)):
    text = await _read_text(file)
    report = check_lines(text_lines(text))
    logger.info(
        "Checked %s: %d lines, %d issue(s)",
        file.filename,
        report.lines_processed,
        len(report.issues),
    )
    return CheckResponse(
        filename=file.filename or "",
        lines_processed=report.lines_processed,
        issues=report.issues,
        invalid_lines=report.invalid_lines,
    )


@app.post("/normalize", response_model=NormalizeResponse)
async def normalize_upload(file: UploadFile = File(...)):
    text = await _read_text(file)

    out = io.StringIO(newline="")
    result = normalize_stream(text_lines(text), out)
    normalized_bytes = out.getvalue().encode(TARGET_ENCODING)

    logger.info(
        "Normalized %s: %d lines processed, %d lines normalized",
        file.filename,
        result.lines_processed,
        result.lines_changed,
    )
    return NormalizeResponse(
        normalized_file=NormalizedFile(
            sha256=hashlib.sha256(normalized_bytes).hexdigest(),
            encoding=TARGET_ENCODING,
            content_b64=base64.b64encode(normalized_bytes).decode("ascii"),
        ),
        report=result,
    )


@app.post("/compare", response_model=StringComparison)
def compare(request: CompareRequest):
    try:
        return compare_strings(request.first, request.second)
    except InvalidInputError as e:
        raise HTTPException(status_code=422, detail=str(e))
