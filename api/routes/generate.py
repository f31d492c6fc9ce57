from __future__ import annotations
from typing import Any

from fastapi import APIRouter, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse
from pydantic import BaseModel, field_validator

from workflows.prospect_research.errors import NoCompaniesFound, ProspectPipelineError
from workflows.prospect_research.logger import get_logger
from workflows.prospect_research import pipeline

router = APIRouter()
logger = get_logger()

MISSING_FIELDS_MSG = "I campi 'area' e 'country' sono obbligatori."
INTERNAL_ERROR_MSG = "Errore interno del server."


class GenerateRequest(BaseModel):
    country: str = ""
    area: str = ""
    region: str = ""

    @field_validator("country", "area", "region", mode="before")
    @classmethod
    def _strip(cls, v: Any) -> str:
        # anything that isn't text counts as missing
        return v.strip() if isinstance(v, str) else ""

    def is_complete(self) -> bool:
        return bool(self.area and self.country)


def _error(message: str, status_code: int) -> JSONResponse:
    return JSONResponse({"error": message}, status_code=status_code)


@router.post("/generate")
async def generate(request: Request):
    try:
        payload = await request.json()
    except ValueError:
        payload = None
    if not isinstance(payload, dict):
        return _error(MISSING_FIELDS_MSG, 400)

    req = GenerateRequest(**{k: payload.get(k) for k in ("country", "area", "region")})
    if not req.is_complete():
        return _error(MISSING_FIELDS_MSG, 400)

    try:
        result = await run_in_threadpool(pipeline.run_prospect_pipeline, req.area, req.country, req.region)
    except NoCompaniesFound as e:
        return _error(str(e), 422)
    except ProspectPipelineError as e:
        logger.exception("[generate] pipeline failed")
        return _error(str(e), 500)
    except Exception:
        logger.exception("[generate] unexpected failure")
        return _error(INTERNAL_ERROR_MSG, 500)

    return result
