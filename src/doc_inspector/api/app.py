"""FastAPI application for the document inspector.

Usage (from project root, after installing fastapi and uvicorn):

    uvicorn doc_inspector.api.app:app --reload

Then POST a JSON body such as
``{"document": "...", "format": "markdown", "lang": "en"}`` to
/api/validate.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from fastapi import FastAPI, HTTPException
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from ..config import ConfigurationError, ConfigurationManager
from ..config.models import Configuration
from ..parsers import DocumentParser
from ..parsers.exceptions import UnsupportedFormatError
from ..pipeline import ValidationPipeline
from ..validators import get_validator_factory


logger = logging.getLogger(__name__)

app = FastAPI(title="Doc Inspector API", version="0.1.0")


class ValidateRequest(BaseModel):
    """Body of POST /api/validate."""

    document: str
    format: str = "plain"
    lang: str = "en"
    config: Optional[Dict[str, Any]] = None


def _load_configuration(request: ValidateRequest) -> Configuration:
    if request.config is None:
        return ConfigurationManager.default(lang=request.lang)
    config = dict(request.config)
    config.setdefault("lang", request.lang)
    manager = ConfigurationManager()
    manager.load(config, validator_names=get_validator_factory().get_validator_names())
    return manager.configuration


@app.post("/api/validate")
async def validate_document(request: ValidateRequest) -> JSONResponse:
    """Parse and validate a document sent as text.

    The response holds the reported errors in pipeline order and the number
    of sentences found in the document.
    """
    try:
        configuration = _load_configuration(request)
        pipeline = ValidationPipeline.from_configuration(configuration)
        document = DocumentParser().parse(
            request.document,
            document_format=request.format,
            sentence_extractor=configuration.create_sentence_extractor(),
            tokenizer=configuration.create_tokenizer(),
        )
    except ConfigurationError as exc:
        logger.warning(f"Rejected configuration: {exc}")
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except UnsupportedFormatError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    errors = pipeline.check_document(document)
    return JSONResponse(
        status_code=200,
        content={
            "errors": [error.to_dict() for error in errors],
            "sentences": sum(1 for _ in document.iter_sentences()),
        },
    )


@app.get("/api/validators")
async def list_validators() -> JSONResponse:
    """List the names of the registered validators."""
    return JSONResponse(
        status_code=200,
        content={"validators": get_validator_factory().get_validator_names()},
    )
