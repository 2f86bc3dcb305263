"""Packing list parsing routes."""

from __future__ import annotations

import logging
from typing import List

from fastapi import APIRouter, Depends

from packing_list_parser.extraction.pipeline import parse_packing_list
from packing_list_parser.extraction.registry import FormatRegistry

from ..config import get_registry, get_request_logger
from ..schemas import FormatSummary, ParseRequest

router = APIRouter(tags=["parsing"])


@router.post("/parse", summary="Classify and extract a packing list")
def parse(
    payload: ParseRequest,
    registry: FormatRegistry = Depends(get_registry),
    logger: logging.Logger = Depends(get_request_logger),
) -> dict:
    # Parse failures are reported in the result, not as HTTP errors
    result = parse_packing_list(
        payload.document,
        payload.filename,
        dispatch_location=payload.dispatch_location,
        registry=registry,
        logger=logger,
    )
    return result.to_wire()


@router.get("/formats", summary="List registered packing list formats")
def list_formats(registry: FormatRegistry = Depends(get_registry)) -> List[FormatSummary]:
    return [
        FormatSummary(
            format_id=registered.format_id,
            kind=registered.definition.kind.value,
            deprecated=registered.definition.deprecated,
        )
        for registered in registry.all_formats()
    ]
