"""Domain models for packing list parsing results."""

from __future__ import annotations

from typing import Any, List, Optional

from pydantic import BaseModel, Field, model_serializer

from .constants import CANONICAL_FIELDS


class RowLocation(BaseModel):
    """Where a canonical item came from in the source document."""

    row_number: int = Field(alias="rowNumber", ge=1)
    sheet_name: Optional[str] = Field(alias="sheetName", default=None)
    page_number: Optional[int] = Field(alias="pageNumber", default=None)

    class Config:
        populate_by_name = True
        frozen = True

    @model_serializer(mode="wrap")
    def _drop_unused_location(self, handler) -> dict:
        # Grid rows carry a sheet name, PDF rows a page number, never both
        data = handler(self)
        return {key: value for key, value in data.items() if value is not None}

    def describe(self) -> str:
        """Human readable location used in failure reasons."""
        if self.sheet_name is not None:
            return f'sheet "{self.sheet_name}" row {self.row_number}'
        if self.page_number is not None:
            return f"page {self.page_number} row {self.row_number}"
        return f"row {self.row_number}"


class CanonicalItem(BaseModel):
    """One extracted packing list line, independent of the source format."""

    description: Optional[Any] = None
    nature_of_products: Optional[Any] = None
    type_of_treatment: Optional[Any] = None
    commodity_code: Optional[Any] = None
    number_of_packages: Optional[Any] = None
    total_net_weight_kg: Optional[Any] = None
    total_net_weight_unit: Optional[Any] = None
    country_of_origin: Optional[Any] = None
    nirms: Optional[Any] = None
    row_location: RowLocation

    def is_empty(self) -> bool:
        """True when every field except ``row_location`` is null."""
        return all(getattr(self, name) is None for name in CANONICAL_FIELDS)


class BusinessChecks(BaseModel):
    """Document-level validation outcome."""

    all_required_fields_present: bool = False
    failure_reasons: Optional[List[str]] = None


class ParseResult(BaseModel):
    """Canonical result returned for every parse call."""

    registration_approval_number: Optional[str] = None
    establishment_numbers: List[str] = Field(default_factory=list)
    items: List[CanonicalItem] = Field(default_factory=list)
    business_checks: BusinessChecks = Field(default_factory=BusinessChecks)
    parser_model: str = Field(alias="parserModel")
    dispatch_location_number: Optional[str] = Field(alias="dispatchLocationNumber", default=None)

    class Config:
        populate_by_name = True

    def to_wire(self) -> dict:
        """Serialise with the stable wire field names."""
        return self.model_dump(by_alias=True)
