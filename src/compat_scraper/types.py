# src/compat_scraper/types.py
from datetime import datetime, timezone
from typing import Dict, Any, List, Optional, Tuple, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .constants import (
    DEFAULT_POSITIONAL_FALLBACK,
    DEFAULT_TIMEOUT_SECONDS,
    FIELD_MODEL,
    FIELD_VERSION,
    SNAPSHOT_TIMESTAMP_FORMAT,
    STRATEGY_HTTP,
)
from .exceptions import DataValidationError


class RawTableFragment(BaseModel):
    """One `<table>...</table>` region cut out of a page, kept verbatim."""
    model_config = ConfigDict(frozen=True)

    text: str = Field(..., description="Verbatim table markup")
    row_count: int = Field(..., description="Number of <tr> occurrences in the fragment")


# Header label (or synthesized Column{N}) -> decoded cell text, in column order
RawRow = Dict[str, str]
RawRows = List[RawRow]


class CanonicalRecord(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    model: str = Field(..., alias=FIELD_MODEL, description="Vendor model / platform name")
    min_firmware_version: str = Field(..., alias=FIELD_VERSION,
                                      description="Minimum firmware version carrying the certificate")

    @field_validator("model", "min_firmware_version")
    @classmethod
    def _non_empty(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must be non-empty after trimming")
        return v

    def to_document(self) -> Dict[str, str]:
        return {FIELD_MODEL: self.model, FIELD_VERSION: self.min_firmware_version}


class VendorSnapshot(BaseModel):
    """
    One vendor's full output for a single run.
    RecordCount is not a field: it is always len(Data).
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    vendor: str = Field(..., alias="Vendor")
    last_updated: datetime = Field(..., alias="LastUpdated")
    source_url: str = Field(..., alias="SourceUrl")
    data: Tuple[CanonicalRecord, ...] = Field(default=(), alias="Data")

    @field_validator("last_updated")
    @classmethod
    def _utc_seconds(cls, v: datetime) -> datetime:
        if v.tzinfo is None:
            v = v.replace(tzinfo=timezone.utc)
        return v.astimezone(timezone.utc).replace(microsecond=0)

    @property
    def record_count(self) -> int:
        return len(self.data)

    @property
    def last_updated_text(self) -> str:
        return self.last_updated.strftime(SNAPSHOT_TIMESTAMP_FORMAT)

    def to_document(self) -> Dict[str, Any]:
        """Returns the persisted document shape, keys in their published order."""
        return {
            "Vendor": self.vendor,
            "LastUpdated": self.last_updated_text,
            "SourceUrl": self.source_url,
            "RecordCount": self.record_count,
            "Data": [record.to_document() for record in self.data],
        }

    @classmethod
    def from_document(cls, document: Dict[str, Any]) -> "VendorSnapshot":
        """Rebuilds a snapshot from its persisted shape, checking RecordCount against Data."""
        if not isinstance(document, dict):
            raise DataValidationError(f"Snapshot document must be an object, got {type(document).__name__}")
        payload = dict(document)
        declared_count = payload.pop("RecordCount", None)
        try:
            snapshot = cls.model_validate(payload)
        except ValidationError as e:
            raise DataValidationError(f"Invalid snapshot document: {e}") from e
        if declared_count is not None and declared_count != snapshot.record_count:
            raise DataValidationError(
                f"RecordCount {declared_count} does not match {snapshot.record_count} Data entries"
            )
        return snapshot


class FetchStep(BaseModel):
    type: Literal["http", "browser"] = STRATEGY_HTTP
    # Text that real data pages always contain; absence means we were served a block page
    expected_marker: Optional[str] = None


class VendorProfile(BaseModel):
    """Everything vendor-specific about locating, classifying and normalizing a matrix table."""
    key: str
    name: str = Field(..., description="Value written to the snapshot's Vendor field")
    url: str
    output_file: str
    enabled: bool = True
    user_agent: Optional[str] = None
    headers: Dict[str, str] = Field(default_factory=dict)
    timeout: int = Field(DEFAULT_TIMEOUT_SECONDS, gt=0)

    min_rows: int = Field(2, ge=1, description="Minimum <tr> count for a candidate table")
    keyword_policy: Literal["all", "any"] = "all"
    keywords: List[str] = Field(..., min_length=1)

    model_aliases: List[str] = Field(default_factory=list)
    version_aliases: List[str] = Field(default_factory=list)
    positional_fallback: Dict[str, str] = Field(default_factory=lambda: dict(DEFAULT_POSITIONAL_FALLBACK))
    sentinels: List[str] = Field(default_factory=list)

    fetch: List[FetchStep] = Field(default_factory=lambda: [FetchStep()], min_length=1)

    @field_validator("positional_fallback")
    @classmethod
    def _known_fields(cls, v: Dict[str, str]) -> Dict[str, str]:
        unknown = set(v) - {FIELD_MODEL, FIELD_VERSION}
        if unknown:
            raise ValueError(f"unknown canonical fields: {sorted(unknown)}")
        return v

    def column_rules(self) -> List[Tuple[str, str]]:
        """Ordered (candidate header, canonical field) pairs, first match wins per field."""
        rules = [(alias, FIELD_MODEL) for alias in self.model_aliases]
        rules.extend((alias, FIELD_VERSION) for alias in self.version_aliases)
        return rules

    def fallback_rules(self) -> List[Tuple[str, str]]:
        return [(column, field) for field, column in self.positional_fallback.items()]


# Configuration dictionary structure (simplified)
Config = Dict[str, Any]
