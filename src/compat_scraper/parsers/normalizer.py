# src/compat_scraper/parsers/normalizer.py
import logging
from typing import Dict, Iterable, Iterator, List, Optional, Sequence, Tuple

from ..constants import CANONICAL_FIELDS, FIELD_MODEL, FIELD_VERSION
from ..types import CanonicalRecord, RawRow, VendorProfile

logger = logging.getLogger(__name__)

ColumnRules = Sequence[Tuple[str, str]]


def _apply_rules(row: RawRow, rules: ColumnRules, extracted: Dict[str, str]) -> None:
    for column, field in rules:
        if field in extracted:
            continue
        value = (row.get(column) or "").strip()
        if value:
            extracted[field] = value


def extract_fields(row: RawRow, rules: ColumnRules, fallback_rules: ColumnRules) -> Dict[str, str]:
    """
    Picks canonical field values out of one raw row.
    Header aliases are tried first, in order; the positional fallback only
    fills fields that no alias supplied.
    """
    extracted: Dict[str, str] = {}
    _apply_rules(row, rules, extracted)
    _apply_rules(row, fallback_rules, extracted)
    return extracted


class RecordNormalizer:
    """Maps one vendor's raw rows onto canonical {Model, MinFirmwareVersion} records."""

    def __init__(self, profile: VendorProfile):
        self.profile = profile
        self.rules = profile.column_rules()
        self.fallback_rules = profile.fallback_rules()
        self.sentinels = frozenset(profile.sentinels)

    def normalize_row(self, row: RawRow) -> Optional[CanonicalRecord]:
        fields = extract_fields(row, self.rules, self.fallback_rules)
        if any(field not in fields for field in CANONICAL_FIELDS):
            return None
        if fields[FIELD_VERSION] in self.sentinels:
            logger.debug(f"[{self.profile.key}] Dropping '{fields[FIELD_MODEL]}': version is '{fields[FIELD_VERSION]}'.")
            return None
        return CanonicalRecord(model=fields[FIELD_MODEL], min_firmware_version=fields[FIELD_VERSION])

    def iter_records(self, rows: Iterable[RawRow]) -> Iterator[CanonicalRecord]:
        for row in rows:
            record = self.normalize_row(row)
            if record is not None:
                yield record

    def normalize(self, rows: Iterable[RawRow]) -> List[CanonicalRecord]:
        return list(self.iter_records(rows))
