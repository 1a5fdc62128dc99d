# src/compat_scraper/snapshot.py
from datetime import datetime, timezone
from typing import Iterable, Optional

from .types import CanonicalRecord, VendorSnapshot

def build_snapshot(vendor: str, source_url: str, records: Iterable[CanonicalRecord],
                   now: Optional[datetime] = None) -> VendorSnapshot:
    """Wraps normalized records with run metadata. `now` defaults to the current UTC time."""
    return VendorSnapshot(
        vendor=vendor,
        last_updated=now or datetime.now(timezone.utc),
        source_url=source_url,
        data=tuple(records),
    )
