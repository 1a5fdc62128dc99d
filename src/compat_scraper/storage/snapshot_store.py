# src/compat_scraper/storage/snapshot_store.py
import json
import os
import re
import tempfile
import logging
from pathlib import Path
from typing import Union

from ..exceptions import DataValidationError, StorageError
from ..types import VendorSnapshot

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

def write_snapshot(snapshot: VendorSnapshot, output_dir: PathLike, file_name: str) -> Path:
    """
    Writes the snapshot as JSON, fully replacing any previous file.
    The document is written to a temp file in the same directory and moved
    into place, so readers never see a half-written file.
    """
    target_dir = Path(output_dir)
    target = target_dir / file_name
    try:
        target_dir.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{file_name}.", suffix=".tmp", dir=target_dir)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(snapshot.to_document(), f, indent=2, ensure_ascii=False)
                f.write("\n")
            os.replace(tmp_name, target)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
    except OSError as e:
        raise StorageError(f"Failed to write snapshot to {target}: {e}") from e

    logger.info(f"Wrote {snapshot.record_count} {snapshot.vendor} records to {target}")
    return target

def read_snapshot(path: PathLike) -> VendorSnapshot:
    """Loads a snapshot document written by write_snapshot."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            document = json.load(f)
    except json.JSONDecodeError as e:
        raise DataValidationError(f"Snapshot file {path} is not valid JSON: {e}") from e
    except OSError as e:
        raise StorageError(f"Failed to read snapshot {path}: {e}") from e
    return VendorSnapshot.from_document(document)

def save_raw_html(raw_html_dir: PathLike, vendor_key: str, html: str) -> Path:
    """Keeps a copy of a fetched page for diagnosing classification misses."""
    safe_name = re.sub(r'[^A-Za-z0-9._-]+', '_', vendor_key)[:120]
    target_dir = Path(raw_html_dir)
    target_dir.mkdir(parents=True, exist_ok=True)
    target = target_dir / f"{safe_name}.html"
    target.write_text(html or "", encoding="utf-8")
    logger.debug(f"Saved raw HTML for {vendor_key} to {target}")
    return target
