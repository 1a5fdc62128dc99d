# src/compat_scraper/main.py
import logging
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path
from typing import Callable, Dict, Iterable, List, Optional

from .config import load_vendor_profiles
from .exceptions import FetchError, StorageError
from .extractors.fetch_chain import FetchChain, build_fetch_chain
from .parsers.matrix_parser import VendorMatrixParser
from .snapshot import build_snapshot
from .storage.snapshot_store import save_raw_html, write_snapshot
from .types import Config, VendorProfile, VendorSnapshot

logger = logging.getLogger(__name__)

ChainFactory = Callable[[VendorProfile, Config], FetchChain]

class CompatibilityScraper:
    """
    Runs the fetch -> locate -> classify -> parse -> normalize -> snapshot
    pipeline once per vendor. Vendor pipelines share nothing, so a failure in
    one never affects another.
    """

    def __init__(self, config: Config, chain_factory: ChainFactory = build_fetch_chain):
        self.config: Config = config
        self.scraper_config = config.get("scraper", {})
        self.profiles: List[VendorProfile] = load_vendor_profiles(config)
        self.chain_factory = chain_factory
        self.output_dir = Path(self.scraper_config.get("output_dir", "data/output"))
        self.raw_html_dir = (config.get("debug") or {}).get("raw_html_dir")
        logger.info(f"CompatibilityScraper initialized with vendors: {[p.key for p in self.profiles]}")

    def select_profiles(self, skip: Iterable[str] = ()) -> List[VendorProfile]:
        skipped = {key.lower() for key in skip}
        selected = []
        for profile in self.profiles:
            if profile.key.lower() in skipped:
                logger.info(f"Vendor '{profile.key}' skipped on request.")
            elif not profile.enabled:
                logger.info(f"Vendor '{profile.key}' is disabled in config. Skipping.")
            else:
                selected.append(profile)
        return selected

    def _fetch_page(self, profile: VendorProfile) -> Optional[str]:
        chain = self.chain_factory(profile, self.config)
        try:
            return chain.fetch(profile.url, user_agent=profile.user_agent, headers=profile.headers,
                               timeout=profile.timeout)
        except FetchError as e:
            logger.error(f"[{profile.key}] No data: {e}")
            return None
        finally:
            chain.close()

    def scrape_vendor(self, profile: VendorProfile) -> Optional[VendorSnapshot]:
        """
        Produces a snapshot for one vendor, or None when the page could not be
        fetched or no matrix table was recognized.
        """
        logger.info(f"[{profile.key}] Starting scrape of {profile.url}")
        html_content = self._fetch_page(profile)
        if not html_content:
            return None

        if self.raw_html_dir:
            try:
                save_raw_html(self.raw_html_dir, profile.key, html_content)
            except OSError as e:
                logger.warning(f"[{profile.key}] Could not save raw HTML: {e}")

        records = VendorMatrixParser(profile).parse(html_content, profile.url)
        if not records:
            logger.warning(f"[{profile.key}] Zero records extracted; existing output is left untouched.")
            return None
        return build_snapshot(profile.name, profile.url, records)

    def run_vendor(self, profile: VendorProfile) -> Optional[VendorSnapshot]:
        """scrape_vendor plus persistence; only non-empty snapshots are written."""
        snapshot = self.scrape_vendor(profile)
        if snapshot is None:
            return None
        try:
            write_snapshot(snapshot, self.output_dir, profile.output_file)
        except StorageError as e:
            logger.error(f"[{profile.key}] {e}")
            return None
        return snapshot

    def run(self, skip: Iterable[str] = ()) -> Dict[str, Optional[VendorSnapshot]]:
        """Runs every selected vendor and returns vendor key -> snapshot (None on failure)."""
        profiles = self.select_profiles(skip)
        results: Dict[str, Optional[VendorSnapshot]] = {}
        if not profiles:
            logger.warning("No vendors selected for scraping.")
            return results

        start_time = time.monotonic()
        max_threads = max(1, int(self.scraper_config.get("max_threads", 2)))
        with ThreadPoolExecutor(max_workers=max_threads, thread_name_prefix="VendorThread") as executor:
            future_to_vendor = {executor.submit(self.run_vendor, profile): profile.key for profile in profiles}
            for future in as_completed(future_to_vendor):
                vendor_key = future_to_vendor[future]
                try:
                    results[vendor_key] = future.result()
                except Exception as exc:
                    logger.error(f"Vendor {vendor_key} generated an exception: {exc}", exc_info=True)
                    results[vendor_key] = None

        # Report in config order regardless of completion order
        results = {profile.key: results.get(profile.key) for profile in profiles}
        duration = time.monotonic() - start_time
        summary = ", ".join(
            f"{key}={snapshot.record_count if snapshot else 0}" for key, snapshot in results.items()
        )
        logger.info(f"Scrape completed in {duration:.2f} seconds. Records per vendor: {summary}.")
        return results


def any_records(results: Dict[str, Optional[VendorSnapshot]]) -> bool:
    return any(snapshot is not None and snapshot.record_count > 0 for snapshot in results.values())
