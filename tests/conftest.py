"""Shared fixtures: vendor profiles from the shipped config and sample vendor pages."""

from __future__ import annotations

import copy
import logging
from pathlib import Path

import pytest
import yaml

from compat_scraper.config import load_config, load_vendor_profiles


# ---------------------------------------------------------------------------
# Sample pages
# ---------------------------------------------------------------------------

DELL_PAGE = """\
<!DOCTYPE html>
<html>
<head><title>Secure Boot certificate update</title></head>
<body>
  <table class="layout"><tr><td>Platform news</td><td>BIOS tips</td></tr></table>
  <table id="toc">
    <tr><td><a href="#a">Overview</a></td></tr>
    <tr><td><a href="#b">Affected systems</a></td></tr>
    <tr><td><a href="#c">Resolution</a></td></tr>
  </table>
  <TABLE class="matrix">
    <thead>
      <tr>
        <th>Platform</th>
        <th>Minimum BIOS Version
            with 2023 Certificate</th>
      </tr>
    </thead>
    <tbody>
      <tr><td>Latitude 5540</td><td>1.25.0&nbsp;</td></tr>
      <tr><td><b>Latitude</b> 7440</td><td>1.20.1</td></tr>
      <tr><td></td><td>1.30.0</td></tr>
      <tr><td>OptiPlex 7010</td><td>1.18.0</td></tr>
    </tbody>
  </TABLE>
  <table><tr><td>&copy; Dell Inc.</td></tr></table>
</body>
</html>
"""

HP_PAGE = """\
<html>
<body>
  <p>Devices receiving the Windows UEFI CA 2023 certificate.</p>
  <table><tr><td>ZBook Firefly</td><td>EliteBook 800</td></tr></table>
  <table>
    <tr><td>Region</td><td>Phone</td></tr>
    <tr><td>US</td><td>800-000-0000</td></tr>
    <tr><td>UK</td><td>0800-000-000</td></tr>
  </table>
  <table>
    <tr><th>Product Name</th><th>Minimum BIOS version with Windows UEFI CA 2023</th></tr>
    <tr><td>HP EliteBook 840 G10</td><td>01.05.02</td></tr>
    <tr><td>HP ProBook 450 G9</td><td>TBD</td></tr>
    <tr><td>HP ZBook Fury 16 G10</td><td>01.03.00</td></tr>
  </table>
</body>
</html>
"""


@pytest.fixture
def dell_page() -> str:
    return DELL_PAGE


@pytest.fixture
def hp_page() -> str:
    return HP_PAGE


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------

@pytest.fixture(scope="session")
def shipped_config() -> dict:
    return load_config()


@pytest.fixture
def config(shipped_config, tmp_path) -> dict:
    """Shipped config with output, logs and caches redirected into tmp_path."""
    cfg = copy.deepcopy(shipped_config)
    cfg["scraper"]["output_dir"] = str(tmp_path / "output")
    cfg["logging"]["file"] = None
    cfg["advanced"]["caching"]["enabled"] = False
    cfg["debug"] = {"raw_html_dir": None}
    return cfg


@pytest.fixture
def config_file(config, tmp_path) -> Path:
    path = tmp_path / "config.yaml"
    path.write_text(yaml.safe_dump(config), encoding="utf-8")
    return path


@pytest.fixture(scope="session")
def profiles(shipped_config) -> dict:
    return {profile.key: profile for profile in load_vendor_profiles(shipped_config)}


@pytest.fixture
def dell_profile(profiles):
    return profiles["dell"]


@pytest.fixture
def hp_profile(profiles):
    return profiles["hp"]


@pytest.fixture
def restore_root_logging():
    """setup_logging replaces root handlers; put pytest's back afterwards."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for handler in root.handlers[:]:
        root.removeHandler(handler)
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)
