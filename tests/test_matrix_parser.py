"""End-to-end parsing of vendor pages: locate, classify, parse, normalize."""

from __future__ import annotations

import logging

from compat_scraper.parsers.matrix_parser import VendorMatrixParser


def _documents(records):
    return [record.to_document() for record in records]


class TestVendorMatrixParser:
    def test_reference_dell_table(self, dell_profile) -> None:
        html = (
            "<table><tr><th>Platform</th><th>Minimum BIOS Version with 2023 Certificate</th></tr>"
            "<tr><td>Latitude 5540</td><td>1.25.0</td></tr>"
            "<tr><td></td><td>1.30.0</td></tr></table>"
        )
        records = VendorMatrixParser(dell_profile).parse(html, "https://example.com/dell")

        assert _documents(records) == [{"Model": "Latitude 5540", "MinFirmwareVersion": "1.25.0"}]

    def test_full_dell_page(self, dell_profile, dell_page) -> None:
        records = VendorMatrixParser(dell_profile).parse(dell_page, "https://example.com/dell")

        assert _documents(records) == [
            {"Model": "Latitude 5540", "MinFirmwareVersion": "1.25.0"},
            {"Model": "Latitude 7440", "MinFirmwareVersion": "1.20.1"},
            {"Model": "OptiPlex 7010", "MinFirmwareVersion": "1.18.0"},
        ]

    def test_full_hp_page_drops_tbd(self, hp_profile, hp_page) -> None:
        records = VendorMatrixParser(hp_profile).parse(hp_page, "https://example.com/hp")

        assert _documents(records) == [
            {"Model": "HP EliteBook 840 G10", "MinFirmwareVersion": "01.05.02"},
            {"Model": "HP ZBook Fury 16 G10", "MinFirmwareVersion": "01.03.00"},
        ]

    def test_td_only_header_row_is_inferred(self, dell_profile) -> None:
        html = (
            "<table><tr><td>Platform</td><td>Minimum BIOS Version</td></tr>"
            "<tr><td>Latitude 7440</td><td>1.20.1</td></tr>"
            "<tr><td>Precision 3680</td><td>1.4.0</td></tr></table>"
        )
        records = VendorMatrixParser(dell_profile).parse(html, "https://example.com/dell")

        assert _documents(records) == [
            {"Model": "Latitude 7440", "MinFirmwareVersion": "1.20.1"},
            {"Model": "Precision 3680", "MinFirmwareVersion": "1.4.0"},
        ]

    def test_records_from_several_matching_tables_are_concatenated(self, dell_profile) -> None:
        table = (
            "<table><tr><th>Platform</th><th>Minimum BIOS Version</th></tr>"
            "<tr><td>{0}</td><td>1.0</td></tr><tr><td>{0} Rugged</td><td>2.0</td></tr></table>"
        )
        html = table.format("Latitude 5430") + "<hr/>" + table.format("Latitude 7330")
        records = VendorMatrixParser(dell_profile).parse(html, "https://example.com/dell")

        assert [r.model for r in records] == [
            "Latitude 5430", "Latitude 5430 Rugged", "Latitude 7330", "Latitude 7330 Rugged",
        ]

    def test_changed_page_yields_nothing_and_warns(self, dell_profile, caplog) -> None:
        html = "<table><tr><td>Only a layout cell</td></tr></table>"
        with caplog.at_level(logging.WARNING):
            records = VendorMatrixParser(dell_profile).parse(html, "https://example.com/dell")

        assert records == []
        assert "looked like the support matrix" in caplog.text

    def test_empty_html_yields_nothing(self, dell_profile) -> None:
        assert VendorMatrixParser(dell_profile).parse("", "https://example.com/dell") == []

    def test_every_record_has_non_empty_fields(self, dell_profile, dell_page) -> None:
        for record in VendorMatrixParser(dell_profile).parse(dell_page, "https://example.com/dell"):
            assert record.model.strip()
            assert record.min_firmware_version.strip()
