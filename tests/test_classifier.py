"""Tests for the density and keyword gates that pick the support matrix table."""

from __future__ import annotations

import pytest

from compat_scraper.parsers.classifier import TableClassifier, has_min_density, matches_keywords
from compat_scraper.parsers.table_locator import locate_tables
from compat_scraper.types import RawTableFragment


def _fragment(html: str) -> RawTableFragment:
    (fragment,) = locate_tables(html)
    return fragment


class TestMatchesKeywords:
    def test_all_policy_requires_every_keyword(self) -> None:
        assert matches_keywords("Platform | BIOS", ["Platform", "BIOS"], "all") is True
        assert matches_keywords("Platform only", ["Platform", "BIOS"], "all") is False

    def test_any_policy_accepts_a_single_hit(self) -> None:
        assert matches_keywords("HP ZBook Fury", ["EliteBook", "ZBook"], "any") is True
        assert matches_keywords("Contact us", ["EliteBook", "ZBook"], "any") is False

    def test_matching_ignores_case(self) -> None:
        assert matches_keywords("PLATFORM and bios", ["Platform", "BIOS"], "all") is True

    def test_no_keywords_never_matches(self) -> None:
        assert matches_keywords("anything", [], "any") is False

    def test_unknown_policy_is_rejected(self) -> None:
        with pytest.raises(ValueError):
            matches_keywords("x", ["x"], "most")


class TestDensity:
    def test_threshold_is_inclusive(self) -> None:
        fragment = RawTableFragment(text="<table></table>", row_count=3)
        assert has_min_density(fragment, 3) is True
        assert has_min_density(fragment, 4) is False


class TestDellClassifier:
    def test_accepts_the_matrix_table(self, dell_profile) -> None:
        html = (
            "<table><tr><th>Platform</th><th>Minimum BIOS Version with 2023 Certificate</th></tr>"
            "<tr><td>Latitude 5540</td><td>1.25.0</td></tr>"
            "<tr><td></td><td>1.30.0</td></tr></table>"
        )
        assert TableClassifier(dell_profile).is_relevant(_fragment(html)) is True

    def test_single_row_table_is_rejected_even_with_keywords(self, dell_profile) -> None:
        html = "<table><tr><td>Platform BIOS layout</td></tr></table>"
        assert TableClassifier(dell_profile).is_relevant(_fragment(html)) is False

    def test_missing_one_keyword_is_rejected(self, dell_profile) -> None:
        html = (
            "<table><tr><th>Platform</th><th>Driver</th></tr>"
            "<tr><td>Latitude 5540</td><td>A01</td></tr>"
            "<tr><td>Latitude 7440</td><td>A02</td></tr></table>"
        )
        assert TableClassifier(dell_profile).is_relevant(_fragment(html)) is False

    def test_select_keeps_only_the_matrix(self, dell_profile, dell_page) -> None:
        selected = list(TableClassifier(dell_profile).select(locate_tables(dell_page)))

        assert len(selected) == 1
        assert 'class="matrix"' in selected[0].text


class TestHpClassifier:
    def test_accepts_a_product_line_name(self, hp_profile) -> None:
        html = (
            "<table><tr><td>HP ZBook Fury 16 G10</td><td>01.03.00</td></tr>"
            "<tr><td>HP ZBook Power G10</td><td>01.02.00</td></tr></table>"
        )
        assert TableClassifier(hp_profile).is_relevant(_fragment(html)) is True

    def test_accepts_the_product_name_phrase(self, hp_profile) -> None:
        html = "<table><tr><th>Product Name</th><th>BIOS</th></tr><tr><td>x</td><td>y</td></tr></table>"
        assert TableClassifier(hp_profile).is_relevant(_fragment(html)) is True

    def test_single_row_table_is_rejected(self, hp_profile) -> None:
        html = "<table><tr><td>ZBook Firefly</td><td>EliteBook 800</td></tr></table>"
        assert TableClassifier(hp_profile).is_relevant(_fragment(html)) is False

    def test_select_on_full_page(self, hp_profile, hp_page) -> None:
        selected = list(TableClassifier(hp_profile).select(locate_tables(hp_page)))

        assert len(selected) == 1
        assert "Product Name" in selected[0].text
