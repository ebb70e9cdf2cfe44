"""Tests for template helpers."""

from __future__ import annotations

import pytest

from kandidato.schemas.profile import SOURCE_NOT_FOUND, Source
from kandidato.web.presentation import active_tab, bill_url, source_href


class TestSourceHref:
    def test_real_url(self) -> None:
        source = Source(name="Inquirer", url="https://newsinfo.inquirer.net/1")
        assert source_href(source, "Divorce", "Juan") == "https://newsinfo.inquirer.net/1"

    def test_sentinel_becomes_search(self) -> None:
        source = Source(name="Inquirer", url=SOURCE_NOT_FOUND)
        assert source_href(source, "War on Drugs", "Juan Dela Cruz") == (
            "https://www.google.com/search?q=War+on+Drugs+Juan+Dela+Cruz+senate+philippines"
        )

    def test_non_http_becomes_search(self) -> None:
        source = Source(name="x", url="senate.gov.ph")
        assert source_href(source, "Divorce", "Juan").startswith("https://www.google.com/search?q=")


class TestBillUrl:
    @pytest.mark.parametrize(
        "number, expected",
        [
            ("SB 1234", "SB+1234"),
            ("hb45", "HB+45"),
            ("Senate Bill No. 99 (SB No. 99)", "SB+99"),
        ],
    )
    def test_matches(self, number: str, expected: str) -> None:
        assert bill_url(number) == f"https://legacy.senate.gov.ph/lis/bill_res.aspx?congress=19&q={expected}"

    @pytest.mark.parametrize("number", [None, "", "Republic Act 11166"])
    def test_no_match(self, number) -> None:
        assert bill_url(number) is None


class TestActiveTab:
    def test_default(self) -> None:
        assert active_tab(None) == "background"

    def test_known(self) -> None:
        assert active_tab("policy") == "policy"

    def test_unknown_falls_back(self) -> None:
        assert active_tab("bogus") == "background"
