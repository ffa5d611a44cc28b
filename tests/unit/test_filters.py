"""Unit tests for protocol filtering and chart series."""
from __future__ import annotations

from defi_analytics.analytics.filters import (
    build_protocol_chart,
    filter_protocols_by_category,
)
from defi_analytics.models import Category, Protocol


class TestFilterProtocolsByCategory:
    def test_all_is_identity(self, sample_protocols: list[Protocol]) -> None:
        result = filter_protocols_by_category(sample_protocols, "all")
        assert result == sample_protocols
        assert result is not sample_protocols

    def test_enum_selector_preserves_order(self, sample_protocols: list[Protocol]) -> None:
        result = filter_protocols_by_category(sample_protocols, Category.DEX)
        assert [p.id for p in result] == ["aero", "uni"]

    def test_string_selector(self, sample_protocols: list[Protocol]) -> None:
        result = filter_protocols_by_category(sample_protocols, "Lending")
        assert [p.id for p in result] == ["moon"]

    def test_unknown_selector_yields_empty(self, sample_protocols: list[Protocol]) -> None:
        assert filter_protocols_by_category(sample_protocols, "NFT") == []

    def test_no_matches(self, sample_protocols: list[Protocol]) -> None:
        only_dex = [p for p in sample_protocols if p.category is Category.DEX]
        assert filter_protocols_by_category(only_dex, Category.YIELD) == []

    def test_does_not_mutate_input(self, sample_protocols: list[Protocol]) -> None:
        before = list(sample_protocols)
        filter_protocols_by_category(sample_protocols, Category.DEX)
        assert sample_protocols == before


class TestBuildProtocolChart:
    def test_projects_fields(self, sample_protocols: list[Protocol]) -> None:
        points = build_protocol_chart(sample_protocols[:1])
        assert len(points) == 1
        point = points[0]
        assert point.name == "AERO"
        assert point.tvl == 1200.0
        assert point.apy == 18.0
        assert point.volume == 120.0
        assert point.risk == 4
        assert point.change == 1.5
