"""Unit tests for placement record classification."""

import pytest
from loguru import logger

from internat.contexts.intake.city_resolver import CityResolver
from internat.contexts.intake.record_classifier import (
    PlacementRecord,
    classify_line,
    detect_specialty,
)


@pytest.fixture
def resolver():
    return CityResolver()


@pytest.fixture
def warnings_sink():
    """Collect WARNING messages emitted through loguru."""
    messages = []
    handler_id = logger.add(lambda m: messages.append(m.record["message"]), level="WARNING")
    yield messages
    logger.remove(handler_id)


@pytest.mark.unit
class TestClassifyLine:
    """Tests for classify_line()."""

    def test_record_with_period_ordinal(self, resolver):
        line = "12. Mme Martin (Claire), biologie médicale, CHU de Paris."
        assert classify_line(line, resolver) == PlacementRecord(
            rank=12, specialty="biologie médicale", city="Paris"
        )

    def test_record_without_period_after_ordinal(self, resolver):
        line = "7 M. Durand, pharmacie hospitalière, centre hospitalier de Nantes."
        record = classify_line(line, resolver)
        assert record.rank == 7
        assert record.specialty == "pharmacie hospitalière"
        assert record.city == "Nantes"

    def test_line_without_trailing_period(self, resolver):
        line = "12. Mme Martin, biologie médicale, CHU de Paris"
        assert classify_line(line, resolver) is None

    def test_line_without_ordinal(self, resolver):
        line = "Mme Martin, biologie médicale, CHU de Paris."
        assert classify_line(line, resolver) is None

    def test_line_without_specialty(self, resolver):
        line = "12. Mme Martin, psychiatrie, CHU de Paris."
        assert classify_line(line, resolver) is None

    def test_first_specialty_phrase_wins(self, resolver):
        line = "3. M. X, biologie médicale (ancien pharmacie hospitalière), CHU de Caen."
        assert classify_line(line, resolver).specialty == "biologie médicale"

    def test_unknown_city_yields_no_record_and_a_warning(self, resolver, warnings_sink):
        line = "40. M. Y, biologie médicale, CHU de Pointe-à-Pitre."
        assert classify_line(line, resolver) is None
        assert len(warnings_sink) == 1
        assert "City not found" in warnings_sink[0]
        assert "Pointe-à-Pitre" in warnings_sink[0]

    def test_unknown_city_is_collected(self, resolver):
        unresolved = []
        line = "40. M. Y, biologie médicale, CHU de Pointe-à-Pitre."
        classify_line(line, resolver, unresolved=unresolved)
        assert unresolved == [line]

    def test_non_record_lines_are_silent(self, resolver, warnings_sink):
        classify_line("Page 3 sur 40", resolver)
        classify_line("12. M. Z, psychiatrie, CHU de Brest.", resolver)
        assert warnings_sink == []

    def test_aphp_alias(self, resolver):
        line = (
            "5. Mme K, biologie médicale, Assistance publique-hôpitaux de Paris, "
            "groupe hospitalier Nord."
        )
        assert classify_line(line, resolver).city == "Paris"

    def test_record_is_immutable(self, resolver):
        record = classify_line("1. A, biologie médicale, CHU de Lille.", resolver)
        with pytest.raises(AttributeError):
            record.rank = 2


@pytest.mark.unit
class TestDetectSpecialty:
    """Tests for detect_specialty()."""

    def test_biologie(self):
        assert detect_specialty("interne en biologie médicale") == "biologie médicale"

    def test_pharmacie(self):
        assert detect_specialty("pharmacie hospitalière, CHU") == "pharmacie hospitalière"

    def test_none(self):
        assert detect_specialty("innovation pharmaceutique et recherche") is None
