"""Tests for the ContactAnalysisEngine facade."""

import logging

import pytest

from contactcore import ContactAnalysisEngine, EngineConfig
from contactcore.config import DeduplicationConfig, LayoutConfig, NetworkConfig
from contactcore.error_handling import MergeError
from contactcore.network import RelationshipType


class TestContactAnalysisEngine:
    """Test suite for ContactAnalysisEngine."""

    @pytest.fixture
    def engine(self):
        return ContactAnalysisEngine()

    def test_default_config(self, engine):
        assert engine.config.deduplication.threshold == 0.8

    def test_find_duplicates(self, engine, duplicate_contacts):
        result = engine.find_duplicates(duplicate_contacts)

        assert result.total_contacts == 3
        assert len(result.groups) == 1
        assert result.groups[0].contact_ids == ["2", "1"]
        assert result.threshold == 0.8

    def test_threshold_from_config(self, make_contact):
        config = EngineConfig(deduplication=DeduplicationConfig(threshold=0.5))
        engine = ContactAnalysisEngine(config)
        contacts = [make_contact(name="Robert Brown"), make_contact(name="Roberta Browning")]

        assert engine.find_duplicates(contacts).threshold == 0.5
        assert len(engine.find_duplicates(contacts).groups) == 1
        assert engine.find_duplicates(contacts, threshold=0.95).groups == []

    def test_merge_operations(self, engine, duplicate_contacts):
        group = engine.find_duplicates(duplicate_contacts).groups[0]

        merged = engine.suggest_merge(group.contacts)
        proposal = engine.propose_merge(group)

        assert merged.id == "2"
        assert proposal.merged == merged
        with pytest.raises(MergeError):
            engine.suggest_merge([])

    def test_analyze_network(self, engine, crew_contacts):
        network = engine.analyze_network(crew_contacts)

        assert len(network.nodes) == 5
        assert network.metrics.total_contacts == 5
        assert network.metrics.total_relationships == len(network.relationships)
        assert network.metrics.company_clusters == 2
        assert network.metrics.job_clusters == 1
        assert network.metrics.crew_clusters == 1

        crew_edge = next(e for e in network.relationships if e.id == "a1-a2")
        assert crew_edge.relationship_type == RelationshipType.SAME_CREW
        assert network.node("a1").connection_count > 0

    def test_analyze_empty_snapshot(self, engine):
        network = engine.analyze_network([])

        assert network.nodes == []
        assert network.metrics.average_connections == 0
        assert network.metrics.network_density == 0

    def test_layout_network_uses_config(self, crew_contacts):
        config = EngineConfig(layout=LayoutConfig(width=400, height=300, iterations=10))
        engine = ContactAnalysisEngine(config)
        network = engine.analyze_network(crew_contacts)

        positions = engine.layout_network(network)

        assert set(positions) == {n.id for n in network.nodes}
        assert all(50 <= p.x <= 350 and 50 <= p.y <= 250 for p in positions.values())

    def test_layout_network_filters(self, engine, crew_contacts):
        network = engine.analyze_network(crew_contacts)

        positions = engine.layout_network(network, search_query="halliburton")

        assert set(positions) == {"h1", "h2"}

    def test_find_path(self, engine, crew_contacts):
        network = engine.analyze_network(crew_contacts)

        path = engine.find_path(network, "a1", "h2")

        assert path
        assert path[0].connects("a1")
        assert path[-1].connects("h2")

    def test_get_influencers_uses_config(self, crew_contacts):
        engine = ContactAnalysisEngine(
            EngineConfig(network=NetworkConfig(influencer_min_strength=9))
        )
        network = engine.analyze_network(crew_contacts)

        influencers = engine.get_influencers(network, "a1")

        assert [n.id for n in influencers] == ["a2"]

    def test_operations_log_timing(self, engine, duplicate_contacts, caplog):
        with caplog.at_level(logging.INFO, logger="contactcore.engine"):
            engine.find_duplicates(duplicate_contacts)

        records = [r for r in caplog.records if getattr(r, "operation", None) == "find_duplicates"]
        assert len(records) == 1
        assert records[0].duration_ms >= 0
