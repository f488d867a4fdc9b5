"""
Contact Analysis Engine

Facade running the duplicate detection and relationship network pipelines
with configured parameters. Every operation is a pure function of the
contact snapshot it is given; callers re-run it when the snapshot changes.
"""

from typing import Dict, List, Optional, Sequence

from .config import EngineConfig
from .deduplication import (
    DuplicateDetectionResult,
    DuplicateGroup,
    DuplicateGrouper,
    MergeProposal,
    MergeSuggester,
)
from .logging_config import Timer, get_logger, log_context, log_performance
from .models import Contact
from .network import (
    ClusterIdentifier,
    ForceDirectedLayout,
    GraphEdge,
    GraphNode,
    GraphPathfinder,
    NetworkData,
    NetworkMetricsCalculator,
    Position,
    RelationshipGraphBuilder,
    filter_network,
)

logger = get_logger(__name__)


class ContactAnalysisEngine:
    """Runs duplicate detection and network analysis over contact snapshots."""

    def __init__(self, config: Optional[EngineConfig] = None):
        self.config = config or EngineConfig()

        self.grouper = DuplicateGrouper()
        self.merger = MergeSuggester()
        self.graph_builder = RelationshipGraphBuilder()
        self.cluster_identifier = ClusterIdentifier()
        self.metrics_calculator = NetworkMetricsCalculator()
        self.pathfinder = GraphPathfinder()
        self.layout_engine = ForceDirectedLayout()

    def find_duplicates(
        self, contacts: Sequence[Contact], threshold: Optional[float] = None
    ) -> DuplicateDetectionResult:
        """Group probable duplicates at ``threshold`` (configured default if None)."""
        if threshold is None:
            threshold = self.config.deduplication.threshold

        with log_context(snapshot_size=len(contacts)), Timer() as timer:
            result = self.grouper.detect(contacts, threshold)

        log_performance(
            __name__, "find_duplicates", timer.duration_ms,
            groups=len(result.groups), comparisons=result.comparisons,
        )
        return result

    def suggest_merge(self, contacts: Sequence[Contact]) -> Contact:
        return self.merger.merge(contacts)

    def propose_merge(self, group: DuplicateGroup) -> MergeProposal:
        return self.merger.propose(group)

    def analyze_network(self, contacts: Sequence[Contact]) -> NetworkData:
        """Build nodes, edges, clusters and metrics for a contact snapshot."""
        with log_context(snapshot_size=len(contacts)), Timer() as timer:
            nodes = self.graph_builder.build_nodes(contacts)
            edges = self.graph_builder.build(contacts)
            clusters = self.cluster_identifier.identify(contacts)
            metrics = self.metrics_calculator.compute(nodes, edges, clusters)

        log_performance(
            __name__, "analyze_network", timer.duration_ms,
            nodes=len(nodes), relationships=len(edges), clusters=len(clusters),
        )
        return NetworkData(nodes=nodes, relationships=edges, clusters=clusters, metrics=metrics)

    def layout_network(
        self,
        network: NetworkData,
        width: Optional[float] = None,
        height: Optional[float] = None,
        min_strength: Optional[float] = None,
        search_query: Optional[str] = None,
    ) -> Dict[str, Position]:
        """Filter a network and compute positions for what remains."""
        layout_config = self.config.layout
        width = layout_config.width if width is None else width
        height = layout_config.height if height is None else height
        if min_strength is None:
            min_strength = self.config.network.min_edge_strength

        nodes, edges = filter_network(
            network.nodes, network.relationships, min_strength, search_query
        )

        with Timer() as timer:
            positions = self.layout_engine.layout(
                nodes, edges, width, height, layout_config.iterations
            )

        log_performance(
            __name__, "layout_network", timer.duration_ms,
            nodes=len(nodes), iterations=layout_config.iterations,
        )
        return positions

    def find_path(self, network: NetworkData, from_id: str, to_id: str) -> List[GraphEdge]:
        with Timer() as timer:
            path = self.pathfinder.find_path(from_id, to_id, network.relationships)
        log_performance(__name__, "find_path", timer.duration_ms, hops=len(path))
        return path

    def get_influencers(self, network: NetworkData, contact_id: str) -> List[GraphNode]:
        with Timer() as timer:
            influencers = self.pathfinder.get_influencers(
                contact_id,
                network.nodes,
                network.relationships,
                self.config.network.influencer_min_strength,
            )
        log_performance(__name__, "get_influencers", timer.duration_ms, found=len(influencers))
        return influencers
