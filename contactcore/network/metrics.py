"""Connectivity and centrality statistics of the relationship graph."""

import logging
from typing import Dict, List, Sequence

from .models import Cluster, ClusterType, GraphEdge, GraphNode, NetworkMetrics
from .networkx_backend import connected_component_count

logger = logging.getLogger(__name__)


class NetworkMetricsCalculator:
    """Computes network metrics and refreshes per-node statistics."""

    def compute(
        self,
        nodes: List[GraphNode],
        edges: Sequence[GraphEdge],
        clusters: Sequence[Cluster],
    ) -> NetworkMetrics:
        """Compute metrics for a graph.

        Every node's ``connection_count`` and ``centrality_score`` are reset
        and recomputed from ``edges``; degree counts edges, centrality sums
        incident edge strengths.

        Args:
            nodes: Graph nodes (updated in place)
            edges: Graph edges
            clusters: Clusters identified for the same snapshot

        Returns:
            NetworkMetrics; averages and density are 0 for degenerate graphs
        """
        degrees: Dict[str, int] = {node.id: 0 for node in nodes}
        centrality: Dict[str, float] = {node.id: 0.0 for node in nodes}

        for edge in edges:
            for endpoint in (edge.source, edge.target):
                if endpoint in degrees:
                    degrees[endpoint] += 1
                    centrality[endpoint] += edge.strength

        for node in nodes:
            node.connection_count = degrees[node.id]
            node.centrality_score = centrality[node.id]

        n = len(nodes)
        total_degree = sum(degrees.values())
        max_possible = n * (n - 1)

        metrics = NetworkMetrics(
            total_contacts=n,
            total_relationships=len(edges),
            average_connections=total_degree / (2 * n) if n > 0 else 0.0,
            network_density=(2 * len(edges)) / max_possible if max_possible > 0 else 0.0,
            largest_cluster=max((len(c.contacts) for c in clusters), default=0),
            isolated_contacts=sum(1 for node in nodes if node.connection_count == 0),
            company_clusters=sum(1 for c in clusters if c.type == ClusterType.COMPANY),
            job_clusters=sum(1 for c in clusters if c.type == ClusterType.JOB),
            crew_clusters=sum(1 for c in clusters if c.type == ClusterType.CREW),
            connected_components=connected_component_count(nodes, edges),
        )

        logger.debug(
            f"Network metrics: {metrics.total_contacts} contacts, "
            f"{metrics.total_relationships} relationships, density {metrics.network_density:.3f}"
        )
        return metrics
