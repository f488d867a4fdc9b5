"""
Contact Relationship Network

Builds a weighted relationship graph from a contact snapshot and answers
questions about it: clusters, connectivity metrics, shortest paths,
influencers and a 2-D layout for drawing.

Usage:
    from contactcore.network import RelationshipGraphBuilder, ForceDirectedLayout

    builder = RelationshipGraphBuilder()
    nodes = builder.build_nodes(contacts)
    edges = builder.build(contacts)
    positions = ForceDirectedLayout().layout(nodes, edges, 800, 600)
"""

from .models import (
    GraphNode,
    GraphEdge,
    RelationshipType,
    Cluster,
    ClusterType,
    NetworkMetrics,
    Position,
    NetworkData,
)
from .graph_analyzer import RelationshipGraphBuilder, RelationshipWeights
from .clustering import ClusterIdentifier
from .metrics import NetworkMetricsCalculator
from .path_finding import GraphPathfinder
from .layout import ForceDirectedLayout
from .filtering import filter_network
from .networkx_backend import to_networkx, connected_component_count

__all__ = [
    # Models
    "GraphNode",
    "GraphEdge",
    "RelationshipType",
    "Cluster",
    "ClusterType",
    "NetworkMetrics",
    "Position",
    "NetworkData",
    # Analysis
    "RelationshipGraphBuilder",
    "RelationshipWeights",
    "ClusterIdentifier",
    "NetworkMetricsCalculator",
    "GraphPathfinder",
    "ForceDirectedLayout",
    "filter_network",
    # NetworkX interop
    "to_networkx",
    "connected_component_count",
]
