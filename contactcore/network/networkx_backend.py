"""NetworkX bridge for the contact relationship graph."""

import logging
from typing import Sequence

import networkx as nx

from .models import GraphEdge, GraphNode

logger = logging.getLogger(__name__)


def to_networkx(nodes: Sequence[GraphNode], edges: Sequence[GraphEdge]) -> nx.Graph:
    """Convert nodes and edges into an undirected ``networkx.Graph``.

    Node attributes carry the denormalized contact fields; edge attributes
    carry strength (also exposed as ``weight``), relationship type and
    details. Edges whose endpoints are not among ``nodes`` are skipped.
    """
    graph = nx.Graph()

    for node in nodes:
        graph.add_node(
            node.id,
            name=node.name,
            company=node.company,
            job=node.job,
            kind=node.kind,
            title=node.title,
            crew=node.crew,
            connection_count=node.connection_count,
            centrality_score=node.centrality_score,
        )

    for edge in edges:
        if not graph.has_node(edge.source) or not graph.has_node(edge.target):
            logger.warning(f"Edge {edge.id} references an unknown contact, skipping")
            continue
        graph.add_edge(
            edge.source,
            edge.target,
            id=edge.id,
            weight=edge.strength,
            strength=edge.strength,
            relationship_type=edge.relationship_type.value,
            details=list(edge.details),
        )

    return graph


def connected_component_count(nodes: Sequence[GraphNode], edges: Sequence[GraphEdge]) -> int:
    """Number of connected components, isolated contacts counting as one each."""
    if not nodes:
        return 0
    return nx.number_connected_components(to_networkx(nodes, edges))
