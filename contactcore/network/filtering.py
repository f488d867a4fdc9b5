"""Strength and search filtering of a network before it is laid out."""

import logging
from typing import List, Optional, Sequence, Tuple

from .models import GraphEdge, GraphNode

logger = logging.getLogger(__name__)

DEFAULT_MIN_STRENGTH = 1.0


def filter_network(
    nodes: Sequence[GraphNode],
    edges: Sequence[GraphEdge],
    min_strength: float = DEFAULT_MIN_STRENGTH,
    search_query: Optional[str] = None,
) -> Tuple[List[GraphNode], List[GraphEdge]]:
    """Trim a network down to what should be drawn.

    Edges weaker than ``min_strength`` are dropped. Without a search query a
    node survives when it is an endpoint of a remaining edge, or when no edge
    remains at all. With a query, nodes are kept instead when the lower-cased
    query occurs in their name, company or job.

    Returns:
        (nodes, edges) in their original order
    """
    kept_edges = [edge for edge in edges if edge.strength >= min_strength]

    if search_query:
        query = search_query.lower()
        kept_nodes = [
            node for node in nodes
            if query in node.name.lower()
            or query in node.company.lower()
            or query in node.job.lower()
        ]
    else:
        connected = set()
        for edge in kept_edges:
            connected.add(edge.source)
            connected.add(edge.target)
        kept_nodes = [node for node in nodes if node.id in connected or not kept_edges]

    logger.debug(
        f"Filtered network to {len(kept_nodes)}/{len(nodes)} nodes, "
        f"{len(kept_edges)}/{len(edges)} edges"
    )
    return kept_nodes, kept_edges
