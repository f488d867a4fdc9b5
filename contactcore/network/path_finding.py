"""Shortest-path and influencer queries over the relationship graph."""

import logging
from typing import Dict, List, Sequence, Set, Tuple
from collections import defaultdict, deque

from .models import GraphEdge, GraphNode

logger = logging.getLogger(__name__)

DEFAULT_INFLUENCER_STRENGTH = 3.0


class GraphPathfinder:
    """Breadth-first queries over an undirected edge list."""

    def find_path(
        self, from_id: str, to_id: str, edges: Sequence[GraphEdge]
    ) -> List[GraphEdge]:
        """Find the shortest chain of relationships between two contacts.

        Neighbors are expanded in edge-list order, so among equally short
        paths the first one discovered wins.

        Args:
            from_id: Starting contact id
            to_id: Target contact id
            edges: Relationship edges

        Returns:
            Edges along the path; empty when unreachable or ``from_id == to_id``
        """
        adjacency: Dict[str, List[Tuple[str, GraphEdge]]] = defaultdict(list)
        for edge in edges:
            adjacency[edge.source].append((edge.target, edge))
            adjacency[edge.target].append((edge.source, edge))

        visited: Set[str] = set()
        queue = deque([(from_id, [])])

        while queue:
            contact_id, path = queue.popleft()

            if contact_id == to_id:
                logger.debug(f"Path {from_id} -> {to_id}: {len(path)} hops")
                return path

            if contact_id in visited:
                continue
            visited.add(contact_id)

            for next_id, edge in adjacency[contact_id]:
                if next_id not in visited:
                    queue.append((next_id, path + [edge]))

        logger.debug(f"No path between {from_id} and {to_id}")
        return []

    def path_contacts(self, from_id: str, path: Sequence[GraphEdge]) -> List[str]:
        """Contact ids visited along ``path`` starting at ``from_id``."""
        ids = [from_id]
        for edge in path:
            ids.append(edge.other(ids[-1]))
        return ids

    def get_influencers(
        self,
        contact_id: str,
        nodes: Sequence[GraphNode],
        edges: Sequence[GraphEdge],
        min_strength: float = DEFAULT_INFLUENCER_STRENGTH,
    ) -> List[GraphNode]:
        """Strongly connected neighbors of a contact, most central first."""
        neighbor_ids: Set[str] = set()
        for edge in edges:
            if edge.strength >= min_strength and edge.connects(contact_id):
                neighbor_ids.add(edge.other(contact_id))

        influencers = [node for node in nodes if node.id in neighbor_ids]
        influencers.sort(key=lambda node: node.centrality_score, reverse=True)
        return influencers
