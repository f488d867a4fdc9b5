"""
Force-Directed Layout

Places graph nodes on a 2-D canvas with a simple physics simulation: nodes
start evenly spaced on a circle, repel each other with an inverse-square
force, and are pulled together along edges by springs whose stiffness scales
with relationship strength. Positions are clamped to the canvas margin after
every step.

The simulation is deterministic and keeps no state between calls.
"""

import math
import logging
from typing import Dict, List, Sequence

from ..error_handling import ConfigurationError
from .models import GraphEdge, GraphNode, Position

logger = logging.getLogger(__name__)

REPULSION = 1000.0
SPRING_LENGTH = 100.0
SPRING_STIFFNESS = 0.1
DAMPING = 0.1
MARGIN = 50.0
INITIAL_RADIUS = 0.3
MIN_CANVAS = 2 * MARGIN


class ForceDirectedLayout:
    """Iterative repulsion, spring and damping simulation."""

    def layout(
        self,
        nodes: Sequence[GraphNode],
        edges: Sequence[GraphEdge],
        width: float,
        height: float,
        iterations: int = 100,
    ) -> Dict[str, Position]:
        """Compute node positions.

        Args:
            nodes: Nodes to place
            edges: Edges acting as springs; edges with an endpoint outside
                ``nodes`` are ignored
            width: Canvas width, at least 100
            height: Canvas height, at least 100
            iterations: Number of simulation steps

        Returns:
            Mapping of node id to position within [50, width-50] x [50, height-50]

        Raises:
            ConfigurationError: If the canvas or iteration count is invalid
        """
        if width < MIN_CANVAS or height < MIN_CANVAS:
            raise ConfigurationError(
                f"Canvas must be at least {MIN_CANVAS:g}x{MIN_CANVAS:g}, got {width}x{height}",
                config_key="layout",
            )
        if iterations < 0:
            raise ConfigurationError(
                f"Iterations must be non-negative, got {iterations}",
                config_key="layout.iterations",
            )

        positions = self._initial_positions(nodes, width, height)
        springs = [e for e in edges if e.source in positions and e.target in positions]

        for _ in range(iterations):
            forces = {node.id: [0.0, 0.0] for node in nodes}

            for node1 in nodes:
                p1 = positions[node1.id]
                force = forces[node1.id]
                for node2 in nodes:
                    if node1.id == node2.id:
                        continue
                    p2 = positions[node2.id]
                    dx = p1.x - p2.x
                    dy = p1.y - p2.y
                    distance = math.sqrt(dx * dx + dy * dy) or 1.0
                    repulsion = REPULSION / (distance * distance)
                    force[0] += dx / distance * repulsion
                    force[1] += dy / distance * repulsion

            for edge in springs:
                p1 = positions[edge.source]
                p2 = positions[edge.target]
                dx = p1.x - p2.x
                dy = p1.y - p2.y
                distance = math.sqrt(dx * dx + dy * dy) or 1.0
                attraction = (distance - SPRING_LENGTH) * SPRING_STIFFNESS * edge.strength
                f1 = forces[edge.source]
                f2 = forces[edge.target]
                f1[0] -= dx / distance * attraction
                f1[1] -= dy / distance * attraction
                f2[0] += dx / distance * attraction
                f2[1] += dy / distance * attraction

            for node in nodes:
                pos = positions[node.id]
                fx, fy = forces[node.id]
                pos.x = min(max(pos.x + fx * DAMPING, MARGIN), width - MARGIN)
                pos.y = min(max(pos.y + fy * DAMPING, MARGIN), height - MARGIN)

        logger.debug(f"Laid out {len(nodes)} nodes over {iterations} iterations")
        return positions

    def _initial_positions(
        self, nodes: Sequence[GraphNode], width: float, height: float
    ) -> Dict[str, Position]:
        radius = min(width, height) * INITIAL_RADIUS
        count = len(nodes)
        positions = {}
        for index, node in enumerate(nodes):
            angle = index / count * 2 * math.pi
            positions[node.id] = Position(
                x=width / 2 + math.cos(angle) * radius,
                y=height / 2 + math.sin(angle) * radius,
            )
        return positions


def layout_bounds(positions: Dict[str, Position]) -> List[float]:
    """Bounding box ``[min_x, min_y, max_x, max_y]`` of a layout."""
    if not positions:
        return [0.0, 0.0, 0.0, 0.0]
    xs = [p.x for p in positions.values()]
    ys = [p.y for p in positions.values()]
    return [min(xs), min(ys), max(xs), max(ys)]
