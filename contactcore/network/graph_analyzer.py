"""
Relationship Graph Builder

Scores every pair of contacts on shared organization, project, crew, role,
shift and contact kind, and turns the non-zero scores into weighted edges.
This weighting is separate from duplicate detection: it measures how closely
two different people work together, not whether they are the same person.
"""

import logging
from typing import List, Optional, Sequence
from dataclasses import dataclass

from ..models import Contact
from .models import GraphEdge, GraphNode, RelationshipType

logger = logging.getLogger(__name__)

MAX_STRENGTH = 10.0


@dataclass(frozen=True)
class RelationshipWeights:
    """Strength added by each kind of shared attribute."""

    company_and_job: float = 5.0
    company: float = 3.0
    job: float = 2.0
    crew: float = 4.0
    title: float = 1.0
    shift: float = 1.0
    kind: float = 0.5


class RelationshipGraphBuilder:
    """
    Builds the weighted relationship graph of a contact snapshot.

    Every call recomputes nodes and edges from scratch; nothing is cached
    between snapshots.
    """

    def __init__(self, weights: Optional[RelationshipWeights] = None):
        self.weights = weights or RelationshipWeights()

    def build_nodes(self, contacts: Sequence[Contact]) -> List[GraphNode]:
        """Create one node per contact with zeroed connection statistics."""
        return [GraphNode.from_contact(contact) for contact in contacts]

    def build(self, contacts: Sequence[Contact]) -> List[GraphEdge]:
        """Build edges for every related pair (i < j) in input order."""
        logger.info(f"🌐 Building relationship graph for {len(contacts)} contacts")

        edges: List[GraphEdge] = []
        for i, contact_a in enumerate(contacts):
            for contact_b in contacts[i + 1:]:
                edge = self.relate(contact_a, contact_b)
                if edge is not None:
                    edges.append(edge)

        logger.info(f"✅ Graph built: {len(contacts)} nodes, {len(edges)} edges")
        return edges

    def relate(self, contact_a: Contact, contact_b: Contact) -> Optional[GraphEdge]:
        """Score the relationship between two contacts.

        Returns:
            The edge from ``contact_a`` to ``contact_b``, or None when they
            share nothing
        """
        w = self.weights
        strength = 0.0
        relationship_type = RelationshipType.POTENTIAL_COLLABORATION
        details: List[str] = []
        shared: List[str] = []

        same_company = contact_a.company == contact_b.company
        same_job = contact_a.job == contact_b.job

        if same_company and same_job:
            strength += w.company_and_job
            relationship_type = RelationshipType.SAME_COMPANY_JOB
            details.append(f"Both work at {contact_a.company} on {contact_a.job}")
            shared.extend(["company", "job"])
        elif same_company:
            strength += w.company
            relationship_type = RelationshipType.SAME_COMPANY
            details.append(f"Both work at {contact_a.company}")
            shared.append("company")
        elif same_job:
            strength += w.job
            relationship_type = RelationshipType.SAME_JOB_DIFFERENT_COMPANY
            details.append(f"Both work on {contact_a.job} project")
            shared.append("job")

        # Crew outranks every organizational link
        if contact_a.crew and contact_b.crew and contact_a.crew == contact_b.crew:
            strength += w.crew
            relationship_type = RelationshipType.SAME_CREW
            details.append(f"Both in {contact_a.crew} crew")
            shared.append("crew")

        if contact_a.title and contact_b.title and contact_a.title == contact_b.title:
            strength += w.title
            details.append(f"Both have {contact_a.title} role")
            shared.append("title")

        if contact_a.shift and contact_b.shift and contact_a.shift == contact_b.shift:
            strength += w.shift
            details.append(f"Both work {contact_a.shift.value} shift")
            shared.append("shift")

        if contact_a.kind_label == contact_b.kind_label:
            strength += w.kind
            details.append(f"Both are {contact_a.kind_label} contacts")
            shared.append("type")

        if strength == 0:
            return None

        return GraphEdge(
            id=f"{contact_a.id}-{contact_b.id}",
            source=contact_a.id,
            target=contact_b.id,
            strength=min(strength, MAX_STRENGTH),
            relationship_type=relationship_type,
            details=details,
            shared_attributes=shared,
        )
