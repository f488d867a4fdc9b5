"""Graph data structures for the contact relationship network."""

from enum import Enum
from typing import Dict, List, Optional
from dataclasses import dataclass, field, asdict

from ..models import Contact


class RelationshipType(str, Enum):
    """Classification of the strongest link between two contacts."""

    SAME_COMPANY_JOB = "same-company-job"
    SAME_COMPANY = "same-company"
    SAME_CREW = "same-crew"
    SAME_JOB_DIFFERENT_COMPANY = "same-job-different-company"
    SAME_TITLE = "same-title"
    POTENTIAL_COLLABORATION = "potential-collaboration"


class ClusterType(str, Enum):
    COMPANY = "company"
    JOB = "job"
    CREW = "crew"


@dataclass
class GraphNode:
    """A contact as a node in the relationship graph."""

    id: str
    name: str
    company: str
    job: str
    kind: str
    title: Optional[str] = None
    crew: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    connection_count: int = 0
    centrality_score: float = 0.0

    @classmethod
    def from_contact(cls, contact: Contact) -> "GraphNode":
        return cls(
            id=contact.id,
            name=contact.name,
            company=contact.company,
            job=contact.job,
            kind=contact.kind.value,
            title=contact.title,
            crew=contact.crew,
            email=contact.email,
            phone=contact.phone,
        )

    def to_dict(self) -> Dict:
        return asdict(self)


@dataclass
class GraphEdge:
    """An undirected relationship between two contacts."""

    id: str
    source: str
    target: str
    strength: float
    relationship_type: RelationshipType = RelationshipType.POTENTIAL_COLLABORATION
    details: List[str] = field(default_factory=list)
    shared_attributes: List[str] = field(default_factory=list)

    def connects(self, contact_id: str) -> bool:
        return contact_id in (self.source, self.target)

    def other(self, contact_id: str) -> Optional[str]:
        """Return the endpoint opposite ``contact_id``, or None if not incident."""
        if contact_id == self.source:
            return self.target
        if contact_id == self.target:
            return self.source
        return None

    def to_dict(self) -> Dict:
        data = asdict(self)
        data["relationship_type"] = self.relationship_type.value
        return data


@dataclass
class Cluster:
    """A named grouping of contacts."""

    id: str
    name: str
    type: ClusterType
    contacts: List[str]
    color: str
    strength: int = 0

    def to_dict(self) -> Dict:
        data = asdict(self)
        data["type"] = self.type.value
        return data


@dataclass
class NetworkMetrics:
    """Summary statistics of a relationship graph."""

    total_contacts: int = 0
    total_relationships: int = 0
    average_connections: float = 0.0
    network_density: float = 0.0
    largest_cluster: int = 0
    isolated_contacts: int = 0
    company_clusters: int = 0
    job_clusters: int = 0
    crew_clusters: int = 0
    connected_components: int = 0

    def to_dict(self) -> Dict:
        return asdict(self)


@dataclass
class Position:
    x: float
    y: float


@dataclass
class NetworkData:
    """Everything the network dashboard shows for one contact snapshot."""

    nodes: List[GraphNode] = field(default_factory=list)
    relationships: List[GraphEdge] = field(default_factory=list)
    clusters: List[Cluster] = field(default_factory=list)
    metrics: NetworkMetrics = field(default_factory=NetworkMetrics)

    def node(self, contact_id: str) -> Optional[GraphNode]:
        for node in self.nodes:
            if node.id == contact_id:
                return node
        return None

    def to_dict(self) -> Dict:
        return {
            "nodes": [n.to_dict() for n in self.nodes],
            "relationships": [e.to_dict() for e in self.relationships],
            "clusters": [c.to_dict() for c in self.clusters],
            "metrics": self.metrics.to_dict(),
        }
