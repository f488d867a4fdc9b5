"""Company, cross-company job and crew clusters of a contact snapshot."""

import logging
from typing import Dict, List, Sequence, Tuple

from ..models import Contact
from .models import Cluster, ClusterType

logger = logging.getLogger(__name__)

COMPANY_COLORS = [
    "#3B82F6", "#10B981", "#F59E0B", "#EF4444", "#8B5CF6",
    "#06B6D4", "#84CC16", "#F97316", "#EC4899", "#6366F1",
]

JOB_COLORS = [
    "#1F2937", "#374151", "#4B5563", "#6B7280", "#9CA3AF",
    "#D1D5DB", "#E5E7EB", "#F3F4F6", "#F9FAFB", "#FFFFFF",
]

CREW_COLORS = [
    "#FEE2E2", "#FECACA", "#FCA5A5", "#F87171", "#EF4444",
    "#DC2626", "#B91C1C", "#991B1B", "#7F1D1D", "#6B1D1D",
]


def cluster_id_part(value: str) -> str:
    """Escape ``-`` so joined cluster id parts stay unambiguous."""
    return value.replace("%", "%25").replace("-", "%2D")


def palette_color(key: str, palette: List[str]) -> str:
    """Pick a stable palette entry from the sum of the key's code points."""
    return palette[sum(ord(ch) for ch in key) % len(palette)]


class ClusterIdentifier:
    """Derives named clusters; a cluster always has at least two members."""

    min_members = 2

    def identify(self, contacts: Sequence[Contact]) -> List[Cluster]:
        clusters = (
            self._company_clusters(contacts)
            + self._job_clusters(contacts)
            + self._crew_clusters(contacts)
        )
        logger.debug(f"Identified {len(clusters)} clusters")
        return clusters

    def _company_clusters(self, contacts: Sequence[Contact]) -> List[Cluster]:
        groups: Dict[str, List[Contact]] = {}
        for contact in contacts:
            groups.setdefault(contact.company, []).append(contact)

        return [
            Cluster(
                id=f"company-{company}",
                name=company,
                type=ClusterType.COMPANY,
                contacts=[c.id for c in members],
                color=palette_color(company, COMPANY_COLORS),
                strength=len(members),
            )
            for company, members in groups.items()
            if len(members) >= self.min_members
        ]

    def _job_clusters(self, contacts: Sequence[Contact]) -> List[Cluster]:
        groups: Dict[str, List[Contact]] = {}
        for contact in contacts:
            groups.setdefault(contact.job, []).append(contact)

        clusters = []
        for job, members in groups.items():
            if len(members) < self.min_members:
                continue
            # Only jobs spanning more than one company
            if len({c.company for c in members}) < 2:
                continue
            clusters.append(
                Cluster(
                    id=f"job-{job}",
                    name=f"{job} Project Team",
                    type=ClusterType.JOB,
                    contacts=[c.id for c in members],
                    color=palette_color(job, JOB_COLORS),
                    strength=len(members),
                )
            )
        return clusters

    def _crew_clusters(self, contacts: Sequence[Contact]) -> List[Cluster]:
        groups: Dict[Tuple[str, str], List[Contact]] = {}
        for contact in contacts:
            if contact.crew:
                groups.setdefault((contact.company, contact.crew), []).append(contact)

        return [
            Cluster(
                id=f"crew-{cluster_id_part(company)}-{cluster_id_part(crew)}",
                name=f"{company} - {crew} Crew",
                type=ClusterType.CREW,
                contacts=[c.id for c in members],
                color=palette_color(crew, CREW_COLORS),
                strength=len(members),
            )
            for (company, crew), members in groups.items()
            if len(members) >= self.min_members
        ]
