"""
Duplicate Grouping Engine

Compares every contact against every later unclaimed contact and forms
duplicate groups greedily in a single pass. Grouping is deliberately not a
transitive closure: once a contact is claimed by an earlier anchor it is
never reconsidered, so A~B and B~C without A~C does not pull C in.
"""

import logging
import time
from typing import List, Optional, Sequence, Tuple
from dataclasses import dataclass, field

from ..error_handling import ConfigurationError
from ..models import Contact
from .similarity_scoring import ContactComparator

logger = logging.getLogger(__name__)

DEFAULT_THRESHOLD = 0.8


@dataclass
class DuplicateGroup:
    """Contacts judged to describe the same person."""
    id: str
    contacts: List[Contact]
    similarity: float
    reasons: List[str] = field(default_factory=list)

    @property
    def contact_ids(self) -> List[str]:
        return [c.id for c in self.contacts]

    def __len__(self) -> int:
        return len(self.contacts)


@dataclass
class DuplicateDetectionResult:
    """Results of a duplicate detection run."""
    total_contacts: int
    groups: List[DuplicateGroup] = field(default_factory=list)
    total_duplicates: int = 0
    threshold: float = DEFAULT_THRESHOLD
    comparisons: int = 0
    processing_time: float = 0.0


def validate_threshold(threshold: float) -> float:
    if not 0.0 < threshold <= 1.0:
        raise ConfigurationError(
            f"Duplicate threshold must be in (0, 1], got {threshold}",
            config_key="deduplication.threshold",
        )
    return threshold


def recency_key(contact: Contact):
    """Sort key putting the most recently updated contact first, undated last."""
    if contact.last_updated is None:
        return (1, 0.0)
    return (0, -contact.last_updated.timestamp())


class DuplicateGrouper:
    """
    Greedy single-pass duplicate grouping.

    Contacts are walked in input order; each unclaimed contact becomes an
    anchor, is compared against every later unclaimed contact, and claims
    all matches at or above the threshold.
    """

    def __init__(self, comparator: Optional[ContactComparator] = None):
        self.comparator = comparator or ContactComparator()

    def group(
        self, contacts: Sequence[Contact], threshold: float = DEFAULT_THRESHOLD
    ) -> List[DuplicateGroup]:
        """Group probable duplicates.

        Args:
            contacts: Contact snapshot, in scan order
            threshold: Minimum similarity for two contacts to be grouped

        Returns:
            Groups sorted by descending similarity
        """
        groups, _ = self._group(contacts, threshold)
        return groups

    def _group(self, contacts: Sequence[Contact], threshold: float) -> Tuple[List[DuplicateGroup], int]:
        validate_threshold(threshold)
        comparisons = 0

        groups: List[DuplicateGroup] = []
        claimed = set()

        for i, anchor in enumerate(contacts):
            if anchor.id in claimed:
                continue

            matches: List[Contact] = []
            scores: List[float] = []
            reasons: List[str] = []

            for candidate in contacts[i + 1:]:
                if candidate.id in claimed:
                    continue

                score = self.comparator.compare(anchor, candidate)
                comparisons += 1

                if score.similarity >= threshold:
                    matches.append(candidate)
                    scores.append(score.similarity)
                    for reason in score.reasons:
                        if reason not in reasons:
                            reasons.append(reason)

            if not matches:
                continue

            members = sorted([anchor] + matches, key=recency_key)
            group = DuplicateGroup(
                id=f"group-{anchor.id}",
                contacts=members,
                similarity=sum(scores) / len(scores),
                reasons=reasons,
            )
            groups.append(group)
            claimed.add(anchor.id)
            claimed.update(c.id for c in matches)

            logger.debug(
                f"Grouped {len(members)} contacts under {group.id} "
                f"({group.similarity:.1%})"
            )

        groups.sort(key=lambda g: g.similarity, reverse=True)
        return groups, comparisons

    def detect(
        self, contacts: Sequence[Contact], threshold: float = DEFAULT_THRESHOLD
    ) -> DuplicateDetectionResult:
        """Run grouping and summarize the outcome."""
        start_time = time.time()
        logger.info(f"🔍 Scanning {len(contacts)} contacts for duplicates (threshold {threshold})")

        groups, comparisons = self._group(contacts, threshold)

        result = DuplicateDetectionResult(
            total_contacts=len(contacts),
            groups=groups,
            total_duplicates=sum(len(g) for g in groups),
            threshold=threshold,
            comparisons=comparisons,
            processing_time=time.time() - start_time,
        )

        logger.info(
            f"✅ Found {len(groups)} duplicate groups covering "
            f"{result.total_duplicates} contacts in {result.processing_time:.2f}s"
        )
        return result
