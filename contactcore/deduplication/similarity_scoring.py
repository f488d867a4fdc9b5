"""
Similarity Scoring System

Normalized edit-distance string similarity and the weighted multi-field
comparison used to decide whether two contacts describe the same person.

Every comparison is an all-pairs operation over short contact fields, so the
duplicate detector as a whole costs roughly O(n^2 * L^2) for n contacts with
fields of length L. Very large contact sets should be narrowed (search,
company filter) before they are scored.
"""

import math
import re
import logging
from typing import List, Optional
from dataclasses import dataclass, field

from rapidfuzz.distance import Levenshtein

from ..models import Contact

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ComparisonWeights:
    """Weights and thresholds of the contact comparison policy."""

    name_threshold: float = 0.8
    name_high_weight: float = 3.0
    exact_match_weight: float = 5.0
    company_threshold: float = 0.9
    company_high_weight: float = 2.0
    title_weight: float = 0.5
    title_threshold: float = 0.8
    crew_threshold: float = 0.9
    crew_high_weight: float = 1.0
    crew_low_weight: float = 0.5
    crew_denominator: float = 0.5


@dataclass
class SimilarityScore:
    """Similarity between two contacts with the reasons that supported it."""

    contact_a_id: str
    contact_b_id: str
    similarity: float
    reasons: List[str] = field(default_factory=list)


class StringSimilarity:
    """Levenshtein similarity normalized by the longer string's length."""

    def similarity(self, a: Optional[str], b: Optional[str]) -> float:
        """Return similarity of two strings in [0, 1].

        Both values are lower-cased and trimmed first. Equal strings score 1,
        a missing or empty side scores 0. Lengths and edits count Unicode
        code points.
        """
        s1 = (a or "").strip().lower()
        s2 = (b or "").strip().lower()

        if s1 == s2:
            return 1.0
        if not s1 or not s2:
            return 0.0

        distance = Levenshtein.distance(s1, s2)
        return 1.0 - distance / max(len(s1), len(s2))


def normalize_email(email: str) -> str:
    return email.strip().lower()


def normalize_phone(phone: str) -> str:
    return re.sub(r"\D", "", phone)


def percent(value: float) -> int:
    """Round a ratio to a whole percentage, halves rounding up."""
    return int(math.floor(value * 100 + 0.5))


class ContactComparator:
    """
    Weighted multi-field contact comparison.

    Each applicable field adds to a running weighted sum and to a running
    denominator; the final score is their ratio clamped to 1. Exact email and
    phone matches contribute more to the sum than to the denominator, which is
    what lets a shared identifier dominate a weak name match.
    """

    def __init__(
        self,
        string_similarity: Optional[StringSimilarity] = None,
        weights: Optional[ComparisonWeights] = None,
    ):
        self.strings = string_similarity or StringSimilarity()
        self.weights = weights or ComparisonWeights()

    def compare(self, contact_a: Contact, contact_b: Contact) -> SimilarityScore:
        """Compare two contacts.

        Args:
            contact_a: First contact
            contact_b: Second contact

        Returns:
            SimilarityScore with a similarity in [0, 1] and matched reasons
        """
        w = self.weights
        reasons: List[str] = []
        total = 0.0
        checks = 0.0

        name_sim = self.strings.similarity(contact_a.name, contact_b.name)
        if name_sim > w.name_threshold:
            reasons.append(f"Similar names ({percent(name_sim)}% match)")
            total += name_sim * w.name_high_weight
            checks += w.name_high_weight
        else:
            total += name_sim
            checks += 1

        if contact_a.email and contact_b.email:
            if normalize_email(contact_a.email) == normalize_email(contact_b.email):
                reasons.append("Same email address")
                total += w.exact_match_weight
            checks += 1

        if contact_a.phone and contact_b.phone:
            if normalize_phone(contact_a.phone) == normalize_phone(contact_b.phone):
                reasons.append("Same phone number")
                total += w.exact_match_weight
            checks += 1

        for label, value_a, value_b in (
            ("company", contact_a.company, contact_b.company),
            ("job", contact_a.job, contact_b.job),
        ):
            if value_a and value_b:
                sim = self.strings.similarity(value_a, value_b)
                if sim > w.company_threshold:
                    reasons.append(f"Same/similar {label} ({percent(sim)}% match)")
                    total += sim * w.company_high_weight
                else:
                    total += sim
                checks += 1

        if contact_a.title and contact_b.title:
            title_sim = self.strings.similarity(contact_a.title, contact_b.title)
            if title_sim > w.title_threshold:
                reasons.append(f"Similar titles ({percent(title_sim)}% match)")
            total += title_sim * w.title_weight
            checks += w.title_weight

        if contact_a.crew and contact_b.crew:
            crew_sim = self.strings.similarity(contact_a.crew, contact_b.crew)
            if crew_sim > w.crew_threshold:
                reasons.append(f"Same/similar crew ({percent(crew_sim)}% match)")
                total += crew_sim * w.crew_high_weight
            else:
                total += crew_sim * w.crew_low_weight
            checks += w.crew_denominator

        final = total / checks if checks > 0 else 0.0

        return SimilarityScore(
            contact_a_id=contact_a.id,
            contact_b_id=contact_b.id,
            similarity=min(final, 1.0),
            reasons=reasons,
        )
