"""
Contact Deduplication

Finds contacts that probably describe the same person and suggests a merged
record for each group.

Components:
- Similarity Scoring: normalized edit distance and weighted contact comparison
- Core Engine: greedy single-pass duplicate grouping
- Merge Proposals: canonical record synthesis for a duplicate group

Usage:
    from contactcore.deduplication import DuplicateGrouper, MergeSuggester

    groups = DuplicateGrouper().group(contacts, threshold=0.8)
    merged = MergeSuggester().merge(groups[0].contacts)
"""

from .similarity_scoring import (
    StringSimilarity,
    ContactComparator,
    ComparisonWeights,
    SimilarityScore,
)
from .core_engine import (
    DuplicateGrouper,
    DuplicateGroup,
    DuplicateDetectionResult,
    DEFAULT_THRESHOLD,
)
from .merge_proposals import MergeSuggester, MergeProposal

__all__ = [
    # Similarity scoring
    "StringSimilarity",
    "ContactComparator",
    "ComparisonWeights",
    "SimilarityScore",
    # Grouping
    "DuplicateGrouper",
    "DuplicateGroup",
    "DuplicateDetectionResult",
    "DEFAULT_THRESHOLD",
    # Merging
    "MergeSuggester",
    "MergeProposal",
]
