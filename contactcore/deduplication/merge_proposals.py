"""
Merge Proposals

Builds one canonical contact out of a duplicate group. The most recently
updated member is the base; gaps in it are filled from the other members in
group order, and every distinct note is kept.
"""

import logging
from typing import Any, Dict, List, Sequence
from dataclasses import dataclass, field

from ..error_handling import MergeError
from ..models import Contact
from .core_engine import DuplicateGroup, recency_key

logger = logging.getLogger(__name__)

NOTE_SEPARATOR = "\n---\n"

# Fields that legitimately differ across duplicates
_NON_CONFLICTING = {"id", "notes", "last_updated"}


@dataclass
class MergeProposal:
    """A suggested merge of a duplicate group, with the evidence behind it."""
    merged: Contact
    group_id: str
    source_ids: List[str] = field(default_factory=list)
    conflicting_fields: List[str] = field(default_factory=list)
    similarity: float = 0.0
    reasons: List[str] = field(default_factory=list)

    @property
    def has_conflicts(self) -> bool:
        return bool(self.conflicting_fields)


def _is_empty(value: Any) -> bool:
    return value is None or value == ""


class MergeSuggester:
    """Prefer-non-empty, first-found-wins contact synthesis."""

    def merge(self, contacts: Sequence[Contact]) -> Contact:
        """Suggest a merged record for a group of duplicates.

        Args:
            contacts: Group members in group order

        Returns:
            The merged contact; a single-member group returns that member

        Raises:
            MergeError: If the group is empty
        """
        if not contacts:
            raise MergeError("No contacts to merge", group_size=0)
        if len(contacts) == 1:
            return contacts[0]

        base = min(contacts, key=recency_key)
        merged: Dict[str, Any] = {name: getattr(base, name) for name in Contact.model_fields}

        for contact in contacts:
            for name in Contact.model_fields:
                value = getattr(contact, name)
                if not _is_empty(value) and _is_empty(merged[name]):
                    merged[name] = value

        notes: List[str] = []
        for contact in contacts:
            if contact.notes and contact.notes not in notes:
                notes.append(contact.notes)
        if notes:
            merged["notes"] = NOTE_SEPARATOR.join(notes)

        logger.debug(f"Merged {len(contacts)} contacts onto base {base.id}")
        return base.model_copy(update=merged)

    def conflicting_fields(self, contacts: Sequence[Contact]) -> List[str]:
        """Fields whose non-empty values disagree across the contacts."""
        conflicts = []
        for name in Contact.model_fields:
            if name in _NON_CONFLICTING:
                continue
            values = []
            for contact in contacts:
                value = getattr(contact, name)
                if not _is_empty(value) and value not in values:
                    values.append(value)
            if len(values) > 1:
                conflicts.append(name)
        return conflicts

    def propose(self, group: DuplicateGroup) -> MergeProposal:
        """Wrap the merge of a duplicate group into a reviewable proposal."""
        merged = self.merge(group.contacts)
        proposal = MergeProposal(
            merged=merged,
            group_id=group.id,
            source_ids=group.contact_ids,
            conflicting_fields=self.conflicting_fields(group.contacts),
            similarity=group.similarity,
            reasons=list(group.reasons),
        )
        if proposal.has_conflicts:
            logger.info(
                f"⚠️ Merge proposal {group.id} has conflicting fields: "
                f"{', '.join(proposal.conflicting_fields)}"
            )
        return proposal
