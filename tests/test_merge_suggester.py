"""Tests for merge suggestion and proposals."""

from datetime import datetime

import pytest

from contactcore.deduplication import DuplicateGrouper, MergeSuggester
from contactcore.error_handling import MergeError
from contactcore.models import ContactKind


class TestMergeSuggester:
    """Test suite for MergeSuggester."""

    @pytest.fixture
    def suggester(self):
        return MergeSuggester()

    def test_empty_group_fails(self, suggester):
        with pytest.raises(MergeError) as exc_info:
            suggester.merge([])
        assert exc_info.value.error_code == "merge_error"
        assert exc_info.value.group_size == 0

    def test_single_contact_returned_unchanged(self, suggester, make_contact):
        contact = make_contact(name="Solo", email="solo@x.com")
        assert suggester.merge([contact]) is contact

    def test_most_recent_contact_is_base(self, suggester, make_contact):
        older = make_contact(id="old", name="Jon Smith", email="old@x.com",
                             last_updated=datetime(2023, 1, 1))
        newer = make_contact(id="new", name="John Smith", phone="555-0100",
                             last_updated=datetime(2024, 1, 1))

        merged = suggester.merge([older, newer])

        assert merged.id == "new"
        assert merged.name == "John Smith"
        assert merged.email == "old@x.com"
        assert merged.phone == "555-0100"
        assert merged.last_updated == datetime(2024, 1, 1)

    def test_first_found_value_fills_gaps(self, suggester, make_contact):
        base = make_contact(id="b", name="Kim", last_updated=datetime(2024, 5, 1))
        first = make_contact(id="f", name="Kim", title="Operator")
        second = make_contact(id="s", name="Kim", title="Supervisor", crew="Red")

        merged = suggester.merge([base, first, second])

        assert merged.title == "Operator"
        assert merged.crew == "Red"

    def test_undated_contacts_lose_to_dated(self, suggester, make_contact):
        undated = make_contact(id="u", name="Lee")
        dated = make_contact(id="d", name="Lee", last_updated=datetime(2020, 1, 1))

        assert suggester.merge([undated, dated]).id == "d"

    def test_ties_keep_group_order(self, suggester, make_contact):
        first = make_contact(id="first", name="Lee")
        second = make_contact(id="second", name="Lee")

        assert suggester.merge([first, second]).id == "first"

    def test_notes_deduplicated_and_joined(self, suggester, make_contact):
        contacts = [
            make_contact(name="Ann", notes="Prefers text"),
            make_contact(name="Ann", notes="Night shift lead"),
            make_contact(name="Ann", notes="Prefers text"),
            make_contact(name="Ann"),
        ]

        merged = suggester.merge(contacts)

        assert merged.notes == "Prefers text\n---\nNight shift lead"

    def test_single_distinct_note_kept_as_is(self, suggester, make_contact):
        contacts = [make_contact(name="Ann", notes="Gate code 1234"), make_contact(name="Ann")]
        assert suggester.merge(contacts).notes == "Gate code 1234"

    def test_inputs_are_not_mutated(self, suggester, make_contact):
        a = make_contact(id="a", name="Ann", last_updated=datetime(2024, 1, 1))
        b = make_contact(id="b", name="Ann", email="ann@x.com")

        suggester.merge([a, b])

        assert a.email is None
        assert b.email == "ann@x.com"

    def test_conflicting_fields(self, suggester, make_contact):
        a = make_contact(id="a", name="Ann Lee", company="Acme", email="ann@x.com",
                         notes="one", last_updated=datetime(2024, 1, 1))
        b = make_contact(id="b", name="Anne Lee", company="Acme", email="ann@y.com",
                         notes="two")

        conflicts = suggester.conflicting_fields([a, b])

        assert conflicts == ["name", "email"]

    def test_propose_wraps_group(self, suggester, duplicate_contacts):
        group = DuplicateGrouper().group(duplicate_contacts)[0]

        proposal = suggester.propose(group)

        assert proposal.group_id == "group-1"
        assert proposal.source_ids == ["2", "1"]
        assert proposal.merged.id == "2"
        assert proposal.merged.kind == ContactKind.CLIENT
        assert proposal.conflicting_fields == ["name"]
        assert proposal.has_conflicts
        assert proposal.similarity == group.similarity
        assert proposal.reasons == group.reasons
