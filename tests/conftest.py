"""Shared fixtures for contactcore tests."""

import json
from datetime import datetime

import pytest

from contactcore.models import Contact


@pytest.fixture
def make_contact():
    """Factory for contacts with sensible defaults."""
    counter = {"n": 0}

    def _make(**fields):
        counter["n"] += 1
        fields.setdefault("id", f"c{counter['n']}")
        fields.setdefault("name", f"Contact {counter['n']}")
        return Contact(**fields)

    return _make


@pytest.fixture
def crew_contacts(make_contact):
    """A small field roster: two companies sharing one job, with crews."""
    return [
        make_contact(id="a1", name="Alice Walker", company="Acme", job="Well 7",
                     kind="frac", crew="Red", shift="days", title="Operator"),
        make_contact(id="a2", name="Brian Ortiz", company="Acme", job="Well 7",
                     kind="frac", crew="Red", shift="nights", title="Operator"),
        make_contact(id="a3", name="Carla Diaz", company="Acme", job="Pad 3",
                     kind="frac", crew="Blue"),
        make_contact(id="h1", name="Dan Reyes", company="Halliburton", job="Well 7",
                     kind="client", title="Company Man"),
        make_contact(id="h2", name="Erin Cho", company="Halliburton", job="Pad 9",
                     kind="client"),
    ]


@pytest.fixture
def duplicate_contacts(make_contact):
    """Contacts with one obvious duplicate pair."""
    return [
        make_contact(id="1", name="John Smith", email="j@x.com",
                     last_updated=datetime(2024, 1, 1)),
        make_contact(id="2", name="Jon Smith", email="j@x.com", phone="555-0100",
                     last_updated=datetime(2024, 6, 1)),
        make_contact(id="3", name="Maria Gonzalez", email="maria@y.com"),
    ]


@pytest.fixture
def contacts_file(tmp_path, crew_contacts, duplicate_contacts):
    """Write a contact snapshot as the CLI reads it."""

    def _write(contacts=None, wrap=False):
        records = [
            c.model_dump(mode="json")
            for c in (contacts if contacts is not None else crew_contacts + duplicate_contacts)
        ]
        payload = {"contacts": records} if wrap else records
        path = tmp_path / "contacts.json"
        path.write_text(json.dumps(payload))
        return str(path)

    return _write
