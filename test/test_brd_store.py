"""
Tests for the BRD document store
"""
from datetime import datetime

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from domain.langgraph.brd_store import BRDStore
from domain.langgraph.errors import DocumentNotFound, StoreUnavailable, error_kind
from domain.langgraph.nodes.update.plan_validator import validate_edit_plan
from domain.langgraph.nodes.update.section_parser import parse_markdown_sections
from models import BRDSection


PLAN = {
    "sectionsToUpdate": [{"title": "Introduction", "reasoning": "clarify"}],
    "updatedSections": [{"title": "Introduction", "content": "Clearer intro."}],
    "summaryOfChanges": ["Clarified the introduction"],
}


@pytest.fixture
def stored(store, sample_brd):
    sections = parse_markdown_sections(sample_brd)
    for section in sections:
        section.summary = f"summary of {section.title}"
    document_id = store.create_document("portal.md", sample_brd, sections)
    return document_id, sections


class TestBRDStore:

    def test_create_and_get_document(self, store, stored, sample_brd):
        document_id, _ = stored

        document = store.get_document(document_id)

        assert document["filename"] == "portal.md"
        assert document["original_content"] == sample_brd
        assert document["current_content"] == sample_brd
        assert document["created_at"] is not None

    def test_get_missing_document(self, store):
        assert store.get_document(999) is None

    def test_list_sections_round_trip(self, store, stored):
        document_id, sections = stored

        assert store.list_sections(document_id) == sections

    def test_list_sections_missing_document(self, store):
        with pytest.raises(DocumentNotFound) as exc_info:
            store.list_sections(42)
        assert error_kind(exc_info.value) == "not_found"

    def test_update_content_keeps_original(self, store, stored, sample_brd):
        document_id, _ = stored

        store.update_document_content(document_id, "# New\n")
        document = store.get_document(document_id)

        assert document["current_content"] == "# New\n"
        assert document["original_content"] == sample_brd

    def test_save_sections_replaces_all(self, store, stored, test_db_session):
        document_id, _ = stored
        new_sections = parse_markdown_sections("# Only\nbody")

        store.save_sections(document_id, new_sections)

        assert [s.title for s in store.list_sections(document_id)] == ["Only"]
        assert test_db_session.query(BRDSection).count() == 1

    def test_save_content_writes_content_and_sections(self, store, stored):
        document_id, _ = stored
        new_sections = parse_markdown_sections("# Only\nbody\n")

        store.save_content(document_id, "# Only\nbody\n", new_sections)
        document = store.get_document(document_id)

        assert document["current_content"] == "# Only\nbody\n"
        assert store.list_sections(document_id) == new_sections
        assert datetime.fromisoformat(document["updated_at"]) >= datetime.fromisoformat(document["created_at"])

    def test_save_content_missing_document(self, store):
        with pytest.raises(DocumentNotFound):
            store.save_content(99, "# A\n", parse_markdown_sections("# A\n"))

    def test_replace_section_content(self, store, stored, test_db_session):
        document_id, _ = stored
        section_id = test_db_session.query(BRDSection).filter(BRDSection.title == "Glossary").first().id
        test_db_session.close()

        store.replace_section_content(section_id, "PO: Purchase Order", "glossary summary")
        glossary = [s for s in store.list_sections(document_id) if s.title == "Glossary"][0]

        assert glossary.content == "PO: Purchase Order"
        assert glossary.summary == "glossary summary"

    def test_replace_missing_section(self, store):
        with pytest.raises(StoreUnavailable):
            store.replace_section_content(12345, "x", None)

    def test_record_edit_history(self, store, stored):
        document_id, _ = stored

        edit_id = store.record_edit_history(document_id, "clarify intro", validate_edit_plan(PLAN))
        edits = store.list_edits(document_id)

        assert [e["id"] for e in edits] == [edit_id]
        assert edits[0]["prompt"] == "clarify intro"
        assert edits[0]["sections_updated"] == PLAN["sectionsToUpdate"]
        assert edits[0]["summary_of_changes"] == PLAN["summaryOfChanges"]

    def test_save_edit_writes_everything(self, store, stored):
        document_id, _ = stored
        new_sections = parse_markdown_sections("# Introduction\nClearer intro.\n")

        store.save_edit(document_id, "# Introduction\nClearer intro.\n", new_sections,
                        "clarify intro", validate_edit_plan(PLAN))

        assert store.get_document(document_id)["current_content"] == "# Introduction\nClearer intro.\n"
        assert store.list_sections(document_id) == new_sections
        assert len(store.list_edits(document_id)) == 1

    def test_save_edit_missing_document_writes_nothing(self, store, test_db_session):
        with pytest.raises(DocumentNotFound):
            store.save_edit(7, "# A\n", parse_markdown_sections("# A\n"), "p", validate_edit_plan(PLAN))

        assert test_db_session.query(BRDSection).count() == 0

    def test_database_errors_become_store_unavailable(self):
        # no tables created
        engine = create_engine("sqlite:///:memory:")
        broken_store = BRDStore(sessionmaker(bind=engine))

        with pytest.raises(StoreUnavailable) as exc_info:
            broken_store.get_document(1)
        assert error_kind(exc_info.value) == "store"
