"""
Tests for models and database functionality
"""
from models import AIEdit, BRDDocument, BRDSection


class TestModels:
    """Test SQLAlchemy model functionality."""

    def test_document_model(self, test_db_session):
        """Test BRDDocument creation and defaults."""
        document = BRDDocument(filename="portal.md", original_content="# A\n", current_content="# A\n")
        test_db_session.add(document)
        test_db_session.commit()

        saved = test_db_session.query(BRDDocument).filter(BRDDocument.filename == "portal.md").first()
        assert saved is not None
        assert saved.current_content == "# A\n"
        assert saved.created_at is not None
        assert saved.updated_at is not None

    def test_sections_ordered_by_start_index(self, test_db_session):
        """Test that the sections relationship follows document order."""
        document = BRDDocument(filename="doc.md", original_content="", current_content="")
        test_db_session.add(document)
        test_db_session.commit()

        test_db_session.add_all([
            BRDSection(document_id=document.id, position=1, title="Second", level=1,
                       content="b", start_index=2, end_index=3),
            BRDSection(document_id=document.id, position=0, title="First", level=1,
                       content="a", start_index=0, end_index=1),
        ])
        test_db_session.commit()
        test_db_session.refresh(document)

        assert [s.title for s in document.sections] == ["First", "Second"]
        assert document.sections[0].summary is None

    def test_ai_edit_json_columns(self, test_db_session):
        """Test that edit history keeps JSON lists."""
        document = BRDDocument(filename="doc.md", original_content="", current_content="")
        test_db_session.add(document)
        test_db_session.commit()

        edit = AIEdit(
            document_id=document.id,
            prompt="Add a risks section",
            sections_updated=[{"title": "Risks", "reasoning": "requested"}],
            summary_of_changes=["Added risks"],
        )
        test_db_session.add(edit)
        test_db_session.commit()

        saved = test_db_session.query(AIEdit).first()
        assert saved.sections_updated == [{"title": "Risks", "reasoning": "requested"}]
        assert saved.summary_of_changes == ["Added risks"]
        assert saved.document.filename == "doc.md"

    def test_delete_document_cascades(self, test_db_session):
        """Test that deleting a document removes its sections and edits."""
        document = BRDDocument(filename="doc.md", original_content="", current_content="")
        document.sections.append(
            BRDSection(position=0, title="Only", level=1, content="", start_index=0, end_index=0)
        )
        document.edits.append(AIEdit(prompt="p", sections_updated=[], summary_of_changes=[]))
        test_db_session.add(document)
        test_db_session.commit()

        test_db_session.delete(document)
        test_db_session.commit()

        assert test_db_session.query(BRDSection).count() == 0
        assert test_db_session.query(AIEdit).count() == 0
