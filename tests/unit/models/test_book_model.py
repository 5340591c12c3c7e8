"""
Unit Tests for the Book Model.

Tests the camelCase projection and archival helpers.
"""

from datetime import date, datetime, timezone

from temporal_books.models.book import ARCHIVED_STATUS, Book, Editing, Status
from temporal_books.models.envelopes import ChangeUnit, StateSnapshot


class TestBookProjection:
    """Tests for Book.to_document and Book.from_document."""

    def test_uses_camel_case_keys(self, full_book):
        document = full_book.to_document()

        assert document == {
            "entityId": "e1",
            "isbn": "978-2-409-03806-1",
            "title": "Temporal Data",
            "numberOfPages": 512,
            "publishDate": "2023-03-14",
            "editing": {"numberOfChapters": 12, "status": {"value": "Writing"}},
            "sales": {
                "price": {"value": 39.9, "monetaryUnit": "USD"},
                "weightInGrams": 820.0,
            },
        }

    def test_unknown_attributes_are_omitted(self):
        assert Book(entity_id="e1", title="A").to_document() == {"entityId": "e1", "title": "A"}

    def test_from_document_ignores_technical_id(self):
        book = Book.from_document({"_id": "abc", "entityId": "e1", "publishDate": "2020-01-02"})

        assert book == Book(entity_id="e1", publish_date=date(2020, 1, 2))

    def test_accepts_snake_case_names(self):
        assert Book(entity_id="e1", number_of_pages=3).number_of_pages == 3


class TestArchival:
    """Tests for is_archived and archived()."""

    def test_book_without_editing_is_not_archived(self):
        assert not Book(entity_id="e1").is_archived

    def test_archived_creates_nested_records(self):
        archived = Book(entity_id="e1").archived()

        assert archived.editing.status.value == ARCHIVED_STATUS
        assert archived.is_archived

    def test_archived_does_not_mutate_original(self, full_book):
        archived = full_book.archived()

        assert full_book.editing.status.value == "Writing"
        assert archived.editing.number_of_chapters == 12

    def test_status_keeps_other_values(self):
        book = Book(entity_id="e1", editing=Editing(status=Status(value="Archived")))

        assert not book.is_archived


class TestEnvelopes:
    """Tests for ChangeUnit and StateSnapshot documents."""

    def test_change_unit_document(self):
        value_date = datetime(2020, 1, 1, tzinfo=timezone.utc)
        change = ChangeUnit(
            entity_id="e1",
            value_date=value_date,
            patch_content=[{"op": "add", "path": "/isbn", "value": "978-0"}],
        )

        assert change.to_document() == {
            "entityId": "e1",
            "valueDate": value_date,
            "patchContent": [{"op": "add", "path": "/isbn", "value": "978-0"}],
        }

    def test_state_snapshot_document(self):
        value_date = datetime(2020, 1, 1, tzinfo=timezone.utc)
        snapshot = StateSnapshot(
            entity_id="e1",
            value_date=value_date,
            state=Book(entity_id="e1", isbn="978-0"),
        )

        assert snapshot.to_document() == {
            "entityId": "e1",
            "valueDate": value_date,
            "state": {"entityId": "e1", "isbn": "978-0"},
        }
