"""
Tests for the Document model and store payload parsing.
"""

import dataclasses
from datetime import date

from sermon_search.ranking.models import Document, document_from_payload


class TestDocumentDefaults:
    def test_metadata_default_is_a_factory(self) -> None:
        """The read-only mapping default must not be a class-level default value."""
        (field,) = [f for f in dataclasses.fields(Document) if f.name == "metadata"]
        assert field.default is dataclasses.MISSING
        assert dict(field.default_factory()) == {}

    def test_minimal_document(self) -> None:
        document = Document(id=1, title="Hope")
        assert dict(document.metadata) == {}
        assert document.primary_tag is None
        assert document.has_transcript is False


class TestDocumentFromPayload:
    def test_llm_metadata_as_json_text(self) -> None:
        document = document_from_payload(
            {
                "id": "5",
                "title": "Living Sacrifices",
                "date_preached": "2019-04-14T00:00:00",
                "llm_metadata": "{\"keywords\": [\"worship\"]}",
            }
        )
        assert document.id == 5
        assert document.date_preached == date(2019, 4, 14)
        assert document.metadata["keywords"] == ["worship"]

    def test_tags_keep_stored_order(self) -> None:
        document = document_from_payload(
            {
                "id": 1,
                "title": "Help",
                "scripture_references": [
                    {"book": "Psalms", "chapter": 121, "reference_text": "Psalm 121"},
                    {"book": "Romans", "chapter": 8, "verse_start": 28},
                ],
            }
        )
        assert document.primary_reference_text == "Psalm 121"
        assert [t.book for t in document.scripture_tags] == ["Psalms", "Romans"]
