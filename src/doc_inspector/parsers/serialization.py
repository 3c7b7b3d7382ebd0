"""Serialization and deserialization utilities for parsed documents."""

import json
from typing import Any, List, Optional

from ..models.document import (
    Document,
    LineOffset,
    ListBlock,
    Paragraph,
    Section,
    Sentence,
    SuppressRule,
)


class DocumentSerializer:
    """
    Handles serialization and deserialization of Document trees.

    Sections are written as a tree under ``sections``; reading them back
    restores both the nesting and the flat document-order section list.
    """

    @staticmethod
    def serialize(doc: Document) -> str:
        """
        Serialize a Document to JSON string.

        Args:
            doc: The Document to serialize.

        Returns:
            JSON string representation of the document.
        """
        return json.dumps(
            DocumentSerializer._doc_to_dict(doc),
            ensure_ascii=False,
            indent=2
        )

    @staticmethod
    def deserialize(json_str: str) -> Document:
        """
        Deserialize a JSON string to a Document.

        Args:
            json_str: JSON string to deserialize.

        Returns:
            Document reconstructed from the JSON.

        Raises:
            ValueError: If the JSON is invalid or malformed.
        """
        try:
            data = json.loads(json_str)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON: {str(e)}")

        return DocumentSerializer._dict_to_doc(data)

    @staticmethod
    def _doc_to_dict(doc: Document) -> dict[str, Any]:
        return {
            "file_name": doc.file_name,
            "sections": [DocumentSerializer._section_to_dict(s) for s in doc.root_sections],
            "suppress_rules": [
                {"line_number": r.line_number, "validator_names": list(r.validator_names)}
                for r in doc.suppress_rules
            ],
        }

    @staticmethod
    def _dict_to_doc(data: dict[str, Any]) -> Document:
        if not isinstance(data, dict):
            raise ValueError("Expected dictionary for Document")

        sections: List[Section] = []
        for section_data in data.get("sections", []):
            DocumentSerializer._dict_to_section(section_data, None, sections)
        rules = [
            SuppressRule(r["line_number"], list(r.get("validator_names", [])))
            for r in data.get("suppress_rules", [])
        ]
        return Document(
            sections=sections, file_name=data.get("file_name"), suppress_rules=rules
        )

    @staticmethod
    def _section_to_dict(section: Section) -> dict[str, Any]:
        return {
            "level": section.level,
            "header_contents": [
                DocumentSerializer._sentence_to_dict(s) for s in section.header_contents
            ],
            "paragraphs": [
                [DocumentSerializer._sentence_to_dict(s) for s in p.sentences]
                for p in section.paragraphs
            ],
            "list_blocks": [
                [
                    {
                        "level": element.level,
                        "sentences": [
                            DocumentSerializer._sentence_to_dict(s)
                            for s in element.sentences
                        ],
                    }
                    for element in block.elements
                ]
                for block in section.list_blocks
            ],
            "subsections": [
                DocumentSerializer._section_to_dict(c) for c in section.subsections
            ],
        }

    @staticmethod
    def _dict_to_section(
        data: dict[str, Any], parent: Optional[Section], sections: List[Section]
    ) -> Section:
        """Rebuild a section and its subsections, appending them in document order."""
        if not isinstance(data, dict):
            raise ValueError("Expected dictionary for Section")
        if "level" not in data:
            raise ValueError("Missing required field 'level' in Section")

        to_sentence = DocumentSerializer._dict_to_sentence
        section = Section(
            level=data["level"],
            header_contents=[to_sentence(s) for s in data.get("header_contents", [])],
            paragraphs=[
                Paragraph(sentences=[to_sentence(s) for s in paragraph])
                for paragraph in data.get("paragraphs", [])
            ],
        )
        for block_data in data.get("list_blocks", []):
            block = ListBlock()
            for element in block_data:
                block.append_element(
                    element.get("level", 1),
                    [to_sentence(s) for s in element.get("sentences", [])],
                )
            section.list_blocks.append(block)

        if parent is not None:
            parent.append_subsection(section)
        sections.append(section)
        for child in data.get("subsections", []):
            DocumentSerializer._dict_to_section(child, section, sections)
        return section

    @staticmethod
    def _sentence_to_dict(sentence: Sentence) -> dict[str, Any]:
        return {
            "content": sentence.content,
            "line_number": sentence.line_number,
            "start_position_offset": sentence.start_position_offset,
            "is_first_sentence": sentence.is_first_sentence,
            "links": list(sentence.links),
            "offset_map": [[o.line_num, o.offset] for o in sentence.offset_map],
            "inline_markup": [list(r) for r in sentence.inline_markup],
        }

    @staticmethod
    def _dict_to_sentence(data: dict[str, Any]) -> Sentence:
        if not isinstance(data, dict):
            raise ValueError("Expected dictionary for Sentence")

        required_fields = ["content", "line_number"]
        for field in required_fields:
            if field not in data:
                raise ValueError(f"Missing required field '{field}' in Sentence")

        return Sentence(
            content=data["content"],
            line_number=data["line_number"],
            start_position_offset=data.get("start_position_offset", 0),
            is_first_sentence=data.get("is_first_sentence", False),
            links=list(data.get("links", [])),
            offset_map=[LineOffset(line, offset) for line, offset in data.get("offset_map", [])],
            inline_markup=[tuple(r) for r in data.get("inline_markup", [])],
        )


def serialize_document(doc: Document) -> str:
    """Convenience function to serialize a Document."""
    return DocumentSerializer.serialize(doc)


def deserialize_document(json_str: str) -> Document:
    """Convenience function to deserialize a Document."""
    return DocumentSerializer.deserialize(json_str)
