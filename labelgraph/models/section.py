"""Sections and the content blocks nested inside them."""

from datetime import date
from typing import Optional
from uuid import UUID

from pydantic import Field

from labelgraph.models.base import EntityRecord


class Section(EntityRecord):
    """A titled section of the labeling document.

    Top-level sections belong to a structured body; nested sections are
    linked through ``SectionHierarchy`` rows instead of a parent pointer.
    """

    __references__ = {"structured_body_id": "StructuredBody"}

    structured_body_id: Optional[int] = None
    section_guid: Optional[UUID] = None
    section_link_guid: Optional[str] = Field(
        None,
        description="Anchor id from the source markup, preferred for links"
    )
    section_code: Optional[str] = None
    section_code_system: Optional[str] = None
    section_display_name: Optional[str] = None
    title: Optional[str] = None
    effective_time: Optional[date] = None


class SectionHierarchy(EntityRecord):
    """Parent/child edge between two sections."""

    __references__ = {"parent_section_id": "Section", "child_section_id": "Section"}

    parent_section_id: int
    child_section_id: int
    sequence_number: Optional[int] = None


class SectionTextContent(EntityRecord):
    """A paragraph, list, table or media block within a section.

    Blocks may be nested: ``parent_section_text_content_id`` points at the
    enclosing block, e.g. a paragraph inside a highlighted excerpt.
    """

    __references__ = {
        "section_id": "Section",
        "parent_section_text_content_id": "SectionTextContent",
    }

    section_id: Optional[int] = None
    parent_section_text_content_id: Optional[int] = None
    content_type: Optional[str] = None
    style_code: Optional[str] = None
    sequence_number: Optional[int] = None
    content_text: Optional[str] = None


class TextList(EntityRecord):
    __references__ = {"section_text_content_id": "SectionTextContent"}

    section_text_content_id: Optional[int] = None
    list_type: Optional[str] = None
    style_code: Optional[str] = None


class TextListItem(EntityRecord):
    __references__ = {"text_list_id": "TextList"}

    text_list_id: Optional[int] = None
    sequence_number: Optional[int] = None
    item_caption: Optional[str] = None
    item_text: Optional[str] = None


class TextTable(EntityRecord):
    __references__ = {"section_text_content_id": "SectionTextContent"}

    section_text_content_id: Optional[int] = None
    width: Optional[str] = None
    has_header: Optional[bool] = None
    has_footer: Optional[bool] = None


class TextTableRow(EntityRecord):
    __references__ = {"text_table_id": "TextTable"}

    text_table_id: Optional[int] = None
    row_group_type: Optional[str] = None
    sequence_number: Optional[int] = None
    style_code: Optional[str] = None


class TextTableCell(EntityRecord):
    __references__ = {"text_table_row_id": "TextTableRow"}

    text_table_row_id: Optional[int] = None
    cell_type: Optional[str] = None
    sequence_number: Optional[int] = None
    cell_text: Optional[str] = None
    row_span: Optional[int] = None
    col_span: Optional[int] = None
    style_code: Optional[str] = None
    align: Optional[str] = None
    valign: Optional[str] = None


class ObservationMedia(EntityRecord):
    """An image or other media object declared by a section."""

    __references__ = {"section_id": "Section"}

    section_id: Optional[int] = None
    media_id: Optional[str] = None
    description_text: Optional[str] = None
    media_type: Optional[str] = None
    file_name: Optional[str] = None


class RenderedMedia(EntityRecord):
    """Placement of an observation media object inside a content block."""

    __references__ = {
        "section_text_content_id": "SectionTextContent",
        "observation_media_id": "ObservationMedia",
    }

    section_text_content_id: Optional[int] = None
    observation_media_id: Optional[int] = None
    sequence_in_content: Optional[int] = None
    is_inline: Optional[bool] = None


class SectionExcerptHighlight(EntityRecord):
    __references__ = {"section_id": "Section"}

    section_id: Optional[int] = None
    highlight_text: Optional[str] = None


ENTITY_TYPES = (
    Section,
    SectionHierarchy,
    SectionTextContent,
    TextList,
    TextListItem,
    TextTable,
    TextTableRow,
    TextTableCell,
    ObservationMedia,
    RenderedMedia,
    SectionExcerptHighlight,
)

__all__ = [record_type.__name__ for record_type in ENTITY_TYPES]
