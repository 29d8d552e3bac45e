"""Render-ready records produced by the rendering-context builder.

Every record carries its child collections already ordered and its
presence flags already computed, so a presentation layer can walk the tree
without re-sorting, re-filtering or re-dispatching on value types.
"""

from datetime import date
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class RenderingAction(str, Enum):
    """How a text content block should be rendered."""
    PARAGRAPH = "paragraph"
    LIST = "list"
    TABLE = "table"
    MULTIMEDIA = "multimedia"
    EXCERPT = "excerpt"
    HIGHLIGHT = "highlight"
    DEFAULT = "default"


class RenderingRecord(BaseModel):
    """Base for rendering records: immutable, compared by value."""

    model_config = ConfigDict(frozen=True)


class CharacteristicRendering(RenderingRecord):
    """Unambiguous rendering decision for one characteristic.

    At most one ``should_render_as_*`` flag is true. ``resolution`` records
    whether that decision came from the declared value type, from the single
    populated slot, from the fallback precedence, or could not be made.
    """

    characteristic_id: int
    characteristic_code: Optional[str] = None
    characteristic_code_system: Optional[str] = None
    normalized_value_type: Optional[str] = Field(None, description="Upper-cased value type")

    has_coded_value: bool = False
    has_quantity_value: bool = False
    has_interval_value: bool = False
    has_integer_value: bool = False
    has_boolean_value: bool = False
    has_string_value: bool = False
    has_encoded_data: bool = False
    has_null_flavor: bool = False

    should_render_as_coded_element: bool = False
    should_render_as_physical_quantity: bool = False
    should_render_as_interval: bool = False
    should_render_as_integer: bool = False
    should_render_as_boolean: bool = False
    should_render_as_string: bool = False
    should_render_as_encoded_data: bool = False
    resolution: str = "none"

    formatted_coded_value: Optional[str] = None
    formatted_quantity_value: Optional[str] = None
    formatted_interval_value: Optional[str] = None
    formatted_integer_value: Optional[str] = None
    formatted_boolean_value: Optional[str] = None
    formatted_string_value: Optional[str] = None
    formatted_encoded_value: Optional[str] = None
    null_flavor: Optional[str] = None

    has_renderable_content: bool = False
    should_display_original_text: bool = False


class IngredientRendering(RenderingRecord):
    ingredient_id: int
    sequence_number: Optional[int] = None
    is_active_ingredient: bool = False
    class_code: Optional[str] = None
    substance_name: Optional[str] = None
    unii: Optional[str] = None
    formatted_substance_name: str = ""
    has_substance: bool = False
    has_quantity: bool = False
    formatted_quantity_numerator: Optional[str] = None
    formatted_quantity_denominator: Optional[str] = None
    formatted_strength: Optional[str] = None
    active_moieties: List[str] = Field(default_factory=list)
    specified_substances: List[str] = Field(default_factory=list)
    has_active_moieties: bool = False
    has_specified_substances: bool = False
    requires_reference_substance: bool = False
    reference_substance_name: Optional[str] = None


class ProductEventRendering(RenderingRecord):
    product_event_id: int
    event_code: Optional[str] = None
    event_display_name: Optional[str] = None
    quantity_value: Optional[int] = None
    effective_time_low: Optional[date] = None


class PackageRendering(RenderingRecord):
    """One packaging level with its nested inner levels."""

    packaging_level_id: int
    formatted_quantity: Optional[str] = None
    quantity_unit: Optional[str] = None
    package_form_code: Optional[str] = None
    package_form_code_system: Optional[str] = None
    package_form_display_name: Optional[str] = None
    identifiers: List[str] = Field(default_factory=list)
    events: List[ProductEventRendering] = Field(default_factory=list)
    characteristics: List[CharacteristicRendering] = Field(default_factory=list)
    children: List["PackageRendering"] = Field(default_factory=list)
    has_identifiers: bool = False
    has_events: bool = False
    has_characteristics: bool = False
    has_children: bool = False


class RouteRendering(RenderingRecord):
    route_id: int
    route_code: Optional[str] = None
    route_display_name: Optional[str] = None
    route_null_flavor: Optional[str] = None


class ProductRendering(RenderingRecord):
    product_id: int
    product_name: Optional[str] = None
    product_suffix: Optional[str] = None
    form_code: Optional[str] = None
    form_display_name: Optional[str] = None
    ndc_product_identifier: Optional[str] = None
    generic_names: List[str] = Field(default_factory=list)
    routes: List[RouteRendering] = Field(default_factory=list)
    active_ingredients: List[IngredientRendering] = Field(default_factory=list)
    inactive_ingredients: List[IngredientRendering] = Field(default_factory=list)
    characteristics: List[CharacteristicRendering] = Field(default_factory=list)
    packaging: List[PackageRendering] = Field(default_factory=list)
    has_ndc_identifier: bool = False
    has_generic_medicines: bool = False
    has_routes: bool = False
    has_active_ingredients: bool = False
    has_inactive_ingredients: bool = False
    has_characteristics: bool = False
    has_packaging: bool = False


class TextListItemRendering(RenderingRecord):
    item_id: int
    caption: Optional[str] = None
    text: Optional[str] = None


class TextListRendering(RenderingRecord):
    list_id: int
    list_type: Optional[str] = None
    style_code: Optional[str] = None
    items: List[TextListItemRendering] = Field(default_factory=list)


class TextTableCellRendering(RenderingRecord):
    cell_id: int
    cell_type: Optional[str] = None
    text: Optional[str] = None
    row_span: Optional[int] = None
    col_span: Optional[int] = None
    align: Optional[str] = None
    valign: Optional[str] = None
    style_code: Optional[str] = None


class TextTableRowRendering(RenderingRecord):
    row_id: int
    row_group_type: Optional[str] = None
    style_code: Optional[str] = None
    cells: List[TextTableCellRendering] = Field(default_factory=list)


class TextTableRendering(RenderingRecord):
    table_id: int
    width: Optional[str] = None
    has_header: bool = False
    has_footer: bool = False
    header_rows: List[TextTableRowRendering] = Field(default_factory=list)
    body_rows: List[TextTableRowRendering] = Field(default_factory=list)
    footer_rows: List[TextTableRowRendering] = Field(default_factory=list)


class MediaRendering(RenderingRecord):
    observation_media_id: int
    media_id: Optional[str] = None
    media_type: Optional[str] = None
    file_name: Optional[str] = None
    description_text: Optional[str] = None
    is_inline: bool = False


class TextContentRendering(RenderingRecord):
    """A content block with its lists, tables, media and nested blocks."""

    text_content_id: int
    sequence_number: Optional[int] = None
    normalized_content_type: str = ""
    rendering_action: RenderingAction = RenderingAction.DEFAULT
    content_text: Optional[str] = None
    style_code: Optional[str] = None
    lists: List[TextListRendering] = Field(default_factory=list)
    tables: List[TextTableRendering] = Field(default_factory=list)
    media: List[MediaRendering] = Field(default_factory=list)
    children: List["TextContentRendering"] = Field(default_factory=list)
    has_content_text: bool = False
    has_lists: bool = False
    has_tables: bool = False
    has_media: bool = False
    has_children: bool = False


class SectionRendering(RenderingRecord):
    """A section with ordered children and precomputed presence flags."""

    section_id: int
    section_guid: Optional[str] = None
    section_code: Optional[str] = None
    section_code_system: Optional[str] = None
    section_display_name: Optional[str] = None
    title: Optional[str] = None
    effective_time: Optional[date] = None
    section_id_attribute: str = ""
    depth: int = 0
    is_standalone: bool = False
    has_section_code: bool = False
    section_code_system_name: str = ""
    children: List["SectionRendering"] = Field(default_factory=list)
    text_content: List[TextContentRendering] = Field(default_factory=list)
    products: List[ProductRendering] = Field(default_factory=list)
    media: List[MediaRendering] = Field(default_factory=list)
    excerpt_highlights: List[str] = Field(default_factory=list)
    has_text_content: bool = False
    has_products: bool = False
    has_media: bool = False
    has_children: bool = False
    has_excerpt_highlights: bool = False


class RenderingContext(RenderingRecord):
    """Rendering tree for a whole document."""

    document_id: Optional[int] = None
    document_title: Optional[str] = None
    root_sections: List[SectionRendering] = Field(default_factory=list)
    standalone_sections: List[SectionRendering] = Field(default_factory=list)
    section_index: List[int] = Field(
        default_factory=list,
        description="Section ids in document order (pre-order over the section forest)",
    )

    def find_section(self, section_id: int) -> Optional[SectionRendering]:
        stack = list(self.root_sections) + list(self.standalone_sections)
        while stack:
            current = stack.pop()
            if current.section_id == section_id:
                return current
            stack.extend(current.children)
        return None


PackageRendering.model_rebuild()
TextContentRendering.model_rebuild()
SectionRendering.model_rebuild()
