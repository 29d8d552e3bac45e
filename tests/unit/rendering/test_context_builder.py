"""Unit tests for building the document rendering context."""

import pytest

from labelgraph.core.exceptions import ContractError
from labelgraph.models import EntitySet
from labelgraph.schemas.rendering import RenderingAction
from labelgraph.services.hierarchy import DocumentHierarchyBuilder
from labelgraph.services.rendering import RenderingContextBuilder


@pytest.fixture
def context(label_entities, label_hierarchies, label_variants):
    return RenderingContextBuilder().build(label_entities, label_hierarchies, label_variants)


class TestSectionTree:
    """Tests for section ordering and placement."""

    def test_roots_and_standalone(self, context):
        assert context.document_id == 1
        assert context.document_title == "Lisinopril Tablets, USP"
        assert [s.section_id for s in context.root_sections] == [10, 20]
        assert [s.section_id for s in context.standalone_sections] == [30]
        assert context.standalone_sections[0].is_standalone
        assert not context.root_sections[1].is_standalone

    def test_document_order(self, context):
        assert context.section_index == [10, 11, 12, 20, 30]

    def test_children_follow_sequence(self, context):
        section = context.find_section(10)
        assert [child.section_id for child in section.children] == [11, 12]
        assert [child.depth for child in section.children] == [1, 1]
        assert section.section_code_system_name == "LOINC"

    def test_section_anchor(self, context):
        assert context.find_section(11).section_id_attribute == "hypertension_link"
        assert context.find_section(10).section_id_attribute == "5f1d2c3b_4a59_4e68_8d7c_6b5a49382716"
        assert context.find_section(12).section_id_attribute == "section_12"

    def test_idempotent(self, label_entities, label_hierarchies, label_variants):
        builder = RenderingContextBuilder()
        first = builder.build(label_entities, label_hierarchies, label_variants)
        second = builder.build(label_entities, label_hierarchies)
        assert first == second


class TestTextContent:
    """Tests for text blocks, lists, tables and media."""

    def test_blocks_in_sequence(self, context):
        blocks = context.find_section(10).text_content
        assert [b.text_content_id for b in blocks] == [100, 101]
        assert blocks[0].rendering_action == RenderingAction.PARAGRAPH
        assert blocks[1].rendering_action == RenderingAction.LIST

    def test_nested_block(self, context):
        list_block = context.find_section(10).text_content[1]
        assert [child.text_content_id for child in list_block.children] == [103]
        assert list_block.has_children

    def test_list_items_follow_sequence(self, context):
        text_list = context.find_section(10).text_content[1].lists[0]
        assert [item.item_id for item in text_list.items] == [202, 201]

    def test_table_row_groups(self, context):
        table = context.find_section(11).text_content[0].tables[0]
        assert [row.row_id for row in table.header_rows] == [302]
        assert [row.row_id for row in table.body_rows] == [301]
        assert table.has_header
        assert not table.has_footer
        assert table.header_rows[0].cells[0].text == "Dose"

    def test_inline_media(self, context):
        media = context.find_section(10).text_content[0].media
        assert [(m.observation_media_id, m.is_inline) for m in media] == [(400, True)]
        assert [m.media_id for m in context.find_section(20).media] == ["MM1"]


class TestProducts:
    """Tests for products, ingredients and packaging."""

    def test_product(self, context):
        (product,) = context.find_section(20).products
        assert product.ndc_product_identifier == "0591-0405"
        assert product.generic_names == ["lisinopril"]
        assert [r.route_display_name for r in product.routes] == ["ORAL"]
        assert [c.characteristic_id for c in product.characteristics] == [530, 531]

    def test_ingredients(self, context):
        (product,) = context.find_section(20).products
        (active,) = product.active_ingredients
        assert active.ingredient_id == 520
        assert active.formatted_substance_name == "LISINOPRIL"
        assert active.formatted_strength == "10 mg in 1"
        assert [i.ingredient_id for i in product.inactive_ingredients] == [521]

    def test_characteristic_flags(self, context):
        (product,) = context.find_section(20).products
        color = product.characteristics[0]
        assert color.should_render_as_coded_element
        assert color.resolution == "explicit"

    def test_packaging_tree(self, context):
        (product,) = context.find_section(20).products
        (carton,) = product.packaging
        assert carton.packaging_level_id == 600
        assert carton.identifiers == ["0591-0405-01"]
        assert [e.quantity_value for e in carton.events] == [25]
        (bottle,) = carton.children
        assert bottle.packaging_level_id == 601
        assert bottle.formatted_quantity == "100 {tablet}"
        assert [c.characteristic_id for c in bottle.characteristics] == [532]


class TestDegradedInput:
    """Tests for malformed but structurally sound input."""

    def test_unknown_content_type(self):
        entity_set = EntitySet.from_payload({
            "Section": [{"id": 1}],
            "SectionTextContent": [{"id": 2, "section_id": 1, "content_type": "Marquee"}],
            "TextTable": [{"id": 3, "section_text_content_id": 2}],
        })
        context = RenderingContextBuilder().build(entity_set, DocumentHierarchyBuilder().build(entity_set))

        (block,) = context.find_section(1).text_content
        assert block.rendering_action == RenderingAction.DEFAULT
        assert block.tables[0].header_rows == []
        assert not block.has_content_text

    def test_empty_entity_set(self):
        entity_set = EntitySet()
        context = RenderingContextBuilder().build(entity_set, DocumentHierarchyBuilder().build(entity_set))
        assert context.document_id is None
        assert context.section_index == []

    def test_missing_inputs(self, label_entities, label_hierarchies):
        builder = RenderingContextBuilder()
        with pytest.raises(ContractError):
            builder.build(None, label_hierarchies)
        with pytest.raises(ContractError):
            builder.build(label_entities, None)
