"""Rendering of section text content blocks and their nested structures."""

from typing import Dict, List

from labelgraph.models.entity_set import EntitySet
from labelgraph.models.section import (
    ObservationMedia,
    RenderedMedia,
    SectionTextContent,
    TextList,
    TextListItem,
    TextTable,
    TextTableCell,
    TextTableRow,
)
from labelgraph.schemas.rendering import (
    MediaRendering,
    RenderingAction,
    TextContentRendering,
    TextListItemRendering,
    TextListRendering,
    TextTableCellRendering,
    TextTableRendering,
    TextTableRowRendering,
)
from labelgraph.services.hierarchy.assembler import AssembledHierarchy
from labelgraph.services.rendering.formatting import group_by

RENDERING_ACTIONS: Dict[str, RenderingAction] = {
    "PARAGRAPH": RenderingAction.PARAGRAPH,
    "LIST": RenderingAction.LIST,
    "TABLE": RenderingAction.TABLE,
    "BLOCKIMAGE": RenderingAction.MULTIMEDIA,
    "RENDERMULTIMEDIA": RenderingAction.MULTIMEDIA,
    "EXCERPT": RenderingAction.EXCERPT,
    "HIGHLIGHT": RenderingAction.HIGHLIGHT,
}

_HEADER_GROUPS = {"THEAD"}
_FOOTER_GROUPS = {"TFOOT"}


def media_rendering(media: ObservationMedia, is_inline: bool = False) -> MediaRendering:
    return MediaRendering(
        observation_media_id=media.id,
        media_id=media.media_id,
        media_type=media.media_type,
        file_name=media.file_name,
        description_text=media.description_text,
        is_inline=is_inline,
    )


class TextContentRenderingService:
    """Builds ``TextContentRendering`` trees for the blocks of a section."""

    def __init__(self, entity_set: EntitySet, hierarchy: AssembledHierarchy):
        self.entity_set = entity_set
        self.hierarchy = hierarchy
        self.blocks_by_section = group_by(
            (b for b in entity_set.table(SectionTextContent) if b.parent_section_text_content_id is None),
            "section_id",
            "sequence_number",
        )
        self.lists_by_block = group_by(entity_set.table(TextList), "section_text_content_id")
        self.items_by_list = group_by(entity_set.table(TextListItem), "text_list_id", "sequence_number")
        self.tables_by_block = group_by(entity_set.table(TextTable), "section_text_content_id")
        self.rows_by_table = group_by(entity_set.table(TextTableRow), "text_table_id", "sequence_number")
        self.cells_by_row = group_by(entity_set.table(TextTableCell), "text_table_row_id", "sequence_number")
        self.media_by_block = group_by(
            entity_set.table(RenderedMedia), "section_text_content_id", "sequence_in_content"
        )

    def render_section_blocks(self, section_id: int) -> List[TextContentRendering]:
        """Top-level blocks of a section in sequence order, each with its nested blocks."""
        return [self.render(block.id) for block in self.blocks_by_section.get(section_id, [])]

    def render(self, block_id: int) -> TextContentRendering:
        return self.hierarchy.fold(block_id, self._render_block)

    def _render_block(self, block_id: int, _depth: int, children: List[TextContentRendering]) -> TextContentRendering:
        block = self.entity_set.require(SectionTextContent, block_id)
        content_type = (block.content_type or "").strip().upper()
        lists = [self._render_list(text_list) for text_list in self.lists_by_block.get(block.id, [])]
        tables = [self._render_table(table) for table in self.tables_by_block.get(block.id, [])]
        media = self._render_media(block.id)
        content_text = block.content_text

        return TextContentRendering(
            text_content_id=block.id,
            sequence_number=block.sequence_number,
            normalized_content_type=content_type,
            rendering_action=RENDERING_ACTIONS.get(content_type, RenderingAction.DEFAULT),
            content_text=content_text,
            style_code=block.style_code,
            lists=lists,
            tables=tables,
            media=media,
            children=children,
            has_content_text=bool(content_text and content_text.strip()),
            has_lists=bool(lists),
            has_tables=bool(tables),
            has_media=bool(media),
            has_children=bool(children),
        )

    def _render_list(self, text_list: TextList) -> TextListRendering:
        return TextListRendering(
            list_id=text_list.id,
            list_type=text_list.list_type,
            style_code=text_list.style_code,
            items=[
                TextListItemRendering(item_id=item.id, caption=item.item_caption, text=item.item_text)
                for item in self.items_by_list.get(text_list.id, [])
            ],
        )

    def _render_table(self, table: TextTable) -> TextTableRendering:
        header, body, footer = [], [], []
        for row in self.rows_by_table.get(table.id, []):
            group = (row.row_group_type or "").strip().upper()
            target = header if group in _HEADER_GROUPS else footer if group in _FOOTER_GROUPS else body
            target.append(TextTableRowRendering(
                row_id=row.id,
                row_group_type=row.row_group_type,
                style_code=row.style_code,
                cells=[
                    TextTableCellRendering(
                        cell_id=cell.id,
                        cell_type=cell.cell_type,
                        text=cell.cell_text,
                        row_span=cell.row_span,
                        col_span=cell.col_span,
                        align=cell.align,
                        valign=cell.valign,
                        style_code=cell.style_code,
                    )
                    for cell in self.cells_by_row.get(row.id, [])
                ],
            ))
        return TextTableRendering(
            table_id=table.id,
            width=table.width,
            has_header=bool(table.has_header) or bool(header),
            has_footer=bool(table.has_footer) or bool(footer),
            header_rows=header,
            body_rows=body,
            footer_rows=footer,
        )

    def _render_media(self, block_id: int) -> List[MediaRendering]:
        rendered = []
        for placement in self.media_by_block.get(block_id, []):
            media = self.entity_set.get(ObservationMedia, placement.observation_media_id)
            if media is not None:
                rendered.append(media_rendering(media, bool(placement.is_inline)))
        return rendered
