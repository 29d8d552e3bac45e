"""Section and text content rules."""

from collections import Counter

from labelgraph.models.section import Section, SectionHierarchy, SectionTextContent
from labelgraph.schemas.validation import Severity
from labelgraph.services.validation.checks import normalized, present
from labelgraph.services.validation.registry import DEFAULT_REGISTRY
from labelgraph.utils.vocabulary import LOINC_CODE_SYSTEM, TEXT_CONTENT_TYPES


@DEFAULT_REGISTRY.rule(
    "SectionCodeSystem",
    Section,
    "Section {entity_id} code {code} must use the LOINC code system, found '{code_system}'",
    severity=Severity.WARNING,
)
def section_code_system(section: Section, context):
    if not present(section.section_code):
        return None
    if section.section_code_system != LOINC_CODE_SYSTEM:
        return {"code": section.section_code, "code_system": section.section_code_system or ""}
    return None


@DEFAULT_REGISTRY.rule(
    "SiblingSequenceUnique",
    Section,
    "Section {entity_id} has child sections sharing sequence number(s) {sequences}",
    severity=Severity.WARNING,
)
def sibling_sequence_unique(section: Section, context):
    """Sequence numbers define sibling order and must not repeat."""
    edges = context.children(SectionHierarchy, "parent_section_id", section.id)
    counts = Counter(edge.sequence_number for edge in edges if edge.sequence_number is not None)
    duplicated = sorted(seq for seq, count in counts.items() if count > 1)
    if duplicated:
        return {"sequences": ", ".join(str(seq) for seq in duplicated)}
    return None


@DEFAULT_REGISTRY.rule(
    "SectionPlacement",
    Section,
    "Section {entity_id} has no structured body and no hierarchy edges; it is rendered standalone",
    severity=Severity.INFO,
)
def section_placement(section: Section, context):
    if section.structured_body_id is not None:
        return None
    if context.hierarchies is not None:
        standalone = context.hierarchies.sections.is_standalone(section.id)
    else:
        standalone = not (
            context.children(SectionHierarchy, "parent_section_id", section.id)
            or context.children(SectionHierarchy, "child_section_id", section.id)
        )
    return {} if standalone else None


@DEFAULT_REGISTRY.rule(
    "TextContentType",
    SectionTextContent,
    "Text content {entity_id} has unrecognized content type '{content_type}'",
    severity=Severity.WARNING,
)
def text_content_type(block: SectionTextContent, context):
    if normalized(block.content_type) not in TEXT_CONTENT_TYPES:
        return {"content_type": block.content_type or ""}
    return None


@DEFAULT_REGISTRY.rule(
    "TextContentParentSection",
    SectionTextContent,
    "Text content {entity_id} {problem}",
)
def text_content_parent_section(block: SectionTextContent, context):
    """A block belongs to a section, the same one as its enclosing block."""
    if block.section_id is None:
        return {"problem": "does not belong to any section"}
    parent = context.get(SectionTextContent, block.parent_section_text_content_id)
    if parent is not None and parent.section_id != block.section_id:
        return {
            "problem": f"is in section {block.section_id} but its parent block {parent.id} "
                       f"is in section {parent.section_id}"
        }
    return None
