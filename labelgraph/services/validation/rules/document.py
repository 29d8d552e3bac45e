"""Document-level rules: identifiers, versioning and body cardinality."""

from labelgraph.models.document import Document, RelatedDocument, StructuredBody
from labelgraph.schemas.validation import Severity
from labelgraph.services.validation.checks import missing_fields, present, problems
from labelgraph.services.validation.registry import DEFAULT_REGISTRY
from labelgraph.utils.vocabulary import LOINC_CODE_SYSTEM


@DEFAULT_REGISTRY.rule(
    "DocumentIdentifierRequired",
    Document,
    "Document {entity_id} is missing its primary identifier(s): {missing}",
    severity=Severity.ERROR,
)
def document_identifier_required(document: Document, context):
    """A document must carry both its version id and its set id."""
    missing = missing_fields(document, "document_guid", "set_guid")
    if missing:
        return {"missing": ", ".join(missing)}
    return None


@DEFAULT_REGISTRY.rule(
    "DocumentVersionNumber",
    Document,
    "Document {entity_id} has an invalid version number: {version}",
)
def document_version_number(document: Document, context):
    """Version numbers start at 1."""
    if document.version_number is None or document.version_number < 1:
        return {"version": document.version_number}
    return None


@DEFAULT_REGISTRY.rule(
    "DocumentVersionSequence",
    Document,
    "Document {entity_id} version {version} does not follow referenced version "
    "{referenced} of the same set",
)
def document_version_sequence(document: Document, context):
    """A document may only reference earlier versions of its own set."""
    if document.set_guid is None or document.version_number is None:
        return None
    for related in context.children(RelatedDocument, "source_document_id", document.id):
        if (
            related.referenced_set_guid == document.set_guid
            and related.referenced_version_number is not None
            and related.referenced_version_number >= document.version_number
        ):
            return {"version": document.version_number, "referenced": related.referenced_version_number}
    return None


@DEFAULT_REGISTRY.rule(
    "DocumentCodeComplete",
    Document,
    "Document {entity_id} document type code is incomplete: {problems}",
    severity=Severity.WARNING,
)
def document_code_complete(document: Document, context):
    """Document type code, code system and display name travel together."""
    triple = ("document_code", "document_code_system", "document_display_name")
    missing = missing_fields(document, *triple)
    if len(missing) == len(triple):
        return {"problems": "document type code is missing"}
    return problems(
        missing and f"missing {', '.join(missing)}",
        present(document.document_code_system)
        and document.document_code_system != LOINC_CODE_SYSTEM
        and f"code system {document.document_code_system} is not LOINC",
    )


@DEFAULT_REGISTRY.rule(
    "StructuredBodyCardinality",
    Document,
    "Document {entity_id} owns {count} structured bodies; at most one is allowed",
)
def structured_body_cardinality(document: Document, context):
    bodies = context.children(StructuredBody, "document_id", document.id)
    if len(bodies) > 1:
        return {"count": len(bodies)}
    return None
