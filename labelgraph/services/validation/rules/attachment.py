"""Attached document and compliance action rules."""

import os

from labelgraph.models.licensing import AttachedDocument, ComplianceAction
from labelgraph.models.variants import AttachedDocumentParent, UnresolvedParent
from labelgraph.schemas.validation import Severity
from labelgraph.services.validation.checks import present, problems
from labelgraph.services.validation.registry import DEFAULT_REGISTRY
from labelgraph.utils.vocabulary import (
    ATTACHED_DOCUMENT_PARENT_KINDS,
    INVALID_FILE_NAME_CHARACTERS,
    MAX_FILE_NAME_LENGTH,
    MEDIA_TYPE_EXTENSIONS,
)


@DEFAULT_REGISTRY.rule(
    "AttachedDocumentFile",
    AttachedDocument,
    "Attached document {entity_id} file is invalid: {problems}",
)
def attached_document_file(attachment: AttachedDocument, context):
    media_type = (attachment.media_type or "").strip().lower()
    file_name = (attachment.file_name or "").strip()
    extension = os.path.splitext(file_name)[1].lower()
    expected_extensions = MEDIA_TYPE_EXTENSIONS.get(media_type)
    return problems(
        not media_type and "media type is missing",
        not file_name and "file name is missing",
        file_name and not extension and f"file name '{file_name}' has no extension",
        len(file_name) > MAX_FILE_NAME_LENGTH
        and f"file name is longer than {MAX_FILE_NAME_LENGTH} characters",
        any(c in INVALID_FILE_NAME_CHARACTERS for c in file_name)
        and "file name contains invalid characters",
        expected_extensions and extension and extension not in expected_extensions
        and f"{media_type} files must use extension {', '.join(sorted(expected_extensions))}",
    )


@DEFAULT_REGISTRY.rule(
    "AttachedDocumentParent",
    AttachedDocument,
    "Attached document {entity_id} {problem}",
)
def attached_document_parent(attachment: AttachedDocument, context):
    """Parent type and id go together and name a kind that can own attachments."""
    parent = context.variants.attachment_parent(attachment.id)
    if parent is None or isinstance(parent, AttachedDocumentParent):
        return None
    has_type = present(parent.parent_type)
    has_id = parent.parent_id is not None
    if has_type != has_id:
        return {"problem": "must carry both a parent entity type and a parent entity id, or neither"}
    if has_type:
        return {
            "problem": f"names parent type '{parent.parent_type}'; expected one of "
                       f"{', '.join(sorted(ATTACHED_DOCUMENT_PARENT_KINDS))}"
        }
    return None


@DEFAULT_REGISTRY.rule(
    "AttachedDocumentUniqueness",
    AttachedDocument,
    "Attached document {entity_id} repeats file name '{file_name}' already used by attached document {first_id}",
    severity=Severity.WARNING,
)
def attached_document_uniqueness(attachment: AttachedDocument, context):
    """A file name is attached at most once to the same parent."""
    if not present(attachment.file_name):
        return None
    parent = context.variants.attachment_parent(attachment.id)
    wanted = attachment.file_name.strip().lower()
    for other in context.entity_set.table(AttachedDocument):
        if other.id >= attachment.id:
            break
        if (other.file_name or "").strip().lower() != wanted:
            continue
        other_parent = context.variants.attachment_parent(other.id)
        if isinstance(parent, UnresolvedParent) or other_parent == parent:
            return {"file_name": attachment.file_name, "first_id": other.id}
    return None


@DEFAULT_REGISTRY.rule(
    "ComplianceActionTarget",
    ComplianceAction,
    "Compliance action {entity_id} must target exactly one of a package identifier "
    "or an establishment relationship, found {found}",
)
def compliance_action_target(action: ComplianceAction, context):
    targets = [
        name for name in ("package_identifier_id", "document_relationship_id")
        if getattr(action, name) is not None
    ]
    if len(targets) != 1:
        return {"found": ", ".join(targets) or "none"}
    return None


@DEFAULT_REGISTRY.rule(
    "ComplianceActionDates",
    ComplianceAction,
    "Compliance action {entity_id} effective time is invalid: {problems}",
)
def compliance_action_dates(action: ComplianceAction, context):
    low, high = action.effective_time_low, action.effective_time_high
    return problems(
        low is None and "inactivation date is missing",
        low is not None and high is not None and high < low
        and "reactivation date precedes inactivation date",
        low is not None and high is not None and high == low
        and "reactivation date equals inactivation date",
    )
