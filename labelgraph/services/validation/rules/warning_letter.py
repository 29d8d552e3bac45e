"""Warning letter rules."""

import re

from labelgraph.models.regulatory import WarningLetterDate, WarningLetterProductInfo
from labelgraph.services.validation.checks import present, problems
from labelgraph.services.validation.registry import DEFAULT_REGISTRY
from labelgraph.utils.vocabulary import NDC_PRODUCT_PATTERNS, ndc_segments

_NDC_LIKE = re.compile(r"\b\d{4,5}-\d{3,4}\b")


@DEFAULT_REGISTRY.rule(
    "WarningLetterDates",
    WarningLetterDate,
    "Warning letter date {entity_id} is invalid: {problems}",
)
def warning_letter_dates(letter: WarningLetterDate, context):
    issued, resolved = letter.alert_issue_date, letter.resolution_date
    return problems(
        issued is None and "alert issue date is required",
        issued is not None and issued > context.reference_date
        and "alert issue date is in the future",
        issued is not None and resolved is not None and resolved < issued
        and "resolution date precedes the alert issue date",
        issued is not None and resolved is not None and resolved == issued
        and "resolution date equals the alert issue date",
    )


@DEFAULT_REGISTRY.rule(
    "WarningLetterItemCodes",
    WarningLetterProductInfo,
    "Warning letter product {entity_id} item codes are invalid: {problems}",
)
def warning_letter_item_codes(info: WarningLetterProductInfo, context):
    """At least one item code is listed; NDC-like codes use an accepted pattern."""
    if not present(info.item_codes_text):
        return {"problems": "one or more product item codes are required"}
    bad = [
        match.group(0)
        for match in _NDC_LIKE.finditer(info.item_codes_text)
        if ndc_segments(match.group(0)) not in NDC_PRODUCT_PATTERNS
    ]
    return problems(bad and f"codes {', '.join(bad)} do not match 4-4, 5-4 or 5-3")
