"""Product rules: routes, dosing, dosage form, identifiers and marketing status."""

from labelgraph.models.packaging import PackageIdentifier
from labelgraph.models.product import (
    DosingSpecification,
    MarketingStatus,
    Product,
    ProductIdentifier,
    ProductRouteOfAdministration,
)
from labelgraph.schemas.validation import Severity
from labelgraph.services.validation.checks import (
    is_alphanumeric,
    missing_fields,
    normalized,
    present,
    present_fields,
    problems,
)
from labelgraph.services.validation.registry import DEFAULT_REGISTRY
from labelgraph.utils.vocabulary import (
    FDA_SPL_CODE_SYSTEM,
    MARKETING_STATUS_CODES,
    NDC_CODE_SYSTEM,
    NDC_PACKAGE_PATTERNS,
    NDC_PRODUCT_PATTERNS,
    NULL_FLAVORS,
    ndc_segments,
)

_ROUTE_CODE_FIELDS = ("route_code", "route_code_system", "route_display_name")


@DEFAULT_REGISTRY.rule(
    "RouteCodeShape",
    ProductRouteOfAdministration,
    "Route of administration {entity_id} {problem}",
)
def route_code_shape(route: ProductRouteOfAdministration, context):
    """A route is either a complete code triple or a null flavor, never both or neither."""
    coded = present_fields(route, *_ROUTE_CODE_FIELDS)
    has_null_flavor = present(route.route_null_flavor)
    if coded and has_null_flavor:
        return {"problem": "carries both a route code and a null flavor"}
    if not coded and not has_null_flavor:
        return {"problem": "carries neither a route code nor a null flavor"}
    if coded and len(coded) < len(_ROUTE_CODE_FIELDS):
        missing = missing_fields(route, *_ROUTE_CODE_FIELDS)
        return {"problem": f"has an incomplete route code, missing {', '.join(missing)}"}
    return None


@DEFAULT_REGISTRY.rule(
    "RouteCodeFormat",
    ProductRouteOfAdministration,
    "Route of administration {entity_id} is malformed: {problems}",
)
def route_code_format(route: ProductRouteOfAdministration, context):
    has_null_flavor = present(route.route_null_flavor)
    return problems(
        present(route.route_code) and not is_alphanumeric(route.route_code)
        and f"route code '{route.route_code}' is not alphanumeric",
        present(route.route_code_system) and route.route_code_system != FDA_SPL_CODE_SYSTEM
        and f"route code system {route.route_code_system} is not the FDA SPL system",
        has_null_flavor and normalized(route.route_null_flavor) not in NULL_FLAVORS
        and f"null flavor '{route.route_null_flavor}' is not recognized",
    )


@DEFAULT_REGISTRY.rule(
    "DosingRouteRequired",
    DosingSpecification,
    "Dosing specification {entity_id} has no route of administration",
    severity=Severity.WARNING,
)
def dosing_route_required(dosing: DosingSpecification, context):
    if not present(dosing.route_code):
        return {}
    return None


@DEFAULT_REGISTRY.rule(
    "DoseQuantityNonNegative",
    DosingSpecification,
    "Dosing specification {entity_id} has negative dose quantity {value}",
)
def dose_quantity_non_negative(dosing: DosingSpecification, context):
    if dosing.dose_quantity_value is not None and dosing.dose_quantity_value < 0:
        return {"value": f"{dosing.dose_quantity_value:g}"}
    return None


@DEFAULT_REGISTRY.rule(
    "ProductFormCode",
    Product,
    "Product {entity_id} dosage form is incomplete: {problems}",
    severity=Severity.WARNING,
)
def product_form_code(product: Product, context):
    missing = missing_fields(product, "form_code", "form_code_system", "form_display_name")
    return problems(
        missing and f"missing {', '.join(missing)}",
        present(product.form_code_system) and product.form_code_system != FDA_SPL_CODE_SYSTEM
        and f"form code system {product.form_code_system} is not the FDA SPL system",
    )


@DEFAULT_REGISTRY.rule(
    "NdcFormat",
    [ProductIdentifier, PackageIdentifier],
    "{entity_kind} {entity_id} NDC '{code}' does not match an accepted segment pattern ({patterns})",
)
def ndc_format(identifier, context):
    """NDC product codes are 4-4, 5-4 or 5-3; package codes add a final segment."""
    if identifier.identifier_system_oid != NDC_CODE_SYSTEM or not present(identifier.identifier_value):
        return None
    accepted = NDC_PRODUCT_PATTERNS if isinstance(identifier, ProductIdentifier) else NDC_PACKAGE_PATTERNS
    if ndc_segments(identifier.identifier_value) not in accepted:
        return {
            "code": identifier.identifier_value,
            "patterns": ", ".join("-".join(str(n) for n in p) for p in sorted(accepted)),
        }
    return None


@DEFAULT_REGISTRY.rule(
    "MarketingStatusDates",
    MarketingStatus,
    "Marketing status {entity_id} is inconsistent: {problems}",
)
def marketing_status_dates(status: MarketingStatus, context):
    start, end = status.effective_start_date, status.effective_end_date
    status_code = status.status_code.strip().lower() if status.status_code else None
    return problems(
        status_code not in MARKETING_STATUS_CODES and f"status code '{status.status_code}' is not recognized",
        start is None and "marketing start date is missing",
        start is not None and end is not None and end < start and "end date precedes start date",
        status_code == "completed" and end is None and "completed status requires an end date",
    )
