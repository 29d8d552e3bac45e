"""Products and the records that describe them."""

from datetime import date
from typing import Optional

from pydantic import Field

from labelgraph.models.base import EntityRecord


class Product(EntityRecord):
    __references__ = {"section_id": "Section"}

    section_id: Optional[int] = None
    product_name: Optional[str] = None
    product_suffix: Optional[str] = None
    form_code: Optional[str] = None
    form_code_system: Optional[str] = None
    form_display_name: Optional[str] = None
    description_text: Optional[str] = None


class ProductIdentifier(EntityRecord):
    """NDC or other item code identifying a product."""

    __references__ = {"product_id": "Product"}

    product_id: Optional[int] = None
    identifier_value: Optional[str] = None
    identifier_system_oid: Optional[str] = None
    identifier_type: Optional[str] = None


class GenericMedicine(EntityRecord):
    __references__ = {"product_id": "Product"}

    product_id: Optional[int] = None
    generic_name: Optional[str] = None
    phonetic_name: Optional[str] = None


class SpecializedKind(EntityRecord):
    __references__ = {"product_id": "Product"}

    product_id: Optional[int] = None
    kind_code: Optional[str] = None
    kind_code_system: Optional[str] = None
    kind_display_name: Optional[str] = None


class EquivalentEntity(EntityRecord):
    __references__ = {"product_id": "Product"}

    product_id: Optional[int] = None
    equivalence_code: Optional[str] = None
    equivalence_code_system: Optional[str] = None
    defining_material_kind_code: Optional[str] = None
    defining_material_kind_system: Optional[str] = None


class AdditionalIdentifier(EntityRecord):
    __references__ = {"product_id": "Product"}

    product_id: Optional[int] = None
    identifier_type_code: Optional[str] = None
    identifier_type_code_system: Optional[str] = None
    identifier_type_display_name: Optional[str] = None
    identifier_value: Optional[str] = None
    identifier_root_oid: Optional[str] = None


class ProductRouteOfAdministration(EntityRecord):
    """Route of administration; either a coded route or a null flavor."""

    __references__ = {"product_id": "Product"}

    product_id: Optional[int] = None
    route_code: Optional[str] = None
    route_code_system: Optional[str] = None
    route_display_name: Optional[str] = None
    route_null_flavor: Optional[str] = None


class ProductWebLink(EntityRecord):
    __references__ = {"product_id": "Product"}

    product_id: Optional[int] = None
    web_url: Optional[str] = None


class ProductPart(EntityRecord):
    """A part product contained in a kit."""

    __references__ = {"kit_product_id": "Product", "part_product_id": "Product"}

    kit_product_id: Optional[int] = None
    part_product_id: Optional[int] = None
    part_quantity_numerator: Optional[float] = None
    part_quantity_numerator_unit: Optional[str] = None


class PartOfAssembly(EntityRecord):
    __references__ = {"primary_product_id": "Product", "accessory_product_id": "Product"}

    primary_product_id: Optional[int] = None
    accessory_product_id: Optional[int] = None


class Policy(EntityRecord):
    __references__ = {"product_id": "Product"}

    product_id: Optional[int] = None
    policy_class_code: Optional[str] = None
    policy_code: Optional[str] = None
    policy_code_system: Optional[str] = None
    policy_display_name: Optional[str] = None


class MarketingCategory(EntityRecord):
    __references__ = {"product_id": "Product", "product_concept_id": "ProductConcept"}

    product_id: Optional[int] = None
    category_code: Optional[str] = None
    category_code_system: Optional[str] = None
    category_display_name: Optional[str] = None
    application_or_monograph_id_value: Optional[str] = None
    application_or_monograph_id_oid: Optional[str] = None
    approval_date: Optional[date] = None
    territory_code: Optional[str] = None
    product_concept_id: Optional[int] = None


class MarketingStatus(EntityRecord):
    __references__ = {"product_id": "Product", "packaging_level_id": "PackagingLevel"}

    product_id: Optional[int] = None
    packaging_level_id: Optional[int] = None
    marketing_act_code: Optional[str] = None
    marketing_act_code_system: Optional[str] = None
    status_code: Optional[str] = None
    effective_start_date: Optional[date] = None
    effective_end_date: Optional[date] = None


class Holder(EntityRecord):
    __references__ = {
        "marketing_category_id": "MarketingCategory",
        "holder_organization_id": "Organization",
    }

    marketing_category_id: Optional[int] = None
    holder_organization_id: Optional[int] = None


class Characteristic(EntityRecord):
    """A product or package characteristic stored as a flattened tagged union.

    ``value_type`` names the populated value shape (``CV``, ``PQ``, ``INT``,
    ``ST``, ``BL``, ``IVL_PQ``, ``ED``). Only the slots of that shape are
    expected to be filled; ``labelgraph.models.variants`` turns the flat
    columns into a single typed value.
    """

    __references__ = {"product_id": "Product", "packaging_level_id": "PackagingLevel"}

    product_id: Optional[int] = None
    packaging_level_id: Optional[int] = None
    characteristic_code: Optional[str] = None
    characteristic_code_system: Optional[str] = None
    value_type: Optional[str] = Field(None, description="Value shape discriminator")
    value_pq_value: Optional[float] = None
    value_pq_unit: Optional[str] = None
    value_int: Optional[int] = None
    value_cv_code: Optional[str] = None
    value_cv_code_system: Optional[str] = None
    value_cv_display_name: Optional[str] = None
    value_st: Optional[str] = None
    value_bl: Optional[bool] = None
    value_ivlpq_low_value: Optional[float] = None
    value_ivlpq_low_unit: Optional[str] = None
    value_ivlpq_high_value: Optional[float] = None
    value_ivlpq_high_unit: Optional[str] = None
    value_ed_media_type: Optional[str] = None
    value_ed_file_name: Optional[str] = None
    value_null_flavor: Optional[str] = None


class DosingSpecification(EntityRecord):
    __references__ = {"product_id": "Product"}

    product_id: Optional[int] = None
    route_code: Optional[str] = None
    route_code_system: Optional[str] = None
    route_display_name: Optional[str] = None
    dose_quantity_value: Optional[float] = None
    dose_quantity_unit: Optional[str] = None


class ProductConcept(EntityRecord):
    __references__ = {"section_id": "Section"}

    section_id: Optional[int] = None
    concept_code: Optional[str] = None
    concept_code_system: Optional[str] = None
    concept_type: Optional[str] = None
    form_code: Optional[str] = None
    form_code_system: Optional[str] = None
    form_display_name: Optional[str] = None


class ProductConceptEquivalence(EntityRecord):
    __references__ = {
        "application_product_concept_id": "ProductConcept",
        "abstract_product_concept_id": "ProductConcept",
    }

    application_product_concept_id: Optional[int] = None
    abstract_product_concept_id: Optional[int] = None
    equivalence_code: Optional[str] = None
    equivalence_code_system: Optional[str] = None


class BillingUnitIndex(EntityRecord):
    __references__ = {"section_id": "Section"}

    section_id: Optional[int] = None
    package_ndc_value: Optional[str] = None
    package_ndc_system_oid: Optional[str] = None
    billing_unit_code: Optional[str] = None
    billing_unit_code_system_oid: Optional[str] = None


ENTITY_TYPES = (
    Product,
    ProductIdentifier,
    GenericMedicine,
    SpecializedKind,
    EquivalentEntity,
    AdditionalIdentifier,
    ProductRouteOfAdministration,
    ProductWebLink,
    ProductPart,
    PartOfAssembly,
    Policy,
    MarketingCategory,
    MarketingStatus,
    Holder,
    Characteristic,
    DosingSpecification,
    ProductConcept,
    ProductConceptEquivalence,
    BillingUnitIndex,
)

__all__ = [record_type.__name__ for record_type in ENTITY_TYPES]
