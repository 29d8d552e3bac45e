"""Pytest configuration and shared fixtures."""

import copy
from datetime import date
from typing import Any, Dict, List

import pytest
from fastapi.testclient import TestClient

from labelgraph.main import app
from labelgraph.models import EntitySet, map_variants
from labelgraph.pipeline import DocumentPipeline
from labelgraph.services.hierarchy import DocumentHierarchyBuilder
from labelgraph.services.validation import ConsistencyValidator
from labelgraph.utils.vocabulary import (
    DEA_LICENSE_OID,
    FDA_SPL_CODE_SYSTEM,
    GOVERNING_AGENCY_ID_ROOT,
    ISO_3166_1_CODE_SYSTEM,
    ISO_3166_2_CODE_SYSTEM,
    LOINC_CODE_SYSTEM,
    MED_RT_CODE_SYSTEM,
    NDC_CODE_SYSTEM,
)

REFERENCE_DATE = date(2025, 6, 30)


def _label_payload() -> Dict[str, List[Dict[str, Any]]]:
    """One version of a lisinopril tablets label.

    Layout:
        sections 10 (children 11, 12), 20 (products), 30 (standalone)
        text blocks 100, 101 (nested 103) in section 10; 102 in section 11
        product 500 packed in carton 600 holding bottle 601
        lots 700 + 701 (bulk) -> 702 (fill) -> 703 (label)
        DEA license 910 suspended then re-activated
    """
    return {
        "Document": [{
            "id": 1,
            "document_guid": "8a7f2f3e-1f0e-4c55-9e1d-0c1b7a3d5e01",
            "set_guid": "3c2e8b4a-9d21-4a77-8f60-2b9e4d1c7a10",
            "version_number": 1,
            "document_code": "34391-3",
            "document_code_system": LOINC_CODE_SYSTEM,
            "document_display_name": "HUMAN PRESCRIPTION DRUG LABEL",
            "title": "Lisinopril Tablets, USP",
            "effective_time": "2025-01-15",
        }],
        "StructuredBody": [{"id": 1, "document_id": 1}],
        "Section": [
            {
                "id": 10,
                "structured_body_id": 1,
                "section_guid": "5f1d2c3b-4a59-4e68-8d7c-6b5a49382716",
                "section_code": "34067-9",
                "section_code_system": LOINC_CODE_SYSTEM,
                "section_display_name": "INDICATIONS & USAGE SECTION",
                "title": "1 INDICATIONS AND USAGE",
            },
            {
                "id": 11,
                "structured_body_id": 1,
                "section_guid": "6a2e3d4c-5b60-4f79-9e8d-7c6b5a493827",
                "section_link_guid": "hypertension-link",
                "title": "1.1 Hypertension",
            },
            {"id": 12, "structured_body_id": 1, "title": "1.2 Heart Failure"},
            {
                "id": 20,
                "structured_body_id": 1,
                "section_code": "51945-4",
                "section_code_system": LOINC_CODE_SYSTEM,
                "section_display_name": "PACKAGE LABEL.PRINCIPAL DISPLAY PANEL",
                "title": "PRINCIPAL DISPLAY PANEL",
            },
            {"id": 30, "title": "Unattached section"},
        ],
        "SectionHierarchy": [
            {"id": 1, "parent_section_id": 10, "child_section_id": 12, "sequence_number": 2},
            {"id": 2, "parent_section_id": 10, "child_section_id": 11, "sequence_number": 1},
        ],
        "SectionTextContent": [
            {
                "id": 100,
                "section_id": 10,
                "content_type": "Paragraph",
                "sequence_number": 1,
                "content_text": "Lisinopril tablets are indicated for the treatment of hypertension.",
            },
            {"id": 101, "section_id": 10, "content_type": "List", "sequence_number": 2},
            {
                "id": 102,
                "section_id": 11,
                "content_type": "Table",
                "sequence_number": 1,
            },
            {
                "id": 103,
                "section_id": 10,
                "parent_section_text_content_id": 101,
                "content_type": "Paragraph",
                "sequence_number": 1,
                "content_text": "Use in adults and pediatric patients 6 years and older.",
            },
        ],
        "TextList": [{"id": 200, "section_text_content_id": 101, "list_type": "unordered"}],
        "TextListItem": [
            {"id": 201, "text_list_id": 200, "sequence_number": 2, "item_text": "Heart failure"},
            {"id": 202, "text_list_id": 200, "sequence_number": 1, "item_text": "Hypertension"},
        ],
        "TextTable": [{"id": 300, "section_text_content_id": 102, "width": "100%"}],
        "TextTableRow": [
            {"id": 301, "text_table_id": 300, "row_group_type": "tbody", "sequence_number": 2},
            {"id": 302, "text_table_id": 300, "row_group_type": "thead", "sequence_number": 1},
        ],
        "TextTableCell": [
            {"id": 303, "text_table_row_id": 302, "cell_type": "th", "sequence_number": 1, "cell_text": "Dose"},
            {"id": 304, "text_table_row_id": 301, "cell_type": "td", "sequence_number": 1, "cell_text": "10 mg"},
        ],
        "ObservationMedia": [{
            "id": 400,
            "section_id": 20,
            "media_id": "MM1",
            "media_type": "image/jpeg",
            "file_name": "carton.jpg",
            "description_text": "Carton principal display panel",
        }],
        "RenderedMedia": [{
            "id": 401,
            "section_text_content_id": 100,
            "observation_media_id": 400,
            "sequence_in_content": 1,
            "is_inline": True,
        }],
        "Product": [{
            "id": 500,
            "section_id": 20,
            "product_name": "Lisinopril",
            "form_code": "C42998",
            "form_code_system": FDA_SPL_CODE_SYSTEM,
            "form_display_name": "TABLET",
        }],
        "ProductIdentifier": [{
            "id": 501,
            "product_id": 500,
            "identifier_value": "0591-0405",
            "identifier_system_oid": NDC_CODE_SYSTEM,
        }],
        "GenericMedicine": [{"id": 502, "product_id": 500, "generic_name": "lisinopril"}],
        "ProductRouteOfAdministration": [{
            "id": 503,
            "product_id": 500,
            "route_code": "C38288",
            "route_code_system": FDA_SPL_CODE_SYSTEM,
            "route_display_name": "ORAL",
        }],
        "IngredientSubstance": [
            {"id": 510, "unii": "E7199S1YWR", "substance_name": "Lisinopril"},
            {"id": 511, "unii": "70097M6I30", "substance_name": "Magnesium Stearate"},
        ],
        "Ingredient": [
            {
                "id": 520,
                "product_id": 500,
                "ingredient_substance_id": 510,
                "class_code": "ACTIB",
                "quantity_numerator": 10.0,
                "quantity_numerator_unit": "mg",
                "quantity_denominator": 1.0,
                "quantity_denominator_unit": "1",
                "sequence_number": 1,
            },
            {
                "id": 521,
                "product_id": 500,
                "ingredient_substance_id": 511,
                "class_code": "IACT",
                "sequence_number": 2,
            },
        ],
        "Characteristic": [
            {
                "id": 530,
                "product_id": 500,
                "characteristic_code": "SPLCOLOR",
                "characteristic_code_system": FDA_SPL_CODE_SYSTEM,
                "value_type": "CE",
                "value_cv_code": "C48325",
                "value_cv_code_system": FDA_SPL_CODE_SYSTEM,
                "value_cv_display_name": "WHITE",
            },
            {
                "id": 531,
                "product_id": 500,
                "characteristic_code": "SPLSIZE",
                "characteristic_code_system": FDA_SPL_CODE_SYSTEM,
                "value_type": "PQ",
                "value_pq_value": 8.0,
                "value_pq_unit": "mm",
            },
            {
                "id": 532,
                "packaging_level_id": 601,
                "characteristic_code": "SPLIMPRINT",
                "characteristic_code_system": FDA_SPL_CODE_SYSTEM,
                "value_type": "ST",
                "value_st": "Keep tightly closed",
            },
        ],
        "PackagingLevel": [
            {
                "id": 600,
                "product_id": 500,
                "quantity_numerator": 1.0,
                "quantity_numerator_unit": "1",
                "package_form_code": "C43169",
                "package_form_code_system": FDA_SPL_CODE_SYSTEM,
                "package_form_display_name": "CARTON",
            },
            {
                "id": 601,
                "quantity_numerator": 100.0,
                "quantity_numerator_unit": "{tablet}",
                "package_form_code": "C43165",
                "package_form_code_system": FDA_SPL_CODE_SYSTEM,
                "package_form_display_name": "BOTTLE",
            },
        ],
        "PackagingHierarchy": [
            {"id": 602, "outer_packaging_level_id": 600, "inner_packaging_level_id": 601, "sequence_number": 1},
        ],
        "PackageIdentifier": [{
            "id": 610,
            "packaging_level_id": 600,
            "identifier_value": "0591-0405-01",
            "identifier_system_oid": NDC_CODE_SYSTEM,
        }],
        "ProductEvent": [{
            "id": 620,
            "packaging_level_id": 600,
            "event_code": "C106325",
            "event_code_system": FDA_SPL_CODE_SYSTEM,
            "event_display_name": "Distributed per reporting interval",
            "quantity_value": 25,
            "effective_time_low": "2024-01-01",
        }],
        "ProductInstance": [
            {"id": 700, "product_id": 500, "instance_type": "BulkLot"},
            {"id": 701, "product_id": 500, "instance_type": "BulkLot"},
            {"id": 702, "product_id": 500, "instance_type": "FillLot"},
            {"id": 703, "product_id": 500, "instance_type": "LabelLot"},
        ],
        "LotHierarchy": [
            {"id": 710, "parent_instance_id": 700, "child_instance_id": 702, "sequence_number": 1},
            {"id": 711, "parent_instance_id": 701, "child_instance_id": 702, "sequence_number": 2},
            {"id": 712, "parent_instance_id": 702, "child_instance_id": 703, "sequence_number": 1},
        ],
        "IdentifiedSubstance": [{
            "id": 810,
            "section_id": 20,
            "subject_type": "PharmacologicClass",
            "substance_identifier_value": "N0000175562",
            "substance_identifier_system_oid": MED_RT_CODE_SYSTEM,
            "is_definition": True,
        }],
        "PharmacologicClass": [
            {
                "id": 800,
                "identified_substance_id": 810,
                "class_code": "N0000175562",
                "class_code_system": MED_RT_CODE_SYSTEM,
                "class_display_name": "Angiotensin Converting Enzyme Inhibitor [EPC]",
            },
            {
                "id": 801,
                "class_code": "N0000000181",
                "class_code_system": MED_RT_CODE_SYSTEM,
                "class_display_name": "Angiotensin-converting Enzyme Inhibitors [MoA]",
            },
        ],
        "PharmacologicClassName": [
            {"id": 820, "pharmacologic_class_id": 800, "name_value": "ACE Inhibitor", "name_use": "L"},
            {"id": 821, "pharmacologic_class_id": 801, "name_value": "ACE Inhibitors", "name_use": "L"},
        ],
        "PharmacologicClassHierarchy": [
            {"id": 830, "parent_pharmacologic_class_id": 801, "child_pharmacologic_class_id": 800},
        ],
        "TerritorialAuthority": [
            {
                "id": 900,
                "territory_code": "USA",
                "territory_code_system": ISO_3166_1_CODE_SYSTEM,
                "governing_agency_id_extension": "004234790",
                "governing_agency_id_root": GOVERNING_AGENCY_ID_ROOT,
                "governing_agency_name": "DEA",
            },
            {
                "id": 901,
                "territory_code": "US-MD",
                "territory_code_system": ISO_3166_2_CODE_SYSTEM,
            },
        ],
        "License": [{
            "id": 910,
            "license_number": "RL0123456",
            "license_root_oid": DEA_LICENSE_OID,
            "license_type_code": "C118777",
            "license_type_code_system": FDA_SPL_CODE_SYSTEM,
            "license_type_display_name": "licensing",
            "status_code": "active",
            "expiration_date": "2027-01-31",
            "territorial_authority_id": 900,
        }],
        "DisciplinaryAction": [
            {
                "id": 920,
                "license_id": 910,
                "action_code": "C118406",
                "action_code_system": FDA_SPL_CODE_SYSTEM,
                "action_display_name": "suspension",
                "effective_time": "2024-02-01",
            },
            {
                "id": 921,
                "license_id": 910,
                "action_code": "C118408",
                "action_code_system": FDA_SPL_CODE_SYSTEM,
                "action_display_name": "activation",
                "effective_time": "2024-05-01",
            },
        ],
        "AttachedDocument": [{
            "id": 930,
            "parent_entity_type": "DisciplinaryAction",
            "parent_entity_id": 920,
            "media_type": "application/pdf",
            "file_name": "suspension-order.pdf",
        }],
    }


@pytest.fixture
def label_payload() -> Dict[str, List[Dict[str, Any]]]:
    """Raw records of a complete label, safe to mutate per test."""
    return copy.deepcopy(_label_payload())


@pytest.fixture
def label_entities(label_payload) -> EntitySet:
    """Loaded entity set of the sample label.

    Returns:
        EntitySet: Entity set with sections, products, lots and licensing
    """
    return EntitySet.from_payload(label_payload)


@pytest.fixture
def label_hierarchies(label_entities):
    return DocumentHierarchyBuilder().build(label_entities)


@pytest.fixture
def label_variants(label_entities):
    return map_variants(label_entities)


@pytest.fixture
def reference_date() -> date:
    return REFERENCE_DATE


@pytest.fixture
def validator() -> ConsistencyValidator:
    """Validator with a pinned 'today' so date-relative rules are stable."""
    return ConsistencyValidator(reference_date=REFERENCE_DATE)


@pytest.fixture
def pipeline(validator) -> DocumentPipeline:
    return DocumentPipeline(validator=validator, blocking_rules=["DocumentIdentifierRequired"])


@pytest.fixture
def test_client() -> TestClient:
    """Create FastAPI test client.

    Returns:
        TestClient: FastAPI test client instance
    """
    return TestClient(app)
