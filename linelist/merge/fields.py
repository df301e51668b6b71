"""Column contract for merged line records.

The enrichment field list mirrors the column labels of the enrichment UI and
should be confirmed against the backend's output schema when it changes.
"""

from linelist.documents.models import EnrichmentRole

IDENTIFIER_FIELD = "original_detection"

BASE_FIELDS: tuple[str, ...] = (
    IDENTIFIER_FIELD,
    "fluid_code",
    "size",
    "area",
    "sequence_no",
    "pipr_class",
    "insulation",
    "from",
    "to",
)

ENRICHMENT_FIELDS_BY_ROLE: dict[EnrichmentRole, tuple[str, ...]] = {
    EnrichmentRole.SECONDARY_PROCESS: (
        "design_temperature",
        "operating_temperature",
        "design_pressure",
        "operating_pressure",
        "flow_rate",
        "density",
        "viscosity",
        "phase",
        "molecular_weight",
        "test_pressure",
    ),
    EnrichmentRole.MATERIAL: (
        "material_grade",
        "pipe_schedule",
        "flange_rating",
        "gasket_type",
        "bolting_material",
        "valve_class",
        "wall_thickness",
        "branch_table",
    ),
    EnrichmentRole.CORROSION: (
        "corrosion_allowance",
        "nace_class",
        "h2s_partial_pressure",
        "sour_service",
        "coating_system",
        "pwht_required",
        "hardness_limit",
        "cathodic_protection",
    ),
}

ENRICHMENT_FIELDS: tuple[str, ...] = tuple(
    name
    for role in (
        EnrichmentRole.SECONDARY_PROCESS,
        EnrichmentRole.MATERIAL,
        EnrichmentRole.CORROSION,
    )
    for name in ENRICHMENT_FIELDS_BY_ROLE[role]
)

# Alternate keys the backend has used for the same base column.
BASE_FIELD_ALIASES: dict[str, tuple[str, ...]] = {
    IDENTIFIER_FIELD: ("line_number",),
    "pipr_class": ("pipe_class",),
    "from": ("from_line",),
    "to": ("to_line",),
}

# Grammar component id -> base column it can fill.
COMPONENT_FIELDS: dict[str, str] = {
    "line_size": "size",
    "area": "area",
    "fluid_code": "fluid_code",
    "sequence_no": "sequence_no",
    "pipe_class": "pipr_class",
    "insulation": "insulation",
}
