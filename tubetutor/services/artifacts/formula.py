"""
Formula fusion: step-by-step derivations of the formulas a video covers,
plus a small equation reference and category counts.
"""
from __future__ import annotations

from typing import Any

from tubetutor.services.artifacts.base import JSON, ArtifactSpec
from tubetutor.services.extraction.normalize import (
    ListRule,
    NumberRule,
    RecordListRule,
    Schema,
    TextRule,
    has_text,
)
from tubetutor.services.llm import prompts

DERIVATIONS_MAX = 3
CATEGORIES_MAX = 5
STEPS_MAX = 10
EQUATION_GROUPS_MAX = 10


def _renumber_step(rec: dict[str, Any], i: int) -> dict[str, Any]:
    rec["step"] = i + 1
    return rec


def _derivation_id(rec: dict[str, Any], i: int) -> dict[str, Any]:
    return {"id": f"d{i + 1}", **rec}


STEP_SCHEMA = Schema(
    name="derivation-step",
    fields={
        "step": NumberRule(min=1, default=1),
        "equation": TextRule(""),
        "explanation": TextRule(""),
    },
    max_items=STEPS_MAX,
    accept=lambda raw: has_text(raw, "equation"),
    finalize=_renumber_step,
)

DERIVATION_SCHEMA = Schema(
    name="derivation",
    fields={
        "title": TextRule("Derivation"),
        "steps": RecordListRule(STEP_SCHEMA),
        "applications": ListRule(),
        "complexity": NumberRule(min=1, max=5, default=3),
        "timeRequired": NumberRule(min=5, max=60, default=15),
    },
    max_items=DERIVATIONS_MAX,
    accept=lambda raw: has_text(raw, "title"),
    finalize=_derivation_id,
)

EQUATION_GROUP_SCHEMA = Schema(
    name="equation-group",
    fields={
        "name": TextRule(""),
        "equations": ListRule(),
    },
    max_items=EQUATION_GROUPS_MAX,
    accept=lambda raw: has_text(raw, "name"),
)

CATEGORY_SCHEMA = Schema(
    name="category",
    fields={
        "name": TextRule(""),
        "derivationCount": NumberRule(min=0, default=0),
    },
    max_items=CATEGORIES_MAX,
    accept=lambda raw: has_text(raw, "name"),
)


def _has_derivation(raw: dict[str, Any]) -> bool:
    derivations = raw.get("derivations")
    if not isinstance(derivations, list):
        return False
    return any(isinstance(d, dict) and has_text(d, "title") for d in derivations)


def _fallback_module() -> list[dict[str, Any]]:
    return [
        {
            "derivations": [
                {
                    "id": "d1",
                    "title": "Gauss's Law for Electricity",
                    "steps": [
                        {
                            "step": 1,
                            "equation": "∮ E · dA = Q_enclosed / ε₀",
                            "explanation": "The flux through a closed surface is proportional to the charge enclosed",
                        },
                        {
                            "step": 2,
                            "equation": "∇ · E = ρ / ε₀",
                            "explanation": "Differential form using divergence theorem",
                        },
                        {
                            "step": 3,
                            "equation": "Consider point charge: E = k q / r²",
                            "explanation": "Field of a point charge",
                        },
                        {
                            "step": 4,
                            "equation": "Flux through sphere: E × 4πr² = q / ε₀",
                            "explanation": "Verification for spherical symmetry",
                        },
                    ],
                    "applications": [
                        "Calculating electric fields of symmetric charge distributions",
                        "Determining charge enclosed by a surface",
                    ],
                    "complexity": 3,
                    "timeRequired": 15,
                }
            ],
            "equationDatabase": [
                {
                    "name": "Maxwell's Equations",
                    "equations": ["∇·E = ρ/ε₀", "∇·B = 0", "∇×E = -∂B/∂t", "∇×B = μ₀J + μ₀ε₀∂E/∂t"],
                },
                {
                    "name": "Wave Equations",
                    "equations": ["∇²E - μ₀ε₀ ∂²E/∂t² = 0", "∇²B - μ₀ε₀ ∂²B/∂t² = 0"],
                },
            ],
            "categories": [
                {"name": "Electromagnetism", "derivationCount": 12},
                {"name": "Mechanics", "derivationCount": 18},
                {"name": "Quantum Physics", "derivationCount": 9},
                {"name": "Thermodynamics", "derivationCount": 7},
            ],
        }
    ]


FORMULA_SCHEMA = Schema(
    name="formula-fusion",
    fields={
        "derivations": RecordListRule(DERIVATION_SCHEMA),
        "equationDatabase": RecordListRule(EQUATION_GROUP_SCHEMA),
        "categories": RecordListRule(CATEGORY_SCHEMA),
    },
    max_items=1,
    accept=_has_derivation,
    fallback_records=_fallback_module,
)

FORMULA_FUSION = ArtifactSpec(
    key="formula-fusion",
    template=prompts.FORMULA_FUSION_TEMPLATE,
    item_count=DERIVATIONS_MAX,
    mode=JSON,
    json_expect="object",
    json_records=lambda data: [data],
    recover_malformed=False,
    schema=lambda transcript: FORMULA_SCHEMA,
)
