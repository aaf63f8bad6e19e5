# Rule-based repair cost estimate derived from a normalised diagnosis

import math
from types import MappingProxyType

from hvac_diag.models.diagnosis import (
    CostEstimate,
    CostRange,
    DiagnosisResult,
    DiyFeasibility,
    LaborCost,
    LineItem,
    RepairComplexity,
    Severity,
)

COMPLEXITY_RANGES = MappingProxyType({
    RepairComplexity.EASY: (100, 300),
    RepairComplexity.MODERATE: (250, 800),
    RepairComplexity.COMPLEX: (700, 2500),
})

SEVERITY_MULTIPLIERS = MappingProxyType({
    Severity.LOW: 0.7,
    Severity.MEDIUM: 1.0,
    Severity.HIGH: 1.3,
})

REGIONAL_ADJUSTMENTS = MappingProxyType({
    "northeast": 1.15,
    "west": 1.2,
    "midwest": 0.95,
    "south": 0.9,
})

PARTS_SHARE = 0.4
LABOR_SHARE = 0.6
PARTS_DOLLARS_PER_HOUR = 50

WARRANTY_CONSIDERATIONS = (
    "Check whether your equipment is still under manufacturer or installer "
    "warranty before paying for parts. Many warranties require repairs by a "
    "licensed technician."
)

DISCLAIMER = (
    "These figures are rough estimates based on typical repair costs. Actual "
    "prices vary by region, equipment brand and contractor. Get a quote from "
    "a licensed HVAC technician before starting work."
)


def round_half_up(value: float) -> int:
    # round() is banker's rounding; 162.5 must become 163
    return int(math.floor(value + 0.5))


def _range(low: float, high: float) -> CostRange:
    return CostRange(min=round_half_up(low), max=round_half_up(high))


def estimate_costs(result: DiagnosisResult) -> CostEstimate:
    complexity = result.repair_complexity
    if complexity not in COMPLEXITY_RANGES:
        complexity = RepairComplexity.MODERATE

    base_min, base_max = COMPLEXITY_RANGES[complexity]

    parts = _range(base_min * PARTS_SHARE, base_max * PARTS_SHARE)
    # hours come from the parts figure, not labour; kept as-is pending product sign-off
    hours = _range(parts.min / PARTS_DOLLARS_PER_HOUR, parts.max / PARTS_DOLLARS_PER_HOUR)
    labor = LaborCost(
        min=round_half_up(base_min * LABOR_SHARE),
        max=round_half_up(base_max * LABOR_SHARE),
        hours=hours,
    )

    diy = DiyFeasibility.PARTIAL if complexity == RepairComplexity.EASY else DiyFeasibility.NONE

    line_items = []
    for issue in result.possible_issues:
        multiplier = SEVERITY_MULTIPLIERS.get(issue.severity, 1.0)
        line_items.append(
            LineItem(
                issue=issue.issue,
                cost_range=_range(base_min * multiplier * 0.5, base_max * multiplier * 0.7),
                description=issue.description,
                diy_feasibility=diy,
            )
        )

    return CostEstimate(
        total_estimate=CostRange(min=base_min, max=base_max),
        parts_cost=parts,
        labor_cost=labor,
        line_items=line_items,
        regional_adjustments=dict(REGIONAL_ADJUSTMENTS),
        warranty_considerations=WARRANTY_CONSIDERATIONS,
        disclaimer=DISCLAIMER,
    )


def with_cost_estimates(result: DiagnosisResult) -> DiagnosisResult:
    return result.model_copy(update={"cost_estimates": estimate_costs(result)})
