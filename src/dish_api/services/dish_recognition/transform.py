"""
Conversion of raw Baidu results into public RecognitionResult objects.

Baidu reports calories per 100g only. Portion totals and macros are derived
with a fixed heuristic: an assumed portion weight (200g by default) and a
20/50/30 split of calories across protein/carbs/fat, converted at 4/4/9 kcal
per gram. These numbers are an approximation, not measured nutrition data.
"""

import math
import time
from collections.abc import Sequence
from typing import Any

from pydantic import BaseModel, Field

from dish_api.models.recognition import NutritionEstimate, RecognitionResult

DEFAULT_PORTION_WEIGHT_GRAMS = 200

# kcal per gram
PROTEIN_KCAL_PER_GRAM = 4
CARBS_KCAL_PER_GRAM = 4
FAT_KCAL_PER_GRAM = 9


class MacroSplit(BaseModel):
    """Share of a portion's calories attributed to each macronutrient."""

    protein: float = Field(0.20, ge=0, le=1)
    carbs: float = Field(0.50, ge=0, le=1)
    fat: float = Field(0.30, ge=0, le=1)


DEFAULT_MACRO_SPLIT = MacroSplit()


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positives."""
    return math.floor(value + 0.5)


def _to_float(value: Any) -> float:
    """Parse a provider number (Baidu sends strings), 0 when absent or invalid."""
    if value is None or value == "":
        return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    return number if math.isfinite(number) else 0.0


def estimate_nutrition(
    calories_per_100g: float,
    estimated_weight_grams: int = DEFAULT_PORTION_WEIGHT_GRAMS,
    split: MacroSplit = DEFAULT_MACRO_SPLIT,
) -> NutritionEstimate:
    """Scale per-100g calories to a portion and split them into macros."""
    total_calories = max(round_half_up(calories_per_100g * estimated_weight_grams / 100), 0)

    return NutritionEstimate(
        calories=total_calories,
        protein=round_half_up(total_calories * split.protein / PROTEIN_KCAL_PER_GRAM),
        carbs=round_half_up(total_calories * split.carbs / CARBS_KCAL_PER_GRAM),
        fat=round_half_up(total_calories * split.fat / FAT_KCAL_PER_GRAM),
        unit=f"{estimated_weight_grams}g",
    )


def transform_results(
    raw: Sequence[dict[str, Any]],
    estimated_weight_grams: int = DEFAULT_PORTION_WEIGHT_GRAMS,
    split: MacroSplit = DEFAULT_MACRO_SPLIT,
    provider: str = "baidu",
    timestamp_ms: int | None = None,
) -> list[RecognitionResult]:
    """
    Convert raw provider entries into RecognitionResults, keeping provider order.

    Args:
        raw: ``result`` entries from the provider response
        estimated_weight_grams: Assumed portion weight
        split: Calorie split used for the macro estimate
        provider: Prefix for generated ids
        timestamp_ms: Timestamp for generated ids (defaults to now)

    Returns:
        One RecognitionResult per entry, ids ``<provider>-<timestamp>-<index>``
    """
    if timestamp_ms is None:
        timestamp_ms = int(time.time() * 1000)

    results = []
    for index, item in enumerate(raw):
        calories_per_100g = _to_float(item.get("calorie"))
        nutrition = estimate_nutrition(calories_per_100g, estimated_weight_grams, split)

        results.append(
            RecognitionResult(
                id=f"{provider}-{timestamp_ms}-{index}",
                name=str(item.get("name", "")),
                confidence=_to_float(item.get("probability")),
                calorie=calories_per_100g,
                total_calories=nutrition.calories,
                estimated_weight=estimated_weight_grams,
                probability=item.get("probability"),
                nutrition=nutrition,
                baike_info=item.get("baike_info") or None,
                original_data=dict(item),
            )
        )

    return results
