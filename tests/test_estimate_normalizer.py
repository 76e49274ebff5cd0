"""
Tests for turning raw model completions into MacroEstimate objects.

Covers fence stripping (bare and json-tagged), JSON parsing, and the
presence/numeric checks on the five macro fields.
"""

import json

import pytest

from app.exceptions import MalformedEstimateError
from domain.schemas.meal_schemas import MacroEstimate
from services.estimate_normalizer import normalize_estimate, strip_code_fence

from test_fixtures import EGGS_AND_COFFEE


# =============================================================================
# FENCE STRIPPING
# =============================================================================


def test_strip_json_fence():
    assert strip_code_fence('```json\n{"a": 1}\n```') == '{"a": 1}'


def test_strip_bare_fence():
    assert strip_code_fence('```\n{"a": 1}\n```') == '{"a": 1}'


def test_unfenced_text_is_only_trimmed():
    assert strip_code_fence('  {"a": 1}\n') == '{"a": 1}'


def test_opening_fence_without_closing_fence():
    assert strip_code_fence('```json\n{"a": 1}') == '{"a": 1}'


@pytest.mark.parametrize(
    "wrap",
    [
        lambda body: body,
        lambda body: f"```\n{body}\n```",
        lambda body: f"```json\n{body}\n```",
        lambda body: f"\n  ```json{body}```  \n",
    ],
    ids=["plain", "bare-fence", "json-fence", "json-fence-no-newlines"],
)
def test_fence_presence_does_not_change_the_estimate(wrap):
    estimate = normalize_estimate(wrap(json.dumps(EGGS_AND_COFFEE)))

    assert estimate == MacroEstimate(**EGGS_AND_COFFEE)


# =============================================================================
# PARSING
# =============================================================================


def test_float_values_are_kept():
    estimate = normalize_estimate(
        '{"calories": 512.5, "protein": 31.2, "fat": 20.1, "fibre": 7.5, "sugar": 3.3}'
    )

    assert estimate.calories == 512.5
    assert estimate.sugar == 3.3


def test_extra_fields_are_ignored():
    payload = dict(EGGS_AND_COFFEE, carbs=2, note="approximate")

    estimate = normalize_estimate(json.dumps(payload))

    assert estimate.model_dump() == {k: float(v) for k, v in EGGS_AND_COFFEE.items()}


def test_negative_values_are_not_clamped():
    payload = dict(EGGS_AND_COFFEE, sugar=-1)

    assert normalize_estimate(json.dumps(payload)).sugar == -1


@pytest.mark.parametrize(
    "raw",
    [
        "I think this meal has about 220 calories.",
        '```json\n{"calories": 220, "protein": 14,\n```',
        "",
        "```json```",
    ],
)
def test_invalid_json_is_malformed(raw):
    with pytest.raises(MalformedEstimateError, match="invalid JSON"):
        normalize_estimate(raw)


@pytest.mark.parametrize("raw", ["[220, 14, 15, 0, 1]", "220", '"220 kcal"', "null"])
def test_non_object_json_is_malformed(raw):
    with pytest.raises(MalformedEstimateError, match="not a JSON object"):
        normalize_estimate(raw)


def test_missing_field_is_malformed():
    payload = {k: v for k, v in EGGS_AND_COFFEE.items() if k != "sugar"}

    with pytest.raises(MalformedEstimateError) as exc_info:
        normalize_estimate(json.dumps(payload))

    assert "missing fields: sugar" in str(exc_info.value)


@pytest.mark.parametrize("bad_value", ["14g", None, True, [14], {"g": 14}])
def test_non_numeric_field_is_malformed(bad_value):
    payload = dict(EGGS_AND_COFFEE, protein=bad_value)

    with pytest.raises(MalformedEstimateError, match="non-numeric fields: protein"):
        normalize_estimate(json.dumps(payload))


def test_non_finite_number_is_malformed():
    raw = '{"calories": NaN, "protein": 14, "fat": 15, "fibre": 0, "sugar": 1}'

    with pytest.raises(MalformedEstimateError, match="calories"):
        normalize_estimate(raw)


def test_malformed_error_maps_to_500_and_keeps_completion_for_logs():
    with pytest.raises(MalformedEstimateError) as exc_info:
        normalize_estimate("not json")

    assert exc_info.value.http_status == 500
    assert exc_info.value.details == {"completion": "not json"}
