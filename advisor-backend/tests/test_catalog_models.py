import pytest
from pydantic import ValidationError

from catalog.models import AccuracyTier, TransformationRecord, canonical_code, infer_tier
from tests.catalogs import make_catalog, rec


@pytest.mark.parametrize(
    "text,tier",
    [
        ("1-2m", AccuracyTier.METER),
        ("a few metres", AccuracyTier.METER),
        ("a few cm", AccuracyTier.CENTIMETER),
        ("within 1 cm", AccuracyTier.CENTIMETER),
        ("practically identical (within a few cm)", AccuracyTier.HIGH),
        ("no error (coordinate conversion only)", AccuracyTier.EXACT),
        ("", AccuracyTier.UNKNOWN),
        ("depends on the region", AccuracyTier.UNKNOWN),
        ("5 mm", AccuracyTier.CENTIMETER),
        ("within 5 mm", AccuracyTier.CENTIMETER),
        ("sub-millimetre", AccuracyTier.CENTIMETER),
        ("0.5 m", AccuracyTier.CENTIMETER),
        ("sub-metre", AccuracyTier.CENTIMETER),
        ("about 15 cm", AccuracyTier.CENTIMETER),
        ("0.5-2 m", AccuracyTier.METER),
        ("a few m", AccuracyTier.METER),
        ("several m", AccuracyTier.METER),
    ],
)
def test_infer_tier_from_text(text, tier):
    assert infer_tier(text) == tier


def test_numeric_bound_beats_text():
    # "15 cm" written as metres would read as a metre-level text
    assert infer_tier("0.15 m", 0.15) == AccuracyTier.CENTIMETER
    assert infer_tier("whatever", 0.0) == AccuracyTier.EXACT
    assert infer_tier("a few cm", 2.0) == AccuracyTier.METER


@pytest.mark.parametrize("text,bound", [("0.5 m", 0.5), ("5 mm", 0.005), ("30 cm", 0.3), ("1-2m", 2.0), ("3 metres", 3.0)])
def test_text_value_uses_numeric_split(text, bound):
    assert infer_tier(text) == infer_tier(None, bound)


def test_canonical_code_forms():
    assert canonical_code("4326") == "EPSG:4326"
    assert canonical_code("epsg:4326") == "EPSG:4326"
    assert canonical_code(" EPSG:4326 ") == "EPSG:4326"
    assert canonical_code("esri:102100") == "ESRI:102100"
    with pytest.raises(ValueError):
        canonical_code("WGS84")


def test_record_aliases_and_explicit_tier():
    r = TransformationRecord.model_validate(rec("a", "4301", "epsg:4612", "1-2m", tier="centimeter"))
    assert r.source == "EPSG:4301"
    assert r.target == "EPSG:4612"
    # declared tier is kept even though the text reads metre-level
    assert r.accuracy_tier == AccuracyTier.CENTIMETER


def test_record_tier_inferred_when_missing():
    r = TransformationRecord.model_validate(rec("a", "4301", "4612", "1-2m"))
    assert r.accuracy_tier == AccuracyTier.METER


def test_record_rejects_same_endpoints():
    with pytest.raises(ValidationError):
        TransformationRecord.model_validate(rec("loop", "4326", "EPSG:4326"))


def test_record_rejects_empty_code():
    with pytest.raises(ValidationError):
        TransformationRecord.model_validate(rec("empty", "", "EPSG:4326"))


def test_catalog_normalizes_deprecated_keys():
    cat = make_catalog(
        [rec("a", "4301", "4612")],
        deprecated={"4301": {"note": "legacy", "migrateTo": "EPSG:6668"}},
        hubCrs=["4326"],
    )
    assert cat.deprecation_for("EPSG:4301").migrate_to == "EPSG:6668"
    assert cat.deprecation_for("EPSG:4612") is None
    assert cat.hub_crs == ["EPSG:4326"]


def test_error_codes():
    from advisor.crs.errors import NotFoundError, format_error_response
    from catalog.loader import CatalogLoadError

    with pytest.raises(ValidationError) as ei:
        TransformationRecord.model_validate(rec("loop", "1", "1"))
    assert format_error_response(ei.value)["code"] == "VALIDATION_ERROR"
    assert format_error_response(CatalogLoadError("x.json", OSError("gone")))["code"] == "DATA_LOAD_ERROR"
    assert format_error_response(NotFoundError("Transformation", "a"))["code"] == "NOT_FOUND"
    assert format_error_response(RuntimeError("boom")) == {"text": "boom", "code": "INTERNAL_ERROR"}
