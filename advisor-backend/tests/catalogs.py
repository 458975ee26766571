"""Small in-memory catalogs shared by the tests."""
from catalog.models import TransformationCatalog


def rec(rid, src, tgt, accuracy="a few cm", tier=None, reversible=False, **extra):
    d = {"id": rid, "from": src, "to": tgt, "method": f"method {rid}", "accuracy": accuracy, "reversible": reversible}
    if tier is not None:
        d["accuracy_tier"] = tier
    d.update(extra)
    return d


def make_catalog(records, version="test-1", deprecated=None, **extra):
    payload = {
        "version": version,
        "transformations": records,
        "deprecatedTransformations": deprecated or {},
    }
    payload.update(extra)
    return TransformationCatalog.model_validate(payload)


def japan_catalog(version="jp-1"):
    return make_catalog(
        [
            rec("tky2jgd", "EPSG:4301", "EPSG:4612", "a few cm", reversible=True,
                reverse_note="inverse grid", notes="forward grid", operation_code="EPSG:15483"),
            rec("tokyo-wgs84", "EPSG:4301", "EPSG:4326", "1-2m", reversible=True),
            rec("patchjgd", "EPSG:4612", "EPSG:6668", "a few cm", reversible=True),
            rec("jgd2011-wgs84", "EPSG:6668", "EPSG:4326", "practically identical", reversible=True),
            rec("wgs84-3857", "EPSG:4326", "EPSG:3857", "no error (coordinate conversion only)", reversible=True),
            rec("gda94-gda2020", "EPSG:4283", "EPSG:7844", "a few cm", reversible=False),
        ],
        version=version,
        deprecated={
            "EPSG:4301": {"note": "Tokyo Datum was superseded.", "migrateTo": "EPSG:6668"},
        },
    )


def chain_catalog(length, version="chain-1", reversible=False):
    """EPSG:1 -> EPSG:2 -> ... -> EPSG:length+1"""
    return make_catalog(
        [rec(f"c{i}", f"EPSG:{i}", f"EPSG:{i + 1}", "a few cm", reversible=reversible) for i in range(1, length + 1)],
        version=version,
    )
