import hashlib
import json
import logging

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.concurrency import run_in_threadpool

from advisor.crs.codes import normalize_crs_code
from advisor.crs.errors import NotFoundError, format_error_response
from advisor.crs.graph import node_count
from advisor.crs.resolver import PathResolver, get_resolver
from advisor.crs.suggest import suggest_transformation
from advisor.schemas import CatalogSummary, ReloadResponse, SuggestRequest, SuggestResponse
from catalog.loader import CatalogLoadError, get_catalog, reload_catalog

logger = logging.getLogger(__name__)

router = APIRouter()


def get_path_resolver(request: Request) -> PathResolver:
    # Apps/tests may install their own resolver via app.state.resolver
    res = getattr(request.app.state, "resolver", None)
    return res if res is not None else get_resolver()


def _cache_key(version: str, req: SuggestRequest) -> str:
    h = hashlib.sha1()
    h.update(normalize_crs_code(req.source_crs).encode("utf-8"))
    h.update(b"\n")
    h.update(normalize_crs_code(req.target_crs).encode("utf-8"))
    h.update(b"\n")
    bbox = req.location.bounding_box if req.location else None
    if bbox is not None:
        h.update(json.dumps(bbox.model_dump(), sort_keys=True).encode("utf-8"))
    return f"suggest:{version}:{h.hexdigest()}"


@router.post("/transformations/suggest", response_model=SuggestResponse)
async def suggest(
    req: SuggestRequest,
    request: Request,
    resolver: PathResolver = Depends(get_path_resolver),
) -> SuggestResponse:
    """Suggest transformation paths between two CRS codes.

    Body schema:
      {
        "source_crs": "EPSG:4301",
        "target_crs": "6668",
        "location": {"bounding_box": {"north": 36, "south": 35, "east": 140, "west": 139}}
      }
    Returns 404 when no path exists within the search bounds.
    """
    try:
        # First use reads the catalog file
        catalog = await run_in_threadpool(get_catalog)
    except CatalogLoadError as e:
        logger.error("catalog unavailable: %s", e)
        raise HTTPException(status_code=503, detail=format_error_response(e))

    cache = getattr(request.app.state, "cache", None)
    cache_key = None
    if cache:
        cache_key = _cache_key(catalog.version, req)
        cached = await cache.get_json(cache_key)
        if cached:
            try:
                return SuggestResponse(**cached)
            except Exception:
                # Corrupt cache entry: ignore
                pass

    try:
        # Graph building takes the resolver lock shared with the sync routes
        result = await run_in_threadpool(
            suggest_transformation,
            req.source_crs,
            req.target_crs,
            req.location,
            catalog=catalog,
            resolver=resolver,
        )
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=format_error_response(e))

    resp = SuggestResponse(**result.to_dict())
    if cache and cache_key:
        await cache.set_json(cache_key, resp.model_dump())
    return resp


@router.get("/catalog", response_model=CatalogSummary)
def catalog_summary(resolver: PathResolver = Depends(get_path_resolver)) -> CatalogSummary:
    """Version and shape of the loaded transformation catalog."""
    try:
        catalog = get_catalog()
    except CatalogLoadError as e:
        raise HTTPException(status_code=503, detail=format_error_response(e))
    graph = resolver.graph_for(catalog)
    return CatalogSummary(
        version=catalog.version,
        records=len(catalog.transformations),
        nodes=node_count(graph),
        hub_crs=list(catalog.hub_crs),
        deprecated=sorted(catalog.deprecated.keys()),
        common_paths={name: list(cp.steps) for name, cp in catalog.common_paths.items()},
    )


@router.post("/catalog/reload", response_model=ReloadResponse)
def catalog_reload(resolver: PathResolver = Depends(get_path_resolver)) -> ReloadResponse:
    """Re-read the catalog file. The graph is rebuilt only if the version changed."""
    try:
        catalog = reload_catalog()
    except CatalogLoadError as e:
        logger.error("catalog reload failed: %s", e)
        raise HTTPException(status_code=503, detail=format_error_response(e))
    rebuilt = resolver.is_stale(catalog)
    resolver.graph_for(catalog)
    return ReloadResponse(version=catalog.version, rebuilt=rebuilt)
