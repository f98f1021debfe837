from typing import Annotated, Optional

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from ape_safe_lookup.exceptions import (
    ConfigurationError,
    InvalidAddressError,
    SafeLookupException,
)
from ape_safe_lookup.lookup import SafeLookup
from ape_safe_lookup.networks import SAFE_NETWORKS
from ape_safe_lookup.types import QueryType, serialize_result

app = FastAPI(title="Safe Lookup")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["GET", "OPTIONS"],
    allow_headers=["Content-Type"],
)


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


@app.exception_handler(StarletteHTTPException)
async def http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return error_response(exc.status_code, str(exc.detail))


@app.exception_handler(InvalidAddressError)
async def invalid_address(request: Request, exc: InvalidAddressError) -> JSONResponse:
    return error_response(400, str(exc))


@app.exception_handler(ConfigurationError)
async def configuration_error(request: Request, exc: ConfigurationError) -> JSONResponse:
    return error_response(500, str(exc))


@app.exception_handler(SafeLookupException)
async def lookup_error(request: Request, exc: SafeLookupException) -> JSONResponse:
    return error_response(500, str(exc) or "Internal server error")


def get_lookup() -> SafeLookup:
    return SafeLookup()


Lookup = Annotated[SafeLookup, Depends(get_lookup)]


@app.get("/api/lookup")
def api_lookup(
    lookup: Lookup, address: Optional[str] = None, type: str = QueryType.SAFES.value
) -> JSONResponse:
    if not address:
        return error_response(400, "Address parameter is required")

    try:
        query_type = QueryType(type)
    except ValueError:
        options = ", ".join(q.value for q in QueryType)
        return error_response(400, f"Unknown query type '{type}', expected one of: {options}")

    # NOTE: Runs in the threadpool, the Safe API calls block.
    result = lookup.lookup(query_type, address)
    return JSONResponse(content={query_type.value: serialize_result(result)})


@app.get("/api/networks")
def api_networks() -> list[dict]:
    return [network.model_dump() for network in SAFE_NETWORKS]
