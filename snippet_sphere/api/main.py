"""FastAPI application entrypoint for the Snippet Sphere AI API.

Run with: uvicorn snippet_sphere.api.main:app
"""

import logging

from fastapi import FastAPI, Request
from fastapi.openapi.utils import get_openapi
from fastapi.responses import JSONResponse
from pydantic.json_schema import models_json_schema

from .routes import REQUEST_MODELS, SCHEMA_REF_TEMPLATE, router
from snippet_sphere.schemas.validation import ValidationError

logger = logging.getLogger("API")

app = FastAPI(title="Snippet Sphere AI API", version="0.1.0")
app.include_router(router)


def custom_openapi() -> dict:
	"""Default OpenAPI document plus the request models the routes reference."""
	if app.openapi_schema:
		return app.openapi_schema

	schema = get_openapi(title=app.title, version=app.version, routes=app.routes)
	_, defs = models_json_schema(
		[(model, "validation") for model in REQUEST_MODELS],
		ref_template=SCHEMA_REF_TEMPLATE,
	)
	schema.setdefault("components", {}).setdefault("schemas", {}).update(defs.get("$defs", {}))
	app.openapi_schema = schema
	return schema


app.openapi = custom_openapi


@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
	"""Report every violated field of a rejected request body."""
	logger.info(f"Rejected {exc.shape} on {request.url.path}: {len(exc.violations)} violation(s)")
	return JSONResponse(status_code=422, content={"detail": [v.to_dict() for v in exc.violations]})


@app.get("/health")
def health_check() -> dict:
	"""Basic liveness check used by monitors and CI."""
	return {"status": "ok"}
