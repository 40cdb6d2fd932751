"""
drawio-gen HTTP service - FastAPI application.

It provides:
- Compilation of JSON descriptions to .drawio / .drawio.svg documents
- Validation of existing draw.io XML
- Shape, theme and input-schema reference endpoints
- CORS configuration for local frontend development
"""
import logging
from typing import Any, Optional

from fastapi import Body, FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from pydantic import BaseModel

from .config import CORS_ORIGINS, HOST, PORT
from .pipeline import compile_diagram
from .schema import description_json_schema, validate_description
from .shapes import list_categories, list_shapes
from .themes import list_themes
from .validation import validate_drawio_xml

logger = logging.getLogger(__name__)

MEDIA_TYPES = {
    "drawio-svg": "image/svg+xml",
    "drawio": "application/xml",
}


class ValidateRequest(BaseModel):
    xml: str


# --- FastAPI App ---

app = FastAPI(
    title="drawio-gen API",
    description="Compile JSON graph descriptions into draw.io diagrams",
    version="0.1.0",
)

# CORS for local development
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# --- Health Check ---

@app.get("/api/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "ok"}


# --- Compilation ---

@app.post("/api/generate")
async def generate(
    payload: Any = Body(...),
    format: str = Query("drawio-svg", pattern="^(drawio-svg|drawio)$"),
):
    """Compile a description; the response body is the document itself."""
    checked = validate_description(payload)
    if not checked.ok:
        return JSONResponse(status_code=400, content={"errors": checked.errors})

    result = await compile_diagram(checked.diagram)
    if not result.validation.valid:
        logger.error("Self-check failed for %r", result.model.title)
        raise HTTPException(
            status_code=500,
            detail=f"Generated XML failed validation: {'; '.join(result.validation.errors)}",
        )

    headers = {"X-Drawio-Warnings": str(len(result.warnings))}
    return Response(content=result.output(format), media_type=MEDIA_TYPES[format], headers=headers)


@app.post("/api/validate")
async def validate(request: ValidateRequest):
    """Validate draw.io XML."""
    return validate_drawio_xml(request.xml).to_dict()


# --- Reference ---

@app.get("/api/shapes")
async def get_shapes(category: Optional[str] = None):
    """Shape categories, or the shapes in one category."""
    if not category:
        return {"categories": list_categories()}
    shapes = list_shapes(category)
    if not shapes:
        raise HTTPException(status_code=404, detail=f'Unknown category "{category}"')
    return {"category": category, "shapes": shapes}


@app.get("/api/themes")
async def get_themes():
    return {"themes": [t.to_dict() for t in list_themes()]}


@app.get("/api/schema")
async def get_schema():
    """JSON schema of the description format."""
    return description_json_schema()


# --- Run with uvicorn ---

if __name__ == "__main__":
    import uvicorn

    from .logging_config import configure_logging

    configure_logging()
    uvicorn.run(app, host=HOST, port=PORT)
