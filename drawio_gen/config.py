"""
Runtime configuration for drawio-gen.

Values come from environment variables so the CLI, HTTP service and MCP
server can be pointed at different hosts/ports without code changes.
"""
import os

HOST = os.environ.get("DRAWIO_GEN_HOST", "127.0.0.1")
PORT = int(os.environ.get("DRAWIO_GEN_PORT", "8765"))
LOG_LEVEL = os.environ.get("DRAWIO_GEN_LOG_LEVEL", "INFO").upper()

# Comma-separated list of origins allowed by the HTTP service
CORS_ORIGINS = [
    origin.strip()
    for origin in os.environ.get(
        "DRAWIO_GEN_CORS_ORIGINS",
        "http://localhost:5173,http://localhost:3000,http://127.0.0.1:5173",
    ).split(",")
    if origin.strip()
]

# Written into the <mxfile host="..."> attribute
MXFILE_HOST = "drawio-gen"
