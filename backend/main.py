import os

from fastapi.openapi.utils import get_openapi
from dotenv import load_dotenv

# Load environment variables before the settings object is built
load_dotenv()  # This reads .env into os.environ

from optica.main import app  # noqa: E402


def custom_openapi() -> dict:
    """Return OpenAPI schema with project metadata."""
    if app.openapi_schema:
        return app.openapi_schema
    app.openapi_schema = get_openapi(
        title="Optica API",
        version=app.version,
        description=(
            "API for optics shops: lens quoting by prescription, lens catalog, "
            "prescription ranges and users."
        ),
        contact={"name": "Optica Support", "email": "support@example.com"},
        routes=app.routes,
    )
    return app.openapi_schema


app.openapi = custom_openapi

if __name__ == "__main__":
    import uvicorn

    workers = int(os.getenv("UVICORN_WORKERS", "1"))
    keepalive = int(os.getenv("UVICORN_KEEPALIVE", "65"))
    uvicorn.run(
        "optica.main:app",
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "8000")),
        reload=os.getenv("ENVIRONMENT", "production") == "development",
        workers=workers,
        timeout_keep_alive=keepalive,
    )
