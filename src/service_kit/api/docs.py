import json
from pathlib import Path
from typing import Any

from fastapi import FastAPI
from fastapi.openapi.docs import get_swagger_ui_html
from fastapi.responses import FileResponse, HTMLResponse, JSONResponse

from .errors import ApiSpecError

LEGAL_NOTICE_JS = Path(__file__).parent / "static" / "legal-notice.js"

COPYRIGHT_TEXT = [
    "",
    "(c) Copyright Merative US L.P. and others 2020-2022",
    "SPDX-Licence-Identifier: Apache 2.0",
]


def load_api_spec(path: str | Path) -> dict[str, Any]:
    """Load an OpenAPI document and append the copyright notice to its description"""
    try:
        with open(path, encoding="utf-8") as f:
            doc = json.load(f)
    except OSError as e:
        raise ApiSpecError(str(path), str(e)) from e
    except json.JSONDecodeError as e:
        raise ApiSpecError(str(path), f"invalid JSON: {e}") from e

    if not isinstance(doc, dict) or not isinstance(doc.get("info", {}), dict):
        raise ApiSpecError(str(path), "document must be an object with an 'info' object")

    info = doc.setdefault("info", {})
    info["description"] = (info.get("description") or "") + "\n\n".join(COPYRIGHT_TEXT)
    return doc


def install_api_docs(app: FastAPI, doc: dict[str, Any], ingress_path: str = "") -> None:
    """Serve the API document and Swagger UI under /api-docs"""
    prefix = ingress_path.rstrip("/")
    title = doc.get("info", {}).get("title", "API")

    @app.get("/static/legal.js", include_in_schema=False)
    async def legal_notice():
        return FileResponse(LEGAL_NOTICE_JS, media_type="application/javascript")

    @app.get("/api-docs/openapi.json", include_in_schema=False)
    async def api_document():
        return JSONResponse(doc)

    @app.get("/api-docs", include_in_schema=False)
    async def swagger_ui():
        page = get_swagger_ui_html(openapi_url=f"{prefix}/api-docs/openapi.json", title=f"{title} - Swagger UI")
        script = f'<script src="{prefix}/static/legal.js"></script>'
        html = page.body.decode("utf-8").replace("</body>", f"{script}\n</body>")
        return HTMLResponse(html)
