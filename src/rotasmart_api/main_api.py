#rotasmart/src/rotasmart_api/main_api.py

# ============================================================
# 📦 src/rotasmart_api/main_api.py
# ============================================================

import json
import math

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response

from common.logging_config import setup_logging
from establishment_segmentation.api.routes import router as segmentation_router
from pos_health.api.routes import router as health_router
from team_distribution.api.routes import router as distribution_router

setup_logging()

# ============================================================
# 🚀 App
# ============================================================

app = FastAPI(
    title="RotaSmart API",
    description="Segmentação de estabelecimentos, saúde das maquininhas e cobertura de equipes",
    version="1.0.0",
    openapi_url="/openapi.json",
    docs_url="/docs",
)

# ============================================================
# 🌍 CORS
# ============================================================

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ============================================================
# 🧹 Middleware: sanitizar JSON (NaN / Infinity)
# ============================================================

def _clean(obj):
    if isinstance(obj, dict):
        return {k: _clean(v) for k, v in obj.items()}
    if isinstance(obj, list):
        return [_clean(i) for i in obj]
    if isinstance(obj, float) and (math.isnan(obj) or math.isinf(obj)):
        return None
    return obj


@app.middleware("http")
async def sanitize_json_response(request: Request, call_next):
    response = await call_next(request)

    content_type = response.headers.get("content-type", "")
    if "application/json" not in content_type:
        return response

    raw_body = b"".join([chunk async for chunk in response.body_iterator])
    try:
        content = json.loads(raw_body)
    except ValueError:
        return Response(
            content=raw_body,
            status_code=response.status_code,
            headers=dict(response.headers),
        )

    return JSONResponse(content=_clean(content), status_code=response.status_code)


# ============================================================
# 🧠 Health
# ============================================================
@app.get("/health", tags=["Status"])
def health():
    return {"status": "ok", "message": "RotaSmart API saudável 🧭"}


# ============================================================
# 🔀 ROTAS
# ============================================================
app.include_router(segmentation_router, prefix="/segmentation")
app.include_router(health_router, prefix="/pos-health")
app.include_router(distribution_router, prefix="/distribution")


if __name__ == "__main__":
    uvicorn.run("rotasmart_api.main_api:app", host="0.0.0.0", port=8000)
