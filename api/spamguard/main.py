import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import get_settings
from .routers import ai, health, scan

logging.basicConfig(level=get_settings().log_level)

# API metadata for OpenAPI documentation
description = """
## SpamGuard Email Analysis API

Heuristic spam and phishing classifier for a single email (sender, subject, body).

### Key Features

* **Local analysis:** keyword, link, urgency, sender-reputation and grammar detectors
* **Enhanced analysis:** pattern families, sentiment, linguistic and domain-risk signals
  layered on the local score, with a short reasoning
* **Graceful degrade:** if the enhanced pass fails the local result is returned
* **Explainable:** every score comes with typed, severity-ranked indicators

### Quick Start

1. **Health Check:** `GET /health`
2. **Local Scan:** `POST /scan`
3. **Enhanced Scan:** `POST /ai/analyze`
4. **Raw .eml:** `POST /scan/eml` (or `POST /scan/eml/parse` to extract fields only)

### Documentation

* **Interactive API Docs:** [/docs](/docs) (Swagger UI)
* **Alternative Docs:** [/redoc](/redoc) (ReDoc)
"""

app = FastAPI(
    title="SpamGuard Email Analysis API",
    description=description,
    version="0.1.0",
    license_info={
        "name": "MIT",
        "url": "https://opensource.org/licenses/MIT",
    },
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_tags=[
        {
            "name": "health",
            "description": "Service health and configuration flags",
        },
        {
            "name": "scan",
            "description": "Local rule-based analysis and .eml parsing (no network access)",
        },
        {
            "name": "ai",
            "description": "Enhanced heuristic analysis with fallback to local analysis",
        },
    ],
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router, prefix="/health", tags=["health"])
app.include_router(scan.router, prefix="/scan", tags=["scan"])
app.include_router(ai.router, prefix="/ai", tags=["ai"])
