"""
RTA FastAPI Application.

  POST /analyze    → rule analysis of submitted files, optional AI insights
  GET  /rules      → rule catalog
  GET  /categories → rule categories
  GET  /health     → service status
"""

from __future__ import annotations

import logging

from dotenv import load_dotenv
load_dotenv()

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from rta.api.routes.analyze import router as analyze_router
from rta.api.routes.health import router as health_router
from rta.api.routes.rules import router as rules_router
from rta.config import APP_VERSION, settings

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger("rta")

app = FastAPI(
    title="RTA",
    description="Rule-based React and TypeScript code analysis with optional AI insights",
    version=APP_VERSION,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(analyze_router)
app.include_router(rules_router)
app.include_router(health_router)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    body = await request.body()
    logger.error(f"Validation Error. Raw body: {body.decode('utf-8', errors='replace')[:500]} | Errors: {exc.errors()}")
    return JSONResponse(
        status_code=422,
        content={
            "detail": [
                {"loc": list(error["loc"]), "msg": error["msg"], "type": error["type"]}
                for error in exc.errors()
            ],
            "body": body.decode("utf-8", errors="replace")[:100],
        },
    )
