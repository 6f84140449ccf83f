"""FastAPI application entry point."""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from brrrr.api.routes import projection
from brrrr.config import settings

logging.basicConfig(level=settings.log_level)

app = FastAPI(
    title="BRRRR Projection",
    description="Month-by-month projection of buy, rehab, rent, refinance deals",
    version="0.1.0",
    debug=settings.debug,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(projection.router)


@app.get("/health")
async def health():
    return {"status": "ok"}
