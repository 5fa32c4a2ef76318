"""
Main FastAPI application for the image generation gateway.
Serves health, image generation, icons and metrics.
"""
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.core.config import settings
from app.core.logging import configure_logging
from app.api.middleware import RequestLogMiddleware
from app.api.routes import health, icons, images
from app.utils.metrics import router as metrics_router


configure_logging()

app = FastAPI(
    title="Image Generation Gateway",
    description="Imagen / Gemini image generation with normalized error codes",
    version="1.0.0",
)

# CORS
origins = settings.cors_origins_list
if not origins:
    origins = ["http://localhost:3000", "http://127.0.0.1:3000", "http://localhost:5173"]
app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(RequestLogMiddleware)

# Routers
app.include_router(health.router, tags=["health"])
app.include_router(images.router)
app.include_router(icons.router)
app.include_router(metrics_router)
