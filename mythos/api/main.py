"""FastAPI application for the Mythos & Canvas studio."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from mythos import __version__

from .config import CORS_ORIGINS, LOG_JSON, LOG_LEVEL, STORE_DIR
from .logging import configure_logging
from .routes import chat, images, imports, infographics, publishing, stories, studio

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan - startup and shutdown."""
    configure_logging(json_format=LOG_JSON, level=LOG_LEVEL)
    logger.info("Studio data stored in %s", STORE_DIR)
    yield


app = FastAPI(
    title="Mythos & Canvas API",
    description="""
A creative studio for long-form fiction and illustration.

## Features
- **Story Writer**: Stream new stories or continuations from wizard answers and world lore
- **Image Studio**: Generate and edit images in parallel variations, then bake filters
- **Infographics**: Turn text into a deck of illustrated tiles with title overlays
- **Publisher**: Book settings, print layout preview, cover art, DOCX and PDF export
- **Chat**: Multimodal conversations that can call image generation

## Workflow
1. POST `/stories/generate` with wizard answers and read the streamed text
2. GET `/stories` to browse saved stories, `/stories/{id}/pages` to read them
3. Configure and preview the book under `/publishing/{id}`, then export
    """,
    version=__version__,
    lifespan=lifespan,
)

# CORS middleware for web frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(studio.router, prefix="/studio", tags=["Studio"])
app.include_router(stories.router, prefix="/stories", tags=["Stories"])
app.include_router(images.router, prefix="/images", tags=["Images"])
app.include_router(infographics.router, prefix="/infographics", tags=["Infographics"])
app.include_router(chat.router, prefix="/chat", tags=["Chat"])
app.include_router(publishing.router, prefix="/publishing", tags=["Publishing"])
app.include_router(imports.router, prefix="/imports", tags=["Imports"])


@app.get("/health", tags=["Health"])
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}
