"""
Xero Ingestion Audit - Main Application
"""
import logging
from contextlib import asynccontextmanager
from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

# Load environment variables
load_dotenv()

from xero_audit.config import load_settings, configure_logging

settings = load_settings()
configure_logging(settings.log_level)
logger = logging.getLogger(__name__)

# Import after env loaded
from xero_audit.api import router
from xero_audit.database import get_db


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler"""
    logger.info("=" * 60)
    logger.info("🚀 Xero Ingestion Audit Starting...")
    logger.info("=" * 60)

    db = get_db(settings.database_url)
    logger.info(f"✅ Datastore: {db.engine.url.render_as_string(hide_password=True)}")
    logger.info(f"✅ Audit window: {settings.window_size} items, batches of {settings.batch_size}")

    yield

    logger.info("Shutting down...")
    db.dispose()


app = FastAPI(
    title="Xero Ingestion Audit",
    description="""
    ## Diagnostics over line items synced from Xero

    - **Line item audit** - duplicate Xero line item IDs and overlap between
      the two most recent sync batches
    - **Purchase orders** - status summary and inferred PO to bill links

    All `/api` routes require an active admin profile (`X-User-Id` header).
    """,
    version="1.0.0",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(router, prefix="/api", tags=["Diagnostics"])


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy", "service": "xero-ingestion-audit"}


if __name__ == "__main__":
    import uvicorn
    print("\n" + "=" * 60)
    print("📖 API Docs: http://localhost:8000/docs")
    print("=" * 60 + "\n")
    uvicorn.run(app, host="127.0.0.1", port=8000)
