from fastapi import FastAPI

from labelcheck.config import configure_logging
from labelcheck.routes import analyze, compare, health

configure_logging()

app = FastAPI(
    title="Label Field Comparison",
    description="OCR field extraction and comparison for alcohol beverage label review",
    version="0.1.0",
)

# Register route modules.
# Each router handles a specific concern: health checks, comparing OCR output, and analyzing uploads.
app.include_router(health.router)
app.include_router(compare.router)
app.include_router(analyze.router)
