from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import logging

from .config import settings
from .database import engine, Base, SessionLocal
from .errors import CalculationError
from .routers import auth, calculators, history

logger = logging.getLogger("tanihitung")

Base.metadata.create_all(bind=engine)

app = FastAPI(
    title=settings.APP_NAME,
    description="Agricultural calculators — fertilizer, feed, medicine dosage, harvest and cost",
    version="1.0.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[origin.strip() for origin in settings.CORS_ORIGINS.split(",") if origin.strip()],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth.router, prefix="/api")
app.include_router(calculators.router, prefix="/api")
app.include_router(history.router, prefix="/api")


@app.exception_handler(CalculationError)
def calculation_error_handler(request: Request, exc: CalculationError):
    """Map typed core errors to their HTTP status. The message is passed through unchanged."""
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.get("/health")
def health():
    return {"status": "ok", "app": "tanihitung"}


@app.on_event("startup")
def auto_seed():
    """Seed the built-in calculators into the catalog on first run."""
    if not settings.SEED_DEFAULT_CALCULATORS:
        return
    from .catalog import seed_default_calculators
    db = SessionLocal()
    try:
        seed_default_calculators(db)
    finally:
        db.close()
    logger.info("Catalog ready")
