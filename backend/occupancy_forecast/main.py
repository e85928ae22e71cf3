"""
Owner Occupancy Forecast API - READ-ONLY Backend
=================================================
API behind the "Occupancy & Revenue Forecast" panel of the owner dashboard.

IMPORTANT: All operations are GET-only. Properties and bookings are
written by the booking flow; this service only reads them.

Forecast logic:
- Monthly occupancy: booked days overlapping each calendar month / capacity
- Monthly revenue: booking amounts by creation month
- Forecast: 3-month weighted moving average (0.2 / 0.3 / 0.5),
  blended 60/40 with the same calendar month when available
"""
import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from occupancy_forecast.api.routes import router
from occupancy_forecast.config import get_settings

settings = get_settings()
logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(
    title="Owner Occupancy Forecast API",
    description="""
    Read-only API for the owner dashboard forecast panel.

    ## Panel sections
    - **Monthly actuals**: Occupancy % and revenue for the trailing months
    - **Forecast**: Next months from a recency-weighted trend with seasonal blend
    - **Seasonal**: Average occupancy/revenue per calendar month, peak and low season
    - **Ranking**: Per-property occupancy over a 365-day year

    ## Important
    All endpoints are **GET-only**. This API does not modify any data.
    """,
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:5173",
        "http://localhost:3000",
        "http://127.0.0.1:5173",
        settings.frontend_url,  # Netlify URL in production
    ],
    allow_credentials=True,
    allow_methods=["GET"],
    allow_headers=["*"],
)

app.include_router(router, prefix="/api/v2", tags=["Occupancy Forecast"])


@app.get("/")
async def root():
    """Root endpoint with API info."""
    return {
        "name": "Owner Occupancy Forecast API",
        "version": "1.0.0",
        "docs": "/docs",
        "status": "running",
        "note": "READ-ONLY API - All operations are GET only",
        "defaults": {
            "months_back": settings.default_months_back,
            "horizon_months": settings.default_horizon_months,
        },
    }
