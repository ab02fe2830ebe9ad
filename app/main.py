import logging
from datetime import datetime
from pathlib import Path
from typing import List

from fastapi import FastAPI, Depends, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, JSONResponse
from fastapi.templating import Jinja2Templates
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .config import settings
from .database import get_db, init_db
from .reservation_service import ReservationService
from .schemas import (
    Booking,
    BookingCreate,
    BookingResponse,
    ErrorResponse,
    RestaurantAvailability,
    SearchRequest,
)

logger = logging.getLogger(__name__)

app = FastAPI(
    title="Reserve.PH",
    description="Search restaurants with open capacity and book a table",
    version="1.0.0"
)

# The browser client may be hosted on a different origin
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Templates for web interface
templates = Jinja2Templates(directory=str(Path(__file__).parent / "templates"))

@app.on_event("startup")
async def startup_event():
    """Create missing tables on startup"""
    init_db()

@app.get("/", response_class=HTMLResponse)
async def home(request: Request):
    """Search, booking and dashboard page"""
    return templates.TemplateResponse(request, "index.html", {"api_url": ""})

@app.post(
    "/api/search",
    response_model=List[RestaurantAvailability],
    responses={500: {"model": ErrorResponse}},
)
def search(criteria: SearchRequest, db: Session = Depends(get_db)):
    """Restaurants that can seat the party at the requested date and time"""
    service = ReservationService(db)
    try:
        return service.search_available(criteria.date, criteria.time, criteria.party_size)
    except SQLAlchemyError as e:
        logger.error("Search API Error: %s", e)
        return JSONResponse(status_code=500, content={"error": "Database query failed."})

@app.post(
    "/api/book",
    status_code=201,
    response_model=BookingResponse,
    responses={500: {"model": ErrorResponse}},
)
def book(booking_data: BookingCreate, db: Session = Depends(get_db)):
    """Create a confirmed booking. Payment is assumed to have succeeded."""
    service = ReservationService(db)
    try:
        booking = service.create_booking(
            restaurant_id=booking_data.restaurant_id,
            customer_name=booking_data.customer_name,
            party_size=booking_data.party_size,
            booking_time=booking_data.booking_time,
            deposit=booking_data.deposit,
        )
    except SQLAlchemyError as e:
        logger.error("Booking API Error: %s", e)
        return JSONResponse(status_code=500, content={"error": "Failed to create booking."})

    return BookingResponse(message="Booking successful!", booking=Booking.model_validate(booking))

@app.get("/api/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy", "timestamp": datetime.now().isoformat()}
