import logging
from typing import List

from fastapi import FastAPI, Depends, Request, Response
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from api.schemas import (
    CustomerRequest, CustomerPatchRequest, CustomerResponse,
    RoomRequest, RoomPatchRequest, RoomResponse,
    BookingRequest, BookingPatchRequest, BookingResponse,
    ReviewRequest, ReviewPatchRequest, ReviewResponse,
    HotelServiceRequest, HotelServicePatchRequest, HotelServiceResponse,
    ServiceRequestRequest, ServiceRequestPatchRequest, ServiceRequestResponse,
)
from api import converters
from application.services import (
    CustomerService, RoomService, BookingService, ReviewService,
    HotelServiceService, ServiceRequestService
)
from application.validation import ValidationEngine
from domain.enums import ErrorKind, UpsertOutcome
from domain.errors import DomainError
from domain.repositories import HotelStore
from infrastructure import config
from infrastructure.database import create_engine, init_db
from infrastructure.repositories.in_memory_repositories import build_in_memory_store
from infrastructure.repositories.sql_repositories import build_sql_store

config.configure_logging()
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Hotel Management API",
    description="Customers, rooms, bookings, reviews, hotel services and service requests",
    version="1.0.0"
)

# Initialize store
if config.DATABASE_URL:
    engine = create_engine(config.DATABASE_URL, echo=config.SQL_ECHO)
    store = build_sql_store(engine)
else:
    engine = None
    store = build_in_memory_store()
    logger.warning("DATABASE_URL is not set, using the in-memory store")


@app.on_event("startup")
async def on_startup():
    if engine is not None:
        await init_db(engine)


@app.on_event("shutdown")
async def on_shutdown():
    if engine is not None:
        await engine.dispose()


# Dependency injection
def get_store() -> HotelStore:
    return store

def get_validation_engine(store: HotelStore = Depends(get_store)) -> ValidationEngine:
    return ValidationEngine(store)

def get_customer_service(store: HotelStore = Depends(get_store)) -> CustomerService:
    return CustomerService(store.customers)

def get_room_service(store: HotelStore = Depends(get_store)) -> RoomService:
    return RoomService(store.rooms)

def get_booking_service(
    store: HotelStore = Depends(get_store),
    validator: ValidationEngine = Depends(get_validation_engine)
) -> BookingService:
    return BookingService(store.bookings, validator)

def get_review_service(
    store: HotelStore = Depends(get_store),
    validator: ValidationEngine = Depends(get_validation_engine)
) -> ReviewService:
    return ReviewService(store.reviews, validator)

def get_hotel_service_service(
    store: HotelStore = Depends(get_store),
    validator: ValidationEngine = Depends(get_validation_engine)
) -> HotelServiceService:
    return HotelServiceService(store.services, validator)

def get_service_request_service(
    store: HotelStore = Depends(get_store),
    validator: ValidationEngine = Depends(get_validation_engine)
) -> ServiceRequestService:
    return ServiceRequestService(store.service_requests, validator)

# ============================================================================
# ERROR HANDLING
# ============================================================================

STATUS_BY_KIND = {
    ErrorKind.VALIDATION: 400,
    ErrorKind.FORMAT: 400,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.INFRASTRUCTURE: 503,
}


@app.exception_handler(DomainError)
async def domain_error_handler(request: Request, exc: DomainError):
    status_code = STATUS_BY_KIND[exc.kind]
    if exc.kind == ErrorKind.INFRASTRUCTURE:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message, exc_info=exc)
        return JSONResponse(status_code=status_code, content={"detail": "Service temporarily unavailable"})
    return JSONResponse(status_code=status_code, content={"detail": exc.message})


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=400,
        content={"detail": "Invalid request data", "errors": jsonable_encoder(exc.errors())}
    )


def _upsert_status(outcome: UpsertOutcome) -> int:
    return 201 if outcome == UpsertOutcome.CREATED else 200

# ============================================================================
# HEALTH ENDPOINT
# ============================================================================

@app.get("/health", tags=["Health"])
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy", "message": "API is running"}

# ============================================================================
# CUSTOMER ENDPOINTS
# ============================================================================

@app.get("/customers", response_model=List[CustomerResponse], tags=["Customers"])
async def get_all_customers(service: CustomerService = Depends(get_customer_service)):
    """Get all customers"""
    customers = await service.get_all()
    return [converters.customer_to_response(c) for c in customers]

@app.get("/customers/{customer_id}", response_model=CustomerResponse, tags=["Customers"])
async def get_customer(customer_id: int, service: CustomerService = Depends(get_customer_service)):
    """Get customer by ID"""
    return converters.customer_to_response(await service.get(customer_id))

@app.post("/customers", response_model=CustomerResponse, status_code=201, tags=["Customers"])
async def create_customer(request: CustomerRequest, service: CustomerService = Depends(get_customer_service)):
    """Create new customer"""
    customer = await service.create(converters.customer_from_request(request))
    return converters.customer_to_response(customer)

@app.put("/customers/{customer_id}", response_model=CustomerResponse, tags=["Customers"])
async def update_customer(
    customer_id: int,
    request: CustomerRequest,
    service: CustomerService = Depends(get_customer_service)
):
    """Replace an existing customer"""
    customer = await service.update(converters.customer_from_request(request, customer_id))
    return converters.customer_to_response(customer)

@app.patch("/customers/{customer_id}", status_code=204, tags=["Customers"])
async def patch_customer(
    customer_id: int,
    request: CustomerPatchRequest,
    service: CustomerService = Depends(get_customer_service)
):
    """Update the supplied customer fields"""
    await service.patch(customer_id, converters.customer_patch_from_request(request))
    return Response(status_code=204)

@app.delete("/customers/{customer_id}", status_code=204, tags=["Customers"])
async def delete_customer(customer_id: int, service: CustomerService = Depends(get_customer_service)):
    """Delete customer"""
    await service.delete(customer_id)
    return Response(status_code=204)

# ============================================================================
# ROOM ENDPOINTS
# ============================================================================

@app.get("/rooms", response_model=List[RoomResponse], tags=["Rooms"])
async def get_all_rooms(service: RoomService = Depends(get_room_service)):
    """Get all rooms"""
    rooms = await service.get_all()
    return [converters.room_to_response(r) for r in rooms]

@app.get("/rooms/{room_id}", response_model=RoomResponse, tags=["Rooms"])
async def get_room(room_id: int, service: RoomService = Depends(get_room_service)):
    """Get room by ID"""
    return converters.room_to_response(await service.get(room_id))

@app.post("/rooms", response_model=RoomResponse, status_code=201, tags=["Rooms"])
async def create_room(request: RoomRequest, service: RoomService = Depends(get_room_service)):
    """Create new room"""
    room = await service.create(converters.room_from_request(request))
    return converters.room_to_response(room)

@app.put("/rooms/{room_id}", response_model=RoomResponse, tags=["Rooms"])
async def update_room(room_id: int, request: RoomRequest, service: RoomService = Depends(get_room_service)):
    """Replace an existing room"""
    room = await service.update(converters.room_from_request(request, room_id))
    return converters.room_to_response(room)

@app.patch("/rooms/{room_id}", status_code=204, tags=["Rooms"])
async def patch_room(room_id: int, request: RoomPatchRequest, service: RoomService = Depends(get_room_service)):
    """Update the supplied room fields"""
    await service.patch(room_id, converters.room_patch_from_request(request))
    return Response(status_code=204)

@app.delete("/rooms/{room_id}", status_code=204, tags=["Rooms"])
async def delete_room(room_id: int, service: RoomService = Depends(get_room_service)):
    """Delete room"""
    await service.delete(room_id)
    return Response(status_code=204)

# ============================================================================
# BOOKING ENDPOINTS
# ============================================================================

@app.get("/bookings", response_model=List[BookingResponse], tags=["Bookings"])
async def get_all_bookings(service: BookingService = Depends(get_booking_service)):
    """Get all bookings"""
    bookings = await service.get_all()
    return [converters.booking_to_response(b) for b in bookings]

@app.get("/bookings/{booking_id}", response_model=BookingResponse, tags=["Bookings"])
async def get_booking(booking_id: int, service: BookingService = Depends(get_booking_service)):
    """Get booking by ID"""
    return converters.booking_to_response(await service.get(booking_id))

@app.post("/bookings", response_model=BookingResponse, status_code=201, tags=["Bookings"])
async def create_booking(request: BookingRequest, service: BookingService = Depends(get_booking_service)):
    """Create new booking after checking dates, references, code and room overlap"""
    booking = await service.create(converters.booking_from_request(request))
    return converters.booking_to_response(booking)

@app.put("/bookings/{booking_id}", response_model=BookingResponse, tags=["Bookings"])
async def upsert_booking(
    booking_id: int,
    request: BookingRequest,
    response: Response,
    service: BookingService = Depends(get_booking_service)
):
    """Replace booking, or create it under this ID when missing"""
    booking, outcome = await service.upsert(converters.booking_from_request(request, booking_id))
    response.status_code = _upsert_status(outcome)
    return converters.booking_to_response(booking)

@app.patch("/bookings/{booking_id}", status_code=204, tags=["Bookings"])
async def patch_booking(
    booking_id: int,
    request: BookingPatchRequest,
    service: BookingService = Depends(get_booking_service)
):
    """Update the supplied booking fields"""
    await service.patch(booking_id, converters.booking_patch_from_request(request))
    return Response(status_code=204)

@app.delete("/bookings/{booking_id}", status_code=204, tags=["Bookings"])
async def delete_booking(booking_id: int, service: BookingService = Depends(get_booking_service)):
    """Delete booking"""
    await service.delete(booking_id)
    return Response(status_code=204)

# ============================================================================
# REVIEW ENDPOINTS
# ============================================================================

@app.get("/reviews", response_model=List[ReviewResponse], tags=["Reviews"])
async def get_all_reviews(service: ReviewService = Depends(get_review_service)):
    """Get all reviews"""
    reviews = await service.get_all()
    return [converters.review_to_response(r) for r in reviews]

@app.get("/reviews/{booking_id}", response_model=ReviewResponse, tags=["Reviews"])
async def get_review(booking_id: int, service: ReviewService = Depends(get_review_service)):
    """Get the review of a booking"""
    return converters.review_to_response(await service.get(booking_id))

@app.post("/reviews", response_model=ReviewResponse, status_code=201, tags=["Reviews"])
async def create_review(request: ReviewRequest, service: ReviewService = Depends(get_review_service)):
    """Create the review of a booking"""
    review = await service.create(converters.review_from_request(request))
    return converters.review_to_response(review)

@app.put("/reviews/{booking_id}", response_model=ReviewResponse, tags=["Reviews"])
async def upsert_review(
    booking_id: int,
    request: ReviewRequest,
    response: Response,
    service: ReviewService = Depends(get_review_service)
):
    """Replace the review of a booking, or create it when missing"""
    review, outcome = await service.upsert(converters.review_from_request(request, booking_id))
    response.status_code = _upsert_status(outcome)
    return converters.review_to_response(review)

@app.patch("/reviews/{booking_id}", status_code=204, tags=["Reviews"])
async def patch_review(
    booking_id: int,
    request: ReviewPatchRequest,
    service: ReviewService = Depends(get_review_service)
):
    """Update the supplied review fields"""
    await service.patch(booking_id, converters.review_patch_from_request(request))
    return Response(status_code=204)

@app.delete("/reviews/{booking_id}", status_code=204, tags=["Reviews"])
async def delete_review(booking_id: int, service: ReviewService = Depends(get_review_service)):
    """Delete the review of a booking"""
    await service.delete(booking_id)
    return Response(status_code=204)

# ============================================================================
# HOTEL SERVICE ENDPOINTS
# ============================================================================

@app.get("/services", response_model=List[HotelServiceResponse], tags=["Hotel Services"])
async def get_all_hotel_services(service: HotelServiceService = Depends(get_hotel_service_service)):
    """Get all hotel services"""
    hotel_services = await service.get_all()
    return [converters.hotel_service_to_response(s) for s in hotel_services]

@app.get("/services/{service_id}", response_model=HotelServiceResponse, tags=["Hotel Services"])
async def get_hotel_service(service_id: int, service: HotelServiceService = Depends(get_hotel_service_service)):
    """Get hotel service by ID"""
    return converters.hotel_service_to_response(await service.get(service_id))

@app.post("/services", response_model=HotelServiceResponse, status_code=201, tags=["Hotel Services"])
async def create_hotel_service(
    request: HotelServiceRequest,
    service: HotelServiceService = Depends(get_hotel_service_service)
):
    """Create new hotel service, one per type"""
    hotel_service = await service.create(converters.hotel_service_from_request(request))
    return converters.hotel_service_to_response(hotel_service)

@app.put("/services/{service_id}", response_model=HotelServiceResponse, tags=["Hotel Services"])
async def upsert_hotel_service(
    service_id: int,
    request: HotelServiceRequest,
    response: Response,
    service: HotelServiceService = Depends(get_hotel_service_service)
):
    """Replace hotel service, or create it under this ID when missing"""
    hotel_service, outcome = await service.upsert(converters.hotel_service_from_request(request, service_id))
    response.status_code = _upsert_status(outcome)
    return converters.hotel_service_to_response(hotel_service)

@app.patch("/services/{service_id}", status_code=204, tags=["Hotel Services"])
async def patch_hotel_service(
    service_id: int,
    request: HotelServicePatchRequest,
    service: HotelServiceService = Depends(get_hotel_service_service)
):
    """Update the supplied hotel service fields"""
    await service.patch(service_id, converters.hotel_service_patch_from_request(request))
    return Response(status_code=204)

@app.delete("/services/{service_id}", status_code=204, tags=["Hotel Services"])
async def delete_hotel_service(service_id: int, service: HotelServiceService = Depends(get_hotel_service_service)):
    """Delete hotel service"""
    await service.delete(service_id)
    return Response(status_code=204)

# ============================================================================
# SERVICE REQUEST ENDPOINTS
# ============================================================================

@app.get("/service-requests", response_model=List[ServiceRequestResponse], tags=["Service Requests"])
async def get_all_service_requests(service: ServiceRequestService = Depends(get_service_request_service)):
    """Get all service requests"""
    requests = await service.get_all()
    return [converters.service_request_to_response(r) for r in requests]

@app.get("/service-requests/{request_id}", response_model=ServiceRequestResponse, tags=["Service Requests"])
async def get_service_request(
    request_id: int,
    service: ServiceRequestService = Depends(get_service_request_service)
):
    """Get service request by ID"""
    return converters.service_request_to_response(await service.get(request_id))

@app.post("/service-requests", response_model=ServiceRequestResponse, status_code=201, tags=["Service Requests"])
async def create_service_request(
    request: ServiceRequestRequest,
    service: ServiceRequestService = Depends(get_service_request_service)
):
    """Create new service request within one of the customer's bookings"""
    service_request = await service.create(converters.service_request_from_request(request))
    return converters.service_request_to_response(service_request)

@app.put("/service-requests/{request_id}", response_model=ServiceRequestResponse, tags=["Service Requests"])
async def upsert_service_request(
    request_id: int,
    request: ServiceRequestRequest,
    response: Response,
    service: ServiceRequestService = Depends(get_service_request_service)
):
    """Replace service request, or create it under this ID when missing"""
    service_request, outcome = await service.upsert(converters.service_request_from_request(request, request_id))
    response.status_code = _upsert_status(outcome)
    return converters.service_request_to_response(service_request)

@app.patch("/service-requests/{request_id}", status_code=204, tags=["Service Requests"])
async def patch_service_request(
    request_id: int,
    request: ServiceRequestPatchRequest,
    service: ServiceRequestService = Depends(get_service_request_service)
):
    """Update the supplied service request fields"""
    await service.patch(request_id, converters.service_request_patch_from_request(request))
    return Response(status_code=204)

@app.delete("/service-requests/{request_id}", status_code=204, tags=["Service Requests"])
async def delete_service_request(
    request_id: int,
    service: ServiceRequestService = Depends(get_service_request_service)
):
    """Delete service request"""
    await service.delete(request_id)
    return Response(status_code=204)

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=config.SERVER_HOST, port=config.SERVER_PORT)
