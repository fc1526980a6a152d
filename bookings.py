import datetime
import logging
from typing import Any, Dict, Optional

from bson import ObjectId
from fastapi import HTTPException
from pydantic import BaseModel, Field

from database import create_document, get_collection_name, to_object_id
from pricing import PricingError, product_total, provider_total
from schemas import Booking, BookingStatus, Provider, Tourist

logger = logging.getLogger(__name__)


class BookingRequest(BaseModel):
    # Everything optional so the checks in create_booking run in a fixed order
    touristId: Optional[str] = None
    providerId: Optional[str] = None
    productType: Optional[str] = None
    date: Optional[datetime.date] = None
    time: Optional[str] = None
    adults: Optional[int] = Field(None, ge=0)
    children: int = Field(0, ge=0)
    specialNotes: Optional[str] = None
    status: BookingStatus = BookingStatus.PENDING


class BookingEdit(BaseModel):
    date: Optional[datetime.date] = None
    time: Optional[str] = None
    status: Optional[BookingStatus] = None
    specialNotes: Optional[str] = None
    totalPrice: Optional[float] = Field(None, ge=0)

    def to_update(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True, mode="json")


def create_booking(db, payload: BookingRequest) -> Dict[str, Any]:
    """Validate a booking request, price it and store it.

    Returns the stored document. Checks run in order and the first failure
    is reported: required fields, single pricing source, id shapes, tourist
    existence, then the pricing source itself.
    """
    if not payload.touristId or payload.date is None or not payload.time or payload.adults is None:
        raise HTTPException(status_code=400, detail="Tourist ID, date, time, and adults are required")
    if payload.providerId and payload.productType:
        raise HTTPException(status_code=400, detail="Provide either providerId or productType, not both")

    provider_oid = to_object_id(payload.providerId, "Provider") if payload.providerId else None
    tourist_oid = to_object_id(payload.touristId, "Tourist")

    if not db[get_collection_name(Tourist)].find_one({"_id": tourist_oid}, {"_id": 1}):
        raise HTTPException(status_code=404, detail="Tourist not found")

    if provider_oid is not None:
        provider = db[get_collection_name(Provider)].find_one({"_id": provider_oid, "approved": True}, {"price": 1})
        if not provider:
            # unapproved providers are not bookable
            raise HTTPException(status_code=404, detail="Provider not found")
        total = provider_total(float(provider["price"]), payload.adults, payload.children)
    elif payload.productType:
        try:
            total = product_total(payload.productType, payload.adults, payload.children)
        except PricingError as e:
            logger.warning(f"Pricing rejected for {payload.productType}: {e}")
            raise HTTPException(status_code=400, detail=str(e))
    else:
        raise HTTPException(status_code=400, detail="Either providerId or productType is required")

    booking = Booking(
        touristId=tourist_oid,
        providerId=provider_oid,
        productType=None if provider_oid is not None else payload.productType,
        date=payload.date.isoformat(),
        time=payload.time,
        adults=payload.adults,
        children=payload.children,
        status=payload.status,
        totalPrice=total,
        specialNotes=payload.specialNotes,
    )
    new_id = create_document(get_collection_name(Booking), booking)
    logger.info(f"Booking created: {new_id} (totalPrice={total})")
    return db[get_collection_name(Booking)].find_one({"_id": ObjectId(new_id)})
