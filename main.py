import logging
import math
import re
import sys
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from bson import ObjectId
from fastapi import Depends, FastAPI, File, Form, HTTPException, Request, UploadFile
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from pydantic import BaseModel, ValidationError
from pymongo import ReturnDocument
from pymongo.errors import DuplicateKeyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from bookings import BookingEdit, BookingRequest, create_booking
from config import get_allowed_origins, get_port, get_seed_admin, validate_environment
from database import create_document, db, get_collection_name, get_documents, to_object_id
from pricing import describe_table
from schemas import Admin, Booking, BookingStatus, ContactMessage, Provider, Role, Tourist
from security import (
    MIN_PASSWORD_LENGTH,
    TokenData,
    create_token,
    hash_password,
    is_valid_email,
    require_admin,
    require_tourist,
    verify_password,
)
from storage import MAX_PHOTOS, ImageUpload, LocalDiskStorage, UploadStorage, discard, read_images, save_all

logging.basicConfig(level=logging.INFO, format="[%(asctime)s] %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger(__name__)

app = FastAPI(title="Safari & Village Experiences API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_allowed_origins(),
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)

storage = LocalDiskStorage()
storage.ensure_root()

app.mount("/Uploads", StaticFiles(directory=storage.root), name="uploads")


SECURITY_HEADERS = {"X-Content-Type-Options": "nosniff", "X-Frame-Options": "DENY"}


@app.middleware("http")
async def security_headers(request: Request, call_next):
    response = await call_next(request)
    response.headers.update(SECURITY_HEADERS)
    return response


# -------------------- Error responses --------------------
@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content={"error": exc.detail}, headers=exc.headers)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    logger.warning(f"Invalid request on {request.method} {request.url.path}: {exc.errors()}")
    return JSONResponse(
        status_code=400,
        content={"error": "Invalid request", "details": jsonable_encoder(exc.errors())},
    )


@app.exception_handler(ValidationError)
async def data_validation_handler(request: Request, exc: ValidationError):
    logger.warning(f"Invalid data on {request.method} {request.url.path}: {exc.errors()}")
    return JSONResponse(
        status_code=400,
        content={"error": "Invalid data", "details": jsonable_encoder(exc.errors(include_url=False))},
    )


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.error(f"Server error on {request.method} {request.url.path}: {exc}", exc_info=exc)
    # 500s bypass the middleware stack
    headers = dict(SECURITY_HEADERS)
    origin = request.headers.get("origin")
    if origin and origin in get_allowed_origins():
        headers["Access-Control-Allow-Origin"] = origin
        headers["Access-Control-Allow-Credentials"] = "true"
        headers["Vary"] = "Origin"
    return JSONResponse(
        status_code=500,
        content={"error": "Internal server error", "details": str(exc)},
        headers=headers,
    )


# -------------------- Helpers --------------------
def get_storage() -> UploadStorage:
    return storage


def collection(model_cls):
    if db is None:
        raise HTTPException(status_code=500, detail="Database not available")
    return db[get_collection_name(model_cls)]


def serialize_doc(doc: Dict[str, Any]) -> Dict[str, Any]:
    if not doc:
        return doc
    doc = dict(doc)
    doc["id"] = str(doc.pop("_id"))
    doc.pop("password", None)
    for k, v in list(doc.items()):
        if isinstance(v, ObjectId):
            doc[k] = str(v)
        elif isinstance(v, datetime):
            doc[k] = v.isoformat()
    return doc


def now_utc() -> datetime:
    return datetime.now(timezone.utc)


def check_password(password: str) -> None:
    if len(password) < MIN_PASSWORD_LENGTH:
        logger.warning(f"Password too short: {len(password)} characters")
        raise HTTPException(status_code=400, detail=f"Password must be at least {MIN_PASSWORD_LENGTH} characters")


def check_email(email: str) -> None:
    if not is_valid_email(email):
        logger.warning(f"Invalid email format: {email}")
        raise HTTPException(status_code=400, detail="Invalid email format")


def check_email_free(model_cls, email: str, exclude_id: Optional[ObjectId] = None) -> None:
    query: Dict[str, Any] = {"email": email}
    if exclude_id is not None:
        query["_id"] = {"$ne": exclude_id}
    if collection(model_cls).find_one(query, {"_id": 1}):
        logger.warning(f"Email already exists: {email}")
        raise HTTPException(status_code=400, detail="Email already exists")


def parse_price(value: str) -> float:
    try:
        price = float(value)
    except (TypeError, ValueError):
        price = float("nan")
    if not math.isfinite(price) or price <= 0:
        logger.warning(f"Invalid price: {value}")
        raise HTTPException(status_code=400, detail="Price must be a positive number")
    return price


def read_profile_picture(uploads: Optional[List[UploadFile]]) -> List[ImageUpload]:
    images = read_images(uploads)
    if len(images) > 1:
        raise HTTPException(status_code=400, detail="Only one profile picture is allowed")
    return images


def auth_response(user_id: str, role: Role, message: str) -> Dict[str, Any]:
    return {"token": create_token(user_id, role), "role": role.value, "message": message}


def ensure_admin():
    """Seed the first admin account from ADMIN_USERNAME / ADMIN_PASSWORD."""
    if db is None:
        return
    username, password = get_seed_admin()
    if not (username and password):
        return
    if db[get_collection_name(Admin)].find_one({}, {"_id": 1}):
        return
    create_document(get_collection_name(Admin), Admin(username=username, password=hash_password(password)))
    logger.info(f"Seeded admin account: {username}")


ensure_admin()


# -------------------- Root & Health --------------------
@app.get("/")
def read_root():
    return {"message": "Safari & Village Experiences API is running"}


@app.get("/health")
@app.get("/api/health")
def health():
    return {"status": "OK", "message": "Backend is running"}


# -------------------- Auth --------------------
class LoginRequest(BaseModel):
    email: Optional[str] = None
    username: Optional[str] = None
    password: Optional[str] = None
    role: Optional[str] = None


class TouristSignup(BaseModel):
    fullName: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
    country: Optional[str] = None


@app.post("/api/auth/login")
def login(payload: LoginRequest):
    identifier = payload.email or payload.username
    logger.info(f"Login attempt: {identifier} as {payload.role}")
    if not identifier or not payload.password or not payload.role:
        raise HTTPException(status_code=400, detail="Email, password, and role are required")
    try:
        role = Role(payload.role)
    except ValueError:
        logger.warning(f"Invalid role: {payload.role}")
        raise HTTPException(status_code=400, detail="Invalid role")

    if role == Role.ADMIN:
        identifier = payload.username or payload.email
        label = "username"
        user = collection(Admin).find_one({"username": identifier})
    elif role == Role.PROVIDER:
        label = "email"
        user = collection(Provider).find_one({"email": identifier})
    else:
        label = "email"
        user = collection(Tourist).find_one({"email": identifier})

    if not user:
        logger.warning(f"No {role.value} found with {label}: {identifier}")
        raise HTTPException(status_code=400, detail=f"No {role.value} found with this {label}")
    if not verify_password(payload.password, user.get("password", "")):
        logger.warning(f"Invalid credentials for {identifier}")
        raise HTTPException(status_code=400, detail="Invalid credentials")
    if role == Role.PROVIDER and not user.get("approved"):
        logger.warning(f"Provider not approved: {identifier}")
        raise HTTPException(status_code=403, detail="Provider not approved yet")

    logger.info(f"Login successful: {user['_id']} as {role.value}")
    return auth_response(str(user["_id"]), role, "Login successful")


def add_tourist(payload: TouristSignup) -> str:
    if not (payload.fullName and payload.email and payload.password and payload.country):
        raise HTTPException(status_code=400, detail="All fields are required")
    check_email(payload.email)
    check_password(payload.password)
    check_email_free(Tourist, payload.email)
    tourist = Tourist(
        fullName=payload.fullName,
        email=payload.email,
        password=hash_password(payload.password),
        country=payload.country,
    )
    try:
        new_id = create_document(get_collection_name(Tourist), tourist)
    except DuplicateKeyError:
        raise HTTPException(status_code=400, detail="Email already exists")
    logger.info(f"Tourist created: {new_id} ({payload.email})")
    return new_id


@app.post("/api/auth/tourist/signup", status_code=201)
def tourist_signup(payload: TouristSignup):
    new_id = add_tourist(payload)
    return auth_response(new_id, Role.TOURIST, "Tourist registered successfully")


PROVIDER_FIELDS = ["serviceName", "fullName", "email", "contact", "category", "location", "price", "description", "password"]


def add_provider(
    fields: Dict[str, Optional[str]],
    profile_pictures: Optional[List[UploadFile]],
    photos: Optional[List[UploadFile]],
    store: UploadStorage,
    approved: bool,
    require_files: bool,
) -> str:
    """Validate and store a provider. Nothing is written to disk until every check passes."""
    if not all(fields.get(name) for name in PROVIDER_FIELDS):
        raise HTTPException(status_code=400, detail="All fields are required")
    check_email(fields["email"])
    check_password(fields["password"])
    price = parse_price(fields["price"])

    profile_images = read_profile_picture(profile_pictures)
    photo_images = read_images(photos)
    if require_files and (len(profile_images) != 1 or not photo_images):
        raise HTTPException(status_code=400, detail="Profile picture and at least one photo are required")
    if len(photo_images) > MAX_PHOTOS:
        raise HTTPException(status_code=400, detail=f"At most {MAX_PHOTOS} photos are allowed")
    check_email_free(Provider, fields["email"])

    password_hash = hash_password(fields["password"])
    written: List[str] = []
    try:
        profile_paths = save_all(store, profile_images, written)
        photo_paths = save_all(store, photo_images, written)
        provider = Provider(
            serviceName=fields["serviceName"],
            fullName=fields["fullName"],
            email=fields["email"],
            contact=fields["contact"],
            category=fields["category"],
            location=fields["location"],
            price=price,
            description=fields["description"],
            password=password_hash,
            approved=approved,
            profilePicture=profile_paths[0] if profile_paths else None,
            photos=photo_paths,
        )
        new_id = create_document(get_collection_name(Provider), provider)
    except DuplicateKeyError:
        discard(store, written)
        raise HTTPException(status_code=400, detail="Email already exists")
    except Exception:
        discard(store, written)
        raise
    logger.info(f"Provider created: {new_id} ({fields['email']}, approved={approved})")
    return new_id


@app.post("/api/auth/provider/signup", status_code=201)
def provider_signup(
    serviceName: Optional[str] = Form(None),
    fullName: Optional[str] = Form(None),
    email: Optional[str] = Form(None),
    contact: Optional[str] = Form(None),
    category: Optional[str] = Form(None),
    location: Optional[str] = Form(None),
    price: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    password: Optional[str] = Form(None),
    profilePicture: Optional[List[UploadFile]] = File(None),
    photos: Optional[List[UploadFile]] = File(None),
    store: UploadStorage = Depends(get_storage),
):
    fields = {
        "serviceName": serviceName, "fullName": fullName, "email": email, "contact": contact,
        "category": category, "location": location, "price": price, "description": description,
        "password": password,
    }
    new_id = add_provider(fields, profilePicture, photos, store, approved=False, require_files=True)
    return auth_response(new_id, Role.PROVIDER, "Provider registered successfully")


# -------------------- Public catalogue --------------------
@app.get("/api/providers")
def list_approved_providers(category: Optional[str] = None, location: Optional[str] = None):
    filter_q: Dict[str, Any] = {"approved": True}
    if category:
        filter_q["category"] = {"$regex": f"^{re.escape(category)}$", "$options": "i"}
    if location:
        filter_q["location"] = {"$regex": re.escape(location), "$options": "i"}
    docs = get_documents(get_collection_name(Provider), filter_q)
    return [serialize_doc(d) for d in docs]


@app.get("/api/providers/{provider_id}")
def get_provider(provider_id: str):
    doc = collection(Provider).find_one({"_id": to_object_id(provider_id, "Provider"), "approved": True})
    if not doc:
        raise HTTPException(status_code=404, detail="Provider not found")
    return serialize_doc(doc)


@app.get("/api/products")
def list_products():
    return describe_table()


# -------------------- Tourist bookings --------------------
@app.post("/api/bookings", status_code=201)
def book(payload: BookingRequest, user: TokenData = Depends(require_tourist)):
    payload.touristId = user.id
    doc = create_booking(db, payload)
    return {"message": "Booking created", "booking": serialize_doc(doc)}


@app.get("/api/bookings")
def my_bookings(user: TokenData = Depends(require_tourist)):
    docs = get_documents(
        get_collection_name(Booking),
        {"touristId": to_object_id(user.id, "Tourist")},
        sort=[("created_at", -1)],
    )
    return [serialize_doc(d) for d in docs]


# -------------------- Contact --------------------
class ContactRequest(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    message: Optional[str] = None
    phone: Optional[str] = None


@app.post("/api/contact", status_code=201)
def submit_contact(payload: ContactRequest):
    if not (payload.name and payload.email and payload.message):
        logger.warning("Missing required fields in contact message")
        raise HTTPException(status_code=400, detail="All fields are required")
    check_email(payload.email)
    message = ContactMessage(name=payload.name, email=payload.email, message=payload.message, phone=payload.phone)
    new_id = create_document(get_collection_name(ContactMessage), message)
    logger.info(f"Contact message saved: {new_id}")
    return {"message": "Contact message submitted", "id": new_id}


# -------------------- Admin: providers --------------------
@app.get("/api/admin/pending-providers")
def list_pending_providers(_: TokenData = Depends(require_admin)):
    docs = get_documents(get_collection_name(Provider), {"approved": False})
    logger.info(f"Fetched {len(docs)} pending providers")
    return [serialize_doc(d) for d in docs]


@app.get("/api/admin/providers")
def list_providers(_: TokenData = Depends(require_admin)):
    docs = get_documents(get_collection_name(Provider))
    logger.info(f"Fetched {len(docs)} providers")
    return [serialize_doc(d) for d in docs]


@app.post("/api/admin/providers", status_code=201)
def admin_add_provider(
    serviceName: Optional[str] = Form(None),
    fullName: Optional[str] = Form(None),
    email: Optional[str] = Form(None),
    contact: Optional[str] = Form(None),
    category: Optional[str] = Form(None),
    location: Optional[str] = Form(None),
    price: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    password: Optional[str] = Form(None),
    approved: bool = Form(True),
    profilePicture: Optional[List[UploadFile]] = File(None),
    photos: Optional[List[UploadFile]] = File(None),
    store: UploadStorage = Depends(get_storage),
    _: TokenData = Depends(require_admin),
):
    fields = {
        "serviceName": serviceName, "fullName": fullName, "email": email, "contact": contact,
        "category": category, "location": location, "price": price, "description": description,
        "password": password,
    }
    new_id = add_provider(fields, profilePicture, photos, store, approved=approved, require_files=False)
    doc = collection(Provider).find_one({"_id": ObjectId(new_id)})
    return {"message": "Provider added", "provider": serialize_doc(doc)}


@app.put("/api/admin/providers/{provider_id}")
def admin_update_provider(
    provider_id: str,
    serviceName: Optional[str] = Form(None),
    fullName: Optional[str] = Form(None),
    email: Optional[str] = Form(None),
    contact: Optional[str] = Form(None),
    category: Optional[str] = Form(None),
    location: Optional[str] = Form(None),
    price: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    password: Optional[str] = Form(None),
    approved: Optional[bool] = Form(None),
    profilePicture: Optional[List[UploadFile]] = File(None),
    photos: Optional[List[UploadFile]] = File(None),
    store: UploadStorage = Depends(get_storage),
    _: TokenData = Depends(require_admin),
):
    oid = to_object_id(provider_id, "Provider")
    col = collection(Provider)
    existing = col.find_one({"_id": oid})
    if not existing:
        raise HTTPException(status_code=404, detail="Provider not found")

    supplied = {
        "serviceName": serviceName, "fullName": fullName, "contact": contact, "category": category,
        "location": location, "description": description,
    }
    update: Dict[str, Any] = {k: v for k, v in supplied.items() if v}
    if email:
        check_email(email)
        check_email_free(Provider, email, exclude_id=oid)
        update["email"] = email
    if price:
        update["price"] = parse_price(price)
    if password:
        check_password(password)
        update["password"] = hash_password(password)
    if approved is not None:
        update["approved"] = approved

    profile_images = read_profile_picture(profilePicture)
    photo_images = read_images(photos)
    if len(photo_images) > MAX_PHOTOS:
        raise HTTPException(status_code=400, detail=f"At most {MAX_PHOTOS} photos are allowed")

    replaced: List[str] = []
    written: List[str] = []
    try:
        if profile_images:
            update["profilePicture"] = save_all(store, profile_images, written)[0]
            if existing.get("profilePicture"):
                replaced.append(existing["profilePicture"])
        if photo_images:
            update["photos"] = save_all(store, photo_images, written)
            replaced.extend(existing.get("photos") or [])
        update["updated_at"] = now_utc()
        doc = col.find_one_and_update({"_id": oid}, {"$set": update}, return_document=ReturnDocument.AFTER)
    except DuplicateKeyError:
        discard(store, written)
        raise HTTPException(status_code=400, detail="Email already exists")
    except Exception:
        discard(store, written)
        raise
    if not doc:
        discard(store, written)
        raise HTTPException(status_code=404, detail="Provider not found")
    discard(store, replaced)
    logger.info(f"Provider updated: {provider_id}")
    return {"message": "Provider updated", "provider": serialize_doc(doc)}


@app.put("/api/admin/providers/{provider_id}/approve")
def approve_provider(provider_id: str, _: TokenData = Depends(require_admin)):
    doc = collection(Provider).find_one_and_update(
        {"_id": to_object_id(provider_id, "Provider")},
        {"$set": {"approved": True, "updated_at": now_utc()}},
        return_document=ReturnDocument.AFTER,
    )
    if not doc:
        raise HTTPException(status_code=404, detail="Provider not found")
    logger.info(f"Provider approved: {provider_id}")
    return {"message": "Provider approved", "provider": serialize_doc(doc)}


@app.delete("/api/admin/providers/{provider_id}")
def delete_provider(
    provider_id: str,
    store: UploadStorage = Depends(get_storage),
    _: TokenData = Depends(require_admin),
):
    doc = collection(Provider).find_one_and_delete({"_id": to_object_id(provider_id, "Provider")})
    if not doc:
        raise HTTPException(status_code=404, detail="Provider not found")
    files = [doc["profilePicture"]] if doc.get("profilePicture") else []
    discard(store, files + (doc.get("photos") or []))
    logger.info(f"Provider deleted: {provider_id}")
    return {"message": "Provider deleted"}


# -------------------- Admin: tourists --------------------
class TouristUpdate(BaseModel):
    fullName: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
    country: Optional[str] = None


@app.get("/api/admin/tourists")
def list_tourists(_: TokenData = Depends(require_admin)):
    docs = get_documents(get_collection_name(Tourist))
    logger.info(f"Fetched {len(docs)} tourists")
    return [serialize_doc(d) for d in docs]


@app.post("/api/admin/tourists", status_code=201)
def admin_add_tourist(payload: TouristSignup, _: TokenData = Depends(require_admin)):
    new_id = add_tourist(payload)
    doc = collection(Tourist).find_one({"_id": ObjectId(new_id)})
    return {"message": "Tourist added", "tourist": serialize_doc(doc)}


@app.put("/api/admin/tourists/{tourist_id}")
def admin_update_tourist(tourist_id: str, payload: TouristUpdate, _: TokenData = Depends(require_admin)):
    oid = to_object_id(tourist_id, "Tourist")
    update: Dict[str, Any] = payload.model_dump(exclude_none=True)
    if "email" in update:
        check_email(update["email"])
        check_email_free(Tourist, update["email"], exclude_id=oid)
    if "password" in update:
        check_password(update["password"])
        update["password"] = hash_password(update["password"])
    update["updated_at"] = now_utc()
    try:
        doc = collection(Tourist).find_one_and_update(
            {"_id": oid}, {"$set": update}, return_document=ReturnDocument.AFTER
        )
    except DuplicateKeyError:
        raise HTTPException(status_code=400, detail="Email already exists")
    if not doc:
        raise HTTPException(status_code=404, detail="Tourist not found")
    logger.info(f"Tourist updated: {tourist_id}")
    return {"message": "Tourist updated", "tourist": serialize_doc(doc)}


@app.delete("/api/admin/tourists/{tourist_id}")
def admin_delete_tourist(tourist_id: str, _: TokenData = Depends(require_admin)):
    res = collection(Tourist).delete_one({"_id": to_object_id(tourist_id, "Tourist")})
    if res.deleted_count == 0:
        raise HTTPException(status_code=404, detail="Tourist not found")
    logger.info(f"Tourist deleted: {tourist_id}")
    return {"message": "Tourist deleted"}


# -------------------- Admin: bookings --------------------
@app.get("/api/admin/bookings/admin")
def admin_list_bookings(status: Optional[BookingStatus] = None, _: TokenData = Depends(require_admin)):
    filter_q = {"status": status.value} if status else {}
    docs = get_documents(get_collection_name(Booking), filter_q, sort=[("created_at", -1)])
    logger.info(f"Fetched {len(docs)} bookings")
    return [serialize_doc(d) for d in docs]


@app.post("/api/admin/bookings/admin", status_code=201)
def admin_create_booking(payload: BookingRequest, _: TokenData = Depends(require_admin)):
    doc = create_booking(db, payload)
    return {"message": "Booking created", "booking": serialize_doc(doc)}


@app.put("/api/admin/bookings/admin/{booking_id}")
def admin_edit_booking(booking_id: str, payload: BookingEdit, _: TokenData = Depends(require_admin)):
    update = payload.to_update()
    update["updated_at"] = now_utc()
    doc = collection(Booking).find_one_and_update(
        {"_id": to_object_id(booking_id, "Booking")},
        {"$set": update},
        return_document=ReturnDocument.AFTER,
    )
    if not doc:
        raise HTTPException(status_code=404, detail="Booking not found")
    logger.info(f"Booking edited: {booking_id}")
    return {"message": "Booking updated", "booking": serialize_doc(doc)}


@app.put("/api/admin/bookings/admin/{booking_id}/approve")
def admin_approve_booking(booking_id: str, _: TokenData = Depends(require_admin)):
    doc = collection(Booking).find_one_and_update(
        {"_id": to_object_id(booking_id, "Booking")},
        {"$set": {"status": BookingStatus.CONFIRMED.value, "updated_at": now_utc()}},
        return_document=ReturnDocument.AFTER,
    )
    if not doc:
        raise HTTPException(status_code=404, detail="Booking not found")
    logger.info(f"Booking approved: {booking_id}")
    return {"message": "Booking approved", "booking": serialize_doc(doc)}


@app.delete("/api/admin/bookings/admin/{booking_id}")
def admin_delete_booking(booking_id: str, _: TokenData = Depends(require_admin)):
    res = collection(Booking).delete_one({"_id": to_object_id(booking_id, "Booking")})
    if res.deleted_count == 0:
        raise HTTPException(status_code=404, detail="Booking not found")
    logger.info(f"Booking deleted: {booking_id}")
    return {"message": "Booking deleted"}


# -------------------- Admin: contact messages --------------------
@app.get("/api/admin/contact-messages")
def list_contact_messages(_: TokenData = Depends(require_admin)):
    docs = get_documents(get_collection_name(ContactMessage), sort=[("created_at", -1)])
    logger.info(f"Fetched {len(docs)} contact messages")
    return [serialize_doc(d) for d in docs]


@app.delete("/api/admin/contact-messages/{message_id}")
def delete_contact_message(message_id: str, _: TokenData = Depends(require_admin)):
    res = collection(ContactMessage).delete_one({"_id": to_object_id(message_id, "Contact Message")})
    if res.deleted_count == 0:
        raise HTTPException(status_code=404, detail="Contact message not found")
    logger.info(f"Contact message deleted: {message_id}")
    return {"message": "Contact message deleted"}


if __name__ == "__main__":
    import uvicorn

    missing = validate_environment()
    if missing:
        logger.error(f"Missing environment variables: {', '.join(missing)}")
        sys.exit(1)
    uvicorn.run(app, host="0.0.0.0", port=get_port())
