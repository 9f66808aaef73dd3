# main.py (JSON API behind the Streamlit front end)
from dotenv import load_dotenv
load_dotenv(override=True)  # <- make .env win over shell env

import logging
from typing import List, Optional

import uvicorn
from fastapi import Depends, FastAPI, Header, HTTPException, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from managers import (
    auth_manager, booking_manager, checkout_manager, crm_manager, dashboard_manager,
    inventory_manager, menu_manager, ordering_manager, staff_manager,
)
from models import AuthUser, BookingStatus, CustomerDetails, MenuCategory, OrderMethod, OrderStatus
from state import SessionModel
from utils import db, llm
from utils.config import CORS_ALLOW_ORIGINS
from utils.errors import Forbidden, NotFound, StoreError, ValidationFailed

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger(__name__)

# ---- app ---------------------------------------------------
app = FastAPI(title="Cénit")

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ALLOW_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(ValidationFailed)
def _bad_request(request: Request, exc: ValidationFailed):
    return JSONResponse(status_code=400, content={"detail": str(exc)})


@app.exception_handler(NotFound)
def _not_found(request: Request, exc: NotFound):
    return JSONResponse(status_code=404, content={"detail": str(exc)})


@app.exception_handler(Forbidden)
def _forbidden(request: Request, exc: Forbidden):
    return JSONResponse(status_code=403, content={"detail": str(exc)})


@app.exception_handler(StoreError)
def _store_down(request: Request, exc: StoreError):
    logger.error("store error: %s", exc)
    return JSONResponse(status_code=503, content={"detail": "Storage unavailable"})


# ---- session dependencies ----------------------------------
class Caller(BaseModel):
    session: SessionModel
    user: AuthUser


def get_caller(x_session_id: Optional[str] = Header(None)) -> Caller:
    session = db.load_session(x_session_id) if x_session_id else None
    user = auth_manager.current_user(x_session_id) if session else None
    if session is None or user is None:
        raise HTTPException(status_code=401, detail="Not logged in")
    return Caller(session=session, user=user)


def staff_only(caller: Caller = Depends(get_caller)) -> Caller:
    if caller.user.role == "CUSTOMER":
        raise HTTPException(status_code=403, detail="Staff only")
    return caller


def admin_only(caller: Caller = Depends(get_caller)) -> Caller:
    if caller.user.role != "ADMIN":
        raise HTTPException(status_code=403, detail="Admin only")
    return caller


def _public(user: AuthUser) -> dict:
    return {"id": user.id, "name": user.name, "role": user.role}


# ---- request bodies ----------------------------------------
class LoginRequest(BaseModel):
    id: str
    password: str


class RegisterRequest(BaseModel):
    name: str
    phone: str
    password: str


class WaiterRequest(BaseModel):
    id: str
    password: str
    name: str


class MenuItemRequest(BaseModel):
    name: str
    price: float
    category: MenuCategory = "Main"
    image: Optional[str] = None
    description: Optional[str] = None


class CartAddRequest(BaseModel):
    item_id: str


class CartQtyRequest(BaseModel):
    delta: int


class CheckoutRequest(BaseModel):
    table: Optional[str] = None
    method: Optional[OrderMethod] = None
    customer: Optional[CustomerDetails] = None


class StatusRequest(BaseModel):
    status: OrderStatus


class LatLng(BaseModel):
    lat: float
    lng: float


class AddressRequest(BaseModel):
    address: str
    location: Optional[LatLng] = None


class InventoryItemRequest(BaseModel):
    name: str
    category: str
    quantity: float = 0
    unit: str = "kg"
    min_threshold: float = 5
    cost_per_unit: float = 0


class CategoryRequest(BaseModel):
    name: str


class BookingRequest(BaseModel):
    customer_name: str
    time: str
    guests: int
    table: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    status: BookingStatus = "pending"


class BookingStatusRequest(BaseModel):
    status: BookingStatus


# ---- auth --------------------------------------------------
@app.post("/auth/login")
def login(req: LoginRequest):
    user = auth_manager.login(req.id, req.password)
    if user is None:
        raise HTTPException(status_code=401, detail="Invalid ID or Password")
    session, view = auth_manager.open_session(user)
    return {"session_id": session.session_id, "user": _public(user), "view": view}


@app.post("/auth/logout")
def logout(caller: Caller = Depends(get_caller)):
    auth_manager.close_session(caller.session.session_id)
    return {"ok": True}


@app.post("/auth/register", status_code=201)
def register(req: RegisterRequest):
    user = auth_manager.register_customer(req.name, req.phone, req.password)
    return {"id": user.id}


@app.get("/auth/me")
def me(caller: Caller = Depends(get_caller)):
    return _public(caller.user)


# ---- menu / settings ---------------------------------------
@app.get("/menu")
def get_menu(category: str = Query("All"), caller: Caller = Depends(get_caller)):
    return [it.model_dump() for it in menu_manager.list_menu(category)]


@app.get("/menu/categories")
def get_menu_categories(caller: Caller = Depends(get_caller)):
    return menu_manager.categories()


@app.post("/menu", status_code=201)
def add_menu_item(req: MenuItemRequest, caller: Caller = Depends(admin_only)):
    return menu_manager.add_item(req.name, req.price, req.category, req.image, req.description).model_dump()


@app.delete("/menu/{item_id}")
def delete_menu_item(item_id: str, caller: Caller = Depends(admin_only)):
    menu_manager.delete_item(item_id)
    return {"ok": True}


@app.get("/settings/backup")
def backup(caller: Caller = Depends(admin_only)):
    return db.export_all()


# ---- cart / checkout ---------------------------------------
@app.get("/cart")
def get_cart(caller: Caller = Depends(get_caller)):
    return checkout_manager.pack_cart(caller.session)


@app.post("/cart/items")
def add_to_cart(req: CartAddRequest, caller: Caller = Depends(get_caller)):
    return checkout_manager.add(caller.session, req.item_id)


@app.patch("/cart/items/{item_id}")
def change_qty(item_id: str, req: CartQtyRequest, caller: Caller = Depends(get_caller)):
    return checkout_manager.change_qty(caller.session, caller.user, item_id, req.delta)


@app.delete("/cart/items/{item_id}")
def remove_from_cart(item_id: str, caller: Caller = Depends(get_caller)):
    return checkout_manager.remove(caller.session, item_id)


@app.post("/cart/checkout", status_code=201)
def checkout(req: CheckoutRequest, caller: Caller = Depends(get_caller)):
    order = checkout_manager.checkout(
        caller.session, caller.user, table=req.table, customer=req.customer, method=req.method,
    )
    return order.model_dump()


@app.post("/address/verify")
def verify_address(req: AddressRequest, caller: Caller = Depends(get_caller)):
    location = req.location.model_dump() if req.location else None
    return llm.verify_address(req.address, location)


# ---- orders ------------------------------------------------
@app.get("/kitchen")
def kitchen(caller: Caller = Depends(staff_only)):
    return ordering_manager.kitchen_queue()


@app.get("/orders/online")
def online_board(caller: Caller = Depends(staff_only)):
    return ordering_manager.online_board()


@app.get("/orders/{order_id}")
def get_order(order_id: str, caller: Caller = Depends(staff_only)):
    return ordering_manager.get_order(order_id).model_dump()


@app.post("/orders/{order_id}/status")
def set_order_status(order_id: str, req: StatusRequest, caller: Caller = Depends(staff_only)):
    return ordering_manager.update_status(order_id, req.status).model_dump()


@app.post("/orders/{order_id}/advance")
def advance_order(order_id: str, caller: Caller = Depends(staff_only)):
    return ordering_manager.advance(order_id).model_dump()


@app.post("/orders/{order_id}/estimate")
def estimate_delivery(order_id: str, caller: Caller = Depends(staff_only)):
    return {"id": order_id, "text": ordering_manager.estimate_delivery(order_id)}


# ---- inventory ---------------------------------------------
@app.get("/inventory")
def get_inventory(flt: str = Query("All", alias="filter"), search: str = Query(""), caller: Caller = Depends(admin_only)):
    return {
        "items": [it.model_dump() for it in inventory_manager.list_items(flt, search)],
        "summary": inventory_manager.summary(),
    }


@app.post("/inventory", status_code=201)
def add_inventory_item(req: InventoryItemRequest, caller: Caller = Depends(admin_only)):
    return inventory_manager.add_item(**req.model_dump()).model_dump()


@app.delete("/inventory/{item_id}")
def delete_inventory_item(item_id: str, caller: Caller = Depends(admin_only)):
    inventory_manager.delete_item(item_id)
    return {"ok": True}


@app.post("/inventory/{item_id}/waste")
def log_waste(item_id: str, caller: Caller = Depends(admin_only)):
    item = inventory_manager.log_waste(item_id)
    return {"item": item.model_dump(), "waste_cost": db.get_waste_cost()}


@app.get("/inventory/categories")
def get_inventory_categories(caller: Caller = Depends(admin_only)):
    return inventory_manager.categories()


@app.post("/inventory/categories", status_code=201)
def add_inventory_category(req: CategoryRequest, caller: Caller = Depends(admin_only)):
    return inventory_manager.add_category(req.name)


@app.post("/inventory/insight")
def inventory_insight(caller: Caller = Depends(admin_only)):
    return {"text": inventory_manager.stock_insight()}


# ---- bookings ----------------------------------------------
@app.get("/bookings")
def get_bookings(search: str = Query(""), caller: Caller = Depends(staff_only)):
    return [b.model_dump() for b in booking_manager.list_bookings(search)]


@app.post("/bookings", status_code=201)
def create_booking(req: BookingRequest, caller: Caller = Depends(staff_only)):
    booking = booking_manager.create_booking(
        req.customer_name, req.time, req.guests, table=req.table, tags=req.tags, status=req.status,
    )
    return booking.model_dump()


@app.post("/bookings/{booking_id}/status")
def set_booking_status(booking_id: str, req: BookingStatusRequest, caller: Caller = Depends(staff_only)):
    return booking_manager.set_status(booking_id, req.status).model_dump()


@app.post("/bookings/allocate")
def allocate_tables(caller: Caller = Depends(staff_only)):
    return [b.model_dump() for b in booking_manager.auto_allocate()]


# ---- crm ---------------------------------------------------
@app.get("/customers")
def get_customers(caller: Caller = Depends(admin_only)):
    return [c.model_dump() for c in crm_manager.list_customers()]


@app.get("/customers/{customer_id}")
def get_customer(customer_id: str, caller: Caller = Depends(admin_only)):
    return crm_manager.get_customer(customer_id).model_dump()


@app.post("/customers/{customer_id}/campaign")
def marketing_campaign(customer_id: str, caller: Caller = Depends(admin_only)):
    return {"text": crm_manager.marketing_draft(customer_id)}


# ---- staff -------------------------------------------------
@app.get("/staff")
def get_staff(caller: Caller = Depends(admin_only)):
    return {
        "team": [e.model_dump() for e in staff_manager.team()],
        "summary": staff_manager.summary(),
    }


@app.get("/staff/schedule")
def get_schedule(caller: Caller = Depends(admin_only)):
    return staff_manager.schedule()


@app.get("/staff/payroll")
def get_payroll(caller: Caller = Depends(admin_only)):
    return staff_manager.payroll()


@app.post("/staff/insight")
def staffing_insight(caller: Caller = Depends(admin_only)):
    return {"text": staff_manager.smart_schedule()}


@app.get("/staff/access")
def list_access(caller: Caller = Depends(admin_only)):
    return [_public(u) for u in auth_manager.list_users()]


@app.post("/staff/access", status_code=201)
def create_waiter(req: WaiterRequest, caller: Caller = Depends(admin_only)):
    return _public(auth_manager.create_waiter(req.id, req.password, req.name))


@app.delete("/staff/access/{user_id}")
def delete_access(user_id: str, caller: Caller = Depends(admin_only)):
    auth_manager.delete_user(user_id)
    return {"ok": True}


# ---- dashboard ---------------------------------------------
@app.get("/dashboard")
def dashboard(caller: Caller = Depends(admin_only)):
    return dashboard_manager.overview()


@app.get("/dashboard/insight")
def dashboard_insight(caller: Caller = Depends(admin_only)):
    return {"text": dashboard_manager.insight()}


# ---- health ------------------------------------------------
@app.get("/healthz")
def healthz():
    # liveness: process is up and we can talk to Redis
    ok_redis = db.ping()
    return JSONResponse(status_code=200 if ok_redis else 503, content={"ok": ok_redis})


@app.get("/readyz")
def readyz():
    ok_redis = db.ping()
    ok_llm = llm.ping_backend()
    ready = ok_redis and ok_llm
    return JSONResponse(
        status_code=200 if ready else 503,
        content={"redis": ok_redis, "llm": ok_llm, "llm_configured": llm.is_configured(), "ready": ready},
    )


if __name__ == "__main__":
    uvicorn.run("main:app", host="127.0.0.1", port=8000, reload=True)
