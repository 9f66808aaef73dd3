# streamlit_app.py (Cénit back office and customer ordering)
import json
import os
from typing import Any, Optional

import requests
import streamlit as st

from utils.config import CURRENCY

# -------------------------
# Backend URLs
# -------------------------
API_BASE = os.environ.get("API_BASE", "http://127.0.0.1:8000").rstrip("/")

STAFF_VIEWS = ["Dashboard", "Bookings", "POS", "Kitchen", "Online Orders", "CRM", "Inventory", "Staff"]
ADMIN_VIEWS = STAFF_VIEWS + ["Settings"]
WAITER_VIEWS = ["POS", "Kitchen", "Online Orders", "Bookings"]
START_VIEW = {"CUSTOMER_VIEW": "Order", "POS": "POS", "DASHBOARD": "Dashboard"}

st.set_page_config(page_title="Cénit", layout="wide")

ss = st.session_state
ss.setdefault("session_id", None)
ss.setdefault("user", None)
ss.setdefault("view", None)
ss.setdefault("reg_success_id", "")


# -------------------------
# Helpers
# -------------------------
def api(method: str, path: str, **kwargs) -> Optional[Any]:
    headers = kwargs.pop("headers", {})
    if ss.get("session_id"):
        headers["X-Session-Id"] = ss["session_id"]
    try:
        r = requests.request(method, f"{API_BASE}{path}", headers=headers, timeout=60, **kwargs)
    except requests.RequestException as e:
        st.error(f"(connection error: {e})")
        return None
    if r.status_code == 401 and ss.get("session_id"):
        _forget_session()
        st.rerun()
    if not r.ok:
        detail = (r.json() or {}).get("detail") if r.headers.get("content-type", "").startswith("application/json") else None
        st.error(detail or f"(backend error {r.status_code})")
        return None
    return r.json()


def _forget_session():
    ss["session_id"] = None
    ss["user"] = None
    ss["view"] = None


def money(v: float) -> str:
    return f"{CURRENCY} {v:,.0f}"


# -------------------------
# Login / register
# -------------------------
def render_auth():
    brand, form = st.columns([1, 1])
    with brand:
        st.title("Cénit")
        st.write("The Intelligent Operating System for modern restaurants in Nepal.")
        st.caption("Admin • Staff • Customer")

    with form:
        if ss["reg_success_id"]:
            st.success("Registration Successful!")
            st.write("Your Customer Login ID is:")
            st.code(ss["reg_success_id"])
            if st.button("Go to Login"):
                ss["reg_success_id"] = ""
                st.rerun()
            return

        tab_login, tab_register = st.tabs(["Login", "Create an Account"])
        with tab_login:
            with st.form("login"):
                uid = st.text_input("User ID / Username")
                pwd = st.text_input("Password", type="password")
                if st.form_submit_button("Login"):
                    out = api("POST", "/auth/login", json={"id": uid, "password": pwd})
                    if out:
                        ss["session_id"] = out["session_id"]
                        ss["user"] = out["user"]
                        ss["view"] = START_VIEW.get(out["view"], "Dashboard")
                        st.rerun()
        with tab_register:
            with st.form("register"):
                name = st.text_input("Full Name")
                phone = st.text_input("Phone Number")
                pwd = st.text_input("Set Password", type="password")
                if st.form_submit_button("Register Now"):
                    out = api("POST", "/auth/register", json={"name": name, "phone": phone, "password": pwd})
                    if out:
                        ss["reg_success_id"] = out["id"]
                        st.rerun()


# -------------------------
# Shared cart widget
# -------------------------
def render_menu_grid(category: str):
    items = api("GET", "/menu", params={"category": category}) or []
    if not items:
        st.write("No items in this category.")
        return
    cols = st.columns(3)
    for i, it in enumerate(items):
        with cols[i % 3]:
            with st.container(border=True):
                st.markdown(f"**{it['name']}**  \n{money(it['price'])}")
                if it.get("description"):
                    st.caption(it["description"])
                if st.button("Add", key=f"add-{it['id']}"):
                    api("POST", "/cart/items", json={"item_id": it["id"]})
                    st.rerun()


def render_cart() -> dict:
    cart = api("GET", "/cart") or {"items": [], "total": 0, "count": 0}
    if not cart["items"]:
        st.info("Cart is empty")
        return cart
    for line in cart["items"]:
        c1, c2, c3, c4 = st.columns([4, 1, 1, 1])
        c1.write(f"{line['qty']} x {line['name']} · {money(line['price'] * line['qty'])}")
        if c2.button("−", key=f"dec-{line['id']}"):
            api("PATCH", f"/cart/items/{line['id']}", json={"delta": -1})
            st.rerun()
        if c3.button("+", key=f"inc-{line['id']}"):
            api("PATCH", f"/cart/items/{line['id']}", json={"delta": 1})
            st.rerun()
        if c4.button("🗑", key=f"rm-{line['id']}"):
            api("DELETE", f"/cart/items/{line['id']}")
            st.rerun()
    st.markdown(f"**Total: {money(cart['total'])}**")
    return cart


def render_address_check(address: str):
    if st.button("Verify Address", disabled=not address):
        with st.spinner("Verifying..."):
            out = api("POST", "/address/verify", json={"address": address})
        if out:
            st.info(out["text"])
            if out.get("map_uri"):
                st.markdown(f"[Open in Maps]({out['map_uri']})")


# -------------------------
# Views
# -------------------------
def view_dashboard():
    st.header("Dashboard")
    data = api("GET", "/dashboard")
    if not data:
        return
    c1, c2, c3, c4 = st.columns(4)
    c1.metric("Revenue", money(data["revenue"]))
    c2.metric("Visitors", data["visitors"])
    c3.metric("Open orders", data["open_orders"])
    c4.metric("Bookings", data["bookings_today"])
    st.bar_chart({r["name"]: r["sales"] for r in data["sales_by_hour"]})
    with st.spinner("Loading AI prediction..."):
        insight = api("GET", "/dashboard/insight")
    if insight:
        st.info(f"✨ {insight['text']}")


def view_bookings():
    st.header("Bookings")
    if st.button("Smart Allocate"):
        api("POST", "/bookings/allocate")
    search = st.text_input("Search bookings...")
    for b in api("GET", "/bookings", params={"search": search}) or []:
        with st.container(border=True):
            st.markdown(f"**{b['time']}** · {b['customer_name']} ({b['guests']} guests) "
                        f"{'· ' + b['table'] if b.get('table') else ''}")
            st.caption(" • ".join(b["tags"]) + f"  [{b['status']}]")

    with st.expander("New Booking"):
        with st.form("new-booking"):
            name = st.text_input("Customer name")
            when = st.text_input("Time", value="19:00")
            guests = st.number_input("Guests", min_value=1, value=2)
            tags = st.text_input("Tags (comma separated)")
            if st.form_submit_button("Save"):
                api("POST", "/bookings", json={
                    "customer_name": name, "time": when, "guests": int(guests),
                    "tags": [t.strip() for t in tags.split(",") if t.strip()],
                })
                st.rerun()


def view_pos():
    st.header("Point of Sale")
    col_menu, col_cart = st.columns([2, 1])
    with col_menu:
        cats = api("GET", "/menu/categories") or ["All"]
        category = st.radio("Category", cats, horizontal=True)
        render_menu_grid(category)
    with col_cart:
        st.subheader("Current Order")
        table = st.text_input("Table #", value="5")
        cart = render_cart()
        if cart["items"] and st.button("Place Order"):
            out = api("POST", "/cart/checkout", json={"table": table})
            if out:
                st.success(f"Order {out['id']} sent to kitchen · {money(out['total'])}")


def view_customer():
    st.header("Order Online")
    col_menu, col_cart = st.columns([2, 1])
    with col_menu:
        cats = api("GET", "/menu/categories") or ["All"]
        category = st.radio("Category", cats, horizontal=True)
        render_menu_grid(category)
    with col_cart:
        st.subheader("Your Cart")
        cart = render_cart()
        if not cart["items"]:
            return
        name = st.text_input("Name")
        phone = st.text_input("Phone")
        address = st.text_area("Delivery address")
        render_address_check(address)
        if st.button("Place Order"):
            out = api("POST", "/cart/checkout",
                      json={"customer": {"name": name, "phone": phone, "address": address}})
            if out:
                st.success(f"Order placed! {out['id']} · {money(out['total'])}")


def view_kitchen():
    st.header("Kitchen Display")
    tickets = api("GET", "/kitchen") or []
    if not tickets:
        st.write("No active orders")
        return
    cols = st.columns(3)
    for i, t in enumerate(tickets):
        order = t["order"]
        with cols[i % 3]:
            with st.container(border=True):
                flag = "🔴 " if t["urgent"] else ("🟠 " if t["late"] else "")
                st.markdown(f"{flag}**{t['label']}** · {t['elapsed']} min · `{order['status']}`")
                for line in order["items"]:
                    st.write(f"{line['qty']} x {line['name']}")
                if st.button("Next step", key=f"kds-{order['id']}"):
                    api("POST", f"/orders/{order['id']}/advance")
                    st.rerun()


def view_online_orders():
    st.header("Online Orders")
    board = api("GET", "/orders/online") or {}
    cols = st.columns(len(board) or 1)
    for col, (key, column) in zip(cols, board.items()):
        with col:
            st.subheader(column["label"])
            for order in column["orders"]:
                with st.container(border=True):
                    who = (order.get("customer_details") or {}).get("name") or order["id"]
                    st.markdown(f"**{who}** · {money(order['total'])} · `{order['status']}`")
                    st.caption((order.get("customer_details") or {}).get("address", ""))
                    if order["status"] == "pending":
                        if st.button("Est. Time (AI)", key=f"est-{order['id']}"):
                            out = api("POST", f"/orders/{order['id']}/estimate")
                            if out:
                                st.info(out["text"])
                        if st.button("Reject", key=f"rej-{order['id']}"):
                            api("POST", f"/orders/{order['id']}/status", json={"status": "cancelled"})
                            st.rerun()
                    if order["status"] != "delivered" and st.button("Advance", key=f"adv-{order['id']}"):
                        api("POST", f"/orders/{order['id']}/advance")
                        st.rerun()


def view_crm():
    st.header("Customers")
    customers = api("GET", "/customers") or []
    if not customers:
        return
    names = {c["id"]: f"{c['name']} ({c['segment']})" for c in customers}
    picked = st.selectbox("Customer", list(names), format_func=names.get)
    c = next(c for c in customers if c["id"] == picked)
    st.write(f"{c['email']} · {c['phone']} · {c['visits']} visits · {money(c['total_spent'])} · last {c['last_visit']}")
    st.caption(" • ".join(c["preferences"]))
    if st.button("Generate Email Draft"):
        with st.spinner("Generating..."):
            out = api("POST", f"/customers/{picked}/campaign")
        if out:
            st.text_area("AI Marketing Assistant", out["text"], height=200)


def view_inventory():
    st.header("Inventory")
    cats = api("GET", "/inventory/categories") or []
    flt = st.radio("Filter", ["All", "Low", "Critical"] + cats, horizontal=True)
    search = st.text_input("Search ingredients...")
    data = api("GET", "/inventory", params={"filter": flt, "search": search})
    if not data:
        return
    s = data["summary"]
    c1, c2, c3 = st.columns(3)
    c1.metric("Stock value", money(s["total_value"]))
    c2.metric("Low stock", s["low_stock_count"])
    c3.metric("Waste cost", money(s["waste_cost"]))

    if st.button("AI Stock Analysis"):
        with st.spinner("Analyzing..."):
            out = api("POST", "/inventory/insight")
        if out:
            st.info(out["text"])

    for it in data["items"]:
        c1, c2, c3 = st.columns([5, 1, 1])
        c1.write(f"**{it['name']}** · {it['category']} · {it['quantity']}{it['unit']} "
                 f"(min {it['min_threshold']}) · `{it['status']}`")
        if c2.button("Waste", key=f"waste-{it['id']}"):
            api("POST", f"/inventory/{it['id']}/waste")
            st.rerun()
        if c3.button("Delete", key=f"del-{it['id']}"):
            api("DELETE", f"/inventory/{it['id']}")
            st.rerun()

    with st.expander("Add Item"):
        with st.form("add-inventory"):
            name = st.text_input("Name")
            category = st.selectbox("Category", cats)
            qty = st.number_input("Quantity", min_value=0.0, value=0.0)
            unit = st.text_input("Unit", value="kg")
            min_thr = st.number_input("Min threshold", min_value=0.0, value=5.0)
            cost = st.number_input("Cost per unit", min_value=0.0, value=0.0)
            if st.form_submit_button("Save"):
                api("POST", "/inventory", json={
                    "name": name, "category": category, "quantity": qty, "unit": unit,
                    "min_threshold": min_thr, "cost_per_unit": cost,
                })
                st.rerun()
    with st.expander("Add Category"):
        new_cat = st.text_input("New category")
        if st.button("Add category"):
            api("POST", "/inventory/categories", json={"name": new_cat})
            st.rerun()


def view_staff():
    st.header("Staff")
    data = api("GET", "/staff")
    if not data:
        return
    s = data["summary"]
    c1, c2, c3 = st.columns(3)
    c1.metric("On shift", f"{s['on_shift']} / {s['headcount']}")
    c2.metric("Weekly payroll", money(s["total_payroll"]))
    c3.metric("Total hours", f"{s['total_hours']:.0f} hrs")

    if st.button("Smart Schedule"):
        with st.spinner("Optimizing..."):
            out = api("POST", "/staff/insight")
        if out:
            st.info(out["text"])

    tabs = ["Team", "Schedule", "Payroll"]
    if ss["user"]["role"] == "ADMIN":
        tabs.append("System Access")
    panes = st.tabs(tabs)
    with panes[0]:
        st.dataframe(data["team"], use_container_width=True)
    with panes[1]:
        st.dataframe(api("GET", "/staff/schedule") or [], use_container_width=True)
    with panes[2]:
        st.dataframe(api("GET", "/staff/payroll") or [], use_container_width=True)
    if len(panes) > 3:
        with panes[3]:
            for u in api("GET", "/staff/access") or []:
                c1, c2 = st.columns([5, 1])
                c1.write(f"**{u['name']}** · {u['id']} · `{u['role']}`")
                if u["role"] != "ADMIN" and c2.button("Remove", key=f"rm-user-{u['id']}"):
                    api("DELETE", f"/staff/access/{u['id']}")
                    st.rerun()
            with st.form("new-waiter"):
                name = st.text_input("Name")
                uid = st.text_input("Login ID")
                pwd = st.text_input("Password")
                if st.form_submit_button("Create Credentials"):
                    out = api("POST", "/staff/access", json={"id": uid, "password": pwd, "name": name})
                    if out:
                        st.success(f"Waiter {out['name']} created successfully!")


def view_settings():
    st.header("Settings")
    st.subheader("Menu")
    for it in api("GET", "/menu") or []:
        c1, c2 = st.columns([5, 1])
        c1.write(f"**{it['name']}** · {it['category']} · {money(it['price'])}")
        if c2.button("Delete", key=f"menu-del-{it['id']}"):
            api("DELETE", f"/menu/{it['id']}")
            st.rerun()
    with st.form("new-menu-item"):
        name = st.text_input("Item name")
        category = st.selectbox("Category", ["Starter", "Main", "Dessert", "Drink"], index=1)
        price = st.number_input("Price", min_value=0.0, value=0.0)
        if st.form_submit_button("Add"):
            api("POST", "/menu", json={"name": name, "category": category, "price": price})
            st.rerun()

    st.subheader("Data backup")
    st.warning("Warning: This includes sensitive Admin ID & Password data.")
    if st.button("Prepare backup"):
        data = api("GET", "/settings/backup")
        if data:
            st.download_button("Download backup.json", json.dumps(data, indent=2), file_name="cenit-backup.json")


VIEWS = {
    "Dashboard": view_dashboard,
    "Bookings": view_bookings,
    "POS": view_pos,
    "Kitchen": view_kitchen,
    "Online Orders": view_online_orders,
    "CRM": view_crm,
    "Inventory": view_inventory,
    "Staff": view_staff,
    "Settings": view_settings,
    "Order": view_customer,
}


# -------------------------
# Layout
# -------------------------
if not ss["session_id"]:
    render_auth()
else:
    user = ss["user"]
    if user["role"] == "CUSTOMER":
        options = ["Order"]
    elif user["role"] == "WAITER":
        options = WAITER_VIEWS
    else:
        options = ADMIN_VIEWS

    with st.sidebar:
        st.title("Cénit")
        st.caption(f"{user['name']} · {user['role']}")
        current = ss["view"] if ss["view"] in options else options[0]
        ss["view"] = st.radio("Go to", options, index=options.index(current))
        if st.button("Logout"):
            api("POST", "/auth/logout")
            _forget_session()
            st.rerun()

    VIEWS[ss["view"]]()
