from __future__ import annotations

from flask import Blueprint, redirect, render_template, request, url_for

from app.lunchly.db import db_session
from app.lunchly.modules.customers.service import (
    decode_customer,
    get_customer,
    get_customer_reservations,
    list_customers,
    save_customer,
    search_customers,
    top_customers,
)
from app.lunchly.modules.reservations.service import decode_reservation, save_reservation

bp = Blueprint("customers", __name__)


@bp.get("/")
def customer_list():
    """Homepage: show list of customers."""
    s = db_session()
    customers = list_customers(s)
    return render_template("customer_list.html", customers=customers)


@bp.get("/add/")
def customer_new_get():
    return render_template("customer_new_form.html")


@bp.post("/add/")
def customer_new_post():
    s = db_session()
    c = decode_customer(request.form)
    save_customer(s, c)
    s.commit()
    return redirect(url_for("customers.customer_detail", customer_id=c.id))


@bp.get("/<int:customer_id>/")
def customer_detail(customer_id: int):
    s = db_session()
    c = get_customer(s, customer_id)
    reservations = get_customer_reservations(s, c)
    return render_template("customer_detail.html", customer=c, reservations=reservations)


@bp.get("/<int:customer_id>/edit/")
def customer_edit_get(customer_id: int):
    s = db_session()
    c = get_customer(s, customer_id)
    return render_template("customer_edit_form.html", customer=c)


@bp.post("/<int:customer_id>/edit/")
def customer_edit_post(customer_id: int):
    s = db_session()
    c = decode_customer(request.form, customer_id=customer_id)
    save_customer(s, c)
    s.commit()
    return redirect(url_for("customers.customer_detail", customer_id=customer_id))


@bp.post("/<int:customer_id>/add-reservation/")
def reservation_add(customer_id: int):
    s = db_session()
    get_customer(s, customer_id)
    r = decode_reservation(request.form, customer_id=customer_id)
    save_reservation(s, r)
    s.commit()
    return redirect(url_for("customers.customer_detail", customer_id=customer_id))


@bp.post("/customer/search")
def customer_search():
    s = db_session()
    customers = search_customers(s, request.form.get("searchName") or "")
    return render_template("customer_list.html", customers=customers)


@bp.get("/customers/top10")
def customers_top_ten():
    s = db_session()
    customers = top_customers(s)
    return render_template("customer_list.html", customers=customers, heading="Top 10 Customers")
