# garage/routers/customers.py
"""Customers with their vehicles. DELETE is a soft delete."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from garage.database import get_db
from garage.schemas.customer import CustomerCreate, CustomerUpdate
from garage.services import customer_service
from garage.utils.responses import respond

router = APIRouter()


@router.get("/customers", summary="List customers of a garage")
def list_customers(garage_id: str, db: Session = Depends(get_db)):
    customers = customer_service.list_customers(db, garage_id)
    return {"success": True, "customers": customers, "count": len(customers)}


@router.get("/customers/search", summary="Search customers by name, phone or email")
def search_customers(garage_id: str, q: str = "", db: Session = Depends(get_db)):
    if not q.strip():
        return {"success": True, "customers": [], "count": 0}
    customers = customer_service.search_customers(db, garage_id, q.strip())
    return {"success": True, "customers": customers, "count": len(customers)}


@router.post("/customers", summary="Create a customer with vehicles")
def create_customer(body: CustomerCreate, db: Session = Depends(get_db)):
    return respond(customer_service.create_customer(db, body.partial()), key="customer")


@router.get("/customers/{customer_id}", summary="Fetch a customer")
def get_customer(customer_id: int, db: Session = Depends(get_db)):
    return respond(customer_service.get_customer(db, customer_id), key="customer")


@router.put("/customers/{customer_id}", summary="Update a customer")
def update_customer(customer_id: int, body: CustomerUpdate, db: Session = Depends(get_db)):
    return respond(customer_service.update_customer(db, customer_id, body.partial()), key="customer")


@router.delete("/customers/{customer_id}", summary="Deactivate a customer")
def delete_customer(customer_id: int, db: Session = Depends(get_db)):
    return respond(customer_service.deactivate_customer(db, customer_id), key="customer")
