# garage/routers/employees.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from garage.database import get_db
from garage.schemas.user import EmployeeCreate
from garage.services import employee_service
from garage.utils.responses import respond

router = APIRouter()


@router.get("/employees", summary="List active employees of a garage")
def list_employees(garage_id: str, include_inactive: bool = False, db: Session = Depends(get_db)):
    employees = employee_service.list_employees(db, garage_id, include_inactive)
    return {"success": True, "employees": employees, "count": len(employees)}


@router.post("/employees", summary="Create an employee under a garage owner")
def create_employee(body: EmployeeCreate, db: Session = Depends(get_db)):
    data = body.partial()
    parent_uid = data.pop("parentUserUid")
    return respond(employee_service.create_employee(db, parent_uid, data), key="employee")


@router.get("/employees/by-login/{login_id}", summary="Look up an employee by login ID")
def get_by_login(login_id: str, db: Session = Depends(get_db)):
    return respond(employee_service.get_user_by_login_id(db, login_id), key="employee")


@router.delete("/employees/{user_uid}", summary="Deactivate an employee")
def delete_employee(user_uid: str, db: Session = Depends(get_db)):
    return respond(employee_service.deactivate_employee(db, user_uid))
