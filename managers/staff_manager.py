# managers/staff_manager.py
from typing import Any, Dict, List

from models import Employee
from utils import db, llm
from utils.context import format_staffing_context


def team() -> List[Employee]:
    return db.get_employees()


def schedule() -> List[Dict[str, Any]]:
    """Shifts with the employee looked up by id; unknown ids keep a blank name."""
    employees = db.get_employees()
    rows = []
    for shift in db.get_shifts():
        emp = next((e for e in employees if e.id == shift.employee_id), None)
        row = shift.model_dump()
        row["employee_name"] = emp.name if emp else ""
        row["employee_role"] = emp.role if emp else ""
        rows.append(row)
    return rows


def weekly_pay(emp: Employee) -> float:
    return emp.rate * emp.weekly_hours


def payroll() -> List[Dict[str, Any]]:
    return [
        {"id": e.id, "name": e.name, "role": e.role, "rate": e.rate,
         "weekly_hours": e.weekly_hours, "weekly_pay": weekly_pay(e)}
        for e in db.get_employees()
    ]


def summary() -> Dict[str, Any]:
    employees = db.get_employees()
    return {
        "on_shift": len([e for e in employees if e.status == "Working"]),
        "headcount": len(employees),
        "total_payroll": sum(weekly_pay(e) for e in employees),
        "total_hours": sum(e.weekly_hours for e in employees),
    }


def smart_schedule() -> str:
    return llm.generate_staffing_insight(format_staffing_context(db.get_employees()))
