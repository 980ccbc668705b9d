"""
Expenses plugin endpoints: bills and budgets.
"""

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from circles.api.deps import circle_id_query, get_app_config, get_current_user_context, get_member_circles
from circles.db import schemas
from circles.db.database import get_db
from circles.services.plugins import ExpensesService
from circles.utils.config import AppConfig
from circles.utils.transport import ok

router = APIRouter(prefix="/plugin/expenses", tags=["expenses"])


def get_expenses_service(
    db: Session = Depends(get_db),
    config: AppConfig = Depends(get_app_config),
    member_circles: List[int] = Depends(get_member_circles),
) -> ExpensesService:
    return ExpensesService(db, config=config, member_circles=member_circles)


@router.get("/billCategories")
def bill_categories(
    service: ExpensesService = Depends(get_expenses_service),
    user_context=Depends(get_current_user_context),
):
    return ok(service.bill_categories())


@router.get("/bills")
def bills(
    circle_id: int = Depends(circle_id_query),
    service: ExpensesService = Depends(get_expenses_service),
    user_context=Depends(get_current_user_context),
):
    user, current_user = user_context
    return ok(service.bills(user.id, circle_id))


@router.post("/addBill")
def add_bill(
    body: schemas.BillAdd,
    service: ExpensesService = Depends(get_expenses_service),
    user_context=Depends(get_current_user_context),
):
    user, current_user = user_context
    return ok(service.add_bill(user.id, body.circle_id, body.bill_name, body.bill_amount,
                               body.bill_category, body.bill_date))


@router.post("/removeBill")
def remove_bill(
    body: schemas.BillRemove,
    service: ExpensesService = Depends(get_expenses_service),
    user_context=Depends(get_current_user_context),
):
    user, current_user = user_context
    service.remove_bill(user.id, body.circle_id, body.bill_id)
    return ok()


@router.post("/addBudget")
def add_budget(
    body: schemas.BudgetAdd,
    service: ExpensesService = Depends(get_expenses_service),
    user_context=Depends(get_current_user_context),
):
    user, current_user = user_context
    return ok(service.add_budget(user.id, body.circle_id, body.budget_name, body.budget_amount,
                                 body.budget_start_date, body.budget_end_date))


@router.get("/budgets")
def budgets(
    circle_id: int = Depends(circle_id_query),
    service: ExpensesService = Depends(get_expenses_service),
    user_context=Depends(get_current_user_context),
):
    user, current_user = user_context
    return ok(service.budgets(user.id, circle_id))


@router.post("/removeBudget")
def remove_budget(
    body: schemas.BudgetRemove,
    service: ExpensesService = Depends(get_expenses_service),
    user_context=Depends(get_current_user_context),
):
    user, current_user = user_context
    service.remove_budget(user.id, body.circle_id, body.budget_id)
    return ok()
