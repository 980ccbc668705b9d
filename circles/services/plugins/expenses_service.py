from datetime import date
from decimal import Decimal
from typing import Any, Dict, List

from circles.db.repositories import circles as circle_repo
from circles.db.repositories import expenses as expenses_repo
from circles.db.schemas import BillCategoryOut, BillOut, BudgetOut
from circles.services._guards import storage_guard
from circles.services.plugins.base import CirclePluginService
from circles.utils.errors import NotFound


class ExpensesService(CirclePluginService):
    """Shared bills and budgets of a circle."""

    def bill_categories(self) -> List[Dict[str, Any]]:
        with storage_guard(self.db, "bill_categories"):
            categories = expenses_repo.get_bill_categories(self.db)
        return [BillCategoryOut.model_validate(c).to_wire() for c in categories]

    def bills(self, user_id: int, circle_id: int) -> List[Dict[str, Any]]:
        self._require_member(user_id, circle_id)
        with storage_guard(self.db, "list_bills"):
            rows = expenses_repo.get_bills(self.db, circle_id)
        return [
            BillOut(
                id=bill.id,
                bill_name=bill.bill_name,
                bill_amount=bill.bill_amount,
                bill_category_id=category.id,
                bill_category=category.name,
                bill_date=bill.bill_date,
                user_id=owner.id,
                user_name=owner.full_name,
            ).to_wire()
            for bill, category, owner in rows
        ]

    def add_bill(self, user_id: int, circle_id: int, name: str, amount: Decimal, category_id: int,
                 bill_date: date) -> Dict[str, int]:
        with storage_guard(self.db, "add_bill"):
            if circle_repo.get_active_circle(self.db, circle_id) is None:
                raise NotFound("Circle not found")
        self._require_member(user_id, circle_id)
        with storage_guard(self.db, "add_bill"):
            if expenses_repo.get_bill_category(self.db, category_id) is None:
                raise NotFound("Bill category not found")
            bill_id = expenses_repo.add_bill(self.db, circle_id, user_id, name, amount, category_id, bill_date)
        return {"id": bill_id}

    def remove_bill(self, user_id: int, circle_id: int, bill_id: int) -> None:
        self._require_member(user_id, circle_id)
        with storage_guard(self.db, "remove_bill"):
            if not expenses_repo.remove_bill(self.db, bill_id, circle_id, user_id):
                raise NotFound("Bill not found.")

    def budgets(self, user_id: int, circle_id: int) -> List[Dict[str, Any]]:
        self._require_member(user_id, circle_id)
        with storage_guard(self.db, "list_budgets"):
            rows = expenses_repo.get_budgets(self.db, circle_id)
        return [
            BudgetOut(
                id=budget.id,
                budget_name=budget.budget_name,
                budget_amount=budget.budget_amount,
                start_date=budget.start_date,
                end_date=budget.end_date,
                user_id=owner.id,
                user_name=owner.full_name,
            ).to_wire()
            for budget, owner in rows
        ]

    def add_budget(self, user_id: int, circle_id: int, name: str, amount: Decimal, start_date: date,
                   end_date: date) -> Dict[str, int]:
        with storage_guard(self.db, "add_budget"):
            if circle_repo.get_active_circle(self.db, circle_id) is None:
                raise NotFound("Circle not found")
        self._require_member(user_id, circle_id)
        with storage_guard(self.db, "add_budget"):
            budget_id = expenses_repo.add_budget(self.db, circle_id, user_id, name, amount, start_date, end_date)
        return {"id": budget_id}

    def remove_budget(self, user_id: int, circle_id: int, budget_id: int) -> None:
        self._require_member(user_id, circle_id)
        with storage_guard(self.db, "remove_budget"):
            if not expenses_repo.remove_budget(self.db, budget_id, circle_id, user_id):
                raise NotFound("Budget not found.")
