# finance_tracker/schemas/summary.py
from finance_tracker.schemas.common import CamelModel


class SummaryRead(CamelModel):
    total_income: float
    total_expenses: float
    current_balance: float
