# finance_tracker/models/transaction.py
import enum
from sqlalchemy import Column, Integer, String, ForeignKey, Float, Date, DateTime
from finance_tracker.core.database import Base
from finance_tracker.models.user import utcnow

class TransactionType(str, enum.Enum):
    income = "income"
    expense = "expense"

class Transaction(Base):
    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String, nullable=False)
    amount = Column(Float, nullable=False)
    # "income" | "expense"; kept as plain text like the rest of the schema
    type = Column(String(length=16), nullable=False)
    # Matches a category *name*, not a foreign key: renaming a category leaves this untouched
    category = Column(String, nullable=False)
    date = Column(Date, nullable=False, index=True)

    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    def __repr__(self):
        return f"<Transaction amount={self.amount} date={self.date} user_id={self.user_id}>"
