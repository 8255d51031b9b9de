# finance_tracker/models/category.py
from sqlalchemy import Column, Integer, String, ForeignKey, DateTime, UniqueConstraint
from finance_tracker.core.database import Base
from finance_tracker.models.user import utcnow

class Category(Base):
    __tablename__ = "categories"
    __table_args__ = (
        UniqueConstraint("user_id", "name", name="uq_categories_user_id_name"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String, nullable=False)
    # "#rrggbb"
    color = Column(String(length=7), nullable=False)

    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    def __repr__(self):
        return f"<Category name={self.name} user_id={self.user_id}>"
