#!/usr/bin/env python3
"""
Seed a demo account with categories and a few months of transactions.
Usage: alembic upgrade head && python seed_demo_data.py

Log in afterwards as john@example.com / password123. Does nothing if that
account already exists.
"""

import asyncio
from finance_tracker.core.database import AsyncSessionLocal, engine
from finance_tracker.crud.category import create_category_for_user
from finance_tracker.crud.transaction import create_transaction_for_user
from finance_tracker.crud.user import create_user, get_user_by_email
from finance_tracker.schemas.category import CategoryCreate
from finance_tracker.schemas.transaction import TransactionCreate

DEMO_USER = {"name": "John Doe", "email": "john@example.com", "password": "password123"}

DEMO_CATEGORIES = [
    {"name": "Food", "color": "#ff6b6b"},
    {"name": "Rent", "color": "#4ecdc4"},
    {"name": "Salary", "color": "#45b7d1"},
    {"name": "Entertainment", "color": "#f7b731"},
    {"name": "Transport", "color": "#5f27cd"},
]

DEMO_TRANSACTIONS = [
    {"title": "Monthly Salary - Software Engineer", "amount": 3500.00, "type": "income", "category": "Salary", "date": "2024-01-15"},
    {"title": "Monthly Salary - Software Engineer", "amount": 3500.00, "type": "income", "category": "Salary", "date": "2024-02-15"},
    {"title": "Monthly Salary - Software Engineer", "amount": 3800.00, "type": "income", "category": "Salary", "date": "2024-03-15"},
    {"title": "Freelance Website Project", "amount": 850.00, "type": "income", "category": "Salary", "date": "2024-02-08"},
    {"title": "Apartment Rent", "amount": 1200.00, "type": "expense", "category": "Rent", "date": "2024-01-01"},
    {"title": "Apartment Rent", "amount": 1200.00, "type": "expense", "category": "Rent", "date": "2024-02-01"},
    {"title": "Apartment Rent", "amount": 1200.00, "type": "expense", "category": "Rent", "date": "2024-03-01"},
    {"title": "Weekly Groceries", "amount": 86.40, "type": "expense", "category": "Food", "date": "2024-01-06"},
    {"title": "Weekly Groceries", "amount": 92.15, "type": "expense", "category": "Food", "date": "2024-02-10"},
    {"title": "Dinner with Friends", "amount": 64.00, "type": "expense", "category": "Food", "date": "2024-03-09"},
    {"title": "Monthly Transit Pass", "amount": 75.00, "type": "expense", "category": "Transport", "date": "2024-01-02"},
    {"title": "Monthly Transit Pass", "amount": 75.00, "type": "expense", "category": "Transport", "date": "2024-02-02"},
    {"title": "Concert Tickets", "amount": 120.00, "type": "expense", "category": "Entertainment", "date": "2024-02-17"},
    {"title": "Streaming Subscription", "amount": 15.99, "type": "expense", "category": "Entertainment", "date": "2024-03-05"},
]

async def seed():
    async with AsyncSessionLocal() as session:
        try:
            if await get_user_by_email(DEMO_USER["email"], session):
                print(f"Demo user {DEMO_USER['email']} already exists, nothing to seed")
                return

            user = await create_user(DEMO_USER["name"], DEMO_USER["email"], DEMO_USER["password"], session)
            print(f"✅ Users seeder completed (id={user.id})")

            for cat in DEMO_CATEGORIES:
                await create_category_for_user(user.id, CategoryCreate.from_payload(cat), session)
            print(f"✅ Categories seeder completed ({len(DEMO_CATEGORIES)} rows)")

            for tx in DEMO_TRANSACTIONS:
                await create_transaction_for_user(user.id, TransactionCreate.from_payload(tx), session)
            print(f"✅ Transactions seeder completed ({len(DEMO_TRANSACTIONS)} rows)")
        finally:
            await engine.dispose()

if __name__ == "__main__":
    asyncio.run(seed())
