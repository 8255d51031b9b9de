#!/usr/bin/env python3
"""
Standalone script to create an account for the Finance Tracker API
Usage: alembic upgrade head && python create_user.py
"""

import asyncio
from finance_tracker.core.database import AsyncSessionLocal, engine
from finance_tracker.core.errors import BadRequestError
from finance_tracker.crud.user import create_user, get_user_by_email
from finance_tracker.schemas.user import SignupRequest

async def create_account():
    print("Creating user...")

    name = input("Enter full name: ") or "System Administrator"
    email = input("Enter email: ") or "admin@example.com"
    password = input("Enter password: ") or "admin123"

    # Same rules as POST /auth/signup
    try:
        signup_in = SignupRequest.from_payload({"name": name, "email": email, "password": password})
    except BadRequestError as e:
        print(f"❌ {e.code}: {e.message}")
        return

    async with AsyncSessionLocal() as session:
        try:
            if await get_user_by_email(signup_in.email, session):
                print(f"User with email {signup_in.email} already exists!")
                return

            user = await create_user(signup_in.name, signup_in.email, signup_in.password, session)
            print("✅ User created successfully!")
            print(f"📧 Email: {user.email}")
            print(f"👤 Name: {user.name}")
            print(f"🔑 ID: {user.id}")
        finally:
            await engine.dispose()

if __name__ == "__main__":
    asyncio.run(create_account())
