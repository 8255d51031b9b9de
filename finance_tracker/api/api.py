from fastapi import APIRouter

from finance_tracker.api.routes import auth, categories, transactions, summary

api_router = APIRouter()

api_router.include_router(auth.router)
api_router.include_router(categories.router)
api_router.include_router(transactions.router)
api_router.include_router(summary.router)
