from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from family_expenses.core.config import settings
from family_expenses.core.errors import register_exception_handlers
from family_expenses.core.logging_config import configure_logging
from family_expenses.routers import auth, budget, categories, expenses, families, health, invitations

configure_logging(settings.log_level)

app = FastAPI(
    title="Family Expenses API",
    version="1.0.0",
    description="API for shared family budgets: membership, invitations, expenses and categories.",
    # Served behind a proxy prefix; the OpenAPI schema must carry it.
    root_path=settings.root_path,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

app.include_router(health.router)
app.include_router(auth.router)
app.include_router(families.router)
app.include_router(invitations.router)
app.include_router(expenses.router)
app.include_router(categories.router)
app.include_router(budget.router)
