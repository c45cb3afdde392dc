from family_expenses.routers import auth, budget, categories, expenses, families, health, invitations

__all__ = [
    "health",
    "auth",
    "families",
    "invitations",
    "expenses",
    "categories",
    "budget",
]
