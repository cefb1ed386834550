# src/joblens/formatting.py
"""Small display helpers shared by the CLI and the exports."""

from __future__ import annotations


def format_number(n: int) -> str:
    # Always en-US style commas, regardless of the process locale
    return f"{int(n):,}"


def format_salary(amount: int) -> str:
    """Compact form for cards and tables: 85000 -> "$85k", 950 -> "$950"."""
    if amount >= 1000:
        # Round half up: 82500 -> "$83k"
        return f"${int(amount / 1000 + 0.5)}k"
    return f"${format_number(amount)}"


def format_salary_full(amount: int) -> str:
    return f"${format_number(amount)}"


def contact_kind(contact: str) -> str:
    return "email" if "@" in (contact or "") else "phone"
