from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from rich.table import Table


def format_timestamp(value: datetime | str | None) -> str:
    if value is None:
        return "-"
    if isinstance(value, datetime):
        dt = value
    else:
        text = str(value)
        try:
            dt = datetime.fromisoformat(text.replace("Z", "+00:00"))
        except ValueError:
            return text
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    dt = dt.astimezone(timezone.utc)
    return dt.strftime("%Y-%m-%d %H:%M:%SZ")


def full_name(user: dict[str, Any]) -> str:
    name = " ".join(part for part in (user.get("firstName"), user.get("lastName")) if part)
    return name or "-"


def users_table(users: list[dict[str, Any]], *, title: str = "Users") -> Table:
    table = Table(title=title)
    table.add_column("id", style="bold")
    table.add_column("email")
    table.add_column("name")
    table.add_column("role")
    table.add_column("active")
    table.add_column("verified")

    for u in users:
        table.add_row(
            str(u.get("id", "-")),
            str(u.get("email") or "-"),
            full_name(u),
            str(u.get("role") or "-"),
            "yes" if u.get("isActive") else "no",
            format_timestamp(u.get("emailVerifiedAt")),
        )
    return table


def user_lines(user: dict[str, Any]) -> list[str]:
    return [
        f"  id: {user.get('id', '-')}",
        f"  email: {user.get('email') or '-'}",
        f"  name: {full_name(user)}",
        f"  role: {user.get('role') or '-'}",
        f"  active: {'yes' if user.get('isActive') else 'no'}",
        f"  email_verified_at: {format_timestamp(user.get('emailVerifiedAt'))}",
        f"  created_at: {format_timestamp(user.get('createdAt'))}",
        f"  updated_at: {format_timestamp(user.get('updatedAt'))}",
    ]
