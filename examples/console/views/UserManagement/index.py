"""User management table."""

view = {"title": "Users", "columns": ["name", "email", "roles"]}
