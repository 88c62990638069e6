"""Fallback page for unknown routes and unknown components."""

view = {"title": "Not Found", "status": 404}
