"""Paste tool."""

view = {"title": "Paste", "max_size": 512 * 1024}
