"""Dashboard: the landing page every signed-in user sees."""

view = {"title": "Dashboard", "widgets": ["recent-pastes", "active-users"]}
