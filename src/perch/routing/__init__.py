"""Routing — menu-to-route compilation, the live router, and the route table.

Routes are compiled from the user's menu forest, installed into the live
router after login and removed again, exactly, on logout.
"""
