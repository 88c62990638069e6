view = {"title": "Login"}
