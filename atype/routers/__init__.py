"""
FastAPI routers grouped by domain (accounts, posts, friends, messages, comments).

Each file inside this package exposes an APIRouter that is included in the main
application (app.py). Services are read from app.state, set up by create_app().
"""
