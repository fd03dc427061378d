"""
FastAPI routers grouped by resource (users, auth, categories).

Each module exposes an APIRouter that create_app includes. Services are
looked up on app.state so the application decides how they are built.
"""
