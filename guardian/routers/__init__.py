"""
FastAPI routers grouped by domain (auth, users, agent).

Each module exposes an APIRouter included by ``guardian.app.create_app``.
Services are looked up on ``request.app.state`` so every app instance carries
its own wiring.
"""
