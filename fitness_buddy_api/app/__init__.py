"""
Application package.

``main`` builds the FastAPI app; ``core`` holds configuration,
logging and the in‑memory record store; ``api`` maps HTTP routes
onto store operations; ``schemas`` holds the fixed‑shape response
models.
"""

from .main import app, create_app  # noqa: F401
