"""
NumberPoker Server - FastAPI + WebSocket Server Layer
"""

from numberpoker.server.app import app, create_app

__all__ = ["app", "create_app"]
