"""
Web application package for the tic-tac-toe engine.

Provides a FastAPI-based REST API so a browser or game client can ask the
engine for its move.
"""
