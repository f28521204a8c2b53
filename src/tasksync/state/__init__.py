"""State/store layer.

This package is the single source of truth for the application state.
Intents describe every change; the reducer is the only code that turns them
into new state, and the store is the only place that state lives.
"""
