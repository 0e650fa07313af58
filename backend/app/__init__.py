"""
Copenhagen Beaches Proxy — Application Package Initializer
===========================================================

What: Marks the `app` directory as a Python package.
Why:  Enables module imports like `from app.config import settings`.
Who:  Used implicitly by Python's import system and explicitly by pytest and uvicorn.

Architecture Note:
    The proxy is small, but it keeps the same layered shape as a larger service:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← fetch → filter → project
    ├─────────────────────────────────────┤
    │         Schemas (Data Contracts)    │  ← Pydantic upstream/response models
    ├─────────────────────────────────────┤
    │       Upstream Client (I/O)         │  ← httpx call to api.badevand.dk
    └─────────────────────────────────────┘

    Routes never talk to httpx directly; services never build HTTP responses.
    Each layer can be tested on its own with the one below it mocked.
"""

__version__ = "1.0.0"
