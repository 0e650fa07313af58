# Services package init
"""
Copenhagen Beaches Proxy — Services Layer
==========================================

What:  Business logic layer sitting between routes (HTTP) and the upstream API.
Why:   Separation of concerns: routes handle HTTP, services handle data.

Service Inventory:
    - BeachDataSource (abstract): Interface for raw beach dataset providers
    - BadevandClient: Concrete provider for api.badevand.dk using httpx
    - BeachService: Orchestrates fetch → filter → project → envelope
"""
