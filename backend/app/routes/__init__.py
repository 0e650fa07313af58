# Routes package init
"""
Copenhagen Beaches Proxy — API Routes Package
==============================================

Route Inventory:
    - beaches.py: GET     /api/copenhagen-beaches   (filtered beach list)
                  OPTIONS /api/copenhagen-beaches   (CORS preflight)
    - health.py:  GET     /health                   (liveness check)

Routes stay thin: they call a service and let the global exception
handlers in main.py turn errors into responses.
"""
