# Middleware package init
"""
Copenhagen Beaches Proxy — Middleware Package
==============================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (order matters!):
    Request → [Request ID] → [Logging] → [CORS Headers] → Route Handler

    1. Request ID first: every later log line can carry the correlation ID
    2. Logging: records status and duration of the final response
    3. CORS Headers last (innermost): stamps the headers onto the response
       the handler or an exception handler produced

    Responses travel back through the chain in reverse order.
"""
