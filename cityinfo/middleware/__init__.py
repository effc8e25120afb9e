# Middleware package init
"""
CityInfo API - Middleware Package
==================================

Middleware Chain (request direction):
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    Request ID runs first so the access log line and any error body already
    carry the correlation ID.
"""
