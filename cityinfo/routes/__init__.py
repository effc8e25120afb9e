# Routes package init
"""
CityInfo API - API Routes Package
==================================

Route Inventory:
    - cities.py:              GET /api/cities, GET /api/cities/{id}
    - points_of_interest.py:  CRUD under /api/cities/{city_id}/pointsofinterest
    - health.py:              GET /health

Routes are THIN: they read the request, call a service and choose the
success status code. Error statuses come from exceptions (see main.py).
"""
