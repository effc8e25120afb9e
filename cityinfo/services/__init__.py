# Services package init
"""
CityInfo API - Services Layer
==============================

What:  Business logic between routes (HTTP) and repositories (persistence).
Why:   Routes handle HTTP, services decide outcomes; services can be tested
       with an in-memory repository and no web server.

Service Inventory:
    - CityService: city listing and lookup
    - PointOfInterestService: validate → existence checks → mutate → save
    - MailService (abstract): deletion notifications
      (LocalMailService logs, CloudMailService posts to a relay)
"""
