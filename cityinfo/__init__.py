"""
CityInfo API - Application Package
===================================

Layered architecture:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │   Services (Business Rules) + Mapper│  ← validate, 404s, DTO mapping
    ├─────────────────────────────────────┤
    │            Repositories             │  ← CityInfoRepository interface
    ├─────────────────────────────────────┤
    │  Entity Store: database | in-memory │  ← SQLAlchemy models
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
