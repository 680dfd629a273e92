"""
Schemas module - Request/Response schemas for API endpoints.

Wire names are camelCase (field aliases); Python attributes are snake_case.
The interview client decodes backend replies into the same models.
"""
