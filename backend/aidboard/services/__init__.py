# Services package init
"""
Aid Board Backend - Services Layer
===================================

What:  Data access layer between routes (HTTP) and the database.
How:   Services receive an AsyncSession per call, run one statement, and
       return Pydantic response models. Store failures become DatabaseError.

Service Inventory:
    - TodoService:    list / create todos
    - RequestService: list / create service requests, overwrite status
"""
