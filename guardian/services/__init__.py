"""
High-level use cases for the Guardian API.

Each service orchestrates repositories/adapters to implement a business rule
(register, update a user, score signals and dispatch an agent task). Routers
call these services instead of touching the database or httpx directly.
"""
