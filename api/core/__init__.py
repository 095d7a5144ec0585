"""
Shared, cross-cutting code for the API.

`core/` should contain small building blocks that multiple features use
(DB wiring, settings, logging, SQL clause builders, generic table CRUD).
Keep feature-specific SQL (INSERT statements, column lists) in the
corresponding feature package (e.g. `customers/`).
"""
