"""Infrastructure layer — state database, definition files, Azure API access.

This layer depends on stdlib and third-party libs (SQLAlchemy, Azure SDK).
It may read domain models but must never import from services, commands,
or output.
"""
