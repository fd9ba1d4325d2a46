"""Service layer package."""

__all__: list[str] = []
