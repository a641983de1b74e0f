# companies/models/__init__.py

from companies.models.company import Company

__all__ = ["Company"]
