"""Request-level services built on rule providers and the validation engine."""

from itemconf.services.item_validation import ItemValidationService, update_context

__all__ = ["ItemValidationService", "update_context"]
