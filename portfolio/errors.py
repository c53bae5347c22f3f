# portfolio/errors.py


class StoreError(Exception):
    """Raised by record store / object storage backends; str() is the backend's message."""


class CatalogError(Exception):
    """Base for everything a catalog operation reports back to the user."""


class ValidationError(CatalogError):
    pass


class FetchError(CatalogError):
    pass


class WriteError(CatalogError):
    pass


class NotInitializedError(CatalogError):
    pass


class NotFoundError(CatalogError):
    pass
