"""
Domain exceptions shared by repositories, services and the API layer
"""


class KDSError(Exception):
    """Base exception for the kitchen display service"""
    pass


class ValidationError(KDSError):
    """Bad or missing input (HTTP 400)"""
    pass


class NotFoundError(KDSError):
    """Referenced entity does not exist (HTTP 404)"""
    pass


class StoreError(KDSError):
    """Underlying storage failure (HTTP 500)"""
    pass


class CsvImportError(KDSError):
    """Uploaded CSV could not be parsed (HTTP 500)"""
    pass
