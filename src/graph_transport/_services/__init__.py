from ._http_service import HTTPService

__all__ = ["HTTPService"]
