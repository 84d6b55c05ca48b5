# Shared Common Library for the Weight & Balance service
# Exception handling, request middleware, validators and the HTTP client
# used by the service and its callers.

__version__ = "1.0.0"
