from .link import LinkCreate, LinkRecord, ErrorResponse, HealthResponse

__all__ = ["LinkCreate", "LinkRecord", "ErrorResponse", "HealthResponse"]
