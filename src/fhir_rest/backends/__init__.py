from .base_transport import Transport
from .http_transport import HttpTransport
from .google_healthcare import GoogleHealthcareTransport

__all__ = ["Transport", "HttpTransport", "GoogleHealthcareTransport"]
