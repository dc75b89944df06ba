class MiniHttpError(Exception):
    """Base error for minihttp."""


class InvalidURL(MiniHttpError, ValueError):
    """Raised when a URL is not an absolute http or https URI."""


class UnsupportedMethod(MiniHttpError, ValueError):
    """Raised when a request uses a method outside GET/POST/PUT/DELETE."""


class TransportError(MiniHttpError):
    """Base for failures raised by the transport while talking to the server."""


class ConnectionError(TransportError):
    """Raised when a TCP/TLS connection fails."""


class ConnectTimeout(ConnectionError):
    """Raised when the connection could not be opened within the connect timeout."""


class TLSNegotiationError(ConnectionError):
    """Raised when the TLS handshake or certificate verification fails."""


class ReadTimeout(TransportError):
    """Raised when the server does not answer within the read timeout."""


class ProtocolError(TransportError):
    """Raised when an HTTP protocol error occurs."""
