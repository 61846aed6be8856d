from .serialization import IMessageSerializer
from .transport import ITransport, TransportMessage

__all__ = [
    "IMessageSerializer",
    "ITransport",
    "TransportMessage",
]
