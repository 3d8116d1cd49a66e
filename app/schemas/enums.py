from enum import Enum

class ExperienceLevel(str, Enum):
    beginner = "beginner"
    intermediate = "intermediate"
    professional = "professional"

class ConnectionState(str, Enum):
    pending = "pending"
    accepted = "accepted"
    declined = "declined"

class ConnectionStatus(str, Enum):
    """Relationship between a viewer and a target user, derived per query."""
    self = "self"
    connected = "connected"
    pending = "pending"
    none = "none"

class RequestDirection(str, Enum):
    outgoing = "outgoing"
    incoming = "incoming"
