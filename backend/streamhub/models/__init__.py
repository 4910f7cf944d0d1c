from streamhub.models.enums import RelationshipKind, RelationshipState
from streamhub.models.relationship import RELATIONSHIP_UNIQUE_CONSTRAINT, Relationship
from streamhub.models.user import User
from streamhub.models.video import Video

__all__ = [
    "RELATIONSHIP_UNIQUE_CONSTRAINT",
    "Relationship",
    "RelationshipKind",
    "RelationshipState",
    "User",
    "Video",
]
