"""Service layer public API.

This package exposes the building blocks for the service layer so that
callers can import from :mod:`streamhub.services` without knowing internal
structure.

Re-exports
----------
- Base primitives (from ``streamhub.services._shared.base``)
    * :class:`BaseService`
    * :class:`ServiceContext`

- Credential service (from ``streamhub.services.identity``)
    * :class:`CredentialService`

- Token service (from ``streamhub.services.auth``)
    * :class:`TokenService`

- Relationship toggle engine (from ``streamhub.services.relationships``)
    * :class:`RelationshipService`

- Aggregation views (from ``streamhub.services.views``)
    * :class:`ViewService`
"""

from __future__ import annotations

from ._shared.base import BaseService, ServiceContext
from .auth.service import TokenService
from .identity.service import CredentialService
from .relationships.service import RelationshipService
from .views.service import ViewService

__all__ = [
    "BaseService",
    "ServiceContext",
    "CredentialService",
    "TokenService",
    "RelationshipService",
    "ViewService",
]
