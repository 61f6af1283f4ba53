"""
Service layer for gyros.

Contains the logic that orchestrates domain objects and infrastructure:
- CheckoutStrategy: Branch checkout with a fallback branch
- DispatchService: Sequential fan-out of one command over a repository set

Services are the primary API for commands to use.
They handle coordination between infrastructure and domain layers.
"""

from .checkout_service import CheckoutStrategy
from .dispatch_service import DispatchService

__all__ = [
    'CheckoutStrategy',
    'DispatchService',
]
