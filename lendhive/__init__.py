"""
lendhive lending registry package.

Exports key modules for convenient imports.
"""

from .atomic import AtomicInteger, IdSequence

from .errors import (
    ErrorKind,
    ValidationError,
    LendingError,
    Result,
)

from .domain import (
    CatalogItem,
    Borrower,
    LoanState,
    Loan,
)

from .views import (
    CatalogItemView,
    BorrowerView,
    LoanView,
    ReturnReceipt,
)

from .repositories import (
    ItemRepo,
    BorrowerRepo,
    LoanRepo,
)

from .services import (
    CatalogService,
    BorrowerService,
    CirculationService,
)

from .api import LibraryRegistry
from .seed import seed_demo_data

__all__ = [
    # atomics
    "AtomicInteger",
    "IdSequence",
    # errors
    "ErrorKind",
    "ValidationError",
    "LendingError",
    "Result",
    # domain
    "CatalogItem",
    "Borrower",
    "LoanState",
    "Loan",
    # views
    "CatalogItemView",
    "BorrowerView",
    "LoanView",
    "ReturnReceipt",
    # repos
    "ItemRepo",
    "BorrowerRepo",
    "LoanRepo",
    # services
    "CatalogService",
    "BorrowerService",
    "CirculationService",
    # api
    "LibraryRegistry",
    # seed
    "seed_demo_data",
]
