from __future__ import annotations
from datetime import date
from typing import List, Optional

from .atomic import IdSequence
from .domain import CatalogItem
from .errors import Result
from .repositories import BorrowerRepo, ItemRepo, LoanRepo
from .services import BorrowerService, CatalogService, CirculationService, Clock
from .views import BorrowerView, CatalogItemView, LoanView, ReturnReceipt


class LibraryRegistry:
    """
    A facade that wires repos + services and offers the registry call surface.

    `clock` supplies today's date for loans and returns. `item_ids` defaults
    to the process-wide catalog sequence; borrower and loan ids are counted
    per registry starting at 1.
    """

    def __init__(self, clock: Clock = date.today, item_ids: Optional[IdSequence] = None) -> None:
        # repos
        self.items = ItemRepo()
        self.borrowers = BorrowerRepo()
        self.loans = LoanRepo()

        # services
        self.catalog = CatalogService(self.items, item_ids)
        self.borrower_service = BorrowerService(self.borrowers, IdSequence(1))
        self.circulation = CirculationService(
            self.borrowers, self.items, self.loans, IdSequence(1), clock
        )

    # ---- catalog module
    def add_item(self, item: CatalogItem) -> bool:
        return self.catalog.add_item(item)

    def add_catalog_item(self, title: str, author: str, year: int, total_copies: int) -> Result[str]:
        return self.catalog.create_item(title, author, year, total_copies).map(lambda i: i.item_id)

    def search_items(self, text: str) -> List[CatalogItemView]:
        return [CatalogItemView.of(i) for i in self.catalog.search(text)]

    # ---- borrower module
    def register_borrower(self, name: str, email: str) -> Result[int]:
        return self.borrower_service.register(name, email).map(lambda b: b.borrower_id)

    # ---- circulation module
    def issue_loan(self, borrower_id: int, item_id: str) -> Result[int]:
        return self.circulation.issue_loan(borrower_id, item_id).map(lambda l: l.loan_id)

    def return_loan(self, loan_id: int) -> Optional[ReturnReceipt]:
        return self.circulation.return_loan(loan_id)

    # ---- reporting
    def list_catalog_items(self) -> List[CatalogItemView]:
        return [CatalogItemView.of(i) for i in self.items.list_all()]

    def loans_of_borrower(self, borrower_id: int) -> List[LoanView]:
        return [LoanView.of(l) for l in self.circulation.list_borrower_loans(borrower_id)]

    def borrowers_with_penalties(self) -> List[BorrowerView]:
        return [BorrowerView.of(b) for b in self.borrowers.list_with_penalties()]

    def overdue_loans(self) -> List[LoanView]:
        return [LoanView.of(l) for l in self.circulation.list_overdue_loans()]
