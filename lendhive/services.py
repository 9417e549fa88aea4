from __future__ import annotations
from datetime import date
from typing import Callable, List, Optional
import logging
import threading

from .atomic import IdSequence
from .domain import Borrower, CatalogItem, Loan
from .errors import ErrorKind, Result, ValidationError
from .repositories import BorrowerRepo, ItemRepo, LoanRepo
from .views import LoanView, ReturnReceipt

logger = logging.getLogger(__name__)

Clock = Callable[[], date]


class CatalogService:
    def __init__(self, items: ItemRepo, ids: Optional[IdSequence] = None) -> None:
        self.items = items
        self.ids = ids

    def add_item(self, item: CatalogItem) -> bool:
        added = self.items.add_if_absent(item)
        if added:
            logger.info("[catalog] added %s %r (%d copies)", item.item_id, item.title, item.total_copies)
        else:
            logger.debug("[catalog] item %s already present, ignored", item.item_id)
        return added

    def create_item(self, title: str, author: str, year: int, total_copies: int) -> Result[CatalogItem]:
        try:
            item = CatalogItem.create(title, author, year, total_copies, ids=self.ids)
        except ValidationError as e:
            logger.warning("[catalog] rejected %r: %s", title, e)
            return Result.failure(ErrorKind.VALIDATION, str(e))
        self.add_item(item)
        return Result.success(item)

    def search(self, text: str) -> List[CatalogItem]:
        return self.items.search(text)


class BorrowerService:
    def __init__(self, borrowers: BorrowerRepo, ids: IdSequence) -> None:
        self.borrowers = borrowers
        self.ids = ids

    def register(self, name: str, email: str) -> Result[Borrower]:
        borrower_id = self.ids.next()
        try:
            borrower = Borrower(borrower_id=borrower_id, name=name, email=email)
        except ValidationError as e:
            logger.warning("[register] rejected borrower %r: %s", name, e)
            return Result.failure(ErrorKind.VALIDATION, str(e))
        self.borrowers.add(borrower)
        logger.info("[register] borrower %d: %s", borrower.borrower_id, borrower.name)
        return Result.success(borrower)


class CirculationService:
    """
    The loan/return protocol.

    Both operations run under the borrower's lock, so the steps touching the
    borrower, the item and the loan are atomic per borrower. Item counters
    are lock-free from the caller's point of view and are only ever taken
    inside a borrower lock, never the other way round.
    """

    def __init__(
        self,
        borrowers: BorrowerRepo,
        items: ItemRepo,
        loans: LoanRepo,
        ids: IdSequence,
        clock: Clock = date.today,
    ):
        self.borrowers = borrowers
        self.items = items
        self.loans = loans
        self.ids = ids
        self.clock = clock
        # guards returns for loans whose borrower is not on record
        self._orphan_lock = threading.RLock()

    def issue_loan(self, borrower_id: int, item_id: str) -> Result[Loan]:
        borrower = self.borrowers.get(borrower_id)
        if borrower is None:
            logger.warning("[issue] unknown borrower %s", borrower_id)
            return Result.failure(ErrorKind.NOT_FOUND, f"borrower {borrower_id} not found")

        with borrower.lock:
            # eligibility first: a rejected loan must never touch inventory
            if not borrower.is_eligible():
                logger.warning("[issue] borrower %d is not eligible", borrower_id)
                return Result.failure(
                    ErrorKind.QUOTA_EXCEEDED, f"borrower {borrower_id} cannot take more loans"
                )

            item = self.items.get(item_id)
            if item is None:
                logger.warning("[issue] unknown item %s", item_id)
                return Result.failure(ErrorKind.NOT_FOUND, f"item {item_id} not found")

            if not item.borrow_one():
                logger.warning("[issue] no copies left of %r", item.title)
                return Result.failure(ErrorKind.UNAVAILABLE, f"no copies available of {item.title}")

            loan = Loan.open(self.ids.next(), borrower_id, item_id, today=self.clock())
            self.loans.add(loan)
            borrower.add_loan(loan.loan_id)

        logger.info("[issue] loan %d: borrower=%d item=%s due=%s", loan.loan_id, borrower_id, item_id, loan.due_on)
        return Result.success(loan)

    def return_loan(self, loan_id: int) -> Optional[ReturnReceipt]:
        loan = self.loans.get(loan_id)
        if loan is None:
            logger.debug("[return] unknown loan %s, nothing to do", loan_id)
            return None

        borrower = self.borrowers.get(loan.borrower_id)
        with borrower.lock if borrower is not None else self._orphan_lock:
            if not loan.mark_returned(self.clock()):
                logger.debug("[return] loan %d already returned", loan_id)
                return None

            item = self.items.get(loan.item_id)
            if item is not None:
                item.return_one()
            if borrower is not None:
                borrower.remove_loan(loan_id)

            penalty = loan.compute_penalty()
            posted = penalty == 0
            if borrower is not None and penalty > 0:
                try:
                    borrower.add_penalty(penalty)
                    posted = True
                except ValidationError as e:
                    # the return stands; only the penalty is left unposted
                    logger.warning("[return] loan %d: penalty %s not posted: %s", loan_id, penalty, e)

        logger.info("[return] loan %d closed as %s, penalty=%s", loan_id, loan.state.name, penalty)
        return ReturnReceipt(loan=LoanView.of(loan), penalty=penalty, penalty_posted=posted)

    def list_borrower_loans(self, borrower_id: int) -> List[Loan]:
        return self.loans.list_by_borrower(borrower_id)

    def list_overdue_loans(self) -> List[Loan]:
        return self.loans.list_overdue(self.clock())
