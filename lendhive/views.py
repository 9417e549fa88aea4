"""
Read-only snapshots handed to drivers for rendering.

Views copy the fields they show, so a driver can print them while other
threads keep issuing and returning loans.
"""

from __future__ import annotations
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional

from .domain import Borrower, CatalogItem, Loan, LoanState


@dataclass(frozen=True)
class CatalogItemView:
    item_id: str
    title: str
    author: str
    year: int
    available_copies: int
    total_copies: int

    @classmethod
    def of(cls, item: CatalogItem) -> CatalogItemView:
        return cls(
            item_id=item.item_id,
            title=item.title,
            author=item.author,
            year=item.year,
            available_copies=item.available_copies,
            total_copies=item.total_copies,
        )

    def __str__(self) -> str:
        return (
            f"{self.title} - {self.author} ({self.year}) - id:{self.item_id} "
            f"- available:{self.available_copies}/{self.total_copies}"
        )


@dataclass(frozen=True)
class BorrowerView:
    borrower_id: int
    name: str
    email: str
    penalty: Decimal
    loan_count: int

    @classmethod
    def of(cls, borrower: Borrower) -> BorrowerView:
        with borrower.lock:
            return cls(
                borrower_id=borrower.borrower_id,
                name=borrower.name,
                email=borrower.email,
                penalty=borrower.penalty,
                loan_count=len(borrower.loan_ids),
            )

    def __str__(self) -> str:
        return (
            f"Borrower {self.borrower_id}: {self.name} - {self.email} "
            f"- penalty: {self.penalty} - active loans: {self.loan_count}"
        )


@dataclass(frozen=True)
class LoanView:
    loan_id: int
    borrower_id: int
    item_id: str
    state: LoanState
    due_on: date
    returned_on: Optional[date] = None

    @classmethod
    def of(cls, loan: Loan) -> LoanView:
        return cls(
            loan_id=loan.loan_id,
            borrower_id=loan.borrower_id,
            item_id=loan.item_id,
            state=loan.state,
            due_on=loan.due_on,
            returned_on=loan.returned_on,
        )

    def __str__(self) -> str:
        return (
            f"Loan {self.loan_id} - borrower:{self.borrower_id} "
            f"- item:{self.item_id} - state:{self.state.name}"
        )


@dataclass(frozen=True)
class ReturnReceipt:
    """
    Summary of a processed return.

    `penalty_posted` is False when adding the penalty would have pushed the
    borrower past the ceiling; the loan is closed either way.
    """

    loan: LoanView
    penalty: Decimal
    penalty_posted: bool
