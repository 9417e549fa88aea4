from __future__ import annotations
from dataclasses import dataclass, field
from datetime import date, timedelta
from decimal import Decimal
from enum import Enum, auto
from typing import ClassVar, List, Optional
import re
import threading

from .atomic import ITEM_IDS, AtomicInteger, IdSequence
from .errors import ValidationError

CENTS = Decimal("0.01")
EMAIL_PATTERN = re.compile(r"^[A-Za-z0-9+_.-]+@(.+)$")


def _money(amount) -> Decimal:
    return Decimal(amount).quantize(CENTS)


@dataclass
class CatalogItem:
    item_id: str
    title: str
    author: str
    year: int
    total_copies: int
    _available: AtomicInteger = field(init=False, repr=False, compare=False)

    MIN_YEAR: ClassVar[int] = 1000

    def __post_init__(self) -> None:
        self._check(self.year, self.total_copies)
        self._available = AtomicInteger(self.total_copies)

    @classmethod
    def create(
        cls,
        title: str,
        author: str,
        year: int,
        total_copies: int,
        ids: Optional[IdSequence] = None,
    ) -> CatalogItem:
        # rejected items never consume an id
        cls._check(year, total_copies)
        item_id = str((ids or ITEM_IDS).next())
        return cls(item_id=item_id, title=title, author=author, year=year, total_copies=total_copies)

    @classmethod
    def _check(cls, year: int, total_copies: int) -> None:
        if year < cls.MIN_YEAR or year > date.today().year:
            raise ValidationError(f"invalid publication year: {year}")
        if total_copies <= 0:
            raise ValidationError("total copies must be greater than zero")

    @property
    def available_copies(self) -> int:
        return self._available.get()

    def is_available(self) -> bool:
        return self.available_copies > 0

    def borrow_one(self) -> bool:
        """Take one copy. Returns False only when none are left."""
        while True:
            current = self._available.get()
            if current <= 0:
                return False
            if self._available.compare_and_set(current, current - 1):
                return True

    def return_one(self) -> bool:
        """Put one copy back. No-op (False) when every copy is already on the shelf."""
        while True:
            current = self._available.get()
            if current >= self.total_copies:
                return False
            if self._available.compare_and_set(current, current + 1):
                return True


@dataclass
class Borrower:
    borrower_id: int
    name: str
    email: str
    loan_ids: List[int] = field(default_factory=list, init=False)
    penalty: Decimal = field(default=Decimal("0.00"), init=False)
    lock: threading.RLock = field(default_factory=threading.RLock, repr=False, compare=False)

    LOAN_QUOTA: ClassVar[int] = 3
    PENALTY_CEILING: ClassVar[Decimal] = Decimal("5000")

    def __post_init__(self) -> None:
        self.name = (self.name or "").strip()
        if not self.name:
            raise ValidationError("name is required")
        if not EMAIL_PATTERN.match(self.email or ""):
            raise ValidationError(f"invalid email: {self.email!r}")
        self.email = self.email.strip()

    def is_eligible(self) -> bool:
        return len(self.loan_ids) < self.LOAN_QUOTA and self.penalty <= self.PENALTY_CEILING

    def add_loan(self, loan_id: int) -> None:
        self.loan_ids.append(loan_id)

    def remove_loan(self, loan_id: int) -> None:
        if loan_id in self.loan_ids:
            self.loan_ids.remove(loan_id)

    def add_penalty(self, amount) -> None:
        amount = _money(amount)
        if amount < 0:
            raise ValidationError("penalty amount cannot be negative")
        total = self.penalty + amount
        if total > self.PENALTY_CEILING:
            raise ValidationError(
                f"penalty {total} would exceed the ceiling of {self.PENALTY_CEILING}"
            )
        self.penalty = total


class LoanState(Enum):
    ACTIVE = auto()
    RETURNED = auto()
    OVERDUE = auto()


@dataclass
class Loan:
    loan_id: int
    borrower_id: int
    item_id: str
    loaned_on: date
    due_on: date
    returned_on: Optional[date] = None
    state: LoanState = LoanState.ACTIVE

    LOAN_DAYS: ClassVar[int] = 14
    PENALTY_PER_DAY: ClassVar[Decimal] = Decimal("500")

    @classmethod
    def open(cls, loan_id: int, borrower_id: int, item_id: str, today: Optional[date] = None) -> Loan:
        today = today or date.today()
        return cls(
            loan_id=loan_id,
            borrower_id=borrower_id,
            item_id=item_id,
            loaned_on=today,
            due_on=today + timedelta(days=cls.LOAN_DAYS),
        )

    def compute_penalty(self, today: Optional[date] = None) -> Decimal:
        reference = self.returned_on or today or date.today()
        days_late = (reference - self.due_on).days
        if days_late <= 0:
            return _money(0)
        return _money(self.PENALTY_PER_DAY * days_late)

    def is_overdue(self, today: Optional[date] = None) -> bool:
        today = today or date.today()
        return self.returned_on is None and today > self.due_on

    def mark_returned(self, today: Optional[date] = None) -> bool:
        """Close the loan. Returns False if it was already closed."""
        if self.returned_on is not None:
            return False
        self.returned_on = today or date.today()
        self.state = LoanState.OVERDUE if self.compute_penalty() > 0 else LoanState.RETURNED
        return True
