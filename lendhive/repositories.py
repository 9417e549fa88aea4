from __future__ import annotations
from datetime import date
from typing import Dict, List, Optional
import threading

from .domain import Borrower, CatalogItem, Loan


class ItemRepo:
    def __init__(self) -> None:
        self._items: Dict[str, CatalogItem] = {}
        self._lock = threading.Lock()

    def add_if_absent(self, item: CatalogItem) -> bool:
        with self._lock:
            if item.item_id in self._items:
                return False
            self._items[item.item_id] = item
            return True

    def get(self, item_id: str) -> Optional[CatalogItem]:
        with self._lock:
            return self._items.get(item_id)

    def list_all(self) -> List[CatalogItem]:
        with self._lock:
            return list(self._items.values())

    def search(self, text: str) -> List[CatalogItem]:
        t = text.lower().strip()

        def matches(i: CatalogItem) -> bool:
            return t in i.title.lower() or t in i.author.lower() or t in i.item_id

        return [i for i in self.list_all() if matches(i)]


class BorrowerRepo:
    def __init__(self) -> None:
        self._borrowers: Dict[int, Borrower] = {}
        self._lock = threading.Lock()

    def add(self, borrower: Borrower) -> None:
        with self._lock:
            self._borrowers[borrower.borrower_id] = borrower

    def get(self, borrower_id: int) -> Optional[Borrower]:
        with self._lock:
            return self._borrowers.get(borrower_id)

    def list_all(self) -> List[Borrower]:
        with self._lock:
            return list(self._borrowers.values())

    def list_with_penalties(self) -> List[Borrower]:
        return [b for b in self.list_all() if b.penalty > 0]


class LoanRepo:
    def __init__(self) -> None:
        self._loans: Dict[int, Loan] = {}
        self._lock = threading.Lock()

    def add(self, loan: Loan) -> None:
        with self._lock:
            self._loans[loan.loan_id] = loan

    def get(self, loan_id: int) -> Optional[Loan]:
        with self._lock:
            return self._loans.get(loan_id)

    def list_all(self) -> List[Loan]:
        with self._lock:
            return list(self._loans.values())

    def list_by_borrower(self, borrower_id: int) -> List[Loan]:
        return [l for l in self.list_all() if l.borrower_id == borrower_id]

    def list_overdue(self, today: Optional[date] = None) -> List[Loan]:
        return [l for l in self.list_all() if l.is_overdue(today)]
