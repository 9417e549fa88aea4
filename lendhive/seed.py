from __future__ import annotations
import logging

from .api import LibraryRegistry

logger = logging.getLogger(__name__)


def seed_demo_data(registry: LibraryRegistry) -> None:
    # borrowers
    alice = registry.register_borrower("Alice Reader", "alice@example.com").unwrap()
    bob = registry.register_borrower("Bob Borrower", "bob@example.com").unwrap()
    registry.register_borrower("Ava Admin", "admin@example.com")

    # items
    dune = registry.add_catalog_item("Dune", "Frank Herbert", 1965, 2).unwrap()
    hp1 = registry.add_catalog_item("Harry Potter and the Sorcerer's Stone", "J.K. Rowling", 1997, 1).unwrap()
    clean_code = registry.add_catalog_item("Clean Code", "Robert C. Martin", 2008, 3).unwrap()

    # loans
    registry.issue_loan(alice, dune)
    registry.issue_loan(alice, clean_code)
    registry.issue_loan(bob, hp1)

    logger.info("[seed] borrowers: %s", [b.name for b in registry.borrowers.list_all()])
    logger.info("[seed] items: %s", [i.title for i in registry.items.list_all()])
    logger.info("[seed] loans of alice: %s", [l.loan_id for l in registry.loans_of_borrower(alice)])
