from __future__ import annotations
from datetime import date, timedelta
import logging

from lendhive import LibraryRegistry, seed_demo_data


def demo_flow() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )
    registry = LibraryRegistry()
    seed_demo_data(registry)

    # Search
    print("\n[demo] search 'clean':", [i.title for i in registry.search_items("clean")])

    # Inventory
    print("\n[demo] catalog:")
    for view in registry.list_catalog_items():
        print(f"  - {view}")

    # Return a loan late (overdue -> penalty)
    alice = next(b for b in registry.borrowers.list_all() if b.name == "Alice Reader")
    late = registry.loans.get(alice.loan_ids[0])
    if late:
        # Simulate overdue (manually tweak due date for the demo)
        late.due_on = date.today() - timedelta(days=3)
        receipt = registry.return_loan(late.loan_id)
        if receipt:
            print(f"\n[demo] returned loan {late.loan_id}: {receipt.loan.state.name}, penalty={receipt.penalty}")

    # Single-copy item already out: a second borrower is turned away
    hp1 = next(i for i in registry.list_catalog_items() if i.total_copies == 1)
    attempt = registry.issue_loan(alice.borrower_id, hp1.item_id)
    print(
        "\n[demo] Alice tries to borrow", hp1.title + ":",
        "SUCCESS" if attempt.ok else attempt.error.name,
    )

    print("\n[demo] borrowers with penalties:")
    for view in registry.borrowers_with_penalties():
        print(f"  - {view}")

    print("\n[demo] overdue loans:", [l.loan_id for l in registry.overdue_loans()])


if __name__ == "__main__":
    demo_flow()
