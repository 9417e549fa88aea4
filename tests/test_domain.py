from datetime import date, timedelta
from decimal import Decimal

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from lendhive import Borrower, CatalogItem, IdSequence, Loan, LoanState, ValidationError

START = date(2024, 3, 1)


# --------------------------------------------------------------------------- #
#   catalog items                                                             #
# --------------------------------------------------------------------------- #
@pytest.mark.parametrize(
    "year, copies",
    [(999, 1), (date.today().year + 1, 1), (1999, 0), (1999, -2)],
)
def test_item_rejects_bad_year_or_copies(year, copies):
    with pytest.raises(ValidationError):
        CatalogItem.create("Title", "Author", year, copies, ids=IdSequence(1))


@pytest.mark.parametrize("year", [CatalogItem.MIN_YEAR, date.today().year])
def test_item_accepts_year_bounds(year):
    item = CatalogItem.create("Title", "Author", year, 1, ids=IdSequence(1))
    assert item.year == year


def test_item_starts_fully_available():
    item = CatalogItem.create("Dune", "Frank Herbert", 1965, 4, ids=IdSequence(1))
    assert item.available_copies == item.total_copies == 4
    assert item.is_available()


def test_item_ids_are_monotonic_and_skip_rejected_items():
    ids = IdSequence(1_000_000_000_001)
    a = CatalogItem.create("A", "X", 2000, 1, ids=ids)
    with pytest.raises(ValidationError):
        CatalogItem.create("B", "X", 2000, 0, ids=ids)
    c = CatalogItem.create("C", "X", 2000, 1, ids=ids)
    assert a.item_id == "1000000000001"
    assert c.item_id == "1000000000002"


def test_borrow_one_until_depleted():
    item = CatalogItem.create("A", "X", 2000, 2, ids=IdSequence(1))
    assert item.borrow_one()
    assert item.borrow_one()
    assert not item.borrow_one()
    assert item.available_copies == 0
    assert not item.is_available()


def test_return_one_is_noop_at_total():
    item = CatalogItem.create("A", "X", 2000, 2, ids=IdSequence(1))
    assert not item.return_one()
    assert item.available_copies == 2

    item.borrow_one()
    assert item.return_one()
    assert not item.return_one()
    assert item.available_copies == 2


# --------------------------------------------------------------------------- #
#   borrowers                                                                 #
# --------------------------------------------------------------------------- #
@pytest.mark.parametrize(
    "name, email",
    [("", "a@b.co"), ("   ", "a@b.co"), ("Ann", "bad-email"), ("Ann", "@b.co"), ("Ann", "a@")],
)
def test_borrower_validation(name, email):
    with pytest.raises(ValidationError):
        Borrower(borrower_id=1, name=name, email=email)


def test_borrower_fields_are_trimmed():
    b = Borrower(borrower_id=1, name="  Ann  ", email="a@b.co ")
    assert b.name == "Ann"
    assert b.email == "a@b.co"


def test_email_is_matched_before_trimming():
    with pytest.raises(ValidationError):
        Borrower(borrower_id=1, name="Ann", email=" a@b.co")


def test_new_borrower_starts_clean():
    b = Borrower(borrower_id=1, name="Ann", email="a@b.co")
    assert b.loan_ids == []
    assert b.penalty == Decimal("0")


@pytest.mark.parametrize(
    "extra",
    [{"penalty": Decimal("9999")}, {"penalty": Decimal("-100")}, {"loan_ids": [1, 2, 3, 4]}],
)
def test_loans_and_penalty_cannot_be_seeded_at_construction(extra):
    with pytest.raises(TypeError):
        Borrower(borrower_id=1, name="Ann", email="a@b.co", **extra)


def test_eligibility_follows_loan_quota():
    b = Borrower(borrower_id=1, name="Ann", email="a@b.co")
    for loan_id in range(Borrower.LOAN_QUOTA):
        assert b.is_eligible()
        b.add_loan(loan_id)
    assert not b.is_eligible()

    b.remove_loan(1)
    assert b.loan_ids == [0, 2]
    assert b.is_eligible()


def test_remove_unknown_loan_is_noop():
    b = Borrower(borrower_id=1, name="Ann", email="a@b.co")
    b.add_loan(7)
    b.remove_loan(8)
    assert b.loan_ids == [7]


def test_penalty_ceiling_is_checked_before_commit():
    b = Borrower(borrower_id=1, name="Ann", email="a@b.co")
    b.add_penalty(4800)
    with pytest.raises(ValidationError):
        b.add_penalty(500)
    assert b.penalty == Decimal("4800")

    b.add_penalty(200)
    assert b.penalty == Borrower.PENALTY_CEILING
    assert b.is_eligible()


def test_negative_penalty_is_rejected():
    b = Borrower(borrower_id=1, name="Ann", email="a@b.co")
    with pytest.raises(ValidationError):
        b.add_penalty(-1)


# --------------------------------------------------------------------------- #
#   loans                                                                     #
# --------------------------------------------------------------------------- #
def test_loan_is_due_in_fourteen_days():
    loan = Loan.open(1, 1, "1000000000001", today=START)
    assert loan.state is LoanState.ACTIVE
    assert loan.due_on == START + timedelta(days=14)
    assert loan.returned_on is None


def test_same_day_return_has_no_penalty():
    loan = Loan.open(1, 1, "x", today=START)
    assert loan.mark_returned(START)
    assert loan.state is LoanState.RETURNED
    assert loan.compute_penalty() == 0


def test_late_return_is_overdue_with_penalty():
    loan = Loan.open(1, 1, "x", today=START)
    loan.mark_returned(START + timedelta(days=17))
    assert loan.state is LoanState.OVERDUE
    assert loan.compute_penalty() == Decimal("1500")


def test_return_date_is_write_once():
    loan = Loan.open(1, 1, "x", today=START)
    loan.mark_returned(START + timedelta(days=20))
    assert not loan.mark_returned(START)
    assert loan.returned_on == START + timedelta(days=20)
    assert loan.state is LoanState.OVERDUE


def test_returned_loan_penalty_is_frozen():
    loan = Loan.open(1, 1, "x", today=START)
    loan.mark_returned(START + timedelta(days=15))
    assert loan.compute_penalty(START + timedelta(days=100)) == Decimal("500")


def test_is_overdue():
    loan = Loan.open(1, 1, "x", today=START)
    assert not loan.is_overdue(START + timedelta(days=14))
    assert loan.is_overdue(START + timedelta(days=15))
    loan.mark_returned(START + timedelta(days=15))
    assert not loan.is_overdue(START + timedelta(days=30))


@given(a=st.integers(min_value=0, max_value=400), b=st.integers(min_value=0, max_value=400))
@settings(max_examples=100)
def test_penalty_is_monotonic_in_reference_date(a, b):
    loan = Loan.open(1, 1, "x", today=START)
    early, late = sorted((a, b))
    assert loan.compute_penalty(START + timedelta(days=early)) <= loan.compute_penalty(
        START + timedelta(days=late)
    )


@given(days=st.integers(min_value=-30, max_value=14))
def test_penalty_is_zero_up_to_due_date(days):
    loan = Loan.open(1, 1, "x", today=START)
    assert loan.compute_penalty(START + timedelta(days=days)) == 0
