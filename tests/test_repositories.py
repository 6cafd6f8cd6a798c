"""
Tests for repository layer.

Covers:
- Customer lookups, search and paging
- Order filtering by customer
- Commit error translation and rollback
"""

from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from customer_orders.domain.exceptions import (DataIntegrityException,
                                               PersistenceException)
from customer_orders.models import Customer, Order
from customer_orders.repositories import CustomerRepository, OrderRepository


@pytest.fixture
def customers(db_session):
    return CustomerRepository(db_session)


@pytest.fixture
def orders(db_session):
    return OrderRepository(db_session)


class TestCustomerRepository:
    """Test customer repository."""

    def test_add_assigns_id_and_timestamps(self, customers):
        customer = customers.add(Customer(name="Grace Hopper", email="grace@example.com"))

        assert customer.id is not None
        assert customer.created_at is not None
        assert customer.updated_at is not None

    def test_get_returns_none_for_missing_id(self, customers):
        assert customers.get(999) is None

    def test_get_by_email_is_case_insensitive(self, customers, customer):
        found = customers.get_by_email("ADA@Example.com")
        assert found is not None
        assert found.id == customer.id

    def test_list_orders_by_id_and_pages(self, customers):
        for i in range(5):
            customers.add(Customer(name=f"Customer {i}", email=f"c{i}@example.com"))

        page = customers.list(skip=1, limit=2)

        assert [c.name for c in page] == ["Customer 1", "Customer 2"]
        assert customers.count() == 5

    def test_search_matches_name_or_email(self, customers):
        customers.add(Customer(name="Alan Turing", email="alan@bletchley.uk"))
        customers.add(Customer(name="Joan Clarke", email="joan@example.com"))
        customers.add(Customer(name="Tommy Flowers", email="tommy@bletchley.uk"))

        assert {c.name for c in customers.list(search="bletchley")} == {
            "Alan Turing",
            "Tommy Flowers",
        }
        assert [c.name for c in customers.list(search="joan")] == ["Joan Clarke"]
        assert customers.count(search="bletchley") == 2

    def test_search_escapes_like_wildcards(self, customers):
        customers.add(Customer(name="Alan Turing", email="alan@bletchley.uk"))
        customers.add(Customer(name="100% Cotton Ltd", email="sales@cotton.example"))

        assert [c.name for c in customers.list(search="%")] == ["100% Cotton Ltd"]
        assert customers.count(search="_") == 0

    def test_update_applies_fields(self, customers, customer):
        updated = customers.update(customer, {"name": "Augusta Ada King"})
        assert updated.name == "Augusta Ada King"
        assert customers.get(customer.id).name == "Augusta Ada King"

    def test_duplicate_email_raises_integrity_error(self, customers, customer, db_session):
        with pytest.raises(DataIntegrityException):
            customers.add(Customer(name="Impostor", email="ada@example.com"))

        # Session is usable again after the rollback
        assert customers.count() == 1

    def test_delete_cascades_to_orders(self, customers, orders, customer, order):
        customers.delete(customer)

        assert customers.get(customer.id) is None
        assert orders.count() == 0


class TestOrderRepository:
    """Test order repository."""

    def test_add_and_get(self, orders, customer):
        order = orders.add(Order(product="Punch cards", quantity=100, customer_id=customer.id))

        fetched = orders.get(order.id)
        assert fetched.product == "Punch cards"
        assert fetched.customer.id == customer.id

    def test_list_filters_by_customer(self, orders, customers, customer):
        other = customers.add(Customer(name="Charles Babbage", email="charles@example.com"))
        orders.add(Order(product="Gear", quantity=1, customer_id=customer.id))
        orders.add(Order(product="Lever", quantity=3, customer_id=other.id))
        orders.add(Order(product="Crank", quantity=2, customer_id=customer.id))

        mine = orders.list(customer_id=customer.id)

        assert [o.product for o in mine] == ["Gear", "Crank"]
        assert orders.count(customer_id=customer.id) == 2
        assert orders.count() == 3

    def test_missing_customer_violates_foreign_key(self, orders):
        with pytest.raises(DataIntegrityException):
            orders.add(Order(product="Orphan", quantity=1, customer_id=12345))

    def test_non_positive_quantity_violates_check(self, orders, customer):
        with pytest.raises(DataIntegrityException):
            orders.add(Order(product="Nothing", quantity=0, customer_id=customer.id))

    def test_delete(self, orders, order):
        orders.delete(order)
        assert orders.get(order.id) is None


class TestCommitErrors:
    """Test translation of non-integrity database errors."""

    def test_operational_error_becomes_persistence_exception(self):
        db = MagicMock()
        db.commit.side_effect = OperationalError("COMMIT", {}, Exception("database is locked"))
        repo = CustomerRepository(db)

        with pytest.raises(PersistenceException) as exc_info:
            repo.add(Customer(name="X", email="x@example.com"))

        assert exc_info.value.details["operation"] == "insert"
        db.rollback.assert_called_once()
        db.refresh.assert_not_called()


class TestReadErrors:
    """Test translation of database errors raised while reading."""

    @pytest.mark.parametrize(
        "repo_class, call",
        [
            (CustomerRepository, lambda repo: repo.get(1)),
            (CustomerRepository, lambda repo: repo.get_by_email("ada@example.com")),
            (CustomerRepository, lambda repo: repo.list(search="ada")),
            (CustomerRepository, lambda repo: repo.count()),
            (OrderRepository, lambda repo: repo.get(1)),
            (OrderRepository, lambda repo: repo.list(customer_id=1)),
            (OrderRepository, lambda repo: repo.count()),
        ],
    )
    def test_read_error_becomes_persistence_exception(self, repo_class, call):
        db = MagicMock()
        db.query.side_effect = OperationalError("SELECT", {}, Exception("no such table"))

        with pytest.raises(PersistenceException):
            call(repo_class(db))

        db.rollback.assert_called_once()
