"""Tests for domain entities."""

import math

import pytest

from expensify.domain.entities import (
    ExtractedTransactionData,
    TransactionInsert,
    TransactionType,
)


def test_extracted_data_rejects_invalid_amounts():
    """Test that extracted amounts are finite and positive."""
    for amount in (None, math.nan, math.inf, -1.0, 0.0):
        with pytest.raises(ValueError):
            ExtractedTransactionData(
                type=TransactionType.EXPENSE,
                description="KFC",
                amount=amount,
                occurred_at="2026-01-19T22:51:00.000Z",
            )


def test_extracted_data_requires_description():
    """Test that descriptions are non-empty."""
    with pytest.raises(ValueError):
        ExtractedTransactionData(
            type=TransactionType.EXPENSE,
            description="  ",
            amount=1.0,
            occurred_at="2026-01-19T22:51:00.000Z",
        )


def test_transaction_insert_to_dict():
    """Test the persistable row shape."""
    insert = TransactionInsert(
        type=TransactionType.INCOME,
        description="Reverso",
        amount=4.25,
        occurred_at="2026-01-02T15:00:00.000Z",
        income_message_id="msg-1",
        bank_id=3,
    )

    assert insert.to_dict() == {
        "type": "income",
        "description": "Reverso",
        "amount": 4.25,
        "occurred_at": "2026-01-02T15:00:00.000Z",
        "income_message_id": "msg-1",
        "bank_id": 3,
        "card_id": None,
        "category_id": None,
        "budget_id": None,
        "comment": None,
    }
