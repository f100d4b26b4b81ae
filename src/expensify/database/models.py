"""SQLAlchemy models for expensify database."""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    ForeignKey,
    DateTime,
    Numeric,
    UniqueConstraint,
    create_engine,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

Base = declarative_base()


class Bank(Base):
    """Bank directory model."""

    __tablename__ = "banks"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    slug = Column(String, unique=True, nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    emails = relationship(
        "BankEmail", back_populates="bank", cascade="all, delete-orphan", order_by="BankEmail.id"
    )
    blacklisted_subjects = relationship(
        "BlacklistedSubject",
        back_populates="bank",
        cascade="all, delete-orphan",
        order_by="BlacklistedSubject.id",
    )
    cards = relationship("Card", back_populates="bank")


class BankEmail(Base):
    """Whitelisted sender address of a bank."""

    __tablename__ = "bank_emails"

    id = Column(Integer, primary_key=True)
    bank_id = Column(Integer, ForeignKey("banks.id"), nullable=False)
    address = Column(String, unique=True, nullable=False)

    # Relationships
    bank = relationship("Bank", back_populates="emails")


class BlacklistedSubject(Base):
    """Subject substring that rejects a bank's emails."""

    __tablename__ = "bank_blacklisted_subjects"

    id = Column(Integer, primary_key=True)
    bank_id = Column(Integer, ForeignKey("banks.id"), nullable=False)
    subject = Column(String, nullable=False)

    __table_args__ = (UniqueConstraint("bank_id", "subject", name="uq_bank_subject"),)

    # Relationships
    bank = relationship("Bank", back_populates="blacklisted_subjects")


class Card(Base):
    """Payment card model."""

    __tablename__ = "cards"

    id = Column(Integer, primary_key=True)
    bank_id = Column(Integer, ForeignKey("banks.id"), nullable=True)
    name = Column(String, nullable=False)
    last4 = Column(String, nullable=True)
    card_type = Column(String, nullable=True)
    card_kind = Column(String, nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    bank = relationship("Bank", back_populates="cards")


class Transaction(Base):
    """Transaction model."""

    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True)
    type = Column(String, nullable=False)
    description = Column(String, nullable=False)
    amount = Column(Numeric(12, 2, asdecimal=False), nullable=False)
    occurred_at = Column(String, nullable=False)
    # One transaction per mail message; retried webhook deliveries hit this
    income_message_id = Column(String, unique=True, nullable=True)
    bank_id = Column(Integer, ForeignKey("banks.id"), nullable=True)
    card_id = Column(Integer, nullable=True)
    category_id = Column(String, nullable=True)
    budget_id = Column(String, nullable=True)
    comment = Column(String, nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
