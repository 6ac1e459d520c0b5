"""SQLAlchemy models for the peopleledger database."""

from sqlalchemy import (
    Column,
    Integer,
    String,
    ForeignKey,
    DateTime,
    Date,
    Numeric,
    Boolean,
    LargeBinary,
    create_engine,
    event,
)
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

Base = declarative_base()

# SQL Server "money" precision
MONEY = Numeric(19, 4)


class Person(Base):
    """Person model."""

    __tablename__ = "persons"

    id = Column("code", Integer, primary_key=True)
    name = Column(String(50), nullable=True)
    surname = Column(String(50), nullable=True)
    id_number = Column(String(50), unique=True, nullable=False)
    version_id = Column(Integer, nullable=False)

    # Relationships
    accounts = relationship("Account", back_populates="person", passive_deletes="all")

    __mapper_args__ = {"version_id_col": version_id}


class Account(Base):
    """Account model. ``outstanding_balance`` is only changed by SQL increments."""

    __tablename__ = "accounts"

    id = Column("code", Integer, primary_key=True)
    person_id = Column(
        "person_code",
        Integer,
        ForeignKey("persons.code", ondelete="RESTRICT", name="fk_account_person"),
        nullable=False,
    )
    account_number = Column(String(50), unique=True, nullable=False)
    outstanding_balance = Column(MONEY, nullable=False, default=0)
    is_closed = Column(Boolean, nullable=False, default=False)
    version_id = Column(Integer, nullable=False)

    # Relationships
    person = relationship("Person", back_populates="accounts")
    transactions = relationship("Transaction", back_populates="account", passive_deletes="all")

    __mapper_args__ = {"version_id_col": version_id}


class Transaction(Base):
    """Transaction model."""

    __tablename__ = "transactions"

    id = Column("code", Integer, primary_key=True)
    account_id = Column(
        "account_code",
        Integer,
        ForeignKey("accounts.code", ondelete="RESTRICT", name="fk_transaction_account"),
        nullable=False,
    )
    transaction_date = Column(Date, nullable=False)
    capture_date = Column(DateTime, nullable=False)
    amount = Column(MONEY, nullable=False)
    description = Column(String(100), nullable=False)
    version_id = Column(Integer, nullable=False)

    # Relationships
    account = relationship("Account", back_populates="transactions")

    __mapper_args__ = {"version_id_col": version_id}


class User(Base):
    """Login credential model."""

    __tablename__ = "users"

    id = Column("code", Integer, primary_key=True)
    name = Column(String(50), nullable=False)
    username = Column(String(50), unique=True, nullable=False)
    password_hash = Column(LargeBinary(32), nullable=False)
    password_salt = Column(LargeBinary(32), nullable=False)


@event.listens_for(Engine, "connect")
def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    """Turn on FK enforcement so restrict-on-delete holds on SQLite."""
    module = type(dbapi_connection).__module__
    if not module.startswith("sqlite3"):
        return
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
