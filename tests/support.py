"""Shared builders for tests: clocks, SQLite session factories and seeded entities."""

from datetime import UTC, datetime, timedelta
from decimal import Decimal

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import NullPool, StaticPool

from charity.core.security import PasswordVerifier, TokenService
from charity.models import Base, Case, Category, User
from charity.schemas.auth import Role
from charity.schemas.case import CaseStatus

TEST_SECRET = "test-signing-secret-0123456789abcdef"
T0 = datetime(2025, 3, 1, 12, 0, 0, tzinfo=UTC)

# One verifier for the whole suite; cost 4 is the bcrypt minimum.
PASSWORDS = PasswordVerifier(rounds=4)


class FakeClock:
    """Clock whose time only moves when a test says so."""

    def __init__(self, now: datetime = T0) -> None:
        self.current = now

    def now(self) -> datetime:
        return self.current

    def set(self, when: datetime) -> None:
        self.current = when

    def advance(self, **kwargs: float) -> None:
        self.current = self.current + timedelta(**kwargs)


def token_service(clock: FakeClock | None = None, minutes: int = 60, secret: str = TEST_SECRET) -> TokenService:
    return TokenService(secret=secret, ttl=timedelta(minutes=minutes), clock=clock or FakeClock())


def memory_session_factory() -> sessionmaker:
    """Private in-memory SQLite database with the full schema."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def file_session_factory(path: str) -> sessionmaker:
    """File-backed SQLite database; every session gets its own connection so threads really contend."""
    engine = create_engine(
        f"sqlite:///{path}",
        connect_args={"check_same_thread": False, "timeout": 30},
        poolclass=NullPool,
    )
    Base.metadata.create_all(engine)
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def add_user(
    session: Session,
    username: str = "donor",
    email: str | None = None,
    password: str = "secret-pw",
    role: Role = Role.REGULAR_USER,
) -> User:
    user = User(
        username=username,
        email=email or f"{username}@example.org",
        password_hash=PASSWORDS.hash(password),
        role=role.value,
    )
    session.add(user)
    session.commit()
    session.refresh(user)
    return user


def add_category(session: Session, name: str = "Medical") -> Category:
    category = Category(name=name)
    session.add(category)
    session.commit()
    session.refresh(category)
    return category


def add_case(
    session: Session,
    owner: User,
    category: Category,
    title: str = "Surgery for Sam",
    description: str = "Help Sam get a knee operation",
    goal: Decimal = Decimal("1000.00"),
) -> Case:
    case = Case(
        title=title,
        description=description,
        image_url="https://images.example.org/sam.jpg",
        goal_amount=goal,
        raised_amount=Decimal("0"),
        status=CaseStatus.APPROVED.value,
        user_id=owner.id,
        category_id=category.id,
    )
    session.add(case)
    session.commit()
    session.refresh(case)
    return case
