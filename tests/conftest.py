"""Pytest fixtures for testing"""

import pytest
from decimal import Decimal
from typing import Generator
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from retirement_calculator.api.dependencies import get_deposit_cache, get_interest_cache
from retirement_calculator.api.main import create_app
from retirement_calculator.domain.models import LifestyleDeposit
from retirement_calculator.infrastructure.cache.memory import InMemoryCache
from retirement_calculator.infrastructure.database.models import Base
from retirement_calculator.infrastructure.database.repositories import LifestyleDepositRepository
from retirement_calculator.infrastructure.database.session import get_db


# Test database
TEST_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db() -> Generator[Session, None, None]:
    """Create test database and session"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def repository(db: Session) -> LifestyleDepositRepository:
    """Store seeded with the two standard lifestyles"""
    repo = LifestyleDepositRepository(db)
    repo.save(LifestyleDeposit(lifestyle_type="simple", monthly_deposit=Decimal("1000.00")))
    repo.save(LifestyleDeposit(lifestyle_type="fancy", monthly_deposit=Decimal("3000.00")))
    db.commit()
    return repo


@pytest.fixture
def deposit_cache() -> InMemoryCache:
    """Deposit namespace as populated at startup"""
    return InMemoryCache(name="deposit", initial={"simple": "1000.00", "fancy": "3000.00"})


@pytest.fixture
def interest_cache() -> InMemoryCache:
    """Interest-rate namespace as populated at startup"""
    return InMemoryCache(name="interest", initial={"simple": "4.5", "fancy": "6.0"})


@pytest.fixture
def client(
    db: Session,
    repository: LifestyleDepositRepository,
    deposit_cache: InMemoryCache,
    interest_cache: InMemoryCache,
) -> TestClient:
    """Create FastAPI test client with test database and in-memory caches"""
    app = create_app(preload_cache=False)

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_deposit_cache] = lambda: deposit_cache
    app.dependency_overrides[get_interest_cache] = lambda: interest_cache
    return TestClient(app)
