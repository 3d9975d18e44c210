import pytest_asyncio
from datetime import datetime, timedelta
from decimal import Decimal
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

import src.domain  # noqa: F401  registers every table on SQLModel.metadata
from src.adapter.repositories.customer_repository import SqlAlchemyCustomerRepository
from src.adapter.repositories.platform_repository import SqlAlchemyPlatformRepository
from src.adapter.repositories.subscription_repository import SqlAlchemySubscriptionRepository
from src.depends import get_session
from src.domain.customer import Customer
from src.domain.platform import Platform, PlatformType
from src.domain.subscription import Subscription, SubscriptionStatus


@pytest_asyncio.fixture(scope="function")
async def engine():
    """In-memory SQLite database, fresh schema per test"""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        echo=False,
        future=True,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(engine):
    """Create a new database session for each test"""
    Session = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)
    async with Session() as session:
        yield session


@pytest_asyncio.fixture
async def seed(db_session):
    """
    Insert a customer and a platform, return a factory for subscriptions

    Subscriptions expire relative to the `now` passed to the factory.
    """
    customer = Customer(id="c1", name="Priya Sharma", email="priya.sharma@example.com")
    platform = Platform(id="p1", name="Amazon Prime", type=PlatformType.SUBSCRIPTION)
    await SqlAlchemyCustomerRepository(db_session).create(customer)
    await SqlAlchemyPlatformRepository(db_session).create(platform)
    await db_session.commit()
    subscriptions = SqlAlchemySubscriptionRepository(db_session)

    async def _subscription(
        subscription_id: str,
        now: datetime,
        expires_in: timedelta,
        status: SubscriptionStatus = SubscriptionStatus.ACTIVE,
        customer_id: str = "c1",
        platform_id: str = "p1",
    ) -> Subscription:
        subscription = Subscription(
            id=subscription_id,
            customer_id=customer_id,
            platform_id=platform_id,
            plan_type="Annual",
            start_date=now - timedelta(days=365),
            expiry_date=now + expires_in,
            cost=Decimal("9999.00"),
            status=status,
        )
        await subscriptions.create(subscription)
        await db_session.commit()
        return subscription

    return _subscription


@pytest_asyncio.fixture
async def client(db_session):
    """Create test client with database session override"""
    from src.api.app import create_app
    from config import ApplicationConfig

    app = create_app(ApplicationConfig)

    async def override_get_session():
        yield db_session

    app.dependency_overrides[get_session] = override_get_session

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
