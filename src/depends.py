from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession
from config import ApplicationConfig
from src.domain.notification_rules import NotificationRuleEngine

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)


async def get_session() -> AsyncSession:
    async with AsyncSessionLocal() as session:
        yield session


def get_rule_engine() -> NotificationRuleEngine:
    return NotificationRuleEngine(
        expiring_soon_days=ApplicationConfig.NOTIFICATION_EXPIRING_SOON_DAYS,
        expired_window_days=ApplicationConfig.NOTIFICATION_EXPIRED_WINDOW_DAYS,
        date_format=ApplicationConfig.NOTIFICATION_DATE_FORMAT,
    )
