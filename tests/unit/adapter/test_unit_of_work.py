import pytest
from unittest.mock import AsyncMock, MagicMock

from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork


@pytest.fixture
def mock_session():
    session = MagicMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    return session


@pytest.mark.asyncio
class TestSqlAlchemyUnitOfWork:
    async def test_commit_and_rollback_delegate_to_session(self, mock_session):
        uow = SqlAlchemyUnitOfWork(mock_session)

        await uow.commit()
        await uow.rollback()

        mock_session.commit.assert_called_once()
        mock_session.rollback.assert_called_once()

    async def test_clean_exit_keeps_committed_work(self, mock_session):
        async with SqlAlchemyUnitOfWork(mock_session) as uow:
            await uow.commit()

        mock_session.rollback.assert_not_called()

    async def test_error_exit_rolls_back(self, mock_session):
        with pytest.raises(ValueError):
            async with SqlAlchemyUnitOfWork(mock_session):
                raise ValueError("boom")

        mock_session.rollback.assert_called_once()
