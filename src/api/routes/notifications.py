"""Notification API Routes

FastAPI routes for the notification sync and the dashboard notification list.
"""

from typing import Annotated
from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import JSONResponse
from sqlmodel.ext.asyncio.session import AsyncSession

from src.api.schemas.notification_request import ListNotificationsQuerySchema
from src.app.use_cases.notifications.dtos import (
    NotificationSyncResultDTO,
    NotificationDTO,
    ListNotificationsResponseDTO,
    MarkAllReadResponseDTO,
)
from src.app.use_cases.notifications.generate_notifications import GenerateNotifications
from src.app.use_cases.notifications.list_notifications import ListNotifications
from src.app.use_cases.notifications.mark_notification_read import (
    MarkNotificationRead,
    MarkAllNotificationsRead,
)
from src.adapter.repositories.customer_repository import SqlAlchemyCustomerRepository
from src.adapter.repositories.platform_repository import SqlAlchemyPlatformRepository
from src.adapter.repositories.subscription_repository import SqlAlchemySubscriptionRepository
from src.adapter.repositories.notification_repository import SqlAlchemyNotificationRepository
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.depends import get_session, get_rule_engine
from src.domain.notification_rules import NotificationRuleEngine
from src.api.error import ClientError


router = APIRouter(prefix="/notifications", tags=["Notifications"])


@router.post(
    "/sync",
    response_model=NotificationSyncResultDTO,
    status_code=status.HTTP_200_OK,
    responses={
        500: {
            "description": "Sync pass failed",
            "content": {
                "application/json": {
                    "example": {"error": "Failed to generate notifications"}
                }
            }
        }
    }
)
async def sync_notifications(
    session: AsyncSession = Depends(get_session),
    rule_engine: NotificationRuleEngine = Depends(get_rule_engine),
):
    """
    Run one notification sync pass.

    Scans active subscriptions, stores new expiring-soon / expired
    notifications and moves lapsed subscriptions to `expired`. Safe to call
    repeatedly and concurrently with the background worker: a second call
    with nothing changed creates nothing.

    **Request body:** none

    **Example response:**
    ```json
    {
      "success": true,
      "notificationsCreated": 2,
      "subscriptionsUpdated": 1,
      "subscriptionsSkipped": 0,
      "evaluatedAt": "2024-01-27T09:00:00"
    }
    ```

    **Returns:**
    - 200: Pass completed
    - 500: `{"error": "..."}` when the store could not be read or written
    """
    use_case = GenerateNotifications(
        uow=SqlAlchemyUnitOfWork(session),
        subscription_repo=SqlAlchemySubscriptionRepository(session),
        customer_repo=SqlAlchemyCustomerRepository(session),
        platform_repo=SqlAlchemyPlatformRepository(session),
        notification_repo=SqlAlchemyNotificationRepository(session),
        rule_engine=rule_engine,
    )
    result = await use_case.execute()

    if result.is_err():
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": result.error.message},
        )

    return result.value


@router.get(
    "",
    response_model=ListNotificationsResponseDTO,
    status_code=status.HTTP_200_OK,
)
async def list_notifications(
    query: Annotated[ListNotificationsQuerySchema, Query()],
    session: AsyncSession = Depends(get_session),
):
    """
    List stored notifications, newest first.

    **Query parameters:**
    - `search` (optional): Text matched against title or message
    - `unread_only` (optional): Only unread notifications
    - `limit` (optional): Page size, 1-200 (default 50)
    - `offset` (optional): Notifications to skip (default 0)
    """
    use_case = ListNotifications(SqlAlchemyNotificationRepository(session))
    result = await use_case.execute(
        search=query.search,
        unread_only=query.unread_only,
        limit=query.limit,
        offset=query.offset,
    )

    if result.is_err():
        raise ClientError(result.error, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)

    return result.value


@router.post(
    "/read-all",
    response_model=MarkAllReadResponseDTO,
    status_code=status.HTTP_200_OK,
)
async def mark_all_notifications_read(
    session: AsyncSession = Depends(get_session),
):
    """Mark every unread notification as read."""
    use_case = MarkAllNotificationsRead(
        SqlAlchemyUnitOfWork(session), SqlAlchemyNotificationRepository(session)
    )
    result = await use_case.execute()

    if result.is_err():
        raise ClientError(result.error, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)

    return result.value


@router.post(
    "/{notification_id}/read",
    response_model=NotificationDTO,
    status_code=status.HTTP_200_OK,
    responses={
        404: {
            "description": "Notification not found",
            "content": {
                "application/json": {
                    "example": {
                        "error": {
                            "code": "NOTIFICATION_NOT_FOUND",
                            "message": "Notification 5b9e2f1c-... not found"
                        }
                    }
                }
            }
        }
    }
)
async def mark_notification_read(
    notification_id: str,
    session: AsyncSession = Depends(get_session),
):
    """Mark one notification as read."""
    use_case = MarkNotificationRead(
        SqlAlchemyUnitOfWork(session), SqlAlchemyNotificationRepository(session)
    )
    result = await use_case.execute(notification_id)

    if result.is_err():
        if result.error.code == "NOTIFICATION_NOT_FOUND":
            raise ClientError(result.error, status_code=status.HTTP_404_NOT_FOUND)
        raise ClientError(result.error, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)

    return result.value
