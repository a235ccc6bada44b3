"""Connection request endpoints."""

import logging
from typing import List
from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, status
from sqlalchemy.orm import Session

from youniverse.api.deps import get_current_active_user, get_db
from youniverse.api.v1.endpoints.realtime import manager
from youniverse.core.exceptions import ConflictException, NotFoundException
from youniverse.crud import crud_connection
from youniverse.models.connection import Connection
from youniverse.models.user import User
from youniverse.schemas.connection import (
    ConnectionCreate,
    ConnectionListResponse,
    ConnectionResponse,
    ConnectionWithProfiles,
)
from youniverse.services.notification_service import notification_service

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/connections",
    tags=["Connections"],
)


def _with_profiles(connections: List[Connection]) -> ConnectionListResponse:
    items = [ConnectionWithProfiles.model_validate(connection) for connection in connections]
    return ConnectionListResponse(connections=items, total=len(items))


@router.post(
    "",
    response_model=ConnectionResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Send connection request",
)
def send_connection_request(
    connection_in: ConnectionCreate,
    background_tasks: BackgroundTasks,
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db),
) -> ConnectionResponse:
    """Send a connection request and notify the addressee."""
    if connection_in.addressee_id == current_user.id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Cannot send a connection request to yourself"
        )
    
    try:
        connection = crud_connection.create_request(
            db,
            requester_id=current_user.id,
            addressee_id=connection_in.addressee_id
        )
    except ValueError:
        raise NotFoundException("User")
    except LookupError as e:
        raise ConflictException(str(e))
    
    notification_service.notify_connection_request(
        db, requester=current_user, addressee_id=connection.addressee_id
    )
    logger.info(f"[CONNECTION] {current_user.id} -> {connection.addressee_id} requested (id={connection.id})")
    
    background_tasks.add_task(manager.notify_refresh, [connection.addressee_id], "connections")
    background_tasks.add_task(manager.notify_refresh, [connection.addressee_id], "notifications")
    return ConnectionResponse.model_validate(connection)


def _respond(
    db: Session,
    background_tasks: BackgroundTasks,
    *,
    connection_id: int,
    current_user: User,
    accept: bool
) -> ConnectionResponse:
    try:
        connection = crud_connection.respond(
            db, connection_id=connection_id, user_id=current_user.id, accept=accept
        )
    except PermissionError:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Only the addressee can respond to this request"
        )
    except LookupError as e:
        raise ConflictException(str(e))
    
    if not connection:
        raise NotFoundException("Connection")
    
    if accept:
        notification_service.notify_connection_accepted(
            db, addressee=current_user, requester_id=connection.requester_id
        )
        background_tasks.add_task(manager.notify_refresh, [connection.requester_id], "notifications")
    
    background_tasks.add_task(
        manager.notify_refresh, [connection.requester_id, connection.addressee_id], "connections"
    )
    return ConnectionResponse.model_validate(connection)


@router.post(
    "/{connection_id}/accept",
    response_model=ConnectionResponse,
    status_code=status.HTTP_200_OK,
    summary="Accept connection request",
    description="**Access:** Addressee of a pending request only",
)
def accept_connection_request(
    connection_id: int,
    background_tasks: BackgroundTasks,
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db),
) -> ConnectionResponse:
    return _respond(db, background_tasks, connection_id=connection_id, current_user=current_user, accept=True)


@router.post(
    "/{connection_id}/reject",
    response_model=ConnectionResponse,
    status_code=status.HTTP_200_OK,
    summary="Reject connection request",
    description="**Access:** Addressee of a pending request only",
)
def reject_connection_request(
    connection_id: int,
    background_tasks: BackgroundTasks,
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db),
) -> ConnectionResponse:
    return _respond(db, background_tasks, connection_id=connection_id, current_user=current_user, accept=False)


@router.get(
    "",
    response_model=ConnectionListResponse,
    status_code=status.HTTP_200_OK,
    summary="List accepted connections",
)
def list_connections(
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db),
) -> ConnectionListResponse:
    return _with_profiles(crud_connection.get_accepted(db, user_id=current_user.id))


@router.get(
    "/pending",
    response_model=ConnectionListResponse,
    status_code=status.HTTP_200_OK,
    summary="List pending requests addressed to me",
)
def list_pending_requests(
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db),
) -> ConnectionListResponse:
    return _with_profiles(crud_connection.get_pending_for(db, user_id=current_user.id))
