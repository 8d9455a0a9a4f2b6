# inventory_api/routers/notifications.py

from fastapi import APIRouter, Depends, WebSocket, WebSocketDisconnect

from inventory_api.core.auth import get_current_user
from inventory_api.core.notifications import connections

router = APIRouter(tags=["Notifications"])

# Mounted at the application root, outside /api
socket_router = APIRouter()


@router.get("/notifications/connections", dependencies=[Depends(get_current_user)])
def active_connections():
    return {"active_connections": connections.active}


@socket_router.websocket("/ws")
async def notification_socket(websocket: WebSocket):
    connections.connected()

    try:
        await websocket.accept()

        # Nothing is sent; incoming frames are drained until the client leaves
        while True:
            await websocket.receive_text()
    except WebSocketDisconnect:
        pass
    finally:
        connections.disconnected()
