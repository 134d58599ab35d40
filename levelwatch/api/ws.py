"""WebSocket handler — upstream pushes ticks in, display clients get snapshots out."""

import json

from fastapi import APIRouter, WebSocket, WebSocketDisconnect
from loguru import logger

router = APIRouter()


class ConnectionManager:
    def __init__(self):
        self.active_connections: list[WebSocket] = []

    async def connect(self, websocket: WebSocket):
        await websocket.accept()
        self.active_connections.append(websocket)
        logger.info(f"WS client connected ({len(self.active_connections)} total)")

    def disconnect(self, websocket: WebSocket):
        if websocket in self.active_connections:
            self.active_connections.remove(websocket)
        logger.info(f"WS client disconnected ({len(self.active_connections)} total)")

    async def broadcast(self, message: dict):
        """Send message to all connected clients."""
        data = json.dumps(message, default=str)
        disconnected = []
        for connection in self.active_connections:
            try:
                await connection.send_text(data)
            except Exception:
                disconnected.append(connection)
        for conn in disconnected:
            self.disconnect(conn)


ws_manager = ConnectionManager()


@router.websocket("/ws")
async def websocket_endpoint(websocket: WebSocket):
    """Each text frame is a JSON message: an indicator tick or a symbol list."""
    from levelwatch.api.main import app_state
    engine = app_state["engine"]

    await ws_manager.connect(websocket)
    try:
        while True:
            data = await websocket.receive_text()
            if data == "ping":
                await websocket.send_text(json.dumps({"type": "pong"}))
                continue
            try:
                message = json.loads(data)
            except json.JSONDecodeError:
                logger.debug("Ignoring non-JSON WS frame")
                continue

            snapshot = engine.handle_message(message)
            if snapshot is not None:
                await broadcast_snapshot(engine, snapshot)
            elif isinstance(message, dict) and "symbols" in message:
                await ws_manager.broadcast({"type": "watchlist", **engine.symbol_book.to_dict()})
    except WebSocketDisconnect:
        ws_manager.disconnect(websocket)


async def broadcast_snapshot(engine, snapshot):
    quote = engine.get_market_price(snapshot.symbol)
    await ws_manager.broadcast({
        "type": "snapshot",
        "symbol": snapshot.symbol,
        "timeframe": snapshot.timeframe,
        "indicators": snapshot.indicators,
        "ready_timeframes": engine.get_ready_timeframes(snapshot.symbol),
        "marketPrice": quote.market_price,
        "volume": quote.volume,
    })
