from __future__ import annotations

import asyncio
import contextlib
import json
import logging
from typing import AsyncIterator, List, Optional, Set

from fastapi import FastAPI, HTTPException, WebSocket, WebSocketDisconnect
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from simulation import ElevatorNotFound, FleetConfig, FleetError, Simulation

logger = logging.getLogger(__name__)


class CallElevatorRequest(BaseModel):
    floor: int
    direction: str


class SendElevatorRequest(BaseModel):
    target_floor: int


class SimulationManager:
    def __init__(self, config: Optional[FleetConfig] = None) -> None:
        self.simulation = Simulation(config or FleetConfig())
        self.tick_interval = self.simulation.config.tick_interval
        self.clients: Set[WebSocket] = set()
        self._task: Optional[asyncio.Task] = None

    async def start(self) -> None:
        if self._task is None:
            logger.info("Tick driver started (interval %.2fs)", self.tick_interval)
            self._task = asyncio.create_task(self._run())

    async def stop(self) -> None:
        if self._task:
            self._task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._task
            self._task = None
            logger.info("Tick driver stopped")

    async def _run(self) -> None:
        while True:
            self.tick_once()
            await self.broadcast(self.current_state())
            await asyncio.sleep(self.tick_interval)

    def tick_once(self) -> bool:
        try:
            self.simulation.tick()
        except Exception:
            logger.exception("Error while advancing the fleet at t=%s", self.simulation.current_time)
            return False
        return True

    async def broadcast(self, payload: dict) -> int:
        """Push one fleet snapshot to every stream client; returns how many received it."""
        if not self.clients:
            return 0
        message = json.dumps(payload)
        clients = list(self.clients)
        results = await asyncio.gather(
            *(client.send_text(message) for client in clients), return_exceptions=True
        )
        stale = [client for client, result in zip(clients, results) if isinstance(result, Exception)]
        for client in stale:
            await self.unregister(client)
        if stale:
            logger.info("Dropped %d stream client(s) at t=%s", len(stale), payload.get("time"))
        return len(clients) - len(stale)

    async def register(self, websocket: WebSocket) -> None:
        await websocket.accept()
        self.clients.add(websocket)
        await websocket.send_text(json.dumps(self.current_state()))

    async def unregister(self, websocket: WebSocket) -> None:
        if websocket in self.clients:
            self.clients.remove(websocket)
        with contextlib.suppress(Exception):
            await websocket.close()

    def current_state(self) -> dict:
        return self.simulation.snapshot()


manager = SimulationManager()


@contextlib.asynccontextmanager
async def lifespan(_: FastAPI) -> AsyncIterator[None]:
    await manager.start()
    try:
        yield
    finally:
        await manager.stop()


app = FastAPI(title="LiftFleet Simulation API", lifespan=lifespan)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _http_error(exc: FleetError) -> HTTPException:
    status_code = 404 if isinstance(exc, ElevatorNotFound) else 400
    return HTTPException(status_code=status_code, detail=str(exc))


@app.get("/state")
async def get_state() -> dict:
    return manager.current_state()


@app.get("/api/elevator")
async def list_elevators() -> List[dict]:
    return [elevator.to_dict() for elevator in manager.simulation.list_elevators()]


@app.get("/api/elevator/floor-requests")
async def list_floor_requests() -> List[dict]:
    return [request.to_dict() for request in manager.simulation.list_floor_requests()]


@app.get("/api/elevator/{elevator_id}")
async def get_elevator(elevator_id: int) -> dict:
    elevator = manager.simulation.get_elevator(elevator_id)
    if elevator is None:
        raise HTTPException(status_code=404, detail=f"Elevator with ID {elevator_id} not found")
    return elevator.to_dict()


@app.post("/api/elevator/call")
async def call_elevator(request: CallElevatorRequest) -> dict:
    logger.info("Call elevator to floor %s, direction %s", request.floor, request.direction)
    try:
        return manager.simulation.submit_call(request.floor, request.direction).to_dict()
    except FleetError as exc:
        raise _http_error(exc) from exc


@app.post("/api/elevator/random-call")
async def random_call() -> dict:
    return manager.simulation.random_call().to_dict()


@app.post("/api/elevator/{elevator_id}/send")
async def send_elevator(elevator_id: int, request: SendElevatorRequest) -> dict:
    logger.info("Send elevator %s to floor %s", elevator_id, request.target_floor)
    try:
        return manager.simulation.send_to_floor(elevator_id, request.target_floor).to_dict()
    except FleetError as exc:
        raise _http_error(exc) from exc


@app.websocket("/ws/stream")
async def websocket_endpoint(websocket: WebSocket) -> None:
    await manager.register(websocket)
    try:
        while True:
            await websocket.receive_text()
    except WebSocketDisconnect:
        await manager.unregister(websocket)


if __name__ == "__main__":
    import uvicorn

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    uvicorn.run("server.app:app", host="0.0.0.0", port=8000, reload=False)
