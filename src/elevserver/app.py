from __future__ import annotations

import asyncio
import contextlib
import json
import logging
from dataclasses import asdict
from typing import Optional, Set

from fastapi import FastAPI, HTTPException, WebSocket, WebSocketDisconnect
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from elevbank import Simulation

logger = logging.getLogger(__name__)


class SpawnRequest(BaseModel):
    origin: int
    count: int = 1
    destination: Optional[int] = None


class SimulationManager:
    def __init__(
        self,
        floor_count: int = 10,
        elevator_count: int = 3,
        capacity: int = 8,
        tick_interval: float = 0.5,
        random_seed: Optional[int] = None,
    ) -> None:
        self.simulation = Simulation.configure(
            floor_count,
            elevator_count,
            capacity,
            spawn_probability=0.3,
            random_seed=random_seed,
        )
        self.tick_interval = tick_interval
        self.clients: Set[WebSocket] = set()
        self._task: Optional[asyncio.Task] = None
        self._lock = asyncio.Lock()

    async def start(self) -> None:
        if self._task is None:
            self._task = asyncio.create_task(self._run())

    async def stop(self) -> None:
        if self._task:
            self._task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._task
            self._task = None

    async def _run(self) -> None:
        while True:
            async with self._lock:
                self.simulation.step()
                payload = self.current_state()
            await self.broadcast(payload)
            await asyncio.sleep(self.tick_interval)

    async def broadcast(self, payload: dict) -> None:
        message = json.dumps(payload)
        disconnected: Set[WebSocket] = set()
        for client in set(self.clients):
            try:
                await client.send_text(message)
            except WebSocketDisconnect:
                disconnected.add(client)
        for client in disconnected:
            await self.unregister(client)

    async def register(self, websocket: WebSocket) -> None:
        await websocket.accept()
        self.clients.add(websocket)
        logger.info("Stream client connected (%d total)", len(self.clients))
        await websocket.send_text(json.dumps(self.current_state()))

    async def unregister(self, websocket: WebSocket) -> None:
        if websocket in self.clients:
            self.clients.remove(websocket)
            logger.info("Stream client disconnected (%d left)", len(self.clients))
        with contextlib.suppress(Exception):
            await websocket.close()

    def current_state(self) -> dict:
        metrics = asdict(self.simulation.metrics.snapshot(self.simulation.current_time))
        return {
            "time": self.simulation.current_time,
            "building": self.simulation.building.snapshot(),
            "waiting": [
                {
                    "id": passenger.passenger_id,
                    "origin": passenger.origin,
                    "destination": passenger.destination,
                }
                for passenger in self.simulation.waiting_passengers()
            ],
            "metrics": metrics,
            "scheduler": self.simulation.building.scheduler_name,
        }

    async def spawn_batch(self, origin: int, count: int, destination: Optional[int]) -> dict:
        async with self._lock:
            spawned = self.simulation.spawn_passenger_batch(origin, count, destination)
            state = self.current_state()
            state["spawned"] = spawned
            return state


manager = SimulationManager()


@contextlib.asynccontextmanager
async def lifespan(app: FastAPI):
    await manager.start()
    try:
        yield
    finally:
        await manager.stop()


app = FastAPI(title="Elevator Bank Simulation API", lifespan=lifespan)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/state")
async def get_state() -> dict:
    return manager.current_state()


@app.post("/passengers/spawn")
async def spawn_batch(request: SpawnRequest) -> dict:
    if request.count < 1:
        raise HTTPException(status_code=400, detail="count must be positive")
    try:
        return await manager.spawn_batch(request.origin, request.count, request.destination)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))


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

    uvicorn.run("elevserver.app:app", host="0.0.0.0", port=8000, reload=False)
