"""FastAPI backend for the LaneDash browser client."""

from __future__ import annotations

import asyncio
import json
import random
import sys
from contextlib import asynccontextmanager
from pathlib import Path

# Ensure project root is importable
PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from fastapi import FastAPI, HTTPException, WebSocket, WebSocketDisconnect  # noqa: E402
from fastapi.middleware.cors import CORSMiddleware  # noqa: E402
from pydantic import BaseModel  # noqa: E402

import game_engine  # noqa: E402
from lanedash.config.loader import load_settings  # noqa: E402
from lanedash.core.driver import AsyncioFrameDriver  # noqa: E402
from lanedash.core.intents import parse_intent  # noqa: E402
from lanedash.core.session import GameSession  # noqa: E402

settings = load_settings(ensure_dirs=False)

# Shared session behind the plain HTTP endpoints; websocket clients get their own
_shared: GameSession | None = None


def get_shared_session() -> GameSession:
    global _shared
    if _shared is None:
        _shared = GameSession(AsyncioFrameDriver(fps=settings.fps), rng=random.Random(settings.seed))
    return _shared


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    if _shared is not None:
        _shared.stop()


app = FastAPI(title="LaneDash API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ── Models ──────────────────────────────────────────────────────────────


class InputEvent(BaseModel):
    intent: str


# ── GET /api/config ─────────────────────────────────────────────────────


@app.get("/api/config")
def get_config():
    return {
        "fps": settings.fps,
        "lane_width": game_engine.LANE_WIDTH,
        "lane_height": game_engine.LANE_HEIGHT,
        "car": {"y": game_engine.CAR_Y, "w": game_engine.CAR_W, "h": game_engine.CAR_H},
        "obstacle": {"w": game_engine.OBS_W, "h": game_engine.OBS_H},
        "stripe_period": game_engine.STRIPE_PERIOD,
    }


# ── GET /api/state ──────────────────────────────────────────────────────


@app.get("/api/state")
async def get_state():
    return get_shared_session().snapshot()


# ── POST /api/input ─────────────────────────────────────────────────────


@app.post("/api/input")
async def post_input(body: InputEvent):
    intent = parse_intent(body.intent)
    if intent is None:
        raise HTTPException(400, f"Unknown intent: {body.intent!r}")
    session = get_shared_session()
    accepted = session.handle(intent)
    return {"accepted": accepted, "state": session.snapshot()}


# ── WebSocket: game streaming ───────────────────────────────────────────


def _decode_message(raw: str | None) -> dict | None:
    """Parse one client frame. Anything that is not a JSON object yields None."""
    if raw is None:
        return None
    try:
        msg = json.loads(raw)
    except ValueError:
        return None
    return msg if isinstance(msg, dict) else None


@app.websocket("/ws/game")
async def game_websocket(ws: WebSocket):
    """Stream game snapshots to the browser, receive input intents."""
    await ws.accept()

    latest = {}

    def on_frame(snap):
        latest["state"] = snap

    session = GameSession(
        AsyncioFrameDriver(fps=settings.fps),
        rng=random.Random(settings.seed),
        on_frame=on_frame,
    )
    await ws.send_json({"type": "state", "state": session.snapshot()})

    try:
        while True:
            # Drain all pending input messages
            stop_requested = False
            try:
                while True:
                    message = await asyncio.wait_for(ws.receive(), timeout=0.005)
                    if message["type"] == "websocket.disconnect":
                        raise WebSocketDisconnect(message.get("code", 1000))
                    raw = message.get("text")
                    if raw is None and message.get("bytes") is not None:
                        raw = message["bytes"].decode("utf-8", errors="replace")
                    msg = _decode_message(raw)
                    if msg is None:
                        print(f"[ws] malformed message: {str(raw)[:80]!r}", flush=True)
                        continue
                    if msg.get("type") == "intent":
                        if parse_intent(msg.get("intent")) is None:
                            print(f"[ws] unknown intent: {msg.get('intent')!r}", flush=True)
                        else:
                            session.handle(msg.get("intent"))
                    elif msg.get("type") == "stop":
                        stop_requested = True
                        break
            except asyncio.TimeoutError:
                pass
            except WebSocketDisconnect:
                break
            if stop_requested:
                break

            snap = latest.pop("state", None)
            if snap is not None:
                await ws.send_json({"type": "state", "state": snap})

            await asyncio.sleep(1 / settings.fps)

        try:
            await ws.send_json({"type": "session_end", "state": session.snapshot()})
        except Exception:
            pass
    finally:
        session.stop()
        try:
            await ws.close()
        except Exception:
            pass


# ── Main ─────────────────────────────────────────────────────────────────


def serve(host: str | None = None, port: int | None = None):
    import uvicorn

    uvicorn.run(app, host=host or settings.web_host, port=port or settings.web_port)


if __name__ == "__main__":
    serve()
