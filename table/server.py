from __future__ import annotations

import argparse
import asyncio
import json
import logging
from http import HTTPStatus
from typing import Any, Dict, Optional

import websockets
from websockets.asyncio.server import ServerConnection
from websockets.http11 import Request, Response

from dealer.cards import InsufficientDeckError
from dealer.engine import HandEngine
from dealer.models import TableConfig

LOGGER = logging.getLogger("table_host")

PROTOCOL_VERSION = 1


class TableServerError(Exception):
    def __init__(self, code: str, msg: str) -> None:
        super().__init__(msg)
        self.code = code
        self.msg = msg


def _config_payload(config: TableConfig) -> Dict[str, Any]:
    return {
        "seeded": config.seed is not None,
        "auto_start": config.auto_start,
    }


# Each viewer connection gets its own TableSession and therefore its own hand.


class TableSession:
    """Drives one HandEngine on behalf of a single connected viewer."""

    def __init__(self, websocket: Any, config: TableConfig) -> None:
        self.websocket = websocket
        self.config = config
        self.engine = HandEngine(config)

    async def run(self) -> None:
        await self.open()
        # Messages are handled strictly one at a time, so a hand never sees
        # two mutations interleave.
        async for raw in self.websocket:
            await self.handle_raw(raw)

    async def open(self) -> None:
        await self.send_json({"type": "welcome", "config": _config_payload(self.config)})
        if self.config.auto_start:
            self.engine.start_new_hand()
            await self._push_state()

    async def handle_raw(self, raw: Any) -> None:
        try:
            message = json.loads(raw)
        except (TypeError, ValueError):
            await self._send_error("BAD_JSON", "Message must be a JSON object")
            return
        if not isinstance(message, dict):
            await self._send_error("BAD_MESSAGE", "Message must be a JSON object")
            return
        try:
            await self.handle_message(message)
        except TableServerError as exc:
            await self._send_error(exc.code, exc.msg)

    async def handle_message(self, message: Dict[str, Any]) -> None:
        msg_type = message.get("type")
        if msg_type == "new_hand":
            snapshot = self.engine.start_new_hand()
            LOGGER.info("Dealt hand %s", snapshot.hand_id)
        elif msg_type == "advance":
            self._require_hand()
            try:
                self.engine.advance_stage()
            except InsufficientDeckError as exc:
                LOGGER.warning("Deck exhausted mid-hand: %s", exc)
                raise TableServerError("INSUFFICIENT_DECK", f"{exc}. Start a new hand.") from exc
        elif msg_type == "state":
            self._require_hand()
        else:
            raise TableServerError("UNKNOWN_TYPE", f"Unsupported message type: {msg_type!r}")

        await self._push_state()

    def _require_hand(self) -> None:
        if not self.engine.has_hand():
            raise TableServerError("NO_HAND", "No hand in progress; send new_hand first")

    async def _push_state(self) -> None:
        for event in self.engine.consume_events():
            await self.send_json({"type": "event", **event})
        await self.send_json({"type": "state", **self.engine.state_payload()})

    async def _send_error(self, code: str, msg: str) -> None:
        await self.send_json({"type": "error", "code": code, "msg": msg})

    async def send_json(self, payload: Dict[str, Any]) -> None:
        await self.websocket.send(json.dumps({"v": PROTOCOL_VERSION, **payload}, ensure_ascii=False))


async def handle_connection(websocket: Any, config: TableConfig) -> None:
    session = TableSession(websocket, config)
    try:
        await session.run()
    except websockets.ConnectionClosed:
        LOGGER.info("Viewer disconnected")
    except Exception as exc:  # noqa: BLE001
        LOGGER.exception("Table session crashed: %s", exc)


def _process_request(connection: ServerConnection, request: Request) -> Optional[Response]:
    """Return a simple HTTP response for health checks."""

    if request.headers.get("Upgrade", "").lower() == "websocket":
        return None  # let the WebSocket handshake continue

    path = request.path.split("?", 1)[0]
    if path in {"/", "/health", "/healthz"}:
        return connection.respond(HTTPStatus.OK, "table server running\n")
    return connection.respond(HTTPStatus.NOT_FOUND, "not found\n")


async def run_server(host: str, port: int, config: TableConfig) -> None:
    async def _handler(ws: ServerConnection) -> None:
        await handle_connection(ws, config)

    async with websockets.serve(_handler, host, port, process_request=_process_request):
        LOGGER.info("Table server listening on %s:%s", host, port)
        await asyncio.Future()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Heads-up dealing table server")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=8765)
    parser.add_argument("--seed", type=int, default=None, help="Seed the shuffle for reproducible hands")
    parser.add_argument(
        "--no-auto-start",
        action="store_true",
        help="Wait for a new_hand message instead of dealing on connect",
    )
    return parser


def main(argv: Optional[list[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    config = TableConfig(seed=args.seed, auto_start=not args.no_auto_start)
    asyncio.run(run_server(args.host, args.port, config))
