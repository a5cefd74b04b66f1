#!/usr/bin/env python3
from __future__ import annotations

import argparse
import asyncio
import json
import logging
from collections import deque
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import websockets
from websockets.asyncio.client import ClientConnection

logging.basicConfig(level=logging.INFO)

# ManualClient is a terminal stand-in for a two-button dealing screen.

KEY_TO_MESSAGE = {
    "N": "new_hand",
    "A": "advance",
    "": "advance",
    "S": "state",
}


@dataclass
class ViewState:
    hand_id: str
    stage: str = "PREFLOP"
    player: list[str] = field(default_factory=list)
    opponent: list[str] = field(default_factory=list)
    community: list[str] = field(default_factory=list)
    deck_remaining: int = 0
    is_hand_complete: bool = False


class ManualClient:
    def __init__(self, url: str) -> None:
        self.url = url
        self.websocket: Optional[ClientConnection] = None
        self.view: Optional[ViewState] = None
        self.recent_events: deque[str] = deque(maxlen=4)

    async def run(self) -> None:
        async with websockets.connect(self.url) as ws:
            self.websocket = ws
            await self._loop()

    async def _loop(self) -> None:
        assert self.websocket is not None
        while True:
            msg = await self._recv()
            self._print_message(msg)
            if not self._awaiting_input(msg):
                continue

            request = self._prompt()
            if request is None:
                print("Bye.")
                break
            await self._send({"type": request})

    async def _recv(self) -> Dict[str, Any]:
        assert self.websocket is not None
        raw = await self.websocket.recv()
        return json.loads(raw)

    @staticmethod
    def _awaiting_input(msg: Dict[str, Any]) -> bool:
        msg_type = msg.get("type")
        if msg_type == "welcome":
            # Without auto start the server stays silent until asked to deal.
            return not msg.get("config", {}).get("auto_start", True)
        return msg_type in {"state", "error"}

    def _prompt(self) -> Optional[str]:
        while True:
            choice = input("[N]ew hand / [A]dvance / [S]tate / [Q]uit (Enter=advance): ").strip().upper()
            if choice == "Q":
                return None
            if choice == "H":
                self._print_help()
                continue
            request = KEY_TO_MESSAGE.get(choice)
            if request is None:
                print("Unknown key. Try again.")
                continue
            if request == "advance" and self.view is not None and self.view.is_hand_complete:
                print("Hand complete. Press N for a new hand.")
                continue
            return request

    def _print_help(self) -> None:
        print("N deals a fresh hand, A reveals the next street, S redraws, Q quits.")

    def _print_message(self, msg: Dict[str, Any]) -> None:
        msg_type = msg.get("type")
        if msg_type == "welcome":
            print(f">>> Connected, config: {json.dumps(msg.get('config', {}))}")
        elif msg_type == "event":
            ev = msg.get("ev")
            if ev == "FLOP":
                summary = f"Flop: {' '.join(msg.get('cards', []))}"
            else:
                summary = f"{str(ev).title()}: {msg.get('card')}"
            self.recent_events.append(summary)
        elif msg_type == "state":
            self.view = ViewState(
                hand_id=msg["hand_id"],
                stage=msg.get("stage", "PREFLOP"),
                player=list(msg.get("player", [])),
                opponent=list(msg.get("opponent", [])),
                community=list(msg.get("community", [])),
                deck_remaining=msg.get("deck_remaining", 0),
                is_hand_complete=bool(msg.get("is_hand_complete")),
            )
            self._render()
        elif msg_type == "error":
            print(f"Error {msg.get('code')}: {msg.get('msg')}")
        else:
            print(json.dumps(msg, indent=2, ensure_ascii=False))

    def _render(self) -> None:
        view = self.view
        if view is None:
            return
        print()
        print(f"=== Texas Hold'em  {view.hand_id}  [{view.stage}] ===")
        print(f"Player's hand   : {self._row(view.player)}")
        print(f"Community cards : {self._row(view.community)}")
        print(f"Opponent's hand : {self._row(view.opponent)}")
        print(f"Deck            : {view.deck_remaining} cards left")
        if self.recent_events:
            print("Recent: " + " | ".join(self.recent_events))
        if view.is_hand_complete:
            print("Hand complete.")

    @staticmethod
    def _row(cards: list[str]) -> str:
        if not cards:
            return "-"
        return "  ".join(f"[{card:>3}]" for card in cards)

    async def _send(self, payload: Dict[str, Any]) -> None:
        assert self.websocket is not None
        await self.websocket.send(json.dumps({"v": 1, **payload}))


def main() -> None:
    parser = argparse.ArgumentParser(description="Terminal viewer for the dealing table server")
    parser.add_argument("--url", default="ws://127.0.0.1:8765")
    args = parser.parse_args()

    client = ManualClient(args.url)
    try:
        asyncio.run(client.run())
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    main()
