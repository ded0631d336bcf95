#!/usr/bin/env python3
from __future__ import annotations

import argparse
import asyncio
import json
import sys
from typing import Any, Dict, List, Optional

from websockets.asyncio.client import ClientConnection, connect

# PlayClient is a terminal front end for the table host: one line per command.

HELP = """Commands:
  d               deal (or draw when cards are showing)
  1-5             toggle hold on that slot (e.g. "135" toggles three)
  b N | b+ | b-   set bet, or step it up/down
  m               max bet
  a               ask for advice
  y / n           take the suggestion / keep my holds (after a hint)
  i N             insert N from the bank
  c               cash out
  hints on|off    toggle hints for this game
  r               reset accuracy
  q               quit"""


class PlayClient:
    def __init__(self, url: str, game: str) -> None:
        self.url = url
        self.game = game
        self.websocket: Optional[ClientConnection] = None
        self.state: Dict[str, Any] = {}
        self.paytable: Dict[str, List[int]] = {}

    async def run(self) -> None:
        async with connect(self.url) as ws:
            self.websocket = ws
            welcome = await self._request({"type": "hello", "game": self.game})
            if welcome.get("type") != "welcome":
                print(f"Handshake failed: {welcome}")
                return
            game = welcome["game"]
            self.paytable = game["paytable"]
            print(f"{game['title']} (table {welcome['table_id']})")
            if game.get("notes"):
                print(game["notes"])
            self._show_state(welcome["state"])
            await self._loop()

    async def _loop(self) -> None:
        loop = asyncio.get_running_loop()
        while True:
            line = (await loop.run_in_executor(None, input, "> ")).strip().lower()
            if line in {"q", "quit", "exit"}:
                break
            if line in {"h", "help", "?"}:
                print(HELP)
                continue
            for payload in self._parse(line):
                reply = await self._request(payload)
                self._print_reply(reply)

    def _parse(self, line: str) -> List[Dict[str, Any]]:
        if not line:
            return []
        if line.isdigit():
            slots = [int(ch) - 1 for ch in line if ch in "12345"]
            return [{"type": "hold", "slot": slot} for slot in slots]
        head, _, rest = line.partition(" ")
        if head == "d":
            in_hand = self.state.get("phase") in {"DEAL", "DRAW"}
            return [{"type": "draw" if in_hand else "deal"}]
        if head == "b+":
            return [{"type": "bet", "delta": 1}]
        if head == "b-":
            return [{"type": "bet", "delta": -1}]
        if head == "b" and rest.strip().isdigit():
            return [{"type": "bet", "amount": int(rest)}]
        if head == "m":
            return [{"type": "max_bet"}]
        if head == "a":
            return [{"type": "advise"}]
        if head == "y":
            return [{"type": "accept_suggestion"}]
        if head == "n":
            return [{"type": "keep_mine"}]
        if head == "i" and rest.strip().isdigit():
            return [{"type": "insert", "amount": int(rest)}]
        if head == "c":
            return [{"type": "cash_out"}]
        if head == "hints" and rest.strip() in {"on", "off"}:
            return [{"type": "hints", "on": rest.strip() == "on"}]
        if head == "r":
            return [{"type": "reset_accuracy"}]
        print("Unknown command (h for help)")
        return []

    def _print_reply(self, reply: Dict[str, Any]) -> None:
        msg_type = reply.get("type")
        if msg_type == "error":
            print(f"Error {reply.get('code')}: {reply.get('msg')}")
            return
        if msg_type == "suggestion":
            self._show_state(reply["state"])
            print(f"Hint: hold {self._mask_text(reply['mask'])} - {reply.get('reason')}")
            print("Take the suggestion (y) or keep your holds (n)?")
            return
        if not reply.get("applied"):
            print("(not now)")
        advice = reply.get("advice")
        if advice:
            print(f"Advice: hold {self._mask_text(advice['mask'])} - {advice.get('reason')}")
            for alt in advice.get("alternates", []):
                print(f"   or: hold {self._mask_text(alt)}")
        self._show_state(reply["state"])

    def _mask_text(self, mask: List[bool]) -> str:
        hand = self.state.get("hand", [])
        held = [hand[idx] for idx, keep in enumerate(mask) if keep and idx < len(hand)]
        return " ".join(held) if held else "nothing"

    def _show_state(self, state: Dict[str, Any]) -> None:
        self.state = state
        hand = state.get("hand") or []
        holds = state.get("holds") or []
        if hand:
            cards = "  ".join(f"{card}{'*' if held else ' '}" for card, held in zip(hand, holds))
            print(f"Hand: {cards}")
        if state.get("initial_outcome") and state["phase"] == "DEAL":
            print(f"Dealt: {state['initial_outcome']}")
        result = state.get("last_result")
        if result and state["phase"] == "SHOW":
            print(f"Result: {result['outcome']} pays {result['payout']}")
        acc = state["accuracy"]
        print(
            f"[{state['phase']}] credits={state['credits']} bet={state['bet']} bank={state['bank']} "
            f"accuracy={acc['pct']}% ({acc['correct']}/{acc['total']}) points={state['rewards']['points']}"
        )

    async def _request(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        assert self.websocket is not None
        await self.websocket.send(json.dumps(payload))
        return json.loads(await self.websocket.recv())


def parse_args(argv: List[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Terminal client for the video poker table host")
    parser.add_argument("--url", default="ws://127.0.0.1:8766/ws")
    parser.add_argument("--game", default="job_8_5")
    return parser.parse_args(argv)


def main(argv: List[str]) -> None:
    args = parse_args(argv)
    client = PlayClient(url=args.url, game=args.game)
    try:
        asyncio.run(client.run())
    except (KeyboardInterrupt, EOFError):
        print("\nSession closed")


if __name__ == "__main__":
    main(sys.argv[1:])
