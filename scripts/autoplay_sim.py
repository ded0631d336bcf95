#!/usr/bin/env python3
"""Play a batch of rounds by always following the advisor.

This script spins up the table host in-process, connects one client per
requested game and lets each client hold exactly what the ``advise`` command
recommends. At the end it reports return-to-player and coaching accuracy,
which should sit at 100% since the client never deviates.

Example:
    python scripts/autoplay_sim.py --games job_8_5 dw_25_16_13 --rounds 500
"""

from __future__ import annotations

import argparse
import asyncio
import contextlib
import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, List

from websockets.asyncio.client import ClientConnection, connect

from table_host.server import TableHost
from videopoker.models import MachineConfig
from videopoker.registry import game_ids

LOGGER = logging.getLogger("autoplay_sim")


@dataclass
class SimReport:
    game: str
    rounds: int = 0
    wagered: int = 0
    returned: int = 0
    accuracy_pct: int = 100
    credits: int = 0

    @property
    def rtp(self) -> float:
        return (self.returned / self.wagered * 100) if self.wagered else 0.0


async def _request(ws: ClientConnection, payload: Dict[str, Any]) -> Dict[str, Any]:
    await ws.send(json.dumps(payload))
    reply = json.loads(await ws.recv())
    if reply.get("type") == "error":
        raise RuntimeError(f"{reply.get('code')}: {reply.get('msg')}")
    return reply


async def play_game(url: str, game: str, rounds: int, bet: int) -> SimReport:
    report = SimReport(game=game)
    async with connect(url) as ws:
        await ws.send(json.dumps({"type": "hello", "game": game}))
        welcome = json.loads(await ws.recv())
        if welcome.get("type") != "welcome":
            raise RuntimeError(f"Handshake failed: {welcome}")

        await _request(ws, {"type": "bet", "amount": bet})
        for _ in range(rounds):
            dealt = await _request(ws, {"type": "deal"})
            if not dealt["applied"]:
                LOGGER.info("%s ran out of credits after %s rounds", game, report.rounds)
                break
            advice = await _request(ws, {"type": "advise"})
            await _request(ws, {"type": "hold", "mask": advice["advice"]["mask"]})
            shown = await _request(ws, {"type": "draw"})
            result = shown["state"]["last_result"]
            report.rounds += 1
            report.wagered += shown["state"]["bet"]
            report.returned += result["payout"]
            report.credits = shown["state"]["credits"]
            report.accuracy_pct = shown["state"]["accuracy"]["pct"]
            if result["payout"] >= 50 * shown["state"]["bet"]:
                LOGGER.info("%s hit %s for %s", game, result["outcome"], result["payout"])
    return report


async def run_simulation(args: argparse.Namespace) -> List[SimReport]:
    config = MachineConfig(starting_credits=args.credits)
    host = TableHost(config)
    server_task = asyncio.create_task(host.start(args.host, args.port))
    await asyncio.sleep(0.5)  # give the socket time to bind

    url = f"ws://{args.host}:{args.port}/ws"
    try:
        return await asyncio.gather(*(play_game(url, game, args.rounds, args.bet) for game in args.games))
    finally:
        server_task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await server_task


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Follow-the-advisor autoplay against a local table host")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=9002)
    parser.add_argument("--games", nargs="+", default=game_ids(), choices=game_ids())
    parser.add_argument("--rounds", type=int, default=200)
    parser.add_argument("--bet", type=int, default=5)
    parser.add_argument("--credits", type=int, default=10_000)
    parser.add_argument("--log-level", default="INFO")
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.INFO))
    try:
        reports = asyncio.run(run_simulation(args))
    except KeyboardInterrupt:
        LOGGER.info("Simulation interrupted; shutting down")
        return
    for report in reports:
        print(
            f"{report.game:<14} rounds={report.rounds:>5} wagered={report.wagered:>6} "
            f"returned={report.returned:>6} rtp={report.rtp:6.2f}% accuracy={report.accuracy_pct}% "
            f"credits={report.credits}"
        )


if __name__ == "__main__":
    main()
