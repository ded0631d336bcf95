from __future__ import annotations

import asyncio
import itertools
import json
import logging
from http import HTTPStatus
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Union

from websockets.asyncio.server import ServerConnection, serve
from websockets.exceptions import ConnectionClosed

from videopoker.ledger import JsonFileStore, KeyValueStore, Ledger, MemoryStore
from videopoker.machine import VideoPokerMachine
from videopoker.models import MachineConfig, Phase
from videopoker.registry import DEFAULT_GAME, get_spec

LOGGER = logging.getLogger("table_host")

# TableHost glues VideoPokerMachine to WebSocket clients (UIs, scripts).
# Every network concern lives here; the machine stays synchronous.


class TableHostError(Exception):
    def __init__(self, code: str, msg: str) -> None:
        super().__init__(msg)
        self.code = code
        self.msg = msg


def _error_payload(code: str, msg: str) -> Dict[str, Any]:
    return {"type": "error", "code": code, "msg": msg}


async def _send_json(websocket, payload: Dict[str, Any]) -> None:
    try:
        await websocket.send(json.dumps(payload))
    except ConnectionClosed:
        pass


async def _send_error(websocket, code: str, msg: str) -> None:
    await _send_json(websocket, _error_payload(code, msg))


def _decode(raw: Union[str, bytes]) -> Dict[str, Any]:
    try:
        message = json.loads(raw)
    except json.JSONDecodeError:
        return {}
    return message if isinstance(message, dict) else {}


def _int_field(message: Dict[str, Any], key: str) -> int:
    value = message.get(key)
    if isinstance(value, bool) or not isinstance(value, int):
        raise TableHostError("BAD_REQUEST", f"{key} must be an integer")
    return value


class TableSession:
    """One connected client and the machine it plays on.

    Every command runs under ``lock`` so a second deal/draw can never
    interleave with one still being handled.
    """

    def __init__(self, table_id: str, machine: VideoPokerMachine) -> None:
        self.table_id = table_id
        self.machine = machine
        self.lock = asyncio.Lock()
        self._commands: Dict[str, Callable[[Dict[str, Any]], Dict[str, Any]]] = {
            "bet": self._cmd_bet,
            "max_bet": lambda message: self._state(self.machine.set_max_bet()),
            "insert": self._cmd_insert,
            "cash_out": lambda message: self._state(self.machine.cash_out_all() > 0),
            "deal": lambda message: self._state(self.machine.deal()),
            "hold": self._cmd_hold,
            "draw": self._cmd_draw,
            "accept_suggestion": lambda message: self._state(
                self.machine.accept_suggestion_and_draw() is not None
            ),
            "keep_mine": lambda message: self._state(self.machine.keep_mine_and_draw() is not None),
            "advise": self._cmd_advise,
            "hints": self._cmd_hints,
            "reset_accuracy": self._cmd_reset_accuracy,
            "reset_rewards": self._cmd_reset_rewards,
        }

    def welcome_payload(self) -> Dict[str, Any]:
        return {
            "type": "welcome",
            "table_id": self.table_id,
            "game": self.machine.game.to_payload(),
            "state": self.machine.snapshot(),
        }

    async def handle(self, message: Dict[str, Any]) -> Dict[str, Any]:
        async with self.lock:
            return self.apply(message)

    def apply(self, message: Dict[str, Any]) -> Dict[str, Any]:
        command = message.get("type")
        handler = self._commands.get(command) if isinstance(command, str) else None
        if handler is None:
            return _error_payload("UNKNOWN_COMMAND", f"Unsupported command: {command}")
        try:
            return handler(message)
        except TableHostError as exc:
            return _error_payload(exc.code, exc.msg)
        except ValueError as exc:
            return _error_payload("BAD_REQUEST", str(exc))

    def _state(self, applied: bool, **extra: Any) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"type": "state", "applied": bool(applied), "state": self.machine.snapshot()}
        payload.update(extra)
        return payload

    # Command handlers ------------------------------------------------

    def _cmd_bet(self, message: Dict[str, Any]) -> Dict[str, Any]:
        if "amount" in message:
            return self._state(self.machine.set_bet(_int_field(message, "amount")))
        if "delta" in message:
            return self._state(self.machine.change_bet(_int_field(message, "delta")))
        raise TableHostError("BAD_REQUEST", "bet requires amount or delta")

    def _cmd_insert(self, message: Dict[str, Any]) -> Dict[str, Any]:
        moved = self.machine.insert(_int_field(message, "amount"))
        return self._state(moved > 0, moved=moved)

    def _cmd_hold(self, message: Dict[str, Any]) -> Dict[str, Any]:
        if "mask" in message:
            mask = message["mask"]
            if not isinstance(mask, list) or not all(isinstance(held, bool) for held in mask):
                raise TableHostError("BAD_REQUEST", "mask must be a list of booleans")
            return self._state(self.machine.set_holds(mask))
        return self._state(self.machine.toggle_hold(_int_field(message, "slot")))

    def _cmd_draw(self, message: Dict[str, Any]) -> Dict[str, Any]:
        # With hints on, a first draw on a suboptimal hold is turned into a prompt.
        if self.machine.phase == Phase.DEAL:
            suggestion = self.machine.review_holds()
            if suggestion is not None:
                payload = suggestion.to_payload()
                return {
                    "type": "suggestion",
                    "mask": payload["mask"],
                    "alternates": payload["alternates"],
                    "reason": payload["reason"],
                    "state": self.machine.snapshot(),
                }
        return self._state(self.machine.draw() is not None)

    def _cmd_advise(self, message: Dict[str, Any]) -> Dict[str, Any]:
        advice = self.machine.advice()
        if advice is None:
            return self._state(False)
        return self._state(True, advice=advice.to_payload())

    def _cmd_hints(self, message: Dict[str, Any]) -> Dict[str, Any]:
        on = message.get("on")
        if not isinstance(on, bool):
            raise TableHostError("BAD_REQUEST", "on must be true or false")
        self.machine.set_hints(on)
        return self._state(True)

    def _cmd_reset_accuracy(self, message: Dict[str, Any]) -> Dict[str, Any]:
        self.machine.reset_accuracy()
        return self._state(True)

    def _cmd_reset_rewards(self, message: Dict[str, Any]) -> Dict[str, Any]:
        self.machine.reset_rewards()
        return self._state(True)


class TableHost:
    def __init__(self, config: Optional[MachineConfig] = None, store_path: Optional[Union[str, Path]] = None) -> None:
        self.config = config or MachineConfig()
        # With a store file every connection plays from the same saved profile.
        self.shared_store: Optional[KeyValueStore] = JsonFileStore(store_path) if store_path else None
        self.sessions: Dict[str, TableSession] = {}
        self._table_ids = itertools.count(1)

    def open_session(self, game_id: str) -> TableSession:
        spec = get_spec(game_id)
        store = self.shared_store if self.shared_store is not None else MemoryStore()
        machine = VideoPokerMachine(spec, ledger=Ledger(store, self.config), config=self.config)
        table_id = f"T-{next(self._table_ids):04d}"
        session = TableSession(table_id, machine)
        self.sessions[table_id] = session
        return session

    async def handle_connection(self, websocket) -> None:
        # First message must be "hello" naming the game to play.
        try:
            hello = _decode(await websocket.recv())
        except ConnectionClosed:
            return
        if hello.get("type") != "hello":
            await _send_error(websocket, "BAD_HELLO", "Expected hello")
            await websocket.close()
            return

        game_id = hello.get("game", DEFAULT_GAME)
        try:
            if not isinstance(game_id, str):
                raise ValueError(f"Unknown game id: {game_id}")
            session = self.open_session(game_id)
        except ValueError as exc:
            await _send_error(websocket, "UNKNOWN_GAME", str(exc))
            await websocket.close()
            return

        LOGGER.info("Table %s opened for %s", session.table_id, game_id)
        await _send_json(websocket, session.welcome_payload())

        try:
            async for raw in websocket:
                reply = await session.handle(_decode(raw))
                await _send_json(websocket, reply)
        except ConnectionClosed:
            pass
        except Exception as exc:  # noqa: BLE001
            LOGGER.exception("Table %s crashed: %s", session.table_id, exc)
        finally:
            self.sessions.pop(session.table_id, None)
            LOGGER.info("Table %s closed", session.table_id)

    async def start(self, host: str = "0.0.0.0", port: int = 8766) -> None:
        async with serve(self.handle_connection, host, port, process_request=process_request):
            LOGGER.info("Table host listening on %s:%s", host, port)
            await asyncio.Future()


def process_request(connection: ServerConnection, request):
    """Answer plain HTTP health checks; let WebSocket upgrades through."""

    if request.headers.get("Upgrade", "").lower() == "websocket":
        return None
    if request.path in {"/", "/health", "/healthz"}:
        return connection.respond(HTTPStatus.OK, "table host running\n")
    return connection.respond(HTTPStatus.NOT_FOUND, "not found\n")


async def run_server(
    host: str,
    port: int,
    config: Optional[MachineConfig] = None,
    store_path: Optional[Union[str, Path]] = None,
) -> None:
    await TableHost(config, store_path=store_path).start(host, port)
