import argparse
import asyncio
import logging

from videopoker.models import MachineConfig

from .server import run_server


def main() -> None:
    parser = argparse.ArgumentParser(description="Video poker table host")
    parser.add_argument("--host", default="0.0.0.0")
    parser.add_argument("--port", type=int, default=8766)
    parser.add_argument("--store", default=None, help="JSON file for bank, credits and counters (default: in memory)")
    parser.add_argument("--starting-credits", type=int, default=200)
    parser.add_argument("--starting-bank", type=int, default=500)
    parser.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    args = parser.parse_args()

    logging.basicConfig(level=getattr(logging, args.log_level))

    config = MachineConfig(starting_credits=args.starting_credits, starting_bank=args.starting_bank)
    asyncio.run(run_server(args.host, args.port, config, store_path=args.store))


if __name__ == "__main__":
    main()
