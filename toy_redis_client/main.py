import argparse
import asyncio
import logging
import sys

from toy_redis_client.client import RedisClient
from toy_redis_client.commands import RawCommand
from toy_redis_client.config import ClientConfig
from toy_redis_client.data_types import Array, BulkString, Integer, TaggedValue
from toy_redis_client.resp.errors import RESPError, ServerError


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser()
    parser.add_argument(
        "--host", type=str, default="127.0.0.1", help="The server host to connect to"
    )
    parser.add_argument("--port", type=int, default=6379, help="The server port")
    parser.add_argument(
        "--timeout",
        type=float,
        default=5.0,
        help="Seconds to wait for the connection and for each reply",
    )
    parser.add_argument(
        "--verbose", action="store_true", help="Log sent commands and raw replies"
    )
    parser.add_argument("command", nargs="+", help="Command name and arguments")

    return parser.parse_args(argv)


def format_reply(reply: TaggedValue | None) -> str:
    match reply:
        case None:
            return "(nil)"
        case BulkString() if reply.is_null:
            return "(nil)"
        case Integer(value):
            return f"(integer) {value}"
        case BulkString(bytes() as value):
            # Undecodable bytes are shown as \xNN escapes, like redis-cli.
            return f'"{value.decode("utf-8", errors="backslashreplace")}"'
        case BulkString(value):
            return f'"{value}"'
        case Array(elements):
            if not elements:
                return "(empty array)"
            return "\n".join(
                f"{index}) {format_reply(element)}"
                for index, element in enumerate(elements, start=1)
            )
        case _:
            return reply.value


async def run(args: argparse.Namespace) -> int:
    config = ClientConfig(
        host=args.host, port=args.port, timeout=args.timeout, encoding=None
    )

    async with RedisClient(config) as client:
        try:
            reply = await client.execute(RawCommand(args.command))
        except ServerError as e:
            print(f"(error) {e.message}")
            return 1

    print(format_reply(reply))
    return 0


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    try:
        return asyncio.run(run(args))
    except (RESPError, OSError, asyncio.TimeoutError) as e:
        logging.error(f"Command failed: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
