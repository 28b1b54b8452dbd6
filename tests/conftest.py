import asyncio
import socket
from contextlib import asynccontextmanager
from typing import AsyncIterator

import pytest
from redis import Redis
from redis.exceptions import RedisError

from toy_redis_client.resp.encoder import RESPEncoder

# None means the server never answers that command.
Replies = dict[bytes, bytes | list[bytes] | None]


@asynccontextmanager
async def fake_redis_server(
    replies: Replies, delay: float = 0.0
) -> AsyncIterator[tuple[str, int]]:
    async def handle_connection(
        reader: asyncio.StreamReader, writer: asyncio.StreamWriter
    ) -> None:
        try:
            while data := await reader.read(1024):
                reply = replies.get(data, RESPEncoder.encode_error("unknown command"))
                if reply is None:
                    continue

                await asyncio.sleep(delay)

                chunks = reply if isinstance(reply, list) else [reply]
                for chunk in chunks:
                    writer.write(chunk)
                    await writer.drain()
                    await asyncio.sleep(0.01)
        finally:
            writer.close()

    server = await asyncio.start_server(handle_connection, "127.0.0.1", 0)
    host, port = server.sockets[0].getsockname()[:2]

    async with server:
        yield host, port


@pytest.fixture
def fake_server():
    return fake_redis_server


@pytest.fixture(scope="package")
def redis_server():
    host, port = "localhost", 6379
    redis_client = Redis(host=host, port=port, socket_connect_timeout=1)

    try:
        redis_client.ping()
    except RedisError:
        pytest.skip(f"No Redis server reachable at {host}:{port}")

    yield host, port

    redis_client.close()


@pytest.fixture
def unused_port() -> int:
    with socket.socket() as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]
