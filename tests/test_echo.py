import asyncio
import random
import string

from redis import Redis

from toy_redis_client.client import RedisClient
from toy_redis_client.config import ClientConfig


def generate_random_word(length: int = 10):
    letters = string.ascii_lowercase
    return "".join(random.choice(letters) for _ in range(length))


def test_echo(redis_server):
    host, port = redis_server
    random_word = generate_random_word()

    async def scenario():
        async with RedisClient(ClientConfig(host=host, port=port)) as client:
            return await client.echo(random_word)

    response = asyncio.run(scenario())
    assert response == random_word, "The ECHO response does not match the sent word"


def test_reads_values_written_by_redis_py(redis_server):
    host, port = redis_server
    key = f"toy-redis-client:{generate_random_word()}"
    counter = f"{key}:counter"

    redis_client = Redis(host=host, port=port)
    redis_client.set(key, "line one\r\nline two")
    redis_client.set(counter, 41)

    async def scenario():
        async with RedisClient(ClientConfig(host=host, port=port)) as client:
            return (
                await client.get(key),
                await client.incr(counter),
                await client.keys(f"{key}*"),
                await client.delete(key, counter),
                await client.get(key),
            )

    try:
        value, incremented, keys, deleted, missing = asyncio.run(scenario())
    finally:
        redis_client.delete(key, counter)
        redis_client.close()

    assert value == "line one\r\nline two"
    assert incremented == 42
    assert sorted(keys) == sorted([key, counter])
    assert deleted == 2
    assert missing is None


def test_set_is_visible_to_redis_py(redis_server):
    host, port = redis_server
    key = f"toy-redis-client:{generate_random_word()}"

    async def scenario():
        async with RedisClient(ClientConfig(host=host, port=port)) as client:
            return await client.set(key, "value", expiry_ms=60_000)

    redis_client = Redis(host=host, port=port)
    try:
        assert asyncio.run(scenario()) == "OK"
        assert redis_client.get(key) == b"value"
        assert 0 < redis_client.pttl(key) <= 60_000
    finally:
        redis_client.delete(key)
        redis_client.close()
