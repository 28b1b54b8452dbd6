import asyncio

from toy_redis_client.commands import RawCommand
from toy_redis_client.data_types import Array, BulkString, Integer, SimpleString
from toy_redis_client.main import format_reply, main, parse_args, run
from toy_redis_client.resp.encoder import RESPEncoder


def test_parse_args():
    args = parse_args(["--port", "6380", "SET", "key", "value"])

    assert args.host == "127.0.0.1"
    assert args.port == 6380
    assert args.timeout == 5.0
    assert args.command == ["SET", "key", "value"]


def test_format_reply():
    assert format_reply(None) == "(nil)"
    assert format_reply(BulkString(None)) == "(nil)"
    assert format_reply(Integer(3)) == "(integer) 3"
    assert format_reply(SimpleString("OK")) == "OK"
    assert format_reply(BulkString("bar")) == '"bar"'
    assert format_reply(BulkString(b"bar")) == '"bar"'
    assert format_reply(BulkString(b"caf\xc3\xa9\xff")) == '"caf\u00e9\\xff"'
    assert format_reply(BulkString(b"")) == '""'
    assert format_reply(Array(())) == "(empty array)"
    assert format_reply(Array((Integer(1), BulkString("a")))) == '1) (integer) 1\n2) "a"'


def test_run_prints_reply(fake_server, capsys):
    replies = {RawCommand(["PING"]).encode(): RESPEncoder.encode_simple_string("PONG")}

    async def scenario():
        async with fake_server(replies) as (host, port):
            return await run(parse_args(["--host", host, "--port", str(port), "PING"]))

    assert asyncio.run(scenario()) == 0
    assert capsys.readouterr().out == "PONG\n"


def test_run_prints_server_errors(fake_server, capsys):
    async def scenario():
        async with fake_server({}) as (host, port):
            return await run(parse_args(["--host", host, "--port", str(port), "NOPE"]))

    assert asyncio.run(scenario()) == 1
    assert capsys.readouterr().out == "(error) ERR unknown command\n"


def test_main_reports_connection_failures(unused_port):
    assert main(["--port", str(unused_port), "--timeout", "1", "PING"]) == 1


def test_run_prints_binary_values(fake_server, capsys):
    replies = {
        RawCommand(["GET", "key"]).encode(): RESPEncoder.encode_bulk_string(b"ok\xff")
    }

    async def scenario():
        async with fake_server(replies) as (host, port):
            return await run(
                parse_args(["--host", host, "--port", str(port), "GET", "key"])
            )

    assert asyncio.run(scenario()) == 0
    assert capsys.readouterr().out == '"ok\\xff"\n'
