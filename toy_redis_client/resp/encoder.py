class RESPEncoder:
    @staticmethod
    def encode_command(*args: str | bytes | int) -> bytes:
        return RESPEncoder.encode_array(*map(_to_bytes, args))

    @staticmethod
    def encode_simple_string(data: str) -> bytes:
        return f"+{data}\r\n".encode()

    @staticmethod
    def encode_integer(data: int) -> bytes:
        return f":{data}\r\n".encode()

    @staticmethod
    def encode_bulk_string(data: str | bytes) -> bytes:
        content = _to_bytes(data)
        return f"${len(content)}\r\n".encode() + content + b"\r\n"

    @staticmethod
    def encode_null() -> bytes:
        return b"$-1\r\n"

    @staticmethod
    def encode_array(*elements: str | bytes | None) -> bytes:
        encoded_array = f"*{len(elements)}\r\n".encode()

        for element in elements:
            if element is None:
                encoded_array += RESPEncoder.encode_null()
            else:
                encoded_array += RESPEncoder.encode_bulk_string(element)

        return encoded_array

    @staticmethod
    def encode_error(error: str, prefix: str = "ERR") -> bytes:
        return f"-{prefix} {error}\r\n".encode()


def _to_bytes(value: str | bytes | int) -> bytes:
    if isinstance(value, bytes):
        return value
    return str(value).encode()
