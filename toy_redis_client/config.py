from dataclasses import dataclass


@dataclass
class ClientConfig:
    host: str = "127.0.0.1"
    port: int = 6379
    timeout: float | None = 5.0
    encoding: str | None = "utf-8"

    def __post_init__(self) -> None:
        self.port = int(self.port)
        if not 0 < self.port < 65536:
            raise ValueError(f"Invalid port: {self.port}")

        if self.timeout is not None and self.timeout <= 0:
            raise ValueError(f"Timeout must be positive, got {self.timeout}")
