from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_PORTS = {"http": 80, "https": 443}


class Target(BaseModel):
    model_config = ConfigDict(frozen=True)

    scheme: Literal["http", "https"]
    host: str  # authority as written in the URL, may carry :port
    path: str = "/"

    @property
    def secure(self) -> bool:
        return self.scheme == "https"

    @property
    def hostname(self) -> str:
        name, _, port = self.host.rpartition(":")
        if name and port.isdigit() and not self.host.endswith("]"):
            return name.strip("[]")
        return self.host.strip("[]")

    @property
    def port(self) -> int:
        name, _, port = self.host.rpartition(":")
        if name and port.isdigit() and not self.host.endswith("]"):
            return int(port)
        return DEFAULT_PORTS[self.scheme]

    @property
    def url(self) -> str:
        return f"{self.scheme}://{self.host}{self.path}"


class Measurement(BaseModel):
    """One completed request.

    byte_count is the approximate size: the sum of the reader's buffered
    depth at every line boundary, not the exact payload length.
    """

    model_config = ConfigDict(frozen=True)

    elapsed: float = Field(ge=0)  # seconds
    byte_count: int = Field(ge=0)
    status_code: str = Field(min_length=3, max_length=3)

    @property
    def elapsed_ms(self) -> int:
        return int(self.elapsed * 1000)

    @property
    def succeeded(self) -> bool:
        return self.status_code[0] == "2"
