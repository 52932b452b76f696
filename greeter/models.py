from pydantic import BaseModel, ConfigDict, Field


class ServerConfig(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    # Values that make up the greeting.
    environment: str = "local"
    version: str = "0.0.0"
    message: str = "Hello World"

    loglevel: str = "info"
    host: str = "0.0.0.0"
    port: int = Field(default=8080, ge=0, le=65535)
