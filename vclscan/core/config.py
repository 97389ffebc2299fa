from __future__ import annotations
import argparse
from dataclasses import dataclass
from pathlib import Path

DEFAULT_ADMIN_HOST = "127.0.0.1"
DEFAULT_ADMIN_PORT = 6082
DEFAULT_SECRET_FILE = Path("/etc/varnish/secret")
DEFAULT_ADMIN_BINARY = "varnishadm"
DEFAULT_ADMIN_TIMEOUT = 30.0


@dataclass(frozen=True)
class AdminConfig:
    """Where and how to reach the Varnish management interface."""

    host: str = DEFAULT_ADMIN_HOST
    port: int = DEFAULT_ADMIN_PORT
    secret_file: Path = DEFAULT_SECRET_FILE
    binary: str = DEFAULT_ADMIN_BINARY
    timeout: float = DEFAULT_ADMIN_TIMEOUT

    @property
    def endpoint(self) -> str:
        return f"{self.host}:{self.port}"

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> "AdminConfig":
        return cls(
            host=args.admin_host,
            port=args.admin_port,
            secret_file=args.secret_file,
            binary=args.varnishadm,
            timeout=args.admin_timeout,
        )
