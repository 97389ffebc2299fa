from __future__ import annotations
import logging
import subprocess
from typing import List, Optional

from ..core.config import AdminConfig

ACTIVE_MARKER = "active"
HEADER_FIELD = 4  # 1-based column of vcl.list rows read as the header name


class ProbeError(Exception):
    """The active configuration listing could not be obtained."""


class HeaderSource:
    NAME = "base"

    def list_active_configuration_headers(self) -> List[str]:
        raise NotImplementedError("list_active_configuration_headers must be implemented in subclasses")


def parse_vcl_list(output: str) -> List[str]:
    """Pick the header field out of every ``vcl.list`` row marked active.

    Rows too short to carry the field contribute nothing.
    """
    headers: List[str] = []
    for row in output.splitlines():
        if ACTIVE_MARKER not in row:
            continue
        fields = row.split()
        if len(fields) >= HEADER_FIELD:
            headers.append(fields[HEADER_FIELD - 1])
    return headers


class VarnishAdmProbe(HeaderSource):
    NAME = "varnishadm"

    def __init__(self, config: AdminConfig, *, logger: Optional[logging.Logger] = None) -> None:
        self.config = config
        base_logger = logger or logging.getLogger("vclscan")
        self.logger = base_logger.getChild(self.__class__.__name__.lower())

    def command(self) -> List[str]:
        return [
            self.config.binary,
            "-T", self.config.endpoint,
            "-S", str(self.config.secret_file),
            "vcl.list",
        ]

    def list_active_configuration_headers(self) -> List[str]:
        cmd = self.command()
        self.logger.info("Running %s", " ".join(cmd))
        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                errors="replace",
                timeout=self.config.timeout,
            )
        except FileNotFoundError as exc:
            raise ProbeError(f"{self.config.binary} not found") from exc
        except PermissionError as exc:
            raise ProbeError(f"{self.config.binary} is not executable") from exc
        except OSError as exc:
            raise ProbeError(f"{self.config.binary} could not be started: {exc}") from exc
        except subprocess.TimeoutExpired as exc:
            raise ProbeError(
                f"{self.config.binary} did not answer within {self.config.timeout:g}s "
                f"(endpoint {self.config.endpoint})"
            ) from exc

        if result.returncode != 0:
            detail = result.stderr.strip() or result.stdout.strip() or "no output"
            raise ProbeError(
                f"{self.config.binary} exited with status {result.returncode}: {detail}"
            )

        headers = parse_vcl_list(result.stdout)
        self.logger.info("vcl.list returned %d active header token(s)", len(headers))
        return headers
