"""Service-control runner: invokes ``sc.exe`` and captures its output."""

from __future__ import annotations

import asyncio
import logging

from svcrecovery.exceptions import CommandError

logger = logging.getLogger(__name__)

DEFAULT_SC_PATH = "sc.exe"


class ScRunner:
    def __init__(self, sc_path: str = DEFAULT_SC_PATH) -> None:
        self.sc_path = sc_path

    async def execute(self, *args: str, service: str = "") -> str:
        """Run the tool with ``args`` and return stdout and stderr combined.

        Raises CommandError if the process cannot be started or exits nonzero.
        """
        cmd = " ".join([self.sc_path, *args])
        logger.debug("Executing: %s", cmd)

        try:
            proc = await asyncio.create_subprocess_exec(
                self.sc_path,
                *args,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.STDOUT,
            )
            stdout, _ = await proc.communicate()
        except OSError as exc:
            raise CommandError(
                f"Failed to run {self.sc_path}: {exc}",
                service=service,
            ) from exc

        output = stdout.decode(errors="replace") if stdout else ""
        if proc.returncode != 0:
            raise CommandError(
                f"{cmd} failed (rc={proc.returncode}): {output.strip()}",
                service=service,
                returncode=proc.returncode,
            )
        return output

    async def query(self) -> str:
        return await self.execute("query")

    async def qfailure(self, service: str) -> str:
        return await self.execute("qfailure", service, service=service)

    async def failure(self, service: str, arguments: list[str]) -> str:
        return await self.execute("failure", service, *arguments, service=service)
