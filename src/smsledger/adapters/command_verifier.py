"""Verifier adapter backed by a local command.

The command (for example an on-device LLM runner) receives the verification
prompt on stdin and must print its reply on stdout using the grammar in
``smsledger.core.verifier``. No network access is involved.
"""

from __future__ import annotations

import asyncio
import logging
import shlex
from typing import Sequence, Union

from smsledger.core.models import VerifierVerdict
from smsledger.core.verifier import build_verification_prompt, parse_verifier_reply

LOGGER = logging.getLogger(__name__)


class CommandVerifier:
    """Verifier adapter that shells out to a local command."""

    def __init__(self, command: Union[str, Sequence[str]]) -> None:
        argv = shlex.split(command) if isinstance(command, str) else list(command)
        # Fail fast on an empty command rather than on the first message.
        if not argv:
            raise ValueError("Verifier command must not be empty")
        self._argv = argv

    async def verify(self, raw_text: str) -> VerifierVerdict:
        """Run the command once for this message and parse its reply."""

        prompt = build_verification_prompt(raw_text)
        process = await asyncio.create_subprocess_exec(
            *self._argv,
            stdin=asyncio.subprocess.PIPE,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
        try:
            stdout, stderr = await process.communicate(prompt.encode("utf-8"))
        except asyncio.CancelledError:
            # Timeouts cancel us; kill and reap the child before giving up.
            if process.returncode is None:
                process.kill()
            await asyncio.shield(process.wait())
            raise

        if process.returncode != 0:
            detail = stderr.decode("utf-8", errors="replace").strip()
            raise RuntimeError(f"Verifier command exited with {process.returncode}: {detail}")

        reply = stdout.decode("utf-8", errors="replace")
        LOGGER.debug("Verifier reply: %r", reply[:100])
        return parse_verifier_reply(reply)
