from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Union

from pydantic import ValidationError

from .errors import StoreError
from .models import LEDGER_VERSION, LedgerState


log = logging.getLogger(__name__)


class LedgerStore:
    """JSON file holding the ledger snapshot between passes."""

    def __init__(self, path: Union[str, Path]) -> None:
        self.path = Path(path)

    def load(self) -> LedgerState:
        if not self.path.exists():
            log.info("No ledger at %s, starting from an empty one", self.path)
            return LedgerState()
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            raise StoreError(f"cannot read ledger {self.path}: {exc}") from exc

        version = raw.get("version") if isinstance(raw, dict) else None
        if version != LEDGER_VERSION:
            raise StoreError(
                f"ledger {self.path} has version {version!r}, expected {LEDGER_VERSION}"
            )
        try:
            return LedgerState.model_validate(raw)
        except ValidationError as exc:
            raise StoreError(f"malformed ledger {self.path}: {exc}") from exc

    def save(self, state: LedgerState) -> None:
        """Write tmp, fsync, rename; a crash never leaves a half-written ledger."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=self.path.parent, suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(state.model_dump_json())
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_path, self.path)
        except Exception as exc:
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
            if isinstance(exc, OSError):
                raise StoreError(f"cannot write ledger {self.path}: {exc}") from exc
            raise
        log.info("Ledger saved to %s (%d operations)", self.path, len(state.journal))
