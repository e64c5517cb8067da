"""Session state persistence: the command under construction."""

from __future__ import annotations

import json
from pathlib import Path

from pydantic import ValidationError

from .errors import StorageError
from .models import SessionState


def load_state(path: Path) -> SessionState:
    """Load session state. Returns an empty state if the file does not exist."""
    if not path.exists():
        return SessionState()
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        return SessionState.model_validate(data)
    except json.JSONDecodeError as exc:
        raise StorageError(f"Invalid JSON in state file: {path}: {exc}") from exc
    except ValidationError as exc:
        raise StorageError(f"Invalid state file structure: {path}") from exc
    except OSError as exc:
        raise StorageError(f"Failed to read state file: {path}: {exc}") from exc


def save_state(state: SessionState, path: Path) -> None:
    """Serialize state to JSON, creating parent directories if needed."""
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        text = json.dumps(state.model_dump(mode="json"), indent=2, ensure_ascii=False)
        path.write_text(text + "\n", encoding="utf-8")
    except OSError as exc:
        raise StorageError(f"Failed to save state file: {path}: {exc}") from exc


def clear_state(path: Path) -> SessionState:
    state = SessionState()
    save_state(state, path)
    return state
