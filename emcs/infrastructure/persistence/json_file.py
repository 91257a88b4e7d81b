"""File-backed store keeping consignments.json and events.json in a data directory."""

import asyncio
import json
import logging
import os
from pathlib import Path
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from emcs.domain.consignment.model.aggregate import Consignment
from emcs.domain.shared.error import StorageUnavailableError
from emcs.domain.shared.event import Event
from emcs.infrastructure.persistence.memory import (
    ConsignmentMap,
    EventMap,
    InMemoryConsignmentStore,
)

logger = logging.getLogger(__name__)

CONSIGNMENTS_FILE = "consignments.json"
EVENTS_FILE = "events.json"


class JsonFileConsignmentStore(InMemoryConsignmentStore):
    """Loads both files on startup and rewrites them after every change.

    Files are written to a temporary sibling and renamed into place, so a
    crash never leaves a half-written file behind.
    """

    def __init__(self, data_dir: str | Path) -> None:
        super().__init__()
        self._data_dir = Path(data_dir).expanduser()
        self._data_dir.mkdir(parents=True, exist_ok=True)
        self._consignments_path = self._data_dir / CONSIGNMENTS_FILE
        self._events_path = self._data_dir / EVENTS_FILE
        self._load()

    @property
    def data_dir(self) -> Path:
        return self._data_dir

    def _load(self) -> None:
        raw_consignments = _read_json(self._consignments_path)
        raw_events = _read_json(self._events_path)

        try:
            for reference, data in raw_consignments.items():
                self._consignments[reference] = Consignment.model_validate(data)
            for reference, items in raw_events.items():
                for item in items:
                    event_cls = Event.resolve(item.pop("event_type", "MovementEvent"))
                    self._events[reference].append(event_cls.model_validate(item))
        except (PydanticValidationError, KeyError, AttributeError) as e:
            raise StorageUnavailableError(
                f"Corrupt data in {self._data_dir}: {e}", code="CORRUPT_STORAGE"
            ) from e

        logger.info(
            "Loaded %d consignments and %d event streams from %s",
            len(self._consignments),
            len(self._events),
            self._data_dir,
        )

    async def _flush(self, consignments: ConsignmentMap, events: EventMap) -> None:
        # Only the file whose map was replaced is rewritten.
        if consignments is not self._consignments:
            await self._write(
                self._consignments_path,
                {ref: c.model_dump(mode="json") for ref, c in consignments.items()},
            )
        if events is not self._events:
            await self._write(
                self._events_path,
                {
                    ref: [
                        {"event_type": type(e).__name__, **e.model_dump(mode="json")}
                        for e in items
                    ]
                    for ref, items in events.items()
                },
            )

    async def _write(self, path: Path, data: dict[str, Any]) -> None:
        try:
            await asyncio.to_thread(_write_json, path, data)
        except OSError as e:
            logger.error("Failed to write %s: %s", path, e)
            raise StorageUnavailableError(
                f"Cannot write {path}: {e}", code="STORAGE_WRITE_FAILED"
            ) from e


def _read_json(path: Path) -> dict[str, Any]:
    if not path.exists():
        return {}
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise StorageUnavailableError(f"Cannot read {path}: {e}", code="CORRUPT_STORAGE") from e
    if not isinstance(data, dict):
        raise StorageUnavailableError(f"Expected a JSON object in {path}", code="CORRUPT_STORAGE")
    return data


def _write_json(path: Path, data: dict[str, Any]) -> None:
    tmp = path.with_name(path.name + ".tmp")
    tmp.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")
    os.replace(tmp, path)
