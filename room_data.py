# room_data.py

import logging
from dataclasses import dataclass

import numpy as np
import pandas as pd

import constants

logger = logging.getLogger("sensory_portrait")

READING_COLUMNS = [
    constants.COLUMN_TEMPERATURE,
    constants.COLUMN_LIGHT,
    constants.COLUMN_SOUND,
    constants.COLUMN_HUMIDITY,
]


@dataclass(frozen=True)
class RoomReading:
    """One row of environmental sensor data for a single room."""
    temperature: float  # Celsius
    light: float        # Lux
    sound: float        # Decibels
    humidity: float     # Percent


def load_rooms(path) -> list:
    """
    Loads room readings from a CSV file with a header row.

    Data Contract:
    - Inputs: path (str or PathLike) - Location of the CSV file.
    - Outputs: list[RoomReading] - Rows with a finite value in every reading
      column, in file order. Extra columns are ignored.
    - Side Effects: Logs the number of rooms loaded, or the reason the load failed.
    - Invariants: Never raises for a missing, unreadable or malformed file;
      an empty list is returned instead.
    """
    try:
        frame = pd.read_csv(path)
    except (OSError, UnicodeDecodeError, pd.errors.ParserError, pd.errors.EmptyDataError) as exc:
        logger.error(f"CSV load error for '{path}': {exc}")
        return []

    missing = [column for column in READING_COLUMNS if column not in frame.columns]
    if missing:
        logger.error(f"CSV load error for '{path}': missing columns {missing}")
        return []

    # Non-numeric cells become NaN and are dropped with the other non-finite rows.
    values = frame[READING_COLUMNS].apply(pd.to_numeric, errors='coerce').to_numpy(dtype=float)
    finite_mask = np.isfinite(values).all(axis=1)
    dropped = int((~finite_mask).sum())
    if dropped:
        logger.warning(f"Skipped {dropped} row(s) with missing or non-numeric readings.")

    rooms = [RoomReading(*(float(v) for v in row)) for row in values[finite_mask]]
    logger.info(f"Loaded rooms: {len(rooms)}")
    return rooms


class RoomCycle:
    """
    An ordered collection of room readings with a circular cursor.

    Invariants: The collection is non-empty and the index always stays in
    [0, len(rooms)).
    """
    def __init__(self, rooms):
        if not rooms:
            raise ValueError("RoomCycle requires at least one room reading.")
        self.rooms = list(rooms)
        self.index = 0

    def __len__(self):
        return len(self.rooms)

    @property
    def current(self) -> RoomReading:
        return self.rooms[self.index]

    def next(self) -> RoomReading:
        self.index = (self.index + 1) % len(self.rooms)
        return self.current

    def previous(self) -> RoomReading:
        self.index = (self.index - 1) % len(self.rooms)
        return self.current
