#!/usr/bin/env python3
"""
Encode a few measurements and append them to a line protocol file.

    python examples/write_points.py out/points.lp
"""

import sys
sys.path.insert(0, "src")

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Annotated, ClassVar

from pydantic import BaseModel

import influent
from influent import Measurement, Float, Integer, String, Boolean, TagAttr, FieldAttr, TimestampAttr
from influent.transport import SyncFileTransport


class CpuSample(BaseModel):
    __measurement__: ClassVar[str] = "cpu"

    host: Annotated[str, TagAttr]
    load: Annotated[float, FieldAttr]
    taken_at: Annotated[datetime, TimestampAttr]


def main(path: str) -> None:
    logging.basicConfig(level=logging.DEBUG)

    with SyncFileTransport(path) as transport:
        influent.configure(transport=transport)

        measurement = Measurement("weather")
        measurement.add_tag("station", "Oslo, Blindern")
        measurement.add_field("temperature", Float(12.5))
        measurement.add_field("humidity", Integer(81))
        measurement.add_field("summary", String('light "drizzle"'))
        measurement.add_field("raining", Boolean(True))
        measurement.set_timestamp(1434055562000000000)
        influent.write(measurement)

        sample = CpuSample(host="server01", load=0.64, taken_at=datetime.now(timezone.utc))
        influent.write(influent.measurement_from_model(sample))

    print(Path(path).read_text(encoding="utf-8"), end="")


if __name__ == "__main__":
    main(sys.argv[1] if len(sys.argv) > 1 else "out/points.lp")
