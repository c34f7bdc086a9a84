import math
from datetime import date, datetime, timezone, tzinfo
from typing import Dict, List

from kisan_saathi.models.weather import ForecastDay, ForecastSample, TemperatureRange


def round_half_up(value: float, digits: int = 0) -> float:
    scale = 10**digits
    return math.floor(value * scale + 0.5) / scale


def _mean(values: List[float]) -> float:
    return sum(values) / len(values)


def day_key(timestamp: int, tz: tzinfo = timezone.utc) -> date:
    """Calendar day of an epoch timestamp in `tz`."""
    return datetime.fromtimestamp(timestamp, tz=tz).date()


def aggregate_by_day(
    samples: List[ForecastSample], tz: tzinfo = timezone.utc
) -> List[ForecastDay]:
    """
    Collapses sub-daily forecast samples into one summary per calendar day.

    Days are keyed in `tz` (UTC unless the caller passes another zone) and
    emitted in the order they are first seen, so callers should pass samples
    sorted by time. Within a day the description and icon come from the
    first sample; temperature is the rounded min/max, humidity the mean
    rounded to an integer and wind speed the mean rounded to one decimal.
    """
    groups: Dict[date, List[ForecastSample]] = {}
    for sample in samples:
        groups.setdefault(day_key(sample.timestamp, tz), []).append(sample)

    days: List[ForecastDay] = []
    for key, group in groups.items():
        temperatures = [s.temperature for s in group]
        first = group[0]
        days.append(
            ForecastDay(
                date=key,
                temperature=TemperatureRange(
                    min=int(round_half_up(min(temperatures))),
                    max=int(round_half_up(max(temperatures))),
                ),
                description=first.description,
                icon=first.icon,
                humidity=int(round_half_up(_mean([s.humidity for s in group]))),
                wind_speed=round_half_up(_mean([s.wind_speed for s in group]), 1),
            )
        )
    return days
