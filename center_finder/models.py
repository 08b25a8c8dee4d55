# center_finder/models.py
"""Plain data shared between the pipeline and its consumers."""
from __future__ import annotations

from dataclasses import dataclass, field, asdict, replace
from enum import Enum
from typing import Optional

CENTER_MARKER_LABEL = "Center Location"


@dataclass(frozen=True)
class ResolvedLocation:
    """One address successfully resolved by the geocoder."""
    input_address: str
    canonical_address: str
    lat: float
    lon: float
    # Structured breakdown from the service (city, town, county, state, ...)
    address_details: dict = field(default_factory=dict, compare=False, hash=False, repr=False)


@dataclass(frozen=True)
class CenterPoint:
    lat: float
    lon: float
    label: Optional[str] = None

    def with_label(self, label: str) -> "CenterPoint":
        return replace(self, label=label)


@dataclass(frozen=True)
class Marker:
    """What a map renderer needs to plot one point."""
    lat: float
    lon: float
    label: str


class RunPhase(str, Enum):
    IDLE = "idle"
    PARSING = "parsing"
    GEOCODING = "geocoding"
    FILTERING = "filtering"
    CENTROIDING = "centroiding"
    REVERSE_GEOCODING = "reverse_geocoding"
    DONE = "done"
    FAILED = "failed"

    @property
    def status(self) -> str:
        """Coarse view for presentation: idle, loading, done or failed."""
        if self in (RunPhase.IDLE, RunPhase.DONE, RunPhase.FAILED):
            return self.value
        return "loading"


@dataclass
class RunContext:
    """Mutable state of a single run. Reset at the start of every run."""
    raw_input: str = ""
    city_context: Optional[str] = None
    phase: RunPhase = RunPhase.IDLE
    addresses: list[str] = field(default_factory=list)
    locations: list[ResolvedLocation] = field(default_factory=list)
    failed_addresses: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    center: Optional[CenterPoint] = None
    error: Optional[str] = None

    def reset(self, raw_input: str = "", city_context: Optional[str] = None) -> None:
        self.raw_input = raw_input
        self.city_context = city_context
        self.phase = RunPhase.IDLE
        self.addresses = []
        self.locations = []
        self.failed_addresses = []
        self.warnings = []
        self.center = None
        self.error = None

    def snapshot(self) -> "RunResult":
        return RunResult(
            phase=self.phase,
            error=self.error,
            warnings=tuple(self.warnings),
            locations=tuple(self.locations),
            failed_addresses=tuple(self.failed_addresses),
            center=self.center,
        )


@dataclass(frozen=True)
class RunResult:
    """Read-only result of a run, published to the map and UI layers."""
    phase: RunPhase
    error: Optional[str] = None
    warnings: tuple[str, ...] = ()
    locations: tuple[ResolvedLocation, ...] = ()
    failed_addresses: tuple[str, ...] = ()
    center: Optional[CenterPoint] = None

    @property
    def status(self) -> str:
        return self.phase.status

    @property
    def ok(self) -> bool:
        return self.phase is RunPhase.DONE

    @property
    def markers(self) -> list[Marker]:
        return [
            Marker(
                lat=loc.lat,
                lon=loc.lon,
                label=f"{loc.input_address} - {loc.canonical_address}",
            )
            for loc in self.locations
        ]

    @property
    def center_marker(self) -> Optional[Marker]:
        if self.center is None:
            return None
        return Marker(
            lat=self.center.lat,
            lon=self.center.lon,
            label=self.center.label or CENTER_MARKER_LABEL,
        )

    def to_dict(self) -> dict:
        center_marker = self.center_marker
        return {
            "status": self.status,
            "phase": self.phase.value,
            "error": self.error,
            "warnings": list(self.warnings),
            "failed_addresses": list(self.failed_addresses),
            "locations": [
                {
                    "input_address": loc.input_address,
                    "canonical_address": loc.canonical_address,
                    "lat": loc.lat,
                    "lon": loc.lon,
                }
                for loc in self.locations
            ],
            "center": asdict(self.center) if self.center else None,
            "markers": [asdict(m) for m in self.markers],
            "center_marker": asdict(center_marker) if center_marker else None,
        }
