# center_finder/pipeline.py
import asyncio
import logging
import re
from typing import Callable, Optional

from center_finder.centroid import compute_center
from center_finder.city_filter import filter_city_matches
from center_finder.config import settings
from center_finder.errors import GeocodeError, InputError, InsufficientResultsError, RunError
from center_finder.geocoder import Geocoder
from center_finder.models import RunContext, RunPhase, RunResult
from center_finder.pacing import FixedDelayPacer
from center_finder.reverse_geocoder import ReverseGeocoder

logger = logging.getLogger(__name__)

MIN_LOCATIONS = 2
ADDRESS_SEPARATORS = re.compile(r"[\n,]+")

NOT_ENOUGH_INPUT = "Please enter at least two locations"
NOT_ENOUGH_RESULTS = "Could not geocode enough valid addresses. Please check your input."


def parse_addresses(raw: str) -> list[str]:
    """Split raw input on commas and newlines, dropping blank entries."""
    if not raw:
        return []
    return [part.strip() for part in ADDRESS_SEPARATORS.split(raw) if part.strip()]


class CenterFinder:
    """Runs one address list through geocode -> filter -> centroid -> reverse."""

    def __init__(
        self,
        geocoder: Optional[Geocoder] = None,
        reverse_geocoder: Optional[ReverseGeocoder] = None,
        pacer=None,
        on_progress: Optional[Callable[[RunPhase, str], None]] = None,
    ):
        """Initialize the pipeline.

        Args:
            geocoder: Anything with an async ``resolve(address, city_context)``.
            reverse_geocoder: Anything with an async ``label(center)``.
            pacer: Anything with an async ``wait()``, awaited before every
                geocoding request.
            on_progress: Called with the phase and a short message as the
                run advances.
        """
        self.geocoder = geocoder or Geocoder()
        self.reverse_geocoder = reverse_geocoder or ReverseGeocoder()
        self.pacer = pacer or FixedDelayPacer(settings.request_delay)
        self.on_progress = on_progress
        self.context = RunContext()
        self.last_result: Optional[RunResult] = None
        self._running = False

    @classmethod
    def from_settings(cls, delay: Optional[float] = None, **kwargs) -> "CenterFinder":
        """Create a pipeline talking to the configured Nominatim instance."""
        pacer = FixedDelayPacer(settings.request_delay if delay is None else delay)
        return cls(geocoder=Geocoder(), reverse_geocoder=ReverseGeocoder(), pacer=pacer, **kwargs)

    @property
    def running(self) -> bool:
        return self._running

    def _enter(self, phase: RunPhase, message: str = "") -> None:
        self.context.phase = phase
        logger.debug("Phase %s %s", phase.value, message)
        if self.on_progress:
            self.on_progress(phase, message)

    async def run(self, raw_input: str, city_context: Optional[str] = None) -> RunResult:
        """Find the center of the addresses in ``raw_input``.

        Input and batch errors end the run in the ``failed`` phase with the
        error message set; they are not raised. Cancellation discards
        everything collected so far and propagates.
        """
        if self._running:
            raise RuntimeError("A center finder run is already in progress")

        self._running = True
        city_context = city_context.strip() if city_context else None
        self.context.reset(raw_input, city_context or None)
        self.last_result = None

        try:
            await self._execute()
        except RunError as e:
            logger.warning("Run failed: %s", e)
            self.context.locations = []
            self.context.center = None
            self.context.error = str(e)
            self._enter(RunPhase.FAILED, str(e))
        except asyncio.CancelledError:
            logger.info("Run cancelled, discarding partial results")
            self.context.reset()
            raise
        except Exception:
            logger.exception("Run aborted, discarding partial results")
            self.context.reset()
            raise
        finally:
            self._running = False

        self.last_result = self.context.snapshot()
        return self.last_result

    async def _execute(self) -> None:
        ctx = self.context

        # Stage 1: Parse input
        self._enter(RunPhase.PARSING)
        ctx.addresses = parse_addresses(ctx.raw_input)
        if len(ctx.addresses) < MIN_LOCATIONS:
            raise InputError(NOT_ENOUGH_INPUT)

        # Stage 2: Geocode sequentially, one request per pacer tick
        self._enter(RunPhase.GEOCODING, f"{len(ctx.addresses)} addresses")
        for i, address in enumerate(ctx.addresses, 1):
            await self.pacer.wait()
            if self.on_progress:
                self.on_progress(RunPhase.GEOCODING, f"[{i}/{len(ctx.addresses)}] {address}")
            try:
                location = await self.geocoder.resolve(address, ctx.city_context)
            except GeocodeError as e:
                logger.warning("Skipping %r: %s", address, e.reason)
                ctx.failed_addresses.append(address)
                continue
            ctx.locations.append(location)

        logger.info("Geocoded %d of %d addresses", len(ctx.locations), len(ctx.addresses))
        if len(ctx.locations) < MIN_LOCATIONS:
            raise InsufficientResultsError(NOT_ENOUGH_RESULTS)

        # Stage 3: Flag results that look outside the city
        self._enter(RunPhase.FILTERING)
        if ctx.city_context:
            ctx.warnings.extend(filter_city_matches(ctx.locations, ctx.city_context))

        # Stage 4: Spherical centroid
        self._enter(RunPhase.CENTROIDING)
        center = compute_center(ctx.locations, ctx.city_context)

        # Stage 5: Label the center
        self._enter(RunPhase.REVERSE_GEOCODING, f"({center.lat:.5f}, {center.lon:.5f})")
        label = await self.reverse_geocoder.label(center)
        ctx.center = center.with_label(label)

        self._enter(RunPhase.DONE, label)
