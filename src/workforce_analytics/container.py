from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from .analytics.service import AnalyticsService, MetricsAggregator
from .common.logging_utils import configure_logging
from .config import Settings, load_settings
from .projection.projector import Projector
from .records.repository import RecordStore
from .sessions.reconstructor import SessionReconstructor

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Container:
    settings: Settings
    store: RecordStore

    reconstructor: SessionReconstructor
    aggregator: MetricsAggregator
    projector: Projector

    analytics_service: AnalyticsService


def build_container(*, store: RecordStore, settings: Optional[Settings] = None) -> Container:
    settings = settings or load_settings()
    configure_logging(settings.log_level)

    reconstructor = SessionReconstructor(utc_offset_minutes=settings.calendar_utc_offset_minutes)
    aggregator = MetricsAggregator(reconstructor)
    projector = Projector(page_size=settings.page_size)
    analytics_service = AnalyticsService(store, aggregator, projector, reconstructor)

    if settings.debug:
        logger.debug(
            "Analytics engine ready (page_size=%d, utc_offset=%dmin)",
            settings.page_size,
            settings.calendar_utc_offset_minutes,
        )

    return Container(
        settings=settings,
        store=store,
        reconstructor=reconstructor,
        aggregator=aggregator,
        projector=projector,
        analytics_service=analytics_service,
    )
