"""Composition root: picks the storage backend and builds the repositories.

This is the only module that knows about both backends. Everything else
depends on the repository interfaces.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from rentals.domain.exceptions import ConfigurationError
from rentals.domain.repository.order_repository import OrderRepository
from rentals.domain.repository.product_repository import ProductRepository
from rentals.domain.repository.salon_event_repository import SalonEventRepository
from rentals.infrastructure.persistence.json_order_repository import JsonOrderRepository
from rentals.infrastructure.persistence.json_product_repository import (
    JsonProductRepository,
)
from rentals.infrastructure.persistence.json_salon_event_repository import (
    JsonSalonEventRepository,
)
from rentals.infrastructure.persistence.rest_client import RestClient
from rentals.infrastructure.persistence.rest_repositories import (
    RestOrderRepository,
    RestProductRepository,
    RestSalonEventRepository,
)
from rentals.infrastructure.settings import Settings, get_settings

logger = logging.getLogger(__name__)


@dataclass
class Backend:
    products: ProductRepository
    orders: OrderRepository
    salon: SalonEventRepository


def build_backend(settings: Settings | None = None) -> Backend:
    settings = settings or get_settings()

    if settings.backend == "rest":
        if not settings.rest_url or not settings.rest_key:
            raise ConfigurationError(
                "The rest backend needs RENTALS_REST_URL and RENTALS_REST_KEY"
            )
        logger.info("Using hosted backend at %s", settings.rest_url)
        client = RestClient(settings.rest_url, settings.rest_key, settings.rest_timeout)
        return Backend(
            products=RestProductRepository(client),
            orders=RestOrderRepository(client),
            salon=RestSalonEventRepository(client),
        )

    logger.info("Using JSON files in %s", settings.data_dir)
    return Backend(
        products=JsonProductRepository(settings.data_dir),
        orders=JsonOrderRepository(settings.data_dir),
        salon=JsonSalonEventRepository(settings.data_dir),
    )
