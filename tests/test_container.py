"""Tests for container wiring."""

import asyncio

from nutrimind.containers import build_container


def test_build_container_creates_services(settings) -> None:
    container = build_container(settings)
    assert container.session_service is not None
    assert container.stats_service.repository is container.log_service.repository
    assert container.extraction_service.model == settings.openai_model
    asyncio.run(container.close_resources())
