"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import asdict
from datetime import date
from uuid import UUID

from fastapi import Depends, FastAPI, HTTPException, Request, status
from fastapi.responses import JSONResponse

from nutrimind.api.auth import require_session
from nutrimind.api.auth import router as auth_router
from nutrimind.api.models import LogTextRequest, ProfileUpdate, WeightRequest
from nutrimind.app_logging import configure_logging
from nutrimind.containers import AppContainer
from nutrimind.domain.goals import DEFAULT_GOALS, progress_percent
from nutrimind.domain.nutrients import MICRONUTRIENTS
from nutrimind.domain.profile import Session, UserProfile
from nutrimind.domain.stats import DailyTotals
from nutrimind.errors import (
    AuthenticationError,
    ConfigurationError,
    ExtractionError,
    MalformedResponseError,
    PersistenceError,
    ServiceError,
)
from nutrimind.services.metabolism import calculate_bmi
from nutrimind.services.stats import remaining_calories

EXTRACTION_FAILED_MESSAGE = "Sorry, I couldn't process that. Please try again."


def create_app(container: AppContainer) -> FastAPI:  # noqa: C901, PLR0915
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.include_router(auth_router)

    @app.exception_handler(PersistenceError)
    async def persistence_error(
        request: Request, exc: PersistenceError
    ) -> JSONResponse:
        logger.error("Persistence failure on %s", request.url.path, exc_info=exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Could not reach the data store."},
        )

    @app.exception_handler(AuthenticationError)
    async def authentication_error(
        request: Request, exc: AuthenticationError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST, content={"detail": str(exc)}
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/profile")
    async def get_profile(
        request: Request, session: Session = Depends(require_session)
    ) -> dict[str, object]:
        """Return the current user's profile."""
        state_container: AppContainer = request.app.state.container
        return asdict(state_container.profile_service.get_profile(session.user_id))

    @app.put("/profile")
    async def update_profile(
        payload: ProfileUpdate,
        request: Request,
        session: Session = Depends(require_session),
    ) -> dict[str, object]:
        """Replace the current user's profile metrics."""
        state_container: AppContainer = request.app.state.container
        profile = state_container.profile_service.update_profile(
            UserProfile(
                user_id=session.user_id,
                email=session.email,
                **payload.model_dump(),
            )
        )
        return asdict(profile)

    @app.get("/profile/metabolism")
    async def metabolism(
        request: Request, session: Session = Depends(require_session)
    ) -> dict[str, object]:
        """Return BMR and TDEE for the current profile."""
        state_container: AppContainer = request.app.state.container
        return asdict(state_container.profile_service.get_metabolism(session.user_id))

    @app.get("/profile/bmi")
    async def bmi(
        request: Request,
        height_cm: float | None = None,
        weight_kg: float | None = None,
        session: Session = Depends(require_session),
    ) -> dict[str, object]:
        """Return BMI from the profile, or from explicit height and weight."""
        state_container: AppContainer = request.app.state.container
        if height_cm is None and weight_kg is None:
            return asdict(state_container.profile_service.get_bmi(session.user_id))
        profile = state_container.profile_service.get_profile(session.user_id)
        try:
            reading = calculate_bmi(
                height_cm if height_cm is not None else profile.height_cm,
                weight_kg if weight_kg is not None else profile.weight_kg,
            )
        except ValueError as exc:
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)
            ) from exc
        return asdict(reading)

    @app.get("/goals")
    async def goals() -> dict[str, object]:
        """Return daily targets and the micronutrient catalogue."""
        return {
            "goals": asdict(DEFAULT_GOALS),
            "micronutrients": [asdict(nutrient) for nutrient in MICRONUTRIENTS],
        }

    @app.get("/logs")
    async def list_logs(
        request: Request,
        day: date | None = None,
        session: Session = Depends(require_session),
    ) -> dict[str, object]:
        """Return log entries, optionally for one day."""
        state_container: AppContainer = request.app.state.container
        service = state_container.log_service
        entries = (
            service.list_day(session.user_id, day)
            if day
            else service.list_logs(session.user_id)
        )
        return {"entries": [asdict(entry) for entry in entries]}

    @app.post("/logs", status_code=status.HTTP_201_CREATED)
    async def log_text(
        payload: LogTextRequest,
        request: Request,
        session: Session = Depends(require_session),
    ) -> dict[str, object]:
        """Turn free text into log entries for the selected day."""
        state_container: AppContainer = request.app.state.container
        try:
            entries = await state_container.log_service.log_text(
                session.user_id, payload.text, payload.day or date.today()
            )
        except ExtractionError as exc:
            raise _extraction_failure(exc, payload.text, logger) from exc
        except ValueError as exc:
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                detail=_failure_detail(payload.text, retryable=False),
            ) from exc
        return {"entries": [asdict(entry) for entry in entries]}

    @app.delete("/logs/{entry_id}")
    async def delete_log(
        entry_id: UUID, request: Request, session: Session = Depends(require_session)
    ) -> dict[str, object]:
        """Delete an entry and return the remaining ones."""
        state_container: AppContainer = request.app.state.container
        remaining = state_container.log_service.delete_entry(session.user_id, entry_id)
        return {"entries": [asdict(entry) for entry in remaining]}

    @app.get("/stats/day")
    async def day_stats(
        request: Request,
        day: date | None = None,
        session: Session = Depends(require_session),
    ) -> dict[str, object]:
        """Return totals and goal progress for a day."""
        state_container: AppContainer = request.app.state.container
        totals = state_container.stats_service.get_day(
            session.user_id, day or date.today()
        )
        return _format_day(totals)

    @app.get("/stats/month")
    async def month_stats(
        request: Request,
        year: int | None = None,
        month: int | None = None,
        session: Session = Depends(require_session),
    ) -> dict[str, object]:
        """Return the per-day calorie series and summary for a month."""
        state_container: AppContainer = request.app.state.container
        today = date.today()
        resolved_month = month if month is not None else today.month
        resolved_year = year if year is not None else today.year
        if not 1 <= resolved_month <= 12:  # noqa: PLR2004
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                detail="month must be between 1 and 12",
            )
        if not 1 <= resolved_year <= date.max.year:
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                detail=f"year must be between 1 and {date.max.year}",
            )
        summary = state_container.stats_service.get_month(
            session.user_id, resolved_year, resolved_month
        )
        return asdict(summary)

    @app.get("/weights")
    async def list_weights(
        request: Request, session: Session = Depends(require_session)
    ) -> dict[str, object]:
        """Return weight samples ordered by day."""
        state_container: AppContainer = request.app.state.container
        samples = state_container.weight_service.list_samples(session.user_id)
        return {"samples": [asdict(sample) for sample in samples]}

    @app.post("/weights")
    async def add_weight(
        payload: WeightRequest,
        request: Request,
        session: Session = Depends(require_session),
    ) -> dict[str, object]:
        """Record a weight, replacing any sample already stored for the day."""
        state_container: AppContainer = request.app.state.container
        service = state_container.weight_service
        sample = service.add_sample(session.user_id, payload.day, payload.weight_kg)
        return {
            "sample": asdict(sample),
            "samples": [asdict(s) for s in service.list_samples(session.user_id)],
        }

    @app.delete("/weights/{sample_id}")
    async def delete_weight(
        sample_id: UUID, request: Request, session: Session = Depends(require_session)
    ) -> dict[str, object]:
        """Delete a weight sample and return the remaining ones."""
        state_container: AppContainer = request.app.state.container
        remaining = state_container.weight_service.delete_sample(
            session.user_id, sample_id
        )
        return {"samples": [asdict(sample) for sample in remaining]}

    return app


def _extraction_failure(
    exc: ExtractionError, text: str, logger: logging.Logger
) -> HTTPException:
    """Build the error response for a failed submission.

    The submitted text is echoed back so the client can restore its input.
    """
    if isinstance(exc, ConfigurationError):
        logger.error("Extraction is not configured: %s", exc)
        status_code = status.HTTP_503_SERVICE_UNAVAILABLE
        retryable = False
    elif isinstance(exc, ServiceError):
        logger.warning("Extraction service failed: %s", exc)
        status_code = status.HTTP_502_BAD_GATEWAY
        retryable = True
    elif isinstance(exc, MalformedResponseError):
        status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
        retryable = True
    else:
        logger.warning("Extraction failed: %s", exc)
        status_code = status.HTTP_502_BAD_GATEWAY
        retryable = True
    return HTTPException(
        status_code=status_code, detail=_failure_detail(text, retryable=retryable)
    )


def _failure_detail(text: str, *, retryable: bool) -> dict[str, object]:
    return {
        "message": EXTRACTION_FAILED_MESSAGE,
        "text": text,
        "retryable": retryable,
    }


def _format_day(totals: DailyTotals) -> dict[str, object]:
    goals = DEFAULT_GOALS
    return {
        **asdict(totals),
        "remaining_calories": remaining_calories(totals, goals),
        "progress": {
            "protein_g": progress_percent(totals.macros.protein_g, goals.protein_g),
            "carbs_g": progress_percent(totals.macros.carbs_g, goals.carbs_g),
            "fat_g": progress_percent(totals.macros.fat_g, goals.fat_g),
            "micros": {
                key: progress_percent(amount, goals.micros.get(key, 0.0))
                for key, amount in totals.micros.items()
            },
        },
    }
